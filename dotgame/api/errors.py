class ConfigError(ValueError):
    """Raised when game options or board geometry cannot produce a playable game."""
