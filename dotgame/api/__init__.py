from .game_base import Game
from .frame_data import PointerEvent
from .config import EngineConfig
from .errors import ConfigError

__all__ = ["Game", "PointerEvent", "EngineConfig", "ConfigError"]
