from __future__ import annotations
import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def resolve_level(debug: bool = False, quiet: bool = False) -> int:
    """DOTGAME_LOG_LEVEL wins over --debug, which wins over --quiet. Default INFO."""
    env = os.environ.get("DOTGAME_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(env) if env else None
    if isinstance(level, int):
        return level
    if debug:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(debug: bool = False, quiet: bool = False) -> int:
    level = resolve_level(debug, quiet)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")
    return level
