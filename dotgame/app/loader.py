from __future__ import annotations
import copy
import importlib.util
import logging
from pathlib import Path
import yaml
from typing import Dict, Any, List, Optional, Tuple

from dotgame.api.errors import ConfigError

logger = logging.getLogger(__name__)

GAMES_DIR = Path(__file__).resolve().parents[2] / "games"


def list_games(games_dir: Path = GAMES_DIR) -> List[str]:
    return sorted(p.name for p in games_dir.iterdir()
                  if p.is_dir() and (p / "manifest.yaml").exists())


def load_game_manifest(game_root: Path) -> Dict[str, Any]:
    manifest = game_root / "manifest.yaml"
    if not manifest.exists():
        raise ConfigError(f"Missing manifest.yaml in {game_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{manifest} is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{manifest} must contain a mapping, got {type(data).__name__}")
    data.setdefault("options", {})
    return data


def apply_overrides(manifest: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Returns a copy of the manifest with CLI overrides merged into `options`.
    None values mean "not given" and leave the manifest value alone.
    """
    merged = copy.deepcopy(manifest)
    options = merged.setdefault("options", {})
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        logger.debug("option override %s=%r (manifest had %r)", key, value, options.get(key))
        options[key] = value
    return merged


def load_game_module(game_root: Path):
    """
    Loads games/<id>/main.py module and returns the module object.
    The file must define a get_game() -> Game factory.
    """
    main_py = game_root / "main.py"
    if not main_py.exists():
        raise ConfigError(f"Missing main.py in {game_root}")
    spec = importlib.util.spec_from_file_location(f"games.{game_root.name}.main", main_py)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    if not hasattr(module, "get_game"):
        raise ConfigError(f"{main_py} must define get_game()")
    logger.debug("loaded game module %s", main_py)
    return module


def load_game(game_id: str, overrides: Optional[Dict[str, Any]] = None,
              games_dir: Path = GAMES_DIR) -> Tuple[Dict[str, Any], Any]:
    """Manifest (with overrides merged) and a fresh game instance for games/<game_id>."""
    game_root = games_dir / game_id
    if not game_root.is_dir():
        raise ConfigError(f"unknown game {game_id!r}, available: {', '.join(list_games(games_dir)) or 'none'}")
    manifest = apply_overrides(load_game_manifest(game_root), overrides)
    game = load_game_module(game_root).get_game()
    return manifest, game
