from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

from dotgame.api.errors import ConfigError

from games.falling_dots import const

logger = logging.getLogger(__name__)

X_PLACEMENTS = ("percent", "absolute")
EXPIRY_SCANS = ("prefix", "full")

Color = Tuple[int, int, int]


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes", "on", "1"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no", "off", "0"):
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _as_color(name: str, value: Any) -> Color:
    try:
        r, g, b = (int(c) for c in value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an [r, g, b] list, got {value!r}") from e
    if not all(0 <= c <= 255 for c in (r, g, b)):
        raise ConfigError(f"{name} components must be within 0..255, got {value!r}")
    return (r, g, b)


@dataclass(frozen=True)
class DotGameOptions:
    frames_per_second: int = const.FRAMES_PER_SECOND
    min_dot_diameter: int = const.MIN_DOT_DIAMETER
    max_dot_diameter: int = const.MAX_DOT_DIAMETER
    new_dot_delay_ms: int = const.NEW_DOT_DELAY_MS
    respawn_delay_ms: int = const.DOT_RESPAWN_DELAY_MS
    stroke_width: int = const.STROKE_WIDTH
    board_padding: int = const.BOARD_INNER_PADDING
    propagate_hits: bool = const.PROPAGATE_HITS
    x_placement: str = const.X_PLACEMENT
    expiry_scan: str = const.EXPIRY_SCAN
    stroke_color: Color = const.STROKE_COLOR
    fill_color: Color = const.DOT_FILL_COLOR
    board_color: Color = const.BOARD_COLOR
    dot_start_angle: float = const.DOT_START_ANGLE
    dot_end_angle: float = const.DOT_END_ANGLE
    seed: Optional[int] = None

    @property
    def frame_interval_ms(self) -> float:
        return 1000 / self.frames_per_second

    @property
    def inset(self) -> int:
        """Horizontal room kept between a dot's edge and the board edge."""
        return self.stroke_width + self.board_padding

    @classmethod
    def from_manifest(cls, manifest: Dict[str, Any]) -> "DotGameOptions":
        raw = dict(manifest.get("options") or {})
        known = {f.name for f in fields(cls)}
        for key in sorted(set(raw) - known):
            logger.warning("ignoring unknown option %r", key)

        kw: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in raw:
                continue
            value = raw[f.name]
            if f.name == "seed":
                kw[f.name] = None if value is None else _as_int(f.name, value)
            elif f.name.endswith("_color"):
                kw[f.name] = _as_color(f.name, value)
            elif f.name.endswith("_angle"):
                kw[f.name] = _as_float(f.name, value)
            elif f.name == "propagate_hits":
                kw[f.name] = _as_bool(f.name, value)
            elif f.name in ("x_placement", "expiry_scan"):
                kw[f.name] = str(value).strip().lower()
            else:
                kw[f.name] = _as_int(f.name, value)

        options = cls(**kw)
        options.validate()
        return options

    def validate(self) -> None:
        if self.frames_per_second <= 0:
            raise ConfigError(f"frames_per_second must be positive, got {self.frames_per_second}")
        if self.min_dot_diameter <= 0:
            raise ConfigError(f"min_dot_diameter must be positive, got {self.min_dot_diameter}")
        if self.max_dot_diameter < self.min_dot_diameter:
            raise ConfigError(
                f"max_dot_diameter ({self.max_dot_diameter}) is smaller than "
                f"min_dot_diameter ({self.min_dot_diameter})")
        if self.new_dot_delay_ms <= 0:
            raise ConfigError(f"new_dot_delay_ms must be positive, got {self.new_dot_delay_ms}")
        if self.respawn_delay_ms < 0:
            raise ConfigError(f"respawn_delay_ms must not be negative, got {self.respawn_delay_ms}")
        if self.stroke_width < 0 or self.board_padding < 0:
            raise ConfigError("stroke_width and board_padding must not be negative")
        if self.x_placement not in X_PLACEMENTS:
            raise ConfigError(f"x_placement must be one of {X_PLACEMENTS}, got {self.x_placement!r}")
        if self.expiry_scan not in EXPIRY_SCANS:
            raise ConfigError(f"expiry_scan must be one of {EXPIRY_SCANS}, got {self.expiry_scan!r}")

    def check_board(self, board_width: float) -> None:
        """Fail fast when the starting board cannot fit the largest dot."""
        needed = self.max_dot_diameter + 2 * self.inset
        if board_width < needed:
            raise ConfigError(
                f"board is {board_width:g}px wide but a {self.max_dot_diameter}px dot "
                f"with stroke and padding needs {needed}px")
