from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    resizable: bool = False
    hud_height: int = 48
    loop_fps: int = 60
    debug: bool = False  # draw a marker on every delivered press
