from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Board:
    """Play area inside the window: pixel size plus its top-left screen offset."""
    width: float
    height: float
    offset: Tuple[float, float] = (0.0, 0.0)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


def measure_board(window_size: Tuple[int, int], hud_height: int) -> Board:
    # HUD strip on top, board takes the rest of the window
    w, h = window_size
    top = max(0, min(int(hud_height), int(h)))
    return Board(width=float(w), height=float(h - top), offset=(0.0, float(top)))
