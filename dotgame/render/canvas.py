from __future__ import annotations
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import pygame

from dotgame.render.board import Board

FULL_TURN = 2 * math.pi
ARC_SEGMENTS = 48  # polygon resolution for partial arcs


@dataclass
class Arc:
    cx: float
    cy: float
    r: float
    start: float
    end: float

    @property
    def full(self) -> bool:
        return abs(self.end - self.start) >= FULL_TURN - 1e-9

    def polygon(self) -> List[Tuple[float, float]]:
        # closed chord: arc points, closing edge joins the two ends
        n = max(2, int(ARC_SEGMENTS * abs(self.end - self.start) / FULL_TURN) + 1)
        return [
            (self.cx + self.r * math.cos(a), self.cy + self.r * math.sin(a))
            for a in np.linspace(self.start, self.end, n)
        ]


def _point_in_polygon(x: float, y: float, pts: Sequence[Tuple[float, float]]) -> bool:
    inside = False
    j = len(pts) - 1
    for i in range(len(pts)):
        xi, yi = pts[i]
        xj, yj = pts[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


class Canvas:
    """
    Off-screen drawing surface for the board with a 2D-canvas style path API.

    Coordinates are board-local. A path is started with begin_path(), built
    from arc() calls and then filled, stroked or hit-tested; it stays the
    "current path" until the next begin_path(), which is what
    is_point_in_path() tests against.
    """

    def __init__(self, board: Board, background=(0, 0, 0, 0)):
        self.board = board
        self.background = background
        self.fill_color = (255, 255, 255)
        self.stroke_color = (0, 0, 0)
        self.line_width = 1
        self._path: List[Arc] = []
        self.surface = self._make_surface(board)

    @staticmethod
    def _make_surface(board: Board) -> pygame.Surface:
        w = max(1, int(round(board.width)))
        h = max(1, int(round(board.height)))
        return pygame.Surface((w, h), pygame.SRCALPHA)

    # ---- geometry ----
    @property
    def width(self) -> float:
        return self.board.width

    @property
    def height(self) -> float:
        return self.board.height

    @property
    def offset(self) -> Tuple[float, float]:
        return self.board.offset

    def set_board(self, board: Board) -> None:
        if board.size != self.board.size:
            self.surface = self._make_surface(board)
            self.surface.fill(self.background)
        self.board = board

    # ---- drawing ----
    def clear(self, width: float, height: float) -> None:
        self.surface.fill(self.background, pygame.Rect(0, 0, int(math.ceil(width)), int(math.ceil(height))))

    def begin_path(self) -> None:
        self._path = []

    def arc(self, cx: float, cy: float, r: float, start: float, end: float) -> None:
        self._path.append(Arc(cx, cy, r, start, end))

    def close_path(self) -> None:
        # arcs are always treated as closed shapes
        pass

    def fill(self) -> None:
        for a in self._path:
            if a.full:
                pygame.draw.circle(self.surface, self.fill_color, (a.cx, a.cy), a.r)
            else:
                pygame.draw.polygon(self.surface, self.fill_color, a.polygon())

    def stroke(self) -> None:
        lw = max(1, int(round(self.line_width)))
        for a in self._path:
            if a.full:
                # centre the outline on the path like a browser canvas does
                pygame.draw.circle(self.surface, self.stroke_color, (a.cx, a.cy), a.r + lw / 2, width=lw)
            else:
                pygame.draw.lines(self.surface, self.stroke_color, True, a.polygon(), lw)

    def is_point_in_path(self, x: float, y: float) -> bool:
        if not self._path:
            return False
        discs = np.array([(a.cx, a.cy, a.r) for a in self._path if a.full], dtype=np.float64)
        if discs.size:
            d2 = (x - discs[:, 0]) ** 2 + (y - discs[:, 1]) ** 2
            if bool(np.any(d2 <= discs[:, 2] ** 2)):
                return True
        return any(_point_in_polygon(x, y, a.polygon()) for a in self._path if not a.full)

    def blit_to(self, target: pygame.Surface) -> None:
        ox, oy = self.offset
        target.blit(self.surface, (int(ox), int(oy)))
