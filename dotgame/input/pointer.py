from __future__ import annotations
import logging
from typing import List, Optional, Tuple

import pygame

from dotgame.api.frame_data import PointerEvent
from dotgame.render.board import Board

logger = logging.getLogger(__name__)


class PointerInput:
    """
    Turns pygame mouse/touch presses into board-local PointerEvents.

    - Left mouse button down and finger down both count as a press.
    - Finger coordinates are normalised by SDL, so they are scaled by the window size.
    - Presses outside the board are ignored.
    - SDL also synthesises a mouse press for every touch. Those are held back
      until end_frame(); if a touch delivered in the same frame had its
      default prevented, they are dropped so one tap never counts twice.
    """

    def __init__(self):
        self._emulated: List[PointerEvent] = []
        self._touch_prevented = False

    def begin_frame(self) -> None:
        self._emulated = []
        self._touch_prevented = False

    @staticmethod
    def _to_board(sx: float, sy: float, source: str, board: Board) -> Optional[PointerEvent]:
        ox, oy = board.offset
        x, y = sx - ox, sy - oy
        if not board.contains(x, y):
            return None
        return PointerEvent(float(x), float(y), source)

    def translate(self, event: pygame.event.Event, board: Board,
                  window_size: Tuple[int, int]) -> Optional[PointerEvent]:
        if event.type == pygame.FINGERDOWN:
            w, h = window_size
            return self._to_board(event.x * w, event.y * h, "touch", board)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            pointer = self._to_board(*event.pos, "mouse", board)
            if pointer is not None and getattr(event, "touch", False):
                self._emulated.append(pointer)
                return None
            return pointer

        return None

    def delivered(self, pointer: PointerEvent) -> None:
        if pointer.source == "touch" and pointer.default_prevented:
            self._touch_prevented = True

    def end_frame(self) -> List[PointerEvent]:
        """Return touch-emulated mouse presses that still need delivering."""
        held, self._emulated = self._emulated, []
        if self._touch_prevented:
            if held:
                logger.debug("dropped %d touch-emulated mouse press(es)", len(held))
            return []
        return held
