from __future__ import annotations
import logging
import re
from typing import Callable, List, Tuple

import pygame

from dotgame.render.shapes import draw_text

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_speed(raw) -> int:
    """
    Read a speed the way a browser parseInt would: the leading integer wins,
    anything non-numeric becomes 0 and negative values are clamped to 0.
    """
    if isinstance(raw, bool) or raw is None:
        return 0
    if isinstance(raw, int):
        value = raw
    else:
        m = _LEADING_INT.match(str(raw))
        if not m:
            return 0
        value = int(m.group(1))
    return max(0, value)


class SpeedControl:
    """Numeric input for the fall speed (pixels per second)."""

    def __init__(self, text="0", minimum: int = 0, maximum: int = 1000, step: int = 10):
        self.text = str(text)
        self.minimum = int(minimum)
        self.maximum = int(maximum)
        self.step = int(step)
        self._subscribers: List[Callable[[int], None]] = []

    @property
    def value(self) -> int:
        return parse_speed(self.text)

    def subscribe(self, callback: Callable[[int], None]) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[int], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def set_text(self, text: str) -> None:
        if text == self.text:
            return
        self.text = text
        value = self.value
        logger.debug("speed input %r -> %d", text, value)
        for cb in list(self._subscribers):
            cb(value)

    def step_by(self, steps: int) -> None:
        v = self.value + steps * self.step
        v = max(self.minimum, min(self.maximum, v))
        self.set_text(str(v))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True when the key press was consumed by the control."""
        if event.type != pygame.KEYDOWN:
            return False
        if event.key == pygame.K_UP:
            self.step_by(1)
        elif event.key == pygame.K_DOWN:
            self.step_by(-1)
        elif event.key == pygame.K_BACKSPACE:
            self.set_text(self.text[:-1])
        elif getattr(event, "unicode", "") and (event.unicode.isdigit() or event.unicode == "-"):
            self.set_text(self.text + event.unicode)
        else:
            return False
        return True

    def draw(self, surface: pygame.Surface, pos: Tuple[int, int], color=(230, 230, 230), size=26) -> None:
        draw_text(surface, f"Speed: {self.text}_", pos, color, size=size)
