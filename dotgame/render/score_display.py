from __future__ import annotations
from typing import Tuple

import pygame

from dotgame.render.shapes import draw_text


class ScoreDisplay:
    """Text target for the score. Shows the integer as-is, no formatting."""

    def __init__(self, label: str = "Score"):
        self.label = label
        self.text = "0"

    def show(self, score: int) -> None:
        self.text = str(score)

    def draw(self, surface: pygame.Surface, pos: Tuple[int, int], color=(230, 230, 230), size=26) -> None:
        draw_text(surface, f"{self.label}: {self.text}", pos, color, size=size)
