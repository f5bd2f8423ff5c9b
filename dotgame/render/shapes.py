import pygame
from functools import lru_cache
from typing import Tuple


@lru_cache(maxsize=16)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.SysFont(None, size)


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    surface.blit(_font(size).render(text, True, color), pos)
