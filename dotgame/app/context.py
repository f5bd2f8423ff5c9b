from __future__ import annotations
from dataclasses import dataclass
import pygame
from typing import Optional, Tuple
from dotgame.api.config import EngineConfig
from dotgame.input.speed_control import SpeedControl
from dotgame.render.board import Board, measure_board
from dotgame.render.canvas import Canvas
from dotgame.render.score_display import ScoreDisplay


@dataclass
class Context:
    screen: pygame.Surface
    cfg: EngineConfig
    canvas: Canvas
    speed_control: SpeedControl
    score_display: ScoreDisplay
    screen_size: Tuple[int, int]

    @classmethod
    def create(cls, screen: pygame.Surface, cfg: EngineConfig,
               speed_control: Optional[SpeedControl] = None) -> "Context":
        size = screen.get_size()
        return cls(
            screen=screen,
            cfg=cfg,
            canvas=Canvas(measure_board(size, cfg.hud_height)),
            speed_control=speed_control or SpeedControl(),
            score_display=ScoreDisplay(),
            screen_size=size,
        )

    def measure_board(self) -> Board:
        """Board geometry for the current window; the canvas keeps the last applied one."""
        return measure_board(self.screen_size, self.cfg.hud_height)

    def window_resized(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self.screen_size = screen.get_size()
