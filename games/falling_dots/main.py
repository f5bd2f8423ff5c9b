from __future__ import annotations
import logging
import random
from typing import List

import pygame

from dotgame.api import Game, PointerEvent
from dotgame.app.scheduler import Scheduler
from dotgame.input.speed_control import parse_speed
from dotgame.render.shapes import draw_text

from games.falling_dots.const import HINT_COLOR
from games.falling_dots.dots import (
    Dot, calculate_score, expired_prefix_len, is_expired, make_placement, random_radius,
)
from games.falling_dots.options import DotGameOptions

logger = logging.getLogger(__name__)


class DotGame(Game):
    """
    Dots spawn above the board, fall at the current speed and score when pressed.

    Everything runs on the engine loop: pointer presses arrive through
    on_pointer() between frames, and on_update() advances the scheduler that
    owns the tick, spawn and respawn timers.
    """

    def on_load(self, ctx, manifest):
        self.ctx = ctx
        self.manifest = manifest
        self.options = DotGameOptions.from_manifest(manifest)
        self.options.check_board(ctx.canvas.width)

        self.rng = random.Random(self.options.seed)
        self.placement = make_placement(self.options.x_placement)
        self.scheduler = Scheduler()

        self.dots: List[Dot] = []
        self.score = 0
        self.speed = ctx.speed_control.value
        self._resize_pending = False

        canvas = ctx.canvas
        canvas.fill_color = self.options.fill_color
        canvas.stroke_color = self.options.stroke_color
        canvas.line_width = self.options.stroke_width
        canvas.background = self.options.board_color

        ctx.speed_control.subscribe(self.set_speed)
        ctx.score_display.show(self.score)
        self.begin()

    # ------------- lifecycle -------------
    def begin(self) -> None:
        opts = self.options
        self.spawn_dot()
        self.tick()
        self.scheduler.every(opts.frame_interval_ms, self.tick, name="tick")
        self.scheduler.every(opts.new_dot_delay_ms, self.spawn_dot, name="spawn")
        logger.info("game started: %d fps, speed %d, propagate_hits=%s, x_placement=%s",
                    opts.frames_per_second, self.speed, opts.propagate_hits, opts.x_placement)

    def restart(self) -> None:
        self.scheduler.cancel_all()
        self.dots.clear()
        self.score = 0
        self.ctx.score_display.show(self.score)
        logger.info("game restarted")
        self.begin()

    def set_speed(self, value) -> None:
        self.speed = parse_speed(value)

    def request_resize(self) -> None:
        # applied at the start of the next tick, never in the middle of a hit test
        self._resize_pending = True

    # ------------- helpers -------------
    def resolve_x(self, dot: Dot) -> float:
        return self.placement.resolve_x(dot, self.ctx.canvas.width, self.options.inset)

    def _trace_dot(self, dot: Dot) -> None:
        canvas = self.ctx.canvas
        canvas.begin_path()
        canvas.arc(self.resolve_x(dot), dot.y, dot.r,
                   self.options.dot_start_angle, self.options.dot_end_angle)
        canvas.close_path()

    def _apply_resize(self) -> None:
        board = self.ctx.measure_board()
        self.ctx.canvas.set_board(board)
        self._resize_pending = False
        logger.debug("board resized to %gx%g at offset %s", board.width, board.height, board.offset)

    def _increase_score(self, radius: float) -> None:
        points = calculate_score(radius, self.options.max_dot_diameter)
        self.score += points
        self.ctx.score_display.show(self.score)
        self.scheduler.after(self.options.respawn_delay_ms, self.spawn_dot, name="respawn")
        logger.debug("hit r=%g for %d point(s), score %d", radius, points, self.score)

    # ------------- core operations -------------
    def spawn_dot(self) -> Dot:
        opts = self.options
        r = random_radius(self.rng, opts.min_dot_diameter, opts.max_dot_diameter)
        x = self.placement.choose(self.rng, r, self.ctx.canvas.width, opts.inset)
        # start fully above the board
        dot = Dot(r=r, x=x, y=-r - opts.stroke_width)
        self.dots.append(dot)
        logger.debug("spawned dot r=%g x=%g (%d live)", r, x, len(self.dots))
        return dot

    def tick(self) -> None:
        canvas = self.ctx.canvas
        canvas.clear(canvas.width, canvas.height)

        if self._resize_pending:
            self._apply_resize()

        dy = self.speed / self.options.frames_per_second
        for dot in self.dots:
            dot.y += dy
            self._trace_dot(dot)
            canvas.fill()
            canvas.stroke()

        self.expire_dots()

    def handle_pointer(self, pointer: PointerEvent) -> int:
        """Score the dot(s) under a press. Returns how many were hit."""
        pointer.prevent_default()
        if self.options.propagate_hits:
            return self._score_all_dots(pointer.x, pointer.y)
        return self._score_top_dot(pointer.x, pointer.y)

    def _score_top_dot(self, x: float, y: float) -> int:
        # newest dots are drawn last, so they are on top
        for i in range(len(self.dots) - 1, -1, -1):
            dot = self.dots[i]
            self._trace_dot(dot)
            if self.ctx.canvas.is_point_in_path(x, y):
                del self.dots[i]
                self._increase_score(dot.r)
                return 1
        return 0

    def _score_all_dots(self, x: float, y: float) -> int:
        kept: List[Dot] = []
        hits = 0
        for dot in self.dots:
            self._trace_dot(dot)
            if self.ctx.canvas.is_point_in_path(x, y):
                self._increase_score(dot.r)
                hits += 1
            else:
                kept.append(dot)
        self.dots = kept
        return hits

    def expire_dots(self) -> int:
        height = self.ctx.canvas.height
        stroke = self.options.stroke_width
        if self.options.expiry_scan == "full":
            before = len(self.dots)
            self.dots = [d for d in self.dots if not is_expired(d, height, stroke)]
            n = before - len(self.dots)
        else:
            n = expired_prefix_len(self.dots, height, stroke)
            if n:
                del self.dots[:n]
        if n:
            logger.debug("expired %d dot(s)", n)
        return n

    # ------------- loop hooks -------------
    def on_pointer(self, pointer: PointerEvent) -> None:
        self.handle_pointer(pointer)

    def on_update(self, dt_ms: float) -> None:
        self.scheduler.advance(dt_ms)

    def on_draw(self, surface: pygame.Surface) -> None:
        self.ctx.canvas.blit_to(surface)
        w, _ = self.ctx.screen_size
        draw_text(surface, "Up/Down speed  R restart", (w - 230, 16), HINT_COLOR, size=20)

    def on_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.VIDEORESIZE:
            self.request_resize()
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_r:
            self.restart()

    def on_unload(self) -> None:
        n = self.scheduler.cancel_all()
        self.ctx.speed_control.unsubscribe(self.set_speed)
        logger.info("game over: score %d, %d timer(s) cancelled", self.score, n)


def get_game():
    return DotGame()
