from __future__ import annotations
import logging
from collections import deque
from typing import Any, Dict, Iterable, Optional, Tuple
import pygame

from dotgame.api.config import EngineConfig
from dotgame.api.frame_data import PointerEvent
from dotgame.app.context import Context
from dotgame.app.loader import load_game
from dotgame.input.pointer import PointerInput
from dotgame.input.speed_control import SpeedControl

logger = logging.getLogger(__name__)

WINDOW_COLOR = (12, 14, 18)
HUD_COLOR = (230, 230, 230)
BORDER_COLOR = (220, 220, 220)
MARKER_COLOR = (255, 60, 60)
MARKER_RADIUS = 6
MARKER_HISTORY = 8


def _speed_control_from_manifest(manifest: dict, initial_speed: Optional[int]) -> SpeedControl:
    speed = (manifest.get("controls") or {}).get("speed") or {}
    text = initial_speed if initial_speed is not None else speed.get("initial", 0)
    return SpeedControl(
        text=str(text),
        minimum=int(speed.get("min", 0)),
        maximum=int(speed.get("max", 1000)),
        step=int(speed.get("step", 10)),
    )


def _draw_hud(surface: pygame.Surface, ctx: Context) -> None:
    w, _ = ctx.screen_size
    pad = 12
    ctx.score_display.draw(surface, (pad, pad), HUD_COLOR)
    ctx.speed_control.draw(surface, (w // 2 - 60, pad), HUD_COLOR)


def _draw_press_markers(surface: pygame.Surface, presses: Iterable[Tuple[float, float, bool]]) -> None:
    """Crosshair on each recent press, in screen coordinates. Filled if the game took it."""
    for x, y, taken in presses:
        c = (int(x), int(y))
        pygame.draw.circle(surface, MARKER_COLOR, c, MARKER_RADIUS, width=0 if taken else 1)
        pygame.draw.line(surface, MARKER_COLOR, (c[0] - 2 * MARKER_RADIUS, c[1]), (c[0] + 2 * MARKER_RADIUS, c[1]))
        pygame.draw.line(surface, MARKER_COLOR, (c[0], c[1] - 2 * MARKER_RADIUS), (c[0], c[1] + 2 * MARKER_RADIUS))


def run_game(
    game_id: str,
    screen_size: tuple[int, int],
    resizable: bool = False,
    initial_speed: Optional[int] = None,
    overrides: Optional[Dict[str, Any]] = None,
    debug: bool = False,
):
    # load game; everything that can go wrong here is a ConfigError
    manifest, game = load_game(game_id, overrides)

    cfg = EngineConfig(
        screen_size=screen_size,
        resizable=resizable,
        debug=debug,
    )

    pygame.init()
    pygame.display.set_caption(f"Dot Game – {game_id}")
    flags = pygame.RESIZABLE if resizable else 0
    screen = pygame.display.set_mode(screen_size, flags)
    clock = pygame.time.Clock()

    ctx = Context.create(
        screen, cfg,
        speed_control=_speed_control_from_manifest(manifest, initial_speed),
    )
    pointer_input = PointerInput()
    presses: deque = deque(maxlen=MARKER_HISTORY)

    try:
        game.on_load(ctx, manifest)
    except Exception:
        pygame.quit()
        raise
    logger.info("running %s at %dx%d (resizable=%s, debug=%s)", game_id, *screen_size, resizable, debug)

    def deliver(pointer: PointerEvent) -> None:
        game.on_pointer(pointer)
        pointer_input.delivered(pointer)
        if cfg.debug:
            ox, oy = ctx.canvas.offset
            presses.append((ox + pointer.x, oy + pointer.y, pointer.default_prevented))
            logger.debug("%s press at (%g, %g)", pointer.source, pointer.x, pointer.y)

    running = True
    try:
        while running:
            dt = clock.tick(cfg.loop_fps)
            pointer_input.begin_frame()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    ctx.window_resized(pygame.display.get_surface())
                    logger.debug("window resized to %dx%d", *ctx.screen_size)

                if ctx.speed_control.handle_event(event):
                    continue
                # canvas.board is the geometry as of the last tick, same as the hit test uses
                pointer = pointer_input.translate(event, ctx.canvas.board, ctx.screen_size)
                if pointer is not None:
                    deliver(pointer)
                game.on_event(event)

            for pointer in pointer_input.end_frame():
                deliver(pointer)

            # ---- draw to screen ----
            ctx.screen.fill(WINDOW_COLOR)
            game.on_update(dt)
            game.on_draw(ctx.screen)
            _draw_hud(ctx.screen, ctx)
            ox, oy = ctx.canvas.offset
            pygame.draw.rect(ctx.screen, BORDER_COLOR,
                             (int(ox), int(oy), int(ctx.canvas.width), int(ctx.canvas.height)), 1)
            if cfg.debug:
                _draw_press_markers(ctx.screen, presses)

            pygame.display.flip()

    finally:
        game.on_unload()
        pygame.quit()
