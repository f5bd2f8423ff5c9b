import os
import sys
import pytest

# Headless pygame: no window, no audio device
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "hide")

# Ensure the repo root (containing `dotgame` and `games`) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pygame

from dotgame.api.config import EngineConfig
from dotgame.app.context import Context
from dotgame.input.speed_control import SpeedControl
from games.falling_dots.main import DotGame


@pytest.fixture(scope="session", autouse=True)
def headless_pygame():
    pygame.init()
    yield
    pygame.quit()


def make_context(width=400, height=600, hud_height=0, speed="60"):
    size = (width, height + hud_height)
    cfg = EngineConfig(screen_size=size, hud_height=hud_height)
    return Context.create(pygame.Surface(size), cfg, speed_control=SpeedControl(text=speed))


@pytest.fixture()
def ctx():
    return make_context()


@pytest.fixture()
def make_game():
    """Factory for a loaded DotGame on a 400x600 board (no HUD strip by default)."""
    games = []

    def _make(options=None, width=400, height=600, hud_height=0, speed="60"):
        context = make_context(width, height, hud_height, speed)
        opts = {"seed": 1234}
        opts.update(options or {})
        game = DotGame()
        game.on_load(context, {"options": opts})
        games.append(game)
        return game

    yield _make
    for game in games:
        game.on_unload()
