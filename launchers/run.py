import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotgame.api.errors import ConfigError
from dotgame.app.loader import list_games
from dotgame.app.logging_setup import setup_logging
from dotgame.app.loop import run_game

logger = logging.getLogger("dotgame.launcher")


def parse_screen(value: str):
    try:
        w, h = map(int, value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"screen size must be positive, got {value!r}")
    return w, h


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dot Game Launcher")
    parser.add_argument("--game", default="falling_dots", help="Game folder name under games/")
    parser.add_argument("--screen", type=parse_screen, default=(800, 600), help="Window size WxH, e.g. 800x600")
    parser.add_argument("--resizable", action="store_true", help="Allow resizing the window")
    parser.add_argument("--speed", type=int, default=None, help="Initial fall speed in px/s")
    parser.add_argument("--fps", type=int, default=None, help="Simulation ticks per second")
    parser.add_argument("--propagate-hits", action="store_true", default=None,
                        help="One press scores every dot under the pointer")
    parser.add_argument("--x-placement", choices=["percent", "absolute"], default=None,
                        help="How a dot's horizontal position is stored")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible games")
    parser.add_argument("--list", action="store_true", help="List installed games and exit")
    parser.add_argument("--debug", action="store_true", help="Verbose logging and press markers")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug, quiet=args.quiet)

    if args.list:
        for game_id in list_games():
            print(game_id)
        return 0

    overrides = {
        "frames_per_second": args.fps,
        "propagate_hits": args.propagate_hits,
        "x_placement": args.x_placement,
        "seed": args.seed,
    }

    try:
        run_game(
            game_id=args.game,
            screen_size=args.screen,
            resizable=args.resizable,
            initial_speed=args.speed,
            overrides=overrides,
            debug=args.debug,
        )
    except ConfigError as e:
        logger.error("could not start %s: %s", args.game, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
