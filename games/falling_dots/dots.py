from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from typing import Sequence, Set, Tuple

from dotgame.api.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class Dot:
    r: float
    x: float  # pixels or percent, depending on the placement policy
    y: float


def random_radius(rng: random.Random, min_diameter: int, max_diameter: int) -> float:
    return rng.randint(min_diameter, max_diameter) / 2


def placement_span(r: float, board_width: float, inset: float) -> Tuple[float, float]:
    """
    Leftmost and rightmost centre x that keep the dot, its stroke and the
    padding inside the board. A board too narrow for the dot collapses the
    span onto its left end.
    """
    lo = r + inset
    hi = board_width - r - inset
    return lo, max(lo, hi)


class Placement:
    name = ""

    def __init__(self):
        self._warned_widths: Set[float] = set()

    def span(self, r: float, board_width: float, inset: float) -> Tuple[float, float]:
        lo, hi = placement_span(r, board_width, inset)
        if board_width - r - inset < lo and board_width not in self._warned_widths:
            self._warned_widths.add(board_width)
            logger.warning("board width %gpx too narrow for a %gpx dot, clamping placement",
                           board_width, 2 * r)
        return lo, hi


class AbsolutePlacement(Placement):
    """x is a pixel position picked once at spawn; it ignores later resizes."""
    name = "absolute"

    def choose(self, rng: random.Random, r: float, board_width: float, inset: float) -> float:
        lo, hi = self.span(r, board_width, inset)
        return lo + rng.randint(0, int(math.floor(hi - lo)))

    def resolve_x(self, dot: Dot, board_width: float, inset: float) -> float:
        return dot.x


class PercentPlacement(Placement):
    """x is a 0..100 share of the placement span, resolved against the current board."""
    name = "percent"

    def choose(self, rng: random.Random, r: float, board_width: float, inset: float) -> float:
        return rng.randint(0, 100)

    def resolve_x(self, dot: Dot, board_width: float, inset: float) -> float:
        lo, hi = self.span(dot.r, board_width, inset)
        return (hi - lo) * dot.x / 100 + lo


PLACEMENTS = {
    AbsolutePlacement.name: AbsolutePlacement,
    PercentPlacement.name: PercentPlacement,
}


def make_placement(name: str) -> Placement:
    try:
        return PLACEMENTS[name]()
    except KeyError:
        raise ConfigError(f"unknown placement {name!r}, expected one of {sorted(PLACEMENTS)}") from None


def round_half_up(value: float) -> int:
    # ties go up (2.5 -> 3), unlike round() which goes to even
    return int(math.floor(value + 0.5))


def calculate_score(radius: float, max_diameter: int) -> int:
    """
    Points for hitting a dot. Inversely proportional to its size: a dot of
    max_diameter is worth 1, a dot of min_diameter is worth max/min.
    """
    return round_half_up(max_diameter / (2 * radius))


def is_expired(dot: Dot, board_height: float, stroke_width: float) -> bool:
    # the whole dot, stroke included, is below the bottom edge
    return dot.y - dot.r - stroke_width > board_height


def expired_prefix_len(dots: Sequence[Dot], board_height: float, stroke_width: float) -> int:
    """
    Number of leading dots that have expired. All dots fall at the same rate
    and older dots sit lower, so expiries come from the front of the list.
    Mixed radii can leave a small expired dot waiting behind a larger older
    one; it is removed once the larger dot goes.
    """
    n = 0
    for dot in dots:
        if not is_expired(dot, board_height, stroke_width):
            break
        n += 1
    return n
