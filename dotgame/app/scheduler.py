from __future__ import annotations
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

# slack for float accumulation of frame intervals like 1000/60
EPSILON_MS = 1e-6


@dataclass(eq=False)
class Timer:
    callback: Callable[[], None]
    due_ms: float
    interval_ms: Optional[float] = None  # None -> one-shot
    name: str = ""
    cancelled: bool = False
    _seq: int = field(default=0, repr=False)

    @property
    def periodic(self) -> bool:
        return self.interval_ms is not None

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """
    Cooperative timer queue driven by elapsed milliseconds.

    Nothing here runs on its own: the owner calls advance(dt_ms) once per
    frame and every timer that became due fires in due-time order, ties in
    the order they were scheduled. Periodic timers re-arm from their own due
    time, so a long frame fires every missed interval instead of drifting.
    """

    def __init__(self):
        self.now_ms: float = 0.0
        self._heap: List[tuple] = []
        self._live: set[Timer] = set()
        self._counter = itertools.count()

    def _push(self, timer: Timer) -> Timer:
        timer._seq = next(self._counter)
        heapq.heappush(self._heap, (timer.due_ms, timer._seq, timer))
        self._live.add(timer)
        return timer

    def every(self, interval_ms: float, callback: Callable[[], None], name: str = "") -> Timer:
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        return self._push(Timer(callback, self.now_ms + interval_ms, interval_ms, name))

    def after(self, delay_ms: float, callback: Callable[[], None], name: str = "") -> Timer:
        return self._push(Timer(callback, self.now_ms + max(0.0, delay_ms), None, name))

    def cancel_all(self) -> int:
        live = [t for t in self._live if not t.cancelled]
        n = len(live)
        for t in live:
            t.cancel()
        self._live.clear()
        self._heap.clear()
        if n:
            logger.debug("cancelled %d pending timer(s)", n)
        return n

    @property
    def pending(self) -> List[Timer]:
        return sorted((t for t in self._live if not t.cancelled), key=lambda t: (t.due_ms, t._seq))

    def advance(self, dt_ms: float) -> int:
        """Move the clock forward and fire what became due. Returns the fire count."""
        target = self.now_ms + max(0.0, dt_ms)
        fired = 0
        while self._heap and self._heap[0][0] <= target + EPSILON_MS:
            due, _, timer = heapq.heappop(self._heap)
            if timer.cancelled:
                self._live.discard(timer)
                continue
            # callbacks observe the time they were due at
            self.now_ms = max(self.now_ms, due)
            if timer.periodic:
                timer.due_ms = due + timer.interval_ms
                self._push(timer)
            else:
                self._live.discard(timer)
            timer.callback()
            fired += 1
        self.now_ms = target
        return fired
