"""
Polled timer queue for single-threaded event loops.

The host loop calls ``run_due()`` once per frame; callbacks always run on
that thread, never on a background timer thread.
"""

import heapq
import itertools
import time
from typing import Callable, List, Tuple


class TimerHandle:
    """A scheduled callback. ``cancel()`` may be called any number of times."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True


class TimerQueue:
    """Deadline-ordered callbacks driven by an injectable clock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize timer queue.

        Args:
            clock: Returns the current time in seconds
        """
        self.clock = clock
        self._heap: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule ``callback`` to run ``delay`` seconds from now."""
        handle = TimerHandle(self.clock() + max(0.0, delay), callback)
        heapq.heappush(self._heap, (handle.when, next(self._counter), handle))
        return handle

    def run_due(self) -> int:
        """Run every callback whose deadline has passed; return how many ran."""
        now = self.clock()
        ran = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            ran += 1
        return ran

    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._heap if handle.pending)

    def clear(self) -> None:
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()
