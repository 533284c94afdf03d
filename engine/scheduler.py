"""
scheduler.py — Cancellable Delayed Tasks
=========================================
The playback controller never sleeps and never starts a thread.  It asks a
scheduler to run ONE callback after a delay and keeps the returned handle
so it can cancel it on the next state change.

Two implementations:

    TickScheduler     – polled.  Call run_pending() from any loop (the HTTP
                        layer calls it on every /tick request).  The clock
                        is injectable so tests can drive time by hand.
    AsyncioScheduler  – thin adapter over loop.call_later for callers that
                        already live inside an asyncio event loop.
"""

import asyncio
import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Handle
# ---------------------------------------------------------------------------
class ScheduledTask:
    """Handle for one pending callback."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due       = due
        self.callback  = callback
        self.cancelled = False
        self.done      = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def _run(self) -> None:
        self.done = True
        self.callback()


# ---------------------------------------------------------------------------
# Polled scheduler
# ---------------------------------------------------------------------------
class TickScheduler:
    """
    Attributes:
        clock : zero-arg callable returning seconds (default time.monotonic).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(self.clock() + delay_ms / 1000.0, callback)
        heapq.heappush(self._queue, (task.due, next(self._counter), task))
        return task

    def run_pending(self) -> int:
        """Run every task whose due time has passed.  Returns how many ran."""
        ran = 0
        now = self.clock()
        while self._queue and self._queue[0][0] <= now:
            _, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            task._run()
            ran += 1
        return ran

    def pending(self) -> List[ScheduledTask]:
        return [task for _, _, task in self._queue if task.pending]

    def next_due(self) -> Optional[float]:
        live = [task.due for task in self.pending()]
        return min(live) if live else None


# ---------------------------------------------------------------------------
# asyncio adapter
# ---------------------------------------------------------------------------
class _AsyncioTask(ScheduledTask):
    def __init__(self, due: float, callback: Callable[[], None]):
        super().__init__(due, callback)
        self.handle: Optional[asyncio.TimerHandle] = None

    def cancel(self) -> None:
        super().cancel()
        if self.handle is not None:
            self.handle.cancel()


class AsyncioScheduler:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        task = _AsyncioTask(self.loop.time() + delay_ms / 1000.0, callback)
        task.handle = self.loop.call_later(delay_ms / 1000.0, task._run)
        return task

    def run_pending(self) -> int:
        # the event loop runs due callbacks itself
        return 0
