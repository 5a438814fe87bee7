"""Cooperative task scheduling for game timers.

Nothing here runs on its own: callers invoke ``run_pending()`` from their
event loop and every due task runs to completion on the calling thread.
Tasks run in due-time order, ties broken by scheduling order.

Usage:
    scheduler = DeferredScheduler()
    tick = scheduler.call_every(1000, session.tick, name="tick")
    scheduler.call_later(500, clear_input, name="clear-input")

    # each loop iteration:
    scheduler.run_pending()

    # on game end:
    scheduler.cancel(tick)
"""

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ScheduledTask:
    """A pending callback. Compared by (due, seq) for heap ordering."""
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    interval: Optional[float] = field(default=None, compare=False)
    name: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    runs: int = field(default=0, compare=False)

    @property
    def periodic(self) -> bool:
        return self.interval is not None


class ManualClock:
    """Clock that only moves when told to. Useful for tests and replays."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DeferredScheduler:
    """Single-threaded scheduler for delayed and periodic callbacks."""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock = clock or time.monotonic
        self._queue: List[ScheduledTask] = []
        self._seq = itertools.count()

    def _push(self, task: ScheduledTask) -> None:
        task.seq = next(self._seq)
        heapq.heappush(self._queue, task)

    def call_later(self, delay_ms: float, callback: Callable[[], None], name: str = "") -> ScheduledTask:
        """Run ``callback`` once, ``delay_ms`` milliseconds from now."""
        task = ScheduledTask(due=self.clock() + delay_ms / 1000.0, seq=0, callback=callback, name=name)
        self._push(task)
        logger.debug(f"[schedule] {name or 'task'} in {delay_ms}ms")
        return task

    def call_every(self, interval_ms: float, callback: Callable[[], None], name: str = "") -> ScheduledTask:
        """Run ``callback`` every ``interval_ms`` milliseconds, first run one interval from now."""
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        interval = interval_ms / 1000.0
        task = ScheduledTask(
            due=self.clock() + interval, seq=0, callback=callback, interval=interval, name=name
        )
        self._push(task)
        logger.debug(f"[schedule] {name or 'task'} every {interval_ms}ms")
        return task

    def cancel(self, task: Optional[ScheduledTask]) -> bool:
        """Cancel a task. Returns False if it was already cancelled (or None)."""
        if task is None or task.cancelled:
            return False
        task.cancelled = True
        logger.debug(f"[cancel] {task.name or 'task'}")
        return True

    def pending(self) -> int:
        """Number of tasks still waiting to run."""
        return sum(1 for task in self._queue if not task.cancelled)

    def clear(self) -> None:
        """Drop every queued task."""
        for task in self._queue:
            task.cancelled = True
        self._queue.clear()

    def run_pending(self) -> int:
        """Run every task that is due. Returns the number of callbacks run.

        A periodic task that fell behind runs once per missed interval.
        """
        now = self.clock()
        ran = 0
        while self._queue and self._queue[0].due <= now:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            if task.periodic:
                task.due += task.interval
                self._push(task)
            task.runs += 1
            task.callback()
            ran += 1
        return ran
