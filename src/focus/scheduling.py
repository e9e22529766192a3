"""Single-threaded job scheduler driven by the runtime loop."""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol


class ScheduledJobLike(Protocol):
    def cancel(self) -> None:
        ...

    @property
    def cancelled(self) -> bool:
        ...


class SchedulerLike(Protocol):
    """Scheduling surface the countdown and auto-chain logic depend on."""
    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledJobLike:
        ...

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledJobLike:
        ...


@dataclass(eq=False)
class ScheduledJob:
    """Handle for a one-shot or repeating job owned by `LoopScheduler`."""
    callback: Callable[[], None]
    due_at: float
    interval_seconds: Optional[float] = None
    _cancelled: bool = field(default=False, repr=False)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class LoopScheduler:
    """Runs due jobs when the owning loop calls `run_due`.

    Repeating jobs are re-armed from their previous due time, so a loop that
    stalls (for example after the host sleeps) delivers every missed period
    back to back instead of skipping them.
    """

    def __init__(
        self,
        *,
        monotonic_fn: Optional[Callable[[], float]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._monotonic = monotonic_fn or time.monotonic
        self._logger = logger or logging.getLogger("scheduler")
        self._queue: list[tuple[float, int, ScheduledJob]] = []
        self._sequence = itertools.count()

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledJob:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        job = ScheduledJob(
            callback=callback,
            due_at=self._monotonic() + interval_seconds,
            interval_seconds=interval_seconds,
        )
        self._push(job)
        return job

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledJob:
        job = ScheduledJob(callback=callback, due_at=self._monotonic() + max(0.0, delay_seconds))
        self._push(job)
        return job

    def next_due_in(self) -> Optional[float]:
        """Seconds until the next live job, or None when nothing is scheduled."""
        self._drop_cancelled()
        if not self._queue:
            return None
        return max(0.0, self._queue[0][0] - self._monotonic())

    def run_due(self) -> int:
        """Run every job due at the current time and return how many ran."""
        now = self._monotonic()
        ran = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, job = heapq.heappop(self._queue)
            if job.cancelled:
                continue

            if job.interval_seconds is not None:
                job.due_at += job.interval_seconds
                self._push(job)
            else:
                job.cancel()

            ran += 1
            try:
                job.callback()
            except Exception as error:
                self._logger.error("Scheduled job failed: %s", error, exc_info=True)
        return ran

    def _push(self, job: ScheduledJob) -> None:
        heapq.heappush(self._queue, (job.due_at, next(self._sequence), job))

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
