"""Second-resolution countdown that owns one repeating tick job."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .constants import TICK_INTERVAL_SECONDS
from .scheduling import ScheduledJobLike, SchedulerLike


@dataclass(frozen=True)
class CountdownTick:
    """Outcome of one countdown tick."""
    seconds_remaining: int
    completed: bool = False


class CountdownEngine:
    """Single active countdown ticking once per second while running.

    The engine knows nothing about modes; it reports each tick to
    `on_tick` and stops itself when the count reaches zero.
    """

    def __init__(
        self,
        scheduler: SchedulerLike,
        *,
        seconds: int,
        on_tick: Optional[Callable[[CountdownTick], None]] = None,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if seconds < 0:
            raise ValueError("seconds must not be negative")
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._tick_interval_seconds = tick_interval_seconds
        self._logger = logger or logging.getLogger("focus.countdown")
        self._seconds_remaining = int(seconds)
        self._job: Optional[ScheduledJobLike] = None

    @property
    def seconds_remaining(self) -> int:
        return self._seconds_remaining

    @property
    def is_running(self) -> bool:
        return self._job is not None

    def start(self) -> bool:
        if self._job is not None or self._seconds_remaining <= 0:
            return False
        self._job = self._scheduler.call_every(self._tick_interval_seconds, self.tick)
        return True

    def pause(self) -> bool:
        if self._job is None:
            return False
        self._cancel_job()
        return True

    def reset(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError("seconds must not be negative")
        self._cancel_job()
        self._seconds_remaining = int(seconds)

    def close(self) -> None:
        self._cancel_job()

    def tick(self) -> Optional[CountdownTick]:
        if self._job is None or self._seconds_remaining <= 0:
            return None

        self._seconds_remaining -= 1
        completed = self._seconds_remaining == 0
        if completed:
            self._cancel_job()
            self._logger.debug("Countdown reached zero")

        result = CountdownTick(seconds_remaining=self._seconds_remaining, completed=completed)
        if self._on_tick is not None:
            self._on_tick(result)
        return result

    def _cancel_job(self) -> None:
        job = self._job
        self._job = None
        if job is not None:
            job.cancel()
