"""Validated duration configuration for the focus timer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from .constants import (
    DEFAULT_FOCUS_MINUTES,
    DEFAULT_LONG_BREAK_INTERVAL,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    MODE_FOCUS,
    MODE_LONG_BREAK,
    MODE_SHORT_BREAK,
)


class TimerConfigurationError(ValueError):
    """Raised when a timer configuration edit is invalid."""


_EDITABLE_FIELDS = (
    "focus_minutes",
    "short_break_minutes",
    "long_break_minutes",
    "long_break_interval",
    "auto_start",
)


@dataclass(frozen=True)
class TimerConfiguration:
    """User-tunable interval lengths and long-break cadence."""
    focus_minutes: int = DEFAULT_FOCUS_MINUTES
    short_break_minutes: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES
    long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL
    auto_start: bool = False

    def __post_init__(self) -> None:
        for field in ("focus_minutes", "short_break_minutes", "long_break_minutes"):
            value = getattr(self, field)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TimerConfigurationError(f"{field} must be an integer, got: {value!r}")
            if value <= 0:
                raise TimerConfigurationError(f"{field} must be greater than zero, got: {value}")

        interval = self.long_break_interval
        if isinstance(interval, bool) or not isinstance(interval, int):
            raise TimerConfigurationError(
                f"long_break_interval must be an integer, got: {interval!r}"
            )
        if interval < 1:
            raise TimerConfigurationError(f"long_break_interval must be >= 1, got: {interval}")

        if not isinstance(self.auto_start, bool):
            raise TimerConfigurationError("auto_start must be a boolean")

    def minutes_for(self, mode: str) -> int:
        if mode == MODE_FOCUS:
            return self.focus_minutes
        if mode == MODE_SHORT_BREAK:
            return self.short_break_minutes
        if mode == MODE_LONG_BREAK:
            return self.long_break_minutes
        raise TimerConfigurationError(f"Unknown timer mode: {mode}")

    def seconds_for(self, mode: str) -> int:
        return self.minutes_for(mode) * 60

    def with_changes(self, changes: Mapping[str, Any]) -> "TimerConfiguration":
        """Return a validated copy with `changes` applied.

        Unknown keys are rejected so a typo in a settings form cannot be
        silently ignored.
        """
        unknown = sorted(set(changes) - set(_EDITABLE_FIELDS))
        if unknown:
            raise TimerConfigurationError(f"Unknown timer settings: {', '.join(unknown)}")
        return replace(self, **dict(changes))

    @classmethod
    def from_settings(cls, settings) -> "TimerConfiguration":
        return cls(
            focus_minutes=settings.focus_minutes,
            short_break_minutes=settings.short_break_minutes,
            long_break_minutes=settings.long_break_minutes,
            long_break_interval=settings.long_break_interval,
            auto_start=settings.auto_start,
        )
