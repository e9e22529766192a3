"""Focus/break mode state machine with auto-chained restarts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

from .config import TimerConfiguration
from .constants import (
    ACTION_CLEAR_SESSIONS,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SET_LABEL,
    ACTION_START,
    ACTION_SWITCH_MODE,
    ACTION_UPDATE_CONFIG,
    BREAK_MODES,
    DEFAULT_AUTO_START_DELAY_SECONDS,
    DEFAULT_SESSION_LABEL,
    MAX_LABEL_LENGTH,
    MODE_FOCUS,
    MODE_LONG_BREAK,
    MODE_SHORT_BREAK,
    MODES,
    PHASE_COMPLETING,
    PHASE_IDLE,
    PHASE_PAUSED,
    PHASE_RUNNING,
    REASON_ALREADY_RUNNING,
    REASON_CLEARED,
    REASON_NOT_RUNNING,
    REASON_NOTHING_REMAINING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_STARTED,
    REASON_SWITCHED,
    REASON_UNKNOWN_MODE,
    REASON_UPDATED,
)
from .countdown import CountdownEngine, CountdownTick
from .scheduling import ScheduledJobLike, SchedulerLike

FocusMode = Literal["focus", "shortBreak", "longBreak"]
FocusPhase = Literal["idle", "running", "paused", "completing"]


@dataclass(frozen=True)
class FocusSnapshot:
    """Immutable timer snapshot exposed to runtime and UI publishers."""
    mode: FocusMode
    phase: FocusPhase
    label: str
    duration_seconds: int
    seconds_remaining: int
    cycles: int
    long_break_interval: int
    auto_start: bool

    @property
    def is_running(self) -> bool:
        return self.phase == PHASE_RUNNING

    @property
    def progress_percent(self) -> float:
        if self.duration_seconds <= 0:
            return 0.0
        elapsed = self.duration_seconds - self.seconds_remaining
        return round(100.0 * elapsed / self.duration_seconds, 2)

    @property
    def status_label(self) -> str:
        if not self.is_running:
            return "PAUSED"
        return "RESTING" if self.mode in BREAK_MODES else "FOCUSING"


@dataclass(frozen=True)
class FocusActionResult:
    """Result envelope returned after applying a timer action."""
    action: str
    accepted: bool
    reason: str
    snapshot: FocusSnapshot


@dataclass(frozen=True)
class FocusTransition:
    """Mode change caused by a countdown reaching zero."""
    completed_mode: FocusMode
    next_mode: FocusMode
    cycles: int
    duration_minutes: int
    label: str
    snapshot: FocusSnapshot


@dataclass(frozen=True)
class FocusEffects:
    """Side-effect handlers invoked by the state machine's transitions."""
    on_tick: Optional[Callable[[FocusSnapshot], None]] = None
    on_countdown_complete: Optional[Callable[[FocusSnapshot], None]] = None
    on_focus_completed: Optional[Callable[[int, str], None]] = None
    on_transition: Optional[Callable[[FocusTransition], None]] = None
    on_auto_start: Optional[Callable[[FocusSnapshot], None]] = None


class FocusTimer:
    """Owns the focus/break cycle and the countdown for the active mode.

    All methods are expected to be called from the single runtime loop
    thread that also drives the scheduler.
    """

    def __init__(
        self,
        scheduler: SchedulerLike,
        *,
        config: Optional[TimerConfiguration] = None,
        effects: Optional[FocusEffects] = None,
        auto_start_delay_seconds: float = DEFAULT_AUTO_START_DELAY_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if auto_start_delay_seconds < 0:
            raise ValueError("auto_start_delay_seconds must not be negative")

        self._scheduler = scheduler
        self._config = config or TimerConfiguration()
        self._effects = effects or FocusEffects()
        self._auto_start_delay_seconds = auto_start_delay_seconds
        self._logger = logger or logging.getLogger("focus")

        self._mode: FocusMode = MODE_FOCUS
        self._phase: FocusPhase = PHASE_IDLE
        self._label = ""
        self._cycles = 0
        self._duration_seconds = self._config.seconds_for(MODE_FOCUS)
        self._restart_token = 0
        self._restart_job: Optional[ScheduledJobLike] = None
        self._countdown = CountdownEngine(
            scheduler,
            seconds=self._duration_seconds,
            on_tick=self._handle_countdown_tick,
            logger=self._logger.getChild("countdown"),
        )

    @property
    def config(self) -> TimerConfiguration:
        return self._config

    def set_effects(self, effects: FocusEffects) -> None:
        self._effects = effects

    def snapshot(self) -> FocusSnapshot:
        return FocusSnapshot(
            mode=self._mode,
            phase=self._phase,
            label=self._label,
            duration_seconds=self._duration_seconds,
            seconds_remaining=self._countdown.seconds_remaining,
            cycles=self._cycles,
            long_break_interval=self._config.long_break_interval,
            auto_start=self._config.auto_start,
        )

    def start(self) -> FocusActionResult:
        if self._phase == PHASE_RUNNING:
            return self._result(ACTION_START, False, REASON_ALREADY_RUNNING)

        self._cancel_auto_start()
        if self._countdown.seconds_remaining <= 0:
            return self._result(ACTION_START, False, REASON_NOTHING_REMAINING)

        self._begin_running()
        return self._result(ACTION_START, True, REASON_STARTED)

    def pause(self) -> FocusActionResult:
        if self._phase == PHASE_COMPLETING:
            self._cancel_auto_start()
            self._phase = PHASE_IDLE
            self._logger.info("Pending auto-start cancelled: mode=%s", self._mode)
            return self._result(ACTION_PAUSE, True, REASON_PAUSED)

        if self._phase != PHASE_RUNNING:
            return self._result(ACTION_PAUSE, False, REASON_NOT_RUNNING)

        self._countdown.pause()
        self._phase = PHASE_PAUSED
        self._logger.info(
            "Focus timer paused: mode=%s remaining=%ss",
            self._mode,
            self._countdown.seconds_remaining,
        )
        return self._result(ACTION_PAUSE, True, REASON_PAUSED)

    def toggle(self) -> FocusActionResult:
        if self._phase == PHASE_RUNNING:
            return self.pause()
        return self.start()

    def reset(self, mode: Optional[str] = None) -> FocusActionResult:
        target = mode or self._mode
        if target not in MODES:
            return self._result(ACTION_RESET, False, REASON_UNKNOWN_MODE)
        self._cancel_auto_start()
        self._enter_mode(target)
        self._phase = PHASE_IDLE
        self._logger.info("Focus timer reset: mode=%s", self._mode)
        return self._result(ACTION_RESET, True, REASON_RESET)

    def switch_mode(self, mode: str) -> FocusActionResult:
        if mode not in MODES:
            return self._result(ACTION_SWITCH_MODE, False, REASON_UNKNOWN_MODE)
        self._cancel_auto_start()
        self._enter_mode(mode)
        self._phase = PHASE_IDLE
        self._logger.info("Focus timer switched mode: mode=%s", self._mode)
        return self._result(ACTION_SWITCH_MODE, True, REASON_SWITCHED)

    def set_label(self, label: str) -> FocusActionResult:
        self._label = _sanitize_label(label)
        return self._result(ACTION_SET_LABEL, True, REASON_UPDATED)

    def update_config(self, config: TimerConfiguration) -> FocusActionResult:
        """Apply an already validated configuration.

        A stopped timer picks up the new duration for its mode immediately;
        an in-flight countdown keeps running with the old one.
        """
        self._config = config
        if self._phase != PHASE_RUNNING:
            self._duration_seconds = config.seconds_for(self._mode)
            self._countdown.reset(self._duration_seconds)
            if self._phase == PHASE_PAUSED:
                self._phase = PHASE_IDLE
        self._logger.info(
            "Timer configuration updated: focus=%sm short=%sm long=%sm interval=%s auto_start=%s",
            config.focus_minutes,
            config.short_break_minutes,
            config.long_break_minutes,
            config.long_break_interval,
            config.auto_start,
        )
        return self._result(ACTION_UPDATE_CONFIG, True, REASON_UPDATED)

    def clear_cycles(self) -> FocusActionResult:
        self._cycles = 0
        return self._result(ACTION_CLEAR_SESSIONS, True, REASON_CLEARED)

    def tick(self) -> Optional[CountdownTick]:
        """Advance the countdown by one second if it is running."""
        return self._countdown.tick()

    def close(self) -> None:
        self._cancel_auto_start()
        self._countdown.close()
        if self._phase == PHASE_RUNNING:
            self._phase = PHASE_PAUSED
        elif self._phase == PHASE_COMPLETING:
            self._phase = PHASE_IDLE

    def _begin_running(self) -> None:
        self._countdown.start()
        self._phase = PHASE_RUNNING
        self._logger.info(
            "Focus timer started: mode=%s remaining=%ss label=%s",
            self._mode,
            self._countdown.seconds_remaining,
            self._label or "-",
        )

    def _enter_mode(self, mode: str) -> None:
        self._mode = mode  # type: ignore[assignment]
        self._duration_seconds = self._config.seconds_for(mode)
        self._countdown.reset(self._duration_seconds)

    def _handle_countdown_tick(self, tick: CountdownTick) -> None:
        if self._phase != PHASE_RUNNING:
            return

        if not tick.completed:
            self._run_effect("on_tick", self._effects.on_tick, self.snapshot())
            return

        self._phase = PHASE_COMPLETING
        self._complete_countdown()

    def _complete_countdown(self) -> None:
        completed_mode = self._mode
        at_zero = self.snapshot()
        self._run_effect("on_tick", self._effects.on_tick, at_zero)

        duration_minutes = self._config.minutes_for(completed_mode)
        label = self._label or DEFAULT_SESSION_LABEL
        if completed_mode == MODE_FOCUS:
            self._run_effect(
                "on_focus_completed",
                self._effects.on_focus_completed,
                duration_minutes,
                label,
            )
            self._cycles += 1
            if self._cycles % self._config.long_break_interval == 0:
                next_mode: FocusMode = MODE_LONG_BREAK
            else:
                next_mode = MODE_SHORT_BREAK
        else:
            next_mode = MODE_FOCUS

        self._run_effect("on_countdown_complete", self._effects.on_countdown_complete, at_zero)

        self._enter_mode(next_mode)
        if self._config.auto_start:
            self._schedule_auto_start()
        else:
            self._phase = PHASE_IDLE

        self._logger.info(
            "Countdown completed: %s -> %s (cycles=%d)",
            completed_mode,
            next_mode,
            self._cycles,
        )
        self._run_effect(
            "on_transition",
            self._effects.on_transition,
            FocusTransition(
                completed_mode=completed_mode,
                next_mode=next_mode,
                cycles=self._cycles,
                duration_minutes=duration_minutes,
                label=label if completed_mode == MODE_FOCUS else "",
                snapshot=self.snapshot(),
            ),
        )

    def _schedule_auto_start(self) -> None:
        self._restart_token += 1
        token = self._restart_token
        self._restart_job = self._scheduler.call_later(
            self._auto_start_delay_seconds,
            lambda: self._auto_start(token),
        )

    def _auto_start(self, token: int) -> None:
        if token != self._restart_token or self._phase != PHASE_COMPLETING:
            return
        self._restart_job = None
        self._phase = PHASE_IDLE
        self._begin_running()
        self._run_effect("on_auto_start", self._effects.on_auto_start, self.snapshot())

    def _cancel_auto_start(self) -> None:
        self._restart_token += 1
        job = self._restart_job
        self._restart_job = None
        if job is not None:
            job.cancel()

    def _run_effect(self, name: str, handler: Optional[Callable[..., Any]], *args: Any) -> None:
        if handler is None:
            return
        try:
            handler(*args)
        except Exception as error:
            self._logger.error("Focus effect %s failed: %s", name, error, exc_info=True)

    def _result(self, action: str, accepted: bool, reason: str) -> FocusActionResult:
        return FocusActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self.snapshot(),
        )


def _sanitize_label(label: str) -> str:
    compact = " ".join((label or "").split())
    return compact[:MAX_LABEL_LENGTH]
