"""Effect handlers wired into the focus timer's ticks and transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from audio import AudioCoordinator
from focus import FocusEffects, FocusSnapshot, FocusTransition
from focus.constants import (
    ACTION_AUTO_START,
    ACTION_COMPLETED,
    ACTION_TICK,
    REASON_AUTO_STARTED,
    REASON_COMPLETED,
    REASON_TICK,
)
from sessions import SessionRecorder

from .messages import completion_text
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TickDependencies:
    """Collaborators the timer's side effects are delegated to."""
    logger: logging.Logger
    ui: RuntimeUIPublisher
    audio: Optional[AudioCoordinator] = None
    recorder: Optional[SessionRecorder] = None


class TickProcessor:
    """Turns timer ticks and transitions into UI, audio, and session effects."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def build_effects(self) -> FocusEffects:
        return FocusEffects(
            on_tick=self.handle_tick,
            on_countdown_complete=self.handle_countdown_complete,
            on_focus_completed=self.handle_focus_completed,
            on_transition=self.handle_transition,
            on_auto_start=self.handle_auto_start,
        )

    def handle_tick(self, snapshot: FocusSnapshot) -> None:
        deps = self._dependencies
        deps.ui.publish_title(snapshot)
        deps.ui.publish_focus_update(
            snapshot,
            action=ACTION_TICK,
            accepted=True,
            reason=REASON_TICK,
        )

    def handle_countdown_complete(self, snapshot: FocusSnapshot) -> None:
        deps = self._dependencies
        deps.logger.debug("Countdown complete in mode %s", snapshot.mode)
        if deps.audio is not None:
            deps.audio.play_alarm()

    def handle_focus_completed(self, duration_minutes: int, label: str) -> None:
        recorder = self._dependencies.recorder
        if recorder is not None:
            recorder.record_completion(duration_minutes, label)

    def handle_transition(self, transition: FocusTransition) -> None:
        deps = self._dependencies
        deps.ui.publish_title(transition.snapshot)
        deps.ui.publish_focus_update(
            transition.snapshot,
            action=ACTION_COMPLETED,
            accepted=True,
            reason=REASON_COMPLETED,
            message=completion_text(transition),
        )

    def handle_auto_start(self, snapshot: FocusSnapshot) -> None:
        deps = self._dependencies
        deps.ui.publish_title(snapshot)
        deps.ui.publish_focus_update(
            snapshot,
            action=ACTION_AUTO_START,
            accepted=True,
            reason=REASON_AUTO_STARTED,
        )
