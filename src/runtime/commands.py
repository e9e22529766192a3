"""Dispatcher that applies UI commands to the timer, audio, and session history."""

from __future__ import annotations

import logging
from typing import Any, Optional

from audio import AudioCoordinator
from contracts.ui_protocol import (
    COMMAND_AUDIO_REJECTED,
    COMMAND_CHANGE_TRACK,
    COMMAND_CLEAR_SESSIONS,
    COMMAND_PAUSE,
    COMMAND_REFRESH_SESSIONS,
    COMMAND_RESET,
    COMMAND_SET_LABEL,
    COMMAND_SET_VOLUME,
    COMMAND_START,
    COMMAND_SWITCH_MODE,
    COMMAND_TOGGLE,
    COMMAND_TOGGLE_AUDIO,
    COMMAND_UPDATE_CONFIG,
)
from focus import FocusActionResult, FocusTimer, TimerConfigurationError
from focus.constants import ACTION_UPDATE_CONFIG, REASON_INVALID_CONFIG
from server import UICommand
from sessions import SessionRecorder

from .messages import rejection_text
from .ui import RuntimeUIPublisher


class RuntimeCommandDispatcher:
    """Routes browser commands to the components that own the state."""
    def __init__(
        self,
        *,
        logger: logging.Logger,
        timer: FocusTimer,
        ui: RuntimeUIPublisher,
        audio: Optional[AudioCoordinator] = None,
        recorder: Optional[SessionRecorder] = None,
    ):
        self._logger = logger
        self._timer = timer
        self._ui = ui
        self._audio = audio
        self._recorder = recorder

    def dispatch(self, command: UICommand) -> None:
        action = command.action
        arguments = command.arguments
        self._logger.debug("UI command: %s %s", action, arguments)

        if action == COMMAND_START:
            self._publish_result(self._timer.start())
        elif action == COMMAND_PAUSE:
            self._publish_result(self._timer.pause())
        elif action == COMMAND_TOGGLE:
            self._publish_result(self._timer.toggle())
        elif action == COMMAND_RESET:
            mode = arguments.get("mode")
            self._publish_result(self._timer.reset(mode if isinstance(mode, str) else None))
        elif action == COMMAND_SWITCH_MODE:
            mode = arguments.get("mode")
            self._publish_result(self._timer.switch_mode(mode if isinstance(mode, str) else ""))
        elif action == COMMAND_SET_LABEL:
            label = arguments.get("label")
            self._publish_result(self._timer.set_label(label if isinstance(label, str) else ""))
        elif action == COMMAND_UPDATE_CONFIG:
            self._update_config(arguments)
        elif action in (
            COMMAND_TOGGLE_AUDIO,
            COMMAND_CHANGE_TRACK,
            COMMAND_SET_VOLUME,
            COMMAND_AUDIO_REJECTED,
        ):
            self._handle_audio_command(action, arguments)
        elif action == COMMAND_REFRESH_SESSIONS:
            if self._recorder is not None:
                self._recorder.refresh()
        elif action == COMMAND_CLEAR_SESSIONS:
            if self._recorder is not None:
                self._recorder.clear()
            self._publish_result(self._timer.clear_cycles())
        else:
            self._logger.warning("Unsupported UI command: %s", action)

    def publish_audio_state(self) -> None:
        if self._audio is not None:
            self._ui.publish_audio_state(self._audio.state(), self._audio.tracks)

    def _update_config(self, arguments: dict[str, Any]) -> None:
        raw_settings = arguments.get("settings", arguments)
        if not isinstance(raw_settings, dict):
            raw_settings = {}

        try:
            config = self._timer.config.with_changes(raw_settings)
        except (TimerConfigurationError, TypeError) as error:
            self._logger.warning("Rejected timer settings: %s", error)
            self._ui.publish_error(str(error))
            self._ui.publish_focus_update(
                self._timer.snapshot(),
                action=ACTION_UPDATE_CONFIG,
                accepted=False,
                reason=REASON_INVALID_CONFIG,
                message=rejection_text(ACTION_UPDATE_CONFIG, REASON_INVALID_CONFIG),
            )
            return

        self._publish_result(self._timer.update_config(config))

    def _handle_audio_command(self, action: str, arguments: dict[str, Any]) -> None:
        audio = self._audio
        if audio is None:
            self._logger.debug("Audio disabled; ignoring %s", action)
            return

        try:
            if action == COMMAND_TOGGLE_AUDIO:
                audio.toggle()
            elif action == COMMAND_CHANGE_TRACK:
                index = arguments.get("index")
                if isinstance(index, bool) or not isinstance(index, int):
                    raise ValueError("track index must be an integer")
                audio.change_track(index)
            elif action == COMMAND_SET_VOLUME:
                volume = arguments.get("volume")
                if isinstance(volume, bool) or not isinstance(volume, (int, float)):
                    raise ValueError("volume must be a number")
                audio.set_volume(float(volume))
            elif action == COMMAND_AUDIO_REJECTED:
                audio.playback_rejected()
        except ValueError as error:
            self._logger.warning("Rejected audio command %s: %s", action, error)
            self._ui.publish_error(str(error))
            return

        self.publish_audio_state()

    def _publish_result(self, result: FocusActionResult) -> None:
        message = None
        if not result.accepted:
            message = rejection_text(result.action, result.reason)
        self._ui.publish_focus_update(
            result.snapshot,
            action=result.action,
            accepted=result.accepted,
            reason=result.reason,
            message=message,
        )
        self._ui.publish_title(result.snapshot)
