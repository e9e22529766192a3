from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from audio import AmbientTrack, AudioState
from contracts.ui_protocol import (
    EVENT_AUDIO,
    EVENT_ERROR,
    EVENT_FOCUS,
    EVENT_SESSIONS,
    EVENT_TITLE,
)
from focus import FocusSnapshot
from sessions import SessionRecord

from .messages import countdown_title, focus_status_message


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class RuntimeUIPublisher:
    """Builds UI event payloads; silently drops them when no server runs."""

    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_focus_update(
        self,
        snapshot: FocusSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
        message: Optional[str] = None,
    ) -> None:
        payload: dict[str, Any] = {
            "action": action,
            "mode": snapshot.mode,
            "phase": snapshot.phase,
            "label": snapshot.label,
            "duration_seconds": snapshot.duration_seconds,
            "seconds_remaining": snapshot.seconds_remaining,
            "is_running": snapshot.is_running,
            "cycles": snapshot.cycles,
            "long_break_interval": snapshot.long_break_interval,
            "auto_start": snapshot.auto_start,
            "progress_percent": snapshot.progress_percent,
            "status_label": snapshot.status_label,
            "status_message": focus_status_message(snapshot),
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        if message:
            payload["message"] = message
        self.publish(EVENT_FOCUS, **payload)

    def publish_title(self, snapshot: FocusSnapshot) -> None:
        self.publish(
            EVENT_TITLE,
            title=countdown_title(snapshot),
            mode=snapshot.mode,
            seconds_remaining=snapshot.seconds_remaining,
        )

    def publish_audio_state(
        self,
        state: AudioState,
        tracks: Sequence[AmbientTrack],
    ) -> None:
        self.publish(
            EVENT_AUDIO,
            track_index=state.track_index,
            is_playing=state.is_playing,
            volume=state.volume,
            muted=not state.is_playing,
            tracks=[
                {"name": track.name, "url": track.url, "category": track.category}
                for track in tracks
            ],
        )

    def publish_sessions(self, records: Sequence[SessionRecord]) -> None:
        self.publish(
            EVENT_SESSIONS,
            sessions=[record.to_payload() for record in records],
        )

    def publish_error(self, message: str) -> None:
        self.publish(EVENT_ERROR, message=message)
