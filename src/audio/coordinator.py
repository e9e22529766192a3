"""Ambient track selection, playback state, and the completion alarm."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .catalog import ALARM_VOLUME, AMBIENT_TRACKS, DEFAULT_VOLUME, AmbientTrack
from .errors import AudioPlaybackError
from .output import AlarmOutputLike, AmbientOutputLike


@dataclass(frozen=True)
class AudioState:
    track_index: int
    is_playing: bool
    volume: float


class AudioCoordinator:
    """Keeps exactly one ambient track selected and plays alarms on demand."""

    def __init__(
        self,
        ambient: AmbientOutputLike,
        *,
        alarm: Optional[AlarmOutputLike] = None,
        tracks: tuple[AmbientTrack, ...] = AMBIENT_TRACKS,
        track_index: int = 0,
        volume: float = DEFAULT_VOLUME,
        alarm_volume: float = ALARM_VOLUME,
        logger: Optional[logging.Logger] = None,
    ):
        if not tracks:
            raise ValueError("tracks cannot be empty")
        if not 0 <= track_index < len(tracks):
            raise ValueError(f"track_index must be in [0, {len(tracks) - 1}], got: {track_index}")
        self._ambient = ambient
        self._alarm = alarm
        self._tracks = tracks
        self._track_index = track_index
        self._is_playing = False
        self._volume = _clamp(volume)
        self._alarm_volume = _clamp(alarm_volume)
        self._logger = logger or logging.getLogger("audio")

    @property
    def tracks(self) -> tuple[AmbientTrack, ...]:
        return self._tracks

    @property
    def current_track(self) -> AmbientTrack:
        return self._tracks[self._track_index]

    def state(self) -> AudioState:
        return AudioState(
            track_index=self._track_index,
            is_playing=self._is_playing,
            volume=self._volume,
        )

    def toggle(self) -> AudioState:
        if self._is_playing:
            self._is_playing = False
            self._ambient.pause()
        else:
            self._start_playback()
        return self.state()

    def change_track(self, index: int) -> AudioState:
        if not 0 <= index < len(self._tracks):
            raise ValueError(f"track index must be in [0, {len(self._tracks) - 1}], got: {index}")
        self._track_index = index
        self._logger.info("Ambient track changed: %s", self.current_track.name)
        self._start_playback()
        return self.state()

    def set_volume(self, volume: float) -> AudioState:
        self._volume = _clamp(volume)
        self._ambient.set_volume(self._volume)
        return self.state()

    def playback_rejected(self) -> AudioState:
        """Revert to paused after the host refused to start playback."""
        if self._is_playing:
            self._logger.info("Ambient playback blocked by host; muted")
        self._is_playing = False
        return self.state()

    def play_alarm(self) -> None:
        if self._alarm is None:
            return
        try:
            self._alarm.play_alarm(self._alarm_volume)
        except AudioPlaybackError as error:
            self._logger.warning("Alarm playback failed: %s", error)

    def _start_playback(self) -> None:
        track = self.current_track
        try:
            self._ambient.play(track.url, self._volume)
        except AudioPlaybackError as error:
            self._logger.warning("Ambient playback failed for %s: %s", track.name, error)
            self._is_playing = False
            return
        self._is_playing = True


def _clamp(volume: float) -> float:
    return min(1.0, max(0.0, float(volume)))
