"""Audio outputs: browser-forwarded ambient/alarm playback and a local chime."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import numpy as np

from contracts.ui_protocol import EVENT_ALARM, EVENT_AUDIO_COMMAND

from .catalog import ALARM_URL
from .errors import AudioPlaybackError


class EventPublisherLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class AmbientOutputLike(Protocol):
    """Looping background audio sink."""
    def play(self, url: str, volume: float) -> None:
        ...

    def pause(self) -> None:
        ...

    def set_volume(self, volume: float) -> None:
        ...


class AlarmOutputLike(Protocol):
    def play_alarm(self, volume: float) -> None:
        ...


class UIAmbientOutput:
    """Forwards ambient playback commands to the connected browser.

    The browser owns the actual audio element; an autoplay refusal comes
    back later as an `audio_rejected` command.
    """

    def __init__(self, publisher: EventPublisherLike):
        self._publisher = publisher

    def play(self, url: str, volume: float) -> None:
        self._publisher.publish(EVENT_AUDIO_COMMAND, command="play", url=url, volume=volume)

    def pause(self) -> None:
        self._publisher.publish(EVENT_AUDIO_COMMAND, command="pause")

    def set_volume(self, volume: float) -> None:
        self._publisher.publish(EVENT_AUDIO_COMMAND, command="volume", volume=volume)


class UIAlarmOutput:
    def __init__(self, publisher: EventPublisherLike, *, url: str = ALARM_URL):
        self._publisher = publisher
        self._url = url

    def play_alarm(self, volume: float) -> None:
        self._publisher.publish(EVENT_ALARM, url=self._url, volume=volume)


class SoundDeviceAlarmOutput:
    """Plays a short synthesized chime through a local sounddevice output."""

    def __init__(
        self,
        output_device_index: Optional[int] = None,
        *,
        sample_rate_hz: int = 22050,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._sample_rate_hz = sample_rate_hz
        self._logger = logger or logging.getLogger(__name__)
        self._chime = build_chime(sample_rate_hz)
        self._sd = _load_sounddevice()

    def play_alarm(self, volume: float) -> None:
        wav = (self._chime * float(np.clip(volume, 0.0, 1.0))).astype(np.float32)
        try:
            self._sd.play(
                wav,
                samplerate=self._sample_rate_hz,
                device=self._output_device_index,
                blocking=False,
            )
        except Exception as error:
            raise AudioPlaybackError(f"Alarm playback failed: {error}") from error
        self._logger.debug("Alarm chime started (%d samples)", len(wav))


def build_chime(
    sample_rate_hz: int,
    *,
    frequencies_hz: tuple[float, ...] = (880.0, 660.0, 880.0),
    note_seconds: float = 0.18,
    gap_seconds: float = 0.06,
) -> np.ndarray:
    """Build a mono float32 chime of short decaying sine notes."""
    if sample_rate_hz <= 0:
        raise ValueError("sample_rate_hz must be greater than zero")

    note_samples = int(sample_rate_hz * note_seconds)
    gap = np.zeros(int(sample_rate_hz * gap_seconds), dtype=np.float32)
    t = np.arange(note_samples, dtype=np.float32) / sample_rate_hz
    envelope = np.exp(-6.0 * t / note_seconds).astype(np.float32)

    parts: list[np.ndarray] = []
    for frequency in frequencies_hz:
        parts.append((np.sin(2.0 * np.pi * frequency * t) * envelope).astype(np.float32))
        parts.append(gap)
    return np.concatenate(parts).astype(np.float32)


def _load_sounddevice():
    try:
        import sounddevice
    except (ImportError, OSError) as error:  # PortAudio may be missing on headless hosts
        raise AudioPlaybackError(f"sounddevice is unavailable: {error}") from error
    return sounddevice
