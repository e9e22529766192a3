"""Ambient audio and alarm playback."""

from .catalog import ALARM_URL, ALARM_VOLUME, AMBIENT_TRACKS, DEFAULT_VOLUME, AmbientTrack
from .coordinator import AudioCoordinator, AudioState
from .errors import AudioPlaybackError
from .output import (
    SoundDeviceAlarmOutput,
    UIAlarmOutput,
    UIAmbientOutput,
)

__all__ = [
    "ALARM_URL",
    "ALARM_VOLUME",
    "AMBIENT_TRACKS",
    "DEFAULT_VOLUME",
    "AmbientTrack",
    "AudioCoordinator",
    "AudioPlaybackError",
    "AudioState",
    "SoundDeviceAlarmOutput",
    "UIAlarmOutput",
    "UIAmbientOutput",
]
