"""Fixed ambient track catalog and alarm sound."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AmbientTrack:
    name: str
    url: str
    category: str


AMBIENT_TRACKS: tuple[AmbientTrack, ...] = (
    AmbientTrack("Lofi Hip Hop (Stream)", "https://stream.zeno.fm/0r0xa792kwzuv", "Radio"),
    AmbientTrack(
        "Rain Sounds",
        "https://actions.google.com/sounds/v1/weather/rain_heavy_loud.ogg",
        "Nature",
    ),
    AmbientTrack(
        "Relaxing Piano",
        "https://cdn.pixabay.com/audio/2022/03/24/audio_3cb7ae3a96.mp3",
        "Music",
    ),
    AmbientTrack(
        "White Noise",
        "https://actions.google.com/sounds/v1/ambiences/white_noise.ogg",
        "Focus",
    ),
    AmbientTrack(
        "Forest Night",
        "https://actions.google.com/sounds/v1/nature/crickets_in_the_night_ambience.ogg",
        "Nature",
    ),
    AmbientTrack(
        "Cafe Ambience",
        "https://actions.google.com/sounds/v1/ambiences/coffee_shop.ogg",
        "Ambience",
    ),
)

ALARM_URL = "https://assets.mixkit.co/active_storage/sfx/2869/2869-preview.mp3"
ALARM_VOLUME = 0.4
DEFAULT_VOLUME = 0.4
