class AudioPlaybackError(Exception):
    """Raised when an audio output refuses or fails to start playback."""
