"""Web UI websocket event, command, and sticky-replay constants."""

from __future__ import annotations

# Outbound websocket event types
EVENT_HELLO = "hello"
EVENT_FOCUS = "focus"
EVENT_TITLE = "title"
EVENT_AUDIO = "audio"
EVENT_AUDIO_COMMAND = "audio_command"
EVENT_ALARM = "alarm"
EVENT_SESSIONS = "sessions"
EVENT_ERROR = "error"

# Inbound message type sent by the browser
MESSAGE_COMMAND = "command"

COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_TOGGLE = "toggle"
COMMAND_RESET = "reset"
COMMAND_SWITCH_MODE = "switch_mode"
COMMAND_SET_LABEL = "set_label"
COMMAND_UPDATE_CONFIG = "update_config"
COMMAND_TOGGLE_AUDIO = "toggle_audio"
COMMAND_CHANGE_TRACK = "change_track"
COMMAND_SET_VOLUME = "set_volume"
COMMAND_AUDIO_REJECTED = "audio_rejected"
COMMAND_REFRESH_SESSIONS = "refresh_sessions"
COMMAND_CLEAR_SESSIONS = "clear_sessions"

COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_TOGGLE,
        COMMAND_RESET,
        COMMAND_SWITCH_MODE,
        COMMAND_SET_LABEL,
        COMMAND_UPDATE_CONFIG,
        COMMAND_TOGGLE_AUDIO,
        COMMAND_CHANGE_TRACK,
        COMMAND_SET_VOLUME,
        COMMAND_AUDIO_REJECTED,
        COMMAND_REFRESH_SESSIONS,
        COMMAND_CLEAR_SESSIONS,
    }
)

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_FOCUS,
        EVENT_TITLE,
        EVENT_AUDIO,
        EVENT_SESSIONS,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_FOCUS,
    EVENT_TITLE,
    EVENT_AUDIO,
    EVENT_SESSIONS,
)
