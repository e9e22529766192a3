"""Mode, phase, action, and reason constants used by focus-timer logic."""

from __future__ import annotations

MODE_FOCUS = "focus"
MODE_SHORT_BREAK = "shortBreak"
MODE_LONG_BREAK = "longBreak"

MODES: tuple[str, ...] = (MODE_FOCUS, MODE_SHORT_BREAK, MODE_LONG_BREAK)
BREAK_MODES: frozenset[str] = frozenset({MODE_SHORT_BREAK, MODE_LONG_BREAK})

MODE_LABELS: dict[str, str] = {
    MODE_FOCUS: "Focus",
    MODE_SHORT_BREAK: "Short Break",
    MODE_LONG_BREAK: "Long Break",
}

PHASE_IDLE = "idle"
PHASE_RUNNING = "running"
PHASE_PAUSED = "paused"
PHASE_COMPLETING = "completing"

DEFAULT_FOCUS_MINUTES = 60
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 10
DEFAULT_LONG_BREAK_INTERVAL = 3
DEFAULT_AUTO_START_DELAY_SECONDS = 1.5
DEFAULT_SESSION_LABEL = "Deep Work"
MAX_LABEL_LENGTH = 120

TICK_INTERVAL_SECONDS = 1.0

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_RESET = "reset"
ACTION_SWITCH_MODE = "switch_mode"
ACTION_SET_LABEL = "set_label"
ACTION_UPDATE_CONFIG = "update_config"
ACTION_CLEAR_SESSIONS = "clear_sessions"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"
ACTION_AUTO_START = "auto_start"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_SWITCHED = "switched"
REASON_UPDATED = "updated"
REASON_CLEARED = "cleared"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_NOTHING_REMAINING = "nothing_remaining"
REASON_UNKNOWN_MODE = "unknown_mode"
REASON_INVALID_CONFIG = "invalid_config"
REASON_TICK = "tick"
REASON_COMPLETED = "completed"
REASON_AUTO_STARTED = "auto_started"
REASON_STARTUP = "startup"
