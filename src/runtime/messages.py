"""Display text for the countdown surface and focus status updates."""

from __future__ import annotations

from focus import FocusSnapshot, FocusTransition
from focus.constants import (
    MODE_FOCUS,
    MODE_LABELS,
    MODE_LONG_BREAK,
    PHASE_COMPLETING,
    PHASE_PAUSED,
    PHASE_RUNNING,
    REASON_ALREADY_RUNNING,
    REASON_INVALID_CONFIG,
    REASON_NOT_RUNNING,
    REASON_UNKNOWN_MODE,
)


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def mode_label(mode: str) -> str:
    return MODE_LABELS.get(mode, mode)


def countdown_title(snapshot: FocusSnapshot) -> str:
    """Title shown by the host while the countdown runs, e.g. `24:59 | Focus`."""
    return f"{format_duration(snapshot.seconds_remaining)} | {mode_label(snapshot.mode)}"


def focus_status_message(snapshot: FocusSnapshot) -> str:
    remaining = format_duration(snapshot.seconds_remaining)
    label = mode_label(snapshot.mode)
    if snapshot.phase == PHASE_RUNNING:
        if snapshot.mode == MODE_FOCUS and snapshot.label:
            return f"{label}: {snapshot.label} ({remaining} remaining)"
        return f"{label} ({remaining} remaining)"
    if snapshot.phase == PHASE_PAUSED:
        return f"{label} paused ({remaining} remaining)"
    if snapshot.phase == PHASE_COMPLETING:
        return f"{label} starting shortly"
    return f"Ready for {label.lower()}"


def completion_text(transition: FocusTransition) -> str:
    if transition.completed_mode == MODE_FOCUS:
        if transition.next_mode == MODE_LONG_BREAK:
            return f"Focus session complete ({transition.cycles} cycles). Take a long break."
        return "Focus session complete. Time for a short break."
    return "Break is over. Back to focus."


def rejection_text(action: str, reason: str) -> str:
    if reason == REASON_ALREADY_RUNNING:
        return "The timer is already running."
    if reason == REASON_NOT_RUNNING:
        return "The timer is not running."
    if reason == REASON_UNKNOWN_MODE:
        return "Unknown timer mode."
    if reason == REASON_INVALID_CONFIG:
        return "Those timer settings are not valid."
    return f"Cannot {action.replace('_', ' ')} right now."
