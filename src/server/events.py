"""Serialization of outbound UI events and parsing of inbound commands."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from contracts.ui_protocol import (
    COMMANDS,
    MESSAGE_COMMAND,
    STICKY_EVENT_ORDER,
    STICKY_EVENT_TYPES,
)


@dataclass(frozen=True)
class UICommand:
    """A user action sent by the browser."""
    action: str
    arguments: dict[str, Any] = field(default_factory=dict)


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def parse_command(raw: str | bytes) -> Optional[UICommand]:
    """Decode a websocket message into a command, or None if it is not one."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        message = json.loads(raw)
    except ValueError:
        return None

    if not isinstance(message, dict) or message.get("type") != MESSAGE_COMMAND:
        return None
    action = message.get("action")
    if not isinstance(action, str) or action not in COMMANDS:
        return None

    arguments = {
        key: value
        for key, value in message.items()
        if key not in ("type", "action")
    }
    return UICommand(action=action, arguments=arguments)


class StickyEventStore:
    """Thread-safe cache of sticky events replayed to new websocket clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
