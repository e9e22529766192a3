"""Session record type and its mapping to row-store columns."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from .errors import SessionStoreError


@dataclass(frozen=True)
class SessionRecord:
    """One completed focus session owned by an authenticated user."""
    id: str
    owner_id: str
    duration_minutes: int
    label: str
    completed_at: datetime

    @classmethod
    def create(
        cls,
        *,
        owner_id: str,
        duration_minutes: int,
        label: str,
        now_fn: Optional[Callable[[], datetime]] = None,
    ) -> "SessionRecord":
        now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
        return cls(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            duration_minutes=int(duration_minutes),
            label=label,
            completed_at=now,
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.owner_id,
            "duration_minutes": self.duration_minutes,
            "task_name": self.label,
            "completed_at": self.completed_at.isoformat(),
        }

    def to_payload(self) -> dict[str, Any]:
        """JSON-friendly view used by UI events."""
        return {
            "id": self.id,
            "duration_minutes": self.duration_minutes,
            "label": self.label,
            "completed_at": self.completed_at.isoformat(),
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SessionRecord":
        try:
            completed_raw = str(row["completed_at"])
            completed_at = datetime.fromisoformat(completed_raw.replace("Z", "+00:00"))
            if completed_at.tzinfo is None:
                completed_at = completed_at.replace(tzinfo=timezone.utc)
            return cls(
                id=str(row["id"]),
                owner_id=str(row.get("user_id") or ""),
                duration_minutes=int(row["duration_minutes"]),
                label=str(row.get("task_name") or ""),
                completed_at=completed_at,
            )
        except (KeyError, TypeError, ValueError) as error:
            raise SessionStoreError(f"Malformed session row: {error}") from error
