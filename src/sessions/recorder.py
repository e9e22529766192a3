"""Best-effort persistence of completed focus sessions."""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from .errors import IdentityError, SessionStoreError
from .identity import GuestIdentityProvider, IdentityProviderLike
from .records import SessionRecord
from .store import SessionStoreLike

DEFAULT_HISTORY_LIMIT = 5


class SessionRecorder:
    """Writes one record per completed focus session and keeps recent history.

    Failures never propagate: a session that cannot be stored is logged and
    dropped. When an executor is given, store calls run on it so the caller
    never waits on the network.
    """

    def __init__(
        self,
        store: Optional[SessionStoreLike],
        *,
        identity: Optional[IdentityProviderLike] = None,
        executor: Optional[concurrent.futures.Executor] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        on_history: Optional[Callable[[list[SessionRecord]], None]] = None,
        now_fn: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if history_limit < 1:
            raise ValueError(f"history_limit must be >= 1, got: {history_limit}")
        self._store = store
        self._identity = identity or GuestIdentityProvider()
        self._executor = executor
        self._history_limit = history_limit
        self._on_history = on_history
        self._now_fn = now_fn
        self._logger = logger or logging.getLogger("sessions")
        self._lock = threading.Lock()
        self._recent: list[SessionRecord] = []

    @property
    def recent(self) -> list[SessionRecord]:
        with self._lock:
            return list(self._recent)

    def set_history_listener(self, listener: Optional[Callable[[list[SessionRecord]], None]]) -> None:
        self._on_history = listener

    def record_completion(self, duration_minutes: int, label: str) -> None:
        self._submit(self._record_completion, duration_minutes, label)

    def refresh(self) -> None:
        self._submit(self._refresh)

    def clear(self) -> None:
        with self._lock:
            self._recent = []
        self._publish_history([])

    def _submit(self, fn: Callable[..., None], *args) -> None:
        if self._executor is None:
            fn(*args)
            return
        try:
            future = self._executor.submit(fn, *args)
        except RuntimeError as error:
            self._logger.warning("Session worker unavailable: %s", error)
            return
        future.add_done_callback(self._log_worker_failure)

    def _record_completion(self, duration_minutes: int, label: str) -> None:
        if self._store is None:
            self._logger.debug("No session store configured; skipping record")
            return

        try:
            owner_id = self._identity.current_owner_id()
        except IdentityError as error:
            self._logger.warning("Could not resolve session owner: %s", error)
            return
        if not owner_id:
            self._logger.debug("No authenticated owner; focus session not recorded")
            return

        record = SessionRecord.create(
            owner_id=owner_id,
            duration_minutes=duration_minutes,
            label=label,
            now_fn=self._now_fn,
        )
        try:
            self._store.insert(record)
        except SessionStoreError as error:
            self._logger.warning("Failed to record focus session: %s", error)
            return

        self._logger.info(
            "Recorded focus session: %s min label=%s",
            record.duration_minutes,
            record.label,
        )
        self._refresh()

    def _refresh(self) -> None:
        if self._store is None:
            return
        try:
            records = self._store.recent(limit=self._history_limit)
        except SessionStoreError as error:
            self._logger.warning("Failed to load recent focus sessions: %s", error)
            return

        ordered = sorted(records, key=lambda item: item.completed_at, reverse=True)
        ordered = ordered[: self._history_limit]
        with self._lock:
            self._recent = ordered
        self._publish_history(list(ordered))

    def _publish_history(self, records: list[SessionRecord]) -> None:
        if self._on_history is None:
            return
        try:
            self._on_history(records)
        except Exception as error:
            self._logger.error("Session history listener failed: %s", error, exc_info=True)

    def _log_worker_failure(self, future: concurrent.futures.Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.error("Session worker failed: %s", error, exc_info=error)
