"""PostgREST-backed row store for focus-session records."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from .errors import SessionStoreError
from .records import SessionRecord

DEFAULT_TABLE = "focus_sessions"


class SessionStoreLike(Protocol):
    """Persistence surface required by the session recorder."""
    def insert(self, record: SessionRecord) -> None:
        ...

    def recent(self, *, limit: int) -> list[SessionRecord]:
        ...


class RestSessionStore:
    """Talks to a hosted Postgres REST endpoint (Supabase style)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        access_token: Optional[str] = None,
        table: str = DEFAULT_TABLE,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if not base_url.strip():
            raise SessionStoreError("Row store URL cannot be empty")
        if not api_key.strip():
            raise SessionStoreError("Row store API key cannot be empty")
        if not table.strip():
            raise SessionStoreError("Row store table cannot be empty")

        self._endpoint = f"{base_url.rstrip('/')}/rest/v1/{table.strip()}"
        self._timeout_seconds = timeout_seconds
        self._http = session or requests.Session()
        self._logger = logger or logging.getLogger("sessions.store")
        self._http.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {access_token or api_key}",
                "Content-Type": "application/json",
            }
        )

    def insert(self, record: SessionRecord) -> None:
        response = self._request(
            "POST",
            json=record.to_row(),
            headers={"Prefer": "return=minimal"},
        )
        self._logger.debug("Inserted session %s (status=%s)", record.id, response.status_code)

    def recent(self, *, limit: int = 5) -> list[SessionRecord]:
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got: {limit}")
        response = self._request(
            "GET",
            params={
                "select": "*",
                "order": "completed_at.desc",
                "limit": str(limit),
            },
        )
        try:
            rows = response.json()
        except ValueError as error:
            raise SessionStoreError(f"Row store returned invalid JSON: {error}") from error
        if not isinstance(rows, list):
            raise SessionStoreError("Row store returned a non-list payload")
        return [SessionRecord.from_row(row) for row in rows]

    def ping(self) -> bool:
        """Issue a lightweight read so the hosted project registers activity."""
        try:
            self._request("GET", params={"select": "id", "limit": "1"})
        except SessionStoreError as error:
            self._logger.warning("Row store ping failed: %s", error)
            return False
        return True

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, **kwargs) -> requests.Response:
        try:
            response = self._http.request(
                method,
                self._endpoint,
                timeout=self._timeout_seconds,
                **kwargs,
            )
        except requests.RequestException as error:
            raise SessionStoreError(f"Row store request failed: {error}") from error

        if response.status_code >= 400:
            raise SessionStoreError(
                f"Row store {method} failed with HTTP {response.status_code}: "
                f"{response.text[:200]}"
            )
        return response
