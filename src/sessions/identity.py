"""Identity providers that resolve the authenticated owner id."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from .errors import IdentityError


class IdentityProviderLike(Protocol):
    def current_owner_id(self) -> Optional[str]:
        ...


class GuestIdentityProvider:
    """No signed-in user; session recording is skipped."""

    def current_owner_id(self) -> Optional[str]:
        return None


class StaticIdentityProvider:
    def __init__(self, owner_id: str):
        owner_id = owner_id.strip()
        if not owner_id:
            raise IdentityError("owner_id cannot be empty")
        self._owner_id = owner_id

    def current_owner_id(self) -> Optional[str]:
        return self._owner_id


class SupabaseIdentityProvider:
    """Looks up the user behind an access token via the auth endpoint.

    The id is cached after the first successful lookup; a failed lookup is
    not cached so a later completion can retry.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: str,
        *,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if not access_token.strip():
            raise IdentityError("access_token cannot be empty")
        self._url = f"{base_url.rstrip('/')}/auth/v1/user"
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {access_token}",
        }
        self._timeout_seconds = timeout_seconds
        self._http = session or requests.Session()
        self._logger = logger or logging.getLogger("sessions.identity")
        self._owner_id: Optional[str] = None

    def current_owner_id(self) -> Optional[str]:
        if self._owner_id is not None:
            return self._owner_id

        try:
            response = self._http.get(
                self._url,
                headers=self._headers,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as error:
            raise IdentityError(f"Identity lookup failed: {error}") from error

        if response.status_code in (401, 403):
            self._logger.info("Access token rejected; continuing as guest")
            return None
        if response.status_code >= 400:
            raise IdentityError(f"Identity lookup failed with HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as error:
            raise IdentityError(f"Identity endpoint returned invalid JSON: {error}") from error

        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not isinstance(user_id, str) or not user_id:
            return None
        self._owner_id = user_id
        return user_id
