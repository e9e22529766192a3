"""Focus-session persistence: records, row store, identity, recorder."""

from .errors import IdentityError, SessionError, SessionStoreError
from .identity import (
    GuestIdentityProvider,
    IdentityProviderLike,
    StaticIdentityProvider,
    SupabaseIdentityProvider,
)
from .recorder import DEFAULT_HISTORY_LIMIT, SessionRecorder
from .records import SessionRecord
from .store import DEFAULT_TABLE, RestSessionStore, SessionStoreLike

__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "DEFAULT_TABLE",
    "GuestIdentityProvider",
    "IdentityError",
    "IdentityProviderLike",
    "RestSessionStore",
    "SessionError",
    "SessionRecord",
    "SessionRecorder",
    "SessionStoreError",
    "SessionStoreLike",
    "StaticIdentityProvider",
    "SupabaseIdentityProvider",
]
