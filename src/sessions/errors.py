class SessionError(Exception):
    """Base exception for focus-session persistence."""


class SessionStoreError(SessionError):
    """Raised when the row store rejects or fails a request."""


class IdentityError(SessionError):
    """Raised when the identity provider cannot be queried."""
