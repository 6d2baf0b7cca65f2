"""Exception hierarchy for storelink."""


class StorelinkError(Exception):
    """Base exception for all storelink errors."""


class SessionStoreError(StorelinkError):
    """Session backend failed to load or persist a session."""


class AuthError(StorelinkError):
    """Base exception for authentication errors."""


class InvalidStateError(AuthError):
    """Callback state or code missing, or state does not match the pending one."""


class NoRefreshTokenError(AuthError):
    """Refresh requested but the session holds no refresh token."""


class UnauthenticatedError(AuthError):
    """Session holds no usable access token."""


class RemoteUnavailableError(AuthError):
    """Network failure or timeout talking to the remote server."""


class TokenExchangeError(AuthError):
    """Remote token endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Token endpoint returned HTTP {status_code}")
