"""Authentication data models."""

import secrets
import time

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

REDACTED = "***redacted***"


class PendingAuthorization(BaseModel):
    """OAuth values bound to a session between flow start and callback."""

    state: str
    verifier: str
    created_at: int = Field(default_factory=lambda: int(time.time()))


class TokenResponse(BaseModel):
    """Token endpoint payload, shared by code exchange and refresh."""

    model_config = ConfigDict(extra="ignore")

    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str | None = None


class TokenRecord(BaseModel):
    """Tokens held by an authorized session."""

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "Bearer"
    account_id: str | None = None
    obtained_at: int = Field(default_factory=lambda: int(time.time()))

    @property
    def expires_at(self) -> int | None:
        if self.expires_in is None:
            return None
        return self.obtained_at + self.expires_in

    def is_expired(self, buffer_seconds: int = 0) -> bool:
        """Check if the access token is expired or expiring soon.

        A record without ``expires_in`` never reports itself as expired; the
        remote API rejecting the token is the authority in that case.
        """
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return time.time() >= (expires_at - buffer_seconds)

    def redacted(self) -> dict:
        """Token metadata safe to return to a browser."""
        data = self.model_dump()
        data["access_token"] = REDACTED
        if data.get("refresh_token"):
            data["refresh_token"] = REDACTED
        data["expires_at"] = self.expires_at
        return data


class Session(BaseModel):
    """Server-side session state addressed by the session cookie."""

    session_id: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    pending_authorization: PendingAuthorization | None = None
    token_record: TokenRecord | None = None

    _persisted: bool = PrivateAttr(default=False)
    _discarded: bool = PrivateAttr(default=False)

    @property
    def persisted(self) -> bool:
        """Whether the session has been written to its backend."""
        return self._persisted

    @property
    def discarded(self) -> bool:
        """Whether the session was removed from its backend during this request."""
        return self._discarded

    def mark_persisted(self) -> None:
        self._persisted = True
        self._discarded = False

    def mark_discarded(self) -> None:
        self._persisted = False
        self._discarded = True
