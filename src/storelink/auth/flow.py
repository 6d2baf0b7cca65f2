"""Authorization flow controller.

Drives the PKCE authorization-code flow for one session at a time: start,
callback, refresh and logout. Every step awaits session persistence before
returning, so the caller may redirect or respond right away.
"""

import logging
import secrets

import httpx

from storelink.auth.models import Session
from storelink.auth.pkce import generate_pkce, generate_state
from storelink.auth.provider import build_auth_url, exchange_code_for_tokens, refresh_access_token
from storelink.auth.tokens import (
    clear_pending,
    clear_tokens,
    get_pending,
    get_tokens,
    merge_tokens,
    redact_token,
    set_pending,
    set_tokens,
)
from storelink.exceptions import InvalidStateError, NoRefreshTokenError
from storelink.sessions.base import SessionBackend
from storelink.settings import Settings

logger = logging.getLogger(__name__)


class AuthorizationFlow:
    """OAuth flow bound to a session backend and an outbound HTTP client."""

    def __init__(self, settings: Settings, backend: SessionBackend, http: httpx.AsyncClient):
        self.settings = settings
        self.backend = backend
        self.http = http

    async def start(self, session: Session) -> str:
        """Begin authorization and return the URL to redirect to.

        The pending state is persisted before the URL is returned; the remote
        server may call back before a lazily saved session would land.
        """
        state = generate_state()
        verifier, challenge = generate_pkce()
        set_pending(session, state, verifier)

        await self.backend.save(session)
        logger.info("Started authorization for session %s", session.session_id[:8])

        return build_auth_url(self.settings, state=state, code_challenge=challenge)

    async def callback(self, session: Session, code: str | None, state: str | None) -> None:
        """Complete authorization with the code returned by the remote server.

        Raises:
            InvalidStateError: No pending authorization, missing code or state,
                or state mismatch. Nothing is sent to the remote server.
            TokenExchangeError: Token endpoint rejected the exchange.
            RemoteUnavailableError: Token endpoint could not be reached.
        """
        pending = get_pending(session)
        if pending is None:
            logger.warning("Callback for session %s without pending authorization", session.session_id[:8])
            raise InvalidStateError("No pending authorization")
        if not code or not state:
            logger.warning("Callback for session %s missing code or state", session.session_id[:8])
            raise InvalidStateError("Missing code or state")
        if not secrets.compare_digest(pending.state.encode(), state.encode()):
            logger.warning("State mismatch for session %s", session.session_id[:8])
            raise InvalidStateError("State mismatch")

        tokens = await exchange_code_for_tokens(
            self.http,
            self.settings,
            code=code,
            code_verifier=pending.verifier,
        )

        record = set_tokens(session, tokens)
        clear_pending(session)
        await self.backend.save(session)
        logger.info(
            "Authorized session %s for account %s",
            session.session_id[:8],
            record.account_id or "<unknown>",
        )

    async def refresh(self, session: Session) -> dict:
        """Refresh the access token and return redacted token metadata.

        Raises:
            NoRefreshTokenError: Session holds no refresh token.
            TokenExchangeError: Token endpoint rejected the refresh.
            RemoteUnavailableError: Token endpoint could not be reached.
        """
        record = get_tokens(session)
        if record is None or not record.refresh_token:
            raise NoRefreshTokenError("No refresh token")

        tokens = await refresh_access_token(self.http, self.settings, record.refresh_token)

        merged = merge_tokens(session, tokens)
        await self.backend.save(session)
        logger.info(
            "Refreshed tokens for session %s (access token %s)",
            session.session_id[:8],
            redact_token(merged.access_token),
        )

        return merged.redacted()

    async def logout(self, session: Session) -> None:
        """Drop all authorization state and remove the stored session. Idempotent."""
        clear_tokens(session)
        # A session never written has nothing to remove
        if session.persisted:
            await self.backend.delete(session)
            logger.info("Logged out session %s", session.session_id[:8])

    @staticmethod
    def status(session: Session) -> dict:
        """Authorization status without any token material."""
        record = get_tokens(session)
        if record is None or not record.access_token:
            return {"authenticated": False, "account_id": None, "expires_at": None, "expired": None}
        return {
            "authenticated": True,
            "account_id": record.account_id,
            "expires_at": record.expires_at,
            "expired": record.is_expired(),
        }
