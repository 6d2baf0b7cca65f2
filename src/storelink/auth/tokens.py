"""Session token store.

Reads and writes the authorization artifacts attached to a session. The
account id is parsed from the access token's leading segment; the token's
signature is never checked here, the remote API rejecting bad tokens is the
only verification.
"""

import re
import time

from storelink.auth.models import PendingAuthorization, Session, TokenRecord, TokenResponse

_ACCOUNT_ID = re.compile(r"^\d+$")


def parse_account_id(access_token: str | None) -> str | None:
    """Extract the numeric account id prefix from an Etsy access token.

    Etsy access tokens look like ``<user_id>.<opaque>``.

    Returns:
        The prefix when it is all digits, otherwise None.
    """
    prefix = (access_token or "").split(".", 1)[0]
    return prefix if _ACCOUNT_ID.match(prefix) else None


def redact_token(token: str | None) -> str:
    """Short fingerprint of a token, safe for log lines."""
    if not token:
        return "<none>"
    return f"...{token[-4:]}" if len(token) > 12 else "***"


def get_pending(session: Session) -> PendingAuthorization | None:
    return session.pending_authorization


def set_pending(session: Session, state: str, verifier: str) -> PendingAuthorization:
    """Bind a new pending authorization, replacing any earlier one."""
    pending = PendingAuthorization(state=state, verifier=verifier)
    session.pending_authorization = pending
    return pending


def clear_pending(session: Session) -> None:
    session.pending_authorization = None


def get_tokens(session: Session) -> TokenRecord | None:
    return session.token_record


def get_account_id(session: Session) -> str | None:
    record = session.token_record
    return record.account_id if record else None


def set_tokens(session: Session, response: TokenResponse) -> TokenRecord:
    """Store a fresh token record built from a code-exchange response."""
    record = TokenRecord(
        access_token=response.access_token,
        refresh_token=response.refresh_token,
        expires_in=response.expires_in,
        token_type=response.token_type or "Bearer",
        account_id=parse_account_id(response.access_token),
        obtained_at=int(time.time()),
    )
    session.token_record = record
    return record


def merge_tokens(session: Session, response: TokenResponse) -> TokenRecord:
    """Merge a refresh response over the stored record.

    Fields present in the response win. A response without ``refresh_token``
    keeps the stored one.
    """
    current = session.token_record
    if current is None:
        return set_tokens(session, response)

    updates = response.model_dump(exclude_none=True)
    merged = current.model_copy(update=updates)
    merged.account_id = parse_account_id(merged.access_token)
    merged.obtained_at = int(time.time())
    session.token_record = merged
    return merged


def clear_tokens(session: Session) -> None:
    """Remove every authorization artifact from the session."""
    session.token_record = None
    session.pending_authorization = None
