"""Authenticated-access guard for routes that call the remote API."""

from storelink.auth.models import Session, TokenRecord
from storelink.exceptions import UnauthenticatedError


def require_authenticated(session: Session | None) -> TokenRecord:
    """Return the session's token record or refuse access.

    Never refreshes or validates the token remotely; a stale token surfaces
    when the remote API rejects it.

    Raises:
        UnauthenticatedError: No token record with a non-empty access token.
    """
    record = session.token_record if session is not None else None
    if record is None or not record.access_token:
        raise UnauthenticatedError("Not authenticated with Etsy")
    return record


def is_authenticated(session: Session | None) -> bool:
    try:
        require_authenticated(session)
    except UnauthenticatedError:
        return False
    return True
