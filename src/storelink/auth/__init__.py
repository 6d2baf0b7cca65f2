"""Authorization handshake and token lifecycle for Etsy sessions."""

from storelink.auth.client import authorized_client
from storelink.auth.guard import is_authenticated, require_authenticated
from storelink.auth.models import PendingAuthorization, Session, TokenRecord, TokenResponse

__all__ = [
    "PendingAuthorization",
    "Session",
    "TokenRecord",
    "TokenResponse",
    "authorized_client",
    "is_authenticated",
    "require_authenticated",
]
