"""HTTP client factory for the Etsy API."""

import httpx

from storelink.auth.guard import require_authenticated
from storelink.auth.models import Session
from storelink.auth.provider import EtsyOAuth
from storelink.settings import Settings

def authorized_client(session: Session, settings: Settings) -> httpx.AsyncClient:
    """Get an httpx client authorized with the session's access token.

    A new client per call; callers close it (``async with``).

    Raises:
        UnauthenticatedError: Session holds no access token.
    """
    record = require_authenticated(session)
    return httpx.AsyncClient(
        base_url=EtsyOAuth.API_BASE_URL,
        timeout=settings.http_timeout,
        headers={
            "Authorization": f"Bearer {record.access_token}",
            "x-api-key": settings.etsy_api_key,
            "Content-Type": "application/json",
        },
    )
