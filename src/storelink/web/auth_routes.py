"""OAuth routes: login, callback, refresh, logout and status."""

import logging

from aiohttp import hdrs, web

from storelink.exceptions import (
    InvalidStateError,
    NoRefreshTokenError,
    RemoteUnavailableError,
    SessionStoreError,
    TokenExchangeError,
)
from storelink.web.keys import FLOW_KEY
from storelink.web.middleware import get_session

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()


def _redirect(location: str) -> web.Response:
    # Returned rather than raised so session_middleware can attach the cookie
    return web.Response(status=302, headers={hdrs.LOCATION: location})


@routes.get("/auth/login")
async def login(request: web.Request) -> web.Response:
    """Start OAuth (PKCE) and redirect to Etsy."""
    flow = request.app[FLOW_KEY]
    try:
        url = await flow.start(get_session(request))
    except SessionStoreError as e:
        logger.error("Session save failed before authorization redirect: %s", e)
        return web.Response(status=500, text="Session error")
    return _redirect(url)


@routes.get("/auth/callback")
async def callback(request: web.Request) -> web.Response:
    """Handle the redirect back from Etsy."""
    flow = request.app[FLOW_KEY]
    try:
        await flow.callback(
            get_session(request),
            code=request.query.get("code"),
            state=request.query.get("state"),
        )
    except InvalidStateError:
        return web.Response(status=400, text="Invalid OAuth state.")
    except TokenExchangeError:
        return web.Response(status=500, text="OAuth error. Check server logs.")
    except RemoteUnavailableError:
        return web.Response(status=503, text="Etsy is unavailable. Please try again.")
    except SessionStoreError as e:
        logger.error("Session save failed after token exchange: %s", e)
        return web.Response(status=500, text="Session save error")
    return _redirect("/")


@routes.post("/auth/refresh")
async def refresh(request: web.Request) -> web.Response:
    """Refresh the access token; token values are redacted in the response."""
    flow = request.app[FLOW_KEY]
    try:
        tokens = await flow.refresh(get_session(request))
    except NoRefreshTokenError:
        return web.json_response({"error": "No refresh token"}, status=400)
    except RemoteUnavailableError:
        return web.json_response({"error": "Refresh failed"}, status=503)
    except (TokenExchangeError, SessionStoreError) as e:
        logger.error("Refresh failed: %s", e)
        return web.json_response({"error": "Refresh failed"}, status=500)
    return web.json_response({"ok": True, "tokens": tokens})


@routes.post("/auth/logout")
async def logout(request: web.Request) -> web.Response:
    flow = request.app[FLOW_KEY]
    try:
        await flow.logout(get_session(request))
    except SessionStoreError as e:
        logger.error("Logout failed: %s", e)
        return web.json_response({"error": "Logout failed"}, status=500)
    return web.json_response({"ok": True})


@routes.get("/auth/status")
async def status(request: web.Request) -> web.Response:
    return web.json_response(request.app[FLOW_KEY].status(get_session(request)))
