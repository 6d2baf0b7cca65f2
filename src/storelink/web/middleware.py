"""Session cookie middleware and the login_required route guard."""

import functools
import logging
from collections.abc import Awaitable, Callable

from aiohttp import web

from storelink.auth.guard import require_authenticated
from storelink.auth.models import Session
from storelink.exceptions import SessionStoreError, UnauthenticatedError
from storelink.web.keys import BACKEND_KEY, SESSION_KEY, SETTINGS_KEY

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def get_session(request: web.Request) -> Session:
    """Session attached to the request by session_middleware."""
    return request[SESSION_KEY]


@web.middleware
async def session_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Load the cookie-addressed session and issue the cookie once it is saved.

    Sessions that were never persisted get no cookie.
    """
    settings = request.app[SETTINGS_KEY]
    backend = request.app[BACKEND_KEY]

    try:
        session = await backend.load(request.cookies.get(settings.session_cookie_name))
    except SessionStoreError as e:
        logger.error("Session load failed: %s", e)
        return web.Response(status=500, text="Session error")

    if session is None:
        session = Session()
    request[SESSION_KEY] = session

    response = await handler(request)

    if session.persisted:
        response.set_cookie(
            settings.session_cookie_name,
            session.session_id,
            max_age=settings.session_max_age,
            path="/",
            httponly=True,
            samesite="Lax",
            secure=settings.cookie_secure,
        )
    elif session.discarded:
        response.del_cookie(settings.session_cookie_name, path="/")
    return response


def login_required(handler: Handler) -> Handler:
    """Reject requests whose session holds no access token with 401."""

    @functools.wraps(handler)
    async def wrapper(request: web.Request) -> web.StreamResponse:
        try:
            require_authenticated(get_session(request))
        except UnauthenticatedError:
            return web.json_response({"error": "Not authenticated with Etsy"}, status=401)
        return await handler(request)

    return wrapper
