"""aiohttp application factory."""

import logging
from collections.abc import AsyncIterator
from datetime import datetime, timezone

import httpx
from aiohttp import web

from storelink.auth.flow import AuthorizationFlow
from storelink.sessions import SessionBackend, create_backend
from storelink.settings import Settings, get_settings
from storelink.web import api_routes, auth_routes
from storelink.web.keys import BACKEND_KEY, FLOW_KEY, HTTP_KEY, SETTINGS_KEY
from storelink.web.middleware import session_middleware

logger = logging.getLogger(__name__)


async def health(request: web.Request) -> web.Response:
    return web.json_response({"ok": True, "time": datetime.now(timezone.utc).isoformat()})


async def _resources(app: web.Application) -> AsyncIterator[None]:
    """Connect the session backend and close outbound clients on shutdown."""
    backend = app[BACKEND_KEY]
    await backend.connect()
    logger.info("Session backend ready: %s", type(backend).__name__)
    try:
        yield
    finally:
        await app[HTTP_KEY].aclose()
        await backend.close()


def create_app(
    settings: Settings | None = None,
    backend: SessionBackend | None = None,
    http: httpx.AsyncClient | None = None,
) -> web.Application:
    """Build the web application.

    Args:
        settings: Application settings. Defaults to environment settings.
        backend: Session backend. Defaults to the one settings select.
        http: Client for token endpoint calls. Closed with the application.
    """
    settings = settings or get_settings()
    backend = backend or create_backend(settings)
    http = http or httpx.AsyncClient(timeout=settings.http_timeout)

    app = web.Application(middlewares=[session_middleware])
    app[SETTINGS_KEY] = settings
    app[BACKEND_KEY] = backend
    app[HTTP_KEY] = http
    app[FLOW_KEY] = AuthorizationFlow(settings, backend, http)
    app.cleanup_ctx.append(_resources)

    app.router.add_get("/health", health)
    app.router.add_routes(auth_routes.routes)
    app.router.add_routes(api_routes.routes)
    return app
