"""Typed application and request keys."""

import httpx
from aiohttp import web

from storelink.auth.flow import AuthorizationFlow
from storelink.sessions.base import SessionBackend
from storelink.settings import Settings

SETTINGS_KEY = web.AppKey("settings", Settings)
BACKEND_KEY = web.AppKey("session_backend", SessionBackend)
HTTP_KEY = web.AppKey("token_http_client", httpx.AsyncClient)
FLOW_KEY = web.AppKey("authorization_flow", AuthorizationFlow)

SESSION_KEY = "storelink.session"
