"""Shared test fixtures."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from storelink.auth.flow import AuthorizationFlow
from storelink.auth.models import Session, TokenRecord
from storelink.sessions.memory import MemorySessionBackend
from storelink.settings import Settings


class TokenEndpoint:
    """Scripted stand-in for the Etsy token endpoint."""

    def __init__(self) -> None:
        self.replies: list[httpx.Response | Exception] = []
        self.requests: list[httpx.Request] = []

    def reply(self, status: int = 200, body: dict | str | None = None) -> None:
        if isinstance(body, dict):
            self.replies.append(httpx.Response(status, json=body))
        else:
            self.replies.append(httpx.Response(status, text=body or ""))

    def fail(self, exc: Exception) -> None:
        self.replies.append(exc)

    def forms(self) -> list[dict[str, str]]:
        """Form bodies of the requests received, one value per field."""
        return [
            {k: v[0] for k, v in parse_qs(r.content.decode()).items()}
            for r in self.requests
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            return httpx.Response(500, text=json.dumps({"error": "unexpected call"}))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(
        _env_file=None,
        etsy_api_key="test-api-key",
        oauth_redirect_uri="http://localhost:4000/auth/callback",
        etsy_scopes="shops_r listings_r",
        session_max_age=3600,
    )


@pytest.fixture
def backend() -> MemorySessionBackend:
    return MemorySessionBackend(ttl=3600)


@pytest.fixture
def token_endpoint() -> TokenEndpoint:
    return TokenEndpoint()


@pytest.fixture
def token_http(token_endpoint) -> httpx.AsyncClient:
    """httpx client whose requests are answered by token_endpoint."""
    return httpx.AsyncClient(transport=httpx.MockTransport(token_endpoint))


@pytest.fixture
def flow(settings, backend, token_http) -> AuthorizationFlow:
    return AuthorizationFlow(settings, backend, token_http)


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def authorized_session() -> Session:
    """Session holding a token record for account 123."""
    return Session(
        token_record=TokenRecord(
            access_token="123.live-access-token",
            refresh_token="r1",
            expires_in=3600,
            token_type="Bearer",
            account_id="123",
        )
    )
