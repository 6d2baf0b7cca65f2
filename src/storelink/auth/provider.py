"""Etsy OAuth provider configuration and token endpoint calls."""

import logging
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from storelink.auth.models import TokenResponse
from storelink.exceptions import RemoteUnavailableError, TokenExchangeError
from storelink.settings import Settings

logger = logging.getLogger(__name__)


class EtsyOAuth:
    """Etsy OAuth configuration constants."""

    AUTH_URL = "https://www.etsy.com/oauth/connect"
    TOKEN_URL = "https://api.etsy.com/v3/public/oauth/token"
    API_BASE_URL = "https://api.etsy.com/v3/"
    CHALLENGE_METHOD = "S256"


def build_auth_url(settings: Settings, state: str, code_challenge: str) -> str:
    """Build the OAuth authorization URL.

    Args:
        settings: Application settings (client id, redirect URI, scopes).
        state: Anti-forgery state bound to the session.
        code_challenge: PKCE code challenge (S256).

    Returns:
        Full authorization URL to redirect the browser to.
    """
    params = {
        "response_type": "code",
        "client_id": settings.etsy_api_key,
        "redirect_uri": settings.oauth_redirect_uri,
        "scope": settings.etsy_scopes,
        "state": state,
        "code_challenge": code_challenge,
        "code_challenge_method": EtsyOAuth.CHALLENGE_METHOD,
    }
    return f"{EtsyOAuth.AUTH_URL}?{urlencode(params)}"


async def _post_token(http: httpx.AsyncClient, form: dict[str, str]) -> TokenResponse:
    grant_type = form["grant_type"]
    try:
        response = await http.post(EtsyOAuth.TOKEN_URL, data=form)
    except httpx.TransportError as e:
        # Timeouts are transport errors too
        logger.error("Token endpoint unreachable (%s): %s", grant_type, e)
        raise RemoteUnavailableError(f"Token endpoint unreachable: {type(e).__name__}") from e

    if response.is_error:
        logger.error(
            "Token endpoint rejected %s grant: HTTP %d %s",
            grant_type,
            response.status_code,
            response.text,
        )
        raise TokenExchangeError(response.status_code, response.text)

    try:
        tokens = TokenResponse.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.error("Token endpoint returned an unreadable %s payload: %s", grant_type, e)
        raise TokenExchangeError(response.status_code, "unreadable token payload") from e

    if not tokens.access_token:
        logger.error("Token endpoint returned no access_token for %s grant", grant_type)
        raise TokenExchangeError(response.status_code, "missing access_token")
    return tokens


async def exchange_code_for_tokens(
    http: httpx.AsyncClient,
    settings: Settings,
    code: str,
    code_verifier: str,
) -> TokenResponse:
    """Exchange an authorization code for tokens.

    Raises:
        TokenExchangeError: Token endpoint answered with an error.
        RemoteUnavailableError: Token endpoint could not be reached.
    """
    return await _post_token(
        http,
        {
            "grant_type": "authorization_code",
            "client_id": settings.etsy_api_key,
            "redirect_uri": settings.oauth_redirect_uri,
            "code": code,
            "code_verifier": code_verifier,
        },
    )


async def refresh_access_token(
    http: httpx.AsyncClient,
    settings: Settings,
    refresh_token: str,
) -> TokenResponse:
    """Obtain a new access token with a refresh token.

    Raises:
        TokenExchangeError: Token endpoint answered with an error.
        RemoteUnavailableError: Token endpoint could not be reached.
    """
    return await _post_token(
        http,
        {
            "grant_type": "refresh_token",
            "client_id": settings.etsy_api_key,
            "refresh_token": refresh_token,
        },
    )
