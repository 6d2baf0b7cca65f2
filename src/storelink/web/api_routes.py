"""Etsy API forwarding routes, guarded by login_required."""

import json
import logging
from typing import Any

import httpx
from aiohttp import web

from storelink.auth.client import authorized_client
from storelink.auth.tokens import get_account_id
from storelink.web.keys import SETTINGS_KEY
from storelink.web.middleware import get_session, login_required

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()

DRAFT_LISTING_FIELDS = (
    "title",
    "description",
    "price",
    "who_made",
    "when_made",
    "is_supply",
    "taxonomy_id",
    "shipping_profile_id",
)


async def _forward(
    request: web.Request,
    method: str,
    path: str,
    error: str,
    *,
    params: dict[str, Any] | None = None,
    payload: dict[str, Any] | None = None,
    error_status: int = 500,
) -> web.Response:
    """Send one request to the Etsy API and relay its JSON body.

    Remote error bodies are logged, never relayed. A remote 401 is passed on
    so the browser knows to refresh.
    """
    settings = request.app[SETTINGS_KEY]
    async with authorized_client(get_session(request), settings) as client:
        try:
            response = await client.request(method, path, params=params, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("%s: HTTP %d %s", error, e.response.status_code, e.response.text)
            status = 401 if e.response.status_code == 401 else error_status
            return web.json_response({"error": error}, status=status)
        except httpx.TransportError as e:
            logger.error("%s: %s", error, e)
            return web.json_response({"error": error}, status=503)

    try:
        return web.json_response(response.json())
    except ValueError:
        logger.error("%s: unreadable response body (HTTP %d)", error, response.status_code)
        return web.json_response({"error": error}, status=502)


@routes.get("/api/me/shops")
@login_required
async def my_shops(request: web.Request) -> web.Response:
    """Shops owned by the authenticated account."""
    account_id = get_account_id(get_session(request))
    if account_id is None:
        return web.json_response({"error": "Unknown Etsy account; reconnect"}, status=400)
    return await _forward(request, "GET", f"application/users/{account_id}/shops", "Failed to load shops")


@routes.get("/api/shops/{shop_id}/listings/active")
@login_required
async def active_listings(request: web.Request) -> web.Response:
    shop_id = request.match_info["shop_id"]
    return await _forward(
        request,
        "GET",
        f"application/shops/{shop_id}/listings/active",
        "Failed to load listings",
        params={"limit": 25},
    )


@routes.post("/api/shops/{shop_id}/listings/draft")
@login_required
async def create_draft_listing(request: web.Request) -> web.Response:
    """Create a minimal draft listing from the posted fields."""
    shop_id = request.match_info["shop_id"]
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return web.json_response({"error": "Invalid JSON body"}, status=400)
    if not isinstance(body, dict):
        return web.json_response({"error": "Invalid JSON body"}, status=400)

    payload = {field: body.get(field) for field in DRAFT_LISTING_FIELDS}
    payload["state"] = "DRAFT"
    return await _forward(
        request,
        "POST",
        f"application/shops/{shop_id}/listings",
        "Failed to create draft listing",
        payload=payload,
        error_status=400,
    )


@routes.get("/api/shops/{shop_id}/receipts")
@login_required
async def receipts(request: web.Request) -> web.Response:
    """Paid receipts (orders) for a shop."""
    shop_id = request.match_info["shop_id"]
    return await _forward(
        request,
        "GET",
        f"application/shops/{shop_id}/receipts",
        "Failed to load receipts",
        params={"limit": 25, "was_paid": "true"},
    )
