"""Google OAuth login URL, issued by the WordPress auth plugin."""

import logging

import httpx

from errors import OAuthUnavailableError
from services.wordpress import WordPressClient

logger = logging.getLogger(__name__)

GOOGLE_LOGIN_PATH = "/wp-json/eternitty/v1/auth/google/login"


async def get_google_auth_url(client: WordPressClient) -> dict:
    """Fetch a fresh auth URL and state. Not cached: state is single-use."""
    try:
        resp = await client.get(GOOGLE_LOGIN_PATH)
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Google OAuth URL generation error: %s", e)
        raise OAuthUnavailableError("Internal server error", status_code=500) from e

    if resp.is_success and data.get("auth_url"):
        return {"success": True, "auth_url": data["auth_url"], "state": data.get("state")}

    status = resp.status_code if not resp.is_success else 500
    raise OAuthUnavailableError(
        data.get("message") or "Failed to generate Google OAuth URL",
        status_code=status,
    )
