"""Favicon lookup against the WordPress site.

Tries the site icon settings first, then falls back to probing common
upload paths, and finally to a bundled default image.
"""

import logging

from errors import WordPressAPIError
from services.cache import CacheManager
from services.wordpress import WordPressClient

logger = logging.getLogger(__name__)

FAVICON_TTL_SECONDS = 300
DEFAULT_SITE_NAME = "Eternitty Headless WordPress"
FALLBACK_DESCRIPTION = "A modern, headless WordPress solution"
FALLBACK_PATH = "/wp-content/uploads/2025/09/logoipsum-370.png"
COMMON_FAVICON_PATHS = [
    "/favicon.ico",
    "/favicon.png",
    "/wp-content/uploads/favicon.png",
    "/wp-content/uploads/favicon.ico",
    "/wp-content/uploads/site-icon.png",
    "/wp-content/uploads/site-icon.ico",
]


async def _optional_json(client: WordPressClient, path: str) -> dict:
    try:
        data = await client.get_json(path)
    except WordPressAPIError as e:
        logger.warning("Could not fetch %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


async def _find_icon(client: WordPressClient, site_info: dict) -> str | None:
    settings = await _optional_json(client, "/wp-json/wp/v2/settings")
    if settings.get("site_icon_url"):
        return settings["site_icon_url"]

    if site_info.get("site_icon_url"):
        return site_info["site_icon_url"]

    options = await _optional_json(client, "/wp-json/wp/v2/options")
    if options.get("site_icon"):
        return client.url_for(f"/wp-content/uploads/{options['site_icon']}")

    for path in COMMON_FAVICON_PATHS:
        url = client.url_for(path)
        if await client.exists(url):
            return url
    return None


def fallback_favicon(client: WordPressClient) -> dict:
    return {
        "favicon": client.url_for(FALLBACK_PATH),
        "site_name": DEFAULT_SITE_NAME,
        "site_description": FALLBACK_DESCRIPTION,
        "error": "Using fallback favicon due to API error",
    }


async def resolve_favicon(client: WordPressClient, cache: CacheManager) -> dict:
    """Return {favicon, site_name, site_description} for the WordPress site."""
    cached = cache.get("favicon")
    if cached is not None:
        return cached

    try:
        site_info = await client.get_json("/wp-json/")
    except WordPressAPIError:
        logger.exception("Favicon lookup failed, using fallback")
        return fallback_favicon(client)
    if not isinstance(site_info, dict):
        site_info = {}

    favicon = await _find_icon(client, site_info)
    if favicon:
        logger.info("Found custom site icon: %s", favicon)
    else:
        favicon = client.url_for(FALLBACK_PATH)
        logger.info("Using fallback favicon: %s", favicon)

    result = {
        "favicon": favicon,
        "site_name": site_info.get("name") or DEFAULT_SITE_NAME,
        "site_description": site_info.get("description") or "",
    }
    cache.set("favicon", result, ttl=FAVICON_TTL_SECONDS)
    return result
