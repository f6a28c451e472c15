"""SMTP readiness as reported by the WordPress SMTP plugin."""

import logging

from errors import WordPressAPIError
from services.cache import CacheManager
from services.wordpress import WordPressClient

logger = logging.getLogger(__name__)

SMTP_CONFIG_PATH = "/wp-json/eternitty/v1/smtp-config"
SMTP_TTL_SECONDS = 60


async def get_smtp_status(client: WordPressClient, cache: CacheManager) -> dict:
    cached = cache.get("smtp:status")
    if cached is not None:
        return cached

    try:
        config = await client.get_json(SMTP_CONFIG_PATH)
    except WordPressAPIError as e:
        logger.warning("Error checking SMTP status: %s", e)
        return {
            "success": False,
            "message": "Unable to check SMTP status",
            "configured": False,
            "error": str(e),
        }

    if isinstance(config, dict) and config.get("enabled"):
        result = {
            "success": True,
            "message": "SMTP is configured and ready",
            "configured": True,
            "host": config.get("host"),
            "port": config.get("port"),
            "secure": config.get("secure"),
        }
    else:
        result = {"success": False, "message": "SMTP is not configured", "configured": False}

    cache.set("smtp:status", result, ttl=SMTP_TTL_SECONDS)
    return result
