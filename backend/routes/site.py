"""Site-level proxy routes: favicon, Google OAuth URL, SMTP status."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from dependencies import get_cache, get_wordpress
from services.cache import CacheManager
from services.favicon import resolve_favicon
from services.oauth import get_google_auth_url
from services.smtp import get_smtp_status
from services.wordpress import WordPressClient

router = APIRouter(prefix="/api")

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.get("/favicon")
async def favicon(
    request: Request,
    client: WordPressClient = Depends(get_wordpress),
    cache: CacheManager = Depends(get_cache),
):
    """Redirect image requests to the site icon; describe it otherwise."""
    result = await resolve_favicon(client, cache)
    if "image" in request.headers.get("accept", ""):
        return RedirectResponse(result["favicon"], status_code=307)

    body = {**result, "timestamp": datetime.now(timezone.utc).isoformat()}
    return JSONResponse(body, headers=NO_CACHE_HEADERS)


@router.get("/google-oauth/url")
async def google_oauth_url(client: WordPressClient = Depends(get_wordpress)) -> dict:
    return await get_google_auth_url(client)


@router.get("/smtp/status")
async def smtp_status(
    client: WordPressClient = Depends(get_wordpress),
    cache: CacheManager = Depends(get_cache),
) -> dict:
    return await get_smtp_status(client, cache)
