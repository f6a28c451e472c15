"""Blog post routes backed by the cached WordPress services."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from dependencies import get_cache, get_wordpress
from services import posts as posts_service
from services.cache import CacheManager
from services.wordpress import WordPressClient

router = APIRouter(prefix="/api/posts")


@router.get("")
async def list_posts(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    client: WordPressClient = Depends(get_wordpress),
    cache: CacheManager = Depends(get_cache),
) -> dict:
    data = await posts_service.list_posts(client, cache, page=page, per_page=per_page)
    body = {"success": True, "data": {k: v for k, v in data.items() if k != "message"}}
    if "message" in data:
        body["message"] = data["message"]
    body["timestamp"] = datetime.now(timezone.utc).isoformat()
    return body


@router.get("/feed")
async def post_feed(
    first: int = Query(10, ge=1, le=100),
    after: str | None = Query(None),
    client: WordPressClient = Depends(get_wordpress),
    cache: CacheManager = Depends(get_cache),
) -> dict:
    """Cursor-paginated summaries for infinite scroll."""
    return {"success": True, "data": await posts_service.get_post_feed(client, cache, first=first, after=after)}


@router.get("/{slug}")
async def get_post(
    slug: str,
    client: WordPressClient = Depends(get_wordpress),
    cache: CacheManager = Depends(get_cache),
) -> dict:
    return {"success": True, "data": await posts_service.get_post(client, cache, slug)}
