"""Blog posts from the WordPress REST API and WPGraphQL, cached per page."""

import asyncio
import logging
from datetime import datetime, timezone

import httpx

from errors import PostNotFoundError, WordPressAPIError
from services.cache import CacheManager
from services.queries import GET_POST_BY_SLUG, GET_POSTS
from services.wordpress import WordPressClient

logger = logging.getLogger(__name__)

POSTS_TTL_SECONDS = 300
MAX_ATTEMPTS = 3
RETRY_BACKOFF_SECONDS = 2.0
TRANSPORT_RETRY_BACKOFF_SECONDS = 1.0
RETRYABLE_STATUSES = {429, 500}


def _terms(embedded: dict, index: int) -> list[dict]:
    groups = embedded.get("wp:term") or []
    if len(groups) <= index or not groups[index]:
        return []
    return [{"id": t.get("id"), "name": t.get("name"), "slug": t.get("slug")} for t in groups[index]]


def transform_post(post: dict, site_url: str) -> dict:
    """Flatten a REST post (with _embed) into the shape the front end renders."""
    embedded = post.get("_embedded") or {}
    media = embedded.get("wp:featuredmedia") or [{}]
    author = (embedded.get("author") or [{}])[0]
    slug = post.get("slug") or "untitled"
    now = datetime.now(timezone.utc).isoformat()

    return {
        "id": post.get("id"),
        "title": (post.get("title") or {}).get("rendered") or "Untitled",
        "slug": slug,
        "excerpt": (post.get("excerpt") or {}).get("rendered") or "",
        "content": (post.get("content") or {}).get("rendered") or "",
        "date": post.get("date") or now,
        "modified": post.get("modified") or now,
        "status": post.get("status") or "publish",
        "featured_image": media[0].get("source_url") or post.get("featured_media_url"),
        "author": {
            "id": post.get("author") or 0,
            "name": author.get("name") or "Unknown Author",
            "slug": author.get("slug") or "unknown",
        },
        "categories": _terms(embedded, 0),
        "tags": _terms(embedded, 1),
        "link": post.get("link") or f"{site_url}/{slug}",
    }


def _empty_page(page: int, per_page: int) -> dict:
    return {
        "posts": [],
        "totalPages": 0,
        "total": 0,
        "currentPage": page,
        "perPage": per_page,
        "message": "WordPress API unavailable, returning empty posts",
    }


async def _fetch_with_retry(client: WordPressClient, params: dict) -> httpx.Response | None:
    """GET the posts collection, retrying on rate limits and server errors.

    Returns None when WordPress keeps answering with an error status.
    """
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            resp = await client.get("/wp-json/wp/v2/posts", params=params)
        except httpx.HTTPError as e:
            if attempt >= MAX_ATTEMPTS:
                raise WordPressAPIError(f"Failed to fetch blog posts: {e}") from e
            logger.warning("WordPress API error, retrying %d/%d: %s", attempt, MAX_ATTEMPTS, e)
            await asyncio.sleep(TRANSPORT_RETRY_BACKOFF_SECONDS * attempt)
            continue

        if resp.is_success:
            return resp
        if resp.status_code in RETRYABLE_STATUSES and attempt < MAX_ATTEMPTS:
            logger.warning("WordPress API error %d, retrying %d/%d", resp.status_code, attempt, MAX_ATTEMPTS)
            await asyncio.sleep(RETRY_BACKOFF_SECONDS * attempt)
            continue
        break

    logger.warning("WordPress API failed after %d attempts, returning empty posts", attempt)
    return None


async def list_posts(client: WordPressClient, cache: CacheManager, page: int = 1, per_page: int = 10) -> dict:
    """One page of published posts plus pagination totals."""
    cache_key = f"posts:page{page}:per{per_page}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    params = {"page": page, "per_page": per_page, "_embed": "true", "status": "publish"}
    resp = await _fetch_with_retry(client, params)
    if resp is None:
        return _empty_page(page, per_page)

    try:
        raw_posts = resp.json()
        total_pages = int(resp.headers.get("X-WP-TotalPages") or 1)
        total = int(resp.headers.get("X-WP-Total") or 0)
    except ValueError as e:
        logger.warning("Malformed posts response from WordPress: %s", e)
        raise WordPressAPIError("Failed to fetch blog posts") from e
    if not isinstance(raw_posts, list) or not all(isinstance(p, dict) for p in raw_posts):
        logger.warning("Unexpected posts payload type: %s", type(raw_posts).__name__)
        raise WordPressAPIError("Failed to fetch blog posts")

    result = {
        "posts": [transform_post(p, client.base_url) for p in raw_posts],
        "totalPages": total_pages,
        "total": total,
        "currentPage": page,
        "perPage": per_page,
    }
    cache.set(cache_key, result, ttl=POSTS_TTL_SECONDS)
    return result


async def get_post(client: WordPressClient, cache: CacheManager, slug: str) -> dict:
    """Single post by slug via WPGraphQL."""
    cache_key = f"post:{slug}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    data = await client.graphql(GET_POST_BY_SLUG, {"slug": slug})
    post = data.get("post")
    if not post:
        raise PostNotFoundError(slug)
    cache.set(cache_key, post, ttl=POSTS_TTL_SECONDS)
    return post


async def get_post_feed(client: WordPressClient, cache: CacheManager, first: int = 10, after: str | None = None) -> dict:
    """Cursor-paginated post summaries via WPGraphQL."""
    cache_key = f"posts:feed:{first}:{after or ''}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    data = await client.graphql(GET_POSTS, {"first": first, "after": after})
    posts = data.get("posts") or {}
    page_info = posts.get("pageInfo") or {}
    result = {
        "posts": posts.get("nodes") or [],
        "hasNextPage": bool(page_info.get("hasNextPage")),
        "endCursor": page_info.get("endCursor"),
    }
    cache.set(cache_key, result, ttl=POSTS_TTL_SECONDS)
    return result
