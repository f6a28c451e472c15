"""Health, readiness and cache maintenance routes."""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from dependencies import get_cache
from services.cache import CacheManager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ready")
async def ready(request: Request, cache: CacheManager = Depends(get_cache)) -> dict:
    """Lightweight readiness check — no external calls."""
    settings = request.app.state.settings
    return {"status": "ok", "service": "headless-api", "commit": settings.git_sha, "cache_entries": len(cache)}


@router.get("/api/health")
async def health(request: Request) -> dict:
    """Liveness check used by the container healthcheck."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "commit": request.app.state.settings.git_sha,
    }


@router.post("/api/cache/clear")
async def clear_cache(cache: CacheManager = Depends(get_cache)) -> dict:
    cleared = len(cache)
    cache.clear()
    logger.info("Cleared %d cached responses", cleared)
    return {"success": True, "cleared": cleared}
