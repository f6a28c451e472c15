"""FastAPI application factory for the headless WordPress API.

Run with: uvicorn --factory app:create_app
"""

import logging
import sys
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings as default_settings
from errors import register_error_handlers
from services.cache import CacheManager
from services.wordpress import WordPressClient

# Structured logging: JSON for production, human-readable for local
if default_settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    cache: CacheManager | None = None,
    wordpress: WordPressClient | None = None,
) -> FastAPI:
    """Build the app and the one cache and WordPress client it shares."""
    if settings is None:
        settings = default_settings
    app = FastAPI(title="Headless WordPress API", version="1.0.0")

    app.state.settings = settings
    app.state.started_at = time.monotonic()
    if cache is None:
        cache = CacheManager(
            default_ttl=settings.cache_default_ttl,
            max_entries=settings.cache_max_entries,
        )
    if wordpress is None:
        wordpress = WordPressClient(
            settings.wordpress_url,
            graphql_url=settings.wordpress_graphql_url,
            timeout=settings.http_timeout,
        )
    app.state.cache = cache
    app.state.wordpress = wordpress

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.posts import router as posts_router
    from routes.site import router as site_router
    from routes.two_factor import router as two_factor_router

    app.include_router(health_router)
    app.include_router(posts_router)
    app.include_router(site_router)
    app.include_router(two_factor_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (using defaults): %s", ", ".join(missing))

    @app.on_event("shutdown")
    async def _close_wordpress() -> None:
        await app.state.wordpress.close()

    return app
