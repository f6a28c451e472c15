"""FastAPI dependencies for the per-app shared resources built in create_app()."""

from fastapi import Request

from services.cache import CacheManager
from services.wordpress import WordPressClient


def get_cache(request: Request) -> CacheManager:
    return request.app.state.cache


def get_wordpress(request: Request) -> WordPressClient:
    return request.app.state.wordpress
