"""Async httpx client for the WordPress backend (REST + WPGraphQL)."""

import logging
from typing import Any

import httpx

from errors import WordPressAPIError

logger = logging.getLogger(__name__)


class WordPressClient:
    """Thin wrapper over httpx.AsyncClient rooted at the WordPress site URL."""

    def __init__(
        self,
        base_url: str,
        graphql_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.graphql_url = graphql_url or f"{self.base_url}/graphql"
        kwargs: dict[str, Any] = {
            "base_url": self.base_url,
            "timeout": timeout,
            "headers": {"Accept": "application/json"},
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)

    async def close(self) -> None:
        await self._client.aclose()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Raw GET; callers inspect status and headers themselves."""
        return await self._client.get(path, params=params)

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a WordPress endpoint and return its JSON body."""
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise WordPressAPIError(
                f"WordPress API error: {e.response.status_code}",
                upstream_status=e.response.status_code,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise WordPressAPIError(f"WordPress API unreachable: {e}") from e

    async def exists(self, url: str) -> bool:
        """HEAD a URL; any failure counts as missing."""
        try:
            resp = await self._client.head(url)
        except httpx.HTTPError as e:
            logger.warning("Could not check %s: %s", url, e)
            return False
        return resp.is_success

    async def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict:
        """Run a WPGraphQL query and return its data block."""
        try:
            resp = await self._client.post(
                self.graphql_url,
                json={"query": query, "variables": variables or {}},
                headers={"Content-Type": "application/json"},
            )
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise WordPressAPIError(f"WordPress GraphQL unreachable: {e}") from e

        if payload.get("errors"):
            logger.error("GraphQL errors: %s", payload["errors"])
            raise WordPressAPIError("Failed to fetch API")
        return payload.get("data") or {}
