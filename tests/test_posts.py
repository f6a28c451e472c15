"""Tests for the blog post routes and their WordPress retries."""

from datetime import datetime
from types import SimpleNamespace

import httpx
import pytest

from conftest import WP_URL, graphql_body
from services import posts

POSTS_PATH = "/wp-json/wp/v2/posts"


def _rest_post(**overrides) -> dict:
    post = {
        "id": 7,
        "title": {"rendered": "Hello"},
        "slug": "hello",
        "excerpt": {"rendered": "<p>Hi</p>"},
        "content": {"rendered": "<p>Body</p>"},
        "date": "2025-09-01T10:00:00",
        "modified": "2025-09-02T10:00:00",
        "status": "publish",
        "author": 3,
        "link": f"{WP_URL}/hello",
        "_embedded": {
            "author": [{"name": "Ada", "slug": "ada"}],
            "wp:featuredmedia": [{"source_url": f"{WP_URL}/img.png"}],
            "wp:term": [
                [{"id": 1, "name": "News", "slug": "news"}],
                [{"id": 9, "name": "python", "slug": "python"}],
            ],
        },
    }
    post.update(overrides)
    return post


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch):
    monkeypatch.setattr(posts, "RETRY_BACKOFF_SECONDS", 0)
    monkeypatch.setattr(posts, "TRANSPORT_RETRY_BACKOFF_SECONDS", 0)


def test_list_posts_transforms_and_paginates(client, wp):
    wp.add("GET", POSTS_PATH, httpx.Response(
        200, json=[_rest_post()], headers={"X-WP-TotalPages": "4", "X-WP-Total": "31"},
    ))

    resp = client.get("/api/posts", params={"page": 2, "per_page": 5})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    data = body["data"]
    assert data["totalPages"] == 4
    assert data["total"] == 31
    assert data["currentPage"] == 2
    assert data["perPage"] == 5

    post = data["posts"][0]
    assert post["title"] == "Hello"
    assert post["featured_image"] == f"{WP_URL}/img.png"
    assert post["author"] == {"id": 3, "name": "Ada", "slug": "ada"}
    assert post["categories"] == [{"id": 1, "name": "News", "slug": "news"}]
    assert post["tags"] == [{"id": 9, "name": "python", "slug": "python"}]

    sent = wp.requests[0].url.params
    assert sent["page"] == "2"
    assert sent["per_page"] == "5"
    assert sent["_embed"] == "true"
    assert sent["status"] == "publish"


def test_transform_post_defaults():
    post = posts.transform_post({"id": 1}, WP_URL)
    assert post["title"] == "Untitled"
    assert post["slug"] == "untitled"
    assert post["featured_image"] is None
    assert post["author"] == {"id": 0, "name": "Unknown Author", "slug": "unknown"}
    assert post["categories"] == []
    assert post["tags"] == []
    assert post["link"] == f"{WP_URL}/untitled"
    assert datetime.fromisoformat(post["date"]).tzinfo is not None
    assert post["modified"] == post["date"]


def test_list_posts_is_cached_per_page(client, wp):
    wp.add("GET", POSTS_PATH, httpx.Response(200, json=[_rest_post()]))

    client.get("/api/posts")
    client.get("/api/posts")
    assert wp.calls(POSTS_PATH) == 1

    client.get("/api/posts", params={"page": 2})
    assert wp.calls(POSTS_PATH) == 2


def test_list_posts_refetches_after_ttl(client, wp, clock):
    wp.add("GET", POSTS_PATH, httpx.Response(200, json=[]))

    client.get("/api/posts")
    clock.advance(posts.POSTS_TTL_SECONDS)
    client.get("/api/posts")
    assert wp.calls(POSTS_PATH) == 2


def test_list_posts_retries_rate_limit(client, wp):
    wp.add("GET", POSTS_PATH, [
        httpx.Response(429),
        httpx.Response(500),
        httpx.Response(200, json=[_rest_post()]),
    ])

    resp = client.get("/api/posts")
    assert resp.status_code == 200
    assert len(resp.json()["data"]["posts"]) == 1
    assert wp.calls(POSTS_PATH) == 3


def test_list_posts_empty_page_when_retries_exhausted(client, wp, cache):
    wp.add("GET", POSTS_PATH, httpx.Response(500))

    resp = client.get("/api/posts")
    assert resp.status_code == 200
    body = resp.json()
    assert body["data"]["posts"] == []
    assert body["data"]["totalPages"] == 0
    assert "unavailable" in body["message"]
    assert wp.calls(POSTS_PATH) == posts.MAX_ATTEMPTS
    assert len(cache) == 0


def test_list_posts_does_not_retry_client_errors(client, wp):
    wp.add("GET", POSTS_PATH, httpx.Response(403))

    resp = client.get("/api/posts")
    assert resp.json()["data"]["posts"] == []
    assert wp.calls(POSTS_PATH) == 1


def test_list_posts_transport_failure_is_502(client, wp):
    def boom(request):
        raise httpx.ConnectError("refused", request=request)

    wp.add("GET", POSTS_PATH, boom)

    resp = client.get("/api/posts")
    assert resp.status_code == 502
    assert resp.json()["success"] is False
    assert wp.calls(POSTS_PATH) == posts.MAX_ATTEMPTS


def test_list_posts_validates_query(client):
    assert client.get("/api/posts", params={"page": 0}).status_code == 422


def test_get_post_by_slug(client, wp):
    seen = {}

    def graphql(request):
        seen.update(graphql_body(request))
        return httpx.Response(200, json={"data": {"post": {"id": "cG9zdDo3", "slug": "hello", "title": "Hello"}}})

    wp.add("POST", "/graphql", graphql)

    resp = client.get("/api/posts/hello")
    assert resp.status_code == 200
    assert resp.json()["data"]["title"] == "Hello"
    assert seen["variables"] == {"slug": "hello"}
    assert "GetPostBySlug" in seen["query"]

    client.get("/api/posts/hello")
    assert wp.calls("/graphql") == 1


def test_get_post_missing_is_404(client, wp):
    wp.add("POST", "/graphql", httpx.Response(200, json={"data": {"post": None}}))

    resp = client.get("/api/posts/nope")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Post not found: nope"}


def test_graphql_errors_surface_as_502(client, wp):
    wp.add("POST", "/graphql", httpx.Response(200, json={"errors": [{"message": "boom"}]}))

    resp = client.get("/api/posts/hello")
    assert resp.status_code == 502
    assert resp.json()["message"] == "Failed to fetch API"


def test_post_feed_uses_cursor(client, wp):
    seen = []

    def graphql(request):
        seen.append(graphql_body(request)["variables"])
        return httpx.Response(200, json={"data": {"posts": {
            "nodes": [{"slug": "a"}, {"slug": "b"}],
            "pageInfo": {"hasNextPage": True, "endCursor": "YXJyYXk6MQ=="},
        }}})

    wp.add("POST", "/graphql", graphql)

    resp = client.get("/api/posts/feed", params={"first": 2, "after": "abc"})
    data = resp.json()["data"]
    assert [p["slug"] for p in data["posts"]] == ["a", "b"]
    assert data["hasNextPage"] is True
    assert data["endCursor"] == "YXJyYXk6MQ=="
    assert seen == [{"first": 2, "after": "abc"}]


def test_list_posts_non_json_body_is_502(client, wp, cache):
    wp.add("GET", POSTS_PATH, httpx.Response(200, text="<html>oops</html>"))

    resp = client.get("/api/posts")
    assert resp.status_code == 502
    assert resp.json() == {"success": False, "message": "Failed to fetch blog posts"}
    assert len(cache) == 0


def test_list_posts_bad_total_header_is_502(client, wp):
    wp.add("GET", POSTS_PATH, httpx.Response(200, json=[_rest_post()], headers={"X-WP-Total": "abc"}))

    resp = client.get("/api/posts")
    assert resp.status_code == 502
    assert resp.json()["message"] == "Failed to fetch blog posts"


def test_list_posts_non_list_body_is_502(client, wp):
    wp.add("GET", POSTS_PATH, httpx.Response(200, json={"code": "rest_error"}))

    assert client.get("/api/posts").status_code == 502


def test_transport_retries_use_their_own_backoff(client, wp, monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    def boom(request):
        raise httpx.ConnectError("refused", request=request)

    monkeypatch.setattr(posts, "TRANSPORT_RETRY_BACKOFF_SECONDS", 1.0)
    monkeypatch.setattr(posts, "RETRY_BACKOFF_SECONDS", 2.0)
    monkeypatch.setattr(posts, "asyncio", SimpleNamespace(sleep=fake_sleep))
    wp.add("GET", POSTS_PATH, boom)

    client.get("/api/posts")
    assert delays == [1.0, 2.0]
