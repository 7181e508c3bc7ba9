"""
Integration tests for API endpoints.

These tests run the FastAPI app with its real routers, services and
repositories against an in-memory SQLite database.
"""

import pytest
from httpx import AsyncClient


pytestmark = pytest.mark.integration


# ================================
# Health Check Tests
# ================================

@pytest.mark.asyncio
async def test_basic_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["app_name"] == "Deal Monitor"
    assert "version" in data


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 200
    assert "Deal Monitor" in response.json()["message"]


# ================================
# Keyword Endpoint Tests
# ================================

@pytest.mark.asyncio
async def test_keyword_crud_flow(client: AsyncClient):
    created = await client.post("/api/keywords", json={"keyword": "  gaming laptop  "})
    assert created.status_code == 201
    body = created.json()
    assert body["keyword"] == "gaming laptop"
    assert body["isActive"] is True
    assert "createdAt" in body
    keyword_id = body["id"]

    fetched = await client.get(f"/api/keywords/{keyword_id}")
    assert fetched.status_code == 200
    assert fetched.json()["keyword"] == "gaming laptop"

    updated = await client.put(f"/api/keywords/{keyword_id}", json={"isActive": False})
    assert updated.status_code == 200
    assert updated.json()["isActive"] is False
    assert updated.json()["keyword"] == "gaming laptop"

    deleted = await client.delete(f"/api/keywords/{keyword_id}")
    assert deleted.status_code == 200
    assert deleted.json()["success"] is True

    missing = await client.get(f"/api/keywords/{keyword_id}")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "not_found"


@pytest.mark.asyncio
async def test_create_duplicate_keyword_conflict(client: AsyncClient):
    await client.post("/api/keywords", json={"keyword": "rtx 4090"})

    response = await client.post("/api/keywords", json={"keyword": " rtx 4090 "})

    assert response.status_code == 409
    assert response.json()["error"] == {
        "code": "duplicate",
        "message": "Keyword 'rtx 4090' already exists",
    }


@pytest.mark.asyncio
async def test_create_keyword_validation_error(client: AsyncClient):
    response = await client.post("/api/keywords", json={"keyword": ""})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert "keyword" in error["message"]


@pytest.mark.asyncio
async def test_update_keyword_rejects_unknown_field(client: AsyncClient):
    created = await client.post("/api/keywords", json={"keyword": "psu"})

    response = await client.put(f"/api/keywords/{created.json()['id']}", json={"color": "red"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


@pytest.mark.asyncio
async def test_invalid_keyword_id(client: AsyncClient):
    response = await client.get("/api/keywords/abc")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_id"


@pytest.mark.asyncio
async def test_list_keywords_pagination(client: AsyncClient):
    for name in ("alpha", "bravo", "charlie", "delta", "echo"):
        await client.post("/api/keywords", json={"keyword": name})

    response = await client.get(
        "/api/keywords", params={"page": 2, "limit": 2, "sortBy": "keyword", "sortOrder": "asc"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 5
    assert data["pages"] == 3
    assert data["page"] == 2
    assert [item["keyword"] for item in data["items"]] == ["charlie", "delta"]


@pytest.mark.asyncio
async def test_list_keywords_bad_query(client: AsyncClient):
    response = await client.get("/api/keywords", params={"limit": 500})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


@pytest.mark.asyncio
async def test_keyword_search_and_statistics(client: AsyncClient):
    await client.post("/api/keywords", json={"keyword": "gaming mouse"})
    await client.post("/api/keywords", json={"keyword": "office chair", "isActive": False})

    search = await client.get("/api/keywords/search", params={"q": "MOUSE"})
    assert search.status_code == 200
    assert [k["keyword"] for k in search.json()] == ["gaming mouse"]

    blank = await client.get("/api/keywords/search", params={"q": "   "})
    assert blank.status_code == 400
    assert blank.json()["error"] == {"code": "invalid_input", "message": "Search text is required"}

    stats = await client.get("/api/keywords/statistics")
    assert stats.status_code == 200
    assert stats.json() == {"totalKeywords": 2, "activeKeywords": 1, "inactiveKeywords": 1}


# ================================
# Subreddit Endpoint Tests
# ================================

@pytest.mark.asyncio
async def test_subreddit_normalization_and_lookup(client: AsyncClient):
    created = await client.post("/api/subreddits", json={"name": "r/Gaming"})
    assert created.status_code == 201
    assert created.json()["name"] == "gaming"
    assert created.json()["displayName"] == "r/gaming"

    duplicate = await client.post("/api/subreddits", json={"name": "GAMING"})
    assert duplicate.status_code == 409

    by_name = await client.get("/api/subreddits/by-name/r/Gaming")
    assert by_name.status_code == 200
    assert by_name.json()["id"] == created.json()["id"]

    search = await client.get("/api/subreddits/search", params={"q": "nothing-here"})
    assert search.status_code == 200
    assert search.json() == []


@pytest.mark.asyncio
async def test_delete_missing_subreddit(client: AsyncClient):
    response = await client.delete("/api/subreddits/999")

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Subreddit with ID 999 not found"


@pytest.mark.asyncio
async def test_rename_subreddit(client: AsyncClient):
    created = await client.post("/api/subreddits", json={"name": "hardware"})

    response = await client.put(
        f"/api/subreddits/{created.json()['id']}", json={"name": "r/HardwareSwap"}
    )

    assert response.status_code == 200
    assert response.json()["name"] == "hardwareswap"

    stats = await client.get("/api/subreddits/statistics")
    assert stats.json() == {"totalSubreddits": 1}


# ================================
# Post Endpoint Tests
# ================================

@pytest.mark.asyncio
async def test_create_post(client: AsyncClient, sample_post_data: dict):
    response = await client.post("/api/posts", json=sample_post_data)

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "[GPU] RTX 4070 Super - $549"
    assert data["hasLinks"] is True
    assert data["linkCount"] == 2
    assert data["previewText"] == "Lowest price so far at the usual retailer."


@pytest.mark.asyncio
async def test_create_post_with_empty_title(client: AsyncClient):
    response = await client.post("/api/posts", json={"title": "", "links": []})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


@pytest.mark.asyncio
async def test_create_post_with_invalid_link(client: AsyncClient):
    response = await client.post("/api/posts", json={"title": "Deal", "links": ["nope"]})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_posts_has_links(client: AsyncClient):
    await client.post("/api/posts", json={"title": "With", "links": ["https://a.example"]})
    await client.post("/api/posts", json={"title": "Without"})

    with_links = await client.get("/api/posts", params={"hasLinks": "true"})
    without_links = await client.get("/api/posts", params={"hasLinks": "false"})

    assert [p["title"] for p in with_links.json()["items"]] == ["With"]
    assert all(p["links"] for p in with_links.json()["items"])
    assert [p["title"] for p in without_links.json()["items"]] == ["Without"]

    shortcut = await client.get("/api/posts/with-links")
    assert [p["title"] for p in shortcut.json()] == ["With"]


@pytest.mark.asyncio
async def test_update_post_and_statistics(client: AsyncClient):
    created = await client.post(
        "/api/posts", json={"title": "Deal", "description": "abcd", "links": []}
    )
    post_id = created.json()["id"]

    updated = await client.put(
        f"/api/posts/{post_id}", json={"links": ["https://a.example"], "description": "  "}
    )
    assert updated.status_code == 200
    assert updated.json()["links"] == ["https://a.example"]
    assert updated.json()["description"] is None

    stats = await client.get("/api/posts/statistics")
    assert stats.json() == {
        "totalPosts": 1,
        "postsWithLinks": 1,
        "postsWithoutLinks": 0,
        "averageDescriptionLength": 0,
    }


@pytest.mark.asyncio
async def test_search_posts(client: AsyncClient):
    await client.post("/api/posts", json={"title": "Cheap SSD", "description": "NVMe 2TB"})

    response = await client.get("/api/posts/search", params={"q": "nvme"})

    assert response.status_code == 200
    assert [p["title"] for p in response.json()] == ["Cheap SSD"]
