"""Tests for gallery API: create/get/update, visitor registration, media listing, stories."""
import pytest


@pytest.mark.asyncio
async def test_create_gallery_201(async_client, store):
    r = await async_client.post(
        "/api/galleries",
        json={"name": "Anna & Max", "owner_email": "anna@example.com", "theme": "wedding"},
    )
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "Anna & Max"
    assert data["is_live"] is True
    assert await store.get_gallery(data["id"]) is not None


@pytest.mark.asyncio
async def test_create_gallery_with_supplied_id(async_client):
    r = await async_client.post(
        "/api/galleries",
        json={"id": "wedding-2024", "name": "W", "owner_email": "w@example.com"},
    )
    assert r.status_code == 201
    assert r.json()["id"] == "wedding-2024"
    r = await async_client.get("/api/galleries/wedding-2024")
    assert r.status_code == 200
    assert r.json()["theme"] == "wedding"


@pytest.mark.asyncio
async def test_create_gallery_missing_owner_400(async_client):
    """POST /api/galleries without owner_email returns 400."""
    r = await async_client.post("/api/galleries", json={"name": "No owner"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_get_gallery_404(async_client):
    r = await async_client.get("/api/galleries/nonexistent")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_gallery_partial(async_client, gallery):
    r = await async_client.put(
        f"/api/galleries/{gallery.id}",
        json={"bio": "Welcome!", "id": "other", "is_live": False},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == gallery.id
    assert data["bio"] == "Welcome!"
    assert data["is_live"] is False
    assert data["name"] == gallery.name


@pytest.mark.asyncio
async def test_update_gallery_404(async_client):
    r = await async_client.put("/api/galleries/nope", json={"bio": "x"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_register_visitor_new_then_returning(async_client, gallery, clock):
    body = {"name": "Lisa", "device_id": "d1", "fingerprint": "f1"}
    r = await async_client.post(f"/api/galleries/{gallery.id}/visitors", json=body)
    assert r.status_code == 201
    visitor_id = r.json()["id"]

    clock.advance(minutes=3)
    r = await async_client.post(f"/api/galleries/{gallery.id}/visitors", json=body)
    assert r.status_code == 200
    assert r.json()["id"] == visitor_id
    assert r.json()["last_active"] != r.json()["created_at"]


@pytest.mark.asyncio
async def test_register_visitor_missing_fingerprint_400(async_client, gallery):
    r = await async_client.post(
        f"/api/galleries/{gallery.id}/visitors",
        json={"name": "Lisa", "device_id": "d1"},
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_story_visible_until_expiry(async_client, gallery, clock):
    r = await async_client.post(
        f"/api/galleries/{gallery.id}/media",
        json={"visitor_id": "v1", "url": "https://cdn.example.com/s.jpg", "type": "story"},
    )
    assert r.status_code == 201
    story = r.json()
    assert story["expires_at"] is not None

    r = await async_client.get(f"/api/galleries/{gallery.id}/stories")
    assert [m["id"] for m in r.json()] == [story["id"]]

    clock.advance(hours=25)
    r = await async_client.get(f"/api/galleries/{gallery.id}/stories")
    assert r.json() == []
    r = await async_client.get(f"/api/galleries/{gallery.id}/media")
    assert r.json() == []


@pytest.mark.asyncio
async def test_list_media_type_filter_and_order(async_client, gallery, clock):
    ids = []
    for media_type in ("photo", "video", "photo"):
        r = await async_client.post(
            f"/api/galleries/{gallery.id}/media",
            json={"visitor_id": "v1", "url": f"https://cdn.example.com/{media_type}", "type": media_type},
        )
        assert r.status_code == 201
        assert r.json()["expires_at"] is None
        ids.append(r.json()["id"])
        clock.advance(seconds=10)

    r = await async_client.get(f"/api/galleries/{gallery.id}/media")
    assert [m["id"] for m in r.json()] == list(reversed(ids))
    r = await async_client.get(f"/api/galleries/{gallery.id}/media", params={"type": "photo"})
    assert [m["id"] for m in r.json()] == [ids[2], ids[0]]


@pytest.mark.asyncio
async def test_create_media_invalid_type_400(async_client, gallery):
    r = await async_client.post(
        f"/api/galleries/{gallery.id}/media",
        json={"visitor_id": "v1", "url": "https://cdn.example.com/x", "type": "gif"},
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_health(async_client):
    r = await async_client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_update_gallery_null_name_keeps_name(async_client, gallery):
    """PUT with name: null is a no-op for the name, not a 500."""
    r = await async_client.put(f"/api/galleries/{gallery.id}", json={"name": None})
    assert r.status_code == 200
    assert r.json()["name"] == gallery.name


@pytest.mark.asyncio
async def test_update_gallery_null_theme_keeps_theme(async_client, gallery):
    r = await async_client.put(f"/api/galleries/{gallery.id}", json={"theme": None, "bio": "Hi"})
    assert r.status_code == 200
    assert r.json()["theme"] == "wedding"
    assert r.json()["bio"] == "Hi"


@pytest.mark.asyncio
async def test_register_visitor_blank_name_400(async_client, gallery, store):
    r = await async_client.post(
        f"/api/galleries/{gallery.id}/visitors",
        json={"name": "   ", "device_id": "d1", "fingerprint": "f1"},
    )
    assert r.status_code == 400
    assert await store.find_visitor_by_device(gallery.id, "d1", "f1") is None


@pytest.mark.asyncio
async def test_create_gallery_owner_email_any_non_empty_string(async_client):
    r = await async_client.post("/api/galleries", json={"name": "G", "owner_email": "owner-42"})
    assert r.status_code == 201
    assert r.json()["owner_email"] == "owner-42"
    r = await async_client.post("/api/galleries", json={"name": "G", "owner_email": ""})
    assert r.status_code == 400
