"""Tests for admin CRUD over site content."""

import pytest

from gotzportal.services.content_resources import CONTENT_RESOURCES


@pytest.mark.asyncio
@pytest.mark.parametrize("resource", CONTENT_RESOURCES, ids=lambda r: r.path)
async def test_content_without_database(test_client, admin_headers, resource):
    base = f"/api/admin/{resource.path}"

    response = await test_client.get(base, headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {resource.plural: []}

    response = await test_client.get(f"{base}/1", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Not found"

    response = await test_client.post(base, json={"title": "x"}, headers=admin_headers)
    assert response.status_code == 501
    assert response.json()["message"] == "Database not configured"

    response = await test_client.patch(f"{base}/1", json={"title": "x"}, headers=admin_headers)
    assert response.status_code == 501
    assert response.json()["message"] == "Not implemented"

    response = await test_client.delete(f"{base}/1", headers=admin_headers)
    assert response.status_code == 501
    assert response.json()["message"] == "Not implemented"


@pytest.mark.asyncio
async def test_itinerary_lifecycle(db_client, admin_headers):
    response = await db_client.post(
        "/api/admin/itineraries",
        json={"title": "Mara & Amboseli Explorer", "duration_days": 6, "price_from": 2400},
        headers=admin_headers,
    )
    assert response.status_code == 200
    itinerary = response.json()["itinerary"]
    assert itinerary["slug"] == "mara--amboseli-explorer"
    assert itinerary["price_from"] == 2400.0
    assert itinerary["is_active"] is True
    item_id = itinerary["id"]

    response = await db_client.patch(
        f"/api/admin/itineraries/{item_id}", json={"badge": "Best seller"}, headers=admin_headers
    )
    updated = response.json()["itinerary"]
    assert updated["badge"] == "Best seller"
    assert updated["title"] == "Mara & Amboseli Explorer"
    assert updated["duration_days"] == 6

    public = await db_client.get(f"/api/itineraries/{itinerary['slug']}")
    assert public.json()["data"]["badge"] == "Best seller"

    response = await db_client.delete(f"/api/admin/itineraries/{item_id}", headers=admin_headers)
    assert response.json() == {"message": "Deleted"}

    assert (await db_client.get(f"/api/admin/itineraries/{item_id}", headers=admin_headers)).status_code == 404
    assert (await db_client.get("/api/admin/itineraries", headers=admin_headers)).json() == {"itineraries": []}
    assert (await db_client.get("/api/itineraries")).json() == {"data": []}


@pytest.mark.asyncio
async def test_explicit_slug_is_kept(db_client, admin_headers):
    response = await db_client.post(
        "/api/admin/lodges", json={"name": "Kopje Lodge", "slug": "kopje"}, headers=admin_headers
    )

    assert response.json()["lodge"]["slug"] == "kopje"


@pytest.mark.asyncio
async def test_duplicate_slug_conflicts(db_client, admin_headers):
    await db_client.post("/api/admin/lodges", json={"name": "Kopje Lodge"}, headers=admin_headers)

    response = await db_client.post("/api/admin/lodges", json={"name": "Kopje  Lodge"}, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["message"] == "A lodge with this slug already exists."


@pytest.mark.asyncio
async def test_create_requires_fields(db_client, admin_headers):
    response = await db_client.post("/api/admin/destinations", json={"region": "North"}, headers=admin_headers)

    assert response.status_code == 422
    assert response.json()["violations"][0]["path"] == "name"


@pytest.mark.asyncio
async def test_slug_that_cannot_be_derived(db_client, admin_headers):
    response = await db_client.post("/api/admin/destinations", json={"name": "!!!"}, headers=admin_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_refuses_null_for_required_column(db_client, admin_headers):
    created = await db_client.post("/api/admin/about-stats", json={"value": "15+", "label": "Years"}, headers=admin_headers)
    item_id = created.json()["about_stat"]["id"]

    response = await db_client.patch(f"/api/admin/about-stats/{item_id}", json={"label": None}, headers=admin_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_id_with_database(db_client, admin_headers):
    response = await db_client.patch("/api/admin/lodges/99", json={"name": "x"}, headers=admin_headers)
    assert response.status_code == 404

    response = await db_client.delete("/api/admin/lodges/99", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_tour_package_is_published_on_create(db_client, admin_headers):
    response = await db_client.post(
        "/api/admin/tour-packages",
        json={"title": "Great Migration", "is_featured": True, "published_at": None},
        headers=admin_headers,
    )
    package = response.json()["tour_package"]

    assert package["slug"] == "great-migration"
    assert package["published_at"] is not None

    public = (await db_client.get("/api/tour-packages")).json()
    assert [p["slug"] for p in public["data"]] == ["great-migration"]


@pytest.mark.asyncio
async def test_feature_card_copy_field(db_client, admin_headers):
    response = await db_client.post(
        "/api/admin/feature-cards",
        json={"title": "Expert guides", "copy": "Born in the Mara"},
        headers=admin_headers,
    )
    card = response.json()["feature_card"]
    assert card["copy"] == "Born in the Mara"

    response = await db_client.patch(
        f"/api/admin/feature-cards/{card['id']}", json={"copy": "Raised in the Mara"}, headers=admin_headers
    )
    assert response.json()["feature_card"]["copy"] == "Raised in the Mara"

    public = (await db_client.get("/api/feature-cards")).json()["data"]
    assert public[0]["copy"] == "Raised in the Mara"


@pytest.mark.asyncio
async def test_admin_list_includes_inactive_rows(db_client, admin_headers):
    await db_client.post("/api/admin/hero-slides", json={"title": "Later", "position": 2}, headers=admin_headers)
    await db_client.post(
        "/api/admin/hero-slides", json={"title": "Draft", "position": 1, "is_active": False}, headers=admin_headers
    )

    slides = (await db_client.get("/api/admin/hero-slides", headers=admin_headers)).json()["hero_slides"]
    public = (await db_client.get("/api/hero-slides")).json()["data"]

    assert [s["title"] for s in slides] == ["Draft", "Later"]
    assert [s["title"] for s in public] == ["Later"]
