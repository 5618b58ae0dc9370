"""Tests for the public content endpoints across both storage backends."""

from datetime import datetime, timezone

import pytest

from gotzportal.core.observability import REGISTRY
from gotzportal.models.catalog import Destination, Itinerary, Lodge, TourPackage
from gotzportal.models.content import ContactQuickFact, FeatureCard, HeroSlide

SECTION_PATHS = [
    "/api/hero-slides",
    "/api/feature-cards",
    "/api/about-stats",
    "/api/about-highlights",
    "/api/contact-channels",
    "/api/contact-quick-facts",
    "/api/itineraries",
    "/api/destinations",
    "/api/lodges",
]

PUBLISHED = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _package(slug: str, **overrides) -> TourPackage:
    fields = {"slug": slug, "title": slug.replace("-", " ").title(), "published_at": PUBLISHED}
    fields.update(overrides)
    return TourPackage(**fields)


@pytest.mark.asyncio
@pytest.mark.parametrize("path", SECTION_PATHS)
async def test_sections_without_database_are_empty(test_client, path):
    response = await test_client.get(path)

    assert response.status_code == 200
    assert response.json() == {"data": []}


@pytest.mark.asyncio
async def test_tour_packages_without_database(test_client):
    response = await test_client.get("/api/tour-packages")

    assert response.status_code == 200
    assert response.json() == {"data": [], "meta": {"per_page": 12, "total": 0}}


@pytest.mark.asyncio
async def test_fallback_content_is_served(test_client, test_app):
    test_app.state.fallbacks.feature_cards = [{"icon": "binoculars", "title": "Expert guides", "copy": "Local rangers"}]
    test_app.state.fallbacks.contact_quick_facts = ["Replies within a day"]
    test_app.state.fallbacks.lodges = [{"id": 1, "name": "River Camp", "slug": "river-camp"}]

    assert (await test_client.get("/api/feature-cards")).json()["data"][0]["copy"] == "Local rangers"
    assert (await test_client.get("/api/contact-quick-facts")).json() == {"data": ["Replies within a day"]}

    response = await test_client.get("/api/lodges/river-camp")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "River Camp"


@pytest.mark.asyncio
async def test_fallback_tour_packages_filter_and_slice(test_client, test_app):
    test_app.state.fallbacks.tour_packages = [
        {"id": i, "slug": f"package-{i}", "title": f"Package {i}", "is_featured": i % 2 == 0}
        for i in range(1, 6)
    ]

    response = await test_client.get("/api/tour-packages?per_page=1&featured=true")
    body = response.json()

    assert [p["slug"] for p in body["data"]] == ["package-2"]
    assert body["meta"] == {"per_page": 1, "total": 2}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path,message",
    [
        ("/api/itineraries/nowhere", "Itinerary not found."),
        ("/api/lodges/nowhere", "Lodge not found."),
        ("/api/tour-packages/nowhere", "Tour package not found."),
    ],
)
async def test_unknown_slug_is_not_found(test_client, path, message):
    response = await test_client.get(path)

    assert response.status_code == 404
    assert response.json()["message"] == message


@pytest.mark.asyncio
async def test_hero_slides_from_database(db_client, test_session):
    test_session.add_all([
        HeroSlide(title="Second", position=2, cta_label="Book", cta_url="/book"),
        HeroSlide(title="First", position=1),
        HeroSlide(title="Hidden", position=0, is_active=False),
    ])
    await test_session.commit()

    response = await db_client.get("/api/hero-slides")
    data = response.json()["data"]

    assert [slide["title"] for slide in data] == ["First", "Second"]
    assert data[1]["ctaLabel"] == "Book"
    assert data[1]["ctaHref"] == "/book"


@pytest.mark.asyncio
async def test_sections_skip_deleted_rows(db_client, test_session):
    test_session.add_all([
        FeatureCard(title="Kept", copy="Shown", display_order=1),
        FeatureCard(title="Gone", display_order=0, deleted_at=PUBLISHED),
        ContactQuickFact(fact="Open daily", display_order=1),
        ContactQuickFact(fact="Closed Sundays", display_order=0, is_active=False),
    ])
    await test_session.commit()

    cards = (await db_client.get("/api/feature-cards")).json()["data"]
    facts = (await db_client.get("/api/contact-quick-facts")).json()["data"]

    assert [card["title"] for card in cards] == ["Kept"]
    assert cards[0]["copy"] == "Shown"
    assert facts == ["Open daily"]


@pytest.mark.asyncio
async def test_itinerary_detail_from_database(db_client, test_session):
    test_session.add(Itinerary(slug="mara-classic", title="Mara Classic", duration_days=5, price_from=1850))
    await test_session.commit()

    response = await db_client.get("/api/itineraries/mara-classic")
    data = response.json()["data"]

    assert data["title"] == "Mara Classic"
    assert data["price_from"] == 1850.0
    assert data["highlights"] == []
    assert data["inclusions"] == []
    assert data["exclusions"] == []
    assert data["days"] == []


@pytest.mark.asyncio
async def test_destinations_and_lodges_from_database(db_client, test_session):
    test_session.add_all([
        Destination(name="Serengeti", slug="serengeti", display_order=2),
        Destination(name="Ngorongoro", slug="ngorongoro", display_order=1),
        Lodge(name="Kopje Lodge", slug="kopje-lodge", price_from=420),
    ])
    await test_session.commit()

    destinations = (await db_client.get("/api/destinations")).json()["data"]
    lodge = (await db_client.get("/api/lodges/kopje-lodge")).json()["data"]

    assert [d["slug"] for d in destinations] == ["ngorongoro", "serengeti"]
    assert lodge["price_from"] == 420.0


@pytest.mark.asyncio
async def test_tour_packages_from_database(db_client, test_session):
    test_session.add_all([
        _package("plain-one", display_order=0),
        _package("featured-late", is_featured=True, display_order=5),
        _package("featured-early", is_featured=True, display_order=1),
        _package("draft", published_at=None),
        _package("retired", deleted_at=PUBLISHED),
    ])
    await test_session.commit()

    body = (await db_client.get("/api/tour-packages")).json()
    assert [p["slug"] for p in body["data"]] == ["featured-early", "featured-late", "plain-one"]
    assert body["meta"] == {"per_page": 12, "total": 3}
    assert body["data"][0]["gallery"] == []
    assert body["data"][0]["hero_image"] is None

    body = (await db_client.get("/api/tour-packages?featured=true&per_page=1")).json()
    assert [p["slug"] for p in body["data"]] == ["featured-early"]
    assert body["meta"] == {"per_page": 1, "total": 2}

    response = await db_client.get("/api/tour-packages/plain-one")
    assert response.json()["data"]["slug"] == "plain-one"


@pytest.mark.asyncio
@pytest.mark.parametrize("raw,expected", [("0", 12), ("abc", 12), ("-4", 1), ("500", 50), ("7", 7)])
async def test_tour_packages_per_page_is_clamped(test_client, raw, expected):
    response = await test_client.get(f"/api/tour-packages?per_page={raw}")

    assert response.json()["meta"]["per_page"] == expected


def _fallback_count(resource: str) -> float:
    return REGISTRY.get_sample_value("content_read_fallbacks_total", {"resource": resource}) or 0.0


@pytest.mark.asyncio
async def test_failed_database_read_serves_fallback(broken_db_client, test_app):
    test_app.state.fallbacks.destinations = [{"id": 1, "name": "Serengeti", "slug": "serengeti"}]
    before = _fallback_count("destinations")

    response = await broken_db_client.get("/api/destinations")

    assert response.status_code == 200
    assert [d["slug"] for d in response.json()["data"]] == ["serengeti"]
    assert _fallback_count("destinations") == before + 1


@pytest.mark.asyncio
async def test_failed_slug_lookup_uses_fallback(broken_db_client, test_app):
    test_app.state.fallbacks.itineraries = [{"id": 3, "slug": "mara-classic", "title": "Mara Classic"}]

    response = await broken_db_client.get("/api/itineraries/mara-classic")

    assert response.status_code == 200
    assert response.json()["data"]["days"] == []

    response = await broken_db_client.get("/api/tour-packages/anything")
    assert response.status_code == 404
