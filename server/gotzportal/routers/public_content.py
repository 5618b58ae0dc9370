"""Public site content: page sections and the safari catalogue."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_fallbacks
from ..core.exceptions import NotFoundError
from ..schemas.common import PageMeta
from ..services.content_service import ContentService, clamp_per_page
from ..services.fallbacks import FallbackData

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["content"])

DB_DEPENDENCY = Depends(get_db)
FALLBACKS_DEPENDENCY = Depends(get_fallbacks)


async def _section(resource: str, db: Optional[AsyncSession], fallbacks: FallbackData) -> JSONResponse:
    result = await ContentService(db, fallbacks).list_section(resource)
    return JSONResponse(status_code=200, content={"data": result.value})


@router.get("/hero-slides")
async def list_hero_slides(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    """Active hero carousel slides in position order."""
    return await _section("hero_slides", db, fallbacks)


@router.get("/feature-cards")
async def list_feature_cards(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    return await _section("feature_cards", db, fallbacks)


@router.get("/about-stats")
async def list_about_stats(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    return await _section("about_stats", db, fallbacks)


@router.get("/about-highlights")
async def list_about_highlights(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    return await _section("about_highlights", db, fallbacks)


@router.get("/contact-channels")
async def list_contact_channels(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    return await _section("contact_channels", db, fallbacks)


@router.get("/contact-quick-facts")
async def list_contact_quick_facts(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    """Short facts shown beside the contact form, as plain strings."""
    result = await ContentService(db, fallbacks).list_contact_quick_facts()
    return JSONResponse(status_code=200, content={"data": result.value})


@router.get("/itineraries")
async def list_itineraries(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    return await _section("itineraries", db, fallbacks)


@router.get("/itineraries/{slug}")
async def get_itinerary(slug: str, db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    """
    One itinerary page.

    Raises:
        NotFoundError: If neither the database nor the fallback data has the slug
    """
    itinerary = await ContentService(db, fallbacks).get_itinerary(slug)
    if itinerary is None:
        raise NotFoundError("itinerary", slug, detail="Itinerary not found.")
    return JSONResponse(status_code=200, content={"data": itinerary})


@router.get("/destinations")
async def list_destinations(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    return await _section("destinations", db, fallbacks)


@router.get("/lodges")
async def list_lodges(db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    return await _section("lodges", db, fallbacks)


@router.get("/lodges/{slug}")
async def get_lodge(slug: str, db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    lodge = await ContentService(db, fallbacks).get_lodge(slug)
    if lodge is None:
        raise NotFoundError("lodge", slug, detail="Lodge not found.")
    return JSONResponse(status_code=200, content={"data": lodge})


@router.get("/tour-packages")
async def list_tour_packages(
    per_page: Optional[str] = Query(None),
    featured: Optional[str] = Query(None),
    db: AsyncSession = DB_DEPENDENCY,
    fallbacks: FallbackData = FALLBACKS_DEPENDENCY,
):
    """
    Published tour packages, featured first.

    ``per_page`` is clamped into 1..50 (default 12); ``featured=true`` keeps
    only featured packages.
    """
    limit = clamp_per_page(per_page)
    packages, total = await ContentService(db, fallbacks).list_tour_packages(
        per_page=limit, featured=featured == "true"
    )
    meta = PageMeta(per_page=limit, total=total)
    return JSONResponse(status_code=200, content={"data": packages, "meta": meta.model_dump()})


@router.get("/tour-packages/{slug}")
async def get_tour_package(slug: str, db: AsyncSession = DB_DEPENDENCY, fallbacks: FallbackData = FALLBACKS_DEPENDENCY):
    package = await ContentService(db, fallbacks).get_tour_package(slug)
    if package is None:
        raise NotFoundError("tour_package", slug, detail="Tour package not found.")
    return JSONResponse(status_code=200, content={"data": package})
