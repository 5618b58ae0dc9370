"""Public content reads: database when configured, fallback data otherwise or on failure."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.catalog import Destination, Itinerary, Lodge, TourPackage
from ..models.content import (
    AboutHighlight,
    AboutStat,
    ContactChannel,
    ContactQuickFact,
    FeatureCard,
    HeroSlide,
)
from ..schemas.catalog import (
    DestinationPublic,
    ItineraryDetail,
    ItineraryPublic,
    LodgePublic,
    TourPackagePublic,
)
from ..schemas.content import (
    AboutHighlightPublic,
    AboutStatPublic,
    ContactChannelPublic,
    FeatureCardPublic,
    HeroSlidePublic,
)
from .fallbacks import FallbackData
from .resolution import ReadResult, resolve_read
from .serialization import dump

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 12
MAX_PER_PAGE = 50

DETAIL_SECTIONS = ("highlights", "inclusions", "exclusions", "days")


@dataclass(frozen=True)
class PublicSection:
    """How one public listing is queried and shaped."""

    model: Any
    order_by: str
    schema: type[BaseModel]


PUBLIC_SECTIONS: dict[str, PublicSection] = {
    "hero_slides": PublicSection(HeroSlide, "position", HeroSlidePublic),
    "feature_cards": PublicSection(FeatureCard, "display_order", FeatureCardPublic),
    "about_stats": PublicSection(AboutStat, "display_order", AboutStatPublic),
    "about_highlights": PublicSection(AboutHighlight, "display_order", AboutHighlightPublic),
    "contact_channels": PublicSection(ContactChannel, "display_order", ContactChannelPublic),
    "itineraries": PublicSection(Itinerary, "display_order", ItineraryPublic),
    "destinations": PublicSection(Destination, "display_order", DestinationPublic),
    "lodges": PublicSection(Lodge, "display_order", LodgePublic),
}


def clamp_per_page(raw: Optional[str]) -> int:
    """
    Parse the ``per_page`` query parameter.

    Missing, non-numeric and zero values mean the default; anything else is
    clamped into ``1..50``.
    """
    try:
        value = int(float(raw)) if raw not in (None, "") else 0
    except (TypeError, ValueError, OverflowError):
        value = 0
    if value == 0:
        return DEFAULT_PER_PAGE
    return min(MAX_PER_PAGE, max(1, value))


def with_detail_sections(item: dict[str, Any]) -> dict[str, Any]:
    """Itinerary page body: the card fields plus empty day-by-day sections."""
    return {**item, **{name: [] for name in DETAIL_SECTIONS}}


class ContentService:
    """Read-only service behind the public site endpoints."""

    def __init__(self, db: Optional[AsyncSession], fallbacks: FallbackData):
        self.db = db
        self.fallbacks = fallbacks

    async def list_section(self, resource: str) -> ReadResult[list[Any]]:
        """Active rows of a page section or catalogue list, in display order."""
        section = PUBLIC_SECTIONS[resource]

        async def query() -> list[dict[str, Any]]:
            model = section.model
            stmt = (
                select(model)
                .where(model.is_active.is_(True), model.deleted_at.is_(None))
                .order_by(getattr(model, section.order_by).asc(), model.id.asc())
            )
            rows = (await self.db.execute(stmt)).scalars().all()
            return [dump(section.schema.model_validate(row)) for row in rows]

        return await resolve_read(query, self.fallbacks.get(resource), resource)

    async def list_contact_quick_facts(self) -> ReadResult[list[str]]:
        async def query() -> list[str]:
            stmt = (
                select(ContactQuickFact.fact)
                .where(ContactQuickFact.is_active.is_(True), ContactQuickFact.deleted_at.is_(None))
                .order_by(ContactQuickFact.display_order.asc(), ContactQuickFact.id.asc())
            )
            return list((await self.db.execute(stmt)).scalars().all())

        return await resolve_read(query, self.fallbacks.get("contact_quick_facts"), "contact_quick_facts")

    async def list_tour_packages(self, per_page: int, featured: bool = False) -> tuple[list[Any], int]:
        """
        Published packages, featured first, at most ``per_page`` of them.

        Returns:
            The page of packages and the number of packages matching the filter
        """
        async def query() -> tuple[list[Any], int]:
            conditions = [TourPackage.deleted_at.is_(None), TourPackage.published_at.is_not(None)]
            if featured:
                conditions.append(TourPackage.is_featured.is_(True))
            stmt = (
                select(TourPackage)
                .where(*conditions)
                .order_by(
                    TourPackage.is_featured.desc(),
                    TourPackage.display_order.asc(),
                    TourPackage.id.asc(),
                )
                .limit(per_page)
            )
            rows = (await self.db.execute(stmt)).scalars().all()
            total = (await self.db.execute(select(func.count()).select_from(TourPackage).where(*conditions))).scalar_one()
            return [dump(TourPackagePublic.model_validate(row)) for row in rows], total

        packages = self.fallbacks.get("tour_packages")
        if featured:
            packages = [p for p in packages if p.get("is_featured")]
        result = await resolve_read(query, (packages[:per_page], len(packages)), "tour_packages")
        return result.value

    async def get_tour_package(self, slug: str) -> Optional[dict[str, Any]]:
        async def query() -> Optional[dict[str, Any]]:
            row = await self._get_by_slug(TourPackage, slug)
            return dump(TourPackagePublic.model_validate(row)) if row else None

        return await self._by_slug(query, "tour_packages", slug)

    async def get_itinerary(self, slug: str) -> Optional[dict[str, Any]]:
        async def query() -> Optional[dict[str, Any]]:
            row = await self._get_by_slug(Itinerary, slug)
            return dump(ItineraryDetail.model_validate(row)) if row else None

        item = await self._by_slug(query, "itineraries", slug)
        return with_detail_sections(item) if item is not None else None

    async def get_lodge(self, slug: str) -> Optional[dict[str, Any]]:
        async def query() -> Optional[dict[str, Any]]:
            row = await self._get_by_slug(Lodge, slug)
            return dump(LodgePublic.model_validate(row)) if row else None

        return await self._by_slug(query, "lodges", slug)

    async def _get_by_slug(self, model, slug: str):
        stmt = select(model).where(model.slug == slug, model.deleted_at.is_(None))
        return (await self.db.execute(stmt)).scalars().first()

    async def _by_slug(self, query, resource: str, slug: str) -> Optional[dict[str, Any]]:
        """A database miss or failure falls through to the fallback list."""
        result = await resolve_read(query, None, resource)
        if result.value is not None:
            return result.value
        logger.debug(
            "Slug lookup answered from fallback data",
            extra={"resource": resource, "slug": slug, "source": result.source}
        )
        return self.fallbacks.find_by_slug(resource, slug)
