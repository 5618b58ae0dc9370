"""Registry of the content entities managed through the admin CRUD endpoints."""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel

from ..models.catalog import Destination, Itinerary, Lodge, TourPackage
from ..models.content import (
    AboutHighlight,
    AboutStat,
    ContactChannel,
    ContactQuickFact,
    FeatureCard,
    HeroSlide,
)
from ..schemas.admin_content import (
    AboutHighlightIn,
    AboutStatIn,
    ContactChannelIn,
    ContactQuickFactIn,
    DestinationIn,
    FeatureCardIn,
    HeroSlideIn,
    ItineraryIn,
    LodgeIn,
    TourPackageIn,
)


def slugify(text: str) -> str:
    """Lower-case, whitespace runs to ``-``, anything outside ``[a-z0-9-]`` dropped."""
    slug = re.sub(r"\s+", "-", text.strip().lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


@dataclass(frozen=True)
class ContentResource:
    """
    One admin-managed content entity.

    ``path`` is the URL segment, ``singular``/``plural`` the response keys.
    Writable columns come from ``schema``; ``read_only_fields`` are shown
    but never accepted from a request.
    """

    path: str
    singular: str
    plural: str
    model: Any
    schema: type[BaseModel]
    order_by: str = "display_order"
    slug_source: Optional[str] = None
    read_only_fields: tuple[str, ...] = field(default_factory=tuple)
    stamp_published_on_create: bool = False

    @property
    def writable_fields(self) -> tuple[str, ...]:
        return tuple(
            info.serialization_alias or name
            for name, info in self.schema.model_fields.items()
        )

    @property
    def fields(self) -> tuple[str, ...]:
        return self.writable_fields + self.read_only_fields


CONTENT_RESOURCES: tuple[ContentResource, ...] = (
    ContentResource("hero-slides", "hero_slide", "hero_slides", HeroSlide, HeroSlideIn, order_by="position"),
    ContentResource("feature-cards", "feature_card", "feature_cards", FeatureCard, FeatureCardIn),
    ContentResource("about-stats", "about_stat", "about_stats", AboutStat, AboutStatIn),
    ContentResource("about-highlights", "about_highlight", "about_highlights", AboutHighlight, AboutHighlightIn),
    ContentResource("contact-channels", "contact_channel", "contact_channels", ContactChannel, ContactChannelIn),
    ContentResource(
        "contact-quick-facts", "contact_quick_fact", "contact_quick_facts", ContactQuickFact, ContactQuickFactIn
    ),
    ContentResource("itineraries", "itinerary", "itineraries", Itinerary, ItineraryIn, slug_source="title"),
    ContentResource("destinations", "destination", "destinations", Destination, DestinationIn, slug_source="name"),
    ContentResource("lodges", "lodge", "lodges", Lodge, LodgeIn, slug_source="name"),
    ContentResource(
        "tour-packages",
        "tour_package",
        "tour_packages",
        TourPackage,
        TourPackageIn,
        slug_source="title",
        read_only_fields=("published_at",),
        stamp_published_on_create=True,
    ),
)
