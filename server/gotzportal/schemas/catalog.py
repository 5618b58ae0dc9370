"""Public shapes of the travel catalogue."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PageMeta


class ItineraryPublic(BaseModel):
    """Itinerary card in listings."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    summary: Optional[str] = None
    badge: Optional[str] = None
    image_base64: Optional[str] = None
    duration_days: Optional[int] = None
    price_from: Optional[float] = None


class ItineraryDetail(ItineraryPublic):
    """Itinerary page; the day-by-day sections are not stored yet and stay empty."""

    highlights: List[Any] = Field(default_factory=list)
    inclusions: List[Any] = Field(default_factory=list)
    exclusions: List[Any] = Field(default_factory=list)
    days: List[Any] = Field(default_factory=list)


class DestinationPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    region: Optional[str] = None
    teaser: Optional[str] = None
    tag: Optional[str] = None
    description: Optional[str] = None
    image_base64: Optional[str] = None


class LodgePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    location: Optional[str] = None
    type: Optional[str] = None
    mood: Optional[str] = None
    short_description: Optional[str] = None
    image_base64: Optional[str] = None
    price_from: Optional[float] = None


class TourPackagePublic(BaseModel):
    """
    Tour package card and detail.

    Media fields are placeholders the site expects; packages carry no
    images of their own yet.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    short_description: Optional[str] = None
    description: Optional[str] = None
    price_from: Optional[float] = None
    duration_days: Optional[int] = None
    max_participants: Optional[int] = None
    is_featured: bool = False
    hero_image: None = None
    gallery: List[Any] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class TourPackageListing(BaseModel):
    """Body of ``GET /api/tour-packages``."""

    data: List[Any]
    meta: PageMeta
