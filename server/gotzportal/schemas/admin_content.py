"""Admin write schemas for content entities.

Each schema describes a full, valid row. Creates validate the request body
directly; partial updates validate the stored row merged with the patch, so
the same rules (required fields, no null in non-nullable columns) apply to
both. Dump with ``by_alias=True`` to get column names back.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ContentIn(BaseModel):
    """Base for admin content payloads; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class HeroSlideIn(ContentIn):
    title: str = Field(..., min_length=1, max_length=255)
    label: Optional[str] = Field(None, max_length=255)
    subtitle: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    image_base64: Optional[str] = None
    cta_label: Optional[str] = Field(None, max_length=120)
    cta_url: Optional[str] = Field(None, max_length=500)
    position: int = 0
    is_active: bool = True


class FeatureCardIn(ContentIn):
    icon: Optional[str] = Field(None, max_length=120)
    title: str = Field(..., min_length=1, max_length=255)
    headline: Optional[str] = Field(None, max_length=255)
    copy_text: Optional[str] = Field(
        None, validation_alias=AliasChoices("copy", "copy_text"), serialization_alias="copy"
    )
    count_value: Optional[int] = None
    display_order: int = 0
    is_active: bool = True


class AboutStatIn(ContentIn):
    value: str = Field(..., min_length=1, max_length=120)
    label: str = Field(..., min_length=1, max_length=255)
    display_order: int = 0
    is_active: bool = True


class AboutHighlightIn(ContentIn):
    title: str = Field(..., min_length=1, max_length=255)
    copy_text: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("copy", "copy_text"), serialization_alias="copy"
    )
    display_order: int = 0
    is_active: bool = True


class ContactChannelIn(ContentIn):
    label: str = Field(..., min_length=1, max_length=120)
    value: str = Field(..., min_length=1, max_length=255)
    detail: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class ContactQuickFactIn(ContentIn):
    fact: str = Field(..., min_length=1)
    display_order: int = 0
    is_active: bool = True


class ItineraryIn(ContentIn):
    slug: Optional[str] = Field(None, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    summary: Optional[str] = None
    badge: Optional[str] = Field(None, max_length=120)
    image_base64: Optional[str] = None
    duration_days: Optional[int] = Field(None, ge=0)
    price_from: Optional[float] = Field(None, ge=0)
    difficulty: Optional[str] = Field(None, max_length=64)
    display_order: int = 0
    is_active: bool = True


class DestinationIn(ContentIn):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    region: Optional[str] = Field(None, max_length=120)
    teaser: Optional[str] = None
    tag: Optional[str] = Field(None, max_length=120)
    description: Optional[str] = None
    image_base64: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class LodgeIn(ContentIn):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    type: Optional[str] = Field(None, max_length=120)
    mood: Optional[str] = Field(None, max_length=120)
    short_description: Optional[str] = None
    image_base64: Optional[str] = None
    price_from: Optional[float] = Field(None, ge=0)
    display_order: int = 0
    is_active: bool = True


class TourPackageIn(ContentIn):
    slug: Optional[str] = Field(None, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    short_description: Optional[str] = None
    description: Optional[str] = None
    price_from: Optional[float] = Field(None, ge=0)
    duration_days: Optional[int] = Field(None, ge=0)
    max_participants: Optional[int] = Field(None, ge=0)
    is_featured: bool = False
    display_order: int = 0
