"""Public shapes of the page-section content (hero, features, about, contact)."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class HeroSlidePublic(BaseModel):
    """
    Hero carousel slide as served to the site.

    Validates from ORM rows (``cta_label`` / ``cta_url`` columns) and from
    fallback dicts already in the camelCase shape.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    label: Optional[str] = None
    description: Optional[str] = None
    image_base64: Optional[str] = None
    ctaLabel: Optional[str] = Field(None, validation_alias=AliasChoices("ctaLabel", "cta_label"))
    ctaHref: Optional[str] = Field(None, validation_alias=AliasChoices("ctaHref", "cta_url"))


class FeatureCardPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    icon: Optional[str] = None
    title: str
    headline: Optional[str] = None
    # "copy" would shadow BaseModel.copy
    copy_text: Optional[str] = Field(None, validation_alias=AliasChoices("copy", "copy_text"), serialization_alias="copy")
    count_value: Optional[int] = None


class AboutStatPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    value: str
    label: str


class AboutHighlightPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    copy_text: str = Field(..., validation_alias=AliasChoices("copy", "copy_text"), serialization_alias="copy")


class ContactChannelPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    value: str
    detail: Optional[str] = None
