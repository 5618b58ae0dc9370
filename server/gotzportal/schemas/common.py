"""Common Pydantic schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="Dotted path to the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response, plus the site's ``message`` member."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human-readable message shown by the site")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")


class MessageResponse(BaseModel):
    """Bare acknowledgement, e.g. ``{"message": "Deleted"}``."""

    message: str


class PageMeta(BaseModel):
    """Listing metadata returned next to paginated public data."""

    per_page: int = Field(..., ge=1, le=50)
    total: int = Field(..., ge=0)
