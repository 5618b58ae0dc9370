"""Booking-related Pydantic schemas."""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field


class BookingFields(BaseModel):
    """Validated booking submission, ready for either storage backend."""

    tour_package_id: Optional[int] = None
    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    whatsapp: Optional[str] = None
    travel_date: Optional[date] = None
    number_of_travelers: int = Field(..., ge=1, le=100)
    customization_data: Optional[dict[str, Any]] = None
    special_requests: Optional[str] = None


class BookingCreated(BaseModel):
    """Acknowledgement for ``POST /api/bookings``."""

    status: str = "created"
    message: str = "Booking received."
    booking_id: int


class TourPackageRef(BaseModel):
    """Package summary embedded in admin booking views."""

    id: int
    title: str
    slug: str


class AdminBooking(BaseModel):
    """Booking as shown in the admin console."""

    id: int
    full_name: str
    email: str
    phone: str
    whatsapp: Optional[str] = None
    travel_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    number_of_travelers: int
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    tour_package: Optional[TourPackageRef] = None
    customization_data: Optional[dict[str, Any]] = None
    special_requests: Optional[str] = None
    admin_notes: Optional[str] = None
    completed_at: Optional[str] = None


class BookingUpdate(BaseModel):
    """Admin patch for a booking; absent fields stay untouched."""

    status: Optional[str] = Field(None, min_length=1, max_length=20)
    admin_notes: Optional[str] = None
