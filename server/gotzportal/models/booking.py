"""Booking model definition."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import TimestampMixin


class BookingStatus(str, Enum):
    """Booking statuses the admin console works with."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Booking(TimestampMixin, Base):
    """Booking request submitted from the public site."""

    __tablename__ = "bookings"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Optional package reference; general inquiries carry none
    tour_package_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("tour_packages.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Traveller details
    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    whatsapp: Mapped[str | None] = mapped_column(Text, nullable=True)
    travel_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    number_of_travelers: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    customization_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Admin workflow
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.PENDING.value,
        index=True
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "number_of_travelers >= 1 AND number_of_travelers <= 100",
            name="ck_booking_travelers_range"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, email='{self.email}', "
            f"travelers={self.number_of_travelers}, status={self.status})>"
        )
