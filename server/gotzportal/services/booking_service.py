"""Booking service: public submissions and the admin booking workflow."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ValidationError
from ..models.booking import Booking, BookingStatus
from ..models.catalog import TourPackage
from ..models.mixins import utcnow
from ..schemas.booking import AdminBooking, BookingFields, BookingUpdate, TourPackageRef
from .memory_store import MemoryStore
from .resolution import resolve_admin_read, resolve_write
from .serialization import to_iso

logger = logging.getLogger(__name__)

MIN_TRAVELERS = 1
MAX_TRAVELERS = 100

REQUIRED_CONTACT_DETAIL = "Full name, email, and phone are required."
TRAVELERS_RANGE_DETAIL = "Number of travelers must be between 1 and 100."
PACKAGE_NOT_FOUND_DETAIL = "The selected tour package could not be found."
TRAVEL_DATE_DETAIL = "Travel date must be a valid date (YYYY-MM-DD)."
BOOKING_NOT_FOUND_DETAIL = "Booking not found"

# Shown for packages that were soft-deleted or exist only as an id
UNKNOWN_PACKAGE_TITLE = "—"


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_whole_number(value: Any) -> Optional[int]:
    """
    Read an integer from JSON input.

    Accepts ints, integral floats and numeric strings; booleans and anything
    else yield None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _parse_travel_date(value: Any) -> Optional[date]:
    text = _optional_text(value)
    if text is None:
        return None
    try:
        # Accept full timestamps by keeping the calendar date
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(detail=TRAVEL_DATE_DETAIL)


@dataclass
class BookingSubmission:
    """A booking request that passed validation but whose package is not yet resolved."""

    fields: dict[str, Any]
    tour_package_id: Optional[int]
    package_slug: Optional[str]
    package_requested: bool

    def with_package(self, package_id: Optional[int]) -> BookingFields:
        if package_id is None and self.package_requested:
            raise ValidationError(detail=PACKAGE_NOT_FOUND_DETAIL)
        return BookingFields(tour_package_id=package_id, **self.fields)


def validate_booking_submission(payload: dict[str, Any]) -> BookingSubmission:
    """
    Validate a public booking request body.

    Checks run in a fixed order and the first failure wins: contact details,
    then traveller count, then travel date.

    Raises:
        ValidationError: With the message the booking form displays
    """
    full_name = _trimmed(payload.get("full_name"))
    email = _trimmed(payload.get("email"))
    phone = _trimmed(payload.get("phone"))
    if not full_name or not email or not phone:
        raise ValidationError(detail=REQUIRED_CONTACT_DETAIL)

    travelers = parse_whole_number(payload.get("number_of_travelers"))
    if travelers is None or not MIN_TRAVELERS <= travelers <= MAX_TRAVELERS:
        raise ValidationError(detail=TRAVELERS_RANGE_DETAIL)

    customization = payload.get("customization_data")
    raw_package_id = payload.get("tour_package_id")
    package_id = parse_whole_number(raw_package_id)
    package_slug = _trimmed(payload.get("package_slug")) or None

    return BookingSubmission(
        fields={
            "full_name": full_name,
            "email": email,
            "phone": phone,
            "whatsapp": _optional_text(payload.get("whatsapp")),
            "travel_date": _parse_travel_date(payload.get("travel_date")),
            "number_of_travelers": travelers,
            "customization_data": customization if isinstance(customization, dict) else None,
            "special_requests": _optional_text(payload.get("special_requests")),
        },
        tour_package_id=package_id if package_id and package_id > 0 else None,
        package_slug=package_slug,
        package_requested=raw_package_id is not None or package_slug is not None,
    )


def to_admin_booking(record: Any, package: Optional[TourPackage] = None) -> AdminBooking:
    """
    Map a booking (ORM row or in-memory record) to its admin view.

    ``tour_package`` is null for general inquiries; a reference whose
    package is gone keeps its id with a placeholder title.
    """
    package_ref = None
    if record.tour_package_id:
        package_ref = TourPackageRef(
            id=record.tour_package_id,
            title=package.title if package is not None else UNKNOWN_PACKAGE_TITLE,
            slug=package.slug if package is not None else "",
        )
    return AdminBooking(
        id=record.id,
        full_name=record.full_name,
        email=record.email,
        phone=record.phone,
        whatsapp=record.whatsapp,
        travel_date=to_iso(record.travel_date)[:10] if record.travel_date else None,
        number_of_travelers=record.number_of_travelers,
        status=record.status,
        created_at=to_iso(record.created_at),
        updated_at=to_iso(record.updated_at),
        tour_package=package_ref,
        customization_data=record.customization_data,
        special_requests=record.special_requests,
        admin_notes=record.admin_notes,
        completed_at=to_iso(record.completed_at),
    )


class BookingService:
    """Service for booking operations over the database or the in-memory store."""

    def __init__(self, db: Optional[AsyncSession], store: MemoryStore):
        self.db = db
        self.store = store

    async def submit_booking(self, payload: dict[str, Any]) -> tuple[int, str]:
        """
        Validate and persist a public booking request.

        Returns:
            The new booking id and the backend that stored it

        Raises:
            ValidationError: If the request is invalid or names an unknown package
        """
        submission = validate_booking_submission(payload)

        async def insert_into_database() -> int:
            package_id = submission.tour_package_id
            if package_id is None and submission.package_slug:
                package_id = await self.get_tour_package_id_by_slug(submission.package_slug)
            fields = submission.with_package(package_id)

            booking = Booking(**fields.model_dump())
            self.db.add(booking)
            await self.db.commit()
            await self.db.refresh(booking)
            return booking.id

        def insert_into_memory() -> int:
            package_id = submission.tour_package_id
            if package_id is None and submission.package_slug:
                package_id = self.store.get_tour_package_id_by_slug(submission.package_slug)
            return self.store.create_booking(submission.with_package(package_id)).id

        booking_id, backend = await resolve_write(insert_into_database, insert_into_memory)

        logger.info(
            "Booking received",
            extra={
                "booking_id": booking_id,
                "backend": backend,
                "number_of_travelers": submission.fields["number_of_travelers"],
                "has_package": submission.package_requested,
            }
        )
        return booking_id, backend

    async def get_tour_package_id_by_slug(self, slug: str) -> Optional[int]:
        stmt = select(TourPackage.id).where(
            TourPackage.slug == slug,
            TourPackage.deleted_at.is_(None),
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    def _with_package_stmt(self):
        return select(Booking, TourPackage).outerjoin(
            TourPackage,
            and_(Booking.tour_package_id == TourPackage.id, TourPackage.deleted_at.is_(None)),
        )

    async def list_bookings(self, status: Optional[str] = None) -> list[AdminBooking]:
        """List bookings newest first; ``status`` of None or ``all`` means no filter."""
        status_filter = status if status and status != "all" else None

        async def from_database() -> list[AdminBooking]:
            stmt = self._with_package_stmt()
            if status_filter:
                stmt = stmt.where(Booking.status == status_filter)
            stmt = stmt.order_by(Booking.created_at.desc(), Booking.id.desc())
            result = await self.db.execute(stmt)
            return [to_admin_booking(booking, package) for booking, package in result.all()]

        def from_memory() -> list[AdminBooking]:
            records = self.store.list_bookings()
            if status_filter:
                records = [r for r in records if r.status == status_filter]
            records.sort(key=lambda r: (r.created_at, r.id), reverse=True)
            return [to_admin_booking(r) for r in records]

        return await resolve_admin_read(from_database, from_memory)

    async def get_booking(self, booking_id: int) -> AdminBooking:
        """
        Get one booking for the admin console.

        Raises:
            NotFoundError: If no booking has this id
        """
        async def from_database() -> Optional[AdminBooking]:
            result = await self.db.execute(self._with_package_stmt().where(Booking.id == booking_id))
            row = result.first()
            return to_admin_booking(row[0], row[1]) if row else None

        def from_memory() -> Optional[AdminBooking]:
            record = self.store.get_booking(booking_id)
            return to_admin_booking(record) if record else None

        booking = await resolve_admin_read(from_database, from_memory)
        if booking is None:
            raise NotFoundError("booking", str(booking_id), detail=BOOKING_NOT_FOUND_DETAIL)
        return booking

    async def update_booking(self, booking_id: int, update: BookingUpdate) -> AdminBooking:
        """
        Apply an admin status / notes change.

        Setting status ``completed`` stamps ``completed_at`` on every call.

        Raises:
            NotFoundError: If no booking has this id
        """
        async def in_database() -> bool:
            booking = await self.db.get(Booking, booking_id)
            if booking is None:
                return False
            if update.status is not None:
                booking.status = update.status
                if update.status == BookingStatus.COMPLETED.value:
                    booking.completed_at = utcnow()
            if update.admin_notes is not None:
                booking.admin_notes = update.admin_notes
            booking.updated_at = utcnow()
            await self.db.commit()
            return True

        def in_memory() -> bool:
            return self.store.update_booking(booking_id, update.status, update.admin_notes) is not None

        found, backend = await resolve_write(in_database, in_memory)
        if not found:
            raise NotFoundError("booking", str(booking_id), detail=BOOKING_NOT_FOUND_DETAIL)

        logger.info(
            "Booking updated",
            extra={"booking_id": booking_id, "status": update.status, "backend": backend}
        )
        return await self.get_booking(booking_id)

    async def complete_booking(self, booking_id: int) -> AdminBooking:
        """Mark a booking completed."""
        return await self.update_booking(booking_id, BookingUpdate(status=BookingStatus.COMPLETED.value))

