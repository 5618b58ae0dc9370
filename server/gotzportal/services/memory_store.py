"""Process-lifetime storage for bookings and contact messages without a database."""

import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any, Optional

from ..core.observability import get_logger
from ..models.booking import BookingStatus
from ..models.contact_message import ContactMessageStatus
from ..schemas.booking import BookingFields
from ..schemas.contact import ContactFields

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StoredContactMessage:
    id: int
    name: str
    email: str
    message: str
    phone: Optional[str] = None
    status: str = ContactMessageStatus.NEW.value
    created_at: datetime = field(default_factory=_now)
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None


@dataclass
class StoredBooking:
    id: int
    full_name: str
    email: str
    phone: str
    number_of_travelers: int
    tour_package_id: Optional[int] = None
    whatsapp: Optional[str] = None
    travel_date: Optional[date] = None
    customization_data: Optional[dict[str, Any]] = None
    special_requests: Optional[str] = None
    status: str = BookingStatus.PENDING.value
    admin_notes: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=_now)
    updated_at: Optional[datetime] = None


class MemoryStore:
    """
    In-memory bookings and contact messages with their own id counters.

    One instance lives on ``app.state.store`` for the life of the process;
    nothing survives a restart. All access goes through a lock because sync
    handlers may run on worker threads. Reads hand out copies so callers
    never observe a record mid-update.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._next_contact_id = 1
        self._next_booking_id = 1
        self._contact_messages: list[StoredContactMessage] = []
        self._bookings: list[StoredBooking] = []

    # Contact messages

    def create_contact_message(self, fields: ContactFields) -> StoredContactMessage:
        with self._lock:
            message = StoredContactMessage(id=self._next_contact_id, **fields.model_dump())
            self._next_contact_id += 1
            self._contact_messages.append(message)
            stored = replace(message)
        logger.info("Contact message stored in memory", message_id=stored.id)
        return stored

    def list_contact_messages(self) -> list[StoredContactMessage]:
        with self._lock:
            return [replace(m) for m in self._contact_messages]

    def get_contact_message(self, message_id: int) -> Optional[StoredContactMessage]:
        with self._lock:
            message = self._find(self._contact_messages, message_id)
            return replace(message) if message else None

    def update_contact_message_status(self, message_id: int, status: str) -> Optional[StoredContactMessage]:
        """Set a message's status; ``closed`` stamps ``resolved_at``. None if unknown."""
        with self._lock:
            message = self._find(self._contact_messages, message_id)
            if message is None:
                return None
            now = _now()
            message.status = status
            message.updated_at = now
            if status == ContactMessageStatus.CLOSED.value:
                message.resolved_at = now
            return replace(message)

    # Bookings

    def create_booking(self, fields: BookingFields) -> StoredBooking:
        with self._lock:
            booking = StoredBooking(id=self._next_booking_id, **fields.model_dump())
            self._next_booking_id += 1
            self._bookings.append(booking)
            stored = replace(booking)
        logger.info("Booking stored in memory", booking_id=stored.id)
        return stored

    def list_bookings(self) -> list[StoredBooking]:
        with self._lock:
            return [replace(b) for b in self._bookings]

    def get_booking(self, booking_id: int) -> Optional[StoredBooking]:
        with self._lock:
            booking = self._find(self._bookings, booking_id)
            return replace(booking) if booking else None

    def update_booking(
        self,
        booking_id: int,
        status: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> Optional[StoredBooking]:
        """
        Apply an admin update to a booking. None if unknown.

        Becoming (or being re-marked) ``completed`` stamps ``completed_at``
        with the current time, so repeated completion never moves it back.
        """
        with self._lock:
            booking = self._find(self._bookings, booking_id)
            if booking is None:
                return None
            now = _now()
            if status is not None:
                booking.status = status
            if admin_notes is not None:
                booking.admin_notes = admin_notes
            if status == BookingStatus.COMPLETED.value:
                booking.completed_at = now
            booking.updated_at = now
            return replace(booking)

    def get_tour_package_id_by_slug(self, slug: str) -> Optional[int]:
        """There is no package catalogue without a database; always None."""
        return None

    @staticmethod
    def _find(records, record_id: int):
        for record in records:
            if record.id == record_id:
                return record
        return None
