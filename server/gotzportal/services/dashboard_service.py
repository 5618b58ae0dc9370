"""Admin dashboard summary."""

import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import has_db
from ..models.booking import BookingStatus
from ..models.catalog import TourPackage
from ..models.contact_message import ContactMessageStatus
from .booking_service import BookingService, to_admin_booking
from .contact_service import ContactService, to_admin_message
from .memory_store import MemoryStore
from .resolution import attempt_read, or_fallback

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


class DashboardService:
    """Counts and recent activity for the admin landing page."""

    def __init__(self, db: Optional[AsyncSession], store: MemoryStore):
        self.db = db
        self.store = store

    def _from_memory(self) -> tuple[list[Any], list[Any]]:
        bookings = [to_admin_booking(record) for record in self.store.list_bookings()]
        messages = [to_admin_message(record) for record in self.store.list_contact_messages()]
        return bookings, messages

    async def _activity(self) -> tuple[list[Any], list[Any]]:
        """Bookings and messages, from memory when the database is absent or failing."""
        if not has_db():
            return self._from_memory()

        async def from_database() -> tuple[list[Any], list[Any]]:
            bookings = await BookingService(self.db, self.store).list_bookings()
            messages = await ContactService(self.db, self.store).list_messages()
            return bookings, messages

        result = await attempt_read(from_database)
        if not result.ok:
            return or_fallback(result, self._from_memory(), "dashboard").value
        return result.value

    async def count_published_packages(self) -> int:
        if not has_db():
            return 0

        async def query() -> int:
            stmt = select(func.count()).select_from(TourPackage).where(
                TourPackage.deleted_at.is_(None),
                TourPackage.published_at.is_not(None),
            )
            return (await self.db.execute(stmt)).scalar_one()

        return or_fallback(await attempt_read(query), 0, "tour_packages_count").value

    async def summary(self) -> dict[str, Any]:
        bookings, messages = await self._activity()

        def newest(items: list[Any]) -> list[dict[str, Any]]:
            ordered = sorted(items, key=lambda item: (item.created_at or "", item.id), reverse=True)
            return [item.model_dump() for item in ordered[:RECENT_LIMIT]]

        return {
            "pending_bookings": sum(1 for b in bookings if b.status == BookingStatus.PENDING.value),
            "new_messages": sum(1 for m in messages if m.status == ContactMessageStatus.NEW.value),
            "total_bookings": len(bookings),
            "total_messages": len(messages),
            "tour_packages_count": await self.count_published_packages(),
            "recent_bookings": newest(bookings),
            "recent_messages": newest(messages),
        }
