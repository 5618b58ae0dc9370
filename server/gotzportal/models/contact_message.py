"""Contact message model definition."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import SoftDeleteMixin, TimestampMixin


class ContactMessageStatus(str, Enum):
    """Contact message statuses."""
    NEW = "new"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


class ContactMessage(TimestampMixin, SoftDeleteMixin, Base):
    """Message left through the public contact form."""

    __tablename__ = "contact_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(160), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ContactMessageStatus.NEW.value,
        index=True
    )
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<ContactMessage(id={self.id}, email='{self.email}', status={self.status})>"
