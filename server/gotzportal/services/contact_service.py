"""Contact message service: public submissions and admin triage."""

import logging
import re
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ValidationError
from ..models.contact_message import ContactMessage, ContactMessageStatus
from ..models.mixins import utcnow
from ..schemas.contact import (
    MAX_EMAIL_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    AdminContactMessage,
    ContactFields,
    ContactMessageStats,
)
from .memory_store import MemoryStore
from .resolution import resolve_admin_read, resolve_write
from .serialization import to_iso

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS_DETAIL = "Name, email, and message are required."
INVALID_EMAIL_DETAIL = "Please provide a valid email address."
MESSAGE_NOT_FOUND_DETAIL = "Message not found"


def _too_long(field: str, limit: int) -> ValidationError:
    return ValidationError(
        detail=f"{field} must not exceed {limit} characters.",
        violations=[{"path": field.lower(), "message": f"max length {limit}"}],
    )


def validate_contact_submission(payload: dict[str, Any]) -> ContactFields:
    """
    Validate a contact form body, reporting the first problem found.

    Order: required fields, name length, email shape, email length, phone
    length, message length.

    Raises:
        ValidationError: With the message the contact form displays
    """
    name = payload.get("name").strip() if isinstance(payload.get("name"), str) else ""
    email = payload.get("email").strip() if isinstance(payload.get("email"), str) else ""
    message = payload.get("message").strip() if isinstance(payload.get("message"), str) else ""
    phone = str(payload["phone"]).strip() if payload.get("phone") is not None else None

    if not name or not email or not message:
        raise ValidationError(detail=REQUIRED_FIELDS_DETAIL)
    if len(name) > MAX_NAME_LENGTH:
        raise _too_long("Name", MAX_NAME_LENGTH)
    if not EMAIL_PATTERN.match(email):
        raise ValidationError(detail=INVALID_EMAIL_DETAIL)
    if len(email) > MAX_EMAIL_LENGTH:
        raise _too_long("Email", MAX_EMAIL_LENGTH)
    if phone and len(phone) > MAX_PHONE_LENGTH:
        raise _too_long("Phone", MAX_PHONE_LENGTH)
    if len(message) > MAX_MESSAGE_LENGTH:
        raise _too_long("Message", MAX_MESSAGE_LENGTH)

    return ContactFields(name=name, email=email, phone=phone or None, message=message)


def to_admin_message(record: Any) -> AdminContactMessage:
    """Map a contact message (ORM row or in-memory record) to its admin view."""
    return AdminContactMessage(
        id=record.id,
        name=record.name,
        email=record.email,
        phone=record.phone,
        message=record.message,
        status=record.status,
        created_at=to_iso(record.created_at),
        updated_at=to_iso(record.updated_at),
        resolved_at=to_iso(record.resolved_at),
    )


def summarize(messages: list[AdminContactMessage]) -> ContactMessageStats:
    return ContactMessageStats(
        total=len(messages),
        new=sum(1 for m in messages if m.status == ContactMessageStatus.NEW.value),
        closed=sum(1 for m in messages if m.status == ContactMessageStatus.CLOSED.value),
    )


class ContactService:
    """Service for contact messages over the database or the in-memory store."""

    def __init__(self, db: Optional[AsyncSession], store: MemoryStore):
        self.db = db
        self.store = store

    async def submit_message(self, payload: dict[str, Any]) -> tuple[int, str]:
        """
        Validate and persist a contact form submission.

        Returns:
            The new message id and the backend that stored it
        """
        fields = validate_contact_submission(payload)

        async def insert_into_database() -> int:
            row = ContactMessage(**fields.model_dump())
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
            return row.id

        message_id, backend = await resolve_write(
            insert_into_database,
            lambda: self.store.create_contact_message(fields).id,
        )

        logger.info(
            "Contact message received",
            extra={"message_id": message_id, "backend": backend, "has_phone": fields.phone is not None}
        )
        return message_id, backend

    async def list_messages(self, status: Optional[str] = None) -> list[AdminContactMessage]:
        """List messages newest first; ``status`` of None or ``all`` means no filter."""
        status_filter = status if status and status != "all" else None

        async def from_database() -> list[AdminContactMessage]:
            stmt = select(ContactMessage).where(ContactMessage.deleted_at.is_(None))
            if status_filter:
                stmt = stmt.where(ContactMessage.status == status_filter)
            stmt = stmt.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
            result = await self.db.execute(stmt)
            return [to_admin_message(row) for row in result.scalars().all()]

        def from_memory() -> list[AdminContactMessage]:
            records = self.store.list_contact_messages()
            if status_filter:
                records = [r for r in records if r.status == status_filter]
            records.sort(key=lambda r: (r.created_at, r.id), reverse=True)
            return [to_admin_message(r) for r in records]

        return await resolve_admin_read(from_database, from_memory)

    async def list_messages_with_stats(
        self, status: Optional[str] = None
    ) -> tuple[list[AdminContactMessage], ContactMessageStats]:
        """Filtered listing plus counts over every message."""
        messages = await self.list_messages(status)
        if status and status != "all":
            stats = summarize(await self.list_messages())
        else:
            stats = summarize(messages)
        return messages, stats

    async def get_message(self, message_id: int) -> AdminContactMessage:
        """
        Get one message.

        Raises:
            NotFoundError: If no live message has this id
        """
        async def from_database() -> Optional[AdminContactMessage]:
            row = await self._get_row(message_id)
            return to_admin_message(row) if row else None

        def from_memory() -> Optional[AdminContactMessage]:
            record = self.store.get_contact_message(message_id)
            return to_admin_message(record) if record else None

        message = await resolve_admin_read(from_database, from_memory)
        if message is None:
            raise NotFoundError("contact_message", str(message_id), detail=MESSAGE_NOT_FOUND_DETAIL)
        return message

    async def update_status(self, message_id: int, status: str) -> AdminContactMessage:
        """
        Change a message's status; ``closed`` stamps ``resolved_at``.

        Raises:
            NotFoundError: If no live message has this id
        """
        async def in_database() -> bool:
            row = await self._get_row(message_id)
            if row is None:
                return False
            now = utcnow()
            row.status = status
            row.updated_at = now
            if status == ContactMessageStatus.CLOSED.value:
                row.resolved_at = now
            await self.db.commit()
            return True

        def in_memory() -> bool:
            return self.store.update_contact_message_status(message_id, status) is not None

        found, backend = await resolve_write(in_database, in_memory)
        if not found:
            raise NotFoundError("contact_message", str(message_id), detail=MESSAGE_NOT_FOUND_DETAIL)

        logger.info(
            "Contact message status changed",
            extra={"message_id": message_id, "status": status, "backend": backend}
        )
        return await self.get_message(message_id)

    async def resolve_message(self, message_id: int) -> AdminContactMessage:
        """Close a message."""
        return await self.update_status(message_id, ContactMessageStatus.CLOSED.value)

    async def _get_row(self, message_id: int) -> Optional[ContactMessage]:
        stmt = select(ContactMessage).where(
            ContactMessage.id == message_id,
            ContactMessage.deleted_at.is_(None),
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
