"""Admin CRUD over the content entities described in ``content_resources``."""

import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import has_db
from ..core.exceptions import ConflictError, NotFoundError, ValidationError, validation_error_from
from ..models.mixins import utcnow
from .content_resources import ContentResource, slugify
from .resolution import resolve_write
from .serialization import serialize_row

logger = logging.getLogger(__name__)

NOT_FOUND_DETAIL = "Not found"
CREATE_NOT_CONFIGURED_DETAIL = "Database not configured"
CHANGE_NOT_CONFIGURED_DETAIL = "Not implemented"


class AdminContentService:
    """CRUD for one content resource; rows are soft-deleted, never removed."""

    def __init__(self, db: Optional[AsyncSession], resource: ContentResource):
        self.db = db
        self.resource = resource

    def _validate(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            values = self.resource.schema.model_validate(data).model_dump(by_alias=True)
        except PydanticValidationError as e:
            raise validation_error_from(e)
        if self.resource.slug_source and not values.get("slug"):
            values["slug"] = slugify(values[self.resource.slug_source])
            if not values["slug"]:
                raise ValidationError(
                    detail=f"slug: could not be derived from {self.resource.slug_source}",
                    violations=[{"path": "slug", "message": "required"}],
                )
        return values

    async def _get_row(self, item_id: int):
        model = self.resource.model
        stmt = select(model).where(model.id == item_id, model.deleted_at.is_(None))
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                "Content write violated a constraint",
                extra={"resource": self.resource.path, "error": str(e.orig)}
            )
            raise ConflictError(detail=f"A {self.resource.singular.replace('_', ' ')} with this slug already exists.")

    async def list_items(self) -> list[dict[str, Any]]:
        """All live rows, inactive included; empty without a database."""
        if not has_db():
            return []
        model = self.resource.model
        stmt = (
            select(model)
            .where(model.deleted_at.is_(None))
            .order_by(getattr(model, self.resource.order_by).asc(), model.id.asc())
        )
        rows = (await self.db.execute(stmt)).scalars().all()
        return [serialize_row(row, self.resource.fields) for row in rows]

    async def get_item(self, item_id: int) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: Unknown or deleted id, or no database at all
        """
        if not has_db():
            raise NotFoundError(self.resource.singular, str(item_id), detail=NOT_FOUND_DETAIL)
        row = await self._get_row(item_id)
        if row is None:
            raise NotFoundError(self.resource.singular, str(item_id), detail=NOT_FOUND_DETAIL)
        return serialize_row(row, self.resource.fields)

    async def create_item(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Raises:
            BackendNotConfiguredError: Without a database
            ValidationError: Missing or mistyped fields
            ConflictError: Duplicate slug
        """
        async def insert() -> dict[str, Any]:
            values = self._validate(payload)
            if self.resource.stamp_published_on_create:
                values["published_at"] = utcnow()
            row = self.resource.model(**values)
            self.db.add(row)
            await self._commit()
            await self.db.refresh(row)
            return serialize_row(row, self.resource.fields)

        item, _ = await resolve_write(insert, not_configured_detail=CREATE_NOT_CONFIGURED_DETAIL)
        logger.info("Content created", extra={"resource": self.resource.path, "item_id": item["id"]})
        return item

    async def update_item(self, item_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Partial update: only writable keys present in ``payload`` change.

        The stored row merged with the patch must still be a valid row, so
        null is refused for required columns.
        """
        async def apply() -> dict[str, Any]:
            row = await self._get_row(item_id)
            if row is None:
                raise NotFoundError(self.resource.singular, str(item_id), detail=NOT_FOUND_DETAIL)

            writable = self.resource.writable_fields
            patch = {key: value for key, value in payload.items() if key in writable}
            current = {name: getattr(row, name) for name in writable}
            values = self._validate({**current, **patch})

            changed = set(patch)
            if "slug" in values and values["slug"] != current.get("slug"):
                changed.add("slug")
            for name in changed:
                setattr(row, name, values[name])
            row.updated_at = utcnow()

            await self._commit()
            await self.db.refresh(row)
            return serialize_row(row, self.resource.fields)

        item, _ = await resolve_write(apply, not_configured_detail=CHANGE_NOT_CONFIGURED_DETAIL)
        logger.info(
            "Content updated",
            extra={"resource": self.resource.path, "item_id": item_id, "fields": sorted(payload)}
        )
        return item

    async def delete_item(self, item_id: int) -> None:
        """Soft delete: stamps ``deleted_at`` so every read skips the row."""
        async def soft_delete() -> None:
            row = await self._get_row(item_id)
            if row is None:
                raise NotFoundError(self.resource.singular, str(item_id), detail=NOT_FOUND_DETAIL)
            row.deleted_at = utcnow()
            await self.db.commit()

        await resolve_write(soft_delete, not_configured_detail=CHANGE_NOT_CONFIGURED_DETAIL)
        logger.info("Content deleted", extra={"resource": self.resource.path, "item_id": item_id})
