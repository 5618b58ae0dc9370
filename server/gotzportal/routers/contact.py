"""Contact routes: the public contact form and admin message triage."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_store, parse_positive_id, read_json_body, require_admin
from ..core.exceptions import InternalServerError, ProblemDetailsException, ValidationError, validation_error_from
from ..core.observability import metrics_collector
from ..schemas.contact import ContactMessageStatusUpdate, ContactReceived
from ..services.contact_service import ContactService
from ..services.memory_store import MemoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contact"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])

DB_DEPENDENCY = Depends(get_db)
STORE_DEPENDENCY = Depends(get_store)

STATUS_REQUIRED_DETAIL = "status required"


@router.post("/contact", status_code=202, response_model=ContactReceived)
async def submit_contact_message(
    request: Request,
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    """Accept a contact form message; answered with 202 once stored."""
    payload = await read_json_body(request)
    try:
        message_id, backend = await ContactService(db, store).submit_message(payload)
    except ProblemDetailsException:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error in contact submission",
            extra={"error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e

    metrics_collector.record_contact_message_received(backend)
    return JSONResponse(
        status_code=202,
        content=ContactReceived(message_id=message_id).model_dump()
    )


@admin_router.get("/contact-messages")
async def list_contact_messages(
    status: str = Query(None),
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    """Messages newest first plus inbox counts; counts ignore the status filter."""
    messages, stats = await ContactService(db, store).list_messages_with_stats(status)
    return JSONResponse(
        status_code=200,
        content={
            "messages": [m.model_dump() for m in messages],
            "stats": stats.model_dump(),
        }
    )


@admin_router.get("/contact-messages/{message_id}")
async def get_contact_message(
    message_id: str,
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    message = await ContactService(db, store).get_message(parse_positive_id(message_id))
    return JSONResponse(status_code=200, content={"message": message.model_dump()})


@admin_router.patch("/contact-messages/{message_id}")
async def update_contact_message(
    message_id: str,
    request: Request,
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    item_id = parse_positive_id(message_id)
    payload = await read_json_body(request)
    status = payload.get("status")
    if not isinstance(status, str) or not status.strip():
        raise ValidationError(detail=STATUS_REQUIRED_DETAIL)

    try:
        update = ContactMessageStatusUpdate(status=status.strip())
    except PydanticValidationError as e:
        raise validation_error_from(e)

    message = await ContactService(db, store).update_status(item_id, update.status)
    return JSONResponse(status_code=200, content={"message": message.model_dump()})


@admin_router.post("/contact-messages/{message_id}/resolve")
async def resolve_contact_message(
    message_id: str,
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    """Close a message, stamping ``resolved_at``."""
    message = await ContactService(db, store).resolve_message(parse_positive_id(message_id))
    return JSONResponse(status_code=200, content={"message": message.model_dump()})
