"""Booking routes: the public booking form and the admin booking workflow."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_store, parse_positive_id, read_json_body, require_admin
from ..core.exceptions import InternalServerError, ProblemDetailsException, validation_error_from
from ..core.observability import metrics_collector
from ..schemas.booking import BookingCreated, BookingUpdate
from ..services.booking_service import BookingService
from ..services.memory_store import MemoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["booking"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)
STORE_DEPENDENCY = Depends(get_store)


@router.post("/bookings", status_code=201, response_model=BookingCreated)
async def create_booking(
    request: Request,
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    """
    Accept a booking request from the public site.

    Stored in the database when one is configured, in memory otherwise.
    """
    payload = await read_json_body(request)
    try:
        booking_id, backend = await BookingService(db, store).submit_booking(payload)
    except ProblemDetailsException:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error in booking submission",
            extra={"error": str(e)},
            exc_info=True
        )
        raise InternalServerError() from e

    metrics_collector.record_booking_received(backend)
    return JSONResponse(
        status_code=201,
        content=BookingCreated(booking_id=booking_id).model_dump()
    )


@admin_router.get("/bookings")
async def list_bookings(
    status: str = Query(None),
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    """List bookings newest first, optionally filtered by status (``all`` = no filter)."""
    bookings = await BookingService(db, store).list_bookings(status)
    return JSONResponse(
        status_code=200,
        content={"bookings": [b.model_dump() for b in bookings]}
    )


@admin_router.get("/bookings/{booking_id}")
async def get_booking(
    booking_id: str,
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    booking = await BookingService(db, store).get_booking(parse_positive_id(booking_id))
    return JSONResponse(status_code=200, content={"booking": booking.model_dump()})


@admin_router.patch("/bookings/{booking_id}")
async def update_booking(
    booking_id: str,
    request: Request,
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    """Change a booking's status and/or admin notes."""
    item_id = parse_positive_id(booking_id)
    payload = await read_json_body(request)
    try:
        update = BookingUpdate.model_validate(payload)
    except PydanticValidationError as e:
        raise validation_error_from(e)

    booking = await BookingService(db, store).update_booking(item_id, update)
    return JSONResponse(status_code=200, content={"booking": booking.model_dump()})


@admin_router.post("/bookings/{booking_id}/complete")
async def complete_booking(
    booking_id: str,
    db: AsyncSession = DB_DEPENDENCY,
    store: MemoryStore = STORE_DEPENDENCY,
) -> JSONResponse:
    booking = await BookingService(db, store).complete_booking(parse_positive_id(booking_id))
    return JSONResponse(status_code=200, content={"booking": booking.model_dump()})
