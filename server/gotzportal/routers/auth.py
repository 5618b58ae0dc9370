"""Login, registration and admin user management routes."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import read_json_body, require_admin
from ..services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])

DB_DEPENDENCY = Depends(get_db)

INVALID_LOGIN_BODY_DETAIL = "Invalid request body. Send JSON with email and password."
INVALID_REGISTER_BODY_DETAIL = "Invalid request."


@router.post("/login")
async def login(request: Request, db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """
    Exchange email and password for the admin bearer token.

    Database accounts are checked first, then the shared ADMIN_PASSWORD.
    """
    payload = await read_json_body(request, detail=INVALID_LOGIN_BODY_DETAIL)
    response = await UserService(db).login(payload)
    return JSONResponse(status_code=200, content=response.model_dump())


@router.post("/register")
async def register(request: Request, db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """Self-service account creation; only available with a database."""
    UserService.ensure_registration_available()
    payload = await read_json_body(request, detail=INVALID_REGISTER_BODY_DETAIL)
    response = await UserService(db).register(payload)
    return JSONResponse(status_code=200, content=response.model_dump())


@admin_router.get("/users")
async def list_users(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    users = await UserService(db).list_users()
    return JSONResponse(status_code=200, content={"users": [u.model_dump() for u in users]})


@admin_router.post("/users")
async def create_user(request: Request, db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """Create an admin console account; ``role`` defaults to ``admin``."""
    payload = await read_json_body(request)
    user = await UserService(db).create_user(payload)
    return JSONResponse(status_code=200, content={"user": user.model_dump()})
