"""Admin CRUD routes, one set per content resource."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import parse_positive_id, read_json_body, require_admin
from ..schemas.common import MessageResponse
from ..services.admin_content_service import AdminContentService
from ..services.content_resources import CONTENT_RESOURCES, ContentResource

DB_DEPENDENCY = Depends(get_db)


def build_content_router(resource: ContentResource) -> APIRouter:
    """
    Routes for one resource under ``/api/admin/<path>``.

    Every route sits behind the admin gate; ids are checked before storage
    is consulted.
    """
    router = APIRouter(
        prefix=f"/api/admin/{resource.path}",
        tags=["admin"],
        dependencies=[Depends(require_admin)],
    )

    @router.get("", name=f"list_{resource.plural}")
    async def list_items(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
        items = await AdminContentService(db, resource).list_items()
        return JSONResponse(status_code=200, content={resource.plural: items})

    @router.post("", name=f"create_{resource.singular}")
    async def create_item(request: Request, db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
        payload = await read_json_body(request)
        item = await AdminContentService(db, resource).create_item(payload)
        return JSONResponse(status_code=200, content={resource.singular: item})

    @router.get("/{item_id}", name=f"get_{resource.singular}")
    async def get_item(item_id: str, db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
        item = await AdminContentService(db, resource).get_item(parse_positive_id(item_id))
        return JSONResponse(status_code=200, content={resource.singular: item})

    @router.patch("/{item_id}", name=f"update_{resource.singular}")
    async def update_item(item_id: str, request: Request, db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
        parsed_id = parse_positive_id(item_id)
        payload = await read_json_body(request)
        item = await AdminContentService(db, resource).update_item(parsed_id, payload)
        return JSONResponse(status_code=200, content={resource.singular: item})

    @router.delete("/{item_id}", name=f"delete_{resource.singular}")
    async def delete_item(item_id: str, db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
        await AdminContentService(db, resource).delete_item(parse_positive_id(item_id))
        return JSONResponse(status_code=200, content=MessageResponse(message="Deleted").model_dump())

    return router


content_routers: list[APIRouter] = [build_content_router(resource) for resource in CONTENT_RESOURCES]
