"""Admin dashboard route."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import get_store, require_admin
from ..services.dashboard_service import DashboardService
from ..services.memory_store import MemoryStore

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])

DB_DEPENDENCY = Depends(get_db)
STORE_DEPENDENCY = Depends(get_store)


@router.get("/dashboard")
async def dashboard(db: AsyncSession = DB_DEPENDENCY, store: MemoryStore = STORE_DEPENDENCY) -> JSONResponse:
    """Pending work counts and the five newest bookings and messages."""
    summary = await DashboardService(db, store).summary()
    return JSONResponse(status_code=200, content=summary)
