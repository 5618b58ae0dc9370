"""FastAPI routers package."""

from .admin_content import content_routers
from .auth import admin_router as users_admin_router
from .auth import router as auth_router
from .booking import admin_router as booking_admin_router
from .booking import router as booking_router
from .contact import admin_router as contact_admin_router
from .contact import router as contact_router
from .dashboard import router as dashboard_router
from .health import router as health_router
from .metrics import router as metrics_router
from .public_content import router as public_content_router

__all__ = [
    "auth_router",
    "booking_admin_router",
    "booking_router",
    "contact_admin_router",
    "contact_router",
    "content_routers",
    "dashboard_router",
    "health_router",
    "metrics_router",
    "public_content_router",
    "users_admin_router",
]
