"""Service layer package."""

from .admin_content_service import AdminContentService
from .booking_service import BookingService
from .contact_service import ContactService
from .content_service import ContentService
from .dashboard_service import DashboardService
from .fallbacks import FallbackData
from .memory_store import MemoryStore
from .user_service import UserService

__all__ = [
    "AdminContentService",
    "BookingService",
    "ContactService",
    "ContentService",
    "DashboardService",
    "FallbackData",
    "MemoryStore",
    "UserService",
]
