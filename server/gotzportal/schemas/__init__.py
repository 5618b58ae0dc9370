"""Pydantic schemas for request/response validation."""

from .admin_content import *  # noqa: F403
from .booking import *  # noqa: F403
from .catalog import *  # noqa: F403
from .common import *  # noqa: F403
from .contact import *  # noqa: F403
from .content import *  # noqa: F403
from .health import *  # noqa: F403
from .user import *  # noqa: F403
