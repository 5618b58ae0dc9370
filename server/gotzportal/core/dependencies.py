"""FastAPI dependencies for the admin gate, request bodies and per-app state."""

import json
import logging
import secrets
from typing import Any, Optional

from fastapi import Header, Request

from .config import settings
from .exceptions import AuthenticationError, BadRequestError
from .observability import metrics_collector

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_admin_token() -> str:
    """Return the shared admin secret (``ADMIN_PASSWORD`` or the dev sentinel)."""
    return settings.admin_token


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the trimmed token after a literal ``Bearer `` prefix, or None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def is_authenticated(authorization: Optional[str]) -> bool:
    """
    Check an ``Authorization`` header against the admin secret.

    False for a missing header, another scheme, an empty token and a wrong
    token alike. Pure: no logging, no metrics, no storage access.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return False
    return secrets.compare_digest(token.encode("utf-8"), get_admin_token().encode("utf-8"))


async def require_admin(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> None:
    """
    Router-level gate for every ``/api/admin`` route.

    Runs before the handler reads its body or opens any storage, and answers
    every failure with the same 401.

    Raises:
        AuthenticationError: If the bearer token is missing or wrong
    """
    if is_authenticated(authorization):
        return
    metrics_collector.record_admin_auth_failure()
    logger.warning(
        "Admin request rejected",
        extra={"path": request.url.path, "method": request.method}
    )
    raise AuthenticationError()


async def read_json_body(
    request: Request,
    detail: str = "Invalid JSON body",
) -> dict[str, Any]:
    """
    Parse the request body as a JSON object.

    An empty body counts as ``{}``. Anything that is not a JSON object is a
    400 with ``detail`` as the message.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise BadRequestError(detail=detail)
    if not isinstance(payload, dict):
        raise BadRequestError(detail=detail)
    return payload


def parse_positive_id(raw: str) -> int:
    """Parse a path id; anything but a positive integer is a 400 ``Invalid id``."""
    if not raw or not (raw.isascii() and raw.isdigit()) or int(raw) < 1:
        raise BadRequestError(detail="Invalid id")
    return int(raw)


def get_store(request: Request):
    """Return the application's in-memory store."""
    return request.app.state.store


def get_fallbacks(request: Request):
    """Return the application's fallback content."""
    return request.app.state.fallbacks
