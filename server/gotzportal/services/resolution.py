"""Storage resolution: database first, then fallback data, in-memory storage or 501.

A failed read degrades to fallback content and logs a warning. A failed
write surfaces as a 500.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from ..core.database import has_db
from ..core.exceptions import (
    GENERIC_FAILURE_DETAIL,
    BackendNotConfiguredError,
    InternalServerError,
    ProblemDetailsException,
)
from ..core.observability import get_logger, metrics_collector

logger = get_logger(__name__)

T = TypeVar("T")

SOURCE_DATABASE = "database"
SOURCE_FALLBACK = "fallback"
SOURCE_MEMORY = "memory"


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Outcome of a read: the value, where it came from, and why it degraded (if it did)."""

    value: Optional[T]
    source: str = SOURCE_DATABASE
    error: Optional[BaseException] = None
    warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def attempt_read(operation: Callable[[], Awaitable[T]]) -> ReadResult[T]:
    """Run a database read, capturing any failure in the result instead of raising."""
    try:
        return ReadResult(value=await operation())
    except Exception as e:
        return ReadResult(value=None, error=e)


def or_fallback(result: ReadResult[T], fallback: T, resource: str) -> ReadResult[T]:
    """Map a failed read onto the fallback value; successful results pass through."""
    if result.ok:
        return result
    metrics_collector.record_read_fallback(resource)
    logger.warning(
        "Database read failed, serving fallback data",
        resource=resource,
        error_type=type(result.error).__name__,
        error=str(result.error),
    )
    return ReadResult(
        value=fallback,
        source=SOURCE_FALLBACK,
        error=result.error,
        warning=f"Fell back to static data: {type(result.error).__name__}",
    )


async def resolve_read(
    operation: Callable[[], Awaitable[T]],
    fallback: T,
    resource: str,
) -> ReadResult[T]:
    """
    Serve a public read from the database when one is configured, else fallback data.

    Never raises: a database error is logged and replaced by ``fallback``.
    """
    if not has_db():
        return ReadResult(value=fallback, source=SOURCE_FALLBACK)
    return or_fallback(await attempt_read(operation), fallback, resource)


async def resolve_write(
    db_operation: Callable[[], Awaitable[T]],
    memory_operation: Optional[Callable[[], T]] = None,
    not_configured_detail: str = "Database not configured",
) -> tuple[T, str]:
    """
    Perform a write against the database, the in-memory store, or refuse with 501.

    Authentication has already happened by the time this runs. Returns the
    operation's value together with the backend that handled it.

    Raises:
        BackendNotConfiguredError: No database and no in-memory variant
        InternalServerError: The database operation failed unexpectedly
    """
    if has_db():
        try:
            return await db_operation(), SOURCE_DATABASE
        except ProblemDetailsException:
            raise
        except Exception as e:
            logger.error(
                "Database write failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise InternalServerError(detail=str(e) or GENERIC_FAILURE_DETAIL) from e
    if memory_operation is not None:
        return memory_operation(), SOURCE_MEMORY
    raise BackendNotConfiguredError(detail=not_configured_detail)


async def resolve_admin_read(
    db_operation: Callable[[], Awaitable[T]],
    memory_operation: Callable[[], T],
) -> T:
    """
    Admin reads: database when configured (errors propagate), otherwise the memory answer.
    """
    if has_db():
        return await db_operation()
    return memory_operation()

