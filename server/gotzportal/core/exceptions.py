"""Custom exceptions following RFC 9457 Problem Details for HTTP APIs."""

from typing import Any, Dict, List, Optional
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
import logging
import uuid
from datetime import datetime, timezone


logger = logging.getLogger(__name__)

GENERIC_FAILURE_DETAIL = "Something went wrong. Please try again."


class ProblemDetailsException(HTTPException):
    """
    Base exception class following RFC 9457 Problem Details for HTTP APIs.

    https://tools.ietf.org/rfc/rfc9457.txt

    Every problem body also carries a ``message`` member holding the
    human-readable detail, which is what the site's forms display.
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize Problem Details exception.

        Args:
            status_code: HTTP status code
            title: Short, human-readable summary of the problem type
            detail: Human-readable explanation specific to this occurrence
            type_uri: URI reference that identifies the problem type
            instance: URI reference that identifies the specific occurrence
            extensions: Additional problem-specific information
            headers: HTTP headers to include in response
        """
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type_uri = type_uri or f"about:blank#{status_code}"
        self.instance = instance
        self.extensions = extensions or {}

        # Create the problem details object
        self.problem_details = {
            "type": self.type_uri,
            "title": self.title,
            "status": self.status_code,
            "message": self.detail or self.title,
        }

        if self.detail:
            self.problem_details["detail"] = self.detail

        if self.instance:
            self.problem_details["instance"] = self.instance

        # Add extensions
        self.problem_details.update(self.extensions)

        super().__init__(
            status_code=status_code,
            detail=self.problem_details,
            headers=headers
        )


class BadRequestError(ProblemDetailsException):
    """Exception for malformed request bodies and path parameters."""

    def __init__(
        self,
        detail: str = "The request could not be parsed",
        instance: Optional[str] = None,
    ):
        super().__init__(
            status_code=400,
            title="Bad Request",
            detail=detail,
            type_uri="https://gotzportal.local/problems/bad-request",
            instance=instance,
        )


class ValidationError(ProblemDetailsException):
    """Exception for request validation errors."""

    def __init__(
        self,
        detail: str = "The request data failed validation",
        violations: Optional[List[Dict[str, str]]] = None,
        instance: Optional[str] = None,
    ):
        extensions = {}
        if violations:
            extensions["violations"] = violations

        super().__init__(
            status_code=422,
            title="Validation Error",
            detail=detail,
            type_uri="https://gotzportal.local/problems/validation-error",
            instance=instance,
            extensions=extensions,
        )


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    """Convert a pydantic error into a 422 whose message names the first bad field."""
    violations = [
        {
            "path": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    first = violations[0]
    detail = f"{first['path']}: {first['message']}" if first["path"] else first["message"]
    return ValidationError(detail=detail, violations=violations)


class AuthenticationError(ProblemDetailsException):
    """
    Exception for authentication errors.

    The body is identical for a missing header, a wrong scheme and a wrong
    token.
    """

    def __init__(self, instance: Optional[str] = None):
        super().__init__(
            status_code=401,
            title="Unauthorized",
            detail="Unauthorized",
            type_uri="https://gotzportal.local/problems/unauthorized",
            instance=instance,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsError(ProblemDetailsException):
    """Exception for a rejected email/password pair at login."""

    def __init__(self, detail: str = "Invalid email or password."):
        super().__init__(
            status_code=401,
            title="Invalid Credentials",
            detail=detail,
            type_uri="https://gotzportal.local/problems/invalid-credentials",
        )


class NotFoundError(ProblemDetailsException):
    """Exception for resource not found errors."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        if not detail:
            detail = f"The requested {resource_type}"
            if resource_id:
                detail += f" with ID '{resource_id}'"
            detail += " could not be found"

        extensions = {
            "resource_type": resource_type,
        }
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=detail,
            type_uri="https://gotzportal.local/problems/resource-not-found",
            instance=instance,
            extensions=extensions,
        )


class ConflictError(ProblemDetailsException):
    """Exception for a unique email or slug that is already taken."""

    def __init__(self, detail: str = "The request conflicts with the current state of the resource"):
        super().__init__(
            status_code=409,
            title="Resource Conflict",
            detail=detail,
            type_uri="https://gotzportal.local/problems/resource-conflict",
        )


class InternalServerError(ProblemDetailsException):
    """
    Exception for a failed write.

    Carries an ``error_id`` so the response can be matched to the log line.
    """

    def __init__(self, detail: str = GENERIC_FAILURE_DETAIL, instance: Optional[str] = None):
        extensions = {
            "error_id": str(uuid.uuid4()),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        super().__init__(
            status_code=500,
            title="Internal Server Error",
            detail=detail,
            type_uri="https://gotzportal.local/problems/internal-server-error",
            instance=instance,
            extensions=extensions,
        )


class BackendNotConfiguredError(ProblemDetailsException):
    """Exception for a write that needs a database when none is configured."""

    def __init__(self, detail: str = "Database not configured"):
        super().__init__(
            status_code=501,
            title="Not Implemented",
            detail=detail,
            type_uri="https://gotzportal.local/problems/backend-not-configured",
        )


class ServiceUnavailableError(ProblemDetailsException):
    """Exception for features that are switched off without a database."""

    def __init__(self, detail: str = "Service unavailable"):
        super().__init__(
            status_code=503,
            title="Service Unavailable",
            detail=detail,
            type_uri="https://gotzportal.local/problems/service-unavailable",
        )


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    """
    Exception handler for Problem Details exceptions.

    Args:
        request: FastAPI request object
        exc: Problem Details exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.problem_details,
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Convert FastAPI request validation errors to Problem Details format.

    Args:
        request: FastAPI request object
        exc: Request validation error raised while parsing parameters

    Returns:
        JSONResponse: Problem Details formatted response with violations
    """
    violations = [
        {
            "path": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    first = violations[0]["message"] if violations else "The request data failed validation"
    problem = ValidationError(detail=first, violations=violations, instance=str(request.url))
    return JSONResponse(status_code=problem.status_code, content=problem.problem_details)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler that converts unhandled exceptions to Problem Details format.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    error_id = str(uuid.uuid4())
    logger.error(
        "Unhandled exception",
        extra={"error_id": error_id, "path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )

    problem_details = {
        "type": "https://gotzportal.local/problems/internal-server-error",
        "title": "Internal Server Error",
        "status": 500,
        "message": GENERIC_FAILURE_DETAIL,
        "detail": GENERIC_FAILURE_DETAIL,
        "instance": str(request.url),
        "error_id": error_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    return JSONResponse(
        status_code=500,
        content=problem_details,
    )
