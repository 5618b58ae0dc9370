"""FastAPI application initialization and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import close_db, get_engine, has_db, init_db
from .core.exceptions import (
    ProblemDetailsException,
    generic_exception_handler,
    problem_details_handler,
    request_validation_handler,
)
from .core.middleware import setup_middleware
from .core.observability import (
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_sqlalchemy,
    setup_metrics,
    setup_structured_logging,
    setup_tracing,
)
from .routers import (
    auth_router,
    booking_admin_router,
    booking_router,
    contact_admin_router,
    contact_router,
    content_routers,
    dashboard_router,
    health_router,
    metrics_router,
    public_content_router,
    users_admin_router,
)
from .services.fallbacks import FallbackData
from .services.memory_store import MemoryStore

# Configure structured logging
setup_structured_logging()

# Configure traditional logging for compatibility
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    logger.info("Starting FastAPI application")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Storage: {'database' if has_db() else 'fallback'}")

    try:
        # Setup observability
        setup_tracing()
        setup_metrics()
        if has_db():
            instrument_sqlalchemy(get_engine())
        logger.info("Observability setup completed")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise

    # An unreachable database must not stop the process; reads fall back per request
    try:
        await init_db()
        if has_db():
            logger.info("Database initialized successfully")
    except Exception as e:
        logger.warning(
            "Database unavailable at startup, serving fallback content until it recovers",
            extra={"error_type": type(e).__name__, "error": str(e)}
        )

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down FastAPI application")

    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error during application cleanup: {e}")

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each application owns its in-memory store and fallback content, so two
    apps in one process never share submissions.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Gotz Portal API",
        description="Safari tour operator API: public site content, booking and contact forms, and the admin console",
        version=SERVICE_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.store = MemoryStore()
    app.state.fallbacks = FallbackData()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "traceparent", "tracestate"],
    )

    # Setup custom middleware
    setup_middleware(app, enable_logging=True)

    # Instrument FastAPI with OpenTelemetry
    instrument_fastapi(app)

    # Register exception handlers
    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Register API routers
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(public_content_router)
    app.include_router(booking_router)
    app.include_router(contact_router)
    app.include_router(auth_router)
    app.include_router(booking_admin_router)
    app.include_router(contact_admin_router)
    app.include_router(dashboard_router)
    app.include_router(users_admin_router)
    for content_router in content_routers:
        app.include_router(content_router)

    logger.info("FastAPI application created and configured")

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gotzportal.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
