from fastapi import FastAPI
from fastapi.exceptions import HTTPException as FastAPIHTTPException

from guardian.core.logger import setup_logging
from guardian.middleware.cors import configure_cors
from guardian.middleware.logging import RequestLoggerMiddleware
from guardian.middleware import error_handler

# Routers
from guardian.routers import emergency as emergency_router
from guardian.routers import documents as documents_router
from guardian.routers import admin as admin_router
from guardian.routers import health as health_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    setup_logging()
    description = (
        "Guardian Backend API.\n\n"
        "This service provides identity document verification, emergency contact "
        "management and SOS alert endpoints."
    )

    openapi_tags = [
        {"name": "emergency", "description": "Emergency contacts, SOS alerts and alert history."},
        {"name": "documents", "description": "Identity document upload and viewing."},
        {"name": "admin", "description": "Administrative endpoints for document review."},
        {"name": "health", "description": "Health checks and service status endpoints."},
    ]

    app = FastAPI(
        title="Guardian Personal Safety API",
        version="0.1.0",
        description=description,
        openapi_tags=openapi_tags,
    )

    # Middleware
    configure_cors(app)
    app.add_middleware(RequestLoggerMiddleware)

    # Exception handlers
    app.add_exception_handler(FastAPIHTTPException, error_handler.http_exception_handler)
    app.add_exception_handler(Exception, error_handler.unhandled_exception_handler)

    # Include routers
    app.include_router(health_router.router)
    app.include_router(emergency_router.router)
    app.include_router(documents_router.router)
    app.include_router(admin_router.router)

    return app


app = create_app()
