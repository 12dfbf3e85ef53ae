"""Global error handlers for the application."""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from guardian.core.config import settings
from guardian.utils.errors import GuardianError

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc):
    content = {"success": False, "detail": exc.detail}
    if isinstance(exc, GuardianError):
        content["error"] = exc.kind.value
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = {"success": False, "detail": "Internal server error"}
    if settings.is_development:
        content["debug"] = str(exc)
    return JSONResponse(status_code=500, content=content)
