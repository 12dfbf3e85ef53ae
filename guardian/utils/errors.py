"""Custom error definitions for API exceptions.

Every domain error is an ``HTTPException`` tagged with an ``ErrorKind`` so the
global handler can report what failed without inspecting exception shapes.
Transport errors are tagged where the SMS provider is called and persistence
errors where the session is committed.
"""
import enum
from typing import Optional

from fastapi import HTTPException
from starlette import status

from guardian.core.config import settings


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    TRANSPORT = "transport"
    PERSISTENCE = "persistence"


class GuardianError(HTTPException):
    kind: ErrorKind = ErrorKind.VALIDATION
    status_code_default: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Bad request"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.status_code_default, detail=detail or self.default_detail)

    def __str__(self) -> str:
        return str(self.detail)


class ValidationError(GuardianError):
    kind = ErrorKind.VALIDATION
    status_code_default = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class NotFoundError(GuardianError):
    kind = ErrorKind.NOT_FOUND
    status_code_default = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class UserNotFoundError(NotFoundError):
    default_detail = "User not found"


class ConflictError(GuardianError):
    kind = ErrorKind.CONFLICT
    status_code_default = status.HTTP_400_BAD_REQUEST
    default_detail = "Conflicting request"


class ForbiddenError(GuardianError):
    kind = ErrorKind.FORBIDDEN
    status_code_default = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class TransportError(GuardianError):
    """SMS provider failure. Recorded on alerts, never surfaced by the SOS flow."""

    kind = ErrorKind.TRANSPORT
    status_code_default = status.HTTP_502_BAD_GATEWAY
    default_detail = "SMS transport error"

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None):
        super().__init__(detail)
        self.code = code


class PersistenceError(GuardianError):
    kind = ErrorKind.PERSISTENCE
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Database error"

    def __init__(self, detail: Optional[str] = None, cause: Optional[Exception] = None):
        message = detail or self.default_detail
        if cause is not None and settings.is_development:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause

