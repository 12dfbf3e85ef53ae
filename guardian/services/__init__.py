"""Service layer package."""

__all__ = [
    "contact_service",
    "document_service",
    "notification_dispatcher",
    "sms_service",
    "sos_service",
    "storage_service",
    "user_service",
]
