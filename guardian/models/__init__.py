"""ORM models."""

__all__ = [
    "base",
    "user",
    "emergency",
    "sos_alert",
    "document",
]
