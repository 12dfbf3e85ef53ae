"""Base SQLAlchemy model utilities."""
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer


def utcnow() -> datetime:
    """Current UTC time, naive, as stored in the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class IDMixin:
    id = Column(Integer, primary_key=True, index=True)
