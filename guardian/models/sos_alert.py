"""SOS alert audit record."""
from sqlalchemy import Column, Integer, String, Float, Text, Boolean, DateTime, JSON, ForeignKey
from guardian.core.database import Base
from guardian.models.base import utcnow


DEFAULT_ADDRESS = "Location not specified"


class SOSAlert(Base):
    __tablename__ = "sos_alerts"

    id = Column(Integer, primary_key=True, index=True)
    # Reference only, not part of the user aggregate
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(Text, nullable=False, default=DEFAULT_ADDRESS)
    alert_type = Column(String(50), nullable=False, default="emergency")
    message = Column(Text, nullable=False)

    # [{"name", "phone", "notification_status", "sent_at"}]
    contacts_notified = Column(JSON, nullable=False, default=list)
    police_notified = Column(Boolean, default=False, nullable=False)
    police_notification_status = Column(String(20), default="pending", nullable=False)
    simulated = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)

    @property
    def location(self) -> dict:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
        }

    def __repr__(self):
        return f"<SOSAlert {self.id} user={self.user_id}>"
