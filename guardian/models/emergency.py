"""Emergency contact model.

Contacts have no lifecycle of their own: they are loaded, changed and
removed through ``User.emergency_contacts``.
"""
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from guardian.core.database import Base
from guardian.models.base import IDMixin, TimestampMixin


MIN_PRIORITY = 1
MAX_PRIORITY = 3


class EmergencyContact(IDMixin, TimestampMixin, Base):
    __tablename__ = "emergency_contacts"
    __table_args__ = (
        UniqueConstraint("user_id", "phone", name="uq_emergency_contacts_user_phone"),
    )

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)  # canonical
    relation = Column("relationship", String(50), nullable=False)
    priority = Column(Integer, nullable=False, default=MIN_PRIORITY)

    user = relationship("User", back_populates="emergency_contacts")

    def __repr__(self):
        return f"<EmergencyContact {self.name} {self.phone}>"


def clamp_priority(value) -> int:
    return min(max(int(value), MIN_PRIORITY), MAX_PRIORITY)
