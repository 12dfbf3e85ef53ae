from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship, validates
from guardian.core.database import Base
from guardian.models.base import utcnow
import enum


class UserTypeEnum(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class VerificationStatusEnum(str, enum.Enum):
    UNVERIFIED = "unverified"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    phone = Column(String(20), index=True, nullable=True)
    name = Column(String(200), nullable=False)

    # Account status
    user_type = Column(String(50), index=True, nullable=False, default=UserTypeEnum.USER.value)
    status = Column(String(50), default="active", index=True)

    # Identity verification, recomputed whenever a document is reviewed
    verification_status = Column(
        String(20),
        default=VerificationStatusEnum.UNVERIFIED.value,
        nullable=False,
        index=True,
    )
    verified_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Soft delete
    is_deleted = Column(Boolean, default=False)

    # Relationships
    emergency_contacts = relationship(
        "EmergencyContact",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="EmergencyContact.id",
    )
    documents = relationship("Document", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.id} {self.name}>"

    def is_fully_verified(self) -> bool:
        return self.verification_status == VerificationStatusEnum.VERIFIED.value

    @validates("phone")
    def _blank_phone_to_none(self, key, value):
        return value or None
