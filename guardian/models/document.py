"""Identity verification document model."""
import enum
from sqlalchemy import Column, String, Integer, ForeignKey, Text, DateTime
from sqlalchemy.orm import relationship
from guardian.core.database import Base
from guardian.models.base import utcnow


EXTRACTED_TEXT_PLACEHOLDER = "Document uploaded - manual verification required"


class DocumentStatusEnum(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    document_type = Column(String(50), nullable=False, index=True)
    document_number = Column(String(100), nullable=False)

    file_name = Column(String(255), nullable=False)
    file_path = Column(String, nullable=False)
    content_type = Column(String(100), nullable=True)
    file_size = Column(Integer, nullable=True)

    verification_status = Column(String(20), default=DocumentStatusEnum.PENDING.value, nullable=False, index=True)
    extracted_text = Column(Text, default=EXTRACTED_TEXT_PLACEHOLDER)

    reviewed_by = Column(Integer, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    review_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="documents")
