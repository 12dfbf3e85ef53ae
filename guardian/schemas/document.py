"""Identity document schemas. The storage reference is never exposed."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class DocumentRead(BaseModel):
    id: int
    user_id: int
    document_type: str
    document_number: str
    file_name: str
    content_type: Optional[str] = None
    file_size: Optional[int] = None
    verification_status: str
    extracted_text: Optional[str] = None
    review_notes: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentUploadResponse(BaseModel):
    success: bool = True
    message: str
    document: DocumentRead


class DocumentListResponse(BaseModel):
    success: bool = True
    documents: List[DocumentRead]
