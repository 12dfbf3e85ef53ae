"""Identity document endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse, StreamingResponse
from sqlalchemy.orm import Session
from guardian.core.database import get_db
from guardian.dependencies.auth import get_current_user
from guardian.dependencies.rate_limit import rate_limit
from guardian.schemas.document import DocumentListResponse, DocumentUploadResponse
from guardian.services import storage_service
from guardian.services.document_service import DocumentService

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/upload", response_model=DocumentUploadResponse)
async def upload_document(
    document: Optional[UploadFile] = File(None),
    document_type: Optional[str] = Form(None),
    document_number: Optional[str] = Form(None),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    """
    Upload an identity document for manual verification
    - JPEG, JPG, PNG or PDF, at most 5MB
    - Blocked when an approved document of the same type exists
    """
    record = await DocumentService.upload(db, current_user["sub"], document, document_type, document_number)
    return {
        "success": True,
        "message": "Document uploaded successfully and sent for verification",
        "document": record,
    }


@router.get("/my-documents", response_model=DocumentListResponse)
async def my_documents(current_user = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "documents": DocumentService.list_for_user(db, current_user["sub"])}


@router.get("/view/{document_id}")
async def view_document(
    document_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = DocumentService.get_for_user(db, current_user["sub"], document_id)
    if storage_service.is_s3_ref(record.file_path):
        body = storage_service.open_s3_object(record.file_path)
        return StreamingResponse(body.iter_chunks(), media_type=record.content_type)
    return FileResponse(record.file_path, media_type=record.content_type, filename=record.file_name)
