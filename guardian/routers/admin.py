"""Admin endpoints for identity document review."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from guardian.core.database import get_db
from guardian.dependencies.auth import get_current_admin
from guardian.dependencies.rate_limit import rate_limit
from guardian.schemas.document import DocumentRead
from guardian.services.document_service import DocumentService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/pending-documents", response_model=list[DocumentRead])
async def pending_documents(
    current_admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    return DocumentService.list_pending(db)


@router.post("/documents/{document_id}/approve", response_model=DocumentRead)
async def approve_document(
    document_id: int,
    notes: str | None = None,
    current_admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return DocumentService.approve(db, current_admin["sub"], document_id, notes)


@router.post("/documents/{document_id}/reject", response_model=DocumentRead)
async def reject_document(
    document_id: int,
    reason: str | None = None,
    current_admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return DocumentService.reject(db, current_admin["sub"], document_id, reason)
