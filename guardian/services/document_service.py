import logging
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from guardian.core.config import settings
from guardian.core.database import commit_or_raise
from guardian.models.base import utcnow
from guardian.models.document import Document, DocumentStatusEnum
from guardian.models.user import User, VerificationStatusEnum
from guardian.services import storage_service
from guardian.services.user_service import UserService
from guardian.utils.errors import ValidationError, NotFoundError, ConflictError

logger = logging.getLogger(__name__)


class DocumentService:
    @staticmethod
    async def upload(
        db: Session,
        user_id: int,
        file: Optional[UploadFile],
        document_type: Optional[str],
        document_number: Optional[str],
    ) -> Document:
        """Validate, store the file, then record it.

        Nothing is written until every check has passed. Once the file is
        stored, any failure removes it again.
        """
        if file is None or not file.filename:
            raise ValidationError("Document file is required")
        document_type = (document_type or "").strip().lower()
        document_number = (document_number or "").strip()
        if not document_type or not document_number:
            raise ValidationError("Document type and number are required")

        storage_service.validate_file_type(file.filename, file.content_type)
        contents = await storage_service.read_upload(file)

        user = UserService.ensure_user(db, user_id)
        approved = (
            db.query(Document)
            .filter(
                Document.user_id == user.id,
                Document.document_type == document_type,
                Document.verification_status == DocumentStatusEnum.APPROVED.value,
            )
            .first()
        )
        if approved:
            raise ConflictError("You already have an approved document of this type")

        file_path = storage_service.save_file(contents, file.filename)
        try:
            document = Document(
                user_id=user.id,
                document_type=document_type,
                document_number=document_number,
                file_name=file.filename,
                file_path=file_path,
                content_type=file.content_type,
                file_size=len(contents),
            )
            db.add(document)
            if user.verification_status in (
                VerificationStatusEnum.UNVERIFIED.value,
                VerificationStatusEnum.REJECTED.value,
            ):
                user.verification_status = VerificationStatusEnum.PENDING.value
            commit_or_raise(db, "save document")
            db.refresh(document)
        except Exception:
            logger.error(f"Document upload failed for user {user.id}; removing {file_path}")
            storage_service.delete_file(file_path)
            raise

        logger.info(f"Document {document.id} ({document_type}) uploaded by user {user.id}")
        return document

    @staticmethod
    def list_for_user(db: Session, user_id: int) -> List[Document]:
        return (
            db.query(Document)
            .filter(Document.user_id == int(user_id))
            .order_by(Document.created_at.desc(), Document.id.desc())
            .all()
        )

    @staticmethod
    def get_for_user(db: Session, user_id: int, document_id: int) -> Document:
        document = (
            db.query(Document)
            .filter(Document.id == document_id, Document.user_id == int(user_id))
            .first()
        )
        if not document:
            raise NotFoundError("Document not found")
        if not storage_service.file_exists(document.file_path):
            raise NotFoundError("Document file not found")
        return document

    @staticmethod
    def list_pending(db: Session) -> List[Document]:
        return (
            db.query(Document)
            .filter(Document.verification_status == DocumentStatusEnum.PENDING.value)
            .order_by(Document.created_at.asc(), Document.id.asc())
            .all()
        )

    @staticmethod
    def approve(db: Session, admin_id: int, document_id: int, notes: str | None = None) -> Document:
        return DocumentService._review(db, admin_id, document_id, DocumentStatusEnum.APPROVED, notes)

    @staticmethod
    def reject(db: Session, admin_id: int, document_id: int, reason: str | None = None) -> Document:
        return DocumentService._review(db, admin_id, document_id, DocumentStatusEnum.REJECTED, reason)

    @staticmethod
    def _review(db: Session, admin_id: int, document_id: int, status: DocumentStatusEnum, notes: str | None) -> Document:
        document = db.query(Document).filter(Document.id == document_id).first()
        if not document:
            raise NotFoundError("Document not found")

        if status == DocumentStatusEnum.APPROVED:
            other_approved = (
                db.query(Document)
                .filter(
                    Document.user_id == document.user_id,
                    Document.document_type == document.document_type,
                    Document.verification_status == DocumentStatusEnum.APPROVED.value,
                    Document.id != document.id,
                )
                .first()
            )
            if other_approved:
                raise ConflictError("User already has an approved document of this type")

        document.verification_status = status.value
        document.reviewed_by = int(admin_id)
        document.reviewed_at = utcnow()
        document.review_notes = notes

        db.flush()
        DocumentService.refresh_user_verification(db, document.user)
        commit_or_raise(db, f"{status.value} document")
        db.refresh(document)
        logger.info(f"Document {document.id} {status.value} by admin {admin_id}")
        return document

    @staticmethod
    def refresh_user_verification(db: Session, user: User) -> str:
        """Recompute the user's status from their reviewed documents."""
        documents = db.query(Document).filter(Document.user_id == user.id).all()
        approved_types = {
            d.document_type for d in documents if d.verification_status == DocumentStatusEnum.APPROVED.value
        }
        required = set(settings.REQUIRED_DOCUMENT_TYPES)

        if required and required <= approved_types:
            if user.verification_status != VerificationStatusEnum.VERIFIED.value:
                user.verified_at = utcnow()
            status = VerificationStatusEnum.VERIFIED
        elif any(d.verification_status == DocumentStatusEnum.PENDING.value for d in documents):
            status = VerificationStatusEnum.PENDING
        elif documents and not approved_types:
            status = VerificationStatusEnum.REJECTED
        elif documents:
            status = VerificationStatusEnum.PENDING
        else:
            status = VerificationStatusEnum.UNVERIFIED

        user.verification_status = status.value
        return user.verification_status
