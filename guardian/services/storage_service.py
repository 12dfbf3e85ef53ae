"""File storage for uploaded identity documents.

Files land on local disk under ``UPLOAD_DIR`` or in S3 depending on
``STORAGE_BACKEND``. The stored reference is a relative path for local files
and ``s3://bucket/key`` for S3 objects.
"""
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile

from guardian.core.config import settings
from guardian.utils.errors import ValidationError

logger = logging.getLogger(__name__)

S3_SCHEME = "s3://"

ALLOWED_CONTENT_TYPES = {
    "jpeg": {"image/jpeg"},
    "jpg": {"image/jpeg", "image/jpg"},
    "png": {"image/png"},
    "pdf": {"application/pdf"},
}


def _get_s3_client():
    return boto3.client(
        "s3",
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or os.getenv("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or os.getenv("AWS_SECRET_ACCESS_KEY"),
        region_name=settings.AWS_REGION or os.getenv("AWS_REGION", "ap-south-1"),
    )


def file_extension(filename: Optional[str]) -> str:
    return os.path.splitext(filename or "")[1].lower().lstrip(".")


def validate_file_type(filename: Optional[str], content_type: Optional[str]) -> None:
    """Both the extension and the declared content type must be allowed."""
    ext = file_extension(filename)
    allowed = ext in settings.ALLOWED_UPLOAD_EXTENSIONS and (content_type or "").lower() in ALLOWED_CONTENT_TYPES.get(ext, set())
    if not allowed:
        raise ValidationError("Only JPEG, JPG, PNG and PDF files are allowed")


async def read_upload(file: UploadFile, max_bytes: Optional[int] = None) -> bytes:
    limit = max_bytes or settings.MAX_UPLOAD_SIZE_BYTES
    contents = await file.read(limit + 1)
    await file.close()
    if len(contents) > limit:
        raise ValidationError(f"File too large. Maximum size is {limit // (1024 * 1024)}MB")
    if not contents:
        raise ValidationError("Document file is empty")
    return contents


def save_file(contents: bytes, filename: Optional[str], folder: str = "documents") -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    name = f"{uuid.uuid4().hex}{ext}"
    if settings.STORAGE_BACKEND == "s3":
        return _save_s3(contents, folder, name)
    return _save_local(contents, folder, name)


def _save_local(contents: bytes, folder: str, name: str) -> str:
    base_dir = Path(settings.UPLOAD_DIR) / folder
    base_dir.mkdir(parents=True, exist_ok=True)
    path = base_dir / name
    with path.open("wb") as f:
        f.write(contents)
    return str(path)


def _save_s3(contents: bytes, folder: str, name: str) -> str:
    s3 = _get_s3_client()
    bucket = settings.AWS_S3_BUCKET or os.getenv("AWS_S3_BUCKET")
    key = f"{folder}/{name}"
    s3.put_object(Bucket=bucket, Key=key, Body=contents)
    return f"{S3_SCHEME}{bucket}/{key}"


def _split_s3(ref: str) -> tuple[str, str]:
    bucket, _, key = ref[len(S3_SCHEME):].partition("/")
    return bucket, key


def is_s3_ref(ref: str) -> bool:
    return ref.startswith(S3_SCHEME)


def file_exists(ref: Optional[str]) -> bool:
    if not ref:
        return False
    if is_s3_ref(ref):
        bucket, key = _split_s3(ref)
        try:
            _get_s3_client().head_object(Bucket=bucket, Key=key)
        except ClientError:
            return False
        return True
    return Path(ref).is_file()


def delete_file(ref: Optional[str]) -> bool:
    """Remove a stored file. Returns False when there was nothing to remove."""
    if not ref:
        return False
    if is_s3_ref(ref):
        bucket, key = _split_s3(ref)
        try:
            _get_s3_client().delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Could not delete S3 object {ref}: {e}")
            return False
        return True
    path = Path(ref)
    if not path.is_file():
        return False
    path.unlink()
    return True


def open_s3_object(ref: str):
    bucket, key = _split_s3(ref)
    return _get_s3_client().get_object(Bucket=bucket, Key=key)["Body"]
