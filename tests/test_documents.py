import os
from pathlib import Path

import pytest

from guardian.core.config import settings
from guardian.models.document import Document
from guardian.models.user import User
from guardian.utils.errors import PersistenceError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _upload_dir() -> Path:
    return Path(settings.UPLOAD_DIR) / "documents"


def _stored_files():
    folder = _upload_dir()
    return set(os.listdir(folder)) if folder.is_dir() else set()


def _form(document_type="aadhaar", number="1234-5678-9012"):
    return {"document_type": document_type, "document_number": number}


async def _upload(client, headers, content=PNG_BYTES, filename="aadhaar.png", content_type="image/png", **form):
    return await client.post(
        "/documents/upload",
        data=_form(**form),
        files={"document": (filename, content, content_type)},
        headers=headers,
    )


@pytest.mark.asyncio
async def test_upload_document_marks_user_pending(async_client, make_user, db_session):
    user, headers = make_user(verified=False)

    r = await _upload(async_client, headers)
    assert r.status_code == 200, r.text
    document = r.json()["document"]
    assert document["verification_status"] == "pending"
    assert document["document_type"] == "aadhaar"
    assert document["extracted_text"] == "Document uploaded - manual verification required"
    assert "file_path" not in document

    db_session.expire_all()
    assert db_session.get(User, user.id).verification_status == "pending"


@pytest.mark.asyncio
async def test_my_documents_lists_newest_first(async_client, make_user):
    _, headers = make_user(verified=False)
    await _upload(async_client, headers, document_type="aadhaar")
    await _upload(async_client, headers, document_type="pan", filename="pan.pdf", content_type="application/pdf")

    r = await async_client.get("/documents/my-documents", headers=headers)
    assert r.status_code == 200, r.text
    documents = r.json()["documents"]
    assert [d["document_type"] for d in documents] == ["pan", "aadhaar"]
    assert all("file_path" not in d for d in documents)


@pytest.mark.asyncio
async def test_view_document_returns_file(async_client, make_user):
    _, headers = make_user(verified=False)
    r = await _upload(async_client, headers)
    document_id = r.json()["document"]["id"]

    r = await async_client.get(f"/documents/view/{document_id}", headers=headers)
    assert r.status_code == 200, r.text
    assert r.content == PNG_BYTES
    assert r.headers["content-type"] == "image/png"


@pytest.mark.asyncio
async def test_view_document_of_another_user_is_not_found(async_client, make_user):
    _, owner = make_user(verified=False)
    _, other = make_user(verified=False)
    r = await _upload(async_client, owner)
    document_id = r.json()["document"]["id"]

    r = await async_client.get(f"/documents/view/{document_id}", headers=other)
    assert r.status_code == 404, r.text
    assert r.json()["detail"] == "Document not found"


@pytest.mark.asyncio
async def test_view_document_with_missing_file(async_client, make_user, db_session):
    _, headers = make_user(verified=False)
    r = await _upload(async_client, headers)
    document_id = r.json()["document"]["id"]

    stored = db_session.get(Document, document_id)
    os.remove(stored.file_path)

    r = await async_client.get(f"/documents/view/{document_id}", headers=headers)
    assert r.status_code == 404, r.text
    assert r.json()["detail"] == "Document file not found"


@pytest.mark.asyncio
async def test_oversized_upload_is_rejected_before_any_write(async_client, make_user, db_session):
    user, headers = make_user(verified=False)
    before = _stored_files()

    too_big = b"\x00" * (5 * 1024 * 1024 + 1)
    r = await _upload(async_client, headers, content=too_big)
    assert r.status_code == 400, r.text
    assert r.json()["detail"].startswith("File too large")

    assert _stored_files() == before
    db_session.expire_all()
    assert db_session.query(Document).filter(Document.user_id == user.id).count() == 0
    assert db_session.get(User, user.id).verification_status == "unverified"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "filename,content_type",
    [
        ("notes.txt", "text/plain"),
        ("aadhaar.png", "application/octet-stream"),
        ("aadhaar.gif", "image/png"),
    ],
)
async def test_disallowed_file_type_is_rejected(async_client, make_user, filename, content_type):
    _, headers = make_user(verified=False)

    r = await _upload(async_client, headers, filename=filename, content_type=content_type)
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "Only JPEG, JPG, PNG and PDF files are allowed"


@pytest.mark.asyncio
async def test_missing_fields_are_rejected(async_client, make_user):
    _, headers = make_user(verified=False)

    r = await _upload(async_client, headers, number="")
    assert r.status_code == 400, r.text

    r = await async_client.post("/documents/upload", data=_form(), headers=headers)
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "Document file is required"


@pytest.mark.asyncio
async def test_upload_blocked_when_type_already_approved(async_client, make_user, db_session):
    user, headers = make_user(verified=False)
    r = await _upload(async_client, headers)
    document_id = r.json()["document"]["id"]

    db_session.query(Document).filter(Document.id == document_id).update({"verification_status": "approved"})
    db_session.commit()
    before = _stored_files()

    r = await _upload(async_client, headers)
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "You already have an approved document of this type"
    assert _stored_files() == before


@pytest.mark.asyncio
async def test_failed_save_removes_stored_file(async_client, make_user, db_session, monkeypatch):
    user, headers = make_user(verified=False)
    before = _stored_files()

    def failing_commit(db, action="save changes"):
        db.rollback()
        raise PersistenceError(f"Failed to {action}")

    monkeypatch.setattr("guardian.services.document_service.commit_or_raise", failing_commit)

    r = await _upload(async_client, headers)
    assert r.status_code == 500, r.text
    assert r.json()["error"] == "persistence"

    assert _stored_files() == before
    db_session.expire_all()
    assert db_session.query(Document).filter(Document.user_id == user.id).count() == 0
