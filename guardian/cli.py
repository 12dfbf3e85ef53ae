"""Small CLI helpers wired to console scripts for developer convenience.

Usage (from project root):
  runserver --host=0.0.0.0 --port=8000 --no-reload
  run-tests
  migrate                  # defaults to `alembic upgrade head`
  init-env                 # copies .env.example -> .env if missing
  clear-user-data --yes    # wipes users, contacts, documents, alerts and uploads
"""
from __future__ import annotations

import logging
import sys
import shutil
import subprocess
from pathlib import Path
from typing import List

logger = logging.getLogger("guardian.cli")


def _args() -> List[str]:
    return sys.argv[1:]


def runserver() -> None:
    """Run Uvicorn programmatically. Accepts simple flags:

    --host=<host>  (default 127.0.0.1)
    --port=<port>  (default 8000)
    --no-reload    (disable auto-reload)
    --reload       (enable auto-reload)
    """
    import uvicorn

    host = "127.0.0.1"
    port = 8000
    reload = True

    for a in _args():
        if a.startswith("--host="):
            host = a.split("=", 1)[1]
        elif a.startswith("--port="):
            value = a.split("=", 1)[1]
            if not value.isdigit():
                sys.exit(f"Invalid port: {value}")
            port = int(value)
        elif a == "--no-reload":
            reload = False
        elif a == "--reload":
            reload = True

    print(f"Starting uvicorn on {host}:{port} (reload={reload})")
    uvicorn.run("guardian.main:app", host=host, port=port, reload=reload)


def run_tests() -> None:
    """Run pytest with any forwarded args."""
    args = _args()
    cmd = ["pytest"] + args
    subprocess.run(cmd, check=True)


def run_migrations() -> None:
    """Run alembic. If no args provided, runs `alembic upgrade head`."""
    args = _args()
    if args:
        cmd = ["alembic"] + args
    else:
        cmd = ["alembic", "upgrade", "head"]
    subprocess.run(cmd, check=True)


def init_env() -> None:
    """Copy `.env.example` to `.env` if `.env` is missing."""
    root = Path(__file__).resolve().parents[1]
    src = root / ".env.example"
    dst = root / ".env"
    if dst.exists():
        print(f".env already exists at {dst}")
        return
    if not src.exists():
        print(f".env.example not found at {src}")
        return
    shutil.copy(src, dst)
    print(f"Created .env from .env.example at {dst}")


def clear_user_data() -> None:
    """Permanently delete all users, contacts, documents, SOS alerts and uploads."""
    if "--yes" not in _args():
        print("This will permanently delete ALL user data, documents, SOS alerts and uploaded files.")
        print("Re-run with --yes to confirm.")
        sys.exit(1)

    from guardian.core.logger import setup_logging

    setup_logging()
    summary = wipe_user_data()
    print(
        f"Removed {summary['users']} users, {summary['documents']} documents, "
        f"{summary['sos_alerts']} SOS alerts and {summary['files']} files"
    )


def wipe_user_data() -> dict:
    from guardian.core.config import settings
    from guardian.core.database import SessionLocal, commit_or_raise
    from guardian.models.document import Document
    from guardian.models.emergency import EmergencyContact
    from guardian.models.sos_alert import SOSAlert
    from guardian.models.user import User
    from guardian.services import storage_service

    db = SessionLocal()
    files_removed = 0
    try:
        # Alerts and documents reference users, so they go first.
        alerts = db.query(SOSAlert).delete(synchronize_session=False)
        logger.info(f"Deleted {alerts} SOS alerts")

        documents = db.query(Document).all()
        for document in documents:
            if storage_service.delete_file(document.file_path):
                files_removed += 1
            else:
                logger.warning(f"Could not delete file {document.file_name} ({document.file_path})")
        document_count = db.query(Document).delete(synchronize_session=False)
        logger.info(f"Deleted {document_count} documents")

        db.query(EmergencyContact).delete(synchronize_session=False)
        users = db.query(User).delete(synchronize_session=False)
        logger.info(f"Deleted {users} users")

        commit_or_raise(db, "clear user data")
    finally:
        db.close()

    # Orphaned uploads left behind by earlier failures
    upload_root = Path(settings.UPLOAD_DIR)
    if upload_root.is_dir():
        for path in upload_root.rglob("*"):
            if path.is_file():
                path.unlink()
                files_removed += 1
                logger.info(f"Cleaned up orphaned file: {path}")

    return {"users": users, "documents": document_count, "sos_alerts": alerts, "files": files_removed}


if __name__ == "__main__":
    # Allow running the helpers directly: python -m guardian.cli runserver
    if len(sys.argv) <= 1:
        print(__doc__)
        sys.exit(0)
    cmd = sys.argv[1]
    sys.argv.pop(1)
    if cmd == "runserver":
        runserver()
    elif cmd in ("run-tests", "tests", "test"):
        run_tests()
    elif cmd in ("migrate", "alembic"):
        run_migrations()
    elif cmd in ("init-env", "initenv"):
        init_env()
    elif cmd == "clear-user-data":
        clear_user_data()
    else:
        print(f"Unknown command: {cmd}")
