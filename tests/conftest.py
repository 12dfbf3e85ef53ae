"""Pytest fixtures for async FastAPI testing.

Loads `.env.test` before any application module reads settings, creates a
clean SQLite schema for the session and provides an `AsyncClient` wired to
the app. SMS goes through the simulated transport unless a test overrides
`get_sms_transport`.
"""
import pathlib
import shutil
import uuid

import pytest
from dotenv import load_dotenv

ROOT = pathlib.Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=str(ROOT / ".env.test"), override=True)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session")
def prepare_database():
    """Create clean schema for the test session."""
    from guardian.core.config import settings
    from guardian.core.database import engine, Base

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    yield

    Base.metadata.drop_all(bind=engine)
    shutil.rmtree(settings.UPLOAD_DIR, ignore_errors=True)


@pytest.fixture
def db_session(prepare_database):
    """Yield a SQLAlchemy session for direct DB access in tests."""
    from guardian.core.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_user(db_session):
    """Create a user and return ``(user, auth_headers)``."""
    from guardian.core.security import create_access_token
    from guardian.models.user import User

    def _make_user(verified: bool = True, user_type: str = "user", phone: str | None = "9876543210", name: str = "Asha Rao"):
        user = User(
            email=f"user-{uuid.uuid4().hex[:8]}@example.com",
            phone=phone,
            name=name,
            user_type=user_type,
            status="active",
            verification_status="verified" if verified else "unverified",
        )
        db_session.add(user)
        db_session.commit()

        token, _ = create_access_token(user_id=user.id, user_type=user.user_type)
        return user, {"Authorization": f"Bearer {token}"}

    return _make_user


@pytest.fixture
def app(prepare_database):
    from guardian.main import create_app

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def async_client(app):
    """Provide an httpx AsyncClient configured with the FastAPI app."""
    from httpx import ASGITransport, AsyncClient

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


class RecordingTransport:
    """SMS transport double that records sends and fails on chosen attempts.

    ``fail_on`` maps a destination number to the 1-based attempt numbers that
    should raise ``TransportError``, or ``error`` when one is given.
    """

    simulated = False

    def __init__(self, fail_on: dict | None = None, fail_all: set | None = None, error: type | None = None):
        self.fail_on = fail_on or {}
        self.fail_all = fail_all or set()
        self.error = error
        self.sent = []

    def send(self, body, from_, to):
        from guardian.utils.errors import TransportError

        attempt = sum(1 for _, dest in self.sent if dest == to) + 1
        self.sent.append((body, to))
        if to in self.fail_all or attempt in self.fail_on.get(to, ()):
            if self.error is not None:
                raise self.error(f"unexpected provider failure for {to}")
            raise TransportError(f"simulated failure for {to} attempt {attempt}", code=21211)
        return f"SM{uuid.uuid4().hex[:10]}"

    def destinations(self):
        return [dest for _, dest in self.sent]


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def use_transport(app):
    """Route SOS traffic through the given transport for this test."""
    from guardian.services.sms_service import get_sms_transport

    def _use(transport):
        app.dependency_overrides[get_sms_transport] = lambda: transport
        return transport

    return _use


@pytest.fixture
def make_transport():
    return RecordingTransport
