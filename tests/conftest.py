import os
import tempfile
from pathlib import Path

import pytest

# settings are read once at import time, so the test database must be chosen first
_DB_DIR = Path(tempfile.mkdtemp(prefix="cartonizer-tests-"))
_DB_PATH = _DB_DIR / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["PRODUCT_CATALOG_BASE_URL"] = ""
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SEED_DEFAULT_CARTONS"] = "true"

from fastapi.testclient import TestClient  # noqa: E402

from cartonizer.api import create_app  # noqa: E402
from cartonizer.core.settings import settings  # noqa: E402
from cartonizer.deps import get_event_publisher  # noqa: E402
from cartonizer.services.event_publisher import EventPublisher  # noqa: E402


def _reset_db():
    for suffix in ("", "-wal", "-shm"):
        path = Path(str(_DB_PATH) + suffix)
        if path.exists():
            path.unlink()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def publisher():
    return EventPublisher()


@pytest.fixture
def app(publisher):
    _reset_db()
    application = create_app()
    application.dependency_overrides[get_event_publisher] = lambda: publisher
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def operator_client(client):
    resp = client.post(
        "/api/v1/auth/login",
        json={
            "username": settings.DEFAULT_OPERATOR_USERNAME,
            "password": settings.DEFAULT_OPERATOR_PASSWORD,
        },
    )
    assert resp.status_code == 200
    return client
