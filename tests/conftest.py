"""
Student Records API - Test Configuration and Fixtures
"""
import io
import os
import shutil
import tempfile
from typing import Generator

import pytest

# Set testing environment (antes de importar o app)
_TMP = tempfile.mkdtemp(prefix="student-records-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["JWT_AUDIENCE"] = ""
os.environ["JWT_ISSUER"] = ""
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["PUBLIC_BASE_URL"] = ""

from fastapi.testclient import TestClient
from PIL import Image

from app.main import app
from app.core.tokens import create_access_token
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.services.storage import DOCUMENTS, PROFILE_IMAGES, get_storage
from app import models  # noqa: F401


@pytest.fixture(scope="session", autouse=True)
def _cleanup_tmp():
    yield
    shutil.rmtree(_TMP, ignore_errors=True)


@pytest.fixture(autouse=True)
def _fresh_state() -> Generator[None, None, None]:
    """Schema novo e buckets vazios para cada teste"""
    Base.metadata.create_all(bind=engine)
    storage = get_storage()
    storage.init()
    yield
    Base.metadata.drop_all(bind=engine)
    for bucket in (PROFILE_IMAGES, DOCUMENTS):
        for name in os.listdir(storage.dirs[bucket]):
            os.remove(os.path.join(storage.dirs[bucket], name))


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def storage():
    return get_storage()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict:
    token = create_access_token(sub="auth0|tester")
    return {"Authorization": f"Bearer {token}"}


def make_image_bytes(fmt: str = "PNG", size=(8, 8), color=(200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def school_class(client: TestClient, auth_headers: dict) -> dict:
    response = client.post("/api/classes", json={"name": "C1"}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()
