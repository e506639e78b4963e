import sys
from pathlib import Path

# project root first on sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# SQLite engine for tests, patched in BEFORE importing the app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

import taskflow.core.database
taskflow.core.database.engine = test_engine
taskflow.core.database.SessionLocal = TestingSessionLocal

from taskflow.core.database import Base, get_db
from taskflow.core.security import create_access_token
from taskflow.main import app
from taskflow.models.profile import Profile
from taskflow.services import realtime
from taskflow.services.storage_client import StorageError, get_storage


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


class FakeStorage:
    """In-memory stand-in for the storage bucket"""

    def __init__(self):
        self.objects = {}
        self.fail_remove = False
        self.fail_upload = False

    def upload(self, path, content, content_type):
        if self.fail_upload:
            raise StorageError("upload failed")
        self.objects[path] = content

    def remove(self, paths):
        if self.fail_remove:
            raise StorageError("remove failed")
        for path in paths:
            self.objects.pop(path, None)

    def download(self, path):
        return self.objects[path]

    def public_url(self, path):
        return f"https://storage.test/object/public/task-attachments/{path}"

    def create_signed_url(self, path, expires_in=3600):
        return f"https://storage.test/object/sign/task-attachments/{path}?token=abc&expires={expires_in}"


@pytest.fixture(autouse=True)
def setup_teardown():
    """Fresh tables around every test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)
    realtime.reset()


@pytest.fixture
def storage():
    fake = FakeStorage()
    app.dependency_overrides[get_storage] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_storage, None)


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    db = TestingSessionLocal()
    yield db
    db.close()


def make_profile(email, full_name=None, password="pass123"):
    db = TestingSessionLocal()
    profile = Profile(email=email, full_name=full_name)
    profile.set_password(password)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    db.expunge(profile)
    db.close()
    return profile


def auth_headers(profile):
    return {"Authorization": f"Bearer {create_access_token(profile.id, profile.email)}"}


@pytest.fixture
def user():
    return make_profile("ana@example.com", "Ana Lopez")


@pytest.fixture
def other_user():
    return make_profile("bruno@example.com", "Bruno Diaz")


@pytest.fixture
def headers(user):
    return auth_headers(user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)
