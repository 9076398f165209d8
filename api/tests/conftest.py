"""Pytest configuration and fixtures."""

from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jewelrydam.models  # noqa: F401  registers tables on Base.metadata
from jewelrydam.api.deps import get_db, get_storage
from jewelrydam.database import Base
from jewelrydam.main import app
from jewelrydam.storage.base import StorageError
from jewelrydam.storage.local_driver import LocalStorageDriver

PUBLIC_URL = "http://localhost:9000/jewelrydam"


class FailingStorageDriver(LocalStorageDriver):
    """Local driver that records uploads and can be told to fail uploads or deletes."""

    def __init__(self, config, fail_upload_after: Optional[int] = None, fail_deletes: bool = False):
        super().__init__(config)
        self.fail_upload_after = fail_upload_after
        self.fail_deletes = fail_deletes
        self.upload_calls = 0
        self.uploads = []
        self.delete_calls = 0

    async def upload_file(self, file_path, content, content_type=None):
        self.upload_calls += 1
        if self.fail_upload_after is not None and self.upload_calls > self.fail_upload_after:
            raise StorageError("Failed to upload file: connection reset by peer")
        self.uploads.append((file_path, content_type))
        return await super().upload_file(file_path, content, content_type)

    async def delete_file(self, file_path):
        self.delete_calls += 1
        if self.fail_deletes:
            raise StorageError("Failed to delete file: access denied")
        return await super().delete_file(file_path)


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def test_db(session_factory):
    """Create a test database session for assertions and seeding."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def storage_config(tmp_path):
    return {"base_path": str(tmp_path / "blobs"), "public_url": PUBLIC_URL}


@pytest.fixture
def storage(storage_config):
    """Local storage driver rooted in a temporary directory."""
    return LocalStorageDriver(storage_config)


@pytest.fixture
def make_client(session_factory):
    """Build a test client wired to the test database and a given storage driver."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    def _make(storage_driver):
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_storage] = lambda: storage_driver
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, storage):
    """Create a test client with database and storage overrides."""
    return make_client(storage)


def upload_files(client, names, **form):
    """POST image files to the upload endpoint."""
    files = [("images", (name, b"\xff\xd8\xff\xe0" + name.encode(), "image/jpeg")) for name in names]
    return client.post("/api/assets", files=files, data=form)


@pytest.fixture
def post_images():
    """Helper posting images through a given client."""
    return upload_files
