"""Test configuration and fixtures for the products API."""

from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app import create_app
from config import Settings
from database import Database
from exceptions import UpstreamBlobError
from routes import ApplicationDependencies
from services import BlobResult

BLOB_URL_PREFIX = "https://store.public.blob.vercel-storage.com/"


class FakeBlobService:
    """In-memory stand-in for the Vercel Blob client."""

    def __init__(self):
        self.uploads: List[dict] = []
        self.deleted: List[str] = []
        self.fail_with = None

    def put(self, pathname, body, access="public", content_type="image/png"):
        if self.fail_with is not None:
            raise self.fail_with
        self.uploads.append({
            "pathname": pathname,
            "body": body,
            "access": access,
            "content_type": content_type,
        })
        url = f"{BLOB_URL_PREFIX}{pathname}-{len(self.uploads)}"
        return BlobResult(url=url, pathname=pathname, content_type=content_type)

    def delete(self, url):
        self.deleted.append(url)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        blob_read_write_token="vercel_blob_rw_test",
        environment="test",
    )


@pytest.fixture
def blob_service() -> FakeBlobService:
    return FakeBlobService()


@pytest.fixture
def database(engine) -> Database:
    return Database(engine)


@pytest.fixture
def app_dependencies(settings, database, blob_service) -> ApplicationDependencies:
    return ApplicationDependencies(settings=settings, database=database, blob_service=blob_service)


@pytest.fixture(name="client")
def client_fixture(settings, app_dependencies):
    """Create a test client with the startup hooks run."""
    app = create_app(settings, app_dependencies)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_client(settings):
    """Build a client around custom settings/dependencies."""
    clients = []

    def _make(custom_settings=None, deps=None):
        custom_settings = custom_settings or settings
        deps = deps or ApplicationDependencies.from_settings(custom_settings)
        client = TestClient(create_app(custom_settings, deps))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def product_payload() -> dict:
    return {
        "name": "Widget",
        "category": "Tools",
        "price": "9.99",
        "imageBase64": "data:image/png;base64,QQ==",
    }


@pytest.fixture
def failing_blob_error() -> UpstreamBlobError:
    return UpstreamBlobError("Blob upload failed with status 503: Service Unavailable")
