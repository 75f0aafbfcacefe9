import os
from datetime import datetime, timezone
from io import BytesIO

# Keep the module-level app off real infrastructure
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("S3_REGION", "us-east-1")

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from versoforms.main import create_app
from versoforms.models.submission import Submission
from versoforms.services.admin_setup import ensure_admin
from versoforms.services.auth import create_tokens
from versoforms.services.backend import BackendClient
from versoforms.services.database import create_db_and_tables
from versoforms.services.storage import StorageError
from versoforms.services.submissions import PhotoUpload


class InMemoryStorage:
    def __init__(self):
        self.objects = {}

    def upload(self, key, file_content, content_type):
        self.objects[key] = (file_content, content_type)

    def get_public_url(self, key):
        return f"https://storage.test/submissions/{key}"


class FailingStorage(InMemoryStorage):
    def upload(self, key, file_content, content_type):
        raise StorageError("The resource already exists")


def image_bytes(fmt="JPEG", size=None):
    output = BytesIO()
    Image.new("RGB", (16, 16), (200, 40, 40)).save(output, format=fmt)
    content = output.getvalue()
    if size is not None and size > len(content):
        # Trailing bytes after the image data do not stop Pillow from reading it
        content += b"\0" * (size - len(content))
    return content


def jpeg_photo(filename="photo.jpg", size=None):
    return PhotoUpload(filename=filename, content_type="image/jpeg", content=image_bytes("JPEG", size))


def png_photo(filename="photo.png", size=None):
    return PhotoUpload(filename=filename, content_type="image/png", content=image_bytes("PNG", size))


def make_submission(name, description="Something", created_at=None, **fields):
    return Submission(
        name=name,
        description=description,
        photo_url=f"https://storage.test/submissions/{name.lower().replace(' ', '-')}.jpg",
        created_at=created_at or datetime.now(timezone.utc),
        **fields
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def backend(engine, storage):
    return BackendClient(engine, storage)


@pytest.fixture
def client(backend):
    with TestClient(create_app(backend)) as c:
        yield c


@pytest.fixture
def admin_headers(backend):
    result = ensure_admin(backend, "admin@example.com", "s3cret-pass")
    token = create_tokens(result.user_id)["access_token"]
    return {"Authorization": f"Bearer {token}"}
