"""
Pytest configuration and shared fixtures.

Every test gets a throwaway blob store root so uploads never touch the
working tree.
"""

import io

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image as PILImage
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def blob_root(settings, tmp_path):
    """Point the blob store at a temp directory."""
    root = tmp_path / "blobs"
    root.mkdir()
    settings.BLOB_ROOT = str(root)
    settings.BLOB_PUBLIC_BASE_URL = "https://cdn.test/storage/v1"
    return root


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username="editor", password="pw-123456")


@pytest.fixture
def api_client(user) -> APIClient:
    """Authenticated dashboard client."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def anon_client(db) -> APIClient:
    return APIClient()


@pytest.fixture
def png_bytes() -> bytes:
    """Small valid PNG (4x3)."""
    buf = io.BytesIO()
    PILImage.new("RGB", (4, 3), color=(255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_upload(png_bytes):
    """Factory for in-memory uploads; defaults to the PNG fixture."""

    def _make(name="photo.png", content=None, content_type="image/png"):
        return SimpleUploadedFile(name, png_bytes if content is None else content, content_type=content_type)

    return _make
