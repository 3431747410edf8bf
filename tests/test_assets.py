"""Tests for the blob-backed asset lifecycle."""

from unittest.mock import patch

import pytest
from django.db import DatabaseError

from site_backend.assets import (
    BUNDLE_IMAGE,
    MEDIA,
    create_asset,
    delete_asset,
    find_orphans,
    parse_public_url,
    resolve_asset,
    unique_storage_path,
)
from site_backend.exceptions import BlobStoreError, NotFound, ObjectExistsError, UpstreamError, ValidationFailed
from site_backend.models import Bundle, BundleImage, MediaAsset
from site_backend.storage import BlobStore, get_blob_store


class TestStoragePaths:
    """Key generation and URL parsing."""

    def test_paths_are_unique(self):
        paths = {unique_storage_path("uploads", "a.png") for _ in range(50)}
        assert len(paths) == 50
        assert all(p.startswith("uploads/") and p.endswith(".png") for p in paths)

    def test_extension_is_lowercased(self):
        assert unique_storage_path("x", "PHOTO.JPG").endswith(".jpg")

    def test_missing_extension_uses_default(self):
        assert unique_storage_path("x", "README", default_ext="png").endswith(".png")
        assert unique_storage_path("x", None).endswith(".bin")

    def test_odd_extension_uses_default(self):
        assert unique_storage_path("x", "evil.ph p").endswith(".bin")

    def test_parse_public_url(self):
        url = "https://cdn.test/storage/v1/object/public/bundles/gallery/b1/my%20pic.png"
        assert parse_public_url(url) == ("bundles", "gallery/b1/my pic.png")

    def test_parse_public_url_rejects_foreign_urls(self):
        assert parse_public_url("https://example.com/pic.png") is None
        assert parse_public_url("https://cdn.test/storage/v1/object/public/bundles") is None
        assert parse_public_url(None) is None


@pytest.mark.django_db
class TestBlobStore:
    def test_upload_never_overwrites(self, make_upload):
        store = get_blob_store()
        store.upload("media", "uploads/a.png", make_upload())
        with pytest.raises(ObjectExistsError):
            store.upload("media", "uploads/a.png", make_upload())

    def test_public_url_shape(self):
        url = get_blob_store().public_url("media", "uploads/a.png")
        assert url == "https://cdn.test/storage/v1/object/public/media/uploads/a.png"


@pytest.mark.django_db
class TestCreateAsset:
    """Upload then insert; a failed insert leaves no object behind."""

    def test_create_stores_object_and_row(self, make_upload):
        row = create_asset(MEDIA, make_upload(), "uploads", {"caption": "hi"})

        assert row.storage_path.startswith("uploads/")
        assert row.public_url.endswith(row.storage_path)
        assert get_blob_store().exists("media", row.storage_path)

    def test_insert_failure_removes_object(self, make_upload):
        with patch.object(MediaAsset.objects, "create", side_effect=DatabaseError("boom")):
            with pytest.raises(UpstreamError, match="DB insert failed"):
                create_asset(MEDIA, make_upload(), "uploads")

        assert get_blob_store().list_paths("media") == []
        assert MediaAsset.objects.count() == 0

    def test_upload_failure_inserts_nothing(self, make_upload):
        with patch.object(BlobStore, "upload", side_effect=BlobStoreError("down")):
            with pytest.raises(UpstreamError, match="Upload failed"):
                create_asset(MEDIA, make_upload(), "uploads")
        assert MediaAsset.objects.count() == 0


@pytest.mark.django_db
class TestDeleteAsset:
    """Storage removal is best-effort; the row delete is authoritative."""

    def test_delete_removes_object_and_row(self, make_upload):
        row = create_asset(MEDIA, make_upload(), "uploads")
        assert delete_asset(MEDIA, row) is True
        assert not MediaAsset.objects.filter(pk=row.pk).exists()
        assert not get_blob_store().exists("media", row.storage_path)

    def test_storage_failure_still_deletes_row(self, make_upload):
        row = create_asset(MEDIA, make_upload(), "uploads")
        with patch.object(BlobStore, "remove", side_effect=BlobStoreError("nope")):
            assert delete_asset(MEDIA, row, row_first=True) is True
        assert not MediaAsset.objects.filter(pk=row.pk).exists()

    def test_legacy_row_without_path_uses_url(self, make_upload):
        store = get_blob_store()
        store.upload("bundles", "gallery/b1/old.png", make_upload())
        bundle = Bundle.objects.create(title="Kit")
        row = BundleImage.objects.create(
            bundle=bundle,
            image_url=store.public_url("bundles", "gallery/b1/old.png"),
            storage_path=None,
        )

        delete_asset(BUNDLE_IMAGE, row)

        assert not store.exists("bundles", "gallery/b1/old.png")

    def test_natural_key_delete_is_idempotent(self, make_upload):
        bundle = Bundle.objects.create(title="Kit")
        row = create_asset(BUNDLE_IMAGE, make_upload(), f"gallery/{bundle.id}", {"bundle_id": bundle.id})

        for expected in (True, False):
            found = resolve_asset(BUNDLE_IMAGE, owner_id=bundle.id, url=row.image_url)
            assert delete_asset(BUNDLE_IMAGE, found) is expected

    def test_delete_by_missing_id_is_not_found(self):
        with pytest.raises(NotFound):
            resolve_asset(MEDIA, asset_id="missing")

    def test_resolve_needs_a_key(self):
        with pytest.raises(ValidationFailed):
            resolve_asset(BUNDLE_IMAGE, owner_id="b1")


@pytest.mark.django_db
class TestOrphans:
    def test_find_orphans_ignores_referenced_objects(self, make_upload):
        kept = create_asset(MEDIA, make_upload(), "uploads")
        get_blob_store().upload("media", "uploads/stray.png", make_upload())

        assert find_orphans("media") == ["uploads/stray.png"]
        assert kept.storage_path not in find_orphans("media")
