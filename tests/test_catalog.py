"""Tests for bundles, print designs and their public projections."""

from unittest.mock import patch

import pytest
from django.db import DatabaseError

from site_backend.exceptions import BlobStoreError
from site_backend.models import Bundle, BundleFile, BundleImage, PrintDesign
from site_backend.storage import BlobStore, get_blob_store


@pytest.fixture
def bundle(api_client, make_upload):
    res = api_client.post(
        "/api/bundles/upload/",
        {"title": "Starter Kit", "blurb": "Three prints", "file": make_upload()},
        format="multipart",
    )
    assert res.status_code == 201
    return Bundle.objects.get(pk=res.json()["item"]["id"])


@pytest.mark.django_db
class TestBundleDashboard:
    """Upload, attach, update and delete bundles."""

    def test_upload_creates_thumb(self, bundle):
        assert bundle.thumb_storage_path.startswith("thumbs/")
        assert bundle.category_id == "uncategorized"
        assert get_blob_store().exists("bundles", bundle.thumb_storage_path)

    def test_upload_requires_title(self, api_client, make_upload):
        res = api_client.post("/api/bundles/upload/", {"file": make_upload()}, format="multipart")
        assert res.status_code == 400
        assert res.json()["error"] == "title required"

    def test_add_image_and_file(self, api_client, bundle, make_upload):
        res = api_client.post("/api/bundles/add-image/",
                              {"bundle_id": bundle.id, "file": make_upload()}, format="multipart")
        assert res.status_code == 201
        assert res.json()["item"]["storage_path"].startswith(f"gallery/{bundle.id}/")

        upload = make_upload("guide.pdf", b"%PDF-1.4", "application/pdf")
        res = api_client.post("/api/bundles/add-file/",
                              {"bundle_id": bundle.id, "file": upload}, format="multipart")
        assert res.status_code == 201
        assert res.json()["item"]["label"] == "guide.pdf"
        assert res.json()["item"]["mime_type"] == "application/pdf"

    def test_add_image_to_missing_bundle(self, api_client, make_upload):
        res = api_client.post("/api/bundles/add-image/",
                              {"bundle_id": "nope", "file": make_upload()}, format="multipart")
        assert res.status_code == 404

    def test_remove_image_by_url_twice(self, api_client, bundle, make_upload):
        api_client.post("/api/bundles/add-image/",
                        {"bundle_id": bundle.id, "file": make_upload()}, format="multipart")
        image = BundleImage.objects.get(bundle=bundle)
        body = {"bundle_id": bundle.id, "image_url": image.image_url}

        first = api_client.post("/api/bundles/remove-image/", body, format="json")
        second = api_client.post("/api/bundles/remove-image/", body, format="json")

        assert first.json() == {"ok": True, "removed": True}
        assert second.status_code == 200
        assert second.json() == {"ok": True, "removed": False}
        assert not get_blob_store().exists("bundles", image.storage_path)

    def test_remove_file_by_id_twice(self, api_client, bundle, make_upload):
        api_client.post("/api/bundles/add-file/",
                        {"bundle_id": bundle.id, "file": make_upload("a.stl", b"solid")}, format="multipart")
        f = BundleFile.objects.get(bundle=bundle)

        assert api_client.delete("/api/bundles/remove-file/", {"id": f.id}, format="json").status_code == 200
        assert api_client.delete("/api/bundles/remove-file/", {"id": f.id}, format="json").status_code == 404

    def test_update_changes_only_sent_fields(self, api_client, bundle):
        res = api_client.put(f"/api/bundles/{bundle.id}/", {"price_from": "$25", "is_active": "false"}, format="json")
        assert res.status_code == 200

        bundle.refresh_from_db()
        assert bundle.price_from == "$25"
        assert bundle.is_active is False
        assert bundle.title == "Starter Kit"

    def test_delete_with_assets(self, api_client, bundle, make_upload):
        api_client.post("/api/bundles/add-image/",
                        {"bundle_id": bundle.id, "file": make_upload()}, format="multipart")
        image = BundleImage.objects.get(bundle=bundle)

        res = api_client.post("/api/bundles/delete/", {"id": bundle.id, "deleteAssets": True}, format="json")

        assert res.status_code == 200
        assert not Bundle.objects.filter(pk=bundle.id).exists()
        assert not BundleImage.objects.filter(pk=image.id).exists()
        assert get_blob_store().list_paths("bundles") == []

    def test_delete_survives_storage_failure(self, api_client, bundle):
        with patch.object(BlobStore, "remove", side_effect=BlobStoreError("offline")):
            res = api_client.delete("/api/bundles/delete/", {"id": bundle.id}, format="json")
        assert res.status_code == 200
        assert not Bundle.objects.filter(pk=bundle.id).exists()

    def test_delete_missing_bundle(self, api_client):
        res = api_client.delete("/api/bundles/delete/", {"id": "ghost"}, format="json")
        assert res.status_code == 404

    def test_thumb_insert_failure_cleans_up(self, api_client, make_upload):
        with patch.object(Bundle.objects, "create", side_effect=DatabaseError("down")):
            res = api_client.post("/api/bundles/upload/",
                                  {"title": "Broken", "file": make_upload()}, format="multipart")
        assert res.status_code == 500
        assert res.json()["error"] == "DB insert failed"
        assert get_blob_store().list_paths("bundles") == []


@pytest.mark.django_db
class TestDesignDashboard:
    def test_upload_then_delete(self, api_client, make_upload):
        res = api_client.post("/api/designs/upload/", {"title": "Gear", "file": make_upload()}, format="multipart")
        assert res.status_code == 201
        item = res.json()["item"]
        assert item["images"][0]["url"] == item["thumb_url"]

        res = api_client.delete("/api/designs/delete/", {"id": item["id"]}, format="json")
        assert res.status_code == 200
        assert PrintDesign.objects.count() == 0
        assert get_blob_store().list_paths("print-designs") == []


@pytest.mark.django_db
class TestPublicCatalog:
    """Search, pagination and graceful degradation."""

    @pytest.fixture
    def catalog(self):
        Bundle.objects.create(title="Dragon Set", blurb="scales", category_id="fantasy")
        Bundle.objects.create(title="Robot Pack", blurb="gears and dragons", category_id="scifi")
        Bundle.objects.create(title="Hidden", is_active=False)

    def test_search_matches_title_or_blurb(self, anon_client, catalog):
        body = anon_client.get("/api/public/bundles/", {"q": "dragon"}).json()
        assert body["total"] == 2
        assert {i["title"] for i in body["items"]} == {"Dragon Set", "Robot Pack"}

    def test_category_filter_and_all(self, anon_client, catalog):
        assert anon_client.get("/api/public/bundles/", {"category": "scifi"}).json()["total"] == 1
        assert anon_client.get("/api/public/bundles/", {"category": "all"}).json()["total"] == 2

    def test_page_size_is_clamped(self, anon_client, catalog):
        body = anon_client.get("/api/public/bundles/", {"pageSize": 1, "page": 2}).json()
        assert body["total"] == 2
        assert len(body["items"]) == 1

    def test_counts(self, anon_client):
        b = Bundle.objects.create(title="Counted", thumb_url="https://cdn.test/x.png")
        BundleImage.objects.create(bundle=b, image_url="https://cdn.test/1.png")
        BundleFile.objects.create(bundle=b, file_url="https://cdn.test/1.stl")
        item = anon_client.get("/api/public/bundles/").json()["items"][0]
        assert item["image_count"] == 2
        assert item["file_count"] == 1

    def test_list_degrades_on_db_error(self, anon_client):
        with patch("site_backend.catalog.search_items", side_effect=DatabaseError("down")):
            res = anon_client.get("/api/public/designs/")
        assert res.status_code == 200
        assert res.json() == {"items": [], "total": 0}

    def test_detail_hides_inactive(self, anon_client):
        d = PrintDesign.objects.create(title="Off", is_active=False)
        assert anon_client.get(f"/api/public/designs/{d.id}/").status_code == 404

    def test_detail_includes_images_and_files(self, anon_client):
        b = Bundle.objects.create(title="Full")
        BundleImage.objects.create(bundle=b, image_url="https://cdn.test/1.png", sort_order=2)
        BundleImage.objects.create(bundle=b, image_url="https://cdn.test/0.png", sort_order=1)
        body = anon_client.get(f"/api/public/bundles/{b.id}/").json()
        assert [i["url"] for i in body["images"]] == ["https://cdn.test/0.png", "https://cdn.test/1.png"]
        assert body["files"] == []
