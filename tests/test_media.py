"""Tests for the media library endpoints."""

from unittest.mock import patch

import pytest

from site_backend.exceptions import BlobStoreError
from site_backend.models import MediaAsset
from site_backend.storage import BlobStore, get_blob_store


@pytest.fixture
def uploaded(api_client, make_upload):
    res = api_client.post("/api/media/upload/", {"file": make_upload(), "caption": "Fresh", "tags": "pla, red"},
                          format="multipart")
    assert res.status_code == 201
    return MediaAsset.objects.get(pk=res.json()["item"]["id"])


@pytest.mark.django_db
class TestMediaLibrary:
    def test_upload_reads_dimensions(self, uploaded):
        assert (uploaded.width, uploaded.height) == (4, 3)
        assert uploaded.type == "image"
        assert uploaded.tags == ["pla", "red"]
        assert uploaded.public_url.endswith(f"/object/public/media/{uploaded.storage_path}")

    def test_video_upload_has_no_dimensions(self, api_client, make_upload):
        video = make_upload("clip.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")
        res = api_client.post("/api/media/upload/", {"file": video}, format="multipart")
        assert res.status_code == 201
        assert res.json()["item"]["type"] == "video"
        assert res.json()["item"]["width"] is None

    def test_upload_without_file(self, api_client):
        res = api_client.post("/api/media/upload/", {}, format="multipart")
        assert res.status_code == 400

    def test_delete_requires_id(self, api_client):
        res = api_client.delete("/api/media/delete/", {}, format="json")
        assert res.status_code == 400
        assert res.json()["error"] == 'Missing required "id"'

    def test_delete_then_delete_again(self, api_client, uploaded):
        assert api_client.delete("/api/media/delete/", {"id": uploaded.id}, format="json").status_code == 200
        assert not get_blob_store().exists("media", uploaded.storage_path)
        assert api_client.delete("/api/media/delete/", {"id": uploaded.id}, format="json").status_code == 404

    def test_delete_succeeds_when_storage_fails(self, api_client, uploaded):
        with patch.object(BlobStore, "remove", side_effect=BlobStoreError("offline")):
            res = api_client.delete("/api/media/delete/", {"id": uploaded.id}, format="json")
        assert res.status_code == 200
        assert not MediaAsset.objects.filter(pk=uploaded.id).exists()

    def test_reorder(self, api_client, uploaded):
        res = api_client.post("/api/media/reorder/", {"items": [{"id": uploaded.id, "sort_order": 9}]}, format="json")
        assert res.status_code == 200
        uploaded.refresh_from_db()
        assert uploaded.sort_order == 9

    def test_reorder_rejects_bad_payload(self, api_client):
        assert api_client.post("/api/media/reorder/", {"items": "nope"}, format="json").status_code == 400

    def test_update_caption_and_tags(self, api_client, uploaded):
        res = api_client.patch("/api/media/update/", {"id": uploaded.id, "tags": ["petg"]}, format="json")
        assert res.status_code == 200
        uploaded.refresh_from_db()
        assert uploaded.caption == ""
        assert uploaded.tags == ["petg"]

    def test_update_unknown_id(self, api_client):
        assert api_client.patch("/api/media/update/", {"id": "x"}, format="json").status_code == 404

    def test_gallery_lists_published_only(self, anon_client, uploaded):
        MediaAsset.objects.create(public_url="https://cdn.test/h.png", is_published=False)
        body = anon_client.get("/api/media/gallery/").json()
        assert [m["id"] for m in body["media"]] == [uploaded.id]
