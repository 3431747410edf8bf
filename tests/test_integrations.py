"""Tests for voice notes, analytics tracking, auth cookies and the orphan sweep."""

from io import StringIO

import pytest
from django.core.management import call_command
from rest_framework.test import APIClient

from site_backend.assets import MEDIA, create_asset
from site_backend.models import AnalyticsSession, DashboardNote
from site_backend.storage import get_blob_store


@pytest.fixture
def voice_env(monkeypatch):
    monkeypatch.setenv("VOICE_NOTE_API_KEY", "sekret")
    monkeypatch.setenv("VOICE_NOTE_USER_ID", "owner-1")


@pytest.mark.django_db
class TestVoiceNote:
    """Shared-secret header guard and note creation."""

    def test_not_configured(self, anon_client, monkeypatch):
        monkeypatch.delenv("VOICE_NOTE_API_KEY", raising=False)
        monkeypatch.delenv("VOICE_NOTE_USER_ID", raising=False)
        res = anon_client.post("/api/voice-note/", {"text": "hi"}, format="json")
        assert res.status_code == 500

    def test_wrong_key(self, anon_client, voice_env):
        res = anon_client.post("/api/voice-note/", {"text": "hi"}, format="json", HTTP_X_VOICE_NOTE_KEY="nope")
        assert res.status_code == 401
        assert DashboardNote.objects.count() == 0

    def test_missing_text(self, anon_client, voice_env):
        res = anon_client.post("/api/voice-note/", {"text": "  "}, format="json", HTTP_X_VOICE_NOTE_KEY="sekret")
        assert res.status_code == 400
        assert res.json() == {"ok": False, "error": 'Missing "text" in body'}

    def test_saves_note(self, anon_client, voice_env):
        res = anon_client.post("/api/voice-note/", {"text": " order more PLA "}, format="json",
                               HTTP_X_VOICE_NOTE_KEY="sekret")
        assert res.status_code == 200
        saved = res.json()["saved"]
        assert saved["content"] == "order more PLA"
        assert saved["source"] == "voice"
        assert DashboardNote.objects.get().user_id == "owner-1"


@pytest.mark.django_db
class TestAnalytics:
    def test_new_visitor_gets_cookie(self, anon_client):
        res = anon_client.post("/api/analytics/track/", {"path": "/bundles"}, format="json")
        assert res.status_code == 200
        cookie = res.cookies["rdp_session_id"]
        assert cookie["httponly"]
        assert AnalyticsSession.objects.get().session_id == cookie.value

    def test_returning_visitor_keeps_session(self):
        client = APIClient()
        client.cookies["rdp_session_id"] = "known-session"
        res = client.post("/api/analytics/track/", {"path": "/"}, format="json")
        assert "rdp_session_id" not in res.cookies
        assert AnalyticsSession.objects.get().session_id == "known-session"


@pytest.mark.django_db
class TestAuthCookies:
    def test_login_sets_cookies_and_authenticates(self, user):
        client = APIClient()
        res = client.post("/api/token/", {"username": "editor", "password": "pw-123456"}, format="json")
        assert res.status_code == 200
        assert "refresh" not in res.json()
        assert "access_token" in res.cookies
        assert "refresh_token" in res.cookies

        assert client.get("/api/media/").status_code == 200

    def test_logout_clears_cookies(self, anon_client):
        res = anon_client.post("/api/logout/")
        assert res.status_code == 200
        assert res.cookies["access_token"].value == ""

    def test_dashboard_rejects_anonymous(self, anon_client):
        assert anon_client.get("/api/media/").status_code == 401
        assert anon_client.get("/api/reviews/").status_code == 401


@pytest.mark.django_db
class TestSweepCommand:
    """Objects without a referencing row are reported and removed."""

    def test_dry_run_keeps_objects(self, make_upload):
        create_asset(MEDIA, make_upload(), "uploads")
        get_blob_store().upload("media", "uploads/stray.png", make_upload())

        out = StringIO()
        call_command("sweep_orphaned_objects", "--dry-run", "--bucket", "media", stdout=out)

        assert "media/uploads/stray.png" in out.getvalue()
        assert "Found 1 orphaned object(s)" in out.getvalue()
        assert get_blob_store().exists("media", "uploads/stray.png")

    def test_sweep_removes_orphans_only(self, make_upload):
        kept = create_asset(MEDIA, make_upload(), "uploads")
        get_blob_store().upload("media", "uploads/stray.png", make_upload())

        out = StringIO()
        call_command("sweep_orphaned_objects", stdout=out)

        assert "Removed 1 orphaned object(s)" in out.getvalue()
        assert get_blob_store().list_paths("media") == [kept.storage_path]
