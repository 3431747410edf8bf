"""Tests for the public contact form relay."""

from smtplib import SMTPException
from unittest.mock import patch

import httpx
import pytest

from site_backend.contact import DEFAULT_SUBJECT, SITEVERIFY_URL

FORM = {
    "name": "Ada <script>",
    "email": "ada@example.com",
    "subject": "Custom\nlamp",
    "message": "Can you print a lamp shade?",
    "token": "tok-123",
}


def _verdict(payload, status_code=200):
    return httpx.Response(status_code, json=payload, request=httpx.Request("POST", SITEVERIFY_URL))


@pytest.fixture
def contact_env(monkeypatch):
    monkeypatch.setenv("TURNSTILE_SECRET_KEY", "turnstile-secret")
    monkeypatch.setenv("CONTACT_TO", "shop@example.com, owner@example.com ,")
    monkeypatch.setenv("CONTACT_FROM", "Rad Dad Prints <noreply@example.com>")


@pytest.mark.usefixtures("contact_env")
class TestContactRelay:
    """Captcha check then email relay."""

    def test_verified_message_is_relayed(self, anon_client, mailoutbox):
        with patch.object(httpx.Client, "post", return_value=_verdict({"success": True})) as verify:
            res = anon_client.post("/api/contact/", FORM, format="json")

        assert res.status_code == 200
        assert res.json() == {"success": True}
        assert verify.call_args.kwargs["data"] == {"secret": "turnstile-secret", "response": "tok-123"}

        assert len(mailoutbox) == 1
        sent = mailoutbox[0]
        assert sent.to == ["shop@example.com", "owner@example.com"]
        assert sent.from_email == "Rad Dad Prints <noreply@example.com>"
        assert sent.subject == "Custom lamp"
        assert "Can you print a lamp shade?" in sent.body
        html = sent.alternatives[0][0]
        assert "Ada &lt;script&gt;" in html
        assert "<script>" not in html

    def test_blank_subject_uses_default(self, anon_client, mailoutbox):
        with patch.object(httpx.Client, "post", return_value=_verdict({"success": True})):
            res = anon_client.post("/api/contact/", dict(FORM, subject="  "), format="json")
        assert res.status_code == 200
        assert mailoutbox[0].subject == DEFAULT_SUBJECT

    def test_failed_verification_is_400(self, anon_client, mailoutbox):
        verdict = _verdict({"success": False, "error-codes": ["invalid-input-response"]})
        with patch.object(httpx.Client, "post", return_value=verdict):
            res = anon_client.post("/api/contact/", FORM, format="json")
        assert res.status_code == 400
        assert res.json() == {"error": "Failed Turnstile verification"}
        assert mailoutbox == []

    def test_unreachable_verifier_is_500(self, anon_client, mailoutbox):
        with patch.object(httpx.Client, "post", side_effect=httpx.ConnectError("no route")):
            res = anon_client.post("/api/contact/", FORM, format="json")
        assert res.status_code == 500
        assert mailoutbox == []

    def test_send_failure_is_502(self, anon_client):
        with patch.object(httpx.Client, "post", return_value=_verdict({"success": True})), \
                patch("site_backend.contact.send_mail", side_effect=SMTPException("relay refused")):
            res = anon_client.post("/api/contact/", FORM, format="json")
        assert res.status_code == 502
        assert res.json()["error"] == "Email send failed"
        assert "relay refused" in res.json()["details"]

    def test_missing_secret_is_500(self, anon_client, monkeypatch, mailoutbox):
        monkeypatch.delenv("TURNSTILE_SECRET_KEY")
        with patch.object(httpx.Client, "post") as verify:
            res = anon_client.post("/api/contact/", FORM, format="json")
        assert res.status_code == 500
        assert res.json() == {"error": "Server misconfiguration"}
        verify.assert_not_called()

    def test_missing_recipients_is_500(self, anon_client, monkeypatch, mailoutbox):
        monkeypatch.setenv("CONTACT_TO", " , ")
        with patch.object(httpx.Client, "post", return_value=_verdict({"success": True})):
            res = anon_client.post("/api/contact/", FORM, format="json")
        assert res.status_code == 500
        assert mailoutbox == []
