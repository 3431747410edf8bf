# Public contact form: captcha check, then relay to the shop inbox.
import logging
import os

import httpx
from django.core.mail import send_mail
from django.utils.html import format_html

from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .utilities import _parse_payload

logger = logging.getLogger(__name__)

SITEVERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"
DEFAULT_FROM = "Rad Dad Prints <contact@raddadprints.ca>"
DEFAULT_SUBJECT = "New message from Rad Dad Prints contact form"


def _field(data, key):
    value = data.get(key)
    return value if isinstance(value, str) else ""


def contact_recipients():
    return [s.strip() for s in os.environ.get("CONTACT_TO", "").split(",") if s.strip()]


def verify_turnstile(token, secret):
    """Return the siteverify verdict; raises httpx.HTTPError when unreachable."""
    with httpx.Client(timeout=10.0) as client:
        response = client.post(SITEVERIFY_URL, data={"secret": secret, "response": token})
        response.raise_for_status()
        return response.json()


def _message_bodies(name, email, subject, message):
    text = (
        "New contact form submission:\n\n"
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Subject: {subject}\n\n"
        f"Message:\n{message}\n"
    )
    html = format_html(
        '<table style="max-width:640px;width:100%;font-family:Arial,Helvetica,sans-serif"><tr><td>'
        '<h2 style="margin:0 0 12px 0">New Contact Form Submission</h2>'
        "<p><b>Name:</b> {}</p><p><b>Email:</b> {}</p><p><b>Subject:</b> {}</p>"
        '<hr style="border:none;border-top:1px solid #ddd;margin:16px 0" />'
        '<div style="white-space:pre-wrap;line-height:1.6">{}</div>'
        "</td></tr></table>",
        name, email, subject, message,
    )
    return text, html


class ContactAPIView(APIView):
    """POST { name, email, subject, message, token } from the public contact page."""
    authentication_classes = ()
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)

        secret = os.environ.get("TURNSTILE_SECRET_KEY", "").strip()
        if not secret:
            logger.error("Missing TURNSTILE_SECRET_KEY")
            return Response({"error": "Server misconfiguration"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        try:
            verdict = verify_turnstile(_field(data, "token"), secret)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Turnstile verification request failed: %s", e)
            return Response({"error": "Server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        if not isinstance(verdict, dict) or not verdict.get("success"):
            logger.warning("Turnstile verification failed: %s", verdict)
            return Response({"error": "Failed Turnstile verification"}, status=status.HTTP_400_BAD_REQUEST)

        recipients = contact_recipients()
        if not recipients:
            logger.error("Missing CONTACT_TO")
            return Response({"error": "Server misconfiguration"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        name = _field(data, "name")
        email = _field(data, "email")
        # header values cannot carry newlines
        subject = " ".join(_field(data, "subject").split()) or DEFAULT_SUBJECT
        text, html = _message_bodies(name, email, subject, _field(data, "message"))

        try:
            send_mail(
                subject,
                text,
                os.environ.get("CONTACT_FROM") or DEFAULT_FROM,
                recipients,
                html_message=html,
            )
        except OSError as e:  # SMTPException and connection errors
            logger.exception("Contact email send failed")
            return Response({"error": "Email send failed", "details": str(e)}, status=status.HTTP_502_BAD_GATEWAY)

        logger.info("Relayed contact message to %d recipient(s)", len(recipients))
        return Response({"success": True}, status=status.HTTP_200_OK)
