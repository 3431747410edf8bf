# site_backend/permissions.py
import hmac
import os

from dotenv import load_dotenv
from rest_framework.exceptions import APIException
from rest_framework.permissions import BasePermission

load_dotenv()


class VoiceNoteNotConfigured(APIException):
    status_code = 500
    default_detail = "Voice note integration is not configured"
    default_code = "voice_note_not_configured"


class InvalidVoiceNoteKey(APIException):
    status_code = 401
    default_detail = "Unauthorized"
    default_code = "invalid_voice_note_key"


class VoiceNoteKeyPermission(BasePermission):
    """Shared-secret header check for the voice assistant integration."""

    def has_permission(self, request, view):
        expected = os.environ.get("VOICE_NOTE_API_KEY", "")
        if not expected or not os.environ.get("VOICE_NOTE_USER_ID"):
            raise VoiceNoteNotConfigured()
        supplied = request.headers.get("X-Voice-Note-Key") or ""
        if not hmac.compare_digest(supplied.encode(), expected.encode()):
            raise InvalidVoiceNoteKey()
        return True
