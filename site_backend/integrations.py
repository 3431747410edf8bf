# Voice assistant notes and anonymous page-view tracking.
import logging
import os
import uuid
from zoneinfo import ZoneInfo

from django.db import DatabaseError
from django.utils import timezone

from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import AnalyticsSession, DashboardNote
from .permissions import VoiceNoteKeyPermission
from .utilities import _parse_payload

logger = logging.getLogger(__name__)

NOTES_TZ = ZoneInfo("America/Halifax")
SESSION_COOKIE = "rdp_session_id"
SESSION_MAX_AGE = 60 * 60 * 24 * 365


def halifax_today():
    return timezone.now().astimezone(NOTES_TZ).date()


class VoiceNoteAPIView(APIView):
    """POST { text } with X-Voice-Note-Key -> dated dashboard note."""
    authentication_classes = ()
    permission_classes = [VoiceNoteKeyPermission]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)
        text = data.get("text")
        text = text.strip() if isinstance(text, str) else ""
        if not text:
            return Response({"ok": False, "error": 'Missing "text" in body'},
                            status=status.HTTP_400_BAD_REQUEST)

        try:
            note = DashboardNote.objects.create(
                user_id=os.environ["VOICE_NOTE_USER_ID"].strip(),
                note_date=halifax_today(),
                content=text,
                source="voice",
                folder_slug=None,
            )
        except DatabaseError:
            logger.exception("Error inserting voice note")
            return Response({"ok": False, "error": "Failed to save note"},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"ok": True, "saved": {
            "id": note.id,
            "user_id": note.user_id,
            "note_date": note.note_date.isoformat(),
            "content": note.content,
            "source": note.source,
            "folder_slug": note.folder_slug,
        }}, status=status.HTTP_200_OK)


class AnalyticsTrackAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)
        path = data.get("path") or request.query_params.get("path") or "/"

        session_id = request.COOKIES.get(SESSION_COOKIE)
        is_new = not session_id
        if is_new:
            session_id = str(uuid.uuid4())
            logger.info("[analytics] new session created %s", session_id)

        try:
            AnalyticsSession.objects.create(
                session_id=session_id,
                path=str(path)[:1024],
                user_agent=request.headers.get("User-Agent"),
            )
        except DatabaseError as e:
            logger.error("[analytics] insert error: %s", e)
            return Response({"ok": False}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        res = Response({"ok": True}, status=status.HTTP_200_OK)
        if is_new:
            res.set_cookie(
                SESSION_COOKIE, session_id,
                max_age=SESSION_MAX_AGE,
                httponly=True,
                secure=True,
                samesite="Lax",
                path="/",
            )
        return res
