# ---- SITE THEME / TAGLINE / SOCIAL APIS ----
import logging

from django.db import DatabaseError
from django.http import JsonResponse

from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .config_store import clean_theme, current_row, merge_singleton, replace_singleton, upsert_keyed
from .exceptions import SiteBackendError
from .models import HeroTheme, SiteSettings, SiteTagline
from .utilities import _clean_str, _now, _parse_payload, _to_int, error_response

logger = logging.getLogger(__name__)

DEFAULT_THEME = {
    "kind": "gradient",
    "solidColor": "#432389",
    "from": "#13c8df",
    "to": "#6d44af",
}

MAX_MAIN_CHARS = 40
MAX_SUB_CHARS = 28
DEFAULT_FONT = "display"
PUBLIC_DEFAULT_FONT = "sans"


def _theme_payload(theme):
    if theme is None:
        return dict(DEFAULT_THEME)
    return {
        "kind": theme.kind or DEFAULT_THEME["kind"],
        "solidColor": theme.solid_color or DEFAULT_THEME["solidColor"],
        "from": theme.from_color or DEFAULT_THEME["from"],
        "to": theme.to_color or DEFAULT_THEME["to"],
    }


def _limit(value, n):
    v = _clean_str(value)
    return v[:n] if v else None


def _followers(value):
    """Whole follower counts; anything else (including blanks) is stored as null."""
    n = _to_int(value)
    if n is None and isinstance(value, float):
        n = int(value)
    return n if n is not None and n >= 0 else None


class ThemeAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def get(self, request):
        try:
            theme = current_row(HeroTheme)
        except DatabaseError as e:
            logger.warning("theme read failed: %s", e)
            theme = None
        payload = _theme_payload(theme)
        payload["updated_at"] = theme.updated_at if theme else None
        return Response(payload, status=status.HTTP_200_OK)

    def post(self, request):
        data = _parse_payload(request)
        try:
            fields = clean_theme(data)
        except SiteBackendError as e:
            return error_response(e)

        fields["updated_by"] = str(request.user.pk)
        try:
            theme = replace_singleton(HeroTheme, fields)
        except DatabaseError as e:
            logger.exception("theme replace failed")
            return Response({"error": "Failed to apply theme", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"ok": True, "theme": {
            "id": theme.pk,
            "kind": theme.kind,
            "solid_color": theme.solid_color,
            "from_color": theme.from_color,
            "to_color": theme.to_color,
            "updated_at": theme.updated_at,
        }}, status=status.HTTP_200_OK)


class PublicThemeAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            theme = current_row(HeroTheme)
        except DatabaseError as e:
            logger.warning("[public/theme] select error: %s", e)
            theme = None
        return Response(_theme_payload(theme), status=status.HTTP_200_OK)


class TaglineAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def get(self, request):
        row = current_row(SiteTagline)
        return Response({
            "main_text": row.main_text if row else None,
            "sub_text": row.sub_text if row else None,
            "font_id": (row.font_id if row else None) or DEFAULT_FONT,
        }, status=status.HTTP_200_OK)

    def post(self, request):
        data = _parse_payload(request)
        fields = {}
        if "main_text" in data:
            fields["main_text"] = _limit(data.get("main_text"), MAX_MAIN_CHARS)
        if "sub_text" in data:
            fields["sub_text"] = _limit(data.get("sub_text"), MAX_SUB_CHARS)
        if "font_id" in data:
            fields["font_id"] = _clean_str(data.get("font_id")) or DEFAULT_FONT
        if not fields:
            return Response({"error": "Nothing to update"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            row = merge_singleton(SiteTagline, fields)
        except DatabaseError as e:
            logger.exception("tagline save failed")
            return Response({"error": "Failed to save tagline", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True, "tagline": {
            "main_text": row.main_text,
            "sub_text": row.sub_text,
            "font_id": row.font_id or DEFAULT_FONT,
            "updated_at": row.updated_at,
        }}, status=status.HTTP_200_OK)


class PublicTaglineAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            row = current_row(SiteTagline)
        except DatabaseError as e:
            logger.warning("Error loading public tagline: %s", e)
            row = None
        if row is None:
            return JsonResponse(None, safe=False)
        return Response({
            "main_text": row.main_text,
            "sub_text": row.sub_text,
            "font_id": row.font_id or PUBLIC_DEFAULT_FONT,
        }, status=status.HTTP_200_OK)


class SocialReachAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)
        fields = {"social_updated_at": _now()}
        for network in ("instagram", "facebook", "x"):
            if f"{network}_url" in data:
                fields[f"{network}_url"] = _clean_str(data.get(f"{network}_url"))
            if f"{network}_followers" in data:
                fields[f"{network}_followers"] = _followers(data.get(f"{network}_followers"))
        try:
            upsert_keyed(SiteSettings, 1, fields)
        except DatabaseError as e:
            logger.exception("Error saving social settings")
            return Response({"ok": False, "message": "Failed to save social settings", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True}, status=status.HTTP_200_OK)
