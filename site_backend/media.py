# ---- MEDIA LIBRARY APIS ----
import logging

from PIL import Image as PILImage, UnidentifiedImageError

from django.db import DatabaseError, transaction

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .assets import MEDIA, create_asset, delete_asset, resolve_asset
from .exceptions import SiteBackendError
from .models import MediaAsset
from .utilities import _as_list, _clean_str, _parse_payload, _to_int, error_response

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads"


def _probe_dimensions(upload):
    """(width, height) for raster images, (None, None) otherwise."""
    try:
        with PILImage.open(upload) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.debug("Could not read image size for %s: %s", getattr(upload, "name", ""), e)
        width = height = None
    upload.seek(0)
    return width, height


def _serialize_media(m: MediaAsset):
    return {
        "id": m.id,
        "url": m.public_url,
        "type": m.type,
        "caption": m.caption or "",
        "tags": m.tags or [],
        "width": m.width,
        "height": m.height,
        "is_published": m.is_published,
        "created_at": m.created_at,
        "sort_order": m.sort_order,
        "storage_path": m.storage_path,
    }


class MediaLibraryAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        items = [_serialize_media(m) for m in MediaAsset.objects.order_by("sort_order", "-created_at")]
        return Response({"items": items}, status=status.HTTP_200_OK)


class MediaUploadAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        upload = request.FILES.get("file")
        if not upload:
            return Response({"error": "No file provided"}, status=status.HTTP_400_BAD_REQUEST)

        mime = upload.content_type or "application/octet-stream"
        is_video = mime.startswith("video")
        width, height = (None, None) if is_video else _probe_dimensions(upload)

        fields = {
            "type": "video" if is_video else "image",
            "caption": request.data.get("caption") or "",
            "tags": _as_list(request.data.get("tags")),
            "sort_order": _to_int(request.data.get("sort_order"), 0),
            "width": width,
            "height": height,
            "is_published": True,
        }
        try:
            media = create_asset(MEDIA, upload, UPLOAD_PREFIX, fields)
        except SiteBackendError as e:
            return error_response(e)
        return Response({"item": _serialize_media(media)}, status=status.HTTP_201_CREATED)


class MediaDeleteAPIView(APIView):
    """Row first, then the object; a storage failure only warns."""
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def delete(self, request):
        data = _parse_payload(request)
        media_id = _clean_str(data.get("id"))
        if not media_id:
            return Response({"error": 'Missing required "id"'}, status=status.HTTP_400_BAD_REQUEST)
        try:
            media = resolve_asset(MEDIA, asset_id=media_id)
            delete_asset(MEDIA, media, row_first=True,
                         fallback_path=_clean_str(data.get("storage_path")))
        except SiteBackendError as e:
            return error_response(e)
        return Response({"ok": True}, status=status.HTTP_200_OK)


class MediaReorderAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)
        items = data.get("items")
        if not isinstance(items, list):
            return Response({"error": "Invalid payload: expected { items: [{ id, sort_order }] }"},
                            status=status.HTTP_400_BAD_REQUEST)
        try:
            with transaction.atomic():
                for item in items:
                    if not isinstance(item, dict) or not item.get("id"):
                        continue
                    MediaAsset.objects.filter(pk=item["id"]).update(
                        sort_order=_to_int(item.get("sort_order"), 0)
                    )
        except DatabaseError as e:
            logger.exception("media reorder failed")
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True}, status=status.HTTP_200_OK)


class MediaUpdateAPIView(APIView):
    """Caption and tags only."""
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def patch(self, request):
        data = _parse_payload(request)
        media_id = _clean_str(data.get("id"))
        if not media_id:
            return Response({"error": "Invalid payload: missing id"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            updated = MediaAsset.objects.filter(pk=media_id).update(
                caption=data.get("caption") or "",
                tags=_as_list(data.get("tags")),
            )
        except DatabaseError as e:
            logger.exception("media update failed")
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        if not updated:
            return Response({"error": "Not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"ok": True}, status=status.HTTP_200_OK)


class MediaGalleryAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            media = [
                {"id": m.id, "url": m.public_url, "caption": m.caption or None, "type": m.type}
                for m in MediaAsset.objects.filter(is_published=True).order_by("sort_order")
            ]
        except DatabaseError as e:
            logger.warning("gallery read failed: %s", e)
            media = []
        return Response({"media": media}, status=status.HTTP_200_OK)
