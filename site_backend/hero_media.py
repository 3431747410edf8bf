# ---- HOMEPAGE HERO MEDIA APIS ----
import logging

from django.conf import settings
from django.db import DatabaseError

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .assets import HERO_ITEM, create_asset, delete_asset
from .config_store import current_row, merge_singleton
from .exceptions import SiteBackendError, ValidationFailed
from .models import HeroMediaConfig, HeroMediaItem
from .storage import get_blob_store
from .utilities import _as_bool, _clean_str, _parse_payload, error_response

logger = logging.getLogger(__name__)

SLOTS = ("main", "side")

FALLBACK_HERO_MEDIA = {
    "mainKind": "video",
    "mainSrc": "/assets/videos/rad-dad-prints-video02.mp4",
    "mainLabel": "Runway hero video",
    "sideKind": "image",
    "sideSrc": "/assets/rad-dad-prints.png",
    "sideLabel": "Rad Dad logo loop",
}


def hero_public_url(storage_path):
    if not storage_path:
        return None
    return get_blob_store().public_url(settings.HERO_MEDIA_BUCKET, storage_path)


def pick_for_slot(items, config, slot):
    """Selected id for the slot, else the slot default, else any item in the slot."""
    selected = getattr(config, f"selected_{slot}", None) if config else None
    in_slot = [i for i in items if i.slot == slot]
    for item in in_slot:
        if selected and item.id == selected:
            return item
    for item in in_slot:
        if item.is_default:
            return item
    return in_slot[0] if in_slot else None


def resolve_hero_media():
    items = list(HeroMediaItem.objects.order_by("created_at"))
    if not items:
        return dict(FALLBACK_HERO_MEDIA)

    try:
        config = current_row(HeroMediaConfig)
    except DatabaseError as e:
        logger.warning("hero media config unreadable, using slot defaults: %s", e)
        config = None

    main = pick_for_slot(items, config, "main")
    side = pick_for_slot(items, config, "side")
    if main is None or side is None:
        logger.warning("Missing main/side hero items, using fallback")
        return dict(FALLBACK_HERO_MEDIA)

    return {
        "mainKind": main.kind,
        "mainSrc": hero_public_url(main.storage_path) or FALLBACK_HERO_MEDIA["mainSrc"],
        "mainLabel": main.label,
        "sideKind": side.kind,
        "sideSrc": hero_public_url(side.storage_path) or FALLBACK_HERO_MEDIA["sideSrc"],
        "sideLabel": side.label,
    }


def _serialize_config(config):
    if config is None:
        return None
    return {
        "id": config.pk,
        "selected_main": config.selected_main,
        "selected_side": config.selected_side,
        "updated_at": config.updated_at,
    }


def _serialize_item(item):
    return {
        "id": item.id,
        "slot": item.slot,
        "label": item.label,
        "kind": item.kind,
        "storage_path": item.storage_path,
        "is_default": item.is_default,
        "is_protected": item.is_protected,
        "created_at": item.created_at,
        "public_url": hero_public_url(item.storage_path),
    }


def _valid_selection(slot, item_id):
    return HeroMediaItem.objects.filter(pk=item_id, slot=slot).exists()


def _selection_from_payload(data):
    """
    Map the accepted spellings onto config columns. Only keys the client
    sent are returned, so an omitted slot keeps its stored value.
    """
    fields = {}
    for slot, keys in (("main", ("selected_main_id", "mainId")),
                       ("side", ("selected_side_id", "sideId"))):
        present = [k for k in keys if k in data]
        if not present:
            continue
        value = next((data.get(k) for k in present if data.get(k) is not None), None)
        if value is not None and not isinstance(value, str):
            raise ValidationFailed(f"Invalid {slot}Id")
        fields[f"selected_{slot}"] = value or None
    return fields


class HeroMediaOverviewAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            items = [_serialize_item(i) for i in HeroMediaItem.objects.order_by("slot", "created_at")]
        except DatabaseError as e:
            logger.exception("hero media items read failed")
            return Response({"error": "Failed to load hero media items", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        try:
            config = current_row(HeroMediaConfig)
        except DatabaseError as e:
            logger.warning("hero media config read failed: %s", e)
            config = None
        return Response({"items": items, "config": _serialize_config(config)}, status=status.HTTP_200_OK)


class HeroMediaSelectAPIView(APIView):
    """Point one slot at an item; the other slot is left as stored."""
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)
        slot = data.get("slot")
        item_id = _clean_str(data.get("itemId"))
        if not slot or not item_id:
            return Response({"error": "slot and itemId are required"}, status=status.HTTP_400_BAD_REQUEST)
        if slot not in SLOTS or not _valid_selection(slot, item_id):
            return Response({"error": "Invalid hero media selection"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            config = merge_singleton(HeroMediaConfig, {f"selected_{slot}": item_id})
        except DatabaseError as e:
            logger.exception("hero media select failed")
            return Response({"error": "Failed to update hero media config", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True, "config": _serialize_config(config)}, status=status.HTTP_200_OK)


class HeroMediaSaveAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)
        try:
            fields = _selection_from_payload(data)
        except SiteBackendError as e:
            return error_response(e)

        for column, item_id in fields.items():
            slot = column.replace("selected_", "")
            if item_id and not _valid_selection(slot, item_id):
                return Response({"error": "Invalid hero media selection"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            config = merge_singleton(HeroMediaConfig, fields)
        except DatabaseError as e:
            logger.exception("hero media save failed")
            return Response({"error": "Failed to update hero media config", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True, "config": _serialize_config(config)}, status=status.HTTP_200_OK)


class HeroMediaItemUploadAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        slot = request.data.get("slot")
        upload = request.FILES.get("file")
        if slot not in SLOTS:
            return Response({"error": "slot must be main or side"}, status=status.HTTP_400_BAD_REQUEST)
        if not upload:
            return Response({"error": "Missing file"}, status=status.HTTP_400_BAD_REQUEST)

        mime = upload.content_type or ""
        fields = {
            "slot": slot,
            "label": (request.data.get("label") or "").strip() or upload.name,
            "kind": "video" if mime.startswith("video") else "image",
            "is_default": _as_bool(request.data.get("is_default"), False),
        }
        try:
            item = create_asset(HERO_ITEM, upload, slot, fields)
        except SiteBackendError as e:
            return error_response(e)
        return Response({"item": _serialize_item(item)}, status=status.HTTP_201_CREATED)


class HeroMediaItemDeleteAPIView(APIView):
    """
    Re-point the config away from the item first, then remove the object
    and the row.
    """
    permission_classes = [IsAuthenticated]

    def delete(self, request, item_id):
        item = HeroMediaItem.objects.filter(pk=item_id).first()
        if item is None:
            return Response({"error": "Not found"}, status=status.HTTP_404_NOT_FOUND)
        if item.is_protected:
            return Response({"error": "This hero item is protected"}, status=status.HTTP_400_BAD_REQUEST)

        column = f"selected_{item.slot}"
        try:
            config = current_row(HeroMediaConfig)
            if config is not None and getattr(config, column) == item.id:
                others = list(HeroMediaItem.objects.filter(slot=item.slot).exclude(pk=item.pk).order_by("created_at"))
                fallback = pick_for_slot(others, None, item.slot)
                merge_singleton(HeroMediaConfig, {column: fallback.id if fallback else None})
            delete_asset(HERO_ITEM, item)
        except SiteBackendError as e:
            return error_response(e)
        except DatabaseError as e:
            logger.exception("hero media item delete failed")
            return Response({"error": "Delete failed", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True}, status=status.HTTP_200_OK)


class PublicHeroMediaAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            payload = resolve_hero_media()
        except DatabaseError as e:
            logger.warning("Error fetching hero media for public site: %s", e)
            payload = dict(FALLBACK_HERO_MEDIA)
        return Response(payload, status=status.HTTP_200_OK)
