import logging

from django.db import DatabaseError
from django.utils import timezone

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .assets import BUNDLE_FILE, BUNDLE_IMAGE, BUNDLE_THUMB
from .catalog import (
    AddOwnedAssetAPIView,
    ItemUploadAPIView,
    PublicItemDetailAPIView,
    PublicItemListAPIView,
    RemoveOwnedAssetAPIView,
    item_counts,
    load_item,
    parse_delete_request,
    purge_item,
    serialize_item,
)
from .exceptions import SiteBackendError
from .models import Bundle, UNCATEGORIZED
from .utilities import _as_bool, _clean_str, _parse_payload, _to_int, error_response

logger = logging.getLogger(__name__)


class BundleUploadAPIView(ItemUploadAPIView):
    kind = BUNDLE_THUMB

    def thumb_prefix(self):
        return f"thumbs/{timezone.now():%Y%m%d}"


class BundleUpdateAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    EDITABLE = ("title", "blurb", "price_from")

    def put(self, request, bundle_id):
        data = _parse_payload(request)
        bundle = Bundle.objects.filter(pk=bundle_id).first()
        if bundle is None:
            return Response({"error": "Not found"}, status=status.HTTP_404_NOT_FOUND)

        for field in self.EDITABLE:
            if field in data:
                setattr(bundle, field, data.get(field) or "")
        if "thumb_url" in data:
            bundle.thumb_url = _clean_str(data.get("thumb_url"))
        if "category_id" in data:
            bundle.category_id = _clean_str(data.get("category_id")) or UNCATEGORIZED
        if "sort_order" in data:
            bundle.sort_order = _to_int(data.get("sort_order"), bundle.sort_order)
        if "is_active" in data:
            bundle.is_active = _as_bool(data.get("is_active"), bundle.is_active)

        try:
            bundle.save()
        except DatabaseError as e:
            logger.exception("bundle update failed")
            return Response({"error": "Update failed", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"item": serialize_item(bundle)}, status=status.HTTP_200_OK)


class BundleDeleteAPIView(APIView):
    """Body: { id, deleteAssets? } -> delete rows, then best-effort object cleanup."""
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def _delete(self, request):
        try:
            bundle_id, delete_assets, thumb_path = parse_delete_request(request)
            bundle = load_item(Bundle, bundle_id)
            purged = purge_item(
                bundle, BUNDLE_THUMB, BUNDLE_IMAGE, BUNDLE_FILE,
                delete_assets=delete_assets, fallback_thumb=thumb_path,
            )
        except SiteBackendError as e:
            return error_response(e)
        return Response({"ok": True, "objects": purged}, status=status.HTTP_200_OK)

    def post(self, request):
        return self._delete(request)

    def delete(self, request):
        return self._delete(request)


class BundleAddImageAPIView(AddOwnedAssetAPIView):
    kind = BUNDLE_IMAGE
    owner_model = Bundle
    owner_param = "bundle_id"

    def prefix(self, owner_id):
        return f"gallery/{owner_id}"

    def extra_fields(self, request, upload):
        return {"sort_order": _to_int(request.data.get("sort_order"), 0)}

    def serialize(self, row):
        return {
            "id": row.id,
            "bundle_id": row.bundle_id,
            "image_url": row.image_url,
            "storage_path": row.storage_path,
            "sort_order": row.sort_order,
            "created_at": row.created_at,
        }


class BundleAddFileAPIView(AddOwnedAssetAPIView):
    kind = BUNDLE_FILE
    owner_model = Bundle
    owner_param = "bundle_id"

    def prefix(self, owner_id):
        return f"files/{owner_id}"

    def extra_fields(self, request, upload):
        label = (request.data.get("label") or "").strip()
        return {
            "label": label or upload.name or "Download",
            "mime_type": upload.content_type or "application/octet-stream",
            "sort_order": 0,
        }

    def serialize(self, row):
        return {
            "id": row.id,
            "bundle_id": row.bundle_id,
            "label": row.label,
            "file_url": row.file_url,
            "mime_type": row.mime_type,
            "storage_path": row.storage_path,
            "sort_order": row.sort_order,
            "created_at": row.created_at,
        }


class BundleRemoveImageAPIView(RemoveOwnedAssetAPIView):
    kind = BUNDLE_IMAGE
    owner_param = "bundle_id"
    url_param = "image_url"


class BundleRemoveFileAPIView(RemoveOwnedAssetAPIView):
    kind = BUNDLE_FILE
    owner_param = "bundle_id"
    url_param = "file_url"


# --------------------------
# Public
# --------------------------

class PublicBundleListAPIView(PublicItemListAPIView):
    model = Bundle
    order_by = ("-created_at",)

    def annotate(self, qs):
        return item_counts(qs)

    def serialize(self, row):
        return {
            "id": row.id,
            "title": row.title or "",
            "blurb": row.blurb or "",
            "price_from": row.price_from or "",
            "category_id": row.category_id or UNCATEGORIZED,
            "thumb_url": row.thumb_url or None,
            "thumb_storage_path": row.thumb_storage_path or None,
            "image_count": (1 if row.thumb_url else 0) + row.image_total,
            "file_count": row.file_total,
        }


class PublicBundleDetailAPIView(PublicItemDetailAPIView):
    model = Bundle
