from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .assets import DESIGN_FILE, DESIGN_IMAGE, DESIGN_THUMB
from .catalog import (
    AddOwnedAssetAPIView,
    ItemUploadAPIView,
    PublicItemDetailAPIView,
    PublicItemListAPIView,
    RemoveOwnedAssetAPIView,
    load_item,
    parse_delete_request,
    purge_item,
    serialize_item,
)
from .exceptions import SiteBackendError
from .models import PrintDesign
from .utilities import _to_int, error_response

PREFIX = "designs"


class DesignUploadAPIView(ItemUploadAPIView):
    kind = DESIGN_THUMB

    def thumb_prefix(self):
        return PREFIX

    def serialize(self, row):
        # the thumbnail doubles as the first gallery image in the editor
        images = [{"id": "thumb", "url": row.thumb_url}] if row.thumb_url else []
        return serialize_item(row, images=images, files=[])


class DesignDeleteAPIView(APIView):
    """Delete the design row, then remove its thumbnail best-effort."""
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def delete(self, request):
        try:
            design_id, delete_assets, thumb_path = parse_delete_request(request)
            design = load_item(PrintDesign, design_id)
            purge_item(
                design, DESIGN_THUMB, DESIGN_IMAGE, DESIGN_FILE,
                delete_assets=delete_assets, fallback_thumb=thumb_path,
            )
        except SiteBackendError as e:
            return error_response(e)
        return Response({"ok": True}, status=status.HTTP_200_OK)


class DesignAddImageAPIView(AddOwnedAssetAPIView):
    kind = DESIGN_IMAGE
    owner_model = PrintDesign
    owner_param = "design_id"

    def prefix(self, owner_id):
        return PREFIX

    def extra_fields(self, request, upload):
        return {"sort_order": _to_int(request.data.get("sort_order"), 0)}

    def serialize(self, row):
        return {
            "id": row.id,
            "design_id": row.design_id,
            "url": row.image_url,
            "storage_path": row.storage_path,
            "sort_order": row.sort_order,
        }


class DesignAddFileAPIView(AddOwnedAssetAPIView):
    kind = DESIGN_FILE
    owner_model = PrintDesign
    owner_param = "design_id"

    def prefix(self, owner_id):
        return PREFIX

    def extra_fields(self, request, upload):
        label = (request.data.get("label") or "").strip()
        return {
            "label": label or upload.name or "Download",
            "mime_type": upload.content_type or "application/octet-stream",
            "sort_order": _to_int(request.data.get("sort_order"), 0),
        }

    def serialize(self, row):
        return {
            "id": row.id,
            "design_id": row.design_id,
            "label": row.label,
            "file_url": row.file_url,
            "mime_type": row.mime_type,
            "storage_path": row.storage_path,
            "sort_order": row.sort_order,
        }


class DesignRemoveImageAPIView(RemoveOwnedAssetAPIView):
    kind = DESIGN_IMAGE
    owner_param = "design_id"
    url_param = "image_url"


class DesignRemoveFileAPIView(RemoveOwnedAssetAPIView):
    kind = DESIGN_FILE
    owner_param = "design_id"
    url_param = "file_url"


class PublicDesignListAPIView(PublicItemListAPIView):
    model = PrintDesign
    order_by = ("sort_order", "-created_at")

    def serialize(self, row):
        return {
            "id": row.id,
            "title": row.title,
            "blurb": row.blurb,
            "price_from": row.price_from,
            "thumb_url": row.thumb_url,
            "category_id": row.category_id,
        }


class PublicDesignDetailAPIView(PublicItemDetailAPIView):
    model = PrintDesign
