# Shared building blocks for the bundle and print-design catalogs.
import logging

from django.db import DatabaseError, transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from django.http import Http404, JsonResponse

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .assets import (
    create_asset,
    delete_asset,
    discard_objects,
    owned_storage_paths,
    resolve_asset,
    storage_target,
)
from .exceptions import NotFound, SiteBackendError, UpstreamError, ValidationFailed
from .models import UNCATEGORIZED
from .utilities import _as_bool, _clean_str, _parse_payload, _to_int, error_response

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 48


# --------------------------
# Serializers
# --------------------------

def serialize_item(row, **extra):
    data = {
        "id": row.id,
        "title": row.title or "",
        "blurb": row.blurb or "",
        "price_from": row.price_from or "",
        "category_id": row.category_id or UNCATEGORIZED,
        "sort_order": row.sort_order or 0,
        "is_active": row.is_active,
        "created_at": row.created_at,
        "thumb_url": row.thumb_url or None,
        "thumb_storage_path": row.thumb_storage_path or None,
    }
    data.update(extra)
    return data


def serialize_image(row):
    return {"id": row.id, "url": row.image_url, "sort_order": row.sort_order}


def serialize_file(row):
    return {
        "id": row.id,
        "label": row.label or "Download",
        "file_url": row.file_url,
        "mime_type": row.mime_type or "",
        "sort_order": row.sort_order,
    }


# --------------------------
# Public search
# --------------------------

def page_params(params):
    page = max(1, _to_int(params.get("page"), 1))
    size = _to_int(params.get("pageSize"), DEFAULT_PAGE_SIZE)
    size = min(MAX_PAGE_SIZE, max(1, size))
    return page, size


def search_items(model, params, order_by):
    """Active items filtered by ``q`` and ``category``; returns (rows, total)."""
    qs = model.objects.filter(is_active=True)
    category = (params.get("category") or "").strip()
    if category and category != "all":
        qs = qs.filter(category_id=category)
    q = (params.get("q") or "").strip()
    if q:
        qs = qs.filter(Q(title__icontains=q) | Q(blurb__icontains=q))

    total = qs.count()
    page, size = page_params(params)
    start = (page - 1) * size
    return qs.order_by(*order_by), total, start, start + size


# --------------------------
# Item teardown
# --------------------------

def purge_item(item, thumb_kind, image_kind, file_kind, delete_assets=True, fallback_thumb=None):
    """
    Delete an item row with its image and file rows, then remove their
    objects best-effort, grouped by bucket.
    """
    grouped = {}
    if delete_assets:
        for kind, rows in ((image_kind, item.images.all()), (file_kind, item.files.all())):
            for bucket, paths in owned_storage_paths(kind, rows).items():
                grouped.setdefault(bucket, set()).update(paths)
    thumb = storage_target(thumb_kind, item)
    if thumb is None and fallback_thumb:
        thumb = (thumb_kind.bucket, fallback_thumb)
    if thumb:
        grouped.setdefault(thumb[0], set()).add(thumb[1])

    try:
        with transaction.atomic():
            item.images.all().delete()
            item.files.all().delete()
            type(item).objects.filter(pk=item.pk).delete()
    except DatabaseError as e:
        raise UpstreamError(f"Failed to delete {thumb_kind.model._meta.verbose_name}", details=str(e)) from e

    for bucket, paths in grouped.items():
        discard_objects(bucket, sorted(paths))
    return sum(len(p) for p in grouped.values())


# --------------------------
# Dashboard base views
# --------------------------

class ItemUploadAPIView(APIView):
    """Create a catalog item together with its thumbnail object."""
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    kind = None

    def thumb_prefix(self):
        raise NotImplementedError

    def serialize(self, row):
        return serialize_item(row)

    def post(self, request):
        data = request.data
        upload = request.FILES.get("file")
        title = (data.get("title") or "").strip()
        if not title:
            return Response({"error": "title required"}, status=status.HTTP_400_BAD_REQUEST)
        if not upload:
            return Response({"error": 'thumbnail "file" required'}, status=status.HTTP_400_BAD_REQUEST)

        fields = {
            "title": title,
            "blurb": data.get("blurb") or "",
            "price_from": data.get("price_from") or "",
            "category_id": _clean_str(data.get("category_id")) or UNCATEGORIZED,
            "sort_order": _to_int(data.get("sort_order"), 0),
            "is_active": True,
        }
        try:
            row = create_asset(self.kind, upload, self.thumb_prefix(), fields, default_ext="png")
        except SiteBackendError as e:
            return error_response(e)
        return Response({"item": self.serialize(row)}, status=status.HTTP_201_CREATED)


class AddOwnedAssetAPIView(APIView):
    """Attach an image or file object to an existing item."""
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    kind = None
    owner_model = None
    owner_param = None

    def prefix(self, owner_id):
        raise NotImplementedError

    def extra_fields(self, request, upload):
        return {}

    def serialize(self, row):
        raise NotImplementedError

    def post(self, request):
        owner_id = _clean_str(request.data.get(self.owner_param))
        upload = request.FILES.get("file")
        if not owner_id:
            return Response({"error": f"Missing {self.owner_param}"}, status=status.HTTP_400_BAD_REQUEST)
        if not upload:
            return Response({"error": "Missing file"}, status=status.HTTP_400_BAD_REQUEST)
        if not self.owner_model.objects.filter(pk=owner_id).exists():
            return Response({"error": "Not found"}, status=status.HTTP_404_NOT_FOUND)

        fields = {self.kind.owner_field: owner_id}
        fields.update(self.extra_fields(request, upload))
        try:
            row = create_asset(self.kind, upload, self.prefix(owner_id), fields)
        except SiteBackendError as e:
            return error_response(e)
        return Response({"item": self.serialize(row)}, status=status.HTTP_201_CREATED)


class RemoveOwnedAssetAPIView(APIView):
    """
    Delete by ``id`` (missing -> 404) or by owner id + url (missing -> ok).
    Storage goes first and best-effort, the row delete is authoritative.
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    kind = None
    owner_param = None
    url_param = None

    def _remove(self, request):
        data = _parse_payload(request)
        try:
            row = resolve_asset(
                self.kind,
                asset_id=_clean_str(data.get("id")),
                owner_id=_clean_str(data.get(self.owner_param)),
                url=_clean_str(data.get(self.url_param)),
            )
            removed = delete_asset(self.kind, row)
        except SiteBackendError as e:
            return error_response(e)
        return Response({"ok": True, "removed": removed}, status=status.HTTP_200_OK)

    def post(self, request):
        return self._remove(request)

    def delete(self, request):
        return self._remove(request)


# --------------------------
# Public base views
# --------------------------

class PublicItemListAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    model = None
    order_by = ()

    def annotate(self, qs):
        return qs

    def serialize(self, row):
        raise NotImplementedError

    def get(self, request):
        try:
            qs, total, start, end = search_items(self.model, request.query_params, self.order_by)
            items = [self.serialize(r) for r in self.annotate(qs)[start:end]]
        except DatabaseError as e:
            logger.warning("public %s list failed: %s", self.model._meta.db_table, e)
            return Response({"items": [], "total": 0}, status=status.HTTP_200_OK)
        return Response({"items": items, "total": total}, status=status.HTTP_200_OK)


class PublicItemDetailAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    model = None

    def get(self, request, item_id):
        try:
            item = get_object_or_404(self.model, pk=item_id, is_active=True)
            payload = serialize_item(
                item,
                images=[serialize_image(i) for i in item.images.order_by("sort_order", "created_at")],
                files=[serialize_file(f) for f in item.files.order_by("sort_order", "created_at")],
            )
        except Http404:
            return Response({"error": "Not found"}, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError as e:
            logger.warning("public %s detail failed: %s", self.model._meta.db_table, e)
            return JsonResponse(None, safe=False)
        return Response(payload, status=status.HTTP_200_OK)


def item_counts(qs):
    return qs.annotate(
        image_total=Count("images", distinct=True),
        file_total=Count("files", distinct=True),
    )


def parse_delete_request(request):
    data = _parse_payload(request)
    item_id = _clean_str(data.get("id"))
    if not item_id:
        raise ValidationFailed("Missing id")
    return item_id, _as_bool(data.get("deleteAssets"), False), _clean_str(data.get("thumb_storage_path"))


def load_item(model, item_id):
    item = model.objects.filter(pk=item_id).first()
    if item is None:
        raise NotFound("Not found")
    return item
