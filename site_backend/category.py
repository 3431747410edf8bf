# Standard Library
import logging
import re

# Django
from django.db import DatabaseError, transaction
from django.db.models import Count, Max

# Django REST Framework
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .exceptions import NotFound, SiteBackendError, ValidationFailed
from .models import Bundle, BundleCategory, DesignCategory, PrintDesign, UNCATEGORIZED
from .utilities import _clean_str, _finite_number, _parse_payload, error_response

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


# --------------------------
# Slugs, ordering, reassignment
# --------------------------

def slugify_label(raw) -> str:
    return _SLUG_RE.sub("-", str(raw or "").lower()).strip("-")


def unique_slug(base: str, existing) -> str:
    """First free of base, base-2, base-3, ... against slugs read once."""
    taken = set(existing)
    if base not in taken:
        return base
    i = 2
    while f"{base}-{i}" in taken:
        i += 1
    return f"{base}-{i}"


def next_sort_order(model, requested=None) -> int:
    explicit = _finite_number(requested)
    if explicit is not None:
        return explicit
    current = model.objects.aggregate(m=Max("sort_order"))["m"]
    return (current or 0) + 1


def create_category(model, label, slug=None, icon_slug=None, sort_order=None, **extra):
    label = (label or "").strip()
    if not label:
        raise ValidationFailed("Label is required.")

    base = slugify_label(slug) if _clean_str(slug) else slugify_label(label)
    if not base:
        raise ValidationFailed("Label must contain at least one letter or digit.")

    pk_name = model._meta.pk.name
    with transaction.atomic():
        existing = model.objects.values_list(pk_name, flat=True)
        fields = {
            pk_name: unique_slug(base, existing),
            "label": label,
            "icon_slug": _clean_str(icon_slug),
            "sort_order": next_sort_order(model, sort_order),
            **extra,
        }
        return model.objects.create(**fields)


def delete_category(model, item_model, slug, reassign_to=None):
    """
    Move every item off ``slug`` then delete the category, atomically.
    Items never point at a category that no longer exists.
    """
    slug = _clean_str(slug)
    target = _clean_str(reassign_to) or UNCATEGORIZED
    if not slug:
        raise ValidationFailed("slug is required.")
    if slug == target:
        raise ValidationFailed("Reassign target must differ from the category being deleted.")
    if slug == UNCATEGORIZED:
        raise ValidationFailed("The uncategorized category cannot be deleted.")

    with transaction.atomic():
        category = model.objects.select_for_update().filter(pk=slug).first()
        if category is None:
            raise NotFound("Category not found")
        if target != UNCATEGORIZED and not model.objects.filter(pk=target).exists():
            raise ValidationFailed("Reassign target does not exist.")
        moved = item_model.objects.filter(category_id=slug).update(category_id=target)
        category.delete()

    logger.info("Deleted %s %s, moved %d items to %s", model._meta.db_table, slug, moved, target)
    return moved


def category_counts(item_model, **filters):
    rows = (
        item_model.objects.filter(**filters)
        .order_by()
        .values("category_id")
        .annotate(n=Count("id"))
    )
    return {(r["category_id"] or UNCATEGORIZED): r["n"] for r in rows}


def _with_uncategorized(categories, counts, icon_slug):
    if not any(c["id"] == UNCATEGORIZED for c in categories):
        categories.insert(0, {
            "id": UNCATEGORIZED,
            "label": "Uncategorized",
            "icon_slug": icon_slug,
            "count": counts.get(UNCATEGORIZED, 0),
        })
    return categories


# --------------------------
# Dashboard views
# --------------------------

class BundleCategoriesAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            counts = category_counts(Bundle)
            categories = [
                {
                    "id": c.id,
                    "label": c.label,
                    "icon_slug": c.icon_slug,
                    "sort_order": c.sort_order,
                    "is_public": c.is_public,
                    "count": counts.get(c.id, 0),
                }
                for c in BundleCategory.objects.order_by("sort_order", "label")
            ]
        except DatabaseError as e:
            logger.warning("bundle categories admin list failed: %s", e)
            categories = []
        return Response({"categories": categories}, status=status.HTTP_200_OK)

    def post(self, request):
        data = _parse_payload(request)
        try:
            cat = create_category(
                BundleCategory,
                data.get("label"),
                slug=data.get("id") or data.get("slug"),
                icon_slug=data.get("icon_slug"),
                sort_order=data.get("sort_order"),
                is_public=True,
                user_id=str(request.user.pk),
            )
        except SiteBackendError as e:
            return error_response(e)
        except DatabaseError as e:
            logger.exception("bundle category create failed")
            return Response({"error": "Unable to create category.", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"category": {
            "id": cat.id,
            "label": cat.label,
            "icon_slug": cat.icon_slug,
            "sort_order": cat.sort_order,
            "is_public": cat.is_public,
        }}, status=status.HTTP_201_CREATED)

    def delete(self, request):
        data = _parse_payload(request)
        try:
            moved = delete_category(
                BundleCategory, Bundle,
                data.get("id") or data.get("slug"),
                data.get("reassignTo"),
            )
        except SiteBackendError as e:
            return error_response(e)
        except DatabaseError as e:
            logger.exception("bundle category delete failed")
            return Response({"error": "Unable to delete category.", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True, "reassigned": moved}, status=status.HTTP_200_OK)


class DesignCategoriesAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            counts = category_counts(PrintDesign)
            categories = [
                {
                    "id": c.slug,
                    "label": c.label,
                    "icon_slug": c.icon_slug,
                    "sort_order": c.sort_order,
                    "is_active": c.is_active,
                    "count": counts.get(c.slug, 0),
                }
                for c in DesignCategory.objects.order_by("sort_order", "label")
            ]
        except DatabaseError as e:
            logger.warning("design categories admin list failed: %s", e)
            categories = []
        return Response({"categories": categories}, status=status.HTTP_200_OK)

    def post(self, request):
        data = _parse_payload(request)
        try:
            cat = create_category(
                DesignCategory,
                data.get("label"),
                slug=data.get("slug"),
                icon_slug=data.get("icon_slug"),
                sort_order=data.get("sort_order"),
                is_active=True,
            )
        except SiteBackendError as e:
            return error_response(e)
        except DatabaseError as e:
            logger.exception("design category create failed")
            return Response({"error": "Unable to create category.", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"category": {
            "id": cat.slug,
            "label": cat.label,
            "icon_slug": cat.icon_slug,
            "sort_order": cat.sort_order,
            "is_active": cat.is_active,
        }}, status=status.HTTP_201_CREATED)

    def delete(self, request):
        data = _parse_payload(request)
        try:
            moved = delete_category(
                DesignCategory, PrintDesign,
                data.get("slug") or data.get("id"),
                data.get("reassignTo"),
            )
        except SiteBackendError as e:
            return error_response(e)
        except DatabaseError as e:
            logger.exception("design category delete failed")
            return Response({"error": "Unable to delete category.", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True, "reassigned": moved}, status=status.HTTP_200_OK)


# --------------------------
# Public views
# --------------------------

class PublicBundleCategoriesAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            counts = category_counts(Bundle, is_active=True)
            categories = [
                {
                    "id": c.id,
                    "label": c.label,
                    "icon_slug": c.icon_slug or "bundle",
                    "count": counts.get(c.id, 0),
                }
                for c in BundleCategory.objects.filter(is_public=True).order_by("sort_order")
            ]
        except DatabaseError as e:
            logger.warning("public bundle categories failed: %s", e)
            return Response({"categories": []}, status=status.HTTP_200_OK)
        return Response(
            {"categories": _with_uncategorized(categories, counts, "bundle")},
            status=status.HTTP_200_OK,
        )


class PublicDesignCategoriesAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            counts = category_counts(PrintDesign)
            categories = [
                {
                    "id": c.slug,
                    "label": c.label,
                    "icon_slug": c.icon_slug,
                    "count": counts.get(c.slug, 0),
                }
                for c in DesignCategory.objects.filter(is_active=True).order_by("sort_order")
            ]
        except DatabaseError as e:
            logger.warning("public design categories failed: %s", e)
            return Response({"categories": []}, status=status.HTTP_200_OK)
        return Response(
            {"categories": _with_uncategorized(categories, counts, "box")},
            status=status.HTTP_200_OK,
        )
