# views/review_views.py
import logging

from django.db import DatabaseError, transaction

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import CustomerReview
from .utilities import _as_bool, _clean_str, _parse_payload, _to_int

logger = logging.getLogger(__name__)


# --------------------------
# Helpers
# --------------------------

def _clamp_stars(n):
    try:
        n = int(round(float(n)))
    except (TypeError, ValueError, OverflowError):
        return 5
    return max(1, min(5, n))


def _serialize_review(r: CustomerReview, admin=False):
    data = {
        "id": r.id,
        "name": r.name or "",
        "quote": r.quote or "",
        "stars": r.stars or 5,
    }
    if admin:
        data.update({
            "sort_order": r.sort_order,
            "is_published": r.is_published,
            "created_at": r.created_at.isoformat() if r.created_at else None,
        })
    return data


# --------------------------
# Dashboard: list / save
# GET  /api/reviews/
# POST /api/reviews/   (id present and known -> update in place)
# --------------------------
class ReviewsAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def get(self, request):
        qs = CustomerReview.objects.all().order_by("sort_order", "-created_at")
        return Response({"items": [_serialize_review(r, admin=True) for r in qs]}, status=status.HTTP_200_OK)

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        rid = _clean_str(data.get("id"))
        name = (data.get("name") or "").strip()
        quote = (data.get("quote") or "").strip()

        if not name or not quote:
            return Response({"error": "name and quote are required"}, status=status.HTTP_400_BAD_REQUEST)

        obj = CustomerReview.objects.filter(pk=rid).first() if rid else None
        created = obj is None
        if created:
            obj = CustomerReview(pk=rid) if rid else CustomerReview()
            obj.sort_order = (CustomerReview.objects.count() + 1)

        obj.name = name
        obj.quote = quote
        if "stars" in data or created:
            obj.stars = _clamp_stars(data.get("stars", 5))
        if "sort_order" in data:
            obj.sort_order = max(0, _to_int(data.get("sort_order"), obj.sort_order))
        if "is_published" in data:
            obj.is_published = _as_bool(data.get("is_published"), obj.is_published)

        try:
            obj.save()
        except DatabaseError as e:
            logger.exception("review save failed")
            return Response({"error": "Failed to save review", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            _serialize_review(obj, admin=True),
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class ReviewDeleteAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, review_id):
        deleted, _ = CustomerReview.objects.filter(pk=review_id).delete()
        if not deleted:
            return Response({"error": "Review not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"success": True, "deleted": review_id}, status=status.HTTP_200_OK)


# --------------------------
# Public: published reviews
# --------------------------
class PublicReviewsAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            items = [
                _serialize_review(r)
                for r in CustomerReview.objects.filter(is_published=True).order_by("sort_order")
            ]
        except DatabaseError as e:
            logger.warning("Public reviews GET error: %s", e)
            items = []
        return Response({"items": items}, status=status.HTTP_200_OK)
