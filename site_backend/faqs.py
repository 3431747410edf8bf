# ---- FAQ BOT APIS ----
import logging

from django.db import DatabaseError

from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .faq_search import find_answer, normalize
from .models import Faq, FaqBotSettings
from .utilities import _clean_str, _parse_payload

logger = logging.getLogger(__name__)

DEFAULT_GREETING = "Hi! 👋 Ask me anything about our services."
SETTINGS_KEY = "default"


def _questions(value):
    """List of trigger phrases from a list or a newline-separated string."""
    if isinstance(value, str):
        value = value.split("\n")
    if not isinstance(value, list):
        return []
    return [str(q).strip() for q in value if str(q).strip()]


def load_faqs():
    return [
        {"id": f.id, "questions": f.questions or [], "answer": f.answer or ""}
        for f in Faq.objects.order_by("id")
    ]


class PublicFaqsAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            faqs = load_faqs()
            row = FaqBotSettings.objects.filter(pk=SETTINGS_KEY).first()
        except DatabaseError as e:
            logger.warning("Error loading FAQ config: %s", e)
            return Response({"greeting": DEFAULT_GREETING, "faqs": []}, status=status.HTTP_200_OK)

        greeting = (row.greeting if row else "") or DEFAULT_GREETING
        payload = [dict(f, slug=f["id"]) for f in faqs]
        return Response({"greeting": greeting, "faqs": payload}, status=status.HTTP_200_OK)


class FaqMatchAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)
        question = _clean_str(data.get("question"))
        if not normalize(question):
            return Response({"error": "question is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            faqs = load_faqs()
        except DatabaseError as e:
            logger.warning("FAQ match read failed: %s", e)
            faqs = []
        match = find_answer(question, faqs)
        return Response({"answer": match.answer, "matchedId": match.matched_id}, status=status.HTTP_200_OK)


class FaqAdminAPIView(APIView):
    """POST upserts by id; questions may be a list or newline-separated text."""
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def get(self, request):
        return Response({"faqs": load_faqs()}, status=status.HTTP_200_OK)

    def post(self, request):
        data = _parse_payload(request)
        faq_id = _clean_str(data.get("id"))
        answer = (data.get("answer") or "").strip()
        questions = _questions(data.get("questions"))
        if not faq_id:
            return Response({"error": "id is required"}, status=status.HTTP_400_BAD_REQUEST)
        if not answer or not questions:
            return Response({"error": "questions and answer are required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            faq, created = Faq.objects.update_or_create(
                pk=faq_id, defaults={"questions": questions, "answer": answer}
            )
        except DatabaseError as e:
            logger.exception("Failed to save FAQ")
            return Response({"error": "Failed to save FAQ", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {"faq": {"id": faq.id, "questions": faq.questions, "answer": faq.answer}},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class FaqDeleteAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, faq_id):
        deleted, _ = Faq.objects.filter(pk=faq_id).delete()
        if not deleted:
            return Response({"error": "Not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"ok": True}, status=status.HTTP_200_OK)


class FaqGreetingAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        data = _parse_payload(request)
        greeting = (data.get("greeting") or "").strip()
        if not greeting:
            return Response({"error": "greeting is required"}, status=status.HTTP_400_BAD_REQUEST)
        FaqBotSettings.objects.update_or_create(pk=SETTINGS_KEY, defaults={"greeting": greeting})
        return Response({"ok": True, "greeting": greeting}, status=status.HTTP_200_OK)
