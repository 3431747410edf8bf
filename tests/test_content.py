"""Tests for FAQ and review endpoints."""

from unittest.mock import patch

import pytest
from django.db import DatabaseError

from site_backend.faq_search import NO_ANSWER
from site_backend.faqs import DEFAULT_GREETING
from site_backend.models import CustomerReview, Faq


@pytest.mark.django_db
class TestFaqEndpoints:
    """Admin upserts and the public chatbot feed."""

    def test_upsert_then_match(self, api_client, anon_client):
        res = api_client.post("/api/faqs/", {
            "id": "turnaround",
            "questions": "How long does printing take?\nturnaround time",
            "answer": "Usually 3-5 days.",
        }, format="json")
        assert res.status_code == 201
        assert Faq.objects.get(pk="turnaround").questions == ["How long does printing take?", "turnaround time"]

        res = api_client.post("/api/faqs/", {
            "id": "turnaround", "questions": ["turnaround time"], "answer": "About a week.",
        }, format="json")
        assert res.status_code == 200

        match = anon_client.post("/api/public/faqs/match/", {"question": "what's your turnaround time?"}, format="json")
        assert match.json() == {"answer": "About a week.", "matchedId": "turnaround"}

    def test_match_without_hit(self, anon_client):
        res = anon_client.post("/api/public/faqs/match/", {"question": "do you sell cats"}, format="json")
        assert res.json() == {"answer": NO_ANSWER, "matchedId": None}

    def test_match_requires_question(self, anon_client):
        assert anon_client.post("/api/public/faqs/match/", {"question": "  "}, format="json").status_code == 400

    def test_match_rejects_punctuation_only_question(self, anon_client):
        res = anon_client.post("/api/public/faqs/match/", {"question": "?!"}, format="json")
        assert res.status_code == 400
        assert res.json() == {"error": "question is required"}

    def test_public_feed_uses_default_greeting(self, anon_client):
        Faq.objects.create(id="hours", questions=["opening hours"], answer="9-5")
        body = anon_client.get("/api/public/faqs/").json()
        assert body["greeting"] == DEFAULT_GREETING
        assert body["faqs"][0]["slug"] == "hours"

    def test_greeting_update(self, api_client, anon_client):
        assert api_client.post("/api/faqs/greeting/", {"greeting": "Yo!"}, format="json").status_code == 200
        assert anon_client.get("/api/public/faqs/").json()["greeting"] == "Yo!"

    def test_delete(self, api_client):
        Faq.objects.create(id="hours", questions=["opening hours"], answer="9-5")
        assert api_client.delete("/api/faqs/hours/").status_code == 200
        assert api_client.delete("/api/faqs/hours/").status_code == 404

    def test_public_feed_degrades(self, anon_client):
        with patch("site_backend.faqs.load_faqs", side_effect=DatabaseError("down")):
            body = anon_client.get("/api/public/faqs/").json()
        assert body == {"greeting": DEFAULT_GREETING, "faqs": []}


@pytest.mark.django_db
class TestReviewEndpoints:
    def test_create_update_publish(self, api_client, anon_client):
        res = api_client.post("/api/reviews/", {"name": "Sam", "quote": "Great prints", "stars": 9}, format="json")
        assert res.status_code == 201
        review_id = res.json()["id"]
        assert res.json()["stars"] == 5

        res = api_client.post("/api/reviews/", {"id": review_id, "name": "Sam", "quote": "Great prints!",
                                                "is_published": False}, format="json")
        assert res.status_code == 200
        assert anon_client.get("/api/public/reviews/").json() == {"items": []}

    def test_validation(self, api_client):
        res = api_client.post("/api/reviews/", {"name": "Sam"}, format="json")
        assert res.status_code == 400
        assert res.json()["error"] == "name and quote are required"

    def test_public_projection(self, anon_client):
        CustomerReview.objects.create(name="Ada", quote="Lovely", stars=4)
        assert anon_client.get("/api/public/reviews/").json()["items"][0] == {
            "id": CustomerReview.objects.get().id, "name": "Ada", "quote": "Lovely", "stars": 4,
        }

    def test_delete_missing(self, api_client):
        assert api_client.delete("/api/reviews/nope/").status_code == 404

    def test_non_finite_stars_fall_back_to_five(self, api_client):
        res = api_client.post("/api/reviews/", {"name": "Sam", "quote": "Great prints", "stars": "Infinity"},
                              format="json")
        assert res.status_code == 201
        assert res.json()["stars"] == 5
