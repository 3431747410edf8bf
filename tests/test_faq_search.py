"""Tests for FAQ answer lookup."""

import pytest

from site_backend.faq_search import NO_ANSWER, find_answer, normalize

FAQS = [
    {"id": "shipping", "questions": ["Do you ship?", "shipping times"], "answer": "We ship across Canada."},
    {"id": "materials", "questions": ["What filament do you use"], "answer": "PLA and PETG."},
    {"id": "blank", "questions": ["", "!!!"], "answer": "never"},
]


class TestNormalize:
    """Lowercasing and punctuation handling."""

    def test_punctuation_becomes_space(self):
        assert normalize("Hello,World!!  How's it?") == "hello world how s it"

    def test_none_is_empty(self):
        assert normalize(None) == ""


class TestFindAnswer:
    """Substring pass then keyword overlap."""

    def test_substring_match_wins(self):
        match = find_answer("Hey, do you ship to Halifax?", FAQS)
        assert match.answer == "We ship across Canada."
        assert match.matched_id == "shipping"

    def test_query_inside_variant(self):
        match = find_answer("filament", FAQS)
        assert match.matched_id == "materials"

    def test_empty_variants_are_ignored(self):
        match = find_answer("something unrelated entirely", FAQS)
        assert match.matched_id is None
        assert match.answer == NO_ANSWER

    def test_overlap_at_threshold_is_accepted(self):
        # one of four query words appears in a variant
        match = find_answer("which pla color today", [
            {"id": "pla", "questions": ["pla options"], "answer": "Lots of colours."},
        ])
        assert match.matched_id == "pla"

    def test_overlap_below_threshold_is_rejected(self):
        # one of five query words
        match = find_answer("which pla color today please", [
            {"id": "pla", "questions": ["pla options"], "answer": "Lots of colours."},
        ])
        assert match.matched_id is None
        assert match.answer == NO_ANSWER

    def test_overlap_pools_all_variants(self):
        faqs = [{"id": "care", "questions": ["cleaning prints", "storage advice"], "answer": "Keep dry."}]
        match = find_answer("advice on cleaning", faqs)
        assert match.matched_id == "care"

    def test_first_best_overlap_wins_ties(self):
        faqs = [
            {"id": "a", "questions": ["price of resin"], "answer": "A"},
            {"id": "b", "questions": ["resin price list"], "answer": "B"},
        ]
        match = find_answer("resin price tomorrow maybe", faqs)
        assert match.matched_id == "a"

    @pytest.mark.parametrize("text", ["", "   ", "?!"])
    def test_blank_question_matches_first_variant(self, text):
        # an empty query is a substring of every non-empty variant
        assert find_answer(text, FAQS).matched_id == "shipping"
