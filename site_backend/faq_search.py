# FAQ bot answer lookup: substring pass first, keyword overlap second.
import re
from dataclasses import dataclass

NO_ANSWER = (
    "Sorry, I don’t have an answer for that yet. "
    "Want me to add this question to the FAQ?"
)
MIN_OVERLAP = 0.25

_STRIP_RE = re.compile(r"[^a-z0-9\s]")
_SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class FaqMatch:
    answer: str
    matched_id: str | None = None


def normalize(text) -> str:
    s = _STRIP_RE.sub(" ", str(text or "").lower())
    return _SPACE_RE.sub(" ", s).strip()


def _words(text):
    return {w for w in text.split(" ") if w}


def find_answer(user_input, faqs) -> FaqMatch:
    """
    ``faqs`` is an ordered sequence of dicts with ``id``, ``questions`` and
    ``answer``. Order decides ties in both passes.
    """
    query = normalize(user_input)

    for faq in faqs:
        for question in faq.get("questions") or []:
            variant = normalize(question)
            if not variant:
                continue
            if variant in query or query in variant:
                return FaqMatch(faq["answer"], faq["id"])

    query_words = _words(query)
    best, best_score = None, 0.0
    for faq in faqs:
        faq_words = _words(normalize(" ".join(str(q) for q in faq.get("questions") or [])))
        score = len(query_words & faq_words) / max(1, len(query_words))
        if score > best_score:
            best, best_score = faq, score

    if best is not None and best_score >= MIN_OVERLAP:
        return FaqMatch(best["answer"], best["id"])
    return FaqMatch(NO_ANSWER)
