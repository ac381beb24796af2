"""Question text normalization."""

from __future__ import annotations

import re

from faqproxy.extraction.models import ProcessingStats
from faqproxy.extraction.text import decode_entities

MAX_QUESTION_LENGTH = 300
# A word-boundary cut is only taken when it keeps at least this much text.
_MIN_WORD_CUT = 250

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_question(raw: str, stats: ProcessingStats) -> str:
    """Return *raw* as trimmed plain text of at most 300 characters.

    Markup is stripped (and counted in ``stats``), whitespace collapsed.
    Long questions are cut at the last space past position 250 and get a
    ``...`` suffix; when no such space exists the cut is a hard one at 300.
    An empty string means "no question".
    """
    if not raw:
        return ""

    text = decode_entities(raw)
    if _TAG_RE.search(text):
        stats.questions_with_html_stripped += 1
        text = _TAG_RE.sub("", text)

    text = _WHITESPACE_RE.sub(" ", text).strip()

    if len(text) > MAX_QUESTION_LENGTH:
        text = text[:MAX_QUESTION_LENGTH]
        last_space = text.rfind(" ")
        if last_space > _MIN_WORD_CUT:
            text = text[:last_space] + "..."

    return text
