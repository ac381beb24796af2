"""Merging and deduplication of FAQ records coming from several formats."""

from __future__ import annotations

import re
from typing import Iterable

from faqproxy.extraction.models import FAQRecord

MAX_FAQS = 50

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def question_key(question: str) -> str:
    """Normalization key used to detect the same question across formats."""
    key = _NON_WORD_RE.sub("", question.lower())
    return _WHITESPACE_RE.sub(" ", key).strip()


def _is_acceptable(record: FAQRecord) -> bool:
    if not record.question or not record.answer:
        return False
    # Unrendered template placeholders leaking from the source page
    return "${" not in record.question and "${" not in record.answer


def merge_faqs(records: Iterable[FAQRecord], limit: int = MAX_FAQS) -> list[FAQRecord]:
    """Deduplicate *records* and cap them at *limit*.

    *records* must be in format precedence order (JSON-LD, Microdata, RDFa).
    Only the first *limit* input records are considered at all.  When two
    records share a question key the first one keeps its slot, unless it has
    no id and the later one does; the later one then takes over that slot.
    """
    merged: list[FAQRecord] = []
    slots: dict[str, int] = {}

    for index, record in enumerate(records):
        if index >= limit:
            break
        if not _is_acceptable(record):
            continue

        key = question_key(record.question)
        if key in slots:
            existing = merged[slots[key]]
            if not existing.id and record.id:
                merged[slots[key]] = record
            continue

        slots[key] = len(merged)
        merged.append(record)

    return merged
