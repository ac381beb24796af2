"""FAQ extraction from RDFa (``typeof`` / ``property``)."""

from __future__ import annotations

from typing import Callable

from bs4 import BeautifulSoup, Tag

from faqproxy.extraction.answers import sanitize_answer
from faqproxy.extraction.models import FAQRecord, ProcessingStats
from faqproxy.extraction.questions import normalize_question
from faqproxy.extraction.text import fragment_of, sanitize_anchor

_NAME_PROPERTIES = {"name", "schema:name"}
_TEXT_PROPERTIES = {"text", "schema:text"}


def _typeof_contains(name: str) -> Callable[[str | None], bool]:
    return lambda value: bool(value) and name in value


def _property_in(names: set[str]) -> Callable[[str | None], bool]:
    return lambda value: bool(value) and not names.isdisjoint(value.split())


def _question_id(el: Tag) -> str | None:
    return sanitize_anchor(
        el.get("id") or fragment_of(el.get("resource")) or fragment_of(el.get("about"))
    )


def _process_question(
    el: Tag, faqs: list[FAQRecord], base_url: str, stats: ProcessingStats
) -> None:
    name_el = el.find(attrs={"property": _property_in(_NAME_PROPERTIES)})
    if name_el is None:
        return
    question = normalize_question(
        name_el.get_text().strip() or name_el.get("content", ""), stats
    )
    if not question:
        return

    text_el = el.find(attrs={"property": _property_in(_TEXT_PROPERTIES)})
    if text_el is None:
        return
    raw_answer = text_el.decode_contents()
    if not raw_answer.strip():
        return

    faqs.append(
        FAQRecord(
            question=question,
            answer=sanitize_answer(raw_answer, base_url, stats),
            id=_question_id(el),
        )
    )


def extract_rdfa(soup: BeautifulSoup, base_url: str, stats: ProcessingStats) -> list[FAQRecord]:
    """Return the FAQ records described with RDFa in *soup*.

    Same two sweeps as the Microdata extractor: Question resources inside an
    FAQPage first, then every Question resource not already handled (by
    element or by id). Each question is read once, so *stats* counts its
    answer and images once even when it carries no id.
    """
    faqs: list[FAQRecord] = []
    seen_ids: set[str] = set()
    handled: set[int] = set()

    for page in soup.find_all(attrs={"typeof": _typeof_contains("FAQPage")}):
        for el in page.find_all(attrs={"typeof": _typeof_contains("Question")}):
            question_id = _question_id(el)
            if question_id:
                seen_ids.add(question_id)
            handled.add(id(el))
            _process_question(el, faqs, base_url, stats)

    for el in soup.find_all(attrs={"typeof": _typeof_contains("Question")}):
        question_id = _question_id(el)
        if id(el) in handled or (question_id and question_id in seen_ids):
            continue
        _process_question(el, faqs, base_url, stats)

    return faqs
