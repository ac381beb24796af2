"""FAQ extraction from Microdata (``itemscope`` / ``itemtype`` / ``itemprop``)."""

from __future__ import annotations

from typing import Callable

from bs4 import BeautifulSoup, Tag

from faqproxy.extraction.answers import sanitize_answer
from faqproxy.extraction.models import FAQRecord, ProcessingStats
from faqproxy.extraction.questions import normalize_question
from faqproxy.extraction.text import fragment_of, sanitize_anchor


def _itemtype_contains(name: str) -> Callable[[str | None], bool]:
    return lambda value: bool(value) and name in value


def _itemprop(name: str) -> Callable[[str | None], bool]:
    # itemprop may list several space-separated property names
    return lambda value: bool(value) and name in value.split()


def _scoped(root: Tag, type_name: str) -> list[Tag]:
    return root.find_all(attrs={"itemscope": True, "itemtype": _itemtype_contains(type_name)})


def _question_id(el: Tag) -> str | None:
    return sanitize_anchor(el.get("id") or fragment_of(el.get("itemid")))


def _question_text(el: Tag) -> str:
    name_el = el.find(attrs={"itemprop": _itemprop("name")})
    if name_el is None:
        return ""
    return name_el.get_text().strip() or name_el.get("content", "")


def _answer_markup(el: Tag) -> str:
    text_el = el.find(attrs={"itemprop": _itemprop("text")})
    if text_el is not None:
        return text_el.decode_contents()

    accepted = el.find(attrs={"itemprop": _itemprop("acceptedAnswer")})
    if accepted is not None:
        # Some pages put the answer straight into the acceptedAnswer element
        text_el = accepted.find(attrs={"itemprop": _itemprop("text")})
        return (text_el or accepted).decode_contents()

    suggested = el.find(attrs={"itemprop": _itemprop("suggestedAnswer")})
    if suggested is not None:
        text_el = suggested.find(attrs={"itemprop": _itemprop("text")})
        if text_el is not None:
            return text_el.decode_contents()
    return ""


def _process_question(
    el: Tag, faqs: list[FAQRecord], base_url: str, stats: ProcessingStats
) -> None:
    question = normalize_question(_question_text(el), stats)
    if not question:
        return

    raw_answer = _answer_markup(el)
    if not raw_answer.strip():
        return

    faqs.append(
        FAQRecord(
            question=question,
            answer=sanitize_answer(raw_answer, base_url, stats),
            id=_question_id(el),
        )
    )


def extract_microdata(
    soup: BeautifulSoup, base_url: str, stats: ProcessingStats
) -> list[FAQRecord]:
    """Return the FAQ records described with Microdata in *soup*.

    Questions wrapped in an FAQPage scope are read first.  A second sweep
    picks up Question scopes anywhere in the document, skipping elements the
    first sweep already handled and elements sharing an id with one of them.
    Skipping by element as well as by id means a wrapped question without an
    id is read once, so it is counted once in *stats* (sanitized answers,
    images, rewritten URLs) rather than once per sweep.
    """
    faqs: list[FAQRecord] = []
    seen_ids: set[str] = set()
    handled: set[int] = set()

    for page in _scoped(soup, "FAQPage"):
        for el in _scoped(page, "Question"):
            question_id = _question_id(el)
            if question_id:
                seen_ids.add(question_id)
            handled.add(id(el))
            _process_question(el, faqs, base_url, stats)

    for el in _scoped(soup, "Question"):
        question_id = _question_id(el)
        if id(el) in handled or (question_id and question_id in seen_ids):
            continue
        _process_question(el, faqs, base_url, stats)

    return faqs
