"""FAQ extraction from JSON-LD ``<script>`` blocks."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from bs4 import BeautifulSoup

from faqproxy.extraction.answers import sanitize_answer
from faqproxy.extraction.models import FAQRecord, ProcessingStats
from faqproxy.extraction.questions import normalize_question
from faqproxy.extraction.text import fragment_of, sanitize_anchor

logger = logging.getLogger(__name__)

MAX_DEPTH = 5
# mainEntity is only chased this deep on nodes that are not FAQ containers.
MAX_MAIN_ENTITY_DEPTH = 3

_LINE_COMMENT_RE = re.compile(r"^\s*//.*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_CONTROL_CHARS_RE = re.compile(r"[\u0000-\u001F\u007F-\u009F]")
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _is_jsonld_type(value: str | None) -> bool:
    if not value:
        return False
    return value.split(";", 1)[0].strip().lower() == "application/ld+json"


def _repair_json(text: str) -> str:
    """Strip the non-JSON noise commonly found in hand-written JSON-LD."""
    text = text.lstrip("\ufeff")
    text = _LINE_COMMENT_RE.sub("", text)
    text = _BLOCK_COMMENT_RE.sub("", text)
    text = _CONTROL_CHARS_RE.sub("", text)
    text = _TRAILING_COMMA_RE.sub(r"\1", text)
    return text.strip()


def parse_jsonld(text: str) -> Any:
    """Parse a JSON-LD block, retrying once on a repaired copy.

    Raises:
        json.JSONDecodeError: If the repaired text is still not valid JSON.
        ValueError: If a number literal exceeds the interpreter's digit limit.
        RecursionError: If arrays or objects are nested too deeply to decode.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return json.loads(_repair_json(text))


# ---------------------------------------------------------------------------
# Traversal helpers
# ---------------------------------------------------------------------------

def _short_type(value: str) -> str:
    # "https://schema.org/FAQPage" and "schema:FAQPage" both mean FAQPage
    return re.split(r"[/:#]", value)[-1]


def _has_type(node: Any, type_name: str) -> bool:
    if not isinstance(node, dict):
        return False
    declared = node.get("@type")
    if isinstance(declared, str):
        return _short_type(declared) == type_name
    if isinstance(declared, list):
        return any(isinstance(t, str) and _short_type(t) == type_name for t in declared)
    return False


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def _text_of(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _first_text(node: Any, keys: tuple[str, ...]) -> str:
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return ""
    for key in keys:
        text = _text_of(node.get(key))
        if text:
            return text
    return ""


def _raw_answer(question: dict[str, Any]) -> str:
    accepted = question.get("acceptedAnswer")
    if accepted:
        if isinstance(accepted, list):
            accepted = accepted[0]
        return _first_text(accepted, ("text", "answerText", "description"))

    suggested = _as_list(question.get("suggestedAnswer"))
    if suggested:
        return _first_text(suggested[0], ("text", "answerText"))
    return ""


def _question_id(question: dict[str, Any]) -> str | None:
    for key in ("@id", "id", "url"):
        value = question.get(key)
        if value and isinstance(value, str):
            return sanitize_anchor(fragment_of(value))
    return None


def _faq_container(node: dict[str, Any]) -> dict[str, Any] | None:
    if _has_type(node, "FAQPage"):
        return node
    main = node.get("mainEntity")
    if _has_type(main, "FAQPage"):
        return main
    return None


def _collect_questions(
    container: dict[str, Any],
    out: list[FAQRecord],
    base_url: str,
    stats: ProcessingStats,
) -> None:
    entries = container.get("mainEntity") or container.get("hasPart")
    for entry in _as_list(entries):
        if not _has_type(entry, "Question"):
            continue

        question = normalize_question(
            _text_of(entry.get("name")) or _text_of(entry.get("question")), stats
        )
        if not question:
            continue

        raw_answer = _raw_answer(entry)
        if not raw_answer:
            continue

        out.append(
            FAQRecord(
                question=question,
                answer=sanitize_answer(raw_answer, base_url, stats),
                id=_question_id(entry),
            )
        )


def _traverse(
    node: Any,
    out: list[FAQRecord],
    base_url: str,
    stats: ProcessingStats,
    depth: int = 0,
) -> None:
    if not isinstance(node, dict) or depth > MAX_DEPTH:
        return

    container = _faq_container(node)
    if container is not None:
        _collect_questions(container, out, base_url, stats)
        return

    graph = node.get("@graph")
    if isinstance(graph, list):
        for item in graph:
            _traverse(item, out, base_url, stats, depth + 1)

    main = node.get("mainEntity")
    if main and depth < MAX_MAIN_ENTITY_DEPTH:
        for item in _as_list(main):
            _traverse(item, out, base_url, stats, depth + 1)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_jsonld(soup: BeautifulSoup, base_url: str, stats: ProcessingStats) -> list[FAQRecord]:
    """Return the FAQ records found in every JSON-LD block of *soup*.

    A block that is not valid JSON, even after repair, is skipped and counted
    in ``stats.jsonld_blocks_skipped``; the remaining blocks are still read.
    """
    faqs: list[FAQRecord] = []

    for script in soup.find_all("script", attrs={"type": _is_jsonld_type}):
        content = script.string or ""
        if not content.strip():
            continue
        try:
            data = parse_jsonld(content)
        except (ValueError, RecursionError) as exc:
            # JSONDecodeError is a ValueError
            stats.jsonld_blocks_skipped += 1
            logger.warning(
                "Skipping malformed JSON-LD block (%s): %.200s", type(exc).__name__, exc
            )
            continue

        for root in _as_list(data):
            _traverse(root, faqs, base_url, stats)

    return faqs
