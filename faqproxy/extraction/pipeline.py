"""Pipeline orchestration: one HTML page in, one :class:`ExtractionResult` out."""

from __future__ import annotations

import logging
import re
from typing import Callable, List

from bs4 import BeautifulSoup

from faqproxy.config import settings
from faqproxy.errors import DocumentTooLargeError
from faqproxy.extraction.jsonld import extract_jsonld
from faqproxy.extraction.merge import MAX_FAQS, merge_faqs
from faqproxy.extraction.microdata import extract_microdata
from faqproxy.extraction.models import ExtractionResult, FAQRecord, ProcessingStats
from faqproxy.extraction.rdfa import extract_rdfa

logger = logging.getLogger(__name__)

Extractor = Callable[[BeautifulSoup, str, ProcessingStats], List[FAQRecord]]

# Order matters: it decides which duplicate wins in the merger.
EXTRACTORS: list[tuple[str, Extractor]] = [
    ("JSON-LD", extract_jsonld),
    ("Microdata", extract_microdata),
    ("RDFa", extract_rdfa),
]

_FAQ_MARKUP_RE = re.compile(
    r'schema\.org/FAQPage|typeof\s*=\s*["\'][^"\']*FAQPage|"@type"\s*:\s*"FAQPage"'
)


def has_faq_markup(html: str) -> bool:
    """Cheap textual check for FAQPage markup, used when nothing was extracted."""
    return bool(_FAQ_MARKUP_RE.search(html))


def _page_title(soup: BeautifulSoup) -> str:
    if soup.title is None:
        return ""
    return soup.title.get_text().strip()


def extract_faqs(html: str, base_url: str) -> ExtractionResult:
    """Extract, sanitize and merge the FAQ content of *html*.

    Each format extractor runs in turn on the same parsed document; one that
    fails contributes no records and the others still run.

    Raises:
        DocumentTooLargeError: If *html*, encoded as UTF-8, exceeds
            ``settings.max_document_bytes``.
    """
    if len(html.encode("utf-8")) > settings.max_document_bytes:
        limit_mb = settings.max_document_bytes // (1024 * 1024)
        raise DocumentTooLargeError(f"HTML too large (>{limit_mb}MB)")

    soup = BeautifulSoup(html, "html.parser")
    result = ExtractionResult(title=_page_title(soup))
    stats = result.stats
    collected: list[FAQRecord] = []

    for name, extractor in EXTRACTORS:
        try:
            faqs = extractor(soup, base_url, stats)
        except Exception:
            logger.exception("%s extraction failed for %s", name, base_url)
            continue
        if faqs:
            collected.extend(faqs)
            result.schema_types.append(name)

    result.faqs = merge_faqs(collected)
    if len(collected) > MAX_FAQS:
        result.warnings.append(f"Limited to first {MAX_FAQS} FAQs (found {len(collected)})")
    result.warnings.extend(stats.warnings())

    if result.faqs:
        logger.info("Extracted %d FAQs from %s", len(result.faqs), base_url)
    else:
        result.markup_detected = has_faq_markup(html)
        if result.markup_detected:
            logger.warning("FAQ markup detected but extraction failed for %s", base_url)
        else:
            logger.info("No FAQ markup found on %s", base_url)

    return result
