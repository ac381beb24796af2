"""Tests for the extraction orchestrator and its JSON payloads."""

from __future__ import annotations

import json

import pytest

from faqproxy.config import settings
from faqproxy.errors import DocumentTooLargeError
from faqproxy.extraction import pipeline
from faqproxy.extraction.microdata import extract_microdata
from faqproxy.extraction.models import (
    MARKUP_FAILED_ERROR,
    MARKUP_FAILED_WARNING,
    NO_FAQS_MESSAGE,
    FAQRecord,
)
from faqproxy.extraction.pipeline import extract_faqs, has_faq_markup

BASE_URL = "https://shop.example.com/help"


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

def _jsonld(*pairs: tuple[str, str]) -> str:
    data = {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {"@type": "Question", "name": q, "acceptedAnswer": {"@type": "Answer", "text": a}}
            for q, a in pairs
        ],
    }
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


_MICRODATA = """\
<div itemscope itemtype="https://schema.org/FAQPage">
  <div itemscope itemprop="mainEntity" itemtype="https://schema.org/Question" id="shipping">
    <h3 itemprop="name">How long does shipping take?</h3>
    <div itemprop="acceptedAnswer" itemscope itemtype="https://schema.org/Answer">
      <div itemprop="text">Usually 3-5 days.</div>
    </div>
  </div>
</div>
"""

_RDFA = """\
<div vocab="https://schema.org/" typeof="FAQPage">
  <div property="mainEntity" typeof="Question" resource="#returns">
    <h3 property="name">Can I return items?</h3>
    <div property="acceptedAnswer" typeof="Answer">
      <div property="text">Yes, within <b>30 days</b>.</div>
    </div>
  </div>
</div>
"""


def _page(head: str = "", body: str = "", title: str = "Help Centre") -> str:
    return f"<html><head><title>{title}</title>{head}</head><body>{body}</body></html>"


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

class TestExtractFaqs:
    def test_all_formats_merged_in_precedence_order(self) -> None:
        html = _page(
            head=_jsonld(("How long does shipping take?", "From JSON-LD")),
            body=_MICRODATA + _RDFA,
        )
        result = extract_faqs(html, BASE_URL)

        assert result.faqs == [
            FAQRecord("How long does shipping take?", "Usually 3-5 days.", "shipping"),
            FAQRecord("Can I return items?", "Yes, within <b>30 days</b>.", "returns"),
        ]
        assert result.schema_types == ["JSON-LD", "Microdata", "RDFa"]
        assert result.title == "Help Centre"
        assert result.outcome == "success"

    def test_first_format_wins_without_ids(self) -> None:
        body = (
            '<div itemscope itemtype="https://schema.org/Question">'
            '<span itemprop="name">What is X?</span><p itemprop="text">From Microdata</p></div>'
        )
        result = extract_faqs(_page(head=_jsonld(("What is X", "From JSON-LD")), body=body), BASE_URL)
        assert [f.answer for f in result.faqs] == ["From JSON-LD"]

    def test_page_without_markup(self) -> None:
        result = extract_faqs(_page(body="<p>Nothing here</p>"), BASE_URL)
        assert result.faqs == []
        assert result.outcome == "empty"
        assert result.markup_detected is False

    def test_markup_present_but_unusable(self) -> None:
        html = _page(head='<script type="application/ld+json">{"@type": "FAQPage", "mainEntity": []}</script>')
        result = extract_faqs(html, BASE_URL)
        assert result.outcome == "markup_failed"

    def test_oversized_document_rejected(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "max_document_bytes", 100)
        with pytest.raises(DocumentTooLargeError):
            extract_faqs("x" * 101, BASE_URL)

    def test_size_limit_counts_utf8_bytes(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "max_document_bytes", 100)
        # 60 characters, 120 bytes
        with pytest.raises(DocumentTooLargeError):
            extract_faqs("\u00e9" * 60, BASE_URL)

    def test_failing_extractor_isolated(self, monkeypatch) -> None:
        def _boom(soup, base_url, stats):
            raise RuntimeError("extractor bug")

        monkeypatch.setattr(
            pipeline, "EXTRACTORS", [("JSON-LD", _boom), ("Microdata", extract_microdata)]
        )
        result = extract_faqs(_page(body=_MICRODATA), BASE_URL)
        assert [f.id for f in result.faqs] == ["shipping"]
        assert result.schema_types == ["Microdata"]

    def test_limit_warning(self) -> None:
        pairs = [(f"Question {i}?", f"Answer {i}") for i in range(55)]
        result = extract_faqs(_page(head=_jsonld(*pairs)), BASE_URL)
        assert len(result.faqs) == 50
        assert "Limited to first 50 FAQs (found 55)" in result.warnings

    def test_stats_warnings_forwarded(self) -> None:
        html = _page(head=_jsonld(("<em>Styled</em> question?", "A")) + '<script type="application/ld+json">{oops</script>')
        result = extract_faqs(html, BASE_URL)
        assert "1 questions had HTML markup removed" in result.warnings
        assert "1 JSON-LD blocks could not be parsed" in result.warnings


class TestHasFaqMarkup:
    @pytest.mark.parametrize(
        "html",
        [
            '<div itemtype="https://schema.org/FAQPage"></div>',
            '<div typeof="schema:FAQPage"></div>',
            '{"@type" : "FAQPage"}',
        ],
    )
    def test_detected(self, html) -> None:
        assert has_faq_markup(html) is True

    def test_not_detected(self) -> None:
        assert has_faq_markup("<p>FAQPage is just a word here</p>") is False


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

class TestPayloads:
    def test_success_payload(self) -> None:
        body = _MICRODATA.replace(
            "Usually 3-5 days.", 'Usually 3-5 days. <img src="/truck.png">'
        )
        payload = extract_faqs(_page(body=body), BASE_URL).to_payload(BASE_URL)

        assert payload["success"] is True
        assert payload["source"] == BASE_URL
        assert payload["faqs"][0]["id"] == "shipping"
        meta = payload["metadata"]
        assert meta["extractionMethod"] == "enhanced-html-parser"
        assert meta["totalExtracted"] == 1
        assert meta["title"] == "Help Centre"
        assert meta["schemaTypes"] == ["Microdata"]
        assert meta["hasImages"] is True
        assert meta["imageCount"] == 1
        assert meta["brokenImages"] == 0
        assert meta["processing"]["relativeUrlsFixed"] == 1
        assert meta["processing"]["unverifiedImages"] == 1
        assert "1 images could not be verified" in meta["warnings"]
        assert meta["terms"] == settings.terms_notice

    def test_empty_payload(self) -> None:
        payload = extract_faqs(_page(body="<p>Hi</p>"), BASE_URL).to_payload(BASE_URL)
        assert payload == {
            "success": False,
            "source": BASE_URL,
            "faqs": [],
            "metadata": {
                "extractionMethod": "none",
                "title": "Help Centre",
                "message": NO_FAQS_MESSAGE,
                "warnings": [],
                "terms": settings.terms_notice,
            },
        }

    def test_markup_failed_payload(self) -> None:
        html = _page(body='<div itemscope itemtype="https://schema.org/FAQPage"></div>')
        payload = extract_faqs(html, BASE_URL).to_payload(BASE_URL)
        assert payload["success"] is False
        assert payload["error"] == MARKUP_FAILED_ERROR
        assert "faqs" not in payload
        assert payload["metadata"]["extractionMethod"] == "failed"
        assert payload["metadata"]["warnings"] == [MARKUP_FAILED_WARNING]
