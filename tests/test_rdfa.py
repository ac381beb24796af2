"""Tests for the RDFa extractor."""

from __future__ import annotations

from bs4 import BeautifulSoup

from faqproxy.extraction.models import FAQRecord, ProcessingStats
from faqproxy.extraction.rdfa import extract_rdfa

BASE_URL = "https://example.com/faq"

_FAQ_PAGE = """\
<div vocab="https://schema.org/" typeof="FAQPage">
  <div property="mainEntity" typeof="Question" resource="#returns">
    <h3 property="name">Can I return items?</h3>
    <div property="acceptedAnswer" typeof="Answer">
      <div property="text">Yes, within <b>30 days</b>.</div>
    </div>
  </div>
</div>
"""


def _extract(body: str) -> list[FAQRecord]:
    soup = BeautifulSoup(f"<html><body>{body}</body></html>", "html.parser")
    return extract_rdfa(soup, BASE_URL, ProcessingStats())


class TestExtractRdfa:
    def test_minimal_faq_page(self) -> None:
        assert _extract(_FAQ_PAGE) == [
            FAQRecord(
                question="Can I return items?",
                answer="Yes, within <b>30 days</b>.",
                id="returns",
            )
        ]

    def test_prefixed_properties(self) -> None:
        body = (
            '<div prefix="schema: https://schema.org/" typeof="schema:FAQPage">'
            '<div typeof="schema:Question">'
            '<span property="schema:name">Prefixed?</span>'
            '<div property="schema:text">Works.</div>'
            "</div></div>"
        )
        assert [(f.question, f.answer) for f in _extract(body)] == [("Prefixed?", "Works.")]

    def test_id_precedence(self) -> None:
        body = (
            '<div typeof="Question" id="from-id" resource="#from-resource" about="#from-about">'
            '<span property="name">Q?</span><p property="text">A</p></div>'
        )
        assert _extract(body)[0].id == "from-id"

    def test_about_fragment_used_last(self) -> None:
        body = (
            '<div typeof="Question" about="https://example.com/faq#from-about">'
            '<span property="name">Q?</span><p property="text">A</p></div>'
        )
        assert _extract(body)[0].id == "from-about"

    def test_standalone_question(self) -> None:
        body = (
            '<div typeof="Question"><span property="name">Alone?</span>'
            '<p property="text">Found.</p></div>'
        )
        assert [f.question for f in _extract(body)] == ["Alone?"]

    def test_wrapped_question_not_duplicated(self) -> None:
        body = _FAQ_PAGE.replace(' resource="#returns"', "")
        assert len(_extract(body)) == 1

    def test_copy_with_seen_id_skipped(self) -> None:
        copy = (
            '<div typeof="Question" resource="#returns"><span property="name">Copy?</span>'
            '<p property="text">Copy.</p></div>'
        )
        assert [f.question for f in _extract(_FAQ_PAGE + copy)] == ["Can I return items?"]

    def test_missing_text_skipped(self) -> None:
        body = '<div typeof="Question"><span property="name">Unanswered?</span></div>'
        assert _extract(body) == []

    def test_missing_name_skipped(self) -> None:
        body = '<div typeof="Question"><p property="text">Orphan.</p></div>'
        assert _extract(body) == []

    def test_name_from_content_attribute(self) -> None:
        body = (
            '<div typeof="Question"><meta property="name" content="Meta name?">'
            '<p property="text">A</p></div>'
        )
        assert _extract(body)[0].question == "Meta name?"

    def test_wrapped_question_without_id_counted_once(self) -> None:
        stats = ProcessingStats()
        html = _FAQ_PAGE.replace(' resource="#returns"', "").replace(
            "<b>30 days</b>", '<img src="/returns.png">'
        )
        soup = BeautifulSoup(f"<html><body>{html}</body></html>", "html.parser")
        extract_rdfa(soup, BASE_URL, stats)
        assert stats.answers_with_html_sanitized == 1
        assert stats.images_processed == 1
