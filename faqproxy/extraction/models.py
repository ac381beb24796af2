"""Data models for the FAQ extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from faqproxy.config import settings

NO_FAQS_MESSAGE = "No FAQ schema markup found on this page"
MARKUP_FAILED_ERROR = (
    "Page contains FAQ markup but extraction failed. The structure might be non-standard."
)
MARKUP_FAILED_WARNING = "FAQ schema detected but could not be parsed"


@dataclass(frozen=True)
class FAQRecord:
    """One question/answer pair, as produced by a format extractor."""

    question: str
    answer: str
    id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"question": self.question, "answer": self.answer, "id": self.id}


@dataclass
class ProcessingStats:
    """Counters accumulated while processing a single page.

    One instance is created per extraction request and handed by reference to
    every extractor, normalizer and sanitizer call for that page.
    """

    questions_with_html_stripped: int = 0
    answers_with_html_sanitized: int = 0
    truncated_answers: int = 0
    images_processed: int = 0
    broken_images: int = 0
    unverified_images: int = 0
    relative_urls_fixed: int = 0
    data_uris_rejected: int = 0
    jsonld_blocks_skipped: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "questionsWithHtmlStripped": self.questions_with_html_stripped,
            "answersWithHtmlSanitized": self.answers_with_html_sanitized,
            "truncatedAnswers": self.truncated_answers,
            "imagesProcessed": self.images_processed,
            "brokenImages": self.broken_images,
            "unverifiedImages": self.unverified_images,
            "relativeUrlsFixed": self.relative_urls_fixed,
            "dataUrisRejected": self.data_uris_rejected,
            "jsonLdBlocksSkipped": self.jsonld_blocks_skipped,
        }

    def warnings(self) -> list[str]:
        """Human-readable warnings derived from the non-zero counters."""
        messages: list[str] = []
        if self.jsonld_blocks_skipped:
            messages.append(f"{self.jsonld_blocks_skipped} JSON-LD blocks could not be parsed")
        if self.questions_with_html_stripped:
            messages.append(
                f"{self.questions_with_html_stripped} questions had HTML markup removed"
            )
        if self.truncated_answers:
            messages.append(
                f"{self.truncated_answers} answers were truncated to 5000 characters"
            )
        if self.broken_images:
            messages.append(f"{self.broken_images} images were unreachable")
        if self.unverified_images:
            messages.append(f"{self.unverified_images} images could not be verified")
        if self.data_uris_rejected:
            messages.append(f"{self.data_uris_rejected} embedded images were too large")
        return messages


@dataclass
class ExtractionResult:
    """Everything the orchestrator learned about one page."""

    faqs: list[FAQRecord] = field(default_factory=list)
    stats: ProcessingStats = field(default_factory=ProcessingStats)
    title: str = ""
    schema_types: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    markup_detected: bool = False

    @property
    def outcome(self) -> str:
        """``success``, ``markup_failed`` or ``empty``."""
        if self.faqs:
            return "success"
        if self.markup_detected:
            return "markup_failed"
        return "empty"

    def to_payload(self, source: str) -> dict[str, Any]:
        """Build the JSON envelope returned to API and CLI callers."""
        if self.outcome == "success":
            return {
                "success": True,
                "source": source,
                "faqs": [faq.to_dict() for faq in self.faqs],
                "metadata": {
                    "extractionMethod": "enhanced-html-parser",
                    "totalExtracted": len(self.faqs),
                    "title": self.title,
                    "processing": self.stats.to_dict(),
                    "warnings": list(self.warnings),
                    "schemaTypes": list(self.schema_types),
                    "hasImages": self.stats.images_processed > 0,
                    "imageCount": self.stats.images_processed,
                    "brokenImages": self.stats.broken_images,
                    "terms": settings.terms_notice,
                },
            }

        if self.outcome == "markup_failed":
            return {
                "success": False,
                "source": source,
                "error": MARKUP_FAILED_ERROR,
                "metadata": {
                    "title": self.title,
                    "extractionMethod": "failed",
                    "warnings": [MARKUP_FAILED_WARNING],
                    "terms": settings.terms_notice,
                },
            }

        return {
            "success": False,
            "source": source,
            "faqs": [],
            "metadata": {
                "extractionMethod": "none",
                "title": self.title,
                "message": NO_FAQS_MESSAGE,
                "warnings": [],
                "terms": settings.terms_notice,
            },
        }
