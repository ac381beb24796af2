"""FAQ extraction package: JSON-LD, Microdata and RDFa to sanitized records."""

from faqproxy.extraction.answers import sanitize_answer
from faqproxy.extraction.jsonld import extract_jsonld
from faqproxy.extraction.merge import merge_faqs
from faqproxy.extraction.microdata import extract_microdata
from faqproxy.extraction.models import ExtractionResult, FAQRecord, ProcessingStats
from faqproxy.extraction.pipeline import extract_faqs
from faqproxy.extraction.questions import normalize_question
from faqproxy.extraction.rdfa import extract_rdfa
from faqproxy.extraction.text import decode_entities, sanitize_anchor

__all__ = [
    "extract_faqs",
    "extract_jsonld",
    "extract_microdata",
    "extract_rdfa",
    "merge_faqs",
    "normalize_question",
    "sanitize_answer",
    "decode_entities",
    "sanitize_anchor",
    "ExtractionResult",
    "FAQRecord",
    "ProcessingStats",
]
