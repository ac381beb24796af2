"""Scraper package for fetching target pages."""

from faqproxy.scraper.fetcher import fetch_document
from faqproxy.scraper.models import RawPage

__all__ = ["fetch_document", "RawPage"]
