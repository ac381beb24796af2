"""Answer HTML sanitization.

Answers are re-displayed as HTML, so the raw markup pulled out of a page is
cleaned before it leaves the pipeline:

* dangerous elements are removed together with their content,
* inline event handlers and ``javascript:`` attribute values are dropped,
* relative link and image URLs are made absolute against the page URL,
* oversized embedded (``data:``) images are replaced by a placeholder,
* empty padding paragraphs are removed,
* the result is capped at 5000 characters.

Every step degrades locally: a URL that cannot be resolved only affects the
element carrying it.
"""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag

from faqproxy.extraction.models import ProcessingStats
from faqproxy.extraction.text import decode_entities

MAX_ANSWER_LENGTH = 5000
MAX_DATA_URI_LENGTH = 100_000
TRUNCATION_MARKER = "... (truncated)"

DANGEROUS_TAGS = ["script", "style", "iframe", "object", "embed", "form", "input", "button"]

DEFAULT_IMAGE_ALT = "FAQ image"
OVERSIZED_IMAGE_ALT = "Image too large to display"
BROKEN_IMAGE_ALT = "Image unavailable"

_LINK_PASSTHROUGH = ("http", "#", "mailto:")
_OPEN_TAG_TAIL_RE = re.compile(r"<[^>]*$")
# Browsers drop ASCII whitespace and control characters inside URL schemes.
_URL_NOISE_RE = re.compile(r"[\x00-\x20\x7f]")
_RESOLVED_SCHEMES = ("http", "https", "mailto")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _resolve_url(url: str, base_url: str) -> str:
    """Resolve *url* against *base_url*.

    Raises:
        ValueError: If the result is not an absolute http(s) or mailto URL.
    """
    resolved = urljoin(base_url, url.strip())
    parts = urlsplit(resolved)
    if not parts.scheme:
        raise ValueError(f"cannot resolve {url!r} against {base_url!r}")
    if parts.scheme.lower() not in _RESOLVED_SCHEMES:
        raise ValueError(f"unsupported scheme in {resolved!r}")
    if parts.scheme in ("http", "https") and not parts.netloc:
        raise ValueError(f"no host in {resolved!r}")
    return resolved


def _attr_text(value: object) -> str:
    # bs4 returns multi-valued attributes (class, rel, ...) as lists
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _remove_dangerous_elements(soup: BeautifulSoup) -> None:
    for tag in soup.find_all(DANGEROUS_TAGS):
        if not tag.decomposed:
            tag.decompose()


def _strip_unsafe_attributes(soup: BeautifulSoup) -> None:
    for tag in soup.find_all(True):
        for name, value in list(tag.attrs.items()):
            text = _URL_NOISE_RE.sub("", _attr_text(value)).lower()
            if name.lower().startswith("on") or "javascript:" in text:
                del tag[name]


def _rewrite_links(soup: BeautifulSoup, base_url: str, stats: ProcessingStats) -> None:
    for link in soup.find_all("a"):
        href = link.get("href")
        if not href or href.startswith(_LINK_PASSTHROUGH):
            continue
        try:
            link["href"] = _resolve_url(href, base_url)
        except ValueError:
            del link["href"]
            continue
        stats.relative_urls_fixed += 1


def _mark_broken(img: Tag, alt: str, stats: ProcessingStats) -> None:
    img["data-broken"] = "true"
    img["alt"] = img.get("alt") or alt
    stats.broken_images += 1


def _process_images(soup: BeautifulSoup, base_url: str, stats: ProcessingStats) -> None:
    images = soup.find_all("img")
    stats.images_processed += len(images)

    for img in images:
        src = img.get("src")
        if not src:
            img.decompose()
            continue

        network_image = True
        if src.startswith("data:"):
            network_image = False
            if len(src) > MAX_DATA_URI_LENGTH:
                img["src"] = "#"
                img["alt"] = img.get("alt") or OVERSIZED_IMAGE_ALT
                img["data-error"] = "embedded-image-too-large"
                stats.data_uris_rejected += 1
                stats.broken_images += 1
        elif not src.startswith("http"):
            if src.startswith("//"):
                img["src"] = "https:" + src
                stats.relative_urls_fixed += 1
            else:
                try:
                    img["src"] = _resolve_url(src, base_url)
                except ValueError:
                    _mark_broken(img, BROKEN_IMAGE_ALT, stats)
                    network_image = False
                else:
                    stats.relative_urls_fixed += 1

        img["loading"] = "lazy"
        if not img.get("alt"):
            img["alt"] = DEFAULT_IMAGE_ALT

        # No reachability check is made; remote images are flagged as such.
        if network_image:
            img["data-verified"] = "unverified"
            stats.unverified_images += 1


def _remove_empty_paragraphs(soup: BeautifulSoup) -> None:
    for p in soup.find_all("p"):
        if p.decomposed:
            continue
        if not p.get_text(strip=True) and p.find("img") is None:
            p.decompose()


def _truncate(markup: str, stats: ProcessingStats) -> str:
    if len(markup) <= MAX_ANSWER_LENGTH:
        return markup
    stats.truncated_answers += 1
    cut = _OPEN_TAG_TAIL_RE.sub("", markup[:MAX_ANSWER_LENGTH])
    return cut + TRUNCATION_MARKER


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def sanitize_answer(raw: str, base_url: str, stats: ProcessingStats) -> str:
    """Return a cleaned, size-bounded copy of the answer markup *raw*.

    Relative links and images are resolved against *base_url*.  Counters on
    *stats* are updated as a side effect.
    """
    if not raw:
        return ""

    stats.answers_with_html_sanitized += 1

    soup = BeautifulSoup(decode_entities(raw), "html.parser")
    _remove_dangerous_elements(soup)
    _strip_unsafe_attributes(soup)
    _rewrite_links(soup, base_url, stats)
    _process_images(soup, base_url, stats)
    _remove_empty_paragraphs(soup)

    return _truncate(soup.decode().strip(), stats)
