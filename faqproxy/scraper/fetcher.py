"""HTTP fetcher for the pages FAQ content is extracted from."""

from __future__ import annotations

import logging

import httpx

from faqproxy.config import settings
from faqproxy.errors import (
    NotHtmlError,
    UpstreamConnectionError,
    UpstreamFetchError,
    UpstreamTimeoutError,
)
from faqproxy.scraper.models import RawPage

logger = logging.getLogger(__name__)


def _default_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml",
        "Cache-Control": "no-cache",
    }


def fetch_document(url: str) -> RawPage:
    """Fetch *url* and return it as a :class:`RawPage`.

    Raises:
        UpstreamTimeoutError: If the target does not answer within
            ``settings.request_timeout`` seconds.
        UpstreamConnectionError: If the target cannot be reached at all.
        UpstreamFetchError: If the target answers with a non-2xx status.
        NotHtmlError: If the response is not ``text/html``.
    """
    with httpx.Client(
        headers=_default_headers(),
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        try:
            response = client.get(url)
        except httpx.TimeoutException as exc:
            logger.error("Request timeout for %s after %ss", url, settings.request_timeout)
            raise UpstreamTimeoutError(
                "Request timeout - target site took too long to respond"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamConnectionError(f"Fetch failed: {exc}") from exc

    if not response.is_success:
        raise UpstreamFetchError(response.status_code)

    content_type = response.headers.get("content-type", "")
    if "text/html" not in content_type:
        raise NotHtmlError("Not HTML")

    return RawPage(
        url=str(response.url),
        html=response.text,
        status_code=response.status_code,
        content_type=content_type,
    )
