"""FAQ extraction endpoints.

Routes
------
GET  /extract?url=https://...    → extract FAQ structured data from the page
POST /extract   Body: {"url": "https://..."}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from faqproxy.api.guards import check_origin, validate_target_url
from faqproxy.config import settings
from faqproxy.extraction import extract_faqs
from faqproxy.scraper import fetch_document

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ExtractRequest(BaseModel):
    url: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("cf-connecting-ip")
    if forwarded:
        return forwarded.strip()
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


def _extract(request: Request, response: Response, url: str | None) -> dict[str, Any]:
    origin = request.headers.get("origin")
    referer = request.headers.get("referer")
    check_origin(origin, referer, settings.allowed_origins)

    if settings.rate_limit_enabled:
        limiter = request.app.state.rate_limiter
        remaining = limiter.hit(_client_ip(request))
        response.headers["X-RateLimit-Limit"] = str(limiter.limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)

    target = validate_target_url(url)
    logger.info(
        "FAQ extraction requested: %s from %s", target, origin or referer or "unknown origin"
    )

    page = fetch_document(target)
    result = extract_faqs(page.html, page.url)
    return result.to_payload(target)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("")
def extract_get(
    request: Request, response: Response, url: Optional[str] = None
) -> dict[str, Any]:
    """Fetch *url* and return the FAQ entries found in its structured data."""
    return _extract(request, response, url)


@router.post("")
def extract_post(
    body: ExtractRequest, request: Request, response: Response
) -> dict[str, Any]:
    """Same as ``GET /extract`` with the target URL in a JSON body."""
    return _extract(request, response, body.url)
