"""Request guards: origin allowlist and target URL validation."""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from faqproxy.errors import BlockedTargetError, InvalidTargetError, UnauthorizedOriginError

logger = logging.getLogger(__name__)

_PRIVATE_HOST_PATTERNS = [
    re.compile(r"^localhost$", re.IGNORECASE),
    re.compile(r"^127\."),
    re.compile(r"^10\."),
    re.compile(r"^172\.(1[6-9]|2[0-9]|3[0-1])\."),
    re.compile(r"^192\.168\."),
    re.compile(r"\.local$", re.IGNORECASE),
    re.compile(r"^0\.0\.0\.0$"),
]


def _origin_variants(allowed: str) -> tuple[str, ...]:
    return (allowed, allowed.replace("www.", ""), allowed.replace("://", "://www."))


def check_origin(origin: str | None, referer: str | None, allowed_origins: list[str]) -> None:
    """Reject browser requests coming from pages outside *allowed_origins*.

    Requests carrying neither ``Origin`` nor ``Referer`` (server-to-server,
    CLI tools) are let through.

    Raises:
        UnauthorizedOriginError: If the origin (or referer) matches no entry.
    """
    candidate = origin or referer
    if not candidate:
        return
    for allowed in allowed_origins:
        if candidate.startswith(_origin_variants(allowed)):
            return
    logger.info("Blocked request from unauthorized origin: %s", candidate)
    raise UnauthorizedOriginError("Unauthorized origin")


def validate_target_url(url: str | None) -> str:
    """Return *url* stripped, after checking it is a public http(s) URL.

    Raises:
        InvalidTargetError: If *url* is missing or not an absolute http(s) URL.
        BlockedTargetError: If *url* points at a local or private-network host.
    """
    if not url or not url.strip():
        raise InvalidTargetError("URL parameter required")

    url = url.strip()
    try:
        parts = urlsplit(url)
        hostname = parts.hostname or ""
    except ValueError as exc:
        raise InvalidTargetError(f"Invalid URL: {url}") from exc

    if parts.scheme not in ("http", "https") or not hostname:
        raise InvalidTargetError(f"Invalid URL: {url}")

    if any(pattern.search(hostname) for pattern in _PRIVATE_HOST_PATTERNS):
        logger.info("Blocked request to internal/private URL: %s", hostname)
        raise BlockedTargetError("Internal/private URLs not allowed")

    return url
