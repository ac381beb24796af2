"""Exceptions raised by the proxy outside the extraction core.

Each carries the HTTP status the API layer answers with.
"""

from __future__ import annotations


class ProxyError(Exception):
    status_code = 500
    warning: str | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidTargetError(ProxyError):
    status_code = 400


class BlockedTargetError(ProxyError):
    status_code = 403
    warning = "This service cannot access internal or private network addresses."


class UnauthorizedOriginError(ProxyError):
    status_code = 403
    warning = "This service is for FAQ extraction only. Abuse will result in blocking."


class RateLimitExceededError(ProxyError):
    status_code = 429
    warning = "Rate limit exceeded. Please try again tomorrow."

    def __init__(self, limit: int, used: int, reset_time: int, reset_in: int) -> None:
        super().__init__(
            f"Daily extraction limit reached. You can extract up to {limit} pages per day."
        )
        self.limit = limit
        self.used = used
        self.reset_time = reset_time
        self.reset_in = reset_in


class UpstreamFetchError(ProxyError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"Fetch failed: {status_code}")
        self.status_code = status_code


class UpstreamTimeoutError(ProxyError):
    status_code = 504


class NotHtmlError(ProxyError):
    status_code = 415


class DocumentTooLargeError(ProxyError):
    status_code = 413


class UpstreamConnectionError(ProxyError):
    status_code = 502
