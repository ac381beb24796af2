"""FastAPI application factory.

Routers
-------
    /extract   → FAQ structured-data extraction
    /health    → liveness probe

Errors
------
Every :class:`~faqproxy.errors.ProxyError` raised while handling a request is
rendered as ``{"success": false, "error": ..., "metadata": {...}}`` with the
error's own status code.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from faqproxy.api.ratelimit import DailyRateLimiter, MemoryCounterStore
from faqproxy.api.routers import extract as extract_router
from faqproxy.config import settings
from faqproxy.errors import ProxyError, RateLimitExceededError
from faqproxy.log import setup_logging


def _error_response(request: Request, exc: ProxyError) -> JSONResponse:
    metadata: dict[str, Any] = {"terms": settings.terms_notice}
    if exc.warning:
        metadata["warning"] = exc.warning
    body: dict[str, Any] = {"error": exc.message, "success": False, "metadata": metadata}
    headers: dict[str, str] = {}

    if isinstance(exc, RateLimitExceededError):
        body.update(
            rateLimited=True,
            resetTime=exc.reset_time,
            limit=exc.limit,
            used=exc.used,
            resetIn=exc.reset_in,
        )
        headers = {
            "X-RateLimit-Limit": str(exc.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": str(exc.reset_time),
        }

    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    setup_logging(settings.log_level)

    app = FastAPI(
        title="FAQ Schema Proxy",
        description=(
            "Fetches a public web page and returns the FAQ question/answer pairs "
            "found in its JSON-LD, Microdata or RDFa structured data, with answer "
            "HTML sanitized for re-display."
        ),
        version="0.1.0",
    )
    app.state.rate_limiter = DailyRateLimiter(
        MemoryCounterStore(), limit=settings.daily_request_limit
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "HEAD", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset"],
    )
    app.add_exception_handler(ProxyError, _error_response)

    app.include_router(extract_router.router, prefix="/extract", tags=["extract"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn faqproxy.api.app:app --reload
app = create_app()
