"""Centralised settings for the FAQ schema proxy.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_ALLOWED_ORIGINS = (
    "https://365i.co.uk,"
    "https://www.365i.co.uk,"
    "https://staging.365i.co.uk,"
    "http://localhost:3000,"
    "http://localhost:8080"
)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Upstream fetch
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "10.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "FAQ_PROXY_USER_AGENT",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        )
    )
    max_document_bytes: int = field(
        default_factory=lambda: int(os.environ.get("MAX_DOCUMENT_BYTES", str(5 * 1024 * 1024)))
    )

    # ------------------------------------------------------------------
    # Access policy
    # ------------------------------------------------------------------
    allowed_origins: list[str] = field(
        default_factory=lambda: [
            o.strip()
            for o in os.environ.get("ALLOWED_ORIGINS", _DEFAULT_ALLOWED_ORIGINS).split(",")
            if o.strip()
        ]
    )
    rate_limit_enabled: bool = field(
        default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", "true")
    )
    daily_request_limit: int = field(
        default_factory=lambda: int(os.environ.get("DAILY_REQUEST_LIMIT", "100"))
    )

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )
    terms_notice: str = (
        "By using this service, you agree not to violate any website's terms of service."
    )


# Module-level singleton, import this everywhere:
#   from faqproxy.config import settings
settings = Settings()
