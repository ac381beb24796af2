"""Tests for the origin allowlist and target URL validation."""

from __future__ import annotations

import pytest

from faqproxy.api.guards import check_origin, validate_target_url
from faqproxy.errors import BlockedTargetError, InvalidTargetError, UnauthorizedOriginError

ALLOWED = ["https://example.com", "https://www.partner.org", "http://localhost:3000"]


class TestValidateTargetUrl:
    def test_public_url_returned_stripped(self) -> None:
        assert validate_target_url("  https://example.com/faq  ") == "https://example.com/faq"

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_missing_url(self, url) -> None:
        with pytest.raises(InvalidTargetError) as info:
            validate_target_url(url)
        assert info.value.message == "URL parameter required"
        assert info.value.status_code == 400

    @pytest.mark.parametrize(
        "url", ["example.com/faq", "ftp://example.com/faq", "javascript:alert(1)", "http://[::1"]
    )
    def test_invalid_url(self, url) -> None:
        with pytest.raises(InvalidTargetError):
            validate_target_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost/admin",
            "http://LOCALHOST:8080/",
            "http://127.0.0.1/",
            "http://10.0.0.5/",
            "http://172.16.0.1/",
            "http://172.31.255.255/",
            "http://192.168.1.1/",
            "http://printer.local/",
            "http://0.0.0.0/",
        ],
    )
    def test_private_hosts_blocked(self, url) -> None:
        with pytest.raises(BlockedTargetError) as info:
            validate_target_url(url)
        assert info.value.status_code == 403

    @pytest.mark.parametrize("url", ["http://172.32.0.1/", "http://11.0.0.1/"])
    def test_neighbouring_public_ranges_allowed(self, url) -> None:
        assert validate_target_url(url) == url


class TestCheckOrigin:
    def test_no_headers_allowed(self) -> None:
        check_origin(None, None, ALLOWED)

    def test_exact_origin_allowed(self) -> None:
        check_origin("https://example.com", None, ALLOWED)

    def test_www_variant_of_allowed_origin(self) -> None:
        check_origin("https://www.example.com", None, ALLOWED)

    def test_bare_variant_of_www_origin(self) -> None:
        check_origin("https://partner.org", None, ALLOWED)

    def test_referer_prefix_allowed(self) -> None:
        check_origin(None, "http://localhost:3000/tools/faq", ALLOWED)

    def test_origin_takes_precedence_over_referer(self) -> None:
        with pytest.raises(UnauthorizedOriginError):
            check_origin("https://evil.example", "https://example.com/page", ALLOWED)

    def test_unknown_origin_rejected(self) -> None:
        with pytest.raises(UnauthorizedOriginError) as info:
            check_origin("https://evil.example", None, ALLOWED)
        assert info.value.status_code == 403
        assert info.value.warning
