"""Tests for pure helpers"""

import pytest

from components import _helpers


class TestResourceName:
    def test_joins_parts(self):
        assert _helpers.resource_name("cdn", "static-site", "dev") == "cdn-static-site-dev"

    def test_lowercases_and_replaces_invalid_chars(self):
        assert _helpers.resource_name("LB", "My_Site", "prod") == "lb-my-site-prod"

    def test_collapses_hyphens(self):
        assert _helpers.resource_name("site", "--a--", "dev") == "site-a-dev"

    def test_respects_max_len(self):
        result = _helpers.resource_name("site", "x" * 80)
        assert len(result) == 63
        assert not result.endswith("-")

    def test_rejects_leading_digit(self):
        with pytest.raises(ValueError):
            _helpers.resource_name("1site")


class TestSanitizeBucketName:
    def test_lowercases(self):
        assert _helpers.sanitize_bucket_name("My-Bucket") == "my-bucket"

    def test_allows_dots_and_underscores(self):
        assert _helpers.sanitize_bucket_name("assets.example_com") == "assets.example_com"

    def test_rejects_too_short(self):
        with pytest.raises(ValueError):
            _helpers.sanitize_bucket_name("ab")

    def test_rejects_trailing_hyphen(self):
        with pytest.raises(ValueError):
            _helpers.sanitize_bucket_name("bucket-")

    def test_rejects_goog_prefix(self):
        with pytest.raises(ValueError):
            _helpers.sanitize_bucket_name("google-assets")


class TestParseProtocol:
    def test_normalizes_case(self):
        assert _helpers.parse_protocol(" HTTPS ") == "https"

    def test_rejects_unknown(self):
        with pytest.raises(ValueError):
            _helpers.parse_protocol("ftp")


class TestParseDomains:
    def test_comma_separated(self):
        assert _helpers.parse_domains("a.example.com, b.example.com") == [
            "a.example.com",
            "b.example.com",
        ]

    def test_strips_trailing_dot_and_duplicates(self):
        assert _helpers.parse_domains(["A.example.com.", "a.example.com"]) == [
            "a.example.com"
        ]

    def test_empty(self):
        assert _helpers.parse_domains(None) == []
        assert _helpers.parse_domains("") == []


class TestPortRange:
    def test_https(self):
        assert _helpers.port_range("https") == "443"

    def test_http(self):
        assert _helpers.port_range("http") == "80"


class TestSiteUrl:
    def test_https_host(self):
        assert _helpers.site_url("https", "cdn.example.com") == "https://cdn.example.com/"

    def test_http_ip(self):
        assert _helpers.site_url("http", "203.0.113.10") == "http://203.0.113.10/"


class TestCacheIdHeader:
    def test_formats_placeholder(self):
        assert _helpers.cache_id_header("X-Cache-ID") == "X-Cache-ID: {cdn_cache_id}"

    def test_rejects_colon(self):
        with pytest.raises(ValueError):
            _helpers.cache_id_header("X-Cache: ID")


class TestValidateCdnTtls:
    def test_accepts_defaults(self):
        _helpers.validate_cdn_ttls(3600, 3600, 86400, 86400)

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="serve_while_stale"):
            _helpers.validate_cdn_ttls(0, 0, 0, -1)

    def test_rejects_client_ttl_above_max(self):
        with pytest.raises(ValueError, match="client_ttl"):
            _helpers.validate_cdn_ttls(7200, 60, 3600, 0)

    def test_rejects_default_ttl_above_max(self):
        with pytest.raises(ValueError, match="default_ttl"):
            _helpers.validate_cdn_ttls(60, 7200, 3600, 0)

    def test_accepts_ttl_ceiling(self):
        _helpers.validate_cdn_ttls(0, 0, _helpers.MAX_CDN_TTL, 0)

    def test_rejects_ttl_above_ceiling(self):
        with pytest.raises(ValueError, match="max_ttl"):
            _helpers.validate_cdn_ttls(0, 0, _helpers.MAX_CDN_TTL + 1, 0)

    def test_accepts_serve_while_stale_ceiling(self):
        _helpers.validate_cdn_ttls(0, 0, 0, 604_800)

    def test_rejects_serve_while_stale_above_a_week(self):
        with pytest.raises(ValueError, match="serve_while_stale"):
            _helpers.validate_cdn_ttls(0, 0, 86400, 2_592_000)

    def test_skips_max_comparison_when_max_ttl_not_sent(self):
        _helpers.validate_cdn_ttls(7200, 7200, 3600, 0, compare_to_max=False)
