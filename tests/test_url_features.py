"""Tests for URL feature extraction."""

import pytest

from seoscore.errors import InvalidUrlError
from seoscore.models import DomainForm
from seoscore.url_features import (
    classify_domain,
    extract_url_features,
    is_valid_url,
    normalize_url,
    path_depth,
)


class TestNormalizeUrl:
    """Test cases for normalize_url."""

    def test_adds_https_when_missing(self):
        assert normalize_url("example.com") == "https://example.com"

    def test_keeps_existing_scheme(self):
        assert normalize_url("http://example.com") == "http://example.com"
        assert normalize_url("HTTPS://example.com") == "HTTPS://example.com"

    def test_strips_whitespace(self):
        assert normalize_url("  example.com/page ") == "https://example.com/page"


class TestIsValidUrl:
    """Test cases for is_valid_url."""

    @pytest.mark.parametrize("url", [
        "https://example.com",
        "example.com",
        "http://localhost:8080/path",
        "https://[::1]/",
    ])
    def test_valid(self, url):
        assert is_valid_url(url) is True

    @pytest.mark.parametrize("url", [
        "",
        "   ",
        "https://",
        "https://exa mple.com",
        "https://example.com:notaport/",
    ])
    def test_invalid(self, url):
        assert is_valid_url(url) is False


class TestClassifyDomain:
    """Test cases for classify_domain."""

    @pytest.mark.parametrize("hostname,expected", [
        ("example.com", DomainForm.ROOT),
        ("www.example.com", DomainForm.WWW_SUBDOMAIN),
        ("blog.example.com", DomainForm.SUBDOMAIN),
        ("a.b.example.com", DomainForm.MULTI_LEVEL_SUBDOMAIN),
        ("localhost", DomainForm.OTHER),
    ])
    def test_classification(self, hostname, expected):
        assert classify_domain(hostname) == expected


class TestPathDepth:
    """Test cases for path_depth."""

    def test_root_path(self):
        assert path_depth("/") == 0
        assert path_depth("") == 0

    def test_ignores_empty_segments(self):
        assert path_depth("/a//b/c/") == 3


class TestExtractUrlFeatures:
    """Test cases for extract_url_features."""

    def test_full_url(self):
        features = extract_url_features("https://www.example.com/a/b/c/d?x=1#top")

        assert features.url == "https://www.example.com/a/b/c/d?x=1#top"
        assert features.https_protocol is True
        assert features.domain_has_www is True
        assert features.domain_structure == DomainForm.WWW_SUBDOMAIN
        assert features.path_depth == 4
        assert features.has_query_params is True
        assert features.has_fragment is True

    def test_missing_scheme_defaults_to_https(self):
        features = extract_url_features("example.com")

        assert features.url == "https://example.com"
        assert features.https_protocol is True
        assert features.path_depth == 0
        assert features.has_query_params is False
        assert features.has_fragment is False

    def test_http_url(self):
        features = extract_url_features("http://blog.example.com/")
        assert features.https_protocol is False
        assert features.domain_structure == DomainForm.SUBDOMAIN

    def test_invalid_url_raises(self):
        with pytest.raises(InvalidUrlError) as exc_info:
            extract_url_features("not a url")

        assert "Invalid URL format" in exc_info.value.message
        assert exc_info.value.url == "not a url"

    def test_to_dict_uses_camel_case(self):
        data = extract_url_features("https://example.com/x").to_dict()

        assert data == {
            "httpsProtocol": True,
            "domainHasWww": False,
            "domainStructure": "Root Domain",
            "pathDepth": 1,
            "hasQueryParams": False,
            "hasFragment": False,
        }
