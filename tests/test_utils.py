"""Tests for utility functions."""

import hashlib
import hmac
import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from app.models import ScrollingScreenshotRequest
from app.utils import (
    cache_policy,
    configure_logging,
    format_validation_error,
    is_valid_website,
    sign_query,
    unique_cache_key,
)


class TestIsValidWebsite:
    """Tests for is_valid_website."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "http://example.com/pricing?plan=pro",
            "https://sub.domain.example.org:8443/path#anchor",
            "http://127.0.0.1:3000",
        ],
    )
    def test_valid(self, url):
        assert is_valid_website(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "example.com",
            "/relative/path",
            "ftp://example.com",
            "javascript:alert(1)",
            "https://",
            "http://[::1",
        ],
    )
    def test_invalid(self, url):
        assert is_valid_website(url) is False


class TestUniqueCacheKey:
    """Tests for unique_cache_key."""

    def test_keys_are_numeric_timestamps(self):
        assert unique_cache_key().isdigit()

    def test_same_millisecond_still_unique(self):
        """Test two keys issued within one millisecond differ."""
        with patch("app.utils.time.time", return_value=1700000000.0):
            first = unique_cache_key()
            second = unique_cache_key()

        assert first != second
        assert int(second) == int(first) + 1

    def test_keys_increase(self):
        keys = [int(unique_cache_key()) for _ in range(50)]
        assert keys == sorted(keys)
        assert len(set(keys)) == 50


class TestCachePolicy:
    """Tests for cache_policy."""

    def test_example_url_uses_fixed_key(self):
        """Test the example URL is cached under a fixed key for 30 days."""
        assert cache_policy("https://example.com", "https://example.com") == ("example", 2592000)

    def test_other_url_uses_fresh_key(self):
        """Test other URLs get a fresh key and a 4 hour TTL."""
        first_key, first_ttl = cache_policy("https://news.ycombinator.com", "https://example.com")
        second_key, second_ttl = cache_policy("https://news.ycombinator.com", "https://example.com")

        assert first_key != second_key
        assert first_key != "example"
        assert first_ttl == second_ttl == 14400

    def test_comparison_is_exact(self):
        """Test a trailing slash makes it a different website."""
        key, ttl = cache_policy("https://example.com/", "https://example.com")
        assert key != "example"
        assert ttl == 14400


class TestSignQuery:
    """Tests for sign_query."""

    def test_signature_is_hmac_of_query_string(self):
        signed = sign_query({"url": "https://example.com", "format": "gif", "access_key": "abc"}, "secret")
        query_string, signature = signed.split("&signature=")

        assert query_string == "url=https%3A%2F%2Fexample.com&format=gif&access_key=abc"
        expected = hmac.new(b"secret", msg=query_string.encode("utf-8"), digestmod=hashlib.sha256).hexdigest()
        assert signature == expected

    def test_secret_changes_signature(self):
        query = {"url": "https://example.com"}
        assert sign_query(query, "one") != sign_query(query, "two")


class TestFormatValidationError:
    """Tests for format_validation_error."""

    def test_includes_field_locations(self):
        with pytest.raises(ValidationError) as exc_info:
            ScrollingScreenshotRequest.model_validate({"website": "not a url", "format": "png"})

        message = format_validation_error(exc_info.value)
        assert "website: " in message
        assert "Invalid url" in message
        assert "device: " in message
        assert "format: " in message


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_unknown_level_falls_back_to_info(self):
        with patch("app.utils.logging.basicConfig") as basic_config:
            configure_logging("chatty")

        assert basic_config.call_args.kwargs["level"] == logging.INFO

    def test_level_name_is_case_insensitive(self):
        with patch("app.utils.logging.basicConfig") as basic_config:
            configure_logging("debug")

        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
