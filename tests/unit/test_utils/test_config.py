"""Unit tests for pptgirl.utils.config module."""

import os
from unittest.mock import patch

import pytest

from pptgirl.utils.config import DEFAULT_ACONTEXT_BASE_URL, AcontextSettings, is_localhost_url


class TestAcontextSettings:
    """Tests for AcontextSettings.from_env."""

    def test_defaults_without_env(self):
        settings = AcontextSettings.from_env()
        assert settings.api_key is None
        assert settings.base_url == DEFAULT_ACONTEXT_BASE_URL
        assert settings.timeout_seconds == 30.0
        assert settings.is_configured is False

    def test_reads_env(self):
        with patch.dict(
            os.environ,
            {
                "ACONTEXT_API_KEY": "env-key",
                "ACONTEXT_BASE_URL": "http://localhost:8029/api/v1",
                "ACONTEXT_TIMEOUT_SECONDS": "12.5",
            },
        ):
            settings = AcontextSettings.from_env()
        assert settings.api_key == "env-key"
        assert settings.base_url == "http://localhost:8029/api/v1"
        assert settings.timeout_seconds == 12.5
        assert settings.is_configured is True

    def test_empty_api_key_is_unconfigured(self):
        with patch.dict(os.environ, {"ACONTEXT_API_KEY": ""}):
            assert AcontextSettings.from_env().is_configured is False

    def test_invalid_timeout_raises(self):
        with patch.dict(os.environ, {"ACONTEXT_TIMEOUT_SECONDS": "soon"}):
            with pytest.raises(ValueError, match="ACONTEXT_TIMEOUT_SECONDS"):
                AcontextSettings.from_env()


class TestIsLocalhostUrl:
    """Tests for is_localhost_url function."""

    def test_localhost_http(self):
        assert is_localhost_url("http://localhost:8029") is True

    def test_127_subnet(self):
        assert is_localhost_url("http://127.1.2.3:8029") is True

    def test_ipv6_localhost(self):
        assert is_localhost_url("http://[::1]:8029") is True

    def test_non_localhost(self):
        assert is_localhost_url("https://api.acontext.app/api/v1") is False

    def test_empty_and_none(self):
        assert is_localhost_url("") is False
        assert is_localhost_url(None) is False
