"""Tests for runtime config env parsing and defaults."""
import logging
import os
from unittest.mock import patch

import pytest

from runtime import config as runtime_config
from runtime.config import (
    _fc_request_timeout,
    _fc_verify_ssl,
    _normalize_text_value,
    _parse_env_bool,
    load_runtime_config,
)

_FC_VARS = (
    "FC_URL",
    "FC_USERNAME",
    "FC_PASSWORD",
    "FC_SITE",
    "FC_API_VERSION",
    "FC_USER_TYPE",
    "FC_AUTH_TYPE",
    "FC_VERIFY_SSL",
    "FC_REQUEST_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in _FC_VARS:
        monkeypatch.delenv(key, raising=False)
    # Keep a developer's real .env out of the tests.
    monkeypatch.setattr(runtime_config, "load_dotenv", lambda *args, **kwargs: False)
    return monkeypatch


class TestLoadRuntimeConfig:
    def test_defaults(self, clean_env):
        clean_env.setenv("FC_URL", "https://fc.example.com:7443/")
        clean_env.setenv("FC_USERNAME", "vmadmin")
        clean_env.setenv("FC_PASSWORD", "secret")

        config = load_runtime_config()["FUSIONCOMPUTE"]

        assert config["URL"] == "https://fc.example.com:7443"
        assert config["API_VERSION"] == "6.3"
        assert config["USER_TYPE"] == "2"
        assert config["AUTH_TYPE"] == "0"
        assert config["VERIFY_SSL"] is True
        assert config["REQUEST_TIMEOUT"] == 30
        assert config["SITE"] == ""

    def test_wrapping_quotes_are_stripped(self, clean_env):
        clean_env.setenv("FC_URL", '"https://fc.example.com"')
        clean_env.setenv("FC_SITE", "'site'")

        config = load_runtime_config()["FUSIONCOMPUTE"]

        assert config["URL"] == "https://fc.example.com"
        assert config["SITE"] == "site"

    def test_missing_url_raises(self, clean_env):
        with pytest.raises(ValueError, match="FC_URL"):
            load_runtime_config()

    def test_missing_credentials_only_warn(self, clean_env, caplog):
        clean_env.setenv("FC_URL", "https://fc.example.com")
        with caplog.at_level(logging.WARNING, logger="runtime.config"):
            config = load_runtime_config()
        assert config["FUSIONCOMPUTE"]["USERNAME"] == ""
        assert "FC_USERNAME" in caplog.text

    def test_env_file_is_loaded(self, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("FC_URL=https://from-dotenv.example.com\nFC_SITE=dr-site\n", encoding="utf-8")

        with patch.dict(os.environ, {}, clear=False):
            for key in _FC_VARS:
                os.environ.pop(key, None)
            config = load_runtime_config(env_file=str(env_file))["FUSIONCOMPUTE"]

        assert config["URL"] == "https://from-dotenv.example.com"
        assert config["SITE"] == "dr-site"


class TestEnvHelpers:
    @pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), ("ON", True), ("no", False), ("0", False)])
    def test_parse_env_bool(self, raw, expected):
        assert _parse_env_bool(raw) is expected

    def test_parse_env_bool_invalid_uses_default(self):
        assert _parse_env_bool("maybe", default=True) is True

    def test_normalize_text_value(self):
        assert _normalize_text_value('  "vmadmin" ') == "vmadmin"
        assert _normalize_text_value(None) == ""

    @patch.dict(os.environ, {"FC_VERIFY_SSL": "false"}, clear=False)
    def test_verify_ssl_can_be_disabled(self):
        assert _fc_verify_ssl() is False

    @patch.dict(os.environ, {}, clear=False)
    def test_verify_ssl_defaults_true(self):
        os.environ.pop("FC_VERIFY_SSL", None)
        assert _fc_verify_ssl() is True

    @patch.dict(os.environ, {"FC_REQUEST_TIMEOUT": "90"}, clear=False)
    def test_request_timeout_valid(self):
        assert _fc_request_timeout() == 90

    @patch.dict(os.environ, {"FC_REQUEST_TIMEOUT": "soon"}, clear=False)
    def test_request_timeout_invalid_returns_default(self):
        assert _fc_request_timeout() == 30

    @patch.dict(os.environ, {"FC_REQUEST_TIMEOUT": "0"}, clear=False)
    def test_request_timeout_below_minimum_returns_default(self):
        assert _fc_request_timeout() == 30
