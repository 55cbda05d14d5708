"""Unit tests for config.py — SeedrConfig and load_config()."""

import os
from unittest.mock import patch

import pytest

from seedr_client.config import SeedrConfig, load_config

# ---------------------------------------------------------------------------
# SeedrConfig tests
# ---------------------------------------------------------------------------


class TestSeedrConfig:
    def test_defaults_target_public_service(self) -> None:
        config = SeedrConfig()
        assert config.base_url == "https://www.seedr.cc"
        assert config.client_id == "seedr_xbmc"
        assert config.request_timeout == 10.0
        assert config.max_folder_depth == 64

    def test_is_immutable(self) -> None:
        config = SeedrConfig()
        with pytest.raises(AttributeError):
            config.base_url = "https://elsewhere"  # type: ignore[misc]

    def test_fields_can_be_overridden(self) -> None:
        config = SeedrConfig(base_url="http://localhost:8080", client_id="test-app")
        assert config.base_url == "http://localhost:8080"
        assert config.client_id == "test-app"


# ---------------------------------------------------------------------------
# load_config tests
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_empty_environment_uses_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = load_config()
        assert config == SeedrConfig()

    def test_reads_values_from_env(self) -> None:
        env = {
            "SEEDR_BASE_URL": "http://localhost:8080/",
            "SEEDR_CLIENT_ID": "test-app",
            "SEEDR_REQUEST_TIMEOUT": "2.5",
            "SEEDR_MAX_FOLDER_DEPTH": "8",
            "SEEDR_USER_AGENT": "tests/1.0",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config()
        assert config.base_url == "http://localhost:8080"
        assert config.client_id == "test-app"
        assert config.request_timeout == 2.5
        assert config.max_folder_depth == 8
        assert config.user_agent == "tests/1.0"

    def test_raises_value_error_on_bad_number(self) -> None:
        with patch.dict(os.environ, {"SEEDR_MAX_FOLDER_DEPTH": "deep"}, clear=True):
            with pytest.raises(ValueError):
                load_config()
