"""Tests for settings loading, precedence and persistence."""

import json
import logging
from pathlib import Path

import pytest

from docbot.config import (
    AppSettings,
    OutputSettings,
    TargetSettings,
    get_config_file,
    load_config_file,
    load_settings,
    save_config_file,
)
from docbot.exceptions import ConfigurationError


class TestDefaults:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.target.base_url == "http://localhost:3000"
        assert settings.browser.headless is True
        assert settings.viewer.search_limit == 3
        assert settings.output.auth_file == Path("storage-state") / "auth.json"
        assert settings.get_guides_dir() == Path("output") / "published"

    def test_derived_output_paths(self):
        output = OutputSettings(dir="/tmp/run")
        assert output.guides_work_dir == Path("/tmp/run/guides")
        assert output.failures_dir == Path("/tmp/run/failures")


class TestEnvironment:
    def test_env_prefixes(self, monkeypatch):
        monkeypatch.setenv("DOCBOT_TARGET_BASE_URL", "https://terp.example.com")
        monkeypatch.setenv("DOCBOT_TARGET_PASSWORD", "pw")
        monkeypatch.setenv("DOCBOT_BROWSER_HEADLESS", "false")
        monkeypatch.setenv("DOCBOT_VIEWER_PORT", "9000")

        settings = load_settings()
        assert settings.target.base_url == "https://terp.example.com"
        assert settings.target.get_password() == "pw"
        assert settings.browser.headless is False
        assert settings.viewer.port == 9000

    def test_secret_not_in_repr(self, monkeypatch):
        monkeypatch.setenv("DOCBOT_TARGET_PASSWORD", "hunter2")
        assert "hunter2" not in repr(TargetSettings())


class TestConfigFile:
    def test_config_file_override(self, tmp_path):
        assert get_config_file() == tmp_path / "config.json"

    def test_missing_or_invalid_file(self, tmp_path):
        assert load_config_file(tmp_path / "absent.json") == {}
        bad = tmp_path / "bad.json"
        bad.write_text("{oops")
        assert load_config_file(bad) == {}
        bad.write_text("[1, 2]")
        assert load_config_file(bad) == {}

    def test_file_values_used(self, tmp_path):
        save_config_file({"target": {"base_url": "http://file.test", "email": "docs@file.test"}, "viewer": {"port": 8500}})
        settings = load_settings()
        assert settings.target.base_url == "http://file.test"
        assert settings.target.email == "docs@file.test"
        assert settings.viewer.port == 8500

    def test_env_beats_file_per_field(self, monkeypatch):
        save_config_file({"target": {"base_url": "http://file.test", "email": "docs@file.test"}})
        monkeypatch.setenv("DOCBOT_TARGET_BASE_URL", "http://env.test")

        settings = load_settings()
        assert settings.target.base_url == "http://env.test"
        assert settings.target.email == "docs@file.test"

    def test_unknown_file_keys_ignored(self, caplog):
        save_config_file({"target": {"base_url": "http://file.test", "retired_option": 1}})

        with caplog.at_level(logging.WARNING, logger="docbot.config"):
            settings = load_settings()
        assert settings.target.base_url == "http://file.test"
        assert "retired_option" in caplog.text

    def test_invalid_file_value_is_configuration_error(self):
        save_config_file({"viewer": {"port": "not-a-port"}})
        with pytest.raises(ConfigurationError, match="Invalid viewer settings: port"):
            load_settings()

    def test_save_strips_secrets(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DOCBOT_TARGET_PASSWORD", "pw")
        monkeypatch.setenv("DOCBOT_TARGET_DOCS_SECRET", "secret")
        path = load_settings().save(tmp_path / "saved.json")

        data = json.loads(path.read_text())
        assert "password" not in data["target"]
        assert "docs_secret" not in data["target"]
        assert data["target"]["base_url"] == "http://localhost:3000"


class TestAuthConfig:
    def test_missing_credentials_listed(self):
        with pytest.raises(ConfigurationError, match="DOCBOT_TARGET_EMAIL, DOCBOT_TARGET_PASSWORD"):
            AppSettings().validate_auth_config()

    def test_complete_credentials(self, monkeypatch):
        monkeypatch.setenv("DOCBOT_TARGET_EMAIL", "docs@example.com")
        monkeypatch.setenv("DOCBOT_TARGET_PASSWORD", "pw")
        load_settings().validate_auth_config()

    def test_has_auth_state(self, settings):
        assert settings.has_auth_state() is False
        settings.output.auth_file.parent.mkdir(parents=True)
        settings.output.auth_file.write_text("{}")
        assert settings.has_auth_state() is True
