"""Tests for CLI commands that do not need a browser."""

import pytest
from typer.testing import CliRunner

from docbot.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DOCBOT_OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.setenv("DOCBOT_OUTPUT_STATE_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("DOCBOT_VIEWER_GUIDES_DIR", str(tmp_path / "published"))


class TestCli:
    def test_list(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Registered flows: 21" in result.output
        assert "auth-login: How to Log In to TERP (no auth)" in result.output
        assert "tags: login, authentication, getting-started" in result.output

    def test_seed_samples(self, tmp_path):
        result = runner.invoke(app, ["seed-samples"])
        assert result.exit_code == 0
        assert "Wrote 3 sample guides" in result.output
        assert (tmp_path / "published" / "login-to-terp.json").exists()

    def test_config_hides_secrets(self, monkeypatch):
        monkeypatch.setenv("DOCBOT_TARGET_PASSWORD", "hunter2")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Password: (set)" in result.output
        assert "hunter2" not in result.output

    def test_report(self):
        result = runner.invoke(app, ["report"])
        assert result.exit_code == 0
        assert "Total flows registered: 21" in result.output
        assert "Documentation coverage: 0.0%" in result.output

    def test_run_with_no_matching_flows(self):
        result = runner.invoke(app, ["run", "--id", "does-not-exist"])
        assert result.exit_code == 0
        assert "Total:      0" in result.output

    def test_auth_requires_credentials(self):
        result = runner.invoke(app, ["auth"])
        assert result.exit_code == 1
        assert "DOCBOT_TARGET_EMAIL" in result.output

    def test_invalid_config_file_is_one_line_error(self, tmp_path):
        (tmp_path / "config.json").write_text('{"viewer": {"port": "not-a-port"}}')
        result = runner.invoke(app, ["report"])
        assert result.exit_code == 1
        assert "Error: Invalid viewer settings: port" in result.output
