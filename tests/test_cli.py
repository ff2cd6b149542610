"""Tests for cli.py."""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from okta_session.cli import app
from okta_session.exceptions import SessionLoopError

runner = CliRunner()


@pytest.fixture(autouse=True)
def env(monkeypatch, tmp_path, cache_file):
    monkeypatch.chdir(tmp_path)
    for name in ("OKTA_URL", "OKTA_APP_ID", "OKTA_SERVICE_HOST", "OKTA_FACTOR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("OKTA_SESSION_CACHE", str(cache_file))


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("OKTA_URL", "https://okta.example.com")
    monkeypatch.setenv("OKTA_APP_ID", "app/x/sso/saml")
    monkeypatch.setenv("OKTA_SERVICE_HOST", "app.example.com")


class TestCookiesCommand:
    def test_no_cache(self):
        result = runner.invoke(app, ["cookies"])
        assert result.exit_code == 0
        assert "No cached session" in result.output

    def test_lists_hosts(self, cache_file):
        cache_file.write_text(json.dumps({"app.example.com": {"app_session": "v", "xsrf": "t"}}))
        result = runner.invoke(app, ["cookies"])
        assert result.exit_code == 0
        assert "app.example.com" in result.output
        assert "app_session" in result.output

    def test_malformed_cache(self, cache_file):
        cache_file.write_text("not json")
        result = runner.invoke(app, ["cookies"])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output


class TestForgetCommand:
    def test_forget_all(self, cache_file):
        cache_file.write_text(json.dumps({"a.example.com": {"x": "1"}}))
        result = runner.invoke(app, ["forget"])
        assert result.exit_code == 0
        assert not cache_file.exists()

    def test_forget_host(self, cache_file):
        cache_file.write_text(json.dumps({"a.example.com": {"x": "1"}, "b.example.com": {"y": "2"}}))
        result = runner.invoke(app, ["forget", "a.example.com"])
        assert result.exit_code == 0
        assert json.loads(cache_file.read_text()) == {"b.example.com": {"y": "2"}}


class TestGetCommand:
    def test_missing_config(self):
        result = runner.invoke(app, ["get", "api/me"])
        assert result.exit_code == 1
        assert "OKTA_URL" in result.output

    @patch("okta_session.cli.OktaSession")
    def test_prints_body(self, mock_session_cls, configured):
        mock_resp = MagicMock(text='{"name": "jane"}', is_error=False)
        mock_session_cls.return_value.get.return_value = mock_resp

        result = runner.invoke(app, ["get", "api/me"])

        assert result.exit_code == 0
        assert '{"name": "jane"}' in result.output
        mock_session_cls.return_value.get.assert_called_once_with("api/me")

    @patch("okta_session.cli.OktaSession")
    def test_writes_output_file(self, mock_session_cls, configured, tmp_path):
        mock_resp = MagicMock(content=b"\x00\x01binary", is_error=False)
        mock_session_cls.return_value.get.return_value = mock_resp
        out = tmp_path / "download.bin"

        result = runner.invoke(app, ["get", "export.zip", "--output", str(out)])

        assert result.exit_code == 0
        assert out.read_bytes() == b"\x00\x01binary"

    @patch("okta_session.cli.OktaSession")
    def test_session_error(self, mock_session_cls, configured):
        mock_session_cls.return_value.get.side_effect = SessionLoopError("still signed out")

        result = runner.invoke(app, ["get", "api/me"])

        assert result.exit_code == 1
        assert "still signed out" in result.output

    def test_malformed_cache(self, configured, cache_file):
        cache_file.write_text("not json")

        result = runner.invoke(app, ["get", "api/me"])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestLoginCommand:
    @patch("okta_session.cli.OktaSession")
    def test_establishes_session(self, mock_session_cls, configured):
        result = runner.invoke(app, ["login"])
        assert result.exit_code == 0
        mock_session_cls.return_value.establish_session.assert_called_once_with()

    def test_malformed_cache(self, configured, cache_file):
        cache_file.write_text("[1, 2]")

        result = runner.invoke(app, ["login"])

        assert result.exit_code == 1
        assert "JSON object" in result.output
