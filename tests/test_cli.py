"""Tests for the pinboard-poster CLI."""
from __future__ import annotations

import logging

import pytest
from typer.testing import CliRunner

from conftest import StubTransport
from pinboard_poster import PinboardPoster
from pinboard_poster.adapters import pinboard as pinboard_module
from pinboard_poster.cli.main import app

runner = CliRunner()


@pytest.fixture
def stub_transport(monkeypatch):
    """Route every client the CLI builds through a stub transport."""

    stub = StubTransport()
    real_build_client = pinboard_module.build_client

    def _build_client(settings=None, *, transport=None, extra_headers=None):
        return real_build_client(settings, transport=stub, extra_headers=extra_headers)

    monkeypatch.setattr(pinboard_module, "build_client", _build_client)
    return stub


class TestAdd:
    def test_add(self, stub_transport):
        result = runner.invoke(
            app,
            ["add", "https://example.com/x", "Example", "-t", "test", "-t", "cli", "--token", "user:ABC"],
        )

        assert result.exit_code == 0, result.output
        assert "Added" in result.output
        params = stub_transport.last_params
        assert params["tags"] == "test cli"
        assert params["auth_token"] == "user:ABC"

    def test_add_private_to_read(self, stub_transport):
        result = runner.invoke(
            app,
            ["add", "https://example.com/x", "Example", "--private", "--to-read", "--no-replace", "--token", "u:T"],
        )

        assert result.exit_code == 0, result.output
        params = stub_transport.last_params
        assert (params["shared"], params["toread"], params["replace"]) == ("no", "yes", "no")

    def test_add_invalid_url(self, stub_transport):
        result = runner.invoke(app, ["add", "not-a-url", "Example", "--token", "user:ABC"])

        assert result.exit_code == 1
        assert "validation" in result.output
        assert stub_transport.calls == 0

    def test_add_without_token(self, stub_transport):
        result = runner.invoke(app, ["add", "https://example.com/x", "Example"])

        assert result.exit_code == 1
        assert "configuration" in result.output
        assert stub_transport.calls == 0


class TestDelete:
    def test_delete_with_default_properties(self, stub_transport, isolated_env):
        (isolated_env / "local.properties").write_text("pinboard_api_token=file:TOKEN\n", encoding="utf-8")

        result = runner.invoke(app, ["delete", "https://example.com/x"])

        assert result.exit_code == 0, result.output
        assert "Deleted" in result.output
        assert stub_transport.last_params["auth_token"] == "file:TOKEN"

    def test_delete_env_token(self, stub_transport, monkeypatch):
        monkeypatch.setenv("PINBOARD_API_TOKEN", "env:TOKEN")

        result = runner.invoke(app, ["delete", "https://example.com/x"])

        assert result.exit_code == 0, result.output
        assert stub_transport.last_params["auth_token"] == "env:TOKEN"


class TestConfig:
    def test_config_redacts_token(self):
        result = runner.invoke(app, ["config", "--token", "user:SUPERSECRET"])

        assert result.exit_code == 0, result.output
        assert "SUPERSECRET" not in result.output
        assert "user:****" in result.output

    def test_config_missing_token(self):
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 1
        assert "MISSING" in result.output


class TestVerbose:
    def test_verbose_shows_http_exchange(self, stub_transport):
        result = runner.invoke(app, ["delete", "https://example.com/x", "--token", "user:SUPERSECRET", "--verbose"])

        assert result.exit_code == 0, result.output
        assert "HTTP Result" in result.output
        assert "SUPERSECRET" not in result.output

    def test_verbose_leaves_package_logger_alone(self, stub_transport, caplog):
        runner.invoke(app, ["delete", "not-a-url", "--token", "u:T", "--verbose"])

        package_logger = logging.getLogger("pinboard_poster.adapters.pinboard")
        assert package_logger.propagate is True
        assert package_logger.handlers == []

        poster = PinboardPoster("u:T", transport=stub_transport)
        with caplog.at_level(logging.ERROR, logger="pinboard_poster"):
            assert poster.delete_pin("") is False
        poster.close()

        assert "valid URL" in caplog.text
