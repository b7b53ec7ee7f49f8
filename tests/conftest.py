"""
Pytest configuration for pinboard-poster tests.

Isolates every test from the developer's environment (token env vars,
`.env`, `local.properties`) and provides a stub HTTP transport.
"""
from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest

from pinboard_poster import PinboardPoster, PosterSettings

TOKEN = "user:0123456789ABCDEF"
DONE_XML = '<?xml version="1.0" encoding="UTF-8" ?>\n<result code="done" />\n'


class StubTransport(httpx.MockTransport):
    """MockTransport that records every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if handler is not None:
                return handler(request)
            return httpx.Response(200, text=DONE_XML)

        super().__init__(_handler)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_params(self) -> httpx.QueryParams:
        return self.requests[-1].url.params


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.upper().startswith("PINBOARD_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def make_poster(transport):
    """Factory for posters wired to the stub transport."""

    created: list[PinboardPoster] = []

    def _make(source=TOKEN, **kwargs) -> PinboardPoster:
        kwargs.setdefault("transport", transport)
        kwargs.setdefault("settings", PosterSettings())
        poster = PinboardPoster(source, **kwargs)
        created.append(poster)
        return poster

    yield _make

    for poster in created:
        poster.close()
