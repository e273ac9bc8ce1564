"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
from typing import Any, Optional

import pytest

from Cordlink.core.bootstrap import SessionBootstrapper


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, *, headers: Optional[dict] = None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json body")
        return self._payload


class FakeHttpClient:
    """Stands in for a curl_cffi/requests session; replays queued responses."""

    def __init__(self, responses=None) -> None:
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    def queue(self, *items) -> "FakeHttpClient":
        self.responses.extend(items)
        return self

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "headers": headers, "timeout": timeout})
        if not self.responses:
            raise AssertionError(f"unexpected request {method} {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def bootstrapper(http_client: FakeHttpClient) -> SessionBootstrapper:
    return SessionBootstrapper(http_factory=lambda: http_client)


@pytest.fixture
def strict_bootstrapper(http_client: FakeHttpClient) -> SessionBootstrapper:
    return SessionBootstrapper(
        {"auth": {"strict_second_factor": True}},
        http_factory=lambda: http_client,
    )
