from __future__ import annotations

import json

import pytest
import requests

from portfolio.config import AppConfig


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self._text = text

    def json(self):
        if self._text is not None:
            # Same failure requests raises for a non-JSON body
            return json.loads(self._text)
        return self._body


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig(
        backend_url="http://api.test",
        request_timeout=5.0,
        use_sample_content=False,
        theme_store_path=None,
        owner_title="Full‑stack Engineer",
        log_level="INFO",
    )


@pytest.fixture
def fake_backend(monkeypatch):
    """
    Route requests.get by URL path suffix. Values are FakeResponse objects or
    exception instances to raise.
    """
    routes = {}
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append({"url": url, "timeout": timeout})
        for suffix, outcome in routes.items():
            if url.endswith(suffix):
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        raise requests.ConnectionError(f"no route for {url}")

    monkeypatch.setattr(requests, "get", fake_get)
    fake_get.routes = routes
    fake_get.calls = calls
    return fake_get
