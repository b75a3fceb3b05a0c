from __future__ import annotations

import pytest
import requests

from postreward import http_utils
from postreward.config import RetryConfig

FAST_RETRY = RetryConfig(wait_min_seconds=0, wait_max_seconds=0, max_attempts=3)

NOT_JSON = object()


class DummyResponse:
    def __init__(self, status_code: int, payload: object):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if self._payload is NOT_JSON:
            raise ValueError("Expecting value")
        return self._payload


class DummySession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = 0

    def request(self, method, url, params=None, headers=None, timeout=None):
        self.calls += 1
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _opts(session):
    return http_utils.RequestOptions(session=session, url="https://example.com", timeout=1)


def test_fetch_json_success():
    session = DummySession([DummyResponse(200, {"value": 1})])
    assert http_utils.fetch_json(_opts(session), retry_config=FAST_RETRY) == {"value": 1}
    assert session.calls == 1


def test_fetch_json_retries_transient_status():
    session = DummySession([DummyResponse(503, {}), DummyResponse(200, {"value": 2})])
    assert http_utils.fetch_json(_opts(session), retry_config=FAST_RETRY) == {"value": 2}
    assert session.calls == 2


def test_fetch_json_gives_up_after_max_attempts():
    session = DummySession([DummyResponse(429, {})] * 3)
    with pytest.raises(http_utils.TransientHTTPError):
        http_utils.fetch_json(_opts(session), retry_config=FAST_RETRY)
    assert session.calls == 3


def test_custom_status_forcelist_controls_retries():
    config = RetryConfig(
        wait_min_seconds=0, wait_max_seconds=0, max_attempts=3, status_forcelist=(522,)
    )
    session = DummySession([DummyResponse(522, {}), DummyResponse(200, {"value": 4})])
    assert http_utils.fetch_json(_opts(session), retry_config=config) == {"value": 4}
    assert session.calls == 2

    # 503 is not in the custom forcelist, so it surfaces immediately
    session = DummySession([DummyResponse(503, {})])
    with pytest.raises(requests.HTTPError):
        http_utils.fetch_json(_opts(session), retry_config=config)
    assert session.calls == 1


def test_connection_errors_are_transient():
    session = DummySession(
        [requests.ConnectionError("boom"), DummyResponse(200, {"value": 3})]
    )
    assert http_utils.fetch_json(_opts(session), retry_config=FAST_RETRY) == {"value": 3}


def test_client_errors_are_not_retried():
    session = DummySession([DummyResponse(404, {})])
    with pytest.raises(requests.HTTPError):
        http_utils.fetch_json(_opts(session), retry_config=FAST_RETRY)
    assert session.calls == 1


def test_non_json_response():
    session = DummySession([DummyResponse(200, NOT_JSON)])
    with pytest.raises(RuntimeError, match="Non-JSON"):
        http_utils.fetch_json(_opts(session), retry_config=FAST_RETRY)
