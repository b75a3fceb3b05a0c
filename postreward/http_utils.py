"""HTTP utilities with retry for JSON provider endpoints."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

import requests
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from . import config as cfg
from .config import DEFAULT_RETRY_CONFIG, RetryConfig

logger = logging.getLogger(__name__)


class TransientHTTPError(Exception):
    """Raised when the upstream service indicates a retryable failure."""


def build_session(default_headers: Mapping[str, str] | None = None) -> requests.Session:
    session = requests.Session()
    if default_headers:
        session.headers.update(default_headers)
    return session


@dataclass
class RequestOptions:
    session: requests.Session
    url: str
    method: str = "GET"
    params: Mapping[str, Any] | None = None
    headers: MutableMapping[str, str] | None = None
    timeout: float | None = None


def _should_retry(status_code: int, retry_config: RetryConfig = DEFAULT_RETRY_CONFIG) -> bool:
    return status_code in retry_config.status_forcelist


def _retry_condition(exc: BaseException) -> bool:
    return isinstance(exc, TransientHTTPError)


def _request_once(opts: RequestOptions, retry_config: RetryConfig = DEFAULT_RETRY_CONFIG) -> Any:
    timeout = opts.timeout if opts.timeout is not None else cfg.http_timeout_seconds()
    try:
        response = opts.session.request(
            opts.method,
            opts.url,
            params=opts.params,
            headers=opts.headers,
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise TransientHTTPError(f"Request failed: {exc}") from exc

    if _should_retry(response.status_code, retry_config):
        raise TransientHTTPError(f"Status {response.status_code} for {opts.url}")
    response.raise_for_status()
    try:
        return response.json()
    except ValueError as exc:
        raise RuntimeError(f"Non-JSON response from {opts.url}") from exc


def fetch_json(opts: RequestOptions, retry_config: RetryConfig = DEFAULT_RETRY_CONFIG) -> Any:
    """Perform a JSON HTTP request, retrying transient failures."""

    @retry(
        retry=retry_if_exception(_retry_condition),
        wait=wait_exponential_jitter(
            initial=retry_config.wait_min_seconds,
            max=retry_config.wait_max_seconds,
        ),
        stop=stop_after_attempt(retry_config.max_attempts),
        reraise=True,
        before_sleep=lambda retry_state: logger.info(
            "Retrying %s (attempt %d/%d) - %s",
            opts.url,
            retry_state.attempt_number,
            retry_config.max_attempts,
            retry_state.outcome.exception() if retry_state.outcome else "unknown error",
        ),
    )
    def _execute() -> Any:
        return _request_once(opts, retry_config)

    return _execute()
