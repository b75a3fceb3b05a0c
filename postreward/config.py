"""Configuration helpers for the post-reward fee model."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

COINGECKO_BASE = os.getenv("COINGECKO_BASE", "https://api.coingecko.com/api/v3")
COINBASE_BASE = os.getenv("COINBASE_BASE", "https://api.coinbase.com/v2")
MEMPOOL_BASE = os.getenv("MEMPOOL_BASE", "https://mempool.space/api")
BLOCKSTREAM_BASE = os.getenv("BLOCKSTREAM_BASE", "https://blockstream.info/api")

LOG_LEVEL_ENV = "POSTREWARD_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class RetryConfig:
    """Settings for HTTP retry/backoff behaviour."""

    wait_min_seconds: float = 0.5
    wait_max_seconds: float = 4.0
    max_attempts: int = 3
    status_forcelist: tuple[int, ...] = field(
        default_factory=lambda: (429, 500, 502, 503, 504)
    )


DEFAULT_RETRY_CONFIG = RetryConfig()


def _float_env(name: str, default: float) -> float:
    env_value = os.getenv(name)
    if env_value:
        try:
            return float(env_value)
        except ValueError:
            pass
    return default


def network_cache_ttl_seconds() -> float:
    """TTL applied to live network snapshots (seconds)."""
    return _float_env("NETWORK_CACHE_TTL_SECONDS", 30.0)


def http_timeout_seconds() -> float:
    """Per-request timeout for provider calls (seconds)."""
    return _float_env("HTTP_TIMEOUT_SECONDS", 8.0)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for script entry points."""
    resolved = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(level=getattr(logging, resolved, logging.INFO), format=LOG_FORMAT)
