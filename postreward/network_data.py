"""Live network figures used to seed model inputs.

Each figure is fetched from a chain of providers and falls back to a
documented constant when every provider fails, so callers always receive a
complete (possibly stale) snapshot. Responses are held in an explicit
``TTLCache`` whose clock is injectable for tests.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import requests

from . import config as cfg
from . import constants as const
from .config import DEFAULT_RETRY_CONFIG, RetryConfig
from .http_utils import RequestOptions, TransientHTTPError, build_session, fetch_json
from .inputs import EconomicInputs
from .units import hashes_to_th

logger = logging.getLogger(__name__)

PROVIDER_ERRORS = (
    requests.RequestException,
    TransientHTTPError,
    RuntimeError,
    ValueError,
    KeyError,
    TypeError,
)


class TTLCache:
    """Key/value cache whose entries expire ``ttl_seconds`` after insertion."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be non-negative, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class NetworkStats:
    mempool_tx_count: int = const.FALLBACK_MEMPOOL_TX_COUNT
    mempool_vsize: float | None = None
    avg_fee_rate: float = const.FALLBACK_FEERATE
    hashrate_th: float = hashes_to_th(const.FALLBACK_HASHRATE_H)
    block_height: int = const.FALLBACK_BLOCK_HEIGHT
    sources: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NetworkSnapshot:
    btc_price: float
    price_source: str
    stats: NetworkStats

    @property
    def is_fallback(self) -> bool:
        return self.price_source == "fallback" or not self.stats.sources


class NetworkDataClient:
    """Fetch BTC price and network statistics with provider fallbacks."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        cache: TTLCache | None = None,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
    ):
        self.session = session or build_session(
            {"Accept": "application/json", "User-Agent": "postreward-model/1.0"}
        )
        self.cache = cache if cache is not None else TTLCache(cfg.network_cache_ttl_seconds())
        self.retry_config = retry_config

    def _get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return fetch_json(
            RequestOptions(session=self.session, url=url, params=params),
            retry_config=self.retry_config,
        )

    def _price_coingecko(self) -> float:
        payload = self._get(
            f"{cfg.COINGECKO_BASE}/simple/price",
            params={"ids": "bitcoin", "vs_currencies": "usd"},
        )
        return float(payload["bitcoin"]["usd"])

    def _price_coinbase(self) -> float:
        payload = self._get(f"{cfg.COINBASE_BASE}/exchange-rates", params={"currency": "BTC"})
        return float(payload["data"]["rates"]["USD"])

    def get_btc_price(self) -> tuple[float, str]:
        """Return (price, source). Fallback prices are not cached."""
        cached = self.cache.get("price")
        if cached is not None:
            return cached

        providers = (("coingecko", self._price_coingecko), ("coinbase", self._price_coinbase))
        for name, fetch in providers:
            try:
                price = fetch()
            except PROVIDER_ERRORS as exc:
                logger.warning("BTC price provider %s failed: %s", name, exc)
                continue
            if price > const.MIN_PLAUSIBLE_BTC_PRICE:
                logger.info("BTC price %.2f from %s", price, name)
                self.cache.set("price", (price, name))
                return price, name
            logger.warning("Rejecting implausible BTC price %.2f from %s", price, name)

        logger.warning("All price providers failed; using fallback %.0f", const.FALLBACK_BTC_PRICE)
        return const.FALLBACK_BTC_PRICE, "fallback"

    def get_network_stats(self) -> NetworkStats:
        cached = self.cache.get("network")
        if cached is not None:
            return cached

        values: dict[str, Any] = {}
        sources: list[str] = []

        try:
            mempool = self._get(f"{cfg.MEMPOOL_BASE}/mempool")
            values["mempool_tx_count"] = int(mempool["count"])
            if mempool.get("vsize") is not None:
                values["mempool_vsize"] = float(mempool["vsize"])
            sources.append("mempool.space/mempool")
        except PROVIDER_ERRORS as exc:
            logger.warning("Mempool size unavailable, using fallback data: %s", exc)

        try:
            fees = self._get(f"{cfg.MEMPOOL_BASE}/v1/fees/recommended")
            values["avg_fee_rate"] = float(fees["halfHourFee"])
            sources.append("mempool.space/fees")
        except PROVIDER_ERRORS as exc:
            logger.warning("Fee estimate unavailable, using fallback data: %s", exc)

        try:
            mining = self._get(f"{cfg.MEMPOOL_BASE}/v1/mining/hashrate/3d")
            values["hashrate_th"] = hashes_to_th(float(mining["currentHashrate"]))
            sources.append("mempool.space/hashrate")
        except PROVIDER_ERRORS as exc:
            logger.warning("Hashrate unavailable, using fallback data: %s", exc)

        try:
            values["block_height"] = int(self._get(f"{cfg.BLOCKSTREAM_BASE}/blocks/tip/height"))
            sources.append("blockstream/tip")
        except PROVIDER_ERRORS as exc:
            logger.warning("Block height unavailable, using fallback data: %s", exc)

        stats = NetworkStats(**values, sources=tuple(sources))
        self.cache.set("network", stats)
        return stats

    def snapshot(self) -> NetworkSnapshot:
        price, source = self.get_btc_price()
        return NetworkSnapshot(btc_price=price, price_source=source, stats=self.get_network_stats())


def seed_inputs(inputs: EconomicInputs, snapshot: NetworkSnapshot) -> EconomicInputs:
    """Return inputs with price, baseline feerate and backlog taken from a snapshot."""
    stats = snapshot.stats
    backlog = (
        stats.mempool_vsize
        if stats.mempool_vsize is not None
        else stats.mempool_tx_count * inputs.avg_tx_vb
    )
    return inputs.replace(
        btc_price=snapshot.btc_price,
        baseline_feerate=max(stats.avg_fee_rate, const.SOLVER_MIN_FEERATE),
        backlog_vb=backlog,
    )
