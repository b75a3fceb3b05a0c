"""Fee-market snapshot analysis and simple fee projections.

These helpers work from observed network figures (average feerate, mempool
size, block size) rather than the demand curve, and are used to put the
solver's equilibrium in context.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Iterable, Mapping

import pandas as pd

from . import constants as const
from .units import sats_to_btc, usd


@dataclass(frozen=True)
class FeeMetrics:
    current_fee_rate: float
    current_mempool_size: int
    current_block_size: float
    low_priority_fee: float
    medium_priority_fee: float
    high_priority_fee: float
    fees_per_block_btc: float
    fees_per_block_usd: float
    daily_fee_revenue_usd: float
    fee_market_depth_usd: float
    avg_transaction_size: float
    avg_fee_per_transaction_usd: float
    required_fee_rate: float
    fee_multiplier_needed: float
    sustainable_tx_throughput: float


@dataclass(frozen=True)
class FeeScenario:
    name: str
    demand_multiplier: float
    fee_multiplier: float


def analyze_fee_market(
    *,
    avg_fee_rate: float,
    mempool_size: int,
    block_size: float,
    btc_price: float,
    target_security_budget: float = const.DEFAULT_SECURITY_BUDGET_USD_DAY,
) -> FeeMetrics:
    """Summarise current fee conditions and what a fee-only budget would need.

    Args:
        avg_fee_rate: Observed average feerate (sat/vB)
        mempool_size: Unconfirmed transaction count
        block_size: Block size in bytes
        btc_price: BTC/USD price
        target_security_budget: Required miner revenue (USD/day)
    """
    if avg_fee_rate <= 0:
        raise ValueError(f"avg_fee_rate must be positive, got {avg_fee_rate}")
    if block_size <= 0:
        raise ValueError(f"block_size must be positive, got {block_size}")

    low = max(1.0, avg_fee_rate * const.LOW_PRIORITY_FEE_MULTIPLIER)
    high = avg_fee_rate * const.HIGH_PRIORITY_FEE_MULTIPLIER

    fees_per_block_btc = sats_to_btc(avg_fee_rate * block_size)
    fees_per_block_usd = usd(fees_per_block_btc, btc_price)
    daily_revenue = fees_per_block_usd * const.BLOCKS_PER_DAY

    tx_size = const.SNAPSHOT_AVG_TX_BYTES
    txs_per_block = math.floor(block_size / tx_size)
    avg_fee_per_tx = fees_per_block_usd / txs_per_block if txs_per_block else 0.0

    mempool_feerate = avg_fee_rate * const.MEMPOOL_FEERATE_DISCOUNT
    depth_usd = usd(sats_to_btc(mempool_feerate * mempool_size * tx_size), btc_price)

    required_per_block_btc = target_security_budget / const.BLOCKS_PER_DAY / btc_price
    required_fee_rate = required_per_block_btc * const.SATS_PER_BTC / block_size
    multiplier = required_fee_rate / avg_fee_rate

    fee_increase = max(0.0, multiplier - 1)
    reduction = min(
        const.MAX_DEMAND_REDUCTION, abs(const.SNAPSHOT_DEMAND_ELASTICITY * fee_increase)
    )
    base_tps = txs_per_block * const.BLOCKS_PER_DAY / 86_400
    sustainable_tps = max(const.MIN_SUSTAINABLE_TPS, base_tps * (1 - reduction))

    return FeeMetrics(
        current_fee_rate=avg_fee_rate,
        current_mempool_size=mempool_size,
        current_block_size=block_size,
        low_priority_fee=low,
        medium_priority_fee=avg_fee_rate,
        high_priority_fee=high,
        fees_per_block_btc=fees_per_block_btc,
        fees_per_block_usd=fees_per_block_usd,
        daily_fee_revenue_usd=daily_revenue,
        fee_market_depth_usd=depth_usd,
        avg_transaction_size=tx_size,
        avg_fee_per_transaction_usd=avg_fee_per_tx,
        required_fee_rate=required_fee_rate,
        fee_multiplier_needed=multiplier,
        sustainable_tx_throughput=sustainable_tps,
    )


DEFAULT_FEE_SCENARIOS: tuple[FeeScenario, ...] = (
    FeeScenario("Current", 1.0, 1.0),
    FeeScenario("Moderate growth", 1.5, 2.0),
    FeeScenario("High demand", 2.5, 5.0),
    FeeScenario("Fee-only security", 3.0, 10.0),
)


def build_fee_scenarios(
    *,
    base_fee_rate: float,
    btc_price: float,
    block_size: float,
    scenarios: Iterable[FeeScenario | Mapping[str, object]] = DEFAULT_FEE_SCENARIOS,
) -> pd.DataFrame:
    """Tabulate per-block and daily revenue for named fee/demand multipliers."""
    records = []
    for raw in scenarios:
        scenario = raw if isinstance(raw, FeeScenario) else FeeScenario(**raw)
        if scenario.demand_multiplier <= 0:
            raise ValueError(
                f"demand_multiplier must be positive, got {scenario.demand_multiplier}"
            )
        fee_rate = base_fee_rate * scenario.fee_multiplier
        per_block = usd(sats_to_btc(fee_rate * block_size), btc_price)
        records.append(
            {
                "name": scenario.name,
                "fee_rate": fee_rate,
                "fees_per_block_usd": per_block,
                "daily_revenue_usd": per_block * const.BLOCKS_PER_DAY,
                "demand_multiplier": scenario.demand_multiplier,
                "avg_confirm_time_min": max(
                    float(const.BLOCK_INTERVAL_MINUTES),
                    600 / (7 * scenario.demand_multiplier),
                ),
            }
        )
    return pd.DataFrame(records)


def project_fee_market(
    *,
    current_fee_rate: float,
    btc_price: float,
    block_size: float,
    years_to_project: int,
    annual_demand_growth: float,
    fee_elasticity: float,
    start_year: int | None = None,
) -> pd.DataFrame:
    """Project feerates assuming fees rise to keep block space scarce.

    Demand compounds at ``annual_demand_growth``; the feerate needed to ration
    it scales as demand ** |1 / elasticity|.
    """
    if fee_elasticity == 0:
        raise ValueError("fee_elasticity must be non-zero")
    if years_to_project < 0:
        raise ValueError(f"years_to_project must be non-negative, got {years_to_project}")
    first_year = start_year if start_year is not None else datetime.now(UTC).year

    records = []
    for offset in range(years_to_project + 1):
        demand_growth = (1 + annual_demand_growth) ** offset
        fee_rate = current_fee_rate * demand_growth ** abs(1 / fee_elasticity)
        per_block = usd(sats_to_btc(fee_rate * block_size), btc_price)
        records.append(
            {
                "year": first_year + offset,
                "fee_rate": fee_rate,
                "fees_per_block_usd": per_block,
                "daily_revenue_usd": per_block * const.BLOCKS_PER_DAY,
                "demand_multiplier": demand_growth,
            }
        )
    return pd.DataFrame(records)


def fee_efficiency(fee_rate: float, confirmation_time: float, target_time: float) -> float:
    """Time efficiency divided by relative fee paid (base 10 sat/vB)."""
    if fee_rate <= 0 or confirmation_time <= 0:
        raise ValueError("fee_rate and confirmation_time must be positive")
    time_efficiency = target_time / confirmation_time
    cost_efficiency = const.BASE_EFFICIENCY_FEERATE / fee_rate
    return time_efficiency * cost_efficiency
