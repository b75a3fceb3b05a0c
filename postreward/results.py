"""Result records produced by the solver and the full model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Metric:
    """A ratio that may be undefined (zero or negative denominator).

    Attributes:
        value: Numeric value when defined, else None
        reason: Why the metric is undefined, else None
    """

    value: float | None
    reason: str | None = None

    @classmethod
    def of(cls, value: float) -> "Metric":
        return cls(value=float(value))

    @classmethod
    def undefined(cls, reason: str) -> "Metric":
        return cls(value=None, reason=reason)

    @property
    def defined(self) -> bool:
        return self.value is not None

    def value_or(self, default: float) -> float:
        return self.value if self.value is not None else default


@dataclass(frozen=True)
class SolverResult:
    feerate: float
    target_met: bool
    gap: float
    actual_revenue: float
    achieved_fees_usd: float
    confirmed_demand_mb_day: float
    target_fees_usd: float
    iterations: int


@dataclass(frozen=True)
class ConsistencyFailure:
    label: str
    actual: float
    expected: float
    diff: float
    tolerance: float


@dataclass(frozen=True)
class EconomicOutputs:
    # Fee market
    optimal_feerate: float
    daily_fee_revenue_btc: float
    daily_fee_revenue_usd: float
    fees_per_block_btc: float
    fees_per_block_usd: float
    avg_fee_per_tx_usd: float

    # Transaction flow
    demand_vb_per_day: float
    confirmed_vb_per_day: float
    backlog_vb: float
    avg_confirmation_time_min: float

    # Mining and security
    equilibrium_hashrate_th: float
    reward_usd_per_day: float
    network_revenue_usd: float
    security_budget_target_usd: float
    attack_cost_6h_usd: float
    attack_cost_as_percent_of_settlement: float

    # Pool
    pool_daily_revenue_usd: float
    pool_daily_expenses_usd: float
    pool_daily_profit_usd: float
    pool_profit_margin: Metric

    # Break-even
    break_even_btc_price: Metric
    hashrate_sustainability_ratio: float
    current_hashrate_th: float

    solver_info: SolverResult
    consistency_failures: tuple[ConsistencyFailure, ...] = field(default_factory=tuple)

    @property
    def consistent(self) -> bool:
        return not self.consistency_failures

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["consistency_failures"] = list(payload["consistency_failures"])
        return payload
