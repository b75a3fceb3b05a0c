"""Input record for one model run, plus defaults and preset scenarios."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from . import constants as const


class ConfigurationError(ValueError):
    """Raised when an input record cannot define a model run."""


class SecurityBudgetMode(str, Enum):
    """Policy used to derive the USD/day security-budget target."""

    PERCENT_OF_2025 = "percent_of_2025"
    PERCENT_OF_SETTLEMENT_VALUE = "percent_of_settlement_value"
    ABSOLUTE_USD = "absolute_usd"


# Fields that must be set (non-None) for each policy
MODE_REQUIRED_FIELDS: dict[SecurityBudgetMode, tuple[str, ...]] = {
    SecurityBudgetMode.PERCENT_OF_2025: ("alpha", "base_2025_revenue_usd"),
    SecurityBudgetMode.PERCENT_OF_SETTLEMENT_VALUE: ("beta", "settlement_usd_day"),
    SecurityBudgetMode.ABSOLUTE_USD: ("absolute_usd_day",),
}


def coerce_mode(mode: SecurityBudgetMode | str) -> SecurityBudgetMode:
    if isinstance(mode, SecurityBudgetMode):
        return mode
    try:
        return SecurityBudgetMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in SecurityBudgetMode)
        raise ConfigurationError(
            f"Unknown security_budget_mode {mode!r}; expected one of: {valid}"
        ) from None


@dataclass(frozen=True)
class EconomicInputs:
    """Immutable description of one simulation run.

    Attributes:
        btc_price: BTC/USD price
        block_limit_mb: Block-space cap per block (MB)
        baseline_feerate: f0, feerate at which baseline demand is observed (sat/vB)
        baseline_demand_vb_day: Q0, demand at f0 (vB/day)
        elasticity: epsilon, expected negative
        mev_uplift: gamma, non-fee revenue as a fraction of fees
        cost_per_th_day: Operating cost (USD/TH/day)
        margin: mu, required profit over cost
        pool_share: p, share of network hashrate attributed to the pool
        avg_tx_vb: Representative transaction size (vB)
        backlog_vb: Pre-existing unconfirmed backlog (vB)
        security_budget_mode: Active budget policy
        batching_factor: Divides baseline demand (>= 1)
        rent_rate_usd_per_th_hour: Attacker rental price
    """

    btc_price: float
    block_limit_mb: float
    baseline_feerate: float
    baseline_demand_vb_day: float
    elasticity: float
    mev_uplift: float
    cost_per_th_day: float
    margin: float
    pool_share: float
    avg_tx_vb: float
    backlog_vb: float
    security_budget_mode: SecurityBudgetMode = SecurityBudgetMode.PERCENT_OF_2025
    alpha: float | None = None
    base_2025_revenue_usd: float | None = None
    beta: float | None = None
    settlement_usd_day: float | None = None
    absolute_usd_day: float | None = None
    batching_factor: float = 1.0
    value_per_tx_multiplier: float = 1.0
    rent_rate_usd_per_th_hour: float = const.DEFAULT_RENT_RATE_USD_PER_TH_HOUR

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "security_budget_mode", coerce_mode(self.security_budget_mode)
        )

    def replace(self, **overrides: Any) -> "EconomicInputs":
        return dataclasses.replace(self, **overrides)

    def validate(self) -> "EconomicInputs":
        """Check field ranges and mode requirements; return self when valid."""
        for name in (
            "btc_price",
            "block_limit_mb",
            "baseline_feerate",
            "baseline_demand_vb_day",
            "avg_tx_vb",
            "cost_per_th_day",
        ):
            value = getattr(self, name)
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.backlog_vb < 0:
            raise ConfigurationError(f"backlog_vb must be non-negative, got {self.backlog_vb}")
        if self.batching_factor < 1:
            raise ConfigurationError(
                f"batching_factor must be >= 1, got {self.batching_factor}"
            )
        if not (0 < self.pool_share <= 1):
            raise ConfigurationError(f"pool_share must be in (0, 1], got {self.pool_share}")
        if self.mev_uplift < 0:
            raise ConfigurationError(f"mev_uplift must be non-negative, got {self.mev_uplift}")
        if self.margin <= -1:
            raise ConfigurationError(f"margin must be > -1, got {self.margin}")
        missing = [
            name
            for name in MODE_REQUIRED_FIELDS[self.security_budget_mode]
            if getattr(self, name) is None
        ]
        if missing:
            raise ConfigurationError(
                f"security_budget_mode {self.security_budget_mode.value!r} "
                f"requires {', '.join(missing)}"
            )
        return self


def default_inputs() -> EconomicInputs:
    """Reference inputs for the early-2025 network."""
    current_security_budget = (
        const.DEFAULT_BTC_PRICE * const.CURRENT_BLOCK_REWARD_BTC * const.BLOCKS_PER_DAY
    )
    return EconomicInputs(
        btc_price=const.DEFAULT_BTC_PRICE,
        block_limit_mb=const.DEFAULT_BLOCK_LIMIT_MB,
        baseline_feerate=const.DEFAULT_BASELINE_FEERATE,
        baseline_demand_vb_day=const.DEFAULT_BASELINE_DEMAND_VB_DAY,
        elasticity=const.DEFAULT_ELASTICITY,
        mev_uplift=const.DEFAULT_MEV_UPLIFT,
        cost_per_th_day=const.DEFAULT_COST_PER_TH_DAY,
        margin=const.DEFAULT_MARGIN,
        pool_share=const.DEFAULT_POOL_SHARE,
        avg_tx_vb=const.DEFAULT_AVG_TX_VB,
        backlog_vb=const.DEFAULT_BACKLOG_VB,
        security_budget_mode=SecurityBudgetMode.PERCENT_OF_2025,
        alpha=const.DEFAULT_ALPHA,
        base_2025_revenue_usd=current_security_budget,
        beta=const.DEFAULT_BETA,
        settlement_usd_day=const.DEFAULT_SETTLEMENT_USD_DAY,
        absolute_usd_day=const.DEFAULT_ABSOLUTE_USD_DAY,
        batching_factor=const.DEFAULT_BATCHING_FACTOR,
        value_per_tx_multiplier=const.DEFAULT_VALUE_PER_TX_MULTIPLIER,
        rent_rate_usd_per_th_hour=const.DEFAULT_RENT_RATE_USD_PER_TH_HOUR,
    )


# Quick-scenario overrides layered onto a base record
PRESET_SCENARIOS: dict[str, Mapping[str, float]] = {
    "conservative": {
        "btc_price": 50_000.0,
        "baseline_feerate": 10.0,
        "elasticity": -0.2,
        "baseline_demand_vb_day": 200_000_000.0,
        "mev_uplift": 0.02,
    },
    "realistic": {
        "btc_price": 150_000.0,
        "baseline_feerate": 15.0,
        "elasticity": -0.5,
        "baseline_demand_vb_day": 280_000_000.0,
        "mev_uplift": 0.03,
    },
    "optimistic": {
        "btc_price": 300_000.0,
        "baseline_feerate": 25.0,
        "elasticity": -0.8,
        "baseline_demand_vb_day": 400_000_000.0,
        "mev_uplift": 0.05,
    },
    "crisis": {
        "btc_price": 25_000.0,
        "baseline_feerate": 5.0,
        "elasticity": -1.0,
        "baseline_demand_vb_day": 150_000_000.0,
        "mev_uplift": 0.01,
    },
}


def apply_preset(inputs: EconomicInputs, name: str) -> EconomicInputs:
    try:
        overrides = PRESET_SCENARIOS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown preset {name!r}; expected one of: {', '.join(PRESET_SCENARIOS)}"
        ) from None
    return inputs.replace(**overrides)
