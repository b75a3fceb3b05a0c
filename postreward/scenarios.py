"""Scenario tables comparing today's network with the fee-only regime."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from . import constants as const
from .inputs import PRESET_SCENARIOS, EconomicInputs, apply_preset, default_inputs
from .model import compute_full_model
from .results import EconomicOutputs
from .units import pct_change

# (column label, EconomicOutputs attribute) pairs shown in regime comparisons
COMPARISON_FIELDS: tuple[tuple[str, str], ...] = (
    ("Optimal feerate (sat/vB)", "optimal_feerate"),
    ("Daily fee revenue (USD)", "daily_fee_revenue_usd"),
    ("Avg fee per tx (USD)", "avg_fee_per_tx_usd"),
    ("Network revenue (USD/day)", "network_revenue_usd"),
    ("Equilibrium hashrate (TH/s)", "equilibrium_hashrate_th"),
    ("Attack cost 6h (USD)", "attack_cost_6h_usd"),
    ("Pool revenue (USD/day)", "pool_daily_revenue_usd"),
    ("Pool profit (USD/day)", "pool_daily_profit_usd"),
    ("Avg confirmation (min)", "avg_confirmation_time_min"),
    ("Hashrate sustainability ratio", "hashrate_sustainability_ratio"),
)


def solve_regimes(
    inputs: EconomicInputs,
    *,
    current_hashrate_th: float = const.REFERENCE_NETWORK_HASHRATE_TH,
) -> tuple[EconomicOutputs, EconomicOutputs]:
    """Return (current, post_reward) outputs for the same inputs."""
    current = compute_full_model(
        inputs, include_block_rewards=True, current_hashrate_th=current_hashrate_th
    )
    post_reward = compute_full_model(
        inputs, include_block_rewards=False, current_hashrate_th=current_hashrate_th
    )
    return current, post_reward


def compare_regimes(current: EconomicOutputs, post_reward: EconomicOutputs) -> pd.DataFrame:
    """Side-by-side metric table with formatted percentage change."""
    records = []
    for label, attr in COMPARISON_FIELDS:
        now = float(getattr(current, attr))
        later = float(getattr(post_reward, attr))
        records.append(
            {
                "metric": label,
                "current": now,
                "post_reward": later,
                "change": pct_change(later, now),
            }
        )
    return pd.DataFrame(records)


def build_preset_table(
    base: EconomicInputs | None = None,
    presets: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Solve each preset scenario in both regimes."""
    base_inputs = base or default_inputs()
    names = list(presets) if presets else list(PRESET_SCENARIOS)

    records = []
    for name in names:
        scenario_inputs = apply_preset(base_inputs, name)
        for include_rewards in (True, False):
            out = compute_full_model(scenario_inputs, include_block_rewards=include_rewards)
            records.append(
                {
                    "preset": name,
                    "regime": "current" if include_rewards else "post_reward",
                    "btc_price": scenario_inputs.btc_price,
                    "optimal_feerate": out.optimal_feerate,
                    "daily_fee_revenue_usd": out.daily_fee_revenue_usd,
                    "network_revenue_usd": out.network_revenue_usd,
                    "equilibrium_hashrate_th": out.equilibrium_hashrate_th,
                    "pool_daily_profit_usd": out.pool_daily_profit_usd,
                    "target_met": out.solver_info.target_met,
                    "gap": out.solver_info.gap,
                }
            )
    return pd.DataFrame(records)


def build_elasticity_sensitivity(
    inputs: EconomicInputs,
    elasticities: Iterable[float] | None = None,
) -> pd.DataFrame:
    """Fee-only equilibrium across a grid of demand elasticities."""
    grid = (
        np.asarray(list(elasticities), dtype=float)
        if elasticities is not None
        else np.round(np.linspace(-1.0, -0.1, 10), 2)
    )
    records = []
    for elasticity in grid:
        out = compute_full_model(inputs.replace(elasticity=float(elasticity)))
        records.append(
            {
                "elasticity": float(elasticity),
                "optimal_feerate": out.optimal_feerate,
                "confirmed_vb_per_day": out.confirmed_vb_per_day,
                "avg_fee_per_tx_usd": out.avg_fee_per_tx_usd,
                "avg_confirmation_time_min": out.avg_confirmation_time_min,
                "target_met": out.solver_info.target_met,
            }
        )
    return pd.DataFrame(records)
