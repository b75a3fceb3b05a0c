from __future__ import annotations

import pytest

from postreward.inputs import EconomicInputs


@pytest.fixture()
def scenario_inputs() -> EconomicInputs:
    """Early-2025 reference scenario at 65% of the 2025 security budget."""
    return EconomicInputs(
        btc_price=100_000,
        block_limit_mb=4,
        baseline_feerate=12,
        baseline_demand_vb_day=280_000_000,
        elasticity=-0.5,
        mev_uplift=0.03,
        cost_per_th_day=1.5,
        margin=0.107,
        pool_share=0.008,
        avg_tx_vb=210,
        backlog_vb=25_000_000,
        security_budget_mode="percent_of_2025",
        alpha=0.65,
        base_2025_revenue_usd=100_000 * 3.125 * 144,
        settlement_usd_day=8_000_000_000,
    )
