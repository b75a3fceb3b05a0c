from __future__ import annotations

import pytest

from postreward.inputs import ConfigurationError, EconomicInputs, SecurityBudgetMode
from postreward.security_budget import security_budget_target_usd


def test_percent_of_2025(scenario_inputs):
    assert security_budget_target_usd(scenario_inputs) == pytest.approx(0.65 * 45_000_000)


def test_percent_of_settlement_value(scenario_inputs):
    inputs = scenario_inputs.replace(
        security_budget_mode=SecurityBudgetMode.PERCENT_OF_SETTLEMENT_VALUE,
        beta=0.003,
        settlement_usd_day=8_000_000_000,
    )
    assert security_budget_target_usd(inputs) == pytest.approx(24_000_000)


def test_absolute_usd_accepts_mode_string(scenario_inputs):
    inputs = scenario_inputs.replace(security_budget_mode="absolute_usd", absolute_usd_day=25e6)
    assert inputs.security_budget_mode is SecurityBudgetMode.ABSOLUTE_USD
    assert security_budget_target_usd(inputs) == 25e6


def test_missing_mode_field_is_configuration_error(scenario_inputs):
    inputs = scenario_inputs.replace(security_budget_mode="percent_of_settlement_value", beta=None)
    with pytest.raises(ConfigurationError, match="beta"):
        security_budget_target_usd(inputs)
    with pytest.raises(ConfigurationError, match="beta"):
        inputs.validate()


def test_unknown_mode_fails_fast(scenario_inputs):
    with pytest.raises(ConfigurationError, match="security_budget_mode"):
        scenario_inputs.replace(security_budget_mode="percent_of_gdp")


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)
    with pytest.raises(ValueError):
        EconomicInputs(
            btc_price=1,
            block_limit_mb=1,
            baseline_feerate=1,
            baseline_demand_vb_day=1,
            elasticity=0,
            mev_uplift=0,
            cost_per_th_day=1,
            margin=0,
            pool_share=1,
            avg_tx_vb=1,
            backlog_vb=0,
            security_budget_mode="bogus",
        )
