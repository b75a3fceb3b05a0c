from __future__ import annotations

import pytest

from postreward import constants as const
from postreward.inputs import ConfigurationError
from postreward.model import compute_full_model


def test_reference_scenario_meets_fee_only_target(scenario_inputs):
    out = compute_full_model(scenario_inputs, False)
    target = 0.65 * 100_000 * 3.125 * 144 / 1.03

    assert out.solver_info.target_met
    assert abs(out.daily_fee_revenue_usd - target) / target <= 0.0025
    assert out.security_budget_target_usd == pytest.approx(0.65 * 45_000_000)
    assert out.reward_usd_per_day == 0.0
    assert out.current_hashrate_th == const.REFERENCE_NETWORK_HASHRATE_TH


def test_reward_inclusion_is_strictly_additive(scenario_inputs):
    fee_only = compute_full_model(scenario_inputs, include_block_rewards=False)
    today = compute_full_model(scenario_inputs, include_block_rewards=True)

    assert today.network_revenue_usd > fee_only.network_revenue_usd
    assert today.equilibrium_hashrate_th > fee_only.equilibrium_hashrate_th
    assert today.network_revenue_usd - fee_only.network_revenue_usd == pytest.approx(45_000_000)
    # The fee market itself does not depend on the subsidy.
    assert today.optimal_feerate == fee_only.optimal_feerate


def test_doubling_pool_share_doubles_pool_figures(scenario_inputs):
    base = compute_full_model(scenario_inputs)
    doubled = compute_full_model(scenario_inputs.replace(pool_share=0.016))

    assert doubled.pool_daily_revenue_usd == pytest.approx(2 * base.pool_daily_revenue_usd)
    assert doubled.pool_daily_expenses_usd == pytest.approx(2 * base.pool_daily_expenses_usd)
    assert doubled.equilibrium_hashrate_th == base.equilibrium_hashrate_th


def test_compute_full_model_is_idempotent(scenario_inputs):
    assert compute_full_model(scenario_inputs, True) == compute_full_model(scenario_inputs, True)


def test_cross_equation_identities(scenario_inputs):
    out = compute_full_model(scenario_inputs)
    assert out.fees_per_block_usd * 144 == pytest.approx(out.daily_fee_revenue_usd, abs=0.01)
    assert out.fees_per_block_btc * scenario_inputs.btc_price == pytest.approx(
        out.fees_per_block_usd, abs=0.01
    )
    assert out.daily_fee_revenue_btc * scenario_inputs.btc_price == pytest.approx(
        out.daily_fee_revenue_usd, abs=0.01
    )


def test_pool_margin_and_break_even_follow_required_margin(scenario_inputs):
    out = compute_full_model(scenario_inputs)
    # Hashrate settles where revenue = cost * (1 + margin).
    assert out.pool_profit_margin.value == pytest.approx(0.107 / 1.107)
    assert out.break_even_btc_price.value == pytest.approx(100_000 * 1.03 / 1.107)


def test_attack_cost_and_settlement_ratio(scenario_inputs):
    out = compute_full_model(scenario_inputs)
    expected = 0.51 * out.equilibrium_hashrate_th * 0.06 * 6
    assert out.attack_cost_6h_usd == pytest.approx(expected)
    assert out.attack_cost_as_percent_of_settlement == pytest.approx(expected / 8e9 * 100)

    no_settlement = compute_full_model(scenario_inputs.replace(settlement_usd_day=None))
    assert no_settlement.attack_cost_as_percent_of_settlement == 0.0


def test_transaction_flow_fields(scenario_inputs):
    out = compute_full_model(scenario_inputs)
    assert out.confirmed_vb_per_day == pytest.approx(out.demand_vb_per_day)
    assert out.avg_confirmation_time_min == 10.0
    assert out.backlog_vb == pytest.approx(25_000_000)
    assert out.avg_fee_per_tx_usd == pytest.approx(out.optimal_feerate * 210 / 1e8 * 100_000)


def test_unreachable_target_degrades_without_raising(scenario_inputs):
    inputs = scenario_inputs.replace(
        block_limit_mb=0.001, security_budget_mode="absolute_usd", absolute_usd_day=1e15
    )
    out = compute_full_model(inputs)
    assert not out.solver_info.target_met
    assert out.optimal_feerate == const.SOLVER_MAX_FEERATE
    assert out.consistency_failures == ()


def test_custom_current_hashrate(scenario_inputs):
    equilibrium = compute_full_model(scenario_inputs).equilibrium_hashrate_th
    out = compute_full_model(scenario_inputs, current_hashrate_th=equilibrium / 2)
    assert out.hashrate_sustainability_ratio == pytest.approx(2.0)


def test_missing_mode_field_fails_synchronously(scenario_inputs):
    with pytest.raises(ConfigurationError):
        compute_full_model(scenario_inputs.replace(alpha=None))


def test_invalid_numeric_input_is_rejected(scenario_inputs):
    with pytest.raises(ConfigurationError, match="btc_price"):
        compute_full_model(scenario_inputs.replace(btc_price=0))


def test_to_dict_is_flat_mapping(scenario_inputs):
    payload = compute_full_model(scenario_inputs).to_dict()
    assert payload["solver_info"]["target_met"] is True
    assert payload["pool_profit_margin"]["value"] == pytest.approx(0.107 / 1.107)
    assert payload["consistency_failures"] == []
