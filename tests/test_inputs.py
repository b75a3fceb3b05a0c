from __future__ import annotations

import dataclasses

import pytest

from postreward.inputs import (
    PRESET_SCENARIOS,
    ConfigurationError,
    SecurityBudgetMode,
    apply_preset,
    default_inputs,
)


def test_default_inputs_are_valid():
    inputs = default_inputs()
    assert inputs.validate() is inputs
    assert inputs.security_budget_mode is SecurityBudgetMode.PERCENT_OF_2025
    assert inputs.base_2025_revenue_usd == pytest.approx(45_000_000)
    assert inputs.batching_factor == 1.15


def test_inputs_are_immutable():
    inputs = default_inputs()
    with pytest.raises(dataclasses.FrozenInstanceError):
        inputs.btc_price = 1.0  # type: ignore[misc]


def test_replace_returns_new_record():
    inputs = default_inputs()
    changed = inputs.replace(btc_price=50_000)
    assert changed.btc_price == 50_000
    assert inputs.btc_price == 100_000


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("btc_price", -1.0),
        ("block_limit_mb", 0.0),
        ("baseline_feerate", 0.0),
        ("avg_tx_vb", 0.0),
        ("backlog_vb", -1.0),
        ("batching_factor", 0.5),
        ("pool_share", 0.0),
        ("pool_share", 1.5),
        ("mev_uplift", -0.1),
    ],
)
def test_validate_rejects_out_of_range_fields(field, value):
    with pytest.raises(ConfigurationError, match=field):
        default_inputs().replace(**{field: value}).validate()


def test_apply_preset_overrides_only_preset_fields():
    base = default_inputs()
    crisis = apply_preset(base, "crisis")
    assert crisis.btc_price == 25_000
    assert crisis.elasticity == -1.0
    assert crisis.cost_per_th_day == base.cost_per_th_day


def test_all_presets_validate():
    for name in PRESET_SCENARIOS:
        apply_preset(default_inputs(), name).validate()


def test_unknown_preset():
    with pytest.raises(ConfigurationError, match="Unknown preset"):
        apply_preset(default_inputs(), "moonshot")
