from __future__ import annotations

import pytest

from postreward.confirmation import backlog_after_day, calculate_confirmation_time


def test_single_block_when_demand_fits(scenario_inputs):
    assert calculate_confirmation_time(12, scenario_inputs) == 10.0
    assert backlog_after_day(12, scenario_inputs) == pytest.approx(25_000_000)


def test_backlog_clearing_estimate_when_demand_exceeds_supply(scenario_inputs):
    inputs = scenario_inputs.replace(baseline_demand_vb_day=1_000_000_000, elasticity=0.0)
    supply = 576_000_000
    backlog = 25_000_000 + (1_000_000_000 - supply)
    assert calculate_confirmation_time(12, inputs) == pytest.approx(backlog / supply * 600)
    assert backlog_after_day(12, inputs) == pytest.approx(backlog)


def test_confirmation_time_floor(scenario_inputs):
    inputs = scenario_inputs.replace(
        baseline_demand_vb_day=577_000_000, elasticity=0.0, backlog_vb=0.0
    )
    assert calculate_confirmation_time(12, inputs) == 10.0
