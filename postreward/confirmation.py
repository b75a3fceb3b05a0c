"""Backlog and average confirmation time from demand vs. supply.

This is a linear backlog-clearing approximation with empirically chosen
constants (10-minute floor, ``* 10 * 60`` scaling), not a queueing model.
"""

from __future__ import annotations

from . import constants as const
from .demand import confirmed_vb_per_day, demand_vb_per_day, supply_vb_per_day
from .inputs import EconomicInputs


def backlog_after_day(feerate: float, inputs: EconomicInputs) -> float:
    """Unconfirmed bytes left after one day at ``feerate``."""
    demand = demand_vb_per_day(feerate, inputs)
    confirmed = confirmed_vb_per_day(feerate, inputs)
    return max(0.0, inputs.backlog_vb + demand - confirmed)


def calculate_confirmation_time(feerate: float, inputs: EconomicInputs) -> float:
    """Average confirmation time in minutes."""
    demand = demand_vb_per_day(feerate, inputs)
    supply = supply_vb_per_day(inputs)
    if demand <= supply:
        return float(const.BLOCK_INTERVAL_MINUTES)
    backlog = inputs.backlog_vb + (demand - supply)
    return max(float(const.BLOCK_INTERVAL_MINUTES), (backlog / supply) * 10 * 60)
