"""Constant-elasticity block-space demand clipped against supply."""

from __future__ import annotations

from . import constants as const
from .inputs import EconomicInputs


def block_limit_vb(block_limit_mb: float) -> float:
    return block_limit_mb * const.VB_PER_MB


def supply_vb_per_day(inputs: EconomicInputs) -> float:
    """Maximum bytes the chain can confirm per day."""
    return block_limit_vb(inputs.block_limit_mb) * const.BLOCKS_PER_DAY


def demand_vb_per_day(feerate: float, inputs: EconomicInputs) -> float:
    """Bytes/day users want confirmed at ``feerate``.

    Q(f) = (Q0 / batching) * (f / f0) ** elasticity. Only defined for f > 0.
    """
    if feerate <= 0:
        raise ValueError(f"feerate must be positive, got {feerate}")
    ratio = feerate / inputs.baseline_feerate
    return (inputs.baseline_demand_vb_day / inputs.batching_factor) * ratio**inputs.elasticity


def confirmed_vb_per_day(feerate: float, inputs: EconomicInputs) -> float:
    # Demand above capacity turns into backlog, not throughput.
    return min(demand_vb_per_day(feerate, inputs), supply_vb_per_day(inputs))
