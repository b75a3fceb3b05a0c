"""Equilibrium fee-rate solver.

Finds the feerate f* at which canonical fee revenue covers the security
budget net of ancillary revenue:

    F_usd(f*) ~= S / (1 + gamma)

Bisection is used instead of inverting the demand curve so that the
min(demand, supply) kink needs no special casing. F_usd is non-decreasing in
f for elasticities >= -1, which is what licenses the bracket updates.
"""

from __future__ import annotations

import logging

from . import constants as const
from .demand import confirmed_vb_per_day
from .fees import fees_usd_per_day
from .inputs import EconomicInputs
from .results import SolverResult
from .security_budget import security_budget_target_usd

logger = logging.getLogger(__name__)


def target_fees_usd(inputs: EconomicInputs) -> float:
    """Share of the security budget fees alone must cover."""
    return security_budget_target_usd(inputs) / (1 + inputs.mev_uplift)


def _result(
    feerate: float,
    fees_usd: float,
    target: float,
    gap: float,
    inputs: EconomicInputs,
    *,
    tolerance: float,
    iterations: int,
) -> SolverResult:
    return SolverResult(
        feerate=feerate,
        target_met=abs(gap) <= tolerance,
        gap=gap,
        actual_revenue=fees_usd * (1 + inputs.mev_uplift),
        achieved_fees_usd=fees_usd,
        confirmed_demand_mb_day=confirmed_vb_per_day(feerate, inputs) / const.VB_PER_MB,
        target_fees_usd=target,
        iterations=iterations,
    )


def solve_feerate_for_target(
    inputs: EconomicInputs,
    *,
    min_feerate: float = const.SOLVER_MIN_FEERATE,
    max_feerate: float = const.SOLVER_MAX_FEERATE,
    max_iterations: int = const.SOLVER_MAX_ITERATIONS,
    bracket_width: float = const.SOLVER_BRACKET_WIDTH,
    tolerance: float = const.SOLVER_TOLERANCE,
) -> SolverResult:
    """Bisect for the feerate whose daily fee revenue matches the target.

    ``gap`` on the result is the relative shortfall (target - fees) / target:
    positive when fees fall short, negative when they overshoot. When the
    target is not met the best candidate is still returned with
    ``target_met=False``.
    """
    target = target_fees_usd(inputs)

    if inputs.elasticity < -1:
        # Revenue falls with feerate below the supply kink; bisection may miss the root.
        logger.warning(
            "Elasticity %s < -1: fee revenue is not monotone in feerate, "
            "solver result may report an unreachable target",
            inputs.elasticity,
        )

    if target <= 0:
        # Any positive feerate overshoots a non-positive target.
        fees_at_floor = fees_usd_per_day(min_feerate, inputs)
        logger.warning(
            "Non-positive fee target %.2f USD/day; resolving at search floor %s sat/vB",
            target,
            min_feerate,
        )
        return SolverResult(
            feerate=min_feerate,
            target_met=False,
            gap=float("-inf"),
            actual_revenue=fees_at_floor * (1 + inputs.mev_uplift),
            achieved_fees_usd=fees_at_floor,
            confirmed_demand_mb_day=confirmed_vb_per_day(min_feerate, inputs) / const.VB_PER_MB,
            target_fees_usd=target,
            iterations=0,
        )

    fees_at_ceiling = fees_usd_per_day(max_feerate, inputs)
    if fees_at_ceiling < target:
        gap = (target - fees_at_ceiling) / target
        logger.warning(
            "Fee target %.2f USD/day unreachable; ceiling %s sat/vB yields %.2f (gap %.4f)",
            target,
            max_feerate,
            fees_at_ceiling,
            gap,
        )
        return _result(
            max_feerate,
            fees_at_ceiling,
            target,
            gap,
            inputs,
            tolerance=tolerance,
            iterations=0,
        )

    lo, hi = min_feerate, max_feerate
    best_feerate = max_feerate
    best_fees = fees_at_ceiling
    best_abs_gap = abs(fees_at_ceiling - target) / target
    iterations = 0
    for iterations in range(1, max_iterations + 1):
        mid = (lo + hi) / 2
        fees_usd = fees_usd_per_day(mid, inputs)
        abs_gap = abs(fees_usd - target) / target
        if abs_gap < best_abs_gap:
            best_feerate, best_fees, best_abs_gap = mid, fees_usd, abs_gap
        if fees_usd >= target:
            hi = mid
        else:
            lo = mid
        if hi - lo < bracket_width:
            break

    gap = (target - best_fees) / target
    logger.debug(
        "Solver converged to %.4f sat/vB after %s iterations (gap %.6f)",
        best_feerate,
        iterations,
        gap,
    )
    return _result(
        best_feerate,
        best_fees,
        target,
        gap,
        inputs,
        tolerance=tolerance,
        iterations=iterations,
    )
