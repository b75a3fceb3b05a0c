"""Non-fatal cross-checks of the model's derived quantities.

Each check recomputes a figure along a second path and logs a warning when
the two disagree beyond an absolute tolerance. Checks never raise; failures
are returned so callers can attach them to the output record.
"""

from __future__ import annotations

import logging

from . import constants as const
from .demand import confirmed_vb_per_day
from .inputs import EconomicInputs
from .results import ConsistencyFailure, SolverResult

logger = logging.getLogger(__name__)


def assert_nearly_equal(
    actual: float, expected: float, tolerance: float, label: str = ""
) -> ConsistencyFailure | None:
    diff = abs(actual - expected)
    if diff <= tolerance:
        return None
    logger.warning(
        "Consistency check failed (%s): %r != %r (diff: %r, tolerance: %r)",
        label or "unlabelled",
        actual,
        expected,
        diff,
        tolerance,
    )
    return ConsistencyFailure(
        label=label,
        actual=actual,
        expected=expected,
        diff=diff,
        tolerance=tolerance,
    )


def run_consistency_checks(
    inputs: EconomicInputs,
    solver: SolverResult,
    *,
    daily_fee_revenue_usd: float,
    daily_fee_revenue_btc: float,
    fees_per_block_usd: float,
    fees_per_block_btc: float,
    reward_usd_per_day: float,
    network_revenue_usd: float,
    equilibrium_hashrate_th: float,
    pool_daily_revenue_usd: float,
) -> tuple[ConsistencyFailure, ...]:
    price = inputs.btc_price
    confirmed_vb = confirmed_vb_per_day(solver.feerate, inputs)
    checks = [
        (
            daily_fee_revenue_usd,
            solver.feerate * confirmed_vb / const.SATS_PER_BTC * price,
            const.DAILY_FEES_TOLERANCE_USD,
            "Daily fees match solver feerate times confirmed volume",
        ),
        (
            fees_per_block_usd * const.BLOCKS_PER_DAY,
            daily_fee_revenue_usd,
            const.PER_BLOCK_TOLERANCE_USD,
            "Fees per block consistency",
        ),
        (
            fees_per_block_btc * price,
            fees_per_block_usd,
            const.CONVERSION_TOLERANCE_USD,
            "Block fees BTC/USD consistency",
        ),
        (
            daily_fee_revenue_btc * price,
            daily_fee_revenue_usd,
            const.CONVERSION_TOLERANCE_USD,
            "Daily fees BTC/USD consistency",
        ),
        (
            pool_daily_revenue_usd,
            network_revenue_usd * inputs.pool_share,
            const.CONVERSION_TOLERANCE_USD,
            "Pool revenue calculation",
        ),
        (
            network_revenue_usd,
            solver.actual_revenue + reward_usd_per_day,
            const.REVENUE_TOLERANCE_USD,
            "Network revenue matches solver revenue plus rewards",
        ),
        (
            equilibrium_hashrate_th * inputs.cost_per_th_day * (1 + inputs.margin),
            network_revenue_usd,
            const.REVENUE_TOLERANCE_USD,
            "Equilibrium hashrate covers cost plus margin",
        ),
    ]
    failures = []
    for actual, expected, tolerance, label in checks:
        failure = assert_nearly_equal(actual, expected, tolerance, label)
        if failure is not None:
            failures.append(failure)
    return tuple(failures)
