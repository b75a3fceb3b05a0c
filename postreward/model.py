"""Single entry point assembling one full model run."""

from __future__ import annotations

import logging

from . import constants as const
from . import mining
from .confirmation import backlog_after_day, calculate_confirmation_time
from .consistency import run_consistency_checks
from .demand import confirmed_vb_per_day, demand_vb_per_day
from .fees import avg_fee_per_tx_usd, fees_btc_per_day, fees_usd_per_day
from .inputs import EconomicInputs
from .results import EconomicOutputs
from .security_budget import security_budget_target_usd
from .solver import solve_feerate_for_target

logger = logging.getLogger(__name__)


def compute_full_model(
    inputs: EconomicInputs,
    include_block_rewards: bool = False,
    *,
    current_hashrate_th: float = const.REFERENCE_NETWORK_HASHRATE_TH,
    block_reward_btc: float = const.CURRENT_BLOCK_REWARD_BTC,
) -> EconomicOutputs:
    """Solve the fee market and derive every downstream metric.

    ``include_block_rewards=True`` models today's network (subsidy plus fees);
    ``False`` models the fee-only future. The result depends only on the
    arguments.
    """
    inputs.validate()
    reward_usd_day = mining.reward_usd_per_day(
        include_block_rewards, inputs, block_reward_btc=block_reward_btc
    )

    solver = solve_feerate_for_target(inputs)
    feerate = solver.feerate
    if not solver.target_met:
        logger.info(
            "Security budget not met: feerate %.2f sat/vB leaves relative gap %.4f",
            feerate,
            solver.gap,
        )

    daily_fee_usd = fees_usd_per_day(feerate, inputs)
    daily_fee_btc = fees_btc_per_day(feerate, inputs)
    fees_per_block_usd = daily_fee_usd / const.BLOCKS_PER_DAY
    fees_per_block_btc = daily_fee_btc / const.BLOCKS_PER_DAY

    demand = demand_vb_per_day(feerate, inputs)
    confirmed = confirmed_vb_per_day(feerate, inputs)

    network_revenue = daily_fee_usd * (1 + inputs.mev_uplift) + reward_usd_day
    hashrate_th = mining.equilibrium_hashrate_th(feerate, reward_usd_day, inputs)

    attack_cost_6h = mining.attack_cost_usd(
        const.ATTACK_DURATION_HOURS, hashrate_th, inputs.rent_rate_usd_per_th_hour
    )
    pool = mining.pool_metrics(network_revenue, hashrate_th, inputs)

    failures = run_consistency_checks(
        inputs,
        solver,
        daily_fee_revenue_usd=daily_fee_usd,
        daily_fee_revenue_btc=daily_fee_btc,
        fees_per_block_usd=fees_per_block_usd,
        fees_per_block_btc=fees_per_block_btc,
        reward_usd_per_day=reward_usd_day,
        network_revenue_usd=network_revenue,
        equilibrium_hashrate_th=hashrate_th,
        pool_daily_revenue_usd=pool.revenue_usd,
    )

    return EconomicOutputs(
        optimal_feerate=feerate,
        daily_fee_revenue_btc=daily_fee_btc,
        daily_fee_revenue_usd=daily_fee_usd,
        fees_per_block_btc=fees_per_block_btc,
        fees_per_block_usd=fees_per_block_usd,
        avg_fee_per_tx_usd=avg_fee_per_tx_usd(feerate, inputs),
        demand_vb_per_day=demand,
        confirmed_vb_per_day=confirmed,
        backlog_vb=backlog_after_day(feerate, inputs),
        avg_confirmation_time_min=calculate_confirmation_time(feerate, inputs),
        equilibrium_hashrate_th=hashrate_th,
        reward_usd_per_day=reward_usd_day,
        network_revenue_usd=network_revenue,
        security_budget_target_usd=security_budget_target_usd(inputs),
        attack_cost_6h_usd=attack_cost_6h,
        attack_cost_as_percent_of_settlement=mining.attack_cost_as_percent_of_settlement(
            attack_cost_6h, inputs.settlement_usd_day
        ),
        pool_daily_revenue_usd=pool.revenue_usd,
        pool_daily_expenses_usd=pool.expenses_usd,
        pool_daily_profit_usd=pool.profit_usd,
        pool_profit_margin=pool.profit_margin,
        break_even_btc_price=mining.break_even_btc_price(
            pool.expenses_usd, daily_fee_btc, inputs.pool_share
        ),
        hashrate_sustainability_ratio=mining.hashrate_sustainability_ratio(
            hashrate_th, current_hashrate_th
        ),
        current_hashrate_th=current_hashrate_th,
        solver_info=solver,
        consistency_failures=failures,
    )
