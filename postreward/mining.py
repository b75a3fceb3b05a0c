"""Mining and pool economics derived from the solved feerate.

Provides:
- Equilibrium hashrate where revenue covers cost plus margin
- Rental attack cost
- Pool revenue/expense/profit split and break-even price
- A detailed per-TH cost model for a single pool (electricity, cooling,
  depreciation, facility, staff, maintenance)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import constants as const
from .fees import fees_usd_per_day
from .inputs import EconomicInputs
from .results import Metric
from .units import sats_to_btc, usd

logger = logging.getLogger(__name__)


def reward_usd_per_day(
    include_block_rewards: bool,
    inputs: EconomicInputs,
    *,
    block_reward_btc: float = const.CURRENT_BLOCK_REWARD_BTC,
) -> float:
    """Subsidy revenue per day; zero in the fee-only regime."""
    if not include_block_rewards:
        return 0.0
    return usd(block_reward_btc * const.BLOCKS_PER_DAY, inputs.btc_price)


def equilibrium_hashrate_th(
    feerate: float, reward_usd_day: float, inputs: EconomicInputs
) -> float:
    """H_eq = (F_usd(f) * (1 + gamma) + rewards) / (cost_per_th_day * (1 + mu))."""
    fee_revenue = fees_usd_per_day(feerate, inputs) * (1 + inputs.mev_uplift)
    return (fee_revenue + reward_usd_day) / (inputs.cost_per_th_day * (1 + inputs.margin))


def attack_cost_usd(hours: float, hashrate_th: float, rent_rate_usd_per_th_hour: float) -> float:
    """Cost of renting a majority share of ``hashrate_th`` for ``hours``."""
    attacker_th = const.ATTACK_HASHRATE_SHARE * hashrate_th
    return attacker_th * rent_rate_usd_per_th_hour * hours


def attack_cost_as_percent_of_settlement(
    attack_cost: float, settlement_usd_day: float | None
) -> float:
    if not settlement_usd_day:
        return 0.0
    return attack_cost / settlement_usd_day * 100


@dataclass(frozen=True)
class PoolMetrics:
    revenue_usd: float
    expenses_usd: float
    profit_usd: float
    profit_margin: Metric


def pool_metrics(
    network_revenue_usd: float, hashrate_th: float, inputs: EconomicInputs
) -> PoolMetrics:
    """Split network economics down to the configured pool share."""
    revenue = network_revenue_usd * inputs.pool_share
    expenses = hashrate_th * inputs.pool_share * inputs.cost_per_th_day
    profit = revenue - expenses
    if revenue > 0:
        margin = Metric.of(profit / revenue)
    else:
        margin = Metric.undefined("pool revenue is zero")
    return PoolMetrics(
        revenue_usd=revenue,
        expenses_usd=expenses,
        profit_usd=profit,
        profit_margin=margin,
    )


def break_even_btc_price(
    pool_expenses_usd: float, daily_fee_revenue_btc: float, pool_share: float
) -> Metric:
    """BTC price at which the pool's share of fee revenue covers its expenses."""
    if pool_expenses_usd <= 0:
        return Metric.undefined("pool has no expenses")
    denominator = daily_fee_revenue_btc * pool_share
    if denominator <= 0:
        return Metric.undefined("no fee revenue to scale against")
    return Metric.of(pool_expenses_usd / denominator)


def hashrate_sustainability_ratio(
    equilibrium_th: float, current_th: float = const.REFERENCE_NETWORK_HASHRATE_TH
) -> float:
    if current_th <= 0:
        raise ValueError(f"current_th must be positive, got {current_th}")
    return equilibrium_th / current_th


# =============================================================================
# Detailed pool cost model
# =============================================================================


@dataclass(frozen=True)
class CostAssumptions:
    electricity_usd_per_kwh: float = const.DEFAULT_ELECTRICITY_USD_PER_KWH
    hardware_cost_per_th: float = const.DEFAULT_HARDWARE_COST_PER_TH
    power_w_per_th: float = const.DEFAULT_POWER_W_PER_TH
    cooling_share: float = const.COOLING_SHARE_OF_ELECTRICITY
    hardware_lifespan_years: float = const.HARDWARE_LIFESPAN_YEARS
    facility_usd_per_th_day: float = const.FACILITY_USD_PER_TH_DAY
    staff_usd_per_th_day: float = const.STAFF_USD_PER_TH_DAY
    maintenance_share_per_year: float = const.MAINTENANCE_SHARE_PER_YEAR

    def electricity_per_th_day(self) -> float:
        kw_per_th = self.power_w_per_th / 1000
        return kw_per_th * const.HOURS_PER_DAY * self.electricity_usd_per_kwh

    def expenses_per_th_day(self) -> float:
        electricity = self.electricity_per_th_day()
        cooling = electricity * self.cooling_share
        depreciation = self.hardware_cost_per_th / (
            self.hardware_lifespan_years * const.DAYS_PER_YEAR
        )
        maintenance = (
            self.hardware_cost_per_th * self.maintenance_share_per_year / const.DAYS_PER_YEAR
        )
        return (
            electricity
            + cooling
            + depreciation
            + self.facility_usd_per_th_day
            + self.staff_usd_per_th_day
            + maintenance
        )


@dataclass(frozen=True)
class MiningMetrics:
    pool_hashrate_th: float
    network_hashrate_th: float
    market_share_pct: float
    daily_blocks: float
    daily_revenue_btc: float
    daily_revenue_usd: float
    daily_expenses_usd: float
    daily_profit_usd: float
    profit_margin_pct: Metric
    break_even_price: Metric
    roi_months: Metric
    total_hardware_cost_usd: float
    monthly_facility_usd: float
    monthly_staff_usd: float


def calculate_mining_metrics(
    *,
    pool_hashrate_th: float,
    network_hashrate_th: float,
    btc_price: float,
    avg_fee_rate: float,
    block_size_bytes: float,
    costs: CostAssumptions | None = None,
) -> MiningMetrics:
    """Fee-only profitability of a pool with an itemised cost structure."""
    if network_hashrate_th <= 0:
        raise ValueError(f"network_hashrate_th must be positive, got {network_hashrate_th}")
    if pool_hashrate_th < 0:
        raise ValueError(f"pool_hashrate_th must be non-negative, got {pool_hashrate_th}")
    cost = costs or CostAssumptions()

    share = pool_hashrate_th / network_hashrate_th
    daily_blocks = const.BLOCKS_PER_DAY * share
    fees_per_block_btc = sats_to_btc(avg_fee_rate * block_size_bytes)
    daily_btc = daily_blocks * fees_per_block_btc
    daily_revenue = usd(daily_btc, btc_price)

    daily_expenses = cost.expenses_per_th_day() * pool_hashrate_th
    hardware_cost = pool_hashrate_th * cost.hardware_cost_per_th
    daily_profit = daily_revenue - daily_expenses

    if daily_revenue > 0:
        bound = const.PROFIT_MARGIN_PCT_BOUND
        margin = Metric.of(max(-bound, min(bound, daily_profit / daily_revenue * 100)))
    else:
        margin = Metric.undefined("no revenue")

    if daily_btc > 0:
        break_even = Metric.of(min(const.BREAK_EVEN_PRICE_CAP_USD, daily_expenses / daily_btc))
    else:
        break_even = Metric.undefined("no fee revenue")

    if daily_profit > 0:
        roi = Metric.of(min(const.ROI_MONTHS_CAP, hardware_cost / (daily_profit * 30)))
    else:
        roi = Metric.undefined("pool is not profitable")

    return MiningMetrics(
        pool_hashrate_th=pool_hashrate_th,
        network_hashrate_th=network_hashrate_th,
        market_share_pct=share * 100,
        daily_blocks=daily_blocks,
        daily_revenue_btc=daily_btc,
        daily_revenue_usd=daily_revenue,
        daily_expenses_usd=daily_expenses,
        daily_profit_usd=daily_profit,
        profit_margin_pct=margin,
        break_even_price=break_even,
        roi_months=roi,
        total_hardware_cost_usd=hardware_cost,
        monthly_facility_usd=cost.facility_usd_per_th_day * pool_hashrate_th * 30,
        monthly_staff_usd=cost.staff_usd_per_th_day * pool_hashrate_th * 30,
    )


def calculate_network_economics(
    *,
    network_hashrate_th: float,
    btc_price: float,
    avg_fee_rate: float,
    block_size_bytes: float,
    costs: CostAssumptions | None = None,
) -> MiningMetrics:
    """Economics of a representative pool holding 10% of the network."""
    return calculate_mining_metrics(
        pool_hashrate_th=network_hashrate_th * const.REPRESENTATIVE_POOL_SHARE,
        network_hashrate_th=network_hashrate_th,
        btc_price=btc_price,
        avg_fee_rate=avg_fee_rate,
        block_size_bytes=block_size_bytes,
        costs=costs,
    )


def calculate_hashrate_sustainability(
    *,
    btc_price: float,
    avg_fee_rate: float,
    block_size_bytes: float,
    target_profit_margin_pct: float = 10.0,
    electricity_usd_per_kwh: float = const.DEFAULT_ELECTRICITY_USD_PER_KWH,
) -> float:
    """Hashrate (TH/s) that fee revenue alone can fund at the target margin."""
    daily_btc = const.BLOCKS_PER_DAY * sats_to_btc(avg_fee_rate * block_size_bytes)
    daily_usd = usd(daily_btc, btc_price)

    electricity = CostAssumptions(electricity_usd_per_kwh=electricity_usd_per_kwh)
    electricity_per_th = electricity.electricity_per_th_day()
    cooling_per_th = electricity_per_th * const.COOLING_SHARE_OF_ELECTRICITY
    # Facility + staff + maintenance at network scale
    infrastructure_per_th = 0.1 + 0.05 + 0.15
    cost_per_th = electricity_per_th + cooling_per_th + infrastructure_per_th

    affordable = daily_usd * (100 - target_profit_margin_pct) / 100
    sustainable_th = affordable / cost_per_th
    logger.debug(
        "Sustainable hashrate %.0f TH/s at %.2f USD/TH/day", sustainable_th, cost_per_th
    )
    return max(0.0, sustainable_th)
