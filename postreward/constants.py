"""Network and Economic Constants.

This module centralizes the magic numbers used across the post-reward fee
model. Each constant includes documentation of its source and rationale.
"""

from __future__ import annotations

# =============================================================================
# Bitcoin Network Constants
# =============================================================================

# Blocks mined per day at the 10-minute target interval
# Source: Bitcoin consensus (difficulty retargets toward 600s blocks)
BLOCKS_PER_DAY = 144

# Target block interval in minutes
BLOCK_INTERVAL_MINUTES = 10

# Current block subsidy in BTC
# Source: April 2024 halving (6.25 -> 3.125)
CURRENT_BLOCK_REWARD_BTC = 3.125

# Reference network hashrate used when no live figure is supplied
# Source: ~400 EH/s observed late 2024, expressed in TH/s (1 EH = 1e6 TH)
REFERENCE_NETWORK_HASHRATE_TH = 400 * 1e6


# =============================================================================
# Unit Conversions
# =============================================================================

# Satoshis per BTC (1 BTC = 100,000,000 satoshis)
SATS_PER_BTC = 100_000_000

# Virtual bytes per megabyte of block space
VB_PER_MB = 1_000_000

# Hashes per second in one TH/s
HASHES_PER_TH = 1e12

DAYS_PER_YEAR = 365
HOURS_PER_DAY = 24


# =============================================================================
# Equilibrium Solver Contract
# =============================================================================

# Fee-rate search bracket (sat/vB)
SOLVER_MIN_FEERATE = 1.0
SOLVER_MAX_FEERATE = 100_000.0

# Iteration ceiling and absolute bracket width at which bisection stops
SOLVER_MAX_ITERATIONS = 100
SOLVER_BRACKET_WIDTH = 0.001

# Relative gap |fees - target| / target accepted as "target met" (0.25%)
SOLVER_TOLERANCE = 0.0025


# =============================================================================
# Attack Model
# =============================================================================

# Share of network hashrate an attacker must rent for a majority attack
ATTACK_HASHRATE_SHARE = 0.51

# Duration of the reference rental attack (hours)
ATTACK_DURATION_HOURS = 6

# Default hashrate rental price (USD per TH per hour)
# Source: Cloud-mining marketplace quotes, early 2025
DEFAULT_RENT_RATE_USD_PER_TH_HOUR = 0.06


# =============================================================================
# Consistency Check Tolerances (absolute, USD)
# =============================================================================

DAILY_FEES_TOLERANCE_USD = 1.0
PER_BLOCK_TOLERANCE_USD = 0.01
CONVERSION_TOLERANCE_USD = 0.01
REVENUE_TOLERANCE_USD = 1.0


# =============================================================================
# Default Economic Assumptions (early 2025 network)
# =============================================================================

DEFAULT_BTC_PRICE = 100_000.0
DEFAULT_BLOCK_LIMIT_MB = 4.0  # SegWit block weight limit, ~4 MB
DEFAULT_BASELINE_FEERATE = 12.0  # Median feerate in calm periods
DEFAULT_BASELINE_DEMAND_VB_DAY = 280_000_000.0  # ~1.94 MB avg block * 144
DEFAULT_ELASTICITY = -0.5
DEFAULT_MEV_UPLIFT = 0.03  # Ordinals/inscriptions and other non-fee revenue
DEFAULT_COST_PER_TH_DAY = 1.5
DEFAULT_MARGIN = 0.107
DEFAULT_POOL_SHARE = 0.008  # ~3.2 EH/s of a 400 EH/s network
DEFAULT_AVG_TX_VB = 210.0
DEFAULT_BACKLOG_VB = 25_000_000.0  # ~25 MB mempool in calm periods
DEFAULT_ALPHA = 0.65
DEFAULT_BETA = 0.003
DEFAULT_SETTLEMENT_USD_DAY = 8_000_000_000.0
DEFAULT_ABSOLUTE_USD_DAY = 25_000_000.0
DEFAULT_BATCHING_FACTOR = 1.15
DEFAULT_VALUE_PER_TX_MULTIPLIER = 1.3


# =============================================================================
# Detailed Pool Cost Model
# =============================================================================

DEFAULT_ELECTRICITY_USD_PER_KWH = 0.08
DEFAULT_HARDWARE_COST_PER_TH = 25.0
DEFAULT_POWER_W_PER_TH = 25.0
COOLING_SHARE_OF_ELECTRICITY = 0.3
HARDWARE_LIFESPAN_YEARS = 3
FACILITY_USD_PER_TH_DAY = 0.10
STAFF_USD_PER_TH_DAY = 0.05
MAINTENANCE_SHARE_PER_YEAR = 0.02
REPRESENTATIVE_POOL_SHARE = 0.1

# Clamp bounds for reported pool ratios
PROFIT_MARGIN_PCT_BOUND = 1000.0
BREAK_EVEN_PRICE_CAP_USD = 10_000_000.0
ROI_MONTHS_CAP = 1200.0


# =============================================================================
# Fee Market Snapshot Assumptions
# =============================================================================

DEFAULT_SECURITY_BUDGET_USD_DAY = 50_000_000.0
SNAPSHOT_AVG_TX_BYTES = 250
LOW_PRIORITY_FEE_MULTIPLIER = 0.3
HIGH_PRIORITY_FEE_MULTIPLIER = 3.0
MEMPOOL_FEERATE_DISCOUNT = 0.8
SNAPSHOT_DEMAND_ELASTICITY = -0.3
MAX_DEMAND_REDUCTION = 0.8
MIN_SUSTAINABLE_TPS = 0.1
BASE_EFFICIENCY_FEERATE = 10.0


# =============================================================================
# Network Data Fallbacks
# =============================================================================

# Used when every provider fails; stale values are valid solver inputs.
FALLBACK_BTC_PRICE = 100_000.0
FALLBACK_MEMPOOL_TX_COUNT = 35_000
FALLBACK_FEERATE = 12.0
FALLBACK_HASHRATE_H = 750e18
FALLBACK_BLOCK_HEIGHT = 875_000

# Prices below this are rejected as malformed provider responses
MIN_PLAUSIBLE_BTC_PRICE = 1_000.0
