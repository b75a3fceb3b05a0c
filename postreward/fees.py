"""Fee revenue for a (feerate, confirmed volume) pair.

``fees_usd_per_day`` is the canonical fee equation; every USD fee figure in
the package is derived from it.
"""

from __future__ import annotations

from . import constants as const
from .demand import confirmed_vb_per_day
from .inputs import EconomicInputs
from .units import sats_to_btc, usd


def fees_btc_per_day(feerate: float, inputs: EconomicInputs) -> float:
    return sats_to_btc(feerate * confirmed_vb_per_day(feerate, inputs))


def fees_usd_per_day(feerate: float, inputs: EconomicInputs) -> float:
    """F_usd = (f * Q_conf(f)) / 1e8 * P."""
    return usd(fees_btc_per_day(feerate, inputs), inputs.btc_price)


def fees_per_block_usd(feerate: float, inputs: EconomicInputs) -> float:
    return fees_usd_per_day(feerate, inputs) / const.BLOCKS_PER_DAY


def avg_fee_per_tx_usd(feerate: float, inputs: EconomicInputs) -> float:
    return usd(sats_to_btc(feerate * inputs.avg_tx_vb), inputs.btc_price)
