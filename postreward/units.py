"""Unit conversions and presentation formatters.

Formatters only consume already-computed numbers; nothing here feeds back
into the solver.
"""

from __future__ import annotations

import math

from . import constants as const
from .results import Metric

EM_DASH = "—"


def usd(btc_amount: float, btc_price: float) -> float:
    """Convert a BTC amount to USD. The only BTC->USD conversion in the package."""
    return btc_amount * btc_price


def sats_to_btc(sats: float) -> float:
    return sats / const.SATS_PER_BTC


def th_to_hashes(hashrate_th: float) -> float:
    return hashrate_th * const.HASHES_PER_TH


def hashes_to_th(hashrate_h: float) -> float:
    return hashrate_h / const.HASHES_PER_TH


def pct(x: float, digits: int = 1) -> str:
    """Format a fraction as a percentage string (0.125 -> '12.5%')."""
    return f"{x * 100:.{digits}f}%"


def pct_of_current(value: float, current: float) -> str:
    if current == 0:
        return EM_DASH
    ratio = value / current
    if ratio < 0.005:
        return "<0.5%"
    return pct(ratio)


def pct_change(new_value: float, old_value: float) -> str:
    """Signed percentage change, with a near-zero band shown as '≈0%'."""
    if old_value == 0:
        return EM_DASH
    ratio = (new_value - old_value) / old_value
    if abs(ratio) < 0.005:
        return "≈0%"
    sign = "+" if ratio >= 0 else ""
    return f"{sign}{ratio * 100:.1f}%"


def format_number(num: float, decimals: int = 2) -> str:
    places = min(decimals, 2)
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if num >= threshold:
            return f"{num / threshold:.{places}f}{suffix}"
    return f"{num:.{places}f}"


def format_currency(amount: float, max_decimals: int = 2) -> str:
    if math.isinf(amount):
        return "∞" if amount > 0 else "-∞"
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{sign}${text}"


def format_hashrate(hashrate_th: float) -> str:
    """Format a TH/s figure with the largest fitting unit."""
    hashes = th_to_hashes(hashrate_th)
    if hashes >= 1e18:
        return f"{hashes / 1e18:.2f} EH/s"
    if hashes >= 1e15:
        return f"{hashes / 1e15:.2f} PH/s"
    if hashes >= 1e12:
        return f"{hashes / 1e12:.2f} TH/s"
    return f"{hashes:.2f} H/s"


def format_fee_rate(feerate: float) -> str:
    if feerate >= 1000:
        return f"{feerate / 1000:.2f}k sat/vB"
    if feerate >= 100:
        return f"{feerate:.0f} sat/vB"
    return f"{feerate:.2f} sat/vB"


def format_attack_cost(cost_usd: float, hours: float) -> str:
    return f"{format_currency(round(cost_usd), max_decimals=0)} ({hours:g}h attack)"


def format_metric(metric: Metric, formatter=format_currency) -> str:
    """Render a tagged metric, showing the undefined marker instead of a number."""
    if not metric.defined:
        return EM_DASH
    return formatter(metric.value)


def fee_priority(feerate: float) -> str:
    """Bucket a feerate into low/medium/high/urgent."""
    if feerate < 5:
        return "low"
    if feerate < 20:
        return "medium"
    if feerate < 100:
        return "high"
    return "urgent"


def profitability_status(profit_margin_pct: float) -> tuple[str, str]:
    """Return (label, status) for a profit margin expressed in percent."""
    if profit_margin_pct > 20:
        return "Highly Profitable", "profitable"
    if profit_margin_pct > 10:
        return "Profitable", "profitable"
    if profit_margin_pct > 0:
        return "Marginally Profitable", "marginal"
    if profit_margin_pct > -20:
        return "Unprofitable", "unprofitable"
    return "Severely Unprofitable", "unprofitable"
