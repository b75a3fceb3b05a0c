from __future__ import annotations

import pytest

from postreward import units
from postreward.results import Metric


def test_usd_and_sats():
    assert units.usd(0.5, 100_000) == 50_000
    assert units.sats_to_btc(250_000_000) == 2.5


def test_pct_helpers():
    assert units.pct(0.125) == "12.5%"
    assert units.pct(0.125, digits=2) == "12.50%"
    assert units.pct_of_current(1, 0) == "—"
    assert units.pct_of_current(1, 1_000) == "<0.5%"
    assert units.pct_of_current(50, 100) == "50.0%"


def test_pct_change():
    assert units.pct_change(110, 100) == "+10.0%"
    assert units.pct_change(50, 100) == "-50.0%"
    assert units.pct_change(100.1, 100) == "≈0%"
    assert units.pct_change(5, 0) == "—"


def test_format_hashrate_from_th():
    assert units.format_hashrate(400e6) == "400.00 EH/s"
    assert units.format_hashrate(2_500) == "2.50 PH/s"
    assert units.format_hashrate(12) == "12.00 TH/s"
    assert units.format_hashrate(0.5) == "500000000000.00 H/s"


def test_format_number_and_currency():
    assert units.format_number(1_500_000) == "1.50M"
    assert units.format_number(2_000_000_000_000) == "2.00T"
    assert units.format_number(12.5) == "12.50"
    assert units.format_currency(1_234.5) == "$1,234.5"
    assert units.format_currency(1_000) == "$1,000"
    assert units.format_currency(-20) == "-$20"
    assert units.format_currency(float("inf")) == "∞"


def test_format_fee_rate():
    assert units.format_fee_rate(1_500) == "1.50k sat/vB"
    assert units.format_fee_rate(250) == "250 sat/vB"
    assert units.format_fee_rate(12.5) == "12.50 sat/vB"


def test_format_attack_cost():
    assert units.format_attack_cost(1_234_567.8, 6) == "$1,234,568 (6h attack)"


def test_format_metric_shows_marker_for_undefined():
    assert units.format_metric(Metric.of(2_000)) == "$2,000"
    assert units.format_metric(Metric.undefined("no revenue")) == "—"
    assert units.format_metric(Metric.of(0.25), units.pct) == "25.0%"


@pytest.mark.parametrize(
    ("feerate", "priority"),
    [(1, "low"), (12, "medium"), (50, "high"), (500, "urgent")],
)
def test_fee_priority(feerate, priority):
    assert units.fee_priority(feerate) == priority


def test_profitability_status():
    assert units.profitability_status(25) == ("Highly Profitable", "profitable")
    assert units.profitability_status(5) == ("Marginally Profitable", "marginal")
    assert units.profitability_status(-50) == ("Severely Unprofitable", "unprofitable")
