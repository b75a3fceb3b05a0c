from __future__ import annotations

import logging

import pytest

from postreward.network_data import NetworkSnapshot, NetworkStats
from scripts import run_model

LIVE_STATS = NetworkStats(
    mempool_tx_count=30_000,
    mempool_vsize=18_000_000,
    avg_fee_rate=20.0,
    hashrate_th=820e6,
    sources=("test",),
)


class DummyClient:
    def snapshot(self):
        return NetworkSnapshot(btc_price=88_000.0, price_source="coingecko", stats=LIVE_STATS)


@pytest.fixture()
def live_client(monkeypatch):
    monkeypatch.setattr(run_model, "NetworkDataClient", DummyClient)


def _args(*argv):
    return run_model.build_parser().parse_args(list(argv))


def test_preset_without_live_data():
    inputs, hashrate_th = run_model.build_inputs(_args("--preset", "crisis"))
    assert inputs.btc_price == 25_000
    assert inputs.elasticity == -1.0
    assert hashrate_th is None


def test_live_figures_take_precedence_over_preset(live_client, caplog):
    with caplog.at_level(logging.INFO):
        inputs, hashrate_th = run_model.build_inputs(_args("--preset", "crisis", "--live"))

    assert inputs.btc_price == 88_000.0
    assert inputs.baseline_feerate == 20.0
    assert inputs.backlog_vb == 18_000_000
    # Non-live preset fields survive
    assert inputs.elasticity == -1.0
    assert inputs.baseline_demand_vb_day == 150_000_000.0
    assert hashrate_th == pytest.approx(820e6)
    assert "replaced preset crisis" in caplog.text


def test_explicit_flags_override_live_and_preset(live_client):
    inputs, _ = run_model.build_inputs(
        _args("--preset", "optimistic", "--live", "--btc-price", "60000")
    )
    assert inputs.btc_price == 60_000
    assert inputs.elasticity == -0.8
