#!/usr/bin/env python3
"""Solve the fee market for today's network and the fee-only future."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from postreward import config
from postreward import scenarios
from postreward import units
from postreward.inputs import (
    PRESET_SCENARIOS,
    ConfigurationError,
    EconomicInputs,
    SecurityBudgetMode,
    apply_preset,
    default_inputs,
)
from postreward.network_data import NetworkDataClient, seed_inputs
from postreward.results import EconomicOutputs

LOGGER = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    parsed = float(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--preset", choices=sorted(PRESET_SCENARIOS), help="Apply a quick scenario.")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in SecurityBudgetMode],
        help="Security budget policy (default: percent_of_2025).",
    )
    parser.add_argument("--alpha", type=float, help="Share of the 2025 security budget.")
    parser.add_argument("--beta", type=float, help="Share of daily settlement value.")
    parser.add_argument("--absolute-usd", type=_positive_float, help="Absolute USD/day target.")
    parser.add_argument("--btc-price", type=_positive_float, help="Override the BTC price.")
    parser.add_argument("--elasticity", type=float, help="Override demand elasticity.")
    parser.add_argument("--block-limit-mb", type=_positive_float, help="Override the block size cap.")
    parser.add_argument(
        "--live",
        action="store_true",
        help="Seed price, feerate and backlog from public APIs (falls back to constants).",
    )
    parser.add_argument("--json", action="store_true", help="Emit both outputs as JSON.")
    parser.add_argument("--log-level", default=None, help="Logging level (default INFO).")
    return parser


def build_inputs(args: argparse.Namespace) -> tuple[EconomicInputs, float | None]:
    inputs = default_inputs()
    current_hashrate_th = None
    # Live figures take precedence over preset values.
    if args.preset:
        inputs = apply_preset(inputs, args.preset)
    if args.live:
        snapshot = NetworkDataClient().snapshot()
        if snapshot.is_fallback:
            LOGGER.warning("Live data incomplete; some figures are fallback values")
        seeded = seed_inputs(inputs, snapshot)
        if args.preset:
            LOGGER.info(
                "Live data replaced preset %s values: btc_price %.2f -> %.2f, "
                "baseline_feerate %.2f -> %.2f",
                args.preset,
                inputs.btc_price,
                seeded.btc_price,
                inputs.baseline_feerate,
                seeded.baseline_feerate,
            )
        inputs = seeded
        current_hashrate_th = snapshot.stats.hashrate_th

    overrides = {
        "security_budget_mode": args.mode,
        "alpha": args.alpha,
        "beta": args.beta,
        "absolute_usd_day": args.absolute_usd,
        "btc_price": args.btc_price,
        "elasticity": args.elasticity,
        "block_limit_mb": args.block_limit_mb,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        inputs = inputs.replace(**overrides)
    return inputs.validate(), current_hashrate_th


def _json_default(value):
    if isinstance(value, SecurityBudgetMode):
        return value.value
    raise TypeError(f"Unserialisable value {value!r}")


def _finite(payload):
    if isinstance(payload, float) and not math.isfinite(payload):
        return None
    if isinstance(payload, dict):
        return {key: _finite(value) for key, value in payload.items()}
    if isinstance(payload, list):
        return [_finite(value) for value in payload]
    return payload


def print_summary(current: EconomicOutputs, post_reward: EconomicOutputs) -> None:
    table = scenarios.compare_regimes(current, post_reward)
    print(table.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))
    print()
    solver = post_reward.solver_info
    status = "met" if solver.target_met else "NOT met"
    print(
        f"Fee-only target {units.format_currency(solver.target_fees_usd)} USD/day {status} "
        f"at {units.format_fee_rate(post_reward.optimal_feerate)} (gap {solver.gap:+.4%})"
    )
    print(f"Equilibrium hashrate: {units.format_hashrate(post_reward.equilibrium_hashrate_th)}")
    print(
        "Attack cost: "
        f"{units.format_attack_cost(post_reward.attack_cost_6h_usd, 6)}"
    )
    print(f"Pool margin: {units.format_metric(post_reward.pool_profit_margin, units.pct)}")
    print(f"Break-even BTC price: {units.format_metric(post_reward.break_even_btc_price)}")
    for label, out in (("current", current), ("post-reward", post_reward)):
        for failure in out.consistency_failures:
            print(f"[{label}] consistency check failed: {failure.label} (diff {failure.diff:.4f})")


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    config.configure_logging(args.log_level)

    try:
        inputs, hashrate_th = build_inputs(args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    kwargs = {"current_hashrate_th": hashrate_th} if hashrate_th else {}
    current, post_reward = scenarios.solve_regimes(inputs, **kwargs)

    if args.json:
        payload = {"current": current.to_dict(), "post_reward": post_reward.to_dict()}
        print(json.dumps(_finite(payload), indent=2, default=_json_default))
        return
    print_summary(current, post_reward)


if __name__ == "__main__":
    main()
