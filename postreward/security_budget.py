"""Resolve the USD/day security-budget target from the configured policy."""

from __future__ import annotations

from .inputs import (
    ConfigurationError,
    EconomicInputs,
    MODE_REQUIRED_FIELDS,
    SecurityBudgetMode,
    coerce_mode,
)


def _require(inputs: EconomicInputs, mode: SecurityBudgetMode) -> list[float]:
    values = []
    for name in MODE_REQUIRED_FIELDS[mode]:
        value = getattr(inputs, name)
        if value is None:
            raise ConfigurationError(f"security_budget_mode {mode.value!r} requires {name}")
        values.append(value)
    return values


def security_budget_target_usd(inputs: EconomicInputs) -> float:
    """Return the daily USD amount miners must be paid under the active policy."""
    mode = coerce_mode(inputs.security_budget_mode)
    if mode is SecurityBudgetMode.PERCENT_OF_2025:
        alpha, base = _require(inputs, mode)
        return alpha * base
    if mode is SecurityBudgetMode.PERCENT_OF_SETTLEMENT_VALUE:
        beta, settlement = _require(inputs, mode)
        return beta * settlement
    if mode is SecurityBudgetMode.ABSOLUTE_USD:
        (absolute,) = _require(inputs, mode)
        return absolute
    raise ConfigurationError(f"Unhandled security_budget_mode {mode!r}")
