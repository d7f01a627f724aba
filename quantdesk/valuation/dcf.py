import logging
import math

from quantdesk.errors import MissingProjectionsError, NonConvergentGrowthError
from quantdesk.models.valuations import (
    DCFInputs, DCFResult, YearlyPV,
    SensitivityRange, SensitivityBaseCase, SensitivityResult,
)

logger = logging.getLogger(__name__)


def _compute_ev(
    free_cash_flows: list[float],
    wacc: float,
    tgr: float,
) -> tuple[float, float, float, list[YearlyPV]]:
    """Core DCF computation. Returns (pv_fcfs, terminal_value, pv_terminal, yearly_pvs)."""
    yearly_pvs: list[YearlyPV] = []
    pv_fcfs = 0.0

    for i, fcf in enumerate(free_cash_flows):
        discount_factor = 1 / (1 + wacc) ** (i + 1)
        pv = fcf * discount_factor
        pv_fcfs += pv
        yearly_pvs.append(YearlyPV(year=i + 1, fcf=fcf, discount_factor=discount_factor, pv=pv))

    n_years = len(free_cash_flows)
    terminal_value = free_cash_flows[-1] * (1 + tgr) / (wacc - tgr)
    pv_terminal = terminal_value / (1 + wacc) ** n_years

    return pv_fcfs, terminal_value, pv_terminal, yearly_pvs


def compute_dcf_valuation(inputs: DCFInputs) -> DCFResult:
    """Enterprise, equity and per-share value from a Gordon-growth DCF."""
    wacc = inputs.wacc
    tgr = inputs.terminal_growth_rate

    if wacc <= tgr:
        raise NonConvergentGrowthError(wacc, tgr)
    if not inputs.free_cash_flows:
        raise MissingProjectionsError("At least one projected free cash flow is required")

    pv_fcfs, terminal_value, pv_terminal, yearly_pvs = _compute_ev(inputs.free_cash_flows, wacc, tgr)

    enterprise_value = pv_fcfs + pv_terminal
    equity_value = enterprise_value - inputs.net_debt
    implied_share_price = (
        equity_value / inputs.shares_outstanding if inputs.shares_outstanding else None
    )

    return DCFResult(
        pv_of_cash_flows=pv_fcfs,
        terminal_value=terminal_value,
        pv_of_terminal_value=pv_terminal,
        enterprise_value=enterprise_value,
        equity_value=equity_value,
        implied_share_price=implied_share_price,
        yearly_pvs=yearly_pvs,
    )


def _grid_axis(value_range: SensitivityRange) -> list[float]:
    """Evenly spaced values over [min, max], endpoints included."""
    if value_range.steps == 1:
        return [value_range.min]
    step = (value_range.max - value_range.min) / (value_range.steps - 1)
    return [value_range.min + i * step for i in range(value_range.steps)]


def _headline_value(result: DCFResult) -> float:
    """Implied share price, or equity value when no share count was given."""
    if result.implied_share_price is not None:
        return result.implied_share_price
    return result.equity_value


def compute_sensitivity_table(
    base_inputs: DCFInputs,
    wacc_range: SensitivityRange,
    growth_range: SensitivityRange,
) -> SensitivityResult:
    """Share price grid over WACC x terminal growth. Non-convergent cells are NaN."""
    wacc_values = _grid_axis(wacc_range)
    growth_values = _grid_axis(growth_range)

    matrix: list[list[float]] = []
    skipped = 0
    for w in wacc_values:
        row: list[float] = []
        for g in growth_values:
            if w <= g:
                row.append(math.nan)
                skipped += 1
                continue
            result = compute_dcf_valuation(
                base_inputs.model_copy(update={"wacc": w, "terminal_growth_rate": g})
            )
            row.append(_headline_value(result))
        matrix.append(row)

    if skipped:
        logger.debug(f"Sensitivity grid: {skipped} non-convergent cell(s) set to NaN")

    base_result = compute_dcf_valuation(base_inputs)

    return SensitivityResult(
        wacc_values=wacc_values,
        growth_values=growth_values,
        matrix=matrix,
        base_case=SensitivityBaseCase(
            wacc=base_inputs.wacc,
            growth=base_inputs.terminal_growth_rate,
            price=_headline_value(base_result),
        ),
    )
