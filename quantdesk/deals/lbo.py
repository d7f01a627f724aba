"""Leveraged buyout returns model.

Each year:
    interest  = beginning debt * rate
    pretax    = EBITDA - interest - CapEx - dNWC
    FCF       = pretax - max(0, pretax * tax)
    mandatory = min(scheduled amortization, debt)
    sweep     = min(max(0, FCF - mandatory), debt - mandatory)

At exit, equity = EBITDA_n * exit multiple - remaining debt,
MOIC = exit equity / initial equity and IRR = MOIC^(1/n) - 1, which assumes a
single exit cash flow and no interim distributions.
"""
import logging
import math

from quantdesk.errors import MissingProjectionsError
from quantdesk.models.deals import (
    LBOInputs, LBOResult, DebtScheduleYear, LBOCashFlow, LeveragePoint,
)

logger = logging.getLogger(__name__)


def irr_from_moic(moic: float, years: int) -> float:
    """Annualised return of a single exit; floored at -100% for MOIC <= 0."""
    if moic <= 0:
        return -1.0
    return moic ** (1 / years) - 1


def run_lbo(inputs: LBOInputs) -> LBOResult:
    if not inputs.projected_ebitda:
        raise MissingProjectionsError("At least one year of projected EBITDA is required")

    equity = (
        inputs.equity_contribution
        if inputs.equity_contribution is not None
        else inputs.enterprise_value - inputs.debt_amount
    )
    exit_year = len(inputs.projected_ebitda)

    debt = max(0.0, inputs.debt_amount)
    debt_schedule: list[DebtScheduleYear] = []
    cash_flows: list[LBOCashFlow] = []
    leverage: list[LeveragePoint] = []

    for i, ebitda in enumerate(inputs.projected_ebitda):
        year = i + 1
        interest = debt * inputs.interest_rate
        capex = ebitda * inputs.capex_percent
        nwc_change = ebitda * inputs.nwc_change_percent
        pretax = ebitda - interest - capex - nwc_change
        taxes = max(0.0, pretax * inputs.tax_rate)
        fcf = pretax - taxes

        mandatory = min(max(0.0, inputs.annual_debt_repayment), debt)
        optional = 0.0
        if inputs.cash_sweep:
            optional = min(max(0.0, fcf - mandatory), debt - mandatory)
        ending_debt = debt - mandatory - optional

        debt_schedule.append(DebtScheduleYear(
            year=year,
            beginning_debt=debt,
            interest_payment=interest,
            mandatory_repayment=mandatory,
            optional_repayment=optional,
            ending_debt=ending_debt,
        ))
        cash_flows.append(LBOCashFlow(
            year=year,
            ebitda=ebitda,
            interest=interest,
            taxes=taxes,
            capex=capex,
            nwc_change=nwc_change,
            free_cash_flow=fcf,
            debt_repayment=mandatory + optional,
        ))
        leverage.append(LeveragePoint(
            year=year,
            debt_to_ebitda=ending_debt / ebitda if ebitda > 0 else math.inf,
            interest_coverage=ebitda / interest if interest > 0 else math.inf,
        ))

        debt = ending_debt

    exit_ev = inputs.projected_ebitda[-1] * inputs.exit_multiple
    exit_equity = exit_ev - debt
    moic = exit_equity / equity if equity > 0 else 0.0
    irr = irr_from_moic(moic, exit_year)

    logger.debug(f"LBO: exit equity={exit_equity:.2f}, MOIC={moic:.2f}x, IRR={irr:.2%}")

    return LBOResult(
        equity_contribution=equity,
        exit_year=exit_year,
        exit_enterprise_value=exit_ev,
        exit_equity_value=exit_equity,
        moic=moic,
        irr=irr,
        debt_schedule=debt_schedule,
        cash_flow_summary=cash_flows,
        leverage_profile=leverage,
    )
