from quantdesk.errors import InvalidCapitalStructureError, MissingCostOfEquityInputsError
from quantdesk.models.valuations import WACCInputs, WACCResult


def capm_cost_of_equity(risk_free_rate: float, beta: float, market_risk_premium: float) -> float:
    """Re = Rf + beta * (Rm - Rf)"""
    return risk_free_rate + beta * market_risk_premium


def _resolve_cost_of_equity(inputs: WACCInputs) -> float:
    if inputs.cost_of_equity is not None:
        return inputs.cost_of_equity
    if (
        inputs.risk_free_rate is not None
        and inputs.beta is not None
        and inputs.market_risk_premium is not None
    ):
        return capm_cost_of_equity(inputs.risk_free_rate, inputs.beta, inputs.market_risk_premium)
    raise MissingCostOfEquityInputsError(
        "Either costOfEquity or CAPM parameters (riskFreeRate, beta, marketRiskPremium) must be provided"
    )


def compute_wacc(inputs: WACCInputs) -> WACCResult:
    """WACC = (E/V) * Re + (D/V) * Rd * (1 - Tax), V = E + D."""
    total_value = inputs.equity_value + inputs.debt_value
    if total_value <= 0:
        raise InvalidCapitalStructureError(
            f"Total firm value (E + D = {total_value}) must be positive"
        )

    equity_weight = inputs.equity_value / total_value
    debt_weight = inputs.debt_value / total_value
    cost_of_equity = _resolve_cost_of_equity(inputs)

    wacc = equity_weight * cost_of_equity + debt_weight * inputs.cost_of_debt * (1 - inputs.tax_rate)

    breakdown = (
        f"WACC = {equity_weight:.1%} x {cost_of_equity:.2%} + "
        f"{debt_weight:.1%} x {inputs.cost_of_debt:.2%} x (1 - {inputs.tax_rate:.0%}) = {wacc:.2%}"
    )

    return WACCResult(
        wacc=wacc,
        cost_of_equity=cost_of_equity,
        cost_of_debt=inputs.cost_of_debt,
        equity_weight=equity_weight,
        debt_weight=debt_weight,
        breakdown=breakdown,
    )
