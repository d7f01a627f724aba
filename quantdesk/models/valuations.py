from typing import Literal, Optional

from pydantic import Field

from quantdesk.models.base import EngineModel


class WACCInputs(EngineModel):
    equity_value: float = Field(..., description="Market value of equity (E)")
    debt_value: float = Field(..., description="Market value of debt (D)")
    cost_of_equity: Optional[float] = Field(None, description="Cost of equity Re; computed via CAPM when omitted")
    cost_of_debt: float = Field(..., description="Pre-tax cost of debt Rd")
    tax_rate: float = Field(..., description="Corporate tax rate (0.21 = 21%)")
    risk_free_rate: Optional[float] = Field(None, description="Risk-free rate Rf for the CAPM fallback")
    beta: Optional[float] = Field(None, description="Equity beta for the CAPM fallback")
    market_risk_premium: Optional[float] = Field(None, description="Rm - Rf for the CAPM fallback")


class WACCResult(EngineModel):
    wacc: float
    cost_of_equity: float
    cost_of_debt: float
    equity_weight: float
    debt_weight: float
    breakdown: str


class DCFInputs(EngineModel):
    free_cash_flows: list[float] = Field(..., description="Projected free cash flow for each forecast year")
    terminal_growth_rate: float = Field(..., description="Perpetuity growth rate g")
    wacc: float = Field(..., description="Discount rate")
    net_debt: float = Field(0.0, description="Debt minus cash, bridges EV to equity value")
    shares_outstanding: Optional[float] = Field(None, description="Shares outstanding for the per-share value")


class YearlyPV(EngineModel):
    year: int
    fcf: float
    discount_factor: float
    pv: float


class DCFResult(EngineModel):
    pv_of_cash_flows: float
    terminal_value: float
    pv_of_terminal_value: float
    enterprise_value: float
    equity_value: float
    implied_share_price: Optional[float] = None
    yearly_pvs: list[YearlyPV] = Field(default_factory=list, alias="yearlyPVs")


class SensitivityRange(EngineModel):
    min: float
    max: float
    steps: int = Field(..., ge=1)


class SensitivityBaseCase(EngineModel):
    wacc: float
    growth: float
    price: float


class SensitivityResult(EngineModel):
    wacc_values: list[float]
    growth_values: list[float]
    matrix: list[list[float]] = Field(..., description="matrix[i][j] = value at wacc_values[i], growth_values[j]; NaN when non-convergent")
    base_case: SensitivityBaseCase


class ThreeStatementInputs(EngineModel):
    revenue: float
    revenue_growth_rate: float
    cogs_percent: float = Field(..., description="COGS as % of revenue")
    sga_percent: float = Field(..., description="SG&A as % of revenue")
    rnd_percent: float = Field(..., description="R&D as % of revenue")
    depreciation_percent: float = Field(..., description="Depreciation as % of prior PPE")
    tax_rate: float
    interest_rate: float = Field(..., description="Interest as % of total prior debt")
    capex_percent: float = Field(..., description="CapEx as % of revenue")
    dividend_payout_ratio: float
    prior_cash: float
    prior_ar: float = Field(..., alias="priorAR")
    prior_inventory: float
    prior_ppe: float = Field(..., alias="priorPPE")
    prior_ap: float = Field(..., alias="priorAP")
    prior_short_term_debt: float
    prior_long_term_debt: float
    prior_retained_earnings: float
    dso: float = Field(..., description="Days sales outstanding")
    dio: float = Field(..., description="Days inventory outstanding")
    dpo: float = Field(..., description="Days payable outstanding")


class IncomeStatement(EngineModel):
    revenue: float
    cogs: float
    gross_profit: float
    opex: float
    sga: float
    rnd: float
    ebitda: float
    depreciation: float
    ebit: float
    interest_expense: float
    ebt: float
    taxes: float
    net_income: float


class BalanceSheet(EngineModel):
    cash: float
    accounts_receivable: float
    inventory: float
    total_current_assets: float
    ppe: float
    total_assets: float
    accounts_payable: float
    short_term_debt: float
    total_current_liabilities: float
    long_term_debt: float
    total_liabilities: float
    retained_earnings: float
    total_equity: float


class CashFlowStatement(EngineModel):
    net_income: float
    depreciation: float
    change_in_working_capital: float
    operating_cash_flow: float
    capex: float
    investing_cash_flow: float
    debt_issuance: float = 0.0
    debt_repayment: float = 0.0
    dividends: float
    financing_cash_flow: float
    net_cash_flow: float
    ending_cash: float


class BalanceCheck(EngineModel):
    assets: float
    liabilities_plus_equity: float
    balanced: bool


class ThreeStatementModel(EngineModel):
    income_statement: IncomeStatement
    balance_sheet: BalanceSheet
    cash_flow_statement: CashFlowStatement
    balance_check: BalanceCheck


class BlackScholesInputs(EngineModel):
    stock_price: float = Field(..., description="Current underlying price S")
    strike_price: float = Field(..., description="Strike K")
    time_to_expiry: float = Field(..., description="Time to expiry T in years")
    risk_free_rate: float = Field(..., description="Annualized risk-free rate r")
    volatility: float = Field(..., description="Annualized volatility sigma")
    option_type: Literal["call", "put"]


class BlackScholesResult(EngineModel):
    price: float
    delta: float
    gamma: float
    theta: float = Field(..., description="Per calendar day")
    vega: float = Field(..., description="Per 1% change in volatility")
    rho: float = Field(..., description="Per 1% change in the risk-free rate")
    d1: float
    d2: float
