"""Single-period three-statement projection.

Income statement -> cash flow statement -> balance sheet. Cash absorbs the
period's net cash flow and total equity is the balancing plug, so
Assets = Liabilities + Equity holds by construction. The balance check is
still computed and reported.
"""
import logging

from quantdesk.models.valuations import (
    ThreeStatementInputs, ThreeStatementModel,
    IncomeStatement, CashFlowStatement, BalanceSheet, BalanceCheck,
)

logger = logging.getLogger(__name__)

DAYS_IN_YEAR = 365
BALANCE_TOLERANCE = 0.01


def _build_income_statement(inputs: ThreeStatementInputs) -> IncomeStatement:
    revenue = inputs.revenue * (1 + inputs.revenue_growth_rate)
    cogs = revenue * inputs.cogs_percent
    gross_profit = revenue - cogs
    sga = revenue * inputs.sga_percent
    rnd = revenue * inputs.rnd_percent
    opex = sga + rnd
    depreciation = inputs.prior_ppe * inputs.depreciation_percent
    ebitda = gross_profit - opex
    ebit = ebitda - depreciation
    interest_expense = (inputs.prior_short_term_debt + inputs.prior_long_term_debt) * inputs.interest_rate
    ebt = ebit - interest_expense
    taxes = max(0.0, ebt * inputs.tax_rate)

    return IncomeStatement(
        revenue=revenue,
        cogs=cogs,
        gross_profit=gross_profit,
        opex=opex,
        sga=sga,
        rnd=rnd,
        ebitda=ebitda,
        depreciation=depreciation,
        ebit=ebit,
        interest_expense=interest_expense,
        ebt=ebt,
        taxes=taxes,
        net_income=ebt - taxes,
    )


def build_three_statement_model(inputs: ThreeStatementInputs) -> ThreeStatementModel:
    income = _build_income_statement(inputs)

    # Working capital from day counts
    accounts_receivable = income.revenue * inputs.dso / DAYS_IN_YEAR
    inventory = income.cogs * inputs.dio / DAYS_IN_YEAR
    accounts_payable = income.cogs * inputs.dpo / DAYS_IN_YEAR
    delta_ar = accounts_receivable - inputs.prior_ar
    delta_inventory = inventory - inputs.prior_inventory
    delta_ap = accounts_payable - inputs.prior_ap
    change_in_working_capital = -(delta_ar + delta_inventory - delta_ap)

    capex = income.revenue * inputs.capex_percent
    operating_cash_flow = income.net_income + income.depreciation + change_in_working_capital
    investing_cash_flow = -capex
    dividends = max(0.0, income.net_income * inputs.dividend_payout_ratio)
    financing_cash_flow = -dividends
    net_cash_flow = operating_cash_flow + investing_cash_flow + financing_cash_flow
    ending_cash = inputs.prior_cash + net_cash_flow

    cash_flow = CashFlowStatement(
        net_income=income.net_income,
        depreciation=income.depreciation,
        change_in_working_capital=change_in_working_capital,
        operating_cash_flow=operating_cash_flow,
        capex=capex,
        investing_cash_flow=investing_cash_flow,
        dividends=dividends,
        financing_cash_flow=financing_cash_flow,
        net_cash_flow=net_cash_flow,
        ending_cash=ending_cash,
    )

    ppe = inputs.prior_ppe - income.depreciation + capex
    total_current_assets = ending_cash + accounts_receivable + inventory
    total_assets = total_current_assets + ppe

    total_current_liabilities = accounts_payable + inputs.prior_short_term_debt
    total_liabilities = total_current_liabilities + inputs.prior_long_term_debt

    retained_earnings = inputs.prior_retained_earnings + income.net_income - dividends
    total_equity = total_assets - total_liabilities

    balance_sheet = BalanceSheet(
        cash=ending_cash,
        accounts_receivable=accounts_receivable,
        inventory=inventory,
        total_current_assets=total_current_assets,
        ppe=ppe,
        total_assets=total_assets,
        accounts_payable=accounts_payable,
        short_term_debt=inputs.prior_short_term_debt,
        total_current_liabilities=total_current_liabilities,
        long_term_debt=inputs.prior_long_term_debt,
        total_liabilities=total_liabilities,
        retained_earnings=retained_earnings,
        total_equity=total_equity,
    )

    liabilities_plus_equity = total_liabilities + total_equity
    balanced = abs(total_assets - liabilities_plus_equity) < BALANCE_TOLERANCE
    if not balanced:
        logger.warning(
            f"Balance sheet out of balance: assets={total_assets:.2f}, "
            f"liabilities+equity={liabilities_plus_equity:.2f}"
        )

    return ThreeStatementModel(
        income_statement=income,
        balance_sheet=balance_sheet,
        cash_flow_statement=cash_flow,
        balance_check=BalanceCheck(
            assets=total_assets,
            liabilities_plus_equity=liabilities_plus_equity,
            balanced=balanced,
        ),
    )
