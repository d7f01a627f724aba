import pytest

from quantdesk.models.valuations import ThreeStatementInputs
from quantdesk.valuation.three_statement import build_three_statement_model


def _make_inputs(**overrides) -> ThreeStatementInputs:
    values = dict(
        revenue=1000.0,
        revenue_growth_rate=0.10,
        cogs_percent=0.55,
        sga_percent=0.15,
        rnd_percent=0.05,
        depreciation_percent=0.10,
        tax_rate=0.25,
        interest_rate=0.06,
        capex_percent=0.04,
        dividend_payout_ratio=0.30,
        prior_cash=120.0,
        prior_ar=90.0,
        prior_inventory=70.0,
        prior_ppe=400.0,
        prior_ap=60.0,
        prior_short_term_debt=50.0,
        prior_long_term_debt=250.0,
        prior_retained_earnings=180.0,
        dso=30,
        dio=45,
        dpo=40,
    )
    values.update(overrides)
    return ThreeStatementInputs(**values)


def test_income_statement():
    model = build_three_statement_model(_make_inputs())
    inc = model.income_statement
    assert inc.revenue == pytest.approx(1100.0)
    assert inc.cogs == pytest.approx(605.0)
    assert inc.opex == pytest.approx(inc.sga + inc.rnd)
    assert inc.depreciation == pytest.approx(40.0)
    assert inc.interest_expense == pytest.approx(18.0)
    assert inc.net_income == pytest.approx(inc.ebt - inc.taxes)


def test_balance_sheet_balances():
    model = build_three_statement_model(_make_inputs())
    check = model.balance_check
    assert check.balanced
    assert check.assets == pytest.approx(check.liabilities_plus_equity)
    assert model.balance_sheet.total_assets == pytest.approx(check.assets)


def test_cash_links_to_cash_flow():
    inputs = _make_inputs()
    model = build_three_statement_model(inputs)
    cf = model.cash_flow_statement
    assert cf.ending_cash == pytest.approx(inputs.prior_cash + cf.net_cash_flow)
    assert model.balance_sheet.cash == cf.ending_cash
    assert cf.net_cash_flow == pytest.approx(
        cf.operating_cash_flow + cf.investing_cash_flow + cf.financing_cash_flow
    )
    assert cf.debt_issuance == 0.0
    assert cf.debt_repayment == 0.0


def test_working_capital_from_day_counts():
    model = build_three_statement_model(_make_inputs())
    bs = model.balance_sheet
    assert bs.accounts_receivable == pytest.approx(1100 * 30 / 365)
    assert bs.inventory == pytest.approx(605 * 45 / 365)
    assert bs.accounts_payable == pytest.approx(605 * 40 / 365)


def test_loss_year_pays_no_tax_or_dividend():
    model = build_three_statement_model(_make_inputs(cogs_percent=0.95))
    inc = model.income_statement
    assert inc.ebt < 0
    assert inc.taxes == 0.0
    assert model.cash_flow_statement.dividends == 0.0
    assert model.balance_check.balanced


def test_ppe_roll_forward():
    model = build_three_statement_model(_make_inputs())
    assert model.balance_sheet.ppe == pytest.approx(400 - 40 + 1100 * 0.04)
