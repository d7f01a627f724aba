import pytest
from fastapi.testclient import TestClient

from quantdesk.models.portfolio import AssetClass, PortfolioHolding
from quantdesk.models.valuations import DCFInputs


def _make_holding(
    symbol: str,
    shares: float = 10,
    current_price: float = 100.0,
    cost_basis: float = 100.0,
    expected_return: float | None = None,
    volatility: float | None = None,
    asset_class: AssetClass = AssetClass.EQUITY,
    holding_days: int = 400,
) -> PortfolioHolding:
    return PortfolioHolding(
        symbol=symbol,
        shares=shares,
        current_price=current_price,
        cost_basis=cost_basis,
        expected_return=expected_return,
        volatility=volatility,
        asset_class=asset_class,
        holding_days=holding_days,
    )


@pytest.fixture
def holdings() -> list[PortfolioHolding]:
    return [
        _make_holding("AAPL", shares=10, current_price=150, cost_basis=100,
                     expected_return=0.12, volatility=0.28, holding_days=500),
        _make_holding("TLT", shares=20, current_price=90, cost_basis=100,
                     expected_return=0.04, volatility=0.12,
                     asset_class=AssetClass.FIXED_INCOME, holding_days=200),
        _make_holding("GLD", shares=5, current_price=180, cost_basis=200,
                     expected_return=0.06, volatility=0.16,
                     asset_class=AssetClass.COMMODITY, holding_days=20),
    ]


@pytest.fixture
def dcf_inputs() -> DCFInputs:
    return DCFInputs(
        free_cash_flows=[100, 110, 121, 133, 146],
        wacc=0.10,
        terminal_growth_rate=0.025,
        net_debt=200,
        shares_outstanding=50,
    )


@pytest.fixture
def client():
    from quantdesk.main import app

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_holding():
    return _make_holding
