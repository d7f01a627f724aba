import logging
import math

from quantdesk.models.portfolio import (
    AssetClass, PortfolioHolding, PortfolioAnalysis,
    HoldingAnalysis, AllocationBreakdown, RiskMetrics,
)

logger = logging.getLogger(__name__)

DEFAULT_RISK_FREE_RATE = 0.045
DEFAULT_EXPECTED_RETURN = 0.10
DEFAULT_VOLATILITY = 0.25
LONG_TERM_DAYS = 365
TRADING_DAYS = 252

# Uniform pairwise correlation used for the quick risk snapshot
ANALYSIS_CORRELATION = 0.5

Z_95 = 1.645
# E[Z | Z < -1.645] for a standard normal
EXPECTED_SHORTFALL_95 = 2.063

# Rule of thumb: worst peak-to-trough ~ 2.5 annual standard deviations
DRAWDOWN_VOL_MULTIPLE = 2.5

_CLASS_COLORS: dict[str, str] = {
    AssetClass.EQUITY.value: "#6366f1",
    AssetClass.FIXED_INCOME.value: "#10b981",
    AssetClass.COMMODITY.value: "#f59e0b",
    AssetClass.CRYPTO.value: "#ec4899",
    AssetClass.REIT.value: "#8b5cf6",
    AssetClass.CASH.value: "#64748b",
}
_FALLBACK_COLOR = "#94a3b8"


def expected_returns(holdings: list[PortfolioHolding]) -> list[float]:
    return [
        h.expected_return if h.expected_return is not None else DEFAULT_EXPECTED_RETURN
        for h in holdings
    ]


def volatilities(holdings: list[PortfolioHolding]) -> list[float]:
    return [h.volatility if h.volatility is not None else DEFAULT_VOLATILITY for h in holdings]


def is_long_term(holding: PortfolioHolding) -> bool:
    return holding.holding_days > LONG_TERM_DAYS


def sharpe_ratio(expected_return: float, volatility: float, risk_free_rate: float) -> float:
    return (expected_return - risk_free_rate) / volatility if volatility > 0 else 0.0


def _analyze_holding(holding: PortfolioHolding, total_value: float) -> HoldingAnalysis:
    market_value = holding.market_value
    gain_loss = holding.shares * (holding.current_price - holding.cost_basis)
    return HoldingAnalysis(
        symbol=holding.symbol,
        market_value=market_value,
        weight=market_value / total_value if total_value > 0 else 0.0,
        gain_loss=gain_loss,
        return_pct=(
            (holding.current_price - holding.cost_basis) / holding.cost_basis
            if holding.cost_basis > 0 else 0.0
        ),
        is_unrealized_loss=gain_loss < 0,
        is_long_term=is_long_term(holding),
    )


def _allocation(holdings: list[PortfolioHolding], total_value: float) -> list[AllocationBreakdown]:
    by_class: dict[str, float] = {}
    for h in holdings:
        cls = h.asset_class.value
        by_class[cls] = by_class.get(cls, 0.0) + h.market_value

    return [
        AllocationBreakdown(
            asset_class=cls,
            weight=value / total_value if total_value > 0 else 0.0,
            value=value,
            color=_CLASS_COLORS.get(cls, _FALLBACK_COLOR),
        )
        for cls, value in by_class.items()
    ]


def _risk_metrics(
    weights: list[float],
    returns: list[float],
    vols: list[float],
    total_value: float,
    risk_free_rate: float,
) -> RiskMetrics:
    portfolio_return = sum(w * r for w, r in zip(weights, returns))

    # Simplified pairwise correlation model, not an empirical covariance
    variance = 0.0
    for i, (w_i, v_i) in enumerate(zip(weights, vols)):
        for j, (w_j, v_j) in enumerate(zip(weights, vols)):
            corr = 1.0 if i == j else ANALYSIS_CORRELATION
            variance += w_i * w_j * v_i * v_j * corr
    portfolio_vol = math.sqrt(max(0.0, variance))

    # Parametric one-day VaR/CVaR scaled from annual figures
    daily_vol = portfolio_vol / math.sqrt(TRADING_DAYS)
    daily_return = portfolio_return / TRADING_DAYS
    var95 = -(daily_return - Z_95 * daily_vol) * total_value
    cvar95 = -(daily_return - EXPECTED_SHORTFALL_95 * daily_vol) * total_value

    return RiskMetrics(
        expected_return=portfolio_return,
        volatility=portfolio_vol,
        sharpe_ratio=sharpe_ratio(portfolio_return, portfolio_vol, risk_free_rate),
        var95=max(0.0, var95),
        cvar95=max(0.0, cvar95),
        max_drawdown_estimate=portfolio_vol * DRAWDOWN_VOL_MULTIPLE,
        # No market series in the core, so beta stays at the market's
        portfolio_beta=1.0,
    )


def analyze_portfolio(
    holdings: list[PortfolioHolding],
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> PortfolioAnalysis:
    """Market value, gain/loss, allocation and risk snapshot of the holdings."""
    total_value = sum(h.market_value for h in holdings)
    total_cost = sum(h.total_cost for h in holdings)
    total_gain_loss = total_value - total_cost

    holding_analysis = [_analyze_holding(h, total_value) for h in holdings]
    risk = _risk_metrics(
        [h.weight for h in holding_analysis],
        expected_returns(holdings),
        volatilities(holdings),
        total_value,
        risk_free_rate,
    )

    logger.debug(
        f"Analyzed {len(holdings)} holding(s): value={total_value:.2f}, vol={risk.volatility:.4f}"
    )

    return PortfolioAnalysis(
        total_value=total_value,
        total_cost=total_cost,
        total_gain_loss=total_gain_loss,
        total_return=total_gain_loss / total_cost if total_cost > 0 else 0.0,
        holdings=holding_analysis,
        allocation=_allocation(holdings, total_value),
        risk_metrics=risk,
    )
