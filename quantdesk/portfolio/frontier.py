"""Markowitz efficient frontier via the closed-form two-fund solution.

For target return mu_t, minimising w'Sw subject to w'mu = mu_t and w'1 = 1
gives, with A = 1'S^-1 mu, B = mu'S^-1 mu, C = 1'S^-1 1 and D = BC - A^2:

    w*(mu_t) = (1/D)[B S^-1 1 - A S^-1 mu] + (mu_t/D)[C S^-1 mu - A S^-1 1]

Negative weights from the unconstrained solution are clamped to zero and the
vector renormalised. This approximates a long-only QP; it is not one.
"""
import logging
import math

from quantdesk.errors import EmptyPortfolioError, NotPositiveDefiniteError
from quantdesk.kernel.linalg import Matrix, dot, invert_spd, mat_vec, quadratic_form, zeros
from quantdesk.models.portfolio import (
    PortfolioHolding, OptimizationResult, EfficientFrontierPoint,
    PortfolioSnapshot, RebalancingAction, SymbolWeight,
)
from quantdesk.portfolio.analysis import (
    DEFAULT_RISK_FREE_RATE, expected_returns, volatilities, sharpe_ratio,
)

logger = logging.getLogger(__name__)

SAME_CLASS_CORRELATION = 0.5
CROSS_CLASS_CORRELATION = 0.2
SINGULARITY_THRESHOLD = 1e-10
REBALANCE_DEADBAND = 0.02
DEFAULT_FRONTIER_POINTS = 30


def build_covariance_matrix(holdings: list[PortfolioHolding]) -> Matrix:
    """Covariance from each holding's volatility and a class-based correlation."""
    vols = volatilities(holdings)
    n = len(holdings)
    cov = zeros(n, n)
    for i in range(n):
        for j in range(n):
            if i == j:
                corr = 1.0
            elif holdings[i].asset_class == holdings[j].asset_class:
                corr = SAME_CLASS_CORRELATION
            else:
                corr = CROSS_CLASS_CORRELATION
            cov[i][j] = vols[i] * vols[j] * corr
    return cov


def _make_point(
    holdings: list[PortfolioHolding],
    weights: list[float],
    returns: list[float],
    cov: Matrix,
    risk_free_rate: float,
) -> EfficientFrontierPoint:
    port_return = dot(weights, returns)
    port_vol = math.sqrt(max(0.0, quadratic_form(weights, cov)))
    return EfficientFrontierPoint(
        expected_return=port_return,
        volatility=port_vol,
        sharpe_ratio=sharpe_ratio(port_return, port_vol, risk_free_rate),
        weights=[SymbolWeight(symbol=h.symbol, weight=w) for h, w in zip(holdings, weights)],
    )


def _clamp_long_only(weights: list[float]) -> list[float] | None:
    clamped = [max(0.0, w) if math.isfinite(w) else 0.0 for w in weights]
    total = sum(clamped)
    if total <= 0:
        return None
    return [w / total for w in clamped]


def _analytical_frontier(
    holdings: list[PortfolioHolding],
    returns: list[float],
    cov: Matrix,
    risk_free_rate: float,
    num_points: int,
) -> list[EfficientFrontierPoint]:
    """Frontier points, or an empty list when the closed form is unusable."""
    n = len(holdings)
    if n < 2:
        return []

    try:
        sigma_inv = invert_spd(cov)
    except (NotPositiveDefiniteError, ZeroDivisionError) as e:
        logger.warning(f"Covariance inversion failed: {e}")
        return []

    ones = [1.0] * n
    inv_mu = mat_vec(sigma_inv, returns)
    inv_ones = mat_vec(sigma_inv, ones)
    a = dot(ones, inv_mu)
    b = dot(returns, inv_mu)
    c = dot(ones, inv_ones)
    d = b * c - a * a

    if not math.isfinite(d) or abs(d) < SINGULARITY_THRESHOLD:
        logger.info(f"Covariance system is singular (D={d:.3e})")
        return []

    min_return = min(returns) * 0.5
    max_return = max(returns) * 1.2
    denom = max(num_points - 1, 1)

    points: list[EfficientFrontierPoint] = []
    for p in range(num_points):
        target = min_return + (max_return - min_return) * (p / denom)
        raw = [
            (b * inv_ones[i] - a * inv_mu[i]) / d + target * (c * inv_mu[i] - a * inv_ones[i]) / d
            for i in range(n)
        ]
        weights = _clamp_long_only(raw)
        if weights is None:
            continue
        points.append(_make_point(holdings, weights, returns, cov, risk_free_rate))
    return points


def _rebalancing_actions(
    target: EfficientFrontierPoint,
    current_weights: list[float],
    total_value: float,
) -> list[RebalancingAction]:
    actions: list[RebalancingAction] = []
    for tw, current in zip(target.weights, current_weights):
        diff = tw.weight - current
        if diff > REBALANCE_DEADBAND:
            action = "buy"
            reason = f"Increase allocation by {diff:.1%} to improve risk-adjusted returns."
        elif diff < -REBALANCE_DEADBAND:
            action = "sell"
            reason = f"Reduce allocation by {abs(diff):.1%}, overweight relative to optimal."
        else:
            action = "hold"
            reason = "Position is near target allocation."
        actions.append(RebalancingAction(
            symbol=tw.symbol,
            current_weight=current,
            target_weight=tw.weight,
            action=action,
            amount=abs(diff) * total_value,
            reason=reason,
        ))
    return actions


def optimize_portfolio(
    holdings: list[PortfolioHolding],
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    num_frontier_points: int = DEFAULT_FRONTIER_POINTS,
) -> OptimizationResult:
    """Efficient frontier, max-Sharpe portfolio and the trades to reach it."""
    if not holdings:
        raise EmptyPortfolioError("At least one holding is required to optimize a portfolio")

    n = len(holdings)
    returns = expected_returns(holdings)
    cov = build_covariance_matrix(holdings)

    total_value = sum(h.market_value for h in holdings)
    current_weights = [
        h.market_value / total_value if total_value > 0 else 1 / n for h in holdings
    ]
    current = _make_point(holdings, current_weights, returns, cov, risk_free_rate)

    frontier = _analytical_frontier(holdings, returns, cov, risk_free_rate, num_frontier_points)

    if frontier:
        # max() keeps the first point on ties; with zero volatility every
        # Sharpe is 0, so the lowest-target point wins
        optimal = max(frontier, key=lambda pt: pt.sharpe_ratio)
    else:
        logger.info(f"Falling back to equal weights for {n} holding(s)")
        optimal = _make_point(holdings, [1 / n] * n, returns, cov, risk_free_rate)
        frontier = [optimal]

    return OptimizationResult(
        optimal_portfolio=optimal,
        efficient_frontier=frontier,
        current_portfolio=PortfolioSnapshot(
            expected_return=current.expected_return,
            volatility=current.volatility,
            sharpe_ratio=current.sharpe_ratio,
        ),
        rebalancing_actions=_rebalancing_actions(optimal, current_weights, total_value),
    )
