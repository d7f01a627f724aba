from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from quantdesk.models.base import EngineModel


class AssetClass(str, Enum):
    EQUITY = "equity"
    FIXED_INCOME = "fixed_income"
    COMMODITY = "commodity"
    CRYPTO = "crypto"
    REIT = "reit"
    CASH = "cash"


class PortfolioHolding(EngineModel):
    symbol: str
    name: Optional[str] = None
    shares: float
    current_price: float
    cost_basis: float = Field(..., description="Per-share cost basis")
    expected_return: Optional[float] = Field(None, description="Annualized expected return (0.12 = 12%)")
    volatility: Optional[float] = Field(None, description="Annualized volatility (0.25 = 25%)")
    asset_class: AssetClass = AssetClass.EQUITY
    holding_days: int = Field(0, description="Days held, drives short/long-term tax treatment")

    @property
    def market_value(self) -> float:
        return self.shares * self.current_price

    @property
    def total_cost(self) -> float:
        return self.shares * self.cost_basis


class HoldingAnalysis(EngineModel):
    symbol: str
    market_value: float
    weight: float
    gain_loss: float
    return_pct: float
    is_unrealized_loss: bool
    is_long_term: bool


class AllocationBreakdown(EngineModel):
    asset_class: str
    weight: float
    value: float
    color: str


class RiskMetrics(EngineModel):
    expected_return: float
    volatility: float
    sharpe_ratio: float
    var95: float = Field(..., description="One-day parametric VaR at 95%")
    cvar95: float = Field(..., description="One-day expected shortfall beyond the 95% quantile")
    max_drawdown_estimate: float
    portfolio_beta: float


class PortfolioAnalysis(EngineModel):
    total_value: float
    total_cost: float
    total_gain_loss: float
    total_return: float
    holdings: list[HoldingAnalysis]
    allocation: list[AllocationBreakdown]
    risk_metrics: RiskMetrics


class SymbolWeight(EngineModel):
    symbol: str
    weight: float


class EfficientFrontierPoint(EngineModel):
    expected_return: float
    volatility: float
    sharpe_ratio: float
    weights: list[SymbolWeight]


class PortfolioSnapshot(EngineModel):
    expected_return: float
    volatility: float
    sharpe_ratio: float


class RebalancingAction(EngineModel):
    symbol: str
    current_weight: float
    target_weight: float
    action: Literal["buy", "sell", "hold"]
    amount: float
    reason: str


class OptimizationResult(EngineModel):
    optimal_portfolio: EfficientFrontierPoint
    efficient_frontier: list[EfficientFrontierPoint]
    current_portfolio: PortfolioSnapshot
    rebalancing_actions: list[RebalancingAction]


class ReplacementSecurity(EngineModel):
    symbol: str
    name: str
    correlation: float


class TaxLossCandidate(EngineModel):
    symbol: str
    unrealized_loss: float
    cost_basis: float = Field(..., description="Total cost basis of the position")
    current_value: float
    holding_days: int
    is_long_term: bool
    tax_rate: float
    tax_saving: float
    suggested_replacement: ReplacementSecurity
    wash_sale_risk: bool


class TaxLossHarvestResult(EngineModel):
    total_harvestable_loss: float
    tax_savings_estimate: float
    candidates: list[TaxLossCandidate]


class Percentiles(EngineModel):
    p5: float
    p25: float
    p50: float
    p75: float
    p95: float


class MonteCarloResult(EngineModel):
    percentiles: Percentiles
    paths: list[list[float]] = Field(..., description="Bounded sample of simulated paths for charting")
    final_values: list[float] = Field(..., description="Final value of every path, sorted ascending")
    probability_of_loss: float
