from quantdesk.models.base import EngineModel
from quantdesk.models.valuations import (
    WACCInputs, WACCResult, DCFInputs, DCFResult, YearlyPV,
    SensitivityRange, SensitivityBaseCase, SensitivityResult,
    ThreeStatementInputs, ThreeStatementModel, IncomeStatement, BalanceSheet,
    CashFlowStatement, BalanceCheck, BlackScholesInputs, BlackScholesResult,
)
from quantdesk.models.portfolio import (
    AssetClass, PortfolioHolding, PortfolioAnalysis, HoldingAnalysis,
    AllocationBreakdown, RiskMetrics, EfficientFrontierPoint, SymbolWeight,
    PortfolioSnapshot, RebalancingAction, OptimizationResult,
    ReplacementSecurity, TaxLossCandidate, TaxLossHarvestResult,
    Percentiles, MonteCarloResult,
)
from quantdesk.models.deals import (
    DealDimensionScores, DealScoringRequest, DealScoringResult, DealDimension, RadarPoint,
    LBOInputs, LBOResult, DebtScheduleYear, LBOCashFlow, LeveragePoint,
    CompanyMetrics, PeerMetrics, CompsRequest, CompsResult, CompsMultiple,
    ImpliedValuation, PeerValue,
    CIMRequest, CIMTemplate, CIMSection, CIMSubsection, DataPoint,
    ManagementMember, FinancialHighlight,
)
from quantdesk.models.request import OperationRequest, SensitivityRequest, PortfolioRequest

__all__ = [
    "EngineModel",
    "WACCInputs", "WACCResult", "DCFInputs", "DCFResult", "YearlyPV",
    "SensitivityRange", "SensitivityBaseCase", "SensitivityResult",
    "ThreeStatementInputs", "ThreeStatementModel", "IncomeStatement", "BalanceSheet",
    "CashFlowStatement", "BalanceCheck", "BlackScholesInputs", "BlackScholesResult",
    "AssetClass", "PortfolioHolding", "PortfolioAnalysis", "HoldingAnalysis",
    "AllocationBreakdown", "RiskMetrics", "EfficientFrontierPoint", "SymbolWeight",
    "PortfolioSnapshot", "RebalancingAction", "OptimizationResult",
    "ReplacementSecurity", "TaxLossCandidate", "TaxLossHarvestResult",
    "Percentiles", "MonteCarloResult",
    "DealDimensionScores", "DealScoringRequest", "DealScoringResult", "DealDimension", "RadarPoint",
    "LBOInputs", "LBOResult", "DebtScheduleYear", "LBOCashFlow", "LeveragePoint",
    "CompanyMetrics", "PeerMetrics", "CompsRequest", "CompsResult", "CompsMultiple",
    "ImpliedValuation", "PeerValue",
    "CIMRequest", "CIMTemplate", "CIMSection", "CIMSubsection", "DataPoint",
    "ManagementMember", "FinancialHighlight",
    "OperationRequest", "SensitivityRequest", "PortfolioRequest",
]
