from typing import Literal, Optional

from pydantic import Field

from quantdesk.models.base import EngineModel


class DealDimensionScores(EngineModel):
    market_position: float
    financial_health: float
    management_quality: float
    growth_potential: float
    regulatory_risk: float
    esg_compliance: float
    synergy_potential: float
    valuation_attractiveness: float


class DealScoringRequest(EngineModel):
    company_name: str
    scores: DealDimensionScores = Field(..., description="Each dimension rated 1-10")
    weights: Optional[DealDimensionScores] = Field(None, description="Custom weights, normalized to sum to 1")


Rating = Literal["Highly Attractive", "Attractive", "Neutral", "Cautious", "Pass"]


class DealDimension(EngineModel):
    name: str
    score: float
    weight: float
    weighted_score: float
    assessment: str
    color: str


class RadarPoint(EngineModel):
    dimension: str
    score: float
    weight: float
    weighted_score: float


class DealScoringResult(EngineModel):
    company_name: str
    overall_score: float
    rating: Rating
    dimensions: list[DealDimension]
    radar_chart_data: list[RadarPoint]
    recommendation: str


class LBOInputs(EngineModel):
    enterprise_value: float = Field(..., description="Purchase enterprise value")
    debt_amount: float = Field(..., description="Acquisition debt")
    equity_contribution: Optional[float] = Field(None, description="Defaults to enterprise value minus debt")
    interest_rate: float
    projected_ebitda: list[float] = Field(..., alias="projectedEBITDA")
    annual_debt_repayment: float = Field(..., description="Mandatory amortization per year")
    exit_multiple: float = Field(..., description="EV / EBITDA at exit")
    tax_rate: float
    capex_percent: float = Field(..., description="CapEx as % of EBITDA")
    nwc_change_percent: float = Field(..., description="Change in NWC as % of EBITDA")
    cash_sweep: bool = Field(True, description="Apply FCF left after mandatory repayment to the debt")


class DebtScheduleYear(EngineModel):
    year: int
    beginning_debt: float
    interest_payment: float
    mandatory_repayment: float
    optional_repayment: float
    ending_debt: float


class LBOCashFlow(EngineModel):
    year: int
    ebitda: float
    interest: float
    taxes: float
    capex: float
    nwc_change: float
    free_cash_flow: float
    debt_repayment: float


class LeveragePoint(EngineModel):
    year: int
    debt_to_ebitda: float
    interest_coverage: float


class LBOResult(EngineModel):
    equity_contribution: float
    exit_year: int
    exit_enterprise_value: float
    exit_equity_value: float
    moic: float
    irr: float
    debt_schedule: list[DebtScheduleYear]
    cash_flow_summary: list[LBOCashFlow]
    leverage_profile: list[LeveragePoint]


class CompanyMetrics(EngineModel):
    name: Optional[str] = None
    market_cap: Optional[float] = None
    enterprise_value: Optional[float] = None
    revenue: Optional[float] = None
    ebitda: Optional[float] = None
    net_income: Optional[float] = None
    eps: Optional[float] = None
    revenue_growth: Optional[float] = None
    ebitda_margin: Optional[float] = None
    shares_outstanding: Optional[float] = None


class PeerMetrics(EngineModel):
    symbol: str
    metrics: CompanyMetrics


class CompsRequest(EngineModel):
    target_symbol: str
    target_metrics: CompanyMetrics
    peers: list[PeerMetrics] = Field(default_factory=list)


class PeerValue(EngineModel):
    symbol: str
    value: Optional[float] = None


class CompsMultiple(EngineModel):
    metric: str
    target: Optional[float] = None
    peer_median: float
    peer_mean: float
    peer_min: float
    peer_max: float
    peers: list[PeerValue]
    premium: Optional[float] = Field(None, description="Target premium to the peer median, in percent")


class ImpliedValuation(EngineModel):
    method: str
    implied_ev: float = Field(..., alias="impliedEV")
    implied_price: Optional[float] = None


class CompsResult(EngineModel):
    target_symbol: str
    multiples: list[CompsMultiple]
    implied_valuations: list[ImpliedValuation]
    summary: str


class ManagementMember(EngineModel):
    name: str
    title: str
    bio: Optional[str] = None


class FinancialHighlight(EngineModel):
    year: int
    revenue: float
    ebitda: float
    net_income: float


class CIMRequest(EngineModel):
    company_name: str
    industry: str
    description: str
    founded_year: Optional[int] = None
    headquarters: Optional[str] = None
    employees: Optional[int] = None
    revenue: Optional[float] = None
    ebitda: Optional[float] = None
    ebitda_margin: Optional[float] = None
    revenue_growth: Optional[float] = None
    key_products: list[str] = Field(default_factory=list)
    competitive_advantages: list[str] = Field(default_factory=list)
    management_team: list[ManagementMember] = Field(default_factory=list)
    financial_highlights: list[FinancialHighlight] = Field(default_factory=list)


class DataPoint(EngineModel):
    label: str
    value: str


class CIMSubsection(EngineModel):
    title: str
    content: str
    data_points: Optional[list[DataPoint]] = None


class CIMSection(EngineModel):
    id: str
    title: str
    icon: str
    subsections: list[CIMSubsection]


class CIMTemplate(EngineModel):
    title: str
    date: str
    disclaimer: str
    sections: list[CIMSection]
