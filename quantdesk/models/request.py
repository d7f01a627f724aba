from typing import Any, Optional

from pydantic import Field

from quantdesk.models.base import EngineModel
from quantdesk.models.portfolio import PortfolioHolding
from quantdesk.models.valuations import DCFInputs, SensitivityRange


class OperationRequest(EngineModel):
    """`{type, params}` envelope shared by the analysis and deal endpoints."""
    type: Optional[str] = Field(None, description="Operation name, e.g. 'dcf' or 'lbo'")
    params: dict[str, Any] = Field(default_factory=dict, description="Operation-specific input")


class SensitivityRequest(EngineModel):
    dcf_inputs: DCFInputs
    wacc_range: SensitivityRange
    growth_range: SensitivityRange


class PortfolioRequest(EngineModel):
    type: str = Field("analyze", description="analyze, optimize, tax_harvest or monte_carlo")
    holdings: list[PortfolioHolding] = Field(default_factory=list)
    risk_free_rate: Optional[float] = Field(None, description="Defaults to the configured risk-free rate")
    short_term_tax_rate: float = 0.37
    long_term_tax_rate: float = 0.20
    years: Optional[float] = Field(None, description="Monte Carlo horizon in years")
    num_simulations: Optional[int] = Field(None, description="Monte Carlo path count")
    seed: Optional[int] = Field(None, description="Monte Carlo seed for reproducible runs")
