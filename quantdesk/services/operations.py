"""Operation dispatch for the three JSON endpoints.

Each handler validates the raw ``params`` into the engine's input model,
calls the engine and returns its typed result. Unknown operation names and
invalid parameters surface as ``EngineInputError`` subclasses.
"""
import logging
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from quantdesk.deals.cim import generate_cim
from quantdesk.deals.comps import compute_comps_valuation
from quantdesk.deals.lbo import run_lbo
from quantdesk.deals.scoring import score_deal
from quantdesk.errors import InvalidParametersError, UnknownOperationError
from quantdesk.models.base import EngineModel
from quantdesk.models.deals import CIMRequest, CompsRequest, DealScoringRequest, LBOInputs
from quantdesk.models.request import PortfolioRequest, SensitivityRequest
from quantdesk.models.valuations import (
    BlackScholesInputs, DCFInputs, ThreeStatementInputs, WACCInputs,
)
from quantdesk.portfolio.analysis import analyze_portfolio
from quantdesk.portfolio.frontier import optimize_portfolio
from quantdesk.portfolio.monte_carlo import run_monte_carlo
from quantdesk.portfolio.tax_harvest import harvest_tax_losses
from quantdesk.services.settings import EngineSettings
from quantdesk.valuation.black_scholes import price_option
from quantdesk.valuation.dcf import compute_dcf_valuation, compute_sensitivity_table
from quantdesk.valuation.three_statement import build_three_statement_model
from quantdesk.valuation.wacc import compute_wacc

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=EngineModel)

DEFAULT_SIMULATION_YEARS = 5
DEFAULT_NUM_SIMULATIONS = 1000


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "Invalid parameters: " + "; ".join(parts)


def parse_params(model: type[M], params: Any) -> M:
    try:
        return model.model_validate(params)
    except ValidationError as e:
        raise InvalidParametersError(format_validation_error(e)) from e


def _sensitivity(params: dict) -> EngineModel:
    req = parse_params(SensitivityRequest, params)
    return compute_sensitivity_table(req.dcf_inputs, req.wacc_range, req.growth_range)


FINANCIAL_ANALYSIS_OPERATIONS: dict[str, Callable[[dict], EngineModel]] = {
    "wacc": lambda params: compute_wacc(parse_params(WACCInputs, params)),
    "dcf": lambda params: compute_dcf_valuation(parse_params(DCFInputs, params)),
    "sensitivity": _sensitivity,
    "three_statement": lambda params: build_three_statement_model(parse_params(ThreeStatementInputs, params)),
    "black_scholes": lambda params: price_option(parse_params(BlackScholesInputs, params)),
}

DEAL_OPERATIONS: dict[str, Callable[[dict], EngineModel]] = {
    "deal_score": lambda params: score_deal(parse_params(DealScoringRequest, params)),
    "lbo": lambda params: run_lbo(parse_params(LBOInputs, params)),
    "comps": lambda params: compute_comps_valuation(parse_params(CompsRequest, params)),
    "cim": lambda params: generate_cim(parse_params(CIMRequest, params)),
}

PORTFOLIO_OPERATIONS = ("analyze", "optimize", "tax_harvest", "monte_carlo")


def _dispatch(
    registry: dict[str, Callable[[dict], EngineModel]],
    operation: str | None,
    params: dict,
) -> EngineModel:
    handler = registry.get(operation or "")
    if handler is None:
        raise UnknownOperationError(operation, list(registry))
    logger.info(f"Dispatching operation '{operation}'")
    return handler(params)


def run_financial_analysis(operation: str | None, params: dict) -> EngineModel:
    return _dispatch(FINANCIAL_ANALYSIS_OPERATIONS, operation, params)


def run_deal_operation(operation: str | None, params: dict) -> EngineModel:
    return _dispatch(DEAL_OPERATIONS, operation, params)


def _simulation_count(requested: int | None, settings: EngineSettings) -> int:
    count = requested if requested is not None else DEFAULT_NUM_SIMULATIONS
    if count > settings.monte_carlo_max_simulations:
        logger.warning(
            f"Requested {count} simulations, clamping to {settings.monte_carlo_max_simulations}"
        )
        count = settings.monte_carlo_max_simulations
    return count


def run_portfolio_operation(
    request: PortfolioRequest,
    settings: EngineSettings,
) -> tuple[EngineModel, dict[str, Any]]:
    """Run a portfolio operation.

    Returns the engine result plus any extra top-level response fields
    (``portfolioValue`` for Monte Carlo runs).
    """
    if request.type not in PORTFOLIO_OPERATIONS:
        raise UnknownOperationError(request.type, list(PORTFOLIO_OPERATIONS))

    rf = request.risk_free_rate if request.risk_free_rate is not None else settings.default_risk_free_rate
    logger.info(f"Dispatching portfolio operation '{request.type}' for {len(request.holdings)} holding(s)")

    if request.type == "analyze":
        return analyze_portfolio(request.holdings, rf), {}
    if request.type == "optimize":
        return optimize_portfolio(request.holdings, rf), {}
    if request.type == "tax_harvest":
        return harvest_tax_losses(
            request.holdings, request.short_term_tax_rate, request.long_term_tax_rate
        ), {}

    analysis = analyze_portfolio(request.holdings, rf)
    result = run_monte_carlo(
        initial_value=analysis.total_value,
        expected_return=analysis.risk_metrics.expected_return,
        volatility=analysis.risk_metrics.volatility,
        years=request.years if request.years is not None else DEFAULT_SIMULATION_YEARS,
        num_simulations=_simulation_count(request.num_simulations, settings),
        seed=request.seed if request.seed is not None else settings.monte_carlo_seed,
    )
    return result, {"portfolioValue": analysis.total_value}
