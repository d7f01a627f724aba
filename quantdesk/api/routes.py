import asyncio
import math
from typing import Any

from fastapi import APIRouter, Depends

from quantdesk.api.dependencies import get_settings
from quantdesk.models.base import EngineModel
from quantdesk.models.request import OperationRequest, PortfolioRequest
from quantdesk.services.operations import (
    run_deal_operation, run_financial_analysis, run_portfolio_operation,
)
from quantdesk.services.settings import EngineSettings

router = APIRouter(prefix="/api", tags=["engines"])


def _json_safe(value: Any) -> Any:
    """Replace NaN and infinities with None, as JSON.stringify does."""
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def _envelope(operation: str | None, result: EngineModel, **extra: Any) -> dict:
    body = {"success": True, "type": operation, "result": result.model_dump(by_alias=True)}
    body.update(extra)
    return _json_safe(body)


@router.post("/financial-analysis")
async def financial_analysis(request: OperationRequest):
    """WACC, DCF, sensitivity, three-statement and Black-Scholes."""
    result = await asyncio.to_thread(run_financial_analysis, request.type, request.params)
    return _envelope(request.type, result)


@router.post("/portfolio")
async def portfolio(
    request: PortfolioRequest,
    settings: EngineSettings = Depends(get_settings),
):
    """Analysis, optimization, tax-loss harvesting and Monte Carlo."""
    result, extra = await asyncio.to_thread(run_portfolio_operation, request, settings)
    return _envelope(request.type, result, **extra)


@router.post("/ib-pe")
async def ib_pe(request: OperationRequest):
    """Deal scoring, LBO, comparable companies and CIM generation."""
    result = await asyncio.to_thread(run_deal_operation, request.type, request.params)
    return _envelope(request.type, result)
