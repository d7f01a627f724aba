"""Tax-loss harvesting candidates.

Losses held for 365 days or less are taxed at the short-term (ordinary
income) rate, longer holdings at the long-term rate. Positions bought within
the last 30 days carry wash-sale risk (IRC section 1091). Each candidate gets
a correlated replacement ETF so market exposure is kept while the loss is
realised.
"""
import logging

from quantdesk.models.portfolio import (
    AssetClass, PortfolioHolding, ReplacementSecurity,
    TaxLossCandidate, TaxLossHarvestResult,
)
from quantdesk.portfolio.analysis import is_long_term

logger = logging.getLogger(__name__)

DEFAULT_SHORT_TERM_RATE = 0.37
DEFAULT_LONG_TERM_RATE = 0.20
WASH_SALE_DAYS = 30


def _etf(symbol: str, name: str, correlation: float) -> ReplacementSecurity:
    return ReplacementSecurity(symbol=symbol, name=name, correlation=correlation)


# Ordered by correlation to the asset class, highest first
REPLACEMENTS: dict[AssetClass, list[ReplacementSecurity]] = {
    AssetClass.EQUITY: [
        _etf("VTI", "Vanguard Total Stock Market ETF", 0.95),
        _etf("ITOT", "iShares Core S&P Total US Stock Market", 0.94),
        _etf("SCHB", "Schwab US Broad Market ETF", 0.93),
    ],
    AssetClass.FIXED_INCOME: [
        _etf("BND", "Vanguard Total Bond Market ETF", 0.92),
        _etf("AGG", "iShares Core US Aggregate Bond", 0.91),
    ],
    AssetClass.COMMODITY: [
        _etf("DBC", "Invesco DB Commodity Index", 0.85),
        _etf("PDBC", "Invesco Optimum Yield Diversified", 0.83),
    ],
    AssetClass.CRYPTO: [
        _etf("BITO", "ProShares Bitcoin Strategy ETF", 0.80),
    ],
    AssetClass.REIT: [
        _etf("VNQ", "Vanguard Real Estate ETF", 0.90),
        _etf("SCHH", "Schwab US REIT ETF", 0.88),
    ],
    AssetClass.CASH: [],
}

FALLBACK_REPLACEMENT = _etf("SPY", "SPDR S&P 500 ETF", 0.85)


def suggest_replacement(holding: PortfolioHolding) -> ReplacementSecurity:
    """Highest-correlation replacement that is not the holding itself."""
    for candidate in REPLACEMENTS.get(holding.asset_class, REPLACEMENTS[AssetClass.EQUITY]):
        if candidate.symbol != holding.symbol:
            return candidate
    return FALLBACK_REPLACEMENT


def harvest_tax_losses(
    holdings: list[PortfolioHolding],
    short_term_rate: float = DEFAULT_SHORT_TERM_RATE,
    long_term_rate: float = DEFAULT_LONG_TERM_RATE,
) -> TaxLossHarvestResult:
    candidates: list[TaxLossCandidate] = []
    total_loss = 0.0
    total_savings = 0.0

    for h in holdings:
        current_value = h.market_value
        cost_basis = h.total_cost
        unrealized = current_value - cost_basis
        if unrealized >= 0:
            continue

        loss = abs(unrealized)
        long_term = is_long_term(h)
        tax_rate = long_term_rate if long_term else short_term_rate
        tax_saving = loss * tax_rate

        candidates.append(TaxLossCandidate(
            symbol=h.symbol,
            unrealized_loss=unrealized,
            cost_basis=cost_basis,
            current_value=current_value,
            holding_days=h.holding_days,
            is_long_term=long_term,
            tax_rate=tax_rate,
            tax_saving=tax_saving,
            suggested_replacement=suggest_replacement(h),
            wash_sale_risk=h.holding_days < WASH_SALE_DAYS,
        ))
        total_loss += loss
        total_savings += tax_saving

    candidates.sort(key=lambda c: c.tax_saving, reverse=True)
    logger.debug(f"Tax-loss harvesting: {len(candidates)} candidate(s), savings={total_savings:.2f}")

    return TaxLossHarvestResult(
        total_harvestable_loss=total_loss,
        tax_savings_estimate=total_savings,
        candidates=candidates,
    )
