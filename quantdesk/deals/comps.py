import math
import statistics
from dataclasses import dataclass
from typing import Callable

from quantdesk.deals.formatting import format_compact
from quantdesk.models.deals import (
    CompanyMetrics, CompsRequest, CompsResult, CompsMultiple,
    ImpliedValuation, PeerValue,
)

Ratio = Callable[[CompanyMetrics], float | None]


def _ev_to_revenue(m: CompanyMetrics) -> float | None:
    if not m.enterprise_value or not m.revenue:
        return None
    return m.enterprise_value / m.revenue


def _ev_to_ebitda(m: CompanyMetrics) -> float | None:
    if not m.enterprise_value or not m.ebitda:
        return None
    return m.enterprise_value / m.ebitda


def _price_to_earnings(m: CompanyMetrics) -> float | None:
    if not m.market_cap or not m.net_income or m.net_income <= 0:
        return None
    return m.market_cap / m.net_income


@dataclass(frozen=True)
class _MultipleSpec:
    metric: str
    ratio: Ratio
    fundamental: Callable[[CompanyMetrics], float | None]


MULTIPLES: list[_MultipleSpec] = [
    _MultipleSpec("EV / Revenue", _ev_to_revenue, lambda m: m.revenue),
    _MultipleSpec("EV / EBITDA", _ev_to_ebitda, lambda m: m.ebitda),
    _MultipleSpec("P / E", _price_to_earnings, lambda m: m.net_income),
]


def _is_defined(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def _premium(target: float | None, peer_median: float) -> float | None:
    """Target premium (+) or discount (-) to the peer median, in percent."""
    if target is None or peer_median == 0:
        return None
    return (target - peer_median) / peer_median * 100


def compute_comps_valuation(request: CompsRequest) -> CompsResult:
    """Peer multiple statistics and implied values from the peer medians."""
    target = request.target_metrics
    multiples: list[CompsMultiple] = []
    implied: list[ImpliedValuation] = []

    for spec in MULTIPLES:
        target_value = spec.ratio(target)
        peer_values = [PeerValue(symbol=p.symbol, value=spec.ratio(p.metrics)) for p in request.peers]
        valid = sorted(p.value for p in peer_values if _is_defined(p.value))

        if not valid:
            continue

        peer_median = statistics.median_high(valid)
        multiples.append(CompsMultiple(
            metric=spec.metric,
            target=target_value,
            peer_median=peer_median,
            peer_mean=statistics.mean(valid),
            peer_min=valid[0],
            peer_max=valid[-1],
            peers=peer_values,
            premium=_premium(target_value, peer_median),
        ))

        implied_value = peer_median * (spec.fundamental(target) or 0.0)
        if implied_value > 0:
            implied_price = (
                implied_value / target.shares_outstanding if target.shares_outstanding else None
            )
            implied.append(ImpliedValuation(
                method=f"{spec.metric} (Peer Median)",
                implied_ev=implied_value,
                implied_price=implied_price,
            ))

    avg_implied = statistics.mean(v.implied_ev for v in implied) if implied else 0.0

    summary = (
        f"Comparable analysis for {request.target_symbol} against {len(request.peers)} peers. "
        f"Average implied EV: ${format_compact(avg_implied)}."
    )
    if target.enterprise_value:
        verdict = "potential upside" if avg_implied > target.enterprise_value else "premium to peers"
        summary += f" Current EV: ${format_compact(target.enterprise_value)}, {verdict}."

    return CompsResult(
        target_symbol=request.target_symbol,
        multiples=multiples,
        implied_valuations=implied,
        summary=summary,
    )
