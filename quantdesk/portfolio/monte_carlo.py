"""Forward simulation of portfolio value under Geometric Brownian Motion.

    V(t + dt) = V(t) * exp[(mu - sigma^2/2) dt + sigma sqrt(dt) Z],  Z ~ N(0, 1)

Paths are independent, so a host may shard ``num_simulations`` across
workers, each with its own seeded generator.
"""
import logging
import math
import random

from quantdesk.errors import InvalidSimulationParametersError
from quantdesk.kernel.sampling import make_rng, standard_normal
from quantdesk.models.portfolio import MonteCarloResult, Percentiles

logger = logging.getLogger(__name__)

MAX_RETURNED_PATHS = 50


def simulate_path(
    initial_value: float,
    drift: float,
    diffusion: float,
    total_steps: int,
    rng: random.Random,
) -> list[float]:
    """One GBM path including the starting value."""
    path = [initial_value]
    value = initial_value
    for _ in range(total_steps):
        value *= math.exp(drift + diffusion * standard_normal(rng))
        path.append(value)
    return path


def _percentile(sorted_values: list[float], p: float) -> float:
    index = min(int(math.floor(p * len(sorted_values))), len(sorted_values) - 1)
    return sorted_values[index]


def run_monte_carlo(
    initial_value: float,
    expected_return: float,
    volatility: float,
    years: float = 5,
    num_simulations: int = 1000,
    steps_per_year: int = 12,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> MonteCarloResult:
    """Distribution of the portfolio value after ``years``.

    Pass ``rng`` (or ``seed``) for reproducible runs.
    """
    if num_simulations < 1:
        raise InvalidSimulationParametersError(
            f"numSimulations must be at least 1 (got {num_simulations})"
        )
    if steps_per_year < 1:
        raise InvalidSimulationParametersError(
            f"stepsPerYear must be at least 1 (got {steps_per_year})"
        )

    rng = make_rng(seed, rng)
    dt = 1 / steps_per_year
    total_steps = int(math.floor(years * steps_per_year))
    drift = (expected_return - 0.5 * volatility * volatility) * dt
    diffusion = volatility * math.sqrt(dt)

    paths: list[list[float]] = []
    final_values: list[float] = []
    for sim in range(num_simulations):
        path = simulate_path(initial_value, drift, diffusion, total_steps, rng)
        if sim < MAX_RETURNED_PATHS:
            paths.append(path)
        final_values.append(path[-1])

    final_values.sort()
    losses = sum(1 for v in final_values if v < initial_value)

    logger.debug(
        f"Monte Carlo: {num_simulations} path(s) x {total_steps} step(s), "
        f"median={_percentile(final_values, 0.50):.2f}"
    )

    return MonteCarloResult(
        percentiles=Percentiles(
            p5=_percentile(final_values, 0.05),
            p25=_percentile(final_values, 0.25),
            p50=_percentile(final_values, 0.50),
            p75=_percentile(final_values, 0.75),
            p95=_percentile(final_values, 0.95),
        ),
        paths=paths,
        final_values=final_values,
        probability_of_loss=losses / num_simulations,
    )
