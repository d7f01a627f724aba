"""European option pricing under Black-Scholes.

    d1 = [ln(S/K) + (r + sigma^2/2) T] / (sigma sqrt(T))
    d2 = d1 - sigma sqrt(T)
    C  = S N(d1) - K e^{-rT} N(d2)
    P  = K e^{-rT} N(-d2) - S N(-d1)

Theta is reported per calendar day, vega per 1% of volatility and rho per 1%
of the risk-free rate.
"""
import math

from quantdesk.errors import InvalidOptionParametersError
from quantdesk.kernel.normal import normal_cdf, normal_pdf
from quantdesk.models.valuations import BlackScholesInputs, BlackScholesResult


def _validate(inputs: BlackScholesInputs) -> None:
    if inputs.time_to_expiry <= 0:
        raise InvalidOptionParametersError(
            f"Time to expiry must be positive (got {inputs.time_to_expiry})"
        )
    if inputs.volatility <= 0:
        raise InvalidOptionParametersError(
            f"Volatility must be positive (got {inputs.volatility})"
        )
    if inputs.stock_price <= 0 or inputs.strike_price <= 0:
        raise InvalidOptionParametersError(
            f"Stock price and strike must be positive (got S={inputs.stock_price}, K={inputs.strike_price})"
        )


def price_option(inputs: BlackScholesInputs) -> BlackScholesResult:
    _validate(inputs)

    s = inputs.stock_price
    k = inputs.strike_price
    t = inputs.time_to_expiry
    r = inputs.risk_free_rate
    sigma = inputs.volatility

    sqrt_t = math.sqrt(t)
    d1 = (math.log(s / k) + (r + 0.5 * sigma * sigma) * t) / (sigma * sqrt_t)
    d2 = d1 - sigma * sqrt_t

    phi_d1 = normal_pdf(d1)
    discount = math.exp(-r * t)
    decay = -s * phi_d1 * sigma / (2 * sqrt_t)

    if inputs.option_type == "call":
        n_d2 = normal_cdf(d2)
        price = s * normal_cdf(d1) - k * discount * n_d2
        delta = normal_cdf(d1)
        theta = decay - r * k * discount * n_d2
        rho = k * t * discount * n_d2
    else:
        n_neg_d2 = normal_cdf(-d2)
        price = k * discount * n_neg_d2 - s * normal_cdf(-d1)
        delta = normal_cdf(d1) - 1
        theta = decay + r * k * discount * n_neg_d2
        rho = -k * t * discount * n_neg_d2

    gamma = phi_d1 / (s * sigma * sqrt_t)
    vega = s * phi_d1 * sqrt_t

    return BlackScholesResult(
        price=price,
        delta=delta,
        gamma=gamma,
        theta=theta / 365,
        vega=vega / 100,
        rho=rho / 100,
        d1=d1,
        d2=d2,
    )
