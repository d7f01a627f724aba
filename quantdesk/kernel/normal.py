"""Standard normal distribution functions.

The CDF uses the Abramowitz & Stegun 26.2.17 rational approximation
(absolute error < 7.5e-8):

    Phi(x) = 1 - phi(x) * (b1*t + b2*t^2 + b3*t^3 + b4*t^4 + b5*t^5),  x >= 0
    t = 1 / (1 + p*x)

and the reflection Phi(-x) = 1 - Phi(x) for negative arguments.
"""
import math

_P = 0.2316419
_B1 = 0.319381530
_B2 = -0.356563782
_B3 = 1.781477937
_B4 = -1.821255978
_B5 = 1.330274429

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def normal_pdf(x: float) -> float:
    """phi(x) = exp(-x^2 / 2) / sqrt(2*pi)"""
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)


def normal_cdf(x: float) -> float:
    if x < -10.0:
        return 0.0
    if x > 10.0:
        return 1.0

    abs_x = abs(x)
    t = 1.0 / (1.0 + _P * abs_x)
    poly = ((((_B5 * t + _B4) * t + _B3) * t + _B2) * t + _B1) * t
    upper = normal_pdf(abs_x) * poly  # P(Z > |x|)

    return 1.0 - upper if x >= 0 else upper
