import math
import random


def standard_normal(rng: random.Random) -> float:
    """One N(0, 1) draw via the Box-Muller transform.

    u1 is taken from (0, 1] so log(u1) is always defined.
    """
    u1 = 1.0 - rng.random()
    u2 = rng.random()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def make_rng(seed: int | None = None, rng: random.Random | None = None) -> random.Random:
    """Return the injected generator, or a fresh one seeded from ``seed``."""
    if rng is not None:
        return rng
    return random.Random(seed)
