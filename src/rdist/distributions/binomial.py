"""Binomial distribution functions."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from ..core import DBL_EPSILON
from ..errors import NonIntegerWarning, mathlib_warning
from ..multiplex import vectorize
from ..sampling import RandomState, draw
from ..scales import (
    force_int,
    is_non_integer,
    lower_tail_probability,
    quantile_boundaries,
    return_domain_error,
    tail_one,
    tail_zero,
    zero_in_requested_scale,
)
from ..special import dbinom_raw
from .beta import pbeta
from .normal import qnorm


@vectorize
def dbinom(x: float, size: float, prob: float, log: bool = False) -> float:
    """Probability mass function of the binomial distribution."""
    n, p = size, prob
    if math.isnan(x) or math.isnan(n) or math.isnan(p):
        return x + n + p

    if p < 0 or p > 1 or n < 0 or not math.isfinite(n) or is_non_integer(n):
        return return_domain_error("dbinom")
    if is_non_integer(x):
        mathlib_warning("dbinom", "non-integer x = %f", x, category=NonIntegerWarning)
        return zero_in_requested_scale(log)
    if x < 0 or not math.isfinite(x):
        return zero_in_requested_scale(log)

    return dbinom_raw(force_int(x), force_int(n), p, 1 - p, log)


@vectorize
def pbinom(
    q: float,
    size: float,
    prob: float,
    lower_tail: bool = True,
    log_p: bool = False,
) -> float:
    """Distribution function of the binomial distribution."""
    n, p = size, prob
    if math.isnan(q) or math.isnan(n) or math.isnan(p):
        return q + n + p
    if not math.isfinite(n) or not math.isfinite(p):
        return return_domain_error("pbinom")
    if is_non_integer(n):
        mathlib_warning("pbinom", "non-integer n = %f", n, category=NonIntegerWarning)
        return return_domain_error("pbinom")
    n = force_int(n)
    if n < 0 or p < 0 or p > 1:
        return return_domain_error("pbinom")

    if q < 0:
        return tail_zero(lower_tail, log_p)
    if math.isfinite(q):
        q = math.floor(q + 1e-7)
    if n <= q:
        return tail_one(lower_tail, log_p)
    return pbeta.scalar(p, q + 1, n - q, not lower_tail, log_p)


def _search(y: float, z: float, p: float, n: float, pr: float, incr: float) -> tuple[float, float]:
    """Step from ``y`` by ``incr`` until the cdf brackets ``p``; returns ``(y, cdf(y))``."""
    if z >= p:
        # search to the left
        while True:
            if y == 0:
                return y, z
            newz = pbinom.scalar(y - incr, n, pr, True, False)
            if newz < p:
                return y, z
            y = max(0.0, y - incr)
            z = newz
    # search to the right
    while True:
        y = min(y + incr, n)
        if y == n:
            return y, z
        z = pbinom.scalar(y, n, pr, True, False)
        if z >= p:
            return y, z


@vectorize
def qbinom(
    p: float,
    size: float,
    prob: float,
    lower_tail: bool = True,
    log_p: bool = False,
) -> float:
    """Quantile function of the binomial distribution."""
    n, pr = size, prob
    if math.isnan(p) or math.isnan(n) or math.isnan(pr):
        return p + n + pr
    if not math.isfinite(n) or not math.isfinite(pr):
        return return_domain_error("qbinom")
    if not math.isfinite(p) and not log_p:
        return return_domain_error("qbinom")
    if n != math.floor(n + 0.5) or pr < 0 or pr > 1 or n < 0:
        return return_domain_error("qbinom")

    boundary = quantile_boundaries("qbinom", p, 0.0, n, lower_tail, log_p)
    if boundary is not None:
        return boundary
    if pr == 0 or n == 0:
        return 0.0

    q = 1 - pr
    if q == 0:
        return n
    mu = n * pr
    sigma = math.sqrt(n * pr * q)
    gamma = (q - pr) / sigma

    if not lower_tail or log_p:
        p = lower_tail_probability(lower_tail, log_p, p)
        if p == 0:
            return 0.0
        if p == 1:
            return n
    if p + 1.01 * DBL_EPSILON >= 1:
        return n

    # Cornish-Fisher starting value
    z = qnorm.scalar(p, 0.0, 1.0, True, False)
    y = min(math.floor(mu + sigma * (z + gamma * (z * z - 1) / 6) + 0.5), n)
    z = pbinom.scalar(y, n, pr, True, False)

    # fuzz to ensure left continuity
    p *= 1 - 64 * DBL_EPSILON

    if n < 1e5:
        return _search(y, z, p, n, pr, 1.0)[0]
    incr = math.floor(n * 0.001)
    while True:
        oldincr = incr
        y, z = _search(y, z, p, n, pr, incr)
        incr = max(1.0, math.floor(incr / 100))
        if not (oldincr > 1 and incr > n * 1e-15):
            return y


def _rbinom_one(rng: np.random.Generator, size: float, prob: float) -> float:
    if not math.isfinite(size) or not math.isfinite(prob):
        return return_domain_error("rbinom")
    n = force_int(size)
    if n != size or n < 0 or prob < 0 or prob > 1:
        return return_domain_error("rbinom")
    if n == 0 or prob == 0:
        return 0.0
    if prob == 1:
        return n
    return float(rng.binomial(int(n), prob))


def rbinom(
    n: Any,
    size: Any,
    prob: Any,
    *,
    random_state: RandomState = None,
) -> np.ndarray:
    """Random variates from the binomial distribution."""
    return draw(n, _rbinom_one, size, prob, routine="rbinom", random_state=random_state)


__all__ = ["dbinom", "pbinom", "qbinom", "rbinom"]
