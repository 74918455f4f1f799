"""Beta distribution: density, distribution function, quantiles and variates.

Shape parameters may be zero or infinite. Those limits are point masses
(at 0, at 1, split over {0, 1}, or at 1/2) and are resolved explicitly
before any generic formula runs.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from scipy.special import betainc, betaincc, betainccinv, betaincinv, hyp2f1

from ..core import DBL_EPSILON, DBL_MIN
from ..multiplex import vectorize
from ..sampling import RandomState, draw
from ..scales import (
    exp_if_requested_scale_is_direct,
    lower_tail_probability,
    quantile_boundaries,
    ratio_vanishes,
    return_domain_error,
    safe_exp,
    safe_log,
    tail_one,
    tail_value,
    tail_zero,
    value_in_requested_scale,
    zero_in_requested_scale,
)
from ..special import dbinom_raw, lbeta


def _is_degenerate(a: float, b: float) -> bool:
    return a == 0 or b == 0 or not math.isfinite(a) or not math.isfinite(b)


def _dbeta_log_direct(x: float, a: float, b: float) -> float:
    return (a - 1) * math.log(x) + (b - 1) * math.log1p(-x) - lbeta(a, b)


def _dbeta_log_binomial(x: float, a: float, b: float) -> float:
    return math.log(a + b - 1) + dbinom_raw(a - 1, a + b - 2, x, 1 - x, True)


@vectorize
def dbeta(x: float, shape1: float, shape2: float, log: bool = False) -> float:
    """Density of the beta distribution."""
    a, b = shape1, shape2
    if math.isnan(x) or math.isnan(a) or math.isnan(b):
        return x + a + b

    if a < 0 or b < 0:
        return return_domain_error("dbeta")
    if x < 0 or x > 1:
        return zero_in_requested_scale(log)

    # limit cases for (a, b) are point masses
    if _is_degenerate(a, b):
        if a == 0 and b == 0:
            # mass 1/2 at each of {0, 1}
            return math.inf if x in (0, 1) else zero_in_requested_scale(log)
        if a == 0 or ratio_vanishes(a, b):
            return math.inf if x == 0 else zero_in_requested_scale(log)
        if b == 0 or ratio_vanishes(b, a):
            return math.inf if x == 1 else zero_in_requested_scale(log)
        # a = b = inf
        return math.inf if x == 0.5 else zero_in_requested_scale(log)

    if x == 0:
        if a > 1:
            return zero_in_requested_scale(log)
        if a < 1:
            return math.inf
        return value_in_requested_scale(log, b)
    if x == 1:
        if b > 1:
            return zero_in_requested_scale(log)
        if b < 1:
            return math.inf
        return value_in_requested_scale(log, a)

    # lbeta(a, b) < 710 whenever a <= 2 or b <= 2
    if a <= 2 or b <= 2:
        log_value = _dbeta_log_direct(x, a, b)
    else:
        log_value = _dbeta_log_binomial(x, a, b)
    return exp_if_requested_scale_is_direct(log, log_value)


def _pbeta_raw(x: float, a: float, b: float, lower_tail: bool, log_p: bool) -> float:
    if _is_degenerate(a, b):
        if a == 0 and b == 0:
            return tail_value(lower_tail, log_p, 0.5)
        if a == 0 or ratio_vanishes(a, b):
            return tail_one(lower_tail, log_p)
        if b == 0 or ratio_vanishes(b, a):
            return tail_zero(lower_tail, log_p)
        return tail_zero(lower_tail, log_p) if x < 0.5 else tail_one(lower_tail, log_p)

    value = float(betainc(a, b, x) if lower_tail else betaincc(a, b, x))
    if log_p and value < DBL_MIN:
        return _log_pbeta_small(x, a, b, lower_tail)
    return value_in_requested_scale(log_p, value)


def _log_pbeta_small(x: float, a: float, b: float, lower_tail: bool) -> float:
    """Log of a tail probability too small to be represented directly.

    Uses I_x(a, b) = x^a (1 - x)^b 2F1(a + b, 1; a + 1; x) / (a B(a, b)); the upper
    tail is the lower tail of Beta(b, a) at 1 - x.
    """
    log_x = math.log(x)
    log_1mx = math.log1p(-x)
    if lower_tail:
        series = float(hyp2f1(a + b, 1.0, a + 1.0, x))
        return a * log_x + b * log_1mx - math.log(a) - lbeta(a, b) + safe_log(series)
    series = float(hyp2f1(a + b, 1.0, b + 1.0, 0.5 - x + 0.5))
    return b * log_1mx + a * log_x - math.log(b) - lbeta(a, b) + safe_log(series)


@vectorize
def pbeta(
    q: float,
    shape1: float,
    shape2: float,
    lower_tail: bool = True,
    log_p: bool = False,
) -> float:
    """Distribution function of the beta distribution."""
    a, b = shape1, shape2
    if math.isnan(q) or math.isnan(a) or math.isnan(b):
        return q + a + b
    if a < 0 or b < 0:
        return return_domain_error("pbeta")
    if q <= 0:
        return tail_zero(lower_tail, log_p)
    if q >= 1:
        return tail_one(lower_tail, log_p)
    return _pbeta_raw(q, a, b, lower_tail, log_p)


def _qbeta_log_lower(log_p: float, a: float, b: float) -> float:
    # Newton steps on t = log(x); log F(e^t) is close to linear in t near zero
    t = (log_p + math.log(a) + lbeta(a, b)) / a
    for _ in range(100):
        x = safe_exp(t)
        if x == 0:
            return 0.0
        log_cdf = _log_pbeta_small(x, a, b, True)
        slope = safe_exp(dbeta.scalar(x, a, b, True) + t - log_cdf)
        step = (log_cdf - log_p) / slope
        t -= step
        if abs(step) <= 4 * DBL_EPSILON * abs(t):
            break
    return safe_exp(t)


@vectorize
def qbeta(
    p: float,
    shape1: float,
    shape2: float,
    lower_tail: bool = True,
    log_p: bool = False,
) -> float:
    """Quantile function of the beta distribution."""
    a, b = shape1, shape2
    if math.isnan(p) or math.isnan(a) or math.isnan(b):
        return p + a + b
    if a < 0 or b < 0:
        return return_domain_error("qbeta")

    boundary = quantile_boundaries("qbeta", p, 0.0, 1.0, lower_tail, log_p)
    if boundary is not None:
        return boundary

    if _is_degenerate(a, b):
        if a == 0 and b == 0:
            lower = lower_tail_probability(lower_tail, log_p, p)
            if lower < 0.5:
                return 0.0
            if lower > 0.5:
                return 1.0
            return 0.5
        if a == 0 or ratio_vanishes(a, b):
            return 0.0
        if b == 0 or ratio_vanishes(b, a):
            return 1.0
        return 0.5

    prob = math.exp(p) if log_p else p
    if log_p and prob < DBL_MIN:
        # exp(p) underflows; invert the log-scale distribution function instead
        if lower_tail:
            return _qbeta_log_lower(p, a, b)
        return 0.5 - _qbeta_log_lower(p, b, a) + 0.5
    if lower_tail:
        return float(betaincinv(a, b, prob))
    return float(betainccinv(a, b, prob))


def _rbeta_one(rng: np.random.Generator, a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b) or a < 0 or b < 0:
        return return_domain_error("rbeta")
    if not math.isfinite(a) and not math.isfinite(b):
        return 0.5
    if a == 0 and b == 0:
        return 0.0 if rng.random() < 0.5 else 1.0
    # at least one of a, b is finite and positive from here on
    if not math.isfinite(a) or b == 0:
        return 1.0
    if not math.isfinite(b) or a == 0:
        return 0.0
    return float(rng.beta(a, b))


def rbeta(
    n: Any,
    shape1: Any,
    shape2: Any,
    *,
    random_state: RandomState = None,
) -> np.ndarray:
    """Random variates from the beta distribution."""
    return draw(n, _rbeta_one, shape1, shape2, routine="rbeta", random_state=random_state)


__all__ = ["dbeta", "pbeta", "qbeta", "rbeta"]
