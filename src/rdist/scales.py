"""Return-value conventions shared by every distribution function.

Densities honour a ``log`` flag; cumulative and quantile functions honour a
``lower_tail``/``log_p`` pair. The helpers below are the only place where a
final answer is put into the requested encoding, so that every distribution
agrees on what "zero", "one" and "a value" look like on each scale.
"""

from __future__ import annotations

import math

from .errors import ml_domain_error


def safe_log(value: float) -> float:
    """``log`` with IEEE behaviour at zero and for negative input."""
    if value > 0:
        return math.log(value)
    if value == 0:
        return -math.inf
    return math.nan


def safe_exp(value: float) -> float:
    """``exp`` that overflows to ``inf`` instead of raising."""
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def force_int(value: float) -> float:
    """Round to the nearest integer (ties to even), keeping non-finite values."""
    if not math.isfinite(value):
        return value
    return float(round(value))


def is_non_integer(value: float) -> bool:
    """True when ``value`` is further than a relative 1e-7 from an integer."""
    if not math.isfinite(value):
        return False
    return abs(value - force_int(value)) > 1e-7 * max(1.0, abs(value))


def return_domain_error(routine: str) -> float:
    """Signal an out-of-domain argument for ``routine`` and yield NaN."""
    ml_domain_error(routine)
    return math.nan


def zero_in_requested_scale(log: bool) -> float:
    return -math.inf if log else 0.0


def one_in_requested_scale(log: bool) -> float:
    return 0.0 if log else 1.0


def value_in_requested_scale(log: bool, value: float) -> float:
    return safe_log(value) if log else value


def exp_if_requested_scale_is_direct(log: bool, log_value: float) -> float:
    return log_value if log else safe_exp(log_value)


def ratio_vanishes(numerator: float, denominator: float) -> bool:
    """True when ``numerator / denominator`` evaluates to exactly zero.

    This is the floating-point test used to detect one shape parameter
    dominating another; extreme finite ratios count as the limiting case.
    A zero denominator never vanishes (the IEEE quotient is infinite or NaN).
    """
    if denominator == 0:
        return False
    return numerator / denominator == 0


def tail_zero(lower_tail: bool, log_p: bool) -> float:
    """Probability 0 of the lower tail, expressed in the requested tail."""
    return zero_in_requested_scale(log_p) if lower_tail else one_in_requested_scale(log_p)


def tail_one(lower_tail: bool, log_p: bool) -> float:
    """Probability 1 of the lower tail, expressed in the requested tail."""
    return one_in_requested_scale(log_p) if lower_tail else zero_in_requested_scale(log_p)


def tail_value(lower_tail: bool, log_p: bool, p: float) -> float:
    """Encode a lower-tail probability ``p`` in the requested tail and scale."""
    if lower_tail:
        return value_in_requested_scale(log_p, p)
    if log_p:
        return math.log1p(-p) if p < 1 else -math.inf
    return 0.5 - p + 0.5


def lower_tail_probability(lower_tail: bool, log_p: bool, p: float) -> float:
    """Decode an encoded probability back to a direct lower-tail probability."""
    if log_p:
        return safe_exp(p) if lower_tail else -math.expm1(p)
    return p if lower_tail else 0.5 - p + 0.5


def quantile_boundaries(
    routine: str,
    p: float,
    left: float,
    right: float,
    lower_tail: bool,
    log_p: bool,
) -> float | None:
    """Resolve quantiles at the probability extremes.

    Returns NaN (with a domain diagnostic) for an impossible probability, the
    matching support end for probability 0 or 1, or ``None`` when ``p`` is an
    interior probability and the caller has to invert the distribution.
    """
    if log_p:
        if p > 0:
            return return_domain_error(routine)
        if p == 0:
            return right if lower_tail else left
        if p == -math.inf:
            return left if lower_tail else right
    else:
        if p < 0 or p > 1:
            return return_domain_error(routine)
        if p == 0:
            return left if lower_tail else right
        if p == 1:
            return right if lower_tail else left
    return None


__all__ = [
    "safe_log",
    "safe_exp",
    "force_int",
    "is_non_integer",
    "return_domain_error",
    "zero_in_requested_scale",
    "one_in_requested_scale",
    "value_in_requested_scale",
    "exp_if_requested_scale_is_direct",
    "ratio_vanishes",
    "tail_zero",
    "tail_one",
    "tail_value",
    "lower_tail_probability",
    "quantile_boundaries",
]
