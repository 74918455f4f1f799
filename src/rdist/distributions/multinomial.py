"""Multinomial distribution: random count vectors and their probability mass.

``rmultinom_into`` draws a count vector by sequential conditioning: the
first ``K - 1`` buckets are binomial draws over the trials still
unassigned, each with success probability ``prob[k] / (remaining mass)``,
and the last bucket takes whatever is left. The count vector therefore
always sums to ``size`` exactly, even when ``prob`` is only approximately
normalised.
"""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence
from typing import Any

import numpy as np
from scipy.special import gammaln

from ..errors import ConsistencyWarning, mathlib_warning, ml_domain_error
from ..multiplex import as_sequence
from ..sampling import RandomState, as_generator, draw_count
from ..scales import (
    exp_if_requested_scale_is_direct,
    one_in_requested_scale,
    zero_in_requested_scale,
)

PROBABILITY_SUM_TOLERANCE = 1e-7
# trial counts must fit the generator's int64 argument
_MAX_SIZE = float(np.iinfo(np.int64).max)


def rmultinom_into(
    size: float,
    prob: Sequence[float],
    out: MutableSequence[int],
    *,
    random_state: RandomState = None,
) -> None:
    """Fill ``out[:K]`` with one multinomial draw of ``size`` trials.

    ``prob`` is read but never modified. Invalid input is flagged in place:
    a bad ``size`` sets ``out[0] = -1`` and a bad probability sets the
    matching bucket to ``-1``; both emit a domain diagnostic. With ``K < 1``
    nothing is written.
    """
    k_buckets = len(prob)
    if k_buckets < 1:
        ml_domain_error("rmultinom")
        return
    if len(out) < k_buckets:
        raise ValueError("Output vector is shorter than the probability vector.")

    if (
        math.isnan(size)
        or size < 0
        or not size < _MAX_SIZE
        or size != math.floor(size)
    ):
        out[0] = -1
        ml_domain_error("rmultinom")
        return

    p_tot = 0.0
    for k in range(k_buckets):
        pp = float(prob[k])
        if not math.isfinite(pp) or pp < 0 or pp > 1:
            out[k] = -1
            ml_domain_error("rmultinom")
            return
        p_tot += pp
        out[k] = 0
    if abs(p_tot - 1.0) > PROBABILITY_SUM_TOLERANCE:
        mathlib_warning(
            "rmultinom",
            "probability sum should be 1, but is %g",
            p_tot,
            category=ConsistencyWarning,
        )

    n = int(size)
    if n == 0:
        return
    if k_buckets == 1 and p_tot == 0:
        return

    rng = as_generator(random_state)
    # (p_tot, n) describe the "remaining" binomial
    for k in range(k_buckets - 1):
        pk = float(prob[k])
        if pk != 0:
            pp = pk / p_tot
            # pp > 1 only through rounding
            count = int(rng.binomial(n, pp)) if pp < 1 else n
            out[k] = count
            n -= count
        else:
            out[k] = 0
        if n <= 0:
            return
        p_tot -= pk
    out[k_buckets - 1] = n


def rmultinom(
    size: float,
    prob: Any,
    n: Any = None,
    *,
    random_state: RandomState = None,
) -> np.ndarray:
    """Draw multinomial count vectors.

    Returns a vector of shape ``(K,)`` when ``n`` is omitted, otherwise an
    ``(n, K)`` matrix with one independent draw per row. ``prob`` is used as
    given; sums outside the tolerance are reported and renormalised
    internally.
    """
    probabilities = [float(value) for value in as_sequence(prob)]
    rng = as_generator(random_state)
    if n is None:
        out = np.zeros(len(probabilities), dtype=np.int64)
        rmultinom_into(size, probabilities, out, random_state=rng)
        return out

    draws = np.zeros((draw_count(n), len(probabilities)), dtype=np.int64)
    for row in draws:
        rmultinom_into(size, probabilities, row, random_state=rng)
    return draws


def dmultinom(
    x: Any,
    prob: Any,
    size: int | None = None,
    log: bool = False,
) -> float:
    """Probability of the count vector ``x`` under a multinomial distribution.

    ``prob`` is normalised by its sum. Counts are rounded to the nearest
    integer; ``size`` defaults to their total and must match it otherwise.
    """
    probabilities = np.asarray(as_sequence(prob), dtype=float)
    counts = np.asarray(as_sequence(x), dtype=float)
    if counts.size != probabilities.size:
        raise ValueError("x and prob must be vectors of equal length.")
    if not np.all(np.isfinite(probabilities)) or np.any(probabilities < 0):
        raise ValueError("Probabilities must be finite, non-negative and not all 0.")
    total = float(probabilities.sum())
    if total == 0:
        raise ValueError("Probabilities must be finite, non-negative and not all 0.")
    probabilities = probabilities / total

    if not np.all(np.isfinite(counts)):
        raise ValueError("Counts in x must be finite.")
    counts = np.floor(counts + 0.5)
    if np.any(counts < 0):
        raise ValueError("Counts in x must be non-negative.")
    trials = int(counts.sum())
    if size is None:
        size = trials
    elif size != trials:
        raise ValueError("size != sum(x), i.e. one is wrong.")

    empty = probabilities == 0
    if np.any(empty):
        if np.any(counts[empty] != 0):
            return zero_in_requested_scale(log)
        if np.all(empty):
            return one_in_requested_scale(log)
        counts = counts[~empty]
        probabilities = probabilities[~empty]

    log_value = float(
        gammaln(size + 1) + np.sum(counts * np.log(probabilities) - gammaln(counts + 1))
    )
    return exp_if_requested_scale_is_direct(log, log_value)


__all__ = ["PROBABILITY_SUM_TOLERANCE", "rmultinom_into", "rmultinom", "dmultinom"]
