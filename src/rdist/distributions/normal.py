"""Normal distribution functions."""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from scipy.special import log_ndtr, ndtr, ndtri, ndtri_exp

from ..core import DBL_MANT_DIG, DBL_MAX, DBL_MIN_EXP, M_1_SQRT_2PI, M_LN2, M_LN_SQRT_2PI
from ..multiplex import vectorize
from ..sampling import RandomState, draw
from ..scales import (
    force_int,
    quantile_boundaries,
    return_domain_error,
    tail_one,
    tail_zero,
    zero_in_requested_scale,
)

# beyond this |z| the density underflows to zero
_UNDERFLOW_Z = math.sqrt(-2 * M_LN2 * (DBL_MIN_EXP + 1 - DBL_MANT_DIG))


@vectorize
def dnorm(x: float, mean: float = 0.0, sd: float = 1.0, log: bool = False) -> float:
    """Density of the normal distribution."""
    if math.isnan(x) or math.isnan(mean) or math.isnan(sd):
        return x + mean + sd
    if sd < 0:
        return return_domain_error("dnorm")
    if not math.isfinite(sd):
        return zero_in_requested_scale(log)
    if not math.isfinite(x) and mean == x:
        # x - mean is NaN
        return math.nan
    if sd == 0:
        return math.inf if x == mean else zero_in_requested_scale(log)

    z = (x - mean) / sd
    if not math.isfinite(z):
        return zero_in_requested_scale(log)
    z = abs(z)
    if z >= 2 * math.sqrt(DBL_MAX):
        return zero_in_requested_scale(log)
    if log:
        return -(M_LN_SQRT_2PI + 0.5 * z * z + math.log(sd))
    if z < 5:
        return M_1_SQRT_2PI * math.exp(-0.5 * z * z) / sd
    if z > _UNDERFLOW_Z:
        return 0.0

    # split z so that -z^2/2 is computed without cancellation
    x1 = math.ldexp(force_int(math.ldexp(z, 16)), -16)
    x2 = z - x1
    return M_1_SQRT_2PI / sd * (math.exp(-0.5 * x1 * x1) * math.exp((-0.5 * x2 - x1) * x2))


@vectorize
def pnorm(
    q: float,
    mean: float = 0.0,
    sd: float = 1.0,
    lower_tail: bool = True,
    log_p: bool = False,
) -> float:
    """Distribution function of the normal distribution."""
    if math.isnan(q) or math.isnan(mean) or math.isnan(sd):
        return q + mean + sd
    if not math.isfinite(q) and mean == q:
        return math.nan
    if sd <= 0:
        if sd < 0:
            return return_domain_error("pnorm")
        return tail_zero(lower_tail, log_p) if q < mean else tail_one(lower_tail, log_p)

    z = (q - mean) / sd
    if not math.isfinite(z):
        return tail_zero(lower_tail, log_p) if q < mean else tail_one(lower_tail, log_p)
    if not lower_tail:
        z = -z
    return float(log_ndtr(z)) if log_p else float(ndtr(z))


@vectorize
def qnorm(
    p: float,
    mean: float = 0.0,
    sd: float = 1.0,
    lower_tail: bool = True,
    log_p: bool = False,
) -> float:
    """Quantile function of the normal distribution."""
    if math.isnan(p) or math.isnan(mean) or math.isnan(sd):
        return p + mean + sd

    boundary = quantile_boundaries("qnorm", p, -math.inf, math.inf, lower_tail, log_p)
    if boundary is not None:
        return boundary
    if sd < 0:
        return return_domain_error("qnorm")
    if sd == 0:
        return mean

    z = float(ndtri_exp(p)) if log_p else float(ndtri(p))
    if not lower_tail:
        z = -z
    return mean + sd * z


def _rnorm_one(rng: np.random.Generator, mean: float, sd: float) -> float:
    if math.isnan(mean) or not math.isfinite(sd) or sd < 0:
        return return_domain_error("rnorm")
    if sd == 0 or not math.isfinite(mean):
        return mean
    return mean + sd * float(rng.standard_normal())


def rnorm(
    n: Any,
    mean: Any = 0.0,
    sd: Any = 1.0,
    *,
    random_state: RandomState = None,
) -> np.ndarray:
    """Random variates from the normal distribution."""
    return draw(n, _rnorm_one, mean, sd, routine="rnorm", random_state=random_state)


__all__ = ["dnorm", "pnorm", "qnorm", "rnorm"]
