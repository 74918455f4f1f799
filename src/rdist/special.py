"""Scalar building blocks used by the distribution functions.

``dbinom_raw`` is Catherine Loader's saddle-point evaluation of the binomial
density. It never forms factorials, so it stays accurate and finite for very
large trial counts and for non-integer arguments (which the beta density
relies on).
"""

from __future__ import annotations

import math

from scipy.special import betaln, gammaln

from .core import DBL_MIN, M_LN_2PI, M_LN_SQRT_2PI
from .scales import (
    exp_if_requested_scale_is_direct,
    one_in_requested_scale,
    return_domain_error,
    zero_in_requested_scale,
)

# Stirling-formula error terms of the asymptotic series for log(n!).
S0 = 1.0 / 12.0
S1 = 1.0 / 360.0
S2 = 1.0 / 1260.0
S3 = 1.0 / 1680.0
S4 = 1.0 / 1188.0

# stirlerr(n / 2) for n = 0, ..., 30; the n = 0 entry is a placeholder.
SFERR_HALVES = (
    0.0,
    0.1534264097200273452913848,
    0.0810614667953272582196702,
    0.0548141210519176538961390,
    0.0413406959554092940938221,
    0.03316287351993628748511048,
    0.02767792568499833914878929,
    0.02374616365629749597132920,
    0.02079067210376509311152277,
    0.01848845053267318523077934,
    0.01664469118982119216319487,
    0.01513497322191737887351255,
    0.01387612882307074799874573,
    0.01281046524292022692424986,
    0.01189670994589177009505572,
    0.01110455975820691732662991,
    0.010411265261972096497478567,
    0.009799416126158803298389475,
    0.009255462182712732917728637,
    0.008768700134139385462952823,
    0.008330563433362871256469318,
    0.007934114564314020547248100,
    0.007573675487951840794972024,
    0.007244554301320383179543912,
    0.006942840107209529865664152,
    0.006665247032707682442354394,
    0.006408994188004207068439631,
    0.006171712263039457647532867,
    0.005951370112758847735624416,
    0.005746216513010115682023589,
    0.005554733551962801371038690,
)


def lbeta(a: float, b: float) -> float:
    """Natural logarithm of the beta function."""
    return float(betaln(a, b))


def stirlerr(n: float) -> float:
    """Error of Stirling's approximation: ``log(n!) - log(sqrt(2 pi n) (n/e)^n)``."""
    if n <= 15.0:
        nn = n + n
        if nn == int(nn):
            return SFERR_HALVES[int(nn)]
        return float(gammaln(n + 1.0)) - (n + 0.5) * math.log(n) + n - M_LN_SQRT_2PI

    nn = n * n
    if n > 500:
        return (S0 - S1 / nn) / n
    if n > 80:
        return (S0 - (S1 - S2 / nn) / nn) / n
    if n > 35:
        return (S0 - (S1 - (S2 - S3 / nn) / nn) / nn) / n
    return (S0 - (S1 - (S2 - (S3 - S4 / nn) / nn) / nn) / nn) / n


def bd0(x: float, np_: float) -> float:
    """Deviance term ``x log(x / np) + np - x`` evaluated without cancellation."""
    if not math.isfinite(x) or not math.isfinite(np_) or np_ == 0.0:
        return return_domain_error("bd0")

    if abs(x - np_) < 0.1 * (x + np_):
        v = (x - np_) / (x + np_)
        s = (x - np_) * v
        if abs(s) < DBL_MIN:
            return s
        ej = 2 * x * v
        v = v * v
        for j in range(1, 1000):
            ej *= v
            s1 = s + ej / ((j << 1) + 1)
            if s1 == s:
                return s1
            s = s1
    return x * math.log(x / np_) + np_ - x


def dbinom_raw(x: float, n: float, p: float, q: float, log: bool) -> float:
    """Binomial density at ``x`` for ``n`` trials, without argument checks.

    ``q`` is ``1 - p`` supplied by the caller, which keeps precision when the
    complement is known more accurately than it can be recomputed.
    """
    if p == 0:
        return one_in_requested_scale(log) if x == 0 else zero_in_requested_scale(log)
    if q == 0:
        return one_in_requested_scale(log) if x == n else zero_in_requested_scale(log)

    if x == 0:
        if n == 0:
            return one_in_requested_scale(log)
        lc = -bd0(n, n * q) - n * p if p < 0.1 else n * math.log(q)
        return exp_if_requested_scale_is_direct(log, lc)
    if x == n:
        lc = -bd0(n, n * p) - n * q if q < 0.1 else n * math.log(p)
        return exp_if_requested_scale_is_direct(log, lc)
    if x < 0 or x > n:
        return zero_in_requested_scale(log)

    lc = stirlerr(n) - stirlerr(x) - stirlerr(n - x) - bd0(x, n * p) - bd0(n - x, n * q)
    lf = M_LN_2PI + math.log(x) + math.log1p(-x / n)
    return exp_if_requested_scale_is_direct(log, lc - 0.5 * lf)


__all__ = ["lbeta", "stirlerr", "bd0", "dbinom_raw"]
