"""Distribution registry and canonical implementations."""

from __future__ import annotations

from .base import (
    Distribution,
    DistributionFunction,
    clear_registry,
    get_distribution,
    list_distributions,
    load_config_paths,
    load_entry_points,
    load_yaml_config,
    register_distribution,
)
from .beta import dbeta, pbeta, qbeta, rbeta
from .binomial import dbinom, pbinom, qbinom, rbinom
from .multinomial import dmultinom, rmultinom, rmultinom_into
from .normal import dnorm, pnorm, qnorm, rnorm

__all__ = [
    "Distribution",
    "DistributionFunction",
    "STANDARD_DISTRIBUTIONS",
    "get_distribution",
    "list_distributions",
    "register_distribution",
    "clear_registry",
    "load_yaml_config",
    "dbeta",
    "pbeta",
    "qbeta",
    "rbeta",
    "dbinom",
    "pbinom",
    "qbinom",
    "rbinom",
    "dnorm",
    "pnorm",
    "qnorm",
    "rnorm",
    "dmultinom",
    "rmultinom",
    "rmultinom_into",
]

STANDARD_DISTRIBUTIONS = [
    Distribution(
        name="beta",
        parameters=("shape1", "shape2"),
        density=dbeta,
        cdf=pbeta,
        quantile=qbeta,
        random=rbeta,
        notes="Beta distribution; zero or infinite shapes give point masses.",
    ),
    Distribution(
        name="binom",
        parameters=("size", "prob"),
        density=dbinom,
        cdf=pbinom,
        quantile=qbinom,
        random=rbinom,
        notes="Binomial distribution with saddle-point mass evaluation.",
    ),
    Distribution(
        name="norm",
        parameters=("mean", "sd"),
        density=dnorm,
        cdf=pnorm,
        quantile=qnorm,
        random=rnorm,
        notes="Normal distribution; sd = 0 gives a point mass at the mean.",
    ),
]


def _register_builtin() -> None:
    for dist in STANDARD_DISTRIBUTIONS:
        register_distribution(dist, overwrite=True)


_register_builtin()
load_entry_points()
load_config_paths()
