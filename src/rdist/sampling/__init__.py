"""Random-variate helpers built on top of the rdist distribution registry."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

import numpy as np

from ..multiplex import as_sequence, multiplex
from ..scales import return_domain_error

RandomState: TypeAlias = np.random.Generator | int | None
ScalarSampler = Callable[..., float]

__all__ = [
    "RandomState",
    "ScalarSampler",
    "as_generator",
    "draw_count",
    "draw",
    "sample_distribution",
]


def as_generator(random_state: RandomState = None) -> np.random.Generator:
    """Return a ``numpy`` generator for a seed, an existing generator or ``None``."""
    return np.random.default_rng(random_state)


def draw_count(n: Any) -> int:
    """Interpret the R-style ``n`` argument of a random generator.

    A sequence of length greater than one asks for as many draws as it has
    elements; otherwise ``n`` itself is the (non-negative) number of draws.
    """
    if np.ndim(n) > 0:
        values = as_sequence(n)
        if len(values) > 1:
            return len(values)
        if not values:
            raise ValueError("Invalid number of draws: empty sequence.")
        n = values[0]
    count = float(n)
    if math.isnan(count) or count < 0 or not math.isfinite(count):
        raise ValueError(f"Invalid number of draws: {n!r}.")
    return int(count)


def draw(
    n: Any,
    sampler: ScalarSampler,
    *params: Any,
    routine: str = "random",
    random_state: RandomState = None,
) -> np.ndarray:
    """Draw ``n`` variates, recycling ``params`` over the draws.

    ``sampler`` receives the generator followed by one value of each
    parameter and returns a single variate (NaN for invalid parameters).
    """
    count = draw_count(n)
    rng = as_generator(random_state)
    if any(len(as_sequence(param)) == 0 for param in params):
        if count:
            return_domain_error(routine)
        return np.full(count, np.nan)
    values = multiplex(lambda *args: sampler(rng, *args), *params, length=count)
    return np.asarray(values, dtype=float)


def sample_distribution(
    distribution: str,
    params: Mapping[str, Any],
    size: int,
    *,
    random_state: RandomState = None,
) -> np.ndarray:
    """Draw samples from a registered distribution."""
    from ..distributions import get_distribution

    dist = get_distribution(distribution)
    if dist.random is None:
        raise ValueError(f"Distribution '{dist.name}' has no random generator.")
    return np.asarray(dist.random(size, **params, random_state=random_state))
