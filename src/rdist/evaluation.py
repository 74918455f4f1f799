"""Tabulate vectorized distribution calls through the registry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from .core import FUNCTION_KINDS, Evaluation
from .distributions import get_distribution
from .multiplex import recycled


def evaluate(
    distribution: str,
    kind: str,
    arguments: Mapping[str, Any],
    **flags: bool,
) -> Evaluation:
    """Evaluate the ``kind`` function of a registered distribution.

    ``arguments`` holds the evaluation point (``x`` for densities, ``q`` for
    distribution functions, ``p`` for quantiles) and any distribution
    parameters, each a scalar or a sequence. Omitted parameters fall back to
    the function defaults. ``flags`` are passed through unchanged
    (``log``, ``lower_tail``, ``log_p``).
    """
    if kind not in FUNCTION_KINDS:
        raise ValueError(
            f"Unknown function kind '{kind}'. Expected one of {', '.join(FUNCTION_KINDS)}."
        )
    dist = get_distribution(distribution)
    func = dist.function(kind)

    point = FUNCTION_KINDS[kind]
    if point not in arguments:
        raise ValueError(f"Missing evaluation point '{point}' for {dist.name} {kind}.")
    unknown = sorted(set(arguments) - {point, *dist.parameters})
    if unknown:
        raise ValueError(f"Unknown arguments for {dist.name}: {', '.join(unknown)}.")
    names = [point] + [name for name in dist.parameters if name in arguments]

    ordered = {name: arguments[name] for name in names}
    try:
        values = np.atleast_1d(np.asarray(func(**ordered, **flags), dtype=float))
    except TypeError as exc:
        raise ValueError(f"Invalid call to {dist.name} {kind}: {exc}") from exc
    columns = recycled(*ordered.values(), *flags.values())
    return Evaluation(
        distribution=dist.name,
        kind=kind,
        arguments=dict(zip(names, columns, strict=False)),
        values=values,
        flags=dict(flags),
    )


__all__ = ["evaluate"]
