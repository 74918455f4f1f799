"""R-style argument recycling for element-wise distribution functions."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import numpy as np

T = TypeVar("T")


def as_sequence(value: Any) -> Sequence[Any]:
    """Return ``value`` as an indexable sequence; scalars become 1-tuples."""
    if np.ndim(value) == 0:
        return (value,)
    if isinstance(value, np.ndarray):
        return value.ravel().tolist()
    return list(value)


def _broadcast_length(sequences: Sequence[Sequence[Any]], length: int | None) -> int:
    if any(len(seq) == 0 for seq in sequences):
        return 0
    if length is not None:
        return length
    return max((len(seq) for seq in sequences), default=0)


def multiplex(func: Callable[..., T], *args: Any, length: int | None = None) -> list[T]:
    """Apply ``func`` element-wise over recycled arguments.

    The output has ``length`` elements when given, otherwise as many as the
    longest argument. Shorter arguments repeat modulo their own length, a
    scalar behaves like a length-one sequence, and an empty argument makes
    the whole result empty. Indices are visited in increasing order.
    """
    sequences = [as_sequence(arg) for arg in args]
    size = _broadcast_length(sequences, length)
    return [func(*(seq[idx % len(seq)] for seq in sequences)) for idx in range(size)]


def recycled(*args: Any, length: int | None = None) -> list[list[Any]]:
    """Return each argument expanded to the common broadcast length."""
    sequences = [as_sequence(arg) for arg in args]
    size = _broadcast_length(sequences, length)
    return [[seq[idx % len(seq)] for idx in range(size)] for seq in sequences]


def vectorize(func: Callable[..., float]) -> Callable[..., Any]:
    """Turn a scalar distribution function into a recycling one.

    Every argument of the wrapped call, defaults included, takes part in the
    recycling. When all of them are scalars the result is a ``float``,
    otherwise a one-dimensional ``numpy.ndarray``. The undecorated function
    stays reachable as ``wrapper.scalar``.
    """
    signature = inspect.signature(func)
    names = tuple(signature.parameters)

    def element(*values: Any) -> float:
        return func(**dict(zip(names, values, strict=True)))

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        bound = signature.bind(*args, **kwargs)
        bound.apply_defaults()
        values = [bound.arguments[name] for name in names]
        results = multiplex(element, *values)
        if all(np.ndim(value) == 0 for value in values):
            return float(results[0])
        return np.asarray(results, dtype=float)

    wrapper.scalar = func  # type: ignore[attr-defined]
    return wrapper


__all__ = ["as_sequence", "multiplex", "recycled", "vectorize"]
