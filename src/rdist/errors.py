"""Diagnostic channel shared by every distribution routine.

Numerical problems never raise: a routine reports them here and carries on
with a sentinel result (NaN, ``-1``) or a best-effort value. Reports go to
the :mod:`warnings` machinery, so callers can filter, record or escalate
them, and are mirrored to the ``rdist.errors`` logger at DEBUG level.
"""

from __future__ import annotations

import logging
from warnings import warn

logger = logging.getLogger(__name__)


class MathlibWarning(RuntimeWarning):
    """Base category for diagnostics emitted by rdist routines."""


class DomainWarning(MathlibWarning):
    """An argument lies outside the mathematically valid range."""


class ConsistencyWarning(MathlibWarning):
    """Inputs are usable but inconsistent, e.g. probabilities not summing to one."""


class NonIntegerWarning(MathlibWarning):
    """A count argument was not integer-valued."""


def ml_domain_error(routine: str) -> None:
    """Report an out-of-domain argument for ``routine``."""
    message = f"argument out of domain in '{routine}'"
    logger.debug("%s: %s", routine, message)
    warn(message, DomainWarning, stacklevel=3)


def mathlib_warning(
    routine: str,
    template: str,
    *args: object,
    category: type[MathlibWarning] = ConsistencyWarning,
) -> None:
    """Report a non-fatal problem with a printf-style message."""
    message = template % args if args else template
    logger.debug("%s: %s", routine, message)
    warn(f"{routine}: {message}", category, stacklevel=3)


__all__ = [
    "MathlibWarning",
    "DomainWarning",
    "ConsistencyWarning",
    "NonIntegerWarning",
    "ml_domain_error",
    "mathlib_warning",
]
