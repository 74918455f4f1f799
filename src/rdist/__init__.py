"""Top-level package exports for rdist."""

from __future__ import annotations

from importlib import metadata

__version__ = "0.1.0"

try:
    __version__ = metadata.version("rdist")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    pass

from . import core as core  # noqa: F401
from . import distributions as distributions  # noqa: F401
from .core import Evaluation  # noqa: F401
from .distributions import (  # noqa: F401
    dbeta,
    dbinom,
    dmultinom,
    dnorm,
    pbeta,
    pbinom,
    pnorm,
    qbeta,
    qbinom,
    qnorm,
    rbeta,
    rbinom,
    rmultinom,
    rmultinom_into,
    rnorm,
)
from .errors import (  # noqa: F401
    ConsistencyWarning,
    DomainWarning,
    MathlibWarning,
    NonIntegerWarning,
)
from .evaluation import evaluate  # noqa: F401
from .multiplex import multiplex, vectorize  # noqa: F401

__all__ = [
    "__version__",
    "core",
    "distributions",
    "Evaluation",
    "evaluate",
    "multiplex",
    "vectorize",
    "MathlibWarning",
    "DomainWarning",
    "ConsistencyWarning",
    "NonIntegerWarning",
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
