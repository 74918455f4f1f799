"""Core dataclasses and numerical constants for rdist modules."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

DBL_EPSILON = sys.float_info.epsilon
DBL_MIN = sys.float_info.min
DBL_MAX = sys.float_info.max
DBL_MIN_EXP = sys.float_info.min_exp
DBL_MANT_DIG = sys.float_info.mant_dig

M_LN2 = math.log(2.0)
M_LN_2PI = math.log(2.0 * math.pi)
M_LN_SQRT_2PI = 0.5 * M_LN_2PI
M_1_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)

# Name of the evaluation-point argument for each function kind.
FUNCTION_KINDS = {"density": "x", "cdf": "q", "quantile": "p"}


@dataclass(slots=True)
class Evaluation:
    """Recycled arguments and results of one vectorized distribution call."""

    distribution: str
    kind: str
    arguments: dict[str, list[Any]]
    values: np.ndarray
    flags: dict[str, bool] = field(default_factory=dict)

    def __len__(self) -> int:
        return int(self.values.size)

    def to_frame(self) -> pd.DataFrame:
        """Return a tidy data frame with one row per output position."""
        frame = pd.DataFrame({name: column for name, column in self.arguments.items()})
        frame[self.kind] = self.values
        for name, flag in self.flags.items():
            frame[name] = flag
        return frame


__all__ = [
    "DBL_EPSILON",
    "DBL_MIN",
    "DBL_MAX",
    "DBL_MIN_EXP",
    "DBL_MANT_DIG",
    "M_LN2",
    "M_LN_2PI",
    "M_LN_SQRT_2PI",
    "M_1_SQRT_2PI",
    "FUNCTION_KINDS",
    "Evaluation",
]
