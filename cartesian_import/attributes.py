import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import Any

import numpy as np


@dataclass(frozen=True, slots=True)
class Numeric:
    value: float


@dataclass(frozen=True, slots=True)
class Other:
    pass


AttributeValue = Numeric | Other

OTHER = Other()


def _to_float(value: Real | Decimal) -> float:
    try:
        return float(value)
    except OverflowError:
        # Integers beyond the double range.
        return math.inf if value > 0 else -math.inf


def classify(value: Any) -> AttributeValue:
    """Classify a raw node attribute as numeric or not.

    Booleans are not treated as numbers even though Python considers them
    integers, neither are complex numbers or numeric strings.
    """
    match value:
        case bool():
            return OTHER
        case Real() | Decimal():
            return Numeric(_to_float(value))
        case _:
            return OTHER


def as_float32(value: Any) -> np.float32:
    """The 32-bit coordinate of a raw attribute, with 0 for anything non-numeric."""
    match classify(value):
        case Numeric(value=number):
            # Doubles beyond the float32 range narrow to inf.
            with np.errstate(over="ignore"):
                return np.float32(number)
        case _:
            return np.float32(0.0)
