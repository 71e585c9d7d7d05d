"""Arithmetic primitives and the weighted moment recurrence."""

from .normalize import central_moments, kurtosis_of, skewness_of, variance_of  # noqa: F401
from .primitives import MAX_ORDER, binomial, factorial, power, validate_order  # noqa: F401
from .recurrence import (  # noqa: F401
    central_moment_step,
    kurtosis_step,
    mean_step,
    skewness_step,
    variance_step,
)

__all__ = [
    "MAX_ORDER",
    "binomial",
    "central_moment_step",
    "central_moments",
    "factorial",
    "kurtosis_of",
    "kurtosis_step",
    "mean_step",
    "power",
    "skewness_of",
    "skewness_step",
    "validate_order",
    "variance_of",
    "variance_step",
]
