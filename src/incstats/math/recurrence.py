"""Weighted online central-moment recurrence.

Every accumulator state is a cumulative weight ``W``, a running mean, and a
moment vector indexed by order, where ``moments[i]`` holds the unnormalized
central moment ``sum(w * (x - mean) ** i)`` for ``2 <= i <= order``. Slots 0
and 1 of the vector carry no state. The step functions mutate ``moments`` in
place and return the updated ``(W, mean)`` pair.

With ``delta = x - mean``, ``t = -w * delta / W_new`` and
``s = W * delta / W_new`` the general step is::

    M_i += sum(C(i, k) * M_(i-k) * t**k for k in 1..i-2) + W * t**i + w * s**i

applied for ``i`` from ``order`` down to 2, so every ``M_i`` is built from the
lower moments as they were before this observation.
"""

import math
from collections.abc import MutableSequence
from functools import lru_cache

from ..errors import InvalidArgumentError, NumericallyUndefinedError
from .primitives import binomial, power

MomentVector = MutableSequence[float]


@lru_cache(maxsize=None)
def _cross_coefficients(order: int) -> tuple[tuple[int, ...], ...]:
    """Return ``C(i, k)`` for ``k = 0..i-2`` of every ``i <= order``."""
    return tuple(
        tuple(binomial(i, k) for k in range(max(i - 1, 0))) for i in range(order + 1)
    )


def next_weight(weight: float, w: float) -> float:
    """Validate an observation weight and return the new cumulative weight."""
    if math.isnan(w):
        raise InvalidArgumentError("weight must not be NaN.")
    if w < 0:
        raise InvalidArgumentError(f"weight must be non-negative, got {w}.")
    new_weight = weight + w
    if not new_weight > 0:
        raise NumericallyUndefinedError(
            f"cumulative weight must be positive after an update, got {new_weight}."
        )
    return new_weight


def mean_step(x: float, w: float, weight: float, mean: float) -> tuple[float, float]:
    """Fold one observation into a running weighted mean."""
    weight = next_weight(weight, w)
    return weight, mean + w / weight * (x - mean)


def variance_step(
    x: float, w: float, weight: float, mean: float, moments: MomentVector
) -> tuple[float, float]:
    """Fold one observation into ``M2``; ``M2`` uses both the old and new mean."""
    weight = next_weight(weight, w)
    new_mean = mean + w / weight * (x - mean)
    moments[2] = moments[2] + w * (x - mean) * (x - new_mean)
    return weight, new_mean


def skewness_step(
    x: float, w: float, weight: float, mean: float, moments: MomentVector
) -> tuple[float, float]:
    """Order-3 unrolling of :func:`central_moment_step`."""
    new_weight = next_weight(weight, w)
    delta = x - mean
    t = -w * delta / new_weight
    s = weight * delta / new_weight
    moments[3] = moments[3] + 3 * moments[2] * t + weight * power(t, 3) + w * power(s, 3)
    moments[2] = moments[2] + weight * power(t, 2) + w * power(s, 2)
    return new_weight, mean + w / new_weight * delta


def kurtosis_step(
    x: float, w: float, weight: float, mean: float, moments: MomentVector
) -> tuple[float, float]:
    """Order-4 unrolling of :func:`central_moment_step`."""
    new_weight = next_weight(weight, w)
    delta = x - mean
    t = -w * delta / new_weight
    s = weight * delta / new_weight
    moments[4] = (
        moments[4]
        + 4.0 * moments[3] * t
        + 6.0 * moments[2] * power(t, 2)
        + weight * power(t, 4)
        + w * power(s, 4)
    )
    moments[3] = moments[3] + 3 * moments[2] * t + weight * power(t, 3) + w * power(s, 3)
    moments[2] = moments[2] + weight * power(t, 2) + w * power(s, 2)
    return new_weight, mean + w / new_weight * delta


def central_moment_step(
    x: float, w: float, weight: float, mean: float, moments: MomentVector, order: int
) -> tuple[float, float]:
    """Fold one observation into every central moment up to ``order``."""
    new_weight = next_weight(weight, w)
    delta = x - mean
    t = -w * delta / new_weight
    s = weight * delta / new_weight
    coefficients = _cross_coefficients(order)
    for i in range(order, 1, -1):
        cross = 0.0
        row = coefficients[i]
        for k in range(i - 2, 0, -1):
            cross += row[k] * moments[i - k] * power(t, k)
        moments[i] = moments[i] + cross + weight * power(t, i) + w * power(s, i)
    return new_weight, mean + w / new_weight * delta


__all__ = [
    "MomentVector",
    "central_moment_step",
    "kurtosis_step",
    "mean_step",
    "next_weight",
    "skewness_step",
    "variance_step",
]
