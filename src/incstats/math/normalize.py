"""Convert raw accumulator state into normalized statistics."""

import math
from collections.abc import Sequence

import structlog

from ..errors import InvalidArgumentError, NumericallyUndefinedError
from .primitives import power

logger = structlog.get_logger(__name__)


def require_observations(weight: float) -> float:
    """Fail when no positive weight has been accumulated yet."""
    if not weight > 0:
        raise NumericallyUndefinedError(
            f"statistics are undefined for cumulative weight {weight}; update first."
        )
    return weight


def variance_of(weight: float, m2: float) -> float:
    """Return the weight-normalized (population) variance."""
    return m2 / require_observations(weight)


def _scaled(numerator: float, denominator: float, **context: object) -> float:
    """Divide by a variance power, or return NaN once that power underflows to zero."""
    if denominator == 0:
        logger.debug("moments.zero_variance", **context)
        return math.nan
    return numerator / denominator


def skewness_of(weight: float, m2: float, m3: float) -> float:
    """Return the third standardized central moment."""
    variance = variance_of(weight, m2)
    return _scaled(m3 / weight, variance * math.sqrt(variance), statistic="skewness")


def kurtosis_of(weight: float, m2: float, m4: float) -> float:
    """Return the raw (non-excess) fourth standardized central moment."""
    variance = variance_of(weight, m2)
    return _scaled(m4 / weight, power(variance, 2), statistic="kurtosis")


def central_moments(
    weight: float,
    moments: Sequence[float],
    order: int,
    *,
    standardize: bool = False,
) -> list[float]:
    """Return the normalized central moments of orders ``0..order``.

    Orders 0 and 1 are the constants 1 and 0. With ``standardize`` every moment
    of order ``i`` is divided by ``sqrt(variance) ** i``, which requires
    ``order >= 2``. A zero variance turns every standardized moment of order
    one and above into NaN, as does any ``sqrt(variance) ** i`` that underflows
    to zero.
    """
    require_observations(weight)
    if standardize and order < 2:
        raise InvalidArgumentError(
            f"standardized moments need order >= 2, got {order}."
        )
    results = [1.0, 0.0][: order + 1]
    results.extend(moments[i] / weight for i in range(2, order + 1))
    if standardize:
        variance = results[2]
        if variance == 0:
            logger.debug("moments.zero_variance", order=order, standardize=True)
            return [1.0] + [math.nan] * order
        scale = math.sqrt(variance)
        results = [
            _scaled(value, power(scale, i), order=i, standardize=True)
            for i, value in enumerate(results)
        ]
    return results


__all__ = [
    "central_moments",
    "kurtosis_of",
    "require_observations",
    "skewness_of",
    "variance_of",
]
