"""Single-pass descriptive summary of a weighted stream."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from .accumulators import CentralMomentAccumulator
from .extrema import RunningMaximum, RunningMinimum
from .math.normalize import kurtosis_of, skewness_of, variance_of
from .math.primitives import validate_order
from .math.utils import iter_observations

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StreamSummary:
    """Bundle of streaming statistics gathered in one pass."""

    count: int
    total_weight: float
    mean: float
    variance: float
    std: float
    skewness: float
    kurtosis: float
    minimum: float
    maximum: float
    order: int
    standardized: bool
    moments: tuple[float, ...]


def summarize(
    values: Iterable[float],
    weights: Iterable[float] | None = None,
    *,
    order: int = 4,
    standardize: bool = True,
) -> StreamSummary:
    """Consume ``values`` once and return a consistent set of statistics.

    See :func:`summarize_observations` for how ``order`` and ``standardize`` interact.
    """
    return summarize_observations(
        iter_observations(values, weights), order=order, standardize=standardize
    )


def summarize_observations(
    observations: Iterable[tuple[float, float]],
    *,
    order: int = 4,
    standardize: bool = True,
) -> StreamSummary:
    """Summarize an iterable of ``(value, weight)`` pairs in one pass.

    The moment engine always runs to at least order 4 so skewness and kurtosis
    are available; ``moments`` is truncated to the requested ``order``.
    Standardization needs the variance, so for ``order < 2`` the raw moments
    are reported and ``standardized`` is False regardless of ``standardize``.
    """
    order = validate_order(order)
    accumulator = CentralMomentAccumulator(max(order, 4))
    maximum = RunningMaximum()
    minimum = RunningMinimum()
    count = 0
    for value, weight in observations:
        accumulator.update(value, weight)
        maximum.update(value)
        minimum.update(value)
        count += 1

    finalized = accumulator.finalize(standardize=standardize and order >= 2)
    weight, m = accumulator.weight, accumulator.moments
    variance = float(variance_of(weight, m[2]))
    summary = StreamSummary(
        count=count,
        total_weight=float(weight),
        mean=finalized.mean,
        variance=variance,
        std=math.sqrt(variance),
        skewness=float(skewness_of(weight, m[2], m[3])),
        kurtosis=float(kurtosis_of(weight, m[2], m[4])),
        minimum=minimum.value,
        maximum=maximum.value,
        order=order,
        standardized=finalized.standardized,
        moments=finalized.moments[: order + 1],
    )
    logger.debug(
        "summary.complete",
        count=count,
        total_weight=summary.total_weight,
        order=order,
        standardized=summary.standardized,
    )
    return summary


__all__ = ["StreamSummary", "summarize", "summarize_observations"]
