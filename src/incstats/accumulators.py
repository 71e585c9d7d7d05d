"""Structured streaming accumulators with named state."""

from collections.abc import Callable, Iterable
from typing import ClassVar

import numpy as np
from attrs import Factory, define, field

from .math.normalize import (
    central_moments,
    kurtosis_of,
    require_observations,
    skewness_of,
    variance_of,
)
from .math.primitives import validate_order
from .math.recurrence import (
    central_moment_step,
    kurtosis_step,
    mean_step,
    skewness_step,
    variance_step,
)
from .math.utils import FloatArray, iter_observations, to_numpy


@define(slots=True, frozen=True)
class VarianceSummary:
    """Mean and population variance of the observations seen so far."""

    mean: float
    variance: float

    def to_array(self) -> FloatArray:
        """Return ``[mean, variance]``."""
        return to_numpy([self.mean, self.variance])


@define(slots=True, frozen=True)
class SkewnessSummary:
    """Mean, variance, and third standardized moment."""

    mean: float
    variance: float
    skewness: float

    def to_array(self) -> FloatArray:
        """Return ``[mean, variance, skewness]``."""
        return to_numpy([self.mean, self.variance, self.skewness])


@define(slots=True, frozen=True)
class KurtosisSummary:
    """Mean, variance, skewness, and raw (non-excess) kurtosis."""

    mean: float
    variance: float
    skewness: float
    kurtosis: float

    def to_array(self) -> FloatArray:
        """Return ``[mean, variance, skewness, kurtosis]``."""
        return to_numpy([self.mean, self.variance, self.skewness, self.kurtosis])


@define(slots=True, frozen=True)
class MomentSummary:
    """Central moments of orders ``0..order`` plus the mean."""

    order: int
    standardized: bool
    moments: tuple[float, ...] = field(converter=tuple)
    mean: float

    def moment(self, order: int) -> float:
        """Return the (possibly standardized) central moment of ``order``."""
        return self.moments[order]

    def to_array(self) -> FloatArray:
        """Return moments ``0..order`` followed by the mean (length ``order + 2``)."""
        return to_numpy([*self.moments, self.mean])


def _zero_moments(order: int) -> FloatArray:
    """Return an empty moment vector able to hold orders up to ``order``."""
    return np.zeros(max(2, order + 1), dtype=float)


@define(slots=True)
class MeanAccumulator:
    """Running weighted mean."""

    weight: float = 0.0
    mean: float = 0.0

    def update(self, value: float, weight: float = 1.0) -> None:
        """Fold one observation into the running mean."""
        self.weight, self.mean = mean_step(value, weight, self.weight, self.mean)

    def extend(self, values: Iterable[float], weights: Iterable[float] | None = None) -> None:
        """Fold every observation of ``values`` (unit weight by default)."""
        for value, weight in iter_observations(values, weights):
            self.update(value, weight)

    def finalize(self) -> float:
        """Return the current weighted mean without altering state."""
        require_observations(self.weight)
        return float(self.mean)


@define(slots=True)
class _FixedOrderAccumulator:
    """Shared state for the dedicated order-2, order-3 and order-4 accumulators."""

    ORDER: ClassVar[int] = 2

    weight: float = 0.0
    mean: float = 0.0
    moments: FloatArray = field(
        init=False,
        repr=False,
        eq=False,
        default=Factory(lambda self: _zero_moments(self.ORDER), takes_self=True),
    )

    _step: ClassVar[Callable[..., tuple[float, float]]]

    def update(self, value: float, weight: float = 1.0) -> None:
        """Fold one observation into the running moments."""
        self.weight, self.mean = self._step(value, weight, self.weight, self.mean, self.moments)

    def extend(self, values: Iterable[float], weights: Iterable[float] | None = None) -> None:
        """Fold every observation of ``values`` (unit weight by default)."""
        for value, weight in iter_observations(values, weights):
            self.update(value, weight)


@define(slots=True)
class VarianceAccumulator(_FixedOrderAccumulator):
    """Running weighted mean and population variance."""

    ORDER: ClassVar[int] = 2
    _step = staticmethod(variance_step)

    def finalize(self) -> VarianceSummary:
        """Return the current mean and variance."""
        return VarianceSummary(
            mean=float(self.mean),
            variance=float(variance_of(self.weight, self.moments[2])),
        )


@define(slots=True)
class SkewnessAccumulator(_FixedOrderAccumulator):
    """Running weighted mean, variance, and skewness."""

    ORDER: ClassVar[int] = 3
    _step = staticmethod(skewness_step)

    def finalize(self) -> SkewnessSummary:
        """Return the current mean, variance, and skewness."""
        m2, m3 = self.moments[2], self.moments[3]
        return SkewnessSummary(
            mean=float(self.mean),
            variance=float(variance_of(self.weight, m2)),
            skewness=float(skewness_of(self.weight, m2, m3)),
        )


@define(slots=True)
class KurtosisAccumulator(_FixedOrderAccumulator):
    """Running weighted mean, variance, skewness, and raw kurtosis."""

    ORDER: ClassVar[int] = 4
    _step = staticmethod(kurtosis_step)

    def finalize(self) -> KurtosisSummary:
        """Return the current mean, variance, skewness, and kurtosis."""
        m2, m3, m4 = self.moments[2], self.moments[3], self.moments[4]
        return KurtosisSummary(
            mean=float(self.mean),
            variance=float(variance_of(self.weight, m2)),
            skewness=float(skewness_of(self.weight, m2, m3)),
            kurtosis=float(kurtosis_of(self.weight, m2, m4)),
        )


@define(slots=True)
class CentralMomentAccumulator:
    """Running weighted central moments of every order up to ``order``.

    The moment vector is sized from ``order`` at construction, so the order and
    the state length cannot drift apart.
    """

    order: int = field(converter=validate_order)
    weight: float = 0.0
    mean: float = 0.0
    moments: FloatArray = field(
        init=False,
        repr=False,
        eq=False,
        default=Factory(lambda self: _zero_moments(self.order), takes_self=True),
    )

    def update(self, value: float, weight: float = 1.0) -> None:
        """Fold one observation into every tracked moment."""
        self.weight, self.mean = central_moment_step(
            value, weight, self.weight, self.mean, self.moments, self.order
        )

    def extend(self, values: Iterable[float], weights: Iterable[float] | None = None) -> None:
        """Fold every observation of ``values`` (unit weight by default)."""
        for value, weight in iter_observations(values, weights):
            self.update(value, weight)

    def finalize(self, standardize: bool = False) -> MomentSummary:
        """Return normalized (optionally standardized) moments and the mean."""
        moments = central_moments(self.weight, self.moments, self.order, standardize=standardize)
        return MomentSummary(
            order=self.order,
            standardized=standardize,
            moments=[float(value) for value in moments],
            mean=float(self.mean),
        )


__all__ = [
    "CentralMomentAccumulator",
    "KurtosisAccumulator",
    "KurtosisSummary",
    "MeanAccumulator",
    "MomentSummary",
    "SkewnessAccumulator",
    "SkewnessSummary",
    "VarianceAccumulator",
    "VarianceSummary",
]
