"""Single-pass weighted statistical accumulators."""

from .accumulators import (  # noqa: F401
    CentralMomentAccumulator,
    KurtosisAccumulator,
    KurtosisSummary,
    MeanAccumulator,
    MomentSummary,
    SkewnessAccumulator,
    SkewnessSummary,
    VarianceAccumulator,
    VarianceSummary,
)
from .errors import IncstatsError, InvalidArgumentError, NumericallyUndefinedError  # noqa: F401
from .extrema import RunningMaximum, RunningMinimum, running_max, running_min  # noqa: F401
from .math import MAX_ORDER, binomial, factorial, power  # noqa: F401
from .summary import StreamSummary, summarize, summarize_observations  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "MAX_ORDER",
    "CentralMomentAccumulator",
    "IncstatsError",
    "InvalidArgumentError",
    "KurtosisAccumulator",
    "KurtosisSummary",
    "MeanAccumulator",
    "MomentSummary",
    "NumericallyUndefinedError",
    "RunningMaximum",
    "RunningMinimum",
    "SkewnessAccumulator",
    "SkewnessSummary",
    "StreamSummary",
    "VarianceAccumulator",
    "VarianceSummary",
    "binomial",
    "factorial",
    "power",
    "running_max",
    "running_min",
    "summarize",
    "summarize_observations",
]
