"""Positional accumulator buffers.

A buffer is a caller-owned, zero-initialized float sequence: ``buffer[0]`` is
the cumulative weight, ``buffer[1]`` the running mean, and ``buffer[i]`` for
``i >= 2`` the unnormalized central moment of order ``i``. Updates mutate the
buffer in place; finalizers return a fresh snapshot and never touch the buffer.
Every length, order, and weight check runs before any element is written.
"""

from collections.abc import MutableSequence, Sequence

import numpy as np

from .errors import InvalidArgumentError
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
from .math.utils import FloatArray

Buffer = MutableSequence[float]

BUFFER_LENGTHS: dict[str, int] = {
    "mean": 2,
    "variance": 3,
    "skewness": 4,
    "kurtosis": 5,
}


def buffer_length(kind: str, order: int | None = None) -> int:
    """Return the buffer length required by an accumulator family."""
    if kind == "central_moment":
        if order is None:
            raise InvalidArgumentError("central_moment buffers need an order.")
        return max(2, validate_order(order) + 1)
    if kind not in BUFFER_LENGTHS:
        valid = ", ".join(sorted([*BUFFER_LENGTHS, "central_moment"]))
        raise InvalidArgumentError(f"Unknown accumulator {kind!r}. Choose one of: {valid}.")
    return BUFFER_LENGTHS[kind]


def new_buffer(kind: str, order: int | None = None) -> FloatArray:
    """Allocate a zeroed (empty) buffer for an accumulator family."""
    return np.zeros(buffer_length(kind, order), dtype=float)


def _check_length(buffer: Sequence[float], required: int, label: str) -> None:
    """Reject sequences shorter than ``required``."""
    if len(buffer) < required:
        raise InvalidArgumentError(
            f"{label} needs length >= {required}, got {len(buffer)}."
        )


def _emit(values: Sequence[float], out: FloatArray | None) -> FloatArray:
    """Copy finalized values into ``out`` (when given) or a new array."""
    if out is None:
        return np.asarray(values, dtype=float)
    _check_length(out, len(values), "output array")
    out[: len(values)] = values
    return out


def update_mean(x: float, w: float, buffer: Buffer) -> None:
    """Fold ``(x, w)`` into a mean buffer of length 2."""
    _check_length(buffer, 2, "mean buffer")
    buffer[0], buffer[1] = mean_step(x, w, buffer[0], buffer[1])


def finalize_mean(buffer: Sequence[float]) -> float:
    """Return the running weighted mean."""
    _check_length(buffer, 2, "mean buffer")
    require_observations(buffer[0])
    return float(buffer[1])


def update_variance(x: float, w: float, buffer: Buffer) -> None:
    """Fold ``(x, w)`` into a variance buffer of length 3."""
    _check_length(buffer, 3, "variance buffer")
    buffer[0], buffer[1] = variance_step(x, w, buffer[0], buffer[1], buffer)


def finalize_variance(buffer: Sequence[float], out: FloatArray | None = None) -> FloatArray:
    """Return ``[mean, variance]`` (population, weight-normalized)."""
    _check_length(buffer, 3, "variance buffer")
    weight = buffer[0]
    return _emit([buffer[1], variance_of(weight, buffer[2])], out)


def update_skewness(x: float, w: float, buffer: Buffer) -> None:
    """Fold ``(x, w)`` into a skewness buffer of length 4."""
    _check_length(buffer, 4, "skewness buffer")
    buffer[0], buffer[1] = skewness_step(x, w, buffer[0], buffer[1], buffer)


def finalize_skewness(buffer: Sequence[float], out: FloatArray | None = None) -> FloatArray:
    """Return ``[mean, variance, skewness]``; skewness is NaN for zero variance."""
    _check_length(buffer, 4, "skewness buffer")
    weight = buffer[0]
    return _emit(
        [
            buffer[1],
            variance_of(weight, buffer[2]),
            skewness_of(weight, buffer[2], buffer[3]),
        ],
        out,
    )


def update_kurtosis(x: float, w: float, buffer: Buffer) -> None:
    """Fold ``(x, w)`` into a kurtosis buffer of length 5."""
    _check_length(buffer, 5, "kurtosis buffer")
    buffer[0], buffer[1] = kurtosis_step(x, w, buffer[0], buffer[1], buffer)


def finalize_kurtosis(buffer: Sequence[float], out: FloatArray | None = None) -> FloatArray:
    """Return ``[mean, variance, skewness, kurtosis]`` with raw kurtosis."""
    _check_length(buffer, 5, "kurtosis buffer")
    weight = buffer[0]
    return _emit(
        [
            buffer[1],
            variance_of(weight, buffer[2]),
            skewness_of(weight, buffer[2], buffer[3]),
            kurtosis_of(weight, buffer[2], buffer[4]),
        ],
        out,
    )


def update_central_moment(x: float, w: float, buffer: Buffer, order: int) -> None:
    """Fold ``(x, w)`` into every central moment up to ``order``."""
    _check_length(buffer, buffer_length("central_moment", order), "central moment buffer")
    buffer[0], buffer[1] = central_moment_step(x, w, buffer[0], buffer[1], buffer, order)


def finalize_central_moment(
    buffer: Sequence[float],
    order: int,
    standardize: bool = False,
    out: FloatArray | None = None,
) -> FloatArray:
    """Return central moments ``0..order`` followed by the mean (length ``order + 2``)."""
    _check_length(buffer, buffer_length("central_moment", order), "central moment buffer")
    moments = central_moments(buffer[0], buffer, order, standardize=standardize)
    return _emit([*moments, buffer[1]], out)


__all__ = [
    "BUFFER_LENGTHS",
    "Buffer",
    "buffer_length",
    "finalize_central_moment",
    "finalize_kurtosis",
    "finalize_mean",
    "finalize_skewness",
    "finalize_variance",
    "new_buffer",
    "update_central_moment",
    "update_kurtosis",
    "update_mean",
    "update_skewness",
    "update_variance",
]
