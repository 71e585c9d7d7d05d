"""Common helpers for feeding observations into accumulators."""

from collections.abc import Iterable, Iterator, Sized
from itertools import repeat
from typing import TypeAlias, cast

import numpy as np
import numpy.typing as npt

from ..errors import InvalidArgumentError

FloatArray: TypeAlias = npt.NDArray[np.float64]
NumericInput: TypeAlias = npt.ArrayLike | Iterable[float]


def to_numpy(values: NumericInput) -> FloatArray:
    """Coerce the input sequence into a NumPy float array."""
    return cast(FloatArray, np.asarray(values, dtype=float))


def iter_observations(
    values: Iterable[float],
    weights: Iterable[float] | None = None,
) -> Iterator[tuple[float, float]]:
    """Yield ``(value, weight)`` pairs lazily; missing weights default to 1.0.

    Sized inputs of different lengths are rejected up front. Unsized inputs are
    checked as they are consumed.
    """
    if weights is None:
        yield from zip(map(float, values), repeat(1.0))
        return
    if isinstance(values, Sized) and isinstance(weights, Sized):
        if len(values) != len(weights):
            raise InvalidArgumentError(
                f"Values and weights must share the same length "
                f"({len(values)} != {len(weights)})."
            )
    try:
        for value, weight in zip(values, weights, strict=True):
            yield float(value), float(weight)
    except ValueError as exc:
        if "zip()" not in str(exc):
            raise
        raise InvalidArgumentError("Values and weights must share the same length.") from exc


__all__ = ["FloatArray", "NumericInput", "iter_observations", "to_numpy"]
