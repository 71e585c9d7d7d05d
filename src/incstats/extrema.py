"""Running maximum and minimum trackers."""

import math
from collections.abc import Iterable

from attrs import define


def running_max(x: float, current: float) -> float:
    """Return ``x`` when it exceeds ``current``, else ``current``."""
    return x if x > current else current


def running_min(x: float, current: float) -> float:
    """Return ``x`` when it is below ``current``, else ``current``."""
    return x if x < current else current


@define(slots=True)
class RunningMaximum:
    """Largest value seen so far; ``-inf`` until the first update."""

    value: float = -math.inf

    def update(self, x: float) -> None:
        self.value = running_max(x, self.value)

    def extend(self, values: Iterable[float]) -> None:
        for x in values:
            self.update(x)


@define(slots=True)
class RunningMinimum:
    """Smallest value seen so far; ``+inf`` until the first update."""

    value: float = math.inf

    def update(self, x: float) -> None:
        self.value = running_min(x, self.value)

    def extend(self, values: Iterable[float]) -> None:
        for x in values:
            self.update(x)


__all__ = ["RunningMaximum", "RunningMinimum", "running_max", "running_min"]
