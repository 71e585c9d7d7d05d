"""Unit tests for the running extrema trackers."""

import math
import sys

from incstats import RunningMaximum, RunningMinimum, running_max, running_min

SEQUENCE = [4, 8, 12, 16, 23, 45, 678, 123, 2.0123, math.pi]


def test_running_max_and_min_functions():
    """Seeded with the extreme representable floats, the literal sequence resolves."""
    maximum = -sys.float_info.max
    minimum = sys.float_info.max
    for x in SEQUENCE:
        maximum = running_max(x, maximum)
        minimum = running_min(x, minimum)
    assert maximum == 678
    assert minimum == 2.0123


def test_trackers():
    """Trackers start at -inf/+inf and follow the same comparisons."""
    maximum = RunningMaximum()
    minimum = RunningMinimum()
    assert maximum.value == -math.inf
    assert minimum.value == math.inf

    maximum.extend(SEQUENCE)
    minimum.extend(SEQUENCE)
    assert maximum.value == 678
    assert minimum.value == 2.0123


def test_ties_keep_current():
    """Equal values never replace the current extreme."""
    assert running_max(1.0, 1.0) == 1.0
    assert running_min(-0.0, 0.0) == 0.0
