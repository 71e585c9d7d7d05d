"""Unit tests for the structured accumulators."""

import math

import numpy as np
import pytest

from incstats import (
    CentralMomentAccumulator,
    InvalidArgumentError,
    KurtosisAccumulator,
    MeanAccumulator,
    MomentSummary,
    NumericallyUndefinedError,
    SkewnessAccumulator,
    VarianceAccumulator,
)
from incstats.math import MAX_ORDER


@pytest.fixture
def sample_data():
    """Return a sample dataset for testing."""
    return np.array([1, 2, 3, 4, 5])


def test_unit_weight_statistics(sample_data):
    """Unit weights reproduce the population statistics of 1..5."""
    acc = KurtosisAccumulator()
    acc.extend(sample_data)
    stats = acc.finalize()

    assert stats.mean == pytest.approx(3.0)
    assert stats.variance == pytest.approx(2.0)
    assert stats.skewness == pytest.approx(0.0, abs=1e-12)
    assert stats.kurtosis == pytest.approx(1.7)
    assert list(stats.to_array()) == pytest.approx([3.0, 2.0, 0.0, 1.7], abs=1e-12)


def test_weights_behave_like_repetition():
    """An integer weight matches repeating the observation that many times."""
    weighted = VarianceAccumulator()
    weighted.extend([1.0, 4.0], [3.0, 1.0])
    repeated = VarianceAccumulator()
    repeated.extend([1.0, 1.0, 1.0, 4.0])

    assert weighted.weight == repeated.weight == 4.0
    assert weighted.finalize().mean == pytest.approx(repeated.finalize().mean)
    assert weighted.finalize().variance == pytest.approx(repeated.finalize().variance)


def test_engine_matches_fast_paths(weighted_stream):
    """The order-3 and order-4 engine agrees with the dedicated accumulators."""
    values, weights = weighted_stream
    skew = SkewnessAccumulator()
    kurt = KurtosisAccumulator()
    engine3 = CentralMomentAccumulator(3)
    engine4 = CentralMomentAccumulator(4)
    for acc in (skew, kurt, engine3, engine4):
        acc.extend(values, weights)

    s3 = engine3.finalize(standardize=True)
    s4 = engine4.finalize(standardize=True)
    assert skew.finalize().skewness == pytest.approx(s3.moment(3), rel=1e-9)
    assert skew.finalize().variance == pytest.approx(engine3.finalize().moment(2), rel=1e-12)
    assert kurt.finalize().skewness == pytest.approx(s4.moment(3), rel=1e-9)
    assert kurt.finalize().kurtosis == pytest.approx(s4.moment(4), rel=1e-9)
    assert kurt.finalize().mean == pytest.approx(s4.mean, rel=1e-12)


def test_final_statistics_ignore_order(weighted_stream, rng):
    """Shuffling a fixed multiset of observations leaves the result unchanged."""
    values, weights = weighted_stream
    permutation = rng.permutation(len(values))

    forward = CentralMomentAccumulator(6)
    forward.extend(values, weights)
    shuffled = CentralMomentAccumulator(6)
    shuffled.extend(values[permutation], weights[permutation])

    np.testing.assert_allclose(
        forward.finalize(standardize=True).to_array(),
        shuffled.finalize(standardize=True).to_array(),
        rtol=1e-9,
        atol=1e-12,
    )


def test_finalize_is_idempotent(weighted_stream):
    """Repeated finalization yields identical snapshots and leaves state alone."""
    values, weights = weighted_stream
    acc = CentralMomentAccumulator(5)
    acc.extend(values[:50], weights[:50])
    moments_before = acc.moments.copy()

    first = acc.finalize()
    second = acc.finalize()
    assert first == second
    assert np.array_equal(acc.moments, moments_before)

    acc.update(10.0, 1.0)
    assert acc.finalize() != first
    assert first == second


def test_moment_summary_layout():
    """The array layout is moments 0..order followed by the mean."""
    acc = CentralMomentAccumulator(3)
    acc.extend([0.0, 2.0])
    summary = acc.finalize()

    assert isinstance(summary, MomentSummary)
    assert summary.order == 3
    assert summary.standardized is False
    assert summary.moments == pytest.approx((1.0, 0.0, 1.0, 0.0))
    assert list(summary.to_array()) == pytest.approx([1.0, 0.0, 1.0, 0.0, 1.0])


def test_moment_vector_sized_by_order():
    """The moment vector length follows the order given at construction."""
    assert len(CentralMomentAccumulator(0).moments) == 2
    assert len(CentralMomentAccumulator(9).moments) == 10
    assert len(KurtosisAccumulator().moments) == 5

    with pytest.raises(InvalidArgumentError):
        CentralMomentAccumulator(-1)
    with pytest.raises(InvalidArgumentError):
        CentralMomentAccumulator(MAX_ORDER + 1)


def test_accumulators_do_not_share_state():
    """Each instance owns an independent moment vector."""
    first = SkewnessAccumulator()
    second = SkewnessAccumulator()
    first.extend([1.0, 2.0, 6.0])
    assert not second.moments.any()
    assert second.weight == 0.0


def test_mean_accumulator():
    """MeanAccumulator tracks the weighted mean and refuses empty reads."""
    acc = MeanAccumulator()
    with pytest.raises(NumericallyUndefinedError):
        acc.finalize()
    acc.update(10.0, 1.0)
    acc.update(20.0, 3.0)
    assert acc.finalize() == pytest.approx(17.5)


def test_rejected_update_keeps_state():
    """A negative weight raises and leaves every field as it was."""
    acc = KurtosisAccumulator()
    acc.extend([1.0, 2.0, 5.0])
    before = (acc.weight, acc.mean, acc.moments.copy())
    with pytest.raises(InvalidArgumentError):
        acc.update(3.0, -2.0)
    assert (acc.weight, acc.mean) == before[:2]
    assert np.array_equal(acc.moments, before[2])


def test_extend_checks_lengths():
    """Values and weights must pair up."""
    acc = VarianceAccumulator()
    with pytest.raises(InvalidArgumentError, match="same length"):
        acc.extend([1.0, 2.0], [1.0])
    with pytest.raises(InvalidArgumentError, match="same length"):
        acc.extend(iter([1.0, 2.0]), iter([1.0]))


def test_single_point_has_undefined_skewness():
    """One observation has zero variance, so its shape statistics are NaN."""
    acc = SkewnessAccumulator()
    acc.update(4.0)
    stats = acc.finalize()
    assert stats.mean == 4.0
    assert stats.variance == 0.0
    assert math.isnan(stats.skewness)


def test_numpy_order_is_normalized():
    """An order read from a numpy array is stored as a plain int."""
    acc = CentralMomentAccumulator(np.int64(4))
    assert acc.order == 4
    assert type(acc.order) is int
    assert len(acc.moments) == 5


def test_fixed_order_steps_are_class_level():
    """Each dedicated accumulator binds its unrolled step on the class."""
    from incstats.math.recurrence import kurtosis_step, skewness_step, variance_step

    assert VarianceAccumulator._step is variance_step
    assert SkewnessAccumulator._step is skewness_step
    assert KurtosisAccumulator._step is kurtosis_step
