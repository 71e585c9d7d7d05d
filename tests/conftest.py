"""Global test configuration and fixtures."""

import numpy as np
import pytest
import structlog


@pytest.fixture
def rng():
    """Return a seeded generator so random streams are reproducible."""
    return np.random.default_rng(111111)


@pytest.fixture
def weighted_stream(rng):
    """Return 300 values in [0, 1) with weights in [1e-5, 1)."""
    values = rng.uniform(0.0, 1.0, 300)
    weights = rng.uniform(1e-5, 1.0, 300)
    return values, weights


@pytest.fixture
def direct_moments():
    """Return a non-incremental reference for weighted central moments.

    The returned callable maps ``(values, weights, order)`` to
    ``(mean, moments)`` where ``moments[k]`` is ``sum(w * (x - mean) ** k) / sum(w)``.
    """

    def compute(values, weights, order):
        values = np.asarray(values, dtype=float)
        weights = np.asarray(weights, dtype=float)
        total = weights.sum()
        mean = float(np.dot(weights, values) / total)
        centered = values - mean
        moments = np.array(
            [np.dot(weights, centered**k) / total for k in range(order + 1)]
        )
        return mean, moments

    return compute


@pytest.fixture(autouse=True)
def reset_structlog():
    """Keep structlog configuration from leaking between tests."""
    yield
    structlog.reset_defaults()
