"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def linear_draws(rng):
    """Posterior draws for a simple linear regression.

    N=50 observations, S=200 draws of (intercept, slope, sigma) scattered
    around (1, 2, 0.5).
    """
    n, s = 50, 200
    x = rng.uniform(0, 1, n)
    X = np.column_stack([np.ones(n), x])
    y = 1.0 + 2.0 * x + rng.normal(0, 0.5, n)
    coefficients = np.column_stack([
        rng.normal(1.0, 0.1, s),
        rng.normal(2.0, 0.1, s),
    ])
    sigma = np.abs(rng.normal(0.5, 0.05, s))
    return X, y, coefficients, sigma


@pytest.fixture
def logistic_draws(rng):
    """Posterior draws for a simple logistic regression.

    N=100 observations, S=150 draws of (intercept, slope) around (-0.5, 1.5).
    """
    n, s = 100, 150
    x = rng.normal(0, 1, n)
    X = np.column_stack([np.ones(n), x])
    p_true = 1.0 / (1.0 + np.exp(-(-0.5 + 1.5 * x)))
    y = (rng.uniform(0, 1, n) < p_true).astype(float)
    coefficients = np.column_stack([
        rng.normal(-0.5, 0.2, s),
        rng.normal(1.5, 0.2, s),
    ])
    return X, y, coefficients
