"""
Solver dispatch for Bayesian R².

This module provides the public entry points and backend selection.
"""

from __future__ import annotations

from typing import Literal, TYPE_CHECKING
from numpy.typing import ArrayLike

from bayesr2.r2.design import BayesR2Design, Method
from bayesr2.r2.families import Family, Link
from bayesr2.r2.solution import BayesR2Solution
from bayesr2.r2.backends.cpu import CPUBayesR2Backend

if TYPE_CHECKING:
    import pandas as pd


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_numpy']


def bayes_r2(
    fitted_values: ArrayLike,
    *,
    outcome_type: str | Family,
    residual_variance: ArrayLike | None = None,
    sigma: ArrayLike | None = None,
    y: ArrayLike | None = None,
    method: Method = 'model',
    backend: BackendChoice = 'auto',
) -> BayesR2Solution:
    """
    Compute Bayesian R² for each posterior draw.

        R²_s = var(mu_s) / (var(mu_s) + var_res_s)

    where var(mu_s) is the sample variance (ddof=1) of draw s's fitted
    means and var_res_s is the residual variance of that draw: the
    sampled σ²_s for continuous outcomes, or mean(p(1-p)) over
    observations for binary outcomes.

    This is the primary public API. All input validation, backend
    selection, and result wrapping happens here.

    Args:
        fitted_values: S x N matrix of fitted means (linear predictor for
            continuous outcomes, probabilities in [0, 1] for binary).
        outcome_type: 'continuous' or 'binary' (family names such as
            'gaussian'/'binomial' and Family instances are also accepted).
        residual_variance: Length-S strictly positive residual variance
            draws. Required for continuous outcomes, rejected for binary.
        sigma: Length-S error-scale draws, used as sigma**2 instead of
            residual_variance.
        y: Observed outcome, length N. Required for method='residual'.
        method: 'model' (default) or 'residual', which uses the variance
            of y - mu_s in place of the modelled residual variance.
        backend: 'auto' or 'cpu'.

    Returns:
        BayesR2Solution with the S per-draw values and their summaries

    Raises:
        InvalidInputError: If inputs are invalid (DimensionError for shape
            mismatches, DomainError for out-of-domain values,
            DegenerateVarianceError for 0/0 draws)

    Example:
        >>> import numpy as np
        >>> from bayesr2 import bayes_r2
        >>>
        >>> p = np.array([[0.1, 0.9, 0.1, 0.9]])
        >>> result = bayes_r2(p, outcome_type='binary')
        >>> result.r2
        array([0.7032967])
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = BayesR2Design.from_draws(
        fitted_values,
        outcome_type=outcome_type,
        residual_variance=residual_variance,
        sigma=sigma,
        y=y,
        method=method,
    )
    return _solve(design, backend)


def bayes_r2_from_coefficients(
    X: ArrayLike,
    coefficients: ArrayLike,
    *,
    outcome_type: str | Family,
    residual_variance: ArrayLike | None = None,
    sigma: ArrayLike | None = None,
    y: ArrayLike | None = None,
    method: Method = 'model',
    link: str | Link | None = None,
    backend: BackendChoice = 'auto',
) -> BayesR2Solution:
    """
    Compute Bayesian R² from coefficient draws and a design matrix.

    Fitted means are g⁻¹(X β_s) per draw, using the family's link
    (identity for continuous outcomes, logit by default for binary;
    pass link='probit' for a probit model).

    Args:
        X: Design matrix, N x K, including any intercept column.
        coefficients: Coefficient draws, S x K.

    Remaining arguments are as for bayes_r2().
    """
    design = BayesR2Design.from_coefficients(
        X,
        coefficients,
        outcome_type=outcome_type,
        residual_variance=residual_variance,
        sigma=sigma,
        y=y,
        method=method,
        link=link,
    )
    return _solve(design, backend)


def bayes_r2_from_dataframe(
    df: 'pd.DataFrame',
    *,
    outcome_type: str | Family,
    prefix: str = 'mu',
    sigma: str | None = None,
    residual_variance: str | None = None,
    y: ArrayLike | None = None,
    method: Method = 'model',
    backend: BackendChoice = 'auto',
) -> BayesR2Solution:
    """
    Compute Bayesian R² from a data frame with one row per draw.

    See BayesR2Design.from_dataframe() for the column conventions.
    """
    design = BayesR2Design.from_dataframe(
        df,
        outcome_type=outcome_type,
        prefix=prefix,
        sigma=sigma,
        residual_variance=residual_variance,
        y=y,
        method=method,
    )
    return _solve(design, backend)


def _solve(design: BayesR2Design, backend: BackendChoice) -> BayesR2Solution:
    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)
    return BayesR2Solution(_result=result, _design=design)


def _get_backend(choice: BackendChoice) -> CPUBayesR2Backend:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_numpy'):
        return CPUBayesR2Backend()
    raise ValueError(f"Unknown backend: {choice!r}")
