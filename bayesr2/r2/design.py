"""
Bayesian R² Design.

Design bundles the posterior draws of one fitted model: the S x N matrix
of fitted means, the residual variance draws (continuous outcomes) and,
for the residual-based method, the observed outcome. It validates all of
it at construction so backends can trust their input.

Construction:
    BayesR2Design.from_draws(mu, outcome_type='continuous', sigma=sigma)
    BayesR2Design.from_coefficients(X, beta, outcome_type='binary')
    BayesR2Design.from_dataframe(draws_df, outcome_type='continuous')
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Literal, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from bayesr2.core.exceptions import InvalidInputError
from bayesr2.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_2d,
    check_consistent_length,
    check_min_samples,
    check_positive,
)
from bayesr2.r2.families import Family, Link, resolve_family

if TYPE_CHECKING:
    import pandas as pd


Method = Literal['model', 'residual']

_METHODS = ('model', 'residual')


@dataclass(frozen=True)
class BayesR2Design:
    """
    Validated posterior draws for a Bayesian R² computation.

    Immutable after construction. Arrays are private copies of the
    caller's input.
    """
    _fitted: NDArray[np.floating[Any]]
    _family: Family
    _method: str
    _residual_variance: NDArray[np.floating[Any]] | None = None
    _y: NDArray[np.floating[Any]] | None = None

    @classmethod
    def from_draws(
        cls,
        fitted_values: ArrayLike,
        *,
        outcome_type: str | Family,
        residual_variance: ArrayLike | None = None,
        sigma: ArrayLike | None = None,
        y: ArrayLike | None = None,
        method: Method = 'model',
    ) -> BayesR2Design:
        """
        Build a design from per-draw fitted values.

        Args:
            fitted_values: S x N matrix; row s holds draw s's fitted means
                (linear predictor, or probabilities for binary outcomes).
            outcome_type: 'continuous', 'binary', a family name, or a Family.
            residual_variance: S residual variance draws (continuous only).
            sigma: S error-scale draws; alternative to residual_variance.
            y: Observed outcome of length N. Required for method='residual'.
            method: 'model' uses the modelled residual variance,
                'residual' the variance of y - mu in each draw.

        Raises:
            InvalidInputError: (or a subclass) if any input breaks its contract
        """
        family = resolve_family(outcome_type)
        return cls._build(
            fitted_values,
            family=family,
            residual_variance=residual_variance,
            sigma=sigma,
            y=y,
            method=method,
        )

    @classmethod
    def from_coefficients(
        cls,
        X: ArrayLike,
        coefficients: ArrayLike,
        *,
        outcome_type: str | Family,
        residual_variance: ArrayLike | None = None,
        sigma: ArrayLike | None = None,
        y: ArrayLike | None = None,
        method: Method = 'model',
        link: str | Link | None = None,
    ) -> BayesR2Design:
        """
        Build a design from coefficient draws and a design matrix.

        The fitted means are g⁻¹(X β_s) for each draw s, with g the family's
        link (identity for continuous, logit by default for binary).

        Args:
            X: Design matrix, N x K (a 1D array is treated as one column).
            coefficients: Coefficient draws, S x K.
            link: Optional link override, e.g. 'probit'.

        Remaining arguments are as for from_draws().
        """
        family = resolve_family(outcome_type, link)
        eta = linear_predictor(X, coefficients)
        fitted = family.link.linkinv(eta)
        return cls._build(
            fitted,
            family=family,
            residual_variance=residual_variance,
            sigma=sigma,
            y=y,
            method=method,
        )

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        outcome_type: str | Family,
        prefix: str = 'mu',
        sigma: str | None = None,
        residual_variance: str | None = None,
        y: ArrayLike | None = None,
        method: Method = 'model',
    ) -> BayesR2Design:
        """
        Build a design from a data frame with one row per posterior draw.

        Fitted-value columns are those named ``{prefix}[i]``, ``{prefix}.i``
        or ``{prefix}_i``, ordered by the integer i. For continuous outcomes
        the residual variance comes from the ``residual_variance`` column,
        else the ``sigma`` column (squared); when neither name is given a
        column called 'sigma' is used if present.

        Args:
            df: pandas DataFrame of draws
            prefix: Name prefix of the fitted-value columns
            sigma: Column holding error-scale draws
            residual_variance: Column holding residual variance draws

        Remaining arguments are as for from_draws().
        """
        family = resolve_family(outcome_type)
        columns = _indexed_columns(df.columns, prefix)
        if not columns:
            raise InvalidInputError(
                f"df: no fitted-value columns matching prefix {prefix!r} "
                f"(expected e.g. '{prefix}[1]', '{prefix}.1' or '{prefix}_1')"
            )

        if sigma is None and residual_variance is None:
            if family.residual_variance_is_parameter and 'sigma' in df.columns:
                sigma = 'sigma'

        sigma_arr = _dataframe_column(df, sigma)
        res_var_arr = _dataframe_column(df, residual_variance)

        fitted = df[columns].to_numpy()
        return cls._build(
            fitted,
            family=family,
            residual_variance=res_var_arr,
            sigma=sigma_arr,
            y=y,
            method=method,
        )

    @classmethod
    def _build(
        cls,
        fitted_values: ArrayLike,
        *,
        family: Family,
        residual_variance: ArrayLike | None,
        sigma: ArrayLike | None,
        y: ArrayLike | None,
        method: str,
    ) -> BayesR2Design:
        """Internal builder with validation."""
        if method not in _METHODS:
            raise ValueError(
                f"Unknown method: {method!r}. Valid methods: {', '.join(_METHODS)}"
            )

        mu = check_array(fitted_values, 'fitted_values')
        if mu.ndim == 3:
            raise InvalidInputError(
                f"fitted_values: 3D array with shape {mu.shape} looks like a grouped "
                "(multi-column) binomial outcome, which is not supported"
            )
        check_2d(mu, 'fitted_values')
        check_min_samples(mu, 1, 'fitted_values', axis=0)
        check_min_samples(mu, 2, 'fitted_values', axis=1)
        check_finite(mu, 'fitted_values')
        family.check_mean(mu, 'fitted_values')

        res_var = _residual_variance_draws(residual_variance, sigma)
        if res_var is not None:
            if not family.residual_variance_is_parameter:
                raise InvalidInputError(
                    f"residual_variance/sigma: not used for {family.outcome_type} "
                    "outcomes; the residual variance is implied by the fitted "
                    "probabilities"
                )
            check_consistent_length(
                mu, res_var, names=('fitted_values', 'residual_variance'),
            )
        elif family.residual_variance_is_parameter and method == 'model':
            raise InvalidInputError(
                f"residual_variance: required for {family.outcome_type} outcomes "
                "(pass residual_variance= or sigma= with one value per draw)"
            )

        y_arr = None
        if y is not None:
            y_arr = check_array(y, 'y')
            if y_arr.ndim == 2 and y_arr.shape[1] == 1:
                y_arr = y_arr.ravel()
            if y_arr.ndim == 2:
                raise InvalidInputError(
                    f"y: expected a single-column outcome, got {y_arr.shape[1]} "
                    "columns; grouped (successes/failures) binomial outcomes "
                    "are not supported"
                )
            check_1d(y_arr, 'y')
            check_finite(y_arr, 'y')
            check_consistent_length(
                mu.T, y_arr, names=('fitted_values columns', 'y'),
            )
            family.check_outcome(y_arr, 'y')
        elif method == 'residual':
            raise InvalidInputError("y: required for method='residual'")

        return cls(
            _fitted=mu,
            _family=family,
            _method=method,
            _residual_variance=res_var,
            _y=y_arr,
        )

    # === Properties ===

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        """Fitted means (S x N)."""
        return self._fitted

    @property
    def family(self) -> Family:
        return self._family

    @property
    def outcome_type(self) -> str:
        """'continuous' or 'binary'."""
        return self._family.outcome_type

    @property
    def method(self) -> str:
        """'model' or 'residual'."""
        return self._method

    @property
    def residual_variance(self) -> NDArray[np.floating[Any]] | None:
        """Residual variance draws (S,), or None for binary outcomes."""
        return self._residual_variance

    @property
    def y(self) -> NDArray[np.floating[Any]] | None:
        """Observed outcome (N,), if supplied."""
        return self._y

    @property
    def n_draws(self) -> int:
        """Number of posterior draws S."""
        return self._fitted.shape[0]

    @property
    def n_observations(self) -> int:
        """Number of observations N."""
        return self._fitted.shape[1]


def linear_predictor(X: ArrayLike, coefficients: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Linear predictor η = X β_s for every coefficient draw.

    Args:
        X: Design matrix, N x K (a 1D array is treated as one column).
        coefficients: Coefficient draws, S x K.

    Returns:
        Array of shape (S, N)

    Raises:
        DimensionError: If X and coefficients disagree on K
    """
    X_arr = check_array(X, 'X')
    if X_arr.ndim == 1:
        X_arr = X_arr.reshape(-1, 1)
    check_2d(X_arr, 'X')
    check_finite(X_arr, 'X')

    beta = check_array(coefficients, 'coefficients')
    check_2d(beta, 'coefficients')
    check_finite(beta, 'coefficients')
    check_consistent_length(X_arr, beta, names=('X', 'coefficients'), axis=1)

    return beta @ X_arr.T


def _residual_variance_draws(
    residual_variance: ArrayLike | None,
    sigma: ArrayLike | None,
) -> NDArray[np.floating[Any]] | None:
    """Validate residual variance (or sigma) draws and return variances."""
    if residual_variance is not None and sigma is not None:
        raise InvalidInputError(
            "residual_variance and sigma are mutually exclusive; pass one of them"
        )
    if residual_variance is not None:
        arr = check_array(residual_variance, 'residual_variance')
        check_1d(arr, 'residual_variance')
        check_finite(arr, 'residual_variance')
        check_positive(arr, 'residual_variance')
        return arr
    if sigma is not None:
        arr = check_array(sigma, 'sigma')
        check_1d(arr, 'sigma')
        check_finite(arr, 'sigma')
        check_positive(arr, 'sigma')
        return arr ** 2
    return None


_INDEXED_COLUMN = r'^{prefix}(?:\[(\d+)\]|[._](\d+))$'


def _indexed_columns(columns, prefix: str) -> list[str]:
    """Columns named prefix[i], prefix.i or prefix_i, sorted by i."""
    pattern = re.compile(_INDEXED_COLUMN.format(prefix=re.escape(prefix)))
    found = []
    for col in columns:
        match = pattern.match(str(col))
        if match:
            index = int(match.group(1) or match.group(2))
            found.append((index, col))
    return [col for _, col in sorted(found)]


def _dataframe_column(df: 'pd.DataFrame', name: str | None) -> NDArray | None:
    if name is None:
        return None
    if name not in df.columns:
        raise InvalidInputError(
            f"df: has no column {name!r}. Available: {list(df.columns)}"
        )
    return df[name].to_numpy()
