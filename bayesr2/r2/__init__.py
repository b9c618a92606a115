"""
Bayesian R² for posterior simulation draws.

Public API:
    bayes_r2(fitted_values, outcome_type=..., ...) -> BayesR2Solution
    bayes_r2_from_coefficients(X, coefficients, outcome_type=..., ...)
    bayes_r2_from_dataframe(df, outcome_type=..., ...)

Each entry point handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from bayesr2.r2 import bayes_r2
    >>> result = bayes_r2(mu_draws, outcome_type='continuous', sigma=sigma_draws)
    >>> print(result.median, result.mad_sd)
    >>> print(result.summary())
"""

from bayesr2.r2.design import BayesR2Design, linear_predictor
from bayesr2.r2.families import Family, Gaussian, Binomial, resolve_family
from bayesr2.r2.solution import BayesR2Solution, BayesR2Params
from bayesr2.r2.solvers import (
    bayes_r2,
    bayes_r2_from_coefficients,
    bayes_r2_from_dataframe,
)

__all__ = [
    "bayes_r2",
    "bayes_r2_from_coefficients",
    "bayes_r2_from_dataframe",
    "linear_predictor",
    "BayesR2Design",
    "BayesR2Solution",
    "BayesR2Params",
    "Family",
    "Gaussian",
    "Binomial",
    "resolve_family",
]
