"""
bayesr2: Bayesian R² for linear and logistic regression posteriors.

Turns posterior simulation draws from an external model fitter into the
per-draw Bayesian R² diagnostic (Gelman, Goodrich, Gabry & Vehtari, 2019).

Submodules:
    r2: Bayesian R² computation and summaries
    core: Exceptions, validation, result envelope
"""

__version__ = "0.1.0"

from bayesr2 import r2
from bayesr2.r2 import (
    bayes_r2,
    bayes_r2_from_coefficients,
    bayes_r2_from_dataframe,
)
from bayesr2.core.exceptions import (
    BayesR2Error,
    InvalidInputError,
    DimensionError,
    DomainError,
    DegenerateVarianceError,
)

__all__ = [
    "__version__",
    "r2",
    "bayes_r2",
    "bayes_r2_from_coefficients",
    "bayes_r2_from_dataframe",
    "BayesR2Error",
    "InvalidInputError",
    "DimensionError",
    "DomainError",
    "DegenerateVarianceError",
]
