"""
Outcome family and link function specifications.

Each Family defines:
- The outcome type it models ('continuous' or 'binary')
- A default link function g(μ) mapping the mean to the linear predictor
- Domain checks for modelled means and observed outcomes
- The modelled residual variance of each posterior draw

Each Link defines the inverse link g⁻¹(η) → μ that turns a linear
predictor draw into fitted means.

References:
    McCullagh, P., & Nelder, J. A. (1989). Generalized Linear Models (2nd ed.)
    Tjur, T. (2009). Coefficients of determination in logistic regression
        models. The American Statistician, 63(4), 366-372.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import numpy as np
from numpy.typing import NDArray

from bayesr2.core.validation import check_unit_interval, check_binary


# =====================================================================
# Link functions
# =====================================================================

class Link(ABC):
    """Abstract link function g(μ) mapping mean to linear predictor."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def linkinv(self, eta: NDArray) -> NDArray:
        """g⁻¹(η) → μ."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class IdentityLink(Link):
    """Identity link: g(μ) = μ. Default for Gaussian family."""

    @property
    def name(self) -> str:
        return 'identity'

    def linkinv(self, eta: NDArray) -> NDArray:
        return eta.copy()


class LogitLink(Link):
    """Logit link: g(μ) = log(μ/(1-μ)). Default for Binomial family."""

    @property
    def name(self) -> str:
        return 'logit'

    def linkinv(self, eta: NDArray) -> NDArray:
        from scipy.special import expit
        return expit(eta)


class ProbitLink(Link):
    """Probit link: g(μ) = Φ⁻¹(μ). Alternative for Binomial family."""

    @property
    def name(self) -> str:
        return 'probit'

    def linkinv(self, eta: NDArray) -> NDArray:
        from scipy.stats import norm
        return norm.cdf(eta)


# =====================================================================
# Link name → class mapping
# =====================================================================

_LINK_CLASSES: dict[str, type[Link]] = {
    'identity': IdentityLink,
    'logit': LogitLink,
    'probit': ProbitLink,
}


def _resolve_link(link: str | Link | None, default: Link) -> Link:
    """Resolve a link argument to a Link instance."""
    if link is None:
        return default
    if isinstance(link, Link):
        return link
    if isinstance(link, str):
        cls = _LINK_CLASSES.get(link.lower())
        if cls is None:
            valid = ', '.join(sorted(_LINK_CLASSES.keys()))
            raise ValueError(f"Unknown link: {link!r}. Valid links: {valid}")
        return cls()
    raise TypeError(f"link must be str or Link, got {type(link).__name__}")


# =====================================================================
# Family base class
# =====================================================================

class Family(ABC):
    """
    Outcome family specification.

    Knows which outcome type it models and how to turn a draw's fitted
    means into a modelled residual variance.
    """

    def __init__(self, link: str | Link | None = None):
        self._link = _resolve_link(link, self._default_link())

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def outcome_type(self) -> str:
        """'continuous' or 'binary'."""
        ...

    @abstractmethod
    def _default_link(self) -> Link:
        ...

    @property
    def link(self) -> Link:
        return self._link

    @property
    def residual_variance_is_parameter(self) -> bool:
        """Whether the residual variance is a free model parameter.

        True for Gaussian (σ² is sampled alongside the coefficients).
        False for Binomial (implied by the fitted probabilities).
        """
        return False

    def check_mean(self, mu: NDArray, name: str) -> None:
        """Raise if fitted means fall outside the family's mean domain."""
        return None

    def check_outcome(self, y: NDArray, name: str) -> None:
        """Raise if observed outcomes fall outside the family's support."""
        return None

    @abstractmethod
    def residual_variance(
        self, mu: NDArray, residual_variance: NDArray | None
    ) -> NDArray:
        """Modelled residual variance per draw.

        Args:
            mu: Fitted means, shape (S, N)
            residual_variance: Sampled residual variance, shape (S,), for
                families where it is a parameter; otherwise None.

        Returns:
            Array of shape (S,)
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(link={self._link.name!r})"


# =====================================================================
# Concrete families
# =====================================================================

class Gaussian(Family):
    """Gaussian (Normal) family for continuous outcomes. Default link: identity.

    The residual variance of draw s is the sampled σ²_s.
    """

    @property
    def name(self) -> str:
        return 'gaussian'

    @property
    def outcome_type(self) -> str:
        return 'continuous'

    def _default_link(self) -> Link:
        return IdentityLink()

    @property
    def residual_variance_is_parameter(self) -> bool:
        return True

    def residual_variance(
        self, mu: NDArray, residual_variance: NDArray | None
    ) -> NDArray:
        return residual_variance


class Binomial(Family):
    """Binomial family for binary (0/1) outcomes. Default link: logit.

    V(μ) = μ(1-μ); the residual variance of draw s is the average of
    p_n(1 - p_n) over observations. Probabilities are never clipped:
    values outside [0, 1] are rejected by check_mean.
    """

    @property
    def name(self) -> str:
        return 'binomial'

    @property
    def outcome_type(self) -> str:
        return 'binary'

    def _default_link(self) -> Link:
        return LogitLink()

    def variance(self, mu: NDArray) -> NDArray:
        """Bernoulli variance function V(μ) = μ(1-μ)."""
        return mu * (1.0 - mu)

    def check_mean(self, mu: NDArray, name: str) -> None:
        check_unit_interval(mu, name)

    def check_outcome(self, y: NDArray, name: str) -> None:
        check_binary(y, name)

    def residual_variance(
        self, mu: NDArray, residual_variance: NDArray | None
    ) -> NDArray:
        return np.mean(self.variance(mu), axis=1)


# =====================================================================
# Family name → class mapping + resolver
# =====================================================================

_FAMILY_CLASSES: dict[str, type[Family]] = {
    'continuous': Gaussian,
    'gaussian': Gaussian,
    'normal': Gaussian,
    'binary': Binomial,
    'binomial': Binomial,
    'bernoulli': Binomial,
}


def resolve_family(family: str | Family, link: str | Link | None = None) -> Family:
    """Resolve an outcome type or family argument to a Family instance.

    Args:
        family: An outcome type ('continuous', 'binary'), a family name
                ('gaussian', 'binomial', ...) or a Family instance.
        link: Optional link override. Not allowed together with a Family
              instance, which already carries its link.

    Returns:
        Family instance.

    Raises:
        ValueError: If string name is not recognized.
        TypeError: If argument is neither string nor Family.
    """
    if isinstance(family, Family):
        if link is not None:
            raise ValueError(
                "link cannot be given together with a Family instance; "
                "pass it to the Family constructor instead"
            )
        return family
    if isinstance(family, str):
        cls = _FAMILY_CLASSES.get(family.lower())
        if cls is None:
            valid = ', '.join(sorted(_FAMILY_CLASSES.keys()))
            raise ValueError(
                f"Unknown outcome type: {family!r}. Valid values: {valid}"
            )
        return cls(link)
    raise TypeError(f"outcome_type must be str or Family, got {type(family).__name__}")
