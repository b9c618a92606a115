"""
Exception hierarchy for bayesr2.

All exceptions inherit from BayesR2Error so callers can catch any
library-specific error. Every problem with caller-supplied draws is an
InvalidInputError; the subclasses say which contract was broken.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class BayesR2Error(Exception):
    """Base exception for all bayesr2 errors."""
    pass


class InvalidInputError(BayesR2Error):
    """
    Input validation failed.

    Raised when caller-supplied draws violate the input contract. These
    are never transient, so there is nothing to retry.
    """
    pass


class DimensionError(InvalidInputError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays disagree on the number of draws/observations.
    """
    pass


class DomainError(InvalidInputError):
    """
    Values fall outside their admissible domain.

    Raised for probabilities outside [0, 1], non-positive residual
    variances, non-binary outcomes for a binary model, and similar.

    Attributes:
        name: Parameter that failed the check
        n_invalid: Number of offending elements, if counted
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        n_invalid: int | None = None,
    ):
        super().__init__(message)
        self.name = name
        self.n_invalid = n_invalid


class DegenerateVarianceError(InvalidInputError):
    """
    Both variance components of a draw are zero.

    R² = var_fit / (var_fit + var_res) is 0/0 for such a draw.

    Attributes:
        draws: Indices of the degenerate draws
    """

    def __init__(self, message: str, draws: tuple[int, ...] = ()):
        super().__init__(message)
        self.draws = tuple(draws)
