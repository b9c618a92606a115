"""
Core infrastructure for bayesr2.

Shared abstractions used by the domain subpackage (r2).

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing utilities
"""

from bayesr2.core.protocols import Backend
from bayesr2.core.result import Result
from bayesr2.core.exceptions import (
    BayesR2Error,
    InvalidInputError,
    DimensionError,
    DomainError,
    DegenerateVarianceError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "BayesR2Error",
    "InvalidInputError",
    "DimensionError",
    "DomainError",
    "DegenerateVarianceError",
]
