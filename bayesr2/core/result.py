"""
Generic result container for bayesr2 computations.

The Result class is the envelope every backend returns. It keeps the
numeric payload separate from metadata (timing, backend name, non-fatal
warnings) so summaries and diagnostics can be layered on top.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, outcome type, sizes)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (per-draw R² and its components)
        info: Structured metadata (method, outcome type, draw counts)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=BayesR2Params(r2=r2, var_fit=var_fit, var_res=var_res),
        ...     info={'method': 'model', 'outcome_type': 'continuous'},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_numpy'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
