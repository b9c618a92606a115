"""
Core protocols for bayesr2.

Structural interfaces that backends must satisfy. Protocol (structural
typing) rather than ABC keeps backends plain classes that are easy to test
and swap.
"""

from typing import Protocol, TypeVar, runtime_checkable

from bayesr2.core.result import Result

P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a validated design and produces a Result envelope.
    Backends are stateless: everything they need is in the design.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_numpy'.
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the computation.

        Raises:
            InvalidInputError: If the design is unusable for this backend
        """
        ...
