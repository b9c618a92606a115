"""
Input validation utilities for bayesr2.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No clipping of out-of-domain values
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from bayesr2.core.exceptions import InvalidInputError, DimensionError, DomainError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to a float64 array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype (a copy, never a view of the input)

    Raises:
        InvalidInputError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise InvalidInputError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # bool is accepted for 0/1 outcomes
    if result.dtype != np.bool_ and not np.issubdtype(result.dtype, np.number):
        raise InvalidInputError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise InvalidInputError(f"{name}: complex dtype {result.dtype} is not supported")

    return np.array(result, dtype=np.float64, copy=True)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        InvalidInputError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InvalidInputError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...],
    axis: int = 0,
) -> None:
    """
    Verify all arrays have the same size along ``axis``.

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)
        axis: Axis to compare (0 = draws for S x N matrices)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[axis] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths along axis {axis}: {details}")


def check_min_samples(
    array: NDArray[np.floating[Any]],
    min_samples: int,
    name: str,
    axis: int = 0,
) -> None:
    """
    Verify array has at least ``min_samples`` entries along ``axis``.

    Raises:
        DimensionError: If array is too short
    """
    n = array.shape[axis]
    if n < min_samples:
        raise DimensionError(
            f"{name}: requires at least {min_samples} entries along axis {axis}, got {n}"
        )


def check_positive(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every element is strictly positive.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DomainError: If any element is <= 0
    """
    bad = array <= 0
    if np.any(bad):
        n_bad = int(np.sum(bad))
        raise DomainError(
            f"{name}: must be strictly positive, found {n_bad} value(s) <= 0 "
            f"(min={float(np.min(array)):.6g})",
            name=name,
            n_invalid=n_bad,
        )


def check_unit_interval(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every element lies in the closed interval [0, 1].

    Raises:
        DomainError: If any element is < 0 or > 1
    """
    bad = (array < 0.0) | (array > 1.0)
    if np.any(bad):
        n_bad = int(np.sum(bad))
        raise DomainError(
            f"{name}: probabilities must lie in [0, 1], found {n_bad} value(s) outside "
            f"(min={float(np.min(array)):.6g}, max={float(np.max(array)):.6g})",
            name=name,
            n_invalid=n_bad,
        )


def check_binary(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every element is exactly 0 or 1.

    Raises:
        DomainError: If any element is neither 0 nor 1
    """
    bad = (array != 0.0) & (array != 1.0)
    if np.any(bad):
        n_bad = int(np.sum(bad))
        examples = np.unique(array[bad])[:5].tolist()
        raise DomainError(
            f"{name}: binary outcome must be 0/1, found {n_bad} other value(s), e.g. {examples}",
            name=name,
            n_invalid=n_bad,
        )
