"""Error taxonomy shared by every algebra operation.

Three families, checked in this order by every public operation:

1. NullArgumentError - a required argument is ``None``.
2. IllegalArgumentError - a precondition on the arguments does not hold
   (size mismatch, index out of range, foreign domain, bad configuration).
3. IllegalStateError - the operation is undefined for the current value
   (determinant of a non-square matrix, inverse of zero).

Every error carries the offending values as attributes so callers can
diagnose without re-deriving state.
"""

from __future__ import annotations

from typing import Any


class AlgebraError(Exception):
    """Base class for all algebra-lab errors."""


class NullArgumentError(AlgebraError, TypeError):
    """A required argument was ``None``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name} must not be None")


class IllegalArgumentError(AlgebraError, ValueError):
    """An argument violates a documented precondition."""


class SizeMismatchError(IllegalArgumentError):
    """Operand sizes are incompatible."""

    def __init__(self, what: str, expected: int, actual: int) -> None:
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected equal {what} but actual {expected} != {actual}")


class IndexOutOfRangeError(IllegalArgumentError):
    """A 1-based index lies outside ``[1, size]``."""

    def __init__(self, what: str, index: Any, size: int) -> None:
        self.what = what
        self.index = index
        self.size = size
        super().__init__(f"expected {what} in [1, {size}] but actual {index}")


class DomainMismatchError(IllegalArgumentError):
    """A value or operand belongs to a different scalar domain."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected domain {expected} but actual {actual}")


class IllegalStateError(AlgebraError, RuntimeError):
    """The operation is not defined for the receiver's current value."""


class MatrixNotSquareError(IllegalStateError):
    """A square-only operation was called on a non-square matrix."""

    def __init__(self, row_size: int, column_size: int) -> None:
        self.row_size = row_size
        self.column_size = column_size
        super().__init__(
            f"expected square matrix but actual {row_size} x {column_size}"
        )


def require_not_none(value: Any, name: str) -> Any:
    """Return ``value`` unchanged, raising NullArgumentError if it is None."""
    if value is None:
        raise NullArgumentError(name)
    return value


__all__ = [
    "AlgebraError",
    "DomainMismatchError",
    "IllegalArgumentError",
    "IllegalStateError",
    "IndexOutOfRangeError",
    "MatrixNotSquareError",
    "NullArgumentError",
    "SizeMismatchError",
    "require_not_none",
]
