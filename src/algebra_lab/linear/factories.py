"""Zero and identity factories built on the builders."""

from __future__ import annotations

from typing import Any

from algebra_lab.linear.matrix import Matrix
from algebra_lab.linear.vector import Vector
from algebra_lab.scalars.domains import Domain, get_domain


def zero_vector(size: int, domain: Domain[Any] | str) -> Vector[Any]:
    """Vector of ``size`` zeros.

    Example:
        >>> zero_vector(3, "integer")
        Vector[integer]([0, 0, 0])
    """
    resolved = get_domain(domain)
    return Vector.builder(size, resolved).put_all(resolved.zero).build()


def zero_matrix(row_size: int, column_size: int, domain: Domain[Any] | str) -> Matrix[Any]:
    resolved = get_domain(domain)
    return Matrix.builder(row_size, column_size, resolved).put_all(resolved.zero).build()


def identity_matrix(size: int, domain: Domain[Any] | str) -> Matrix[Any]:
    """Square matrix with ones on the diagonal and zeros elsewhere."""
    resolved = get_domain(domain)
    builder = Matrix.builder(size, size, resolved).put_all(resolved.zero)
    for index in range(1, size + 1):
        builder.put(index, index, resolved.one)
    return builder.build()


__all__ = [
    "identity_matrix",
    "zero_matrix",
    "zero_vector",
]
