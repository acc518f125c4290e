"""Matrix generation utilities and matrix summaries.

This module provides reproducible random matrices and vectors for every
scalar domain, plus a summary record collecting the structure, determinant
and norms of a matrix.

Key Features:
- Reproducible generation with seed control (numpy.random.default_rng)
- Triangular matrices for exercising the cheap determinant path
- MatrixSummary for reports and the command line
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import numpy as np

from algebra_lab.data.decimal_formats import EXACT_CONTEXT
from algebra_lab.data.square_root_context import (
    DEFAULT_SQUARE_ROOT_CONTEXT,
    SquareRootContext,
)
from algebra_lab.errors import IllegalArgumentError, require_not_none
from algebra_lab.linear.matrix import Matrix
from algebra_lab.linear.vector import Vector
from algebra_lab.scalars.complex_numbers import IntegerComplex
from algebra_lab.scalars.domains import DECIMAL, INTEGER, INTEGER_COMPLEX

DEFAULT_SEED: int = 42
"""Default random seed for reproducible experiments."""

DEFAULT_BOUND: int = 10
"""Cells are drawn from [-bound, bound]."""


def create_random_integer_matrix(
    row_size: int,
    column_size: int,
    *,
    bound: int = DEFAULT_BOUND,
    seed: int | None = None,
) -> Matrix[int]:
    """Create an integer matrix with cells uniform in [-bound, bound].

    Args:
        row_size: Number of rows.
        column_size: Number of columns.
        bound: Largest absolute cell value.
        seed: Random seed for reproducibility.

    Returns:
        row_size x column_size matrix over INTEGER.

    Example:
        >>> m = create_random_integer_matrix(3, 3, seed=42)
        >>> m.rule_of_sarrus() == m.leibniz_formula()
        True
    """
    _check_shape(row_size, column_size, bound)
    rng = np.random.default_rng(seed)
    cells = rng.integers(-bound, bound, size=(row_size, column_size), endpoint=True)
    return Matrix.from_array(cells, INTEGER)


def create_random_decimal_matrix(
    row_size: int,
    column_size: int,
    *,
    scale: int = 2,
    bound: int = DEFAULT_BOUND,
    seed: int | None = None,
) -> Matrix[Decimal]:
    """Create a decimal matrix with ``scale`` fractional digits.

    Cells are exact decimals k · 10^-scale with |k · 10^-scale| <= bound.
    """
    _check_shape(row_size, column_size, bound)
    if scale < 0:
        msg = f"expected scale >= 0 but actual {scale}"
        raise IllegalArgumentError(msg)
    rng = np.random.default_rng(seed)
    limit = bound * 10**scale
    cells = rng.integers(-limit, limit, size=(row_size, column_size), endpoint=True)
    rows = [
        [Decimal(int(k)).scaleb(-scale, context=EXACT_CONTEXT) for k in row]
        for row in cells.tolist()
    ]
    return Matrix.of(rows, DECIMAL)


def create_random_integer_complex_matrix(
    row_size: int,
    column_size: int,
    *,
    bound: int = DEFAULT_BOUND,
    seed: int | None = None,
) -> Matrix[IntegerComplex]:
    """Create a Gaussian-integer matrix, both parts uniform in [-bound, bound]."""
    _check_shape(row_size, column_size, bound)
    rng = np.random.default_rng(seed)
    parts = rng.integers(-bound, bound, size=(row_size, column_size, 2), endpoint=True)
    rows = [[IntegerComplex.of(re, im) for re, im in row] for row in parts.tolist()]
    return Matrix.of(rows, INTEGER_COMPLEX)


def create_random_triangular_matrix(
    size: int,
    *,
    lower: bool = False,
    bound: int = DEFAULT_BOUND,
    seed: int | None = None,
) -> Matrix[int]:
    """Create an upper (or lower) triangular integer matrix.

    The determinant of the result takes the diagonal-product path.
    """
    _check_shape(size, size, bound)
    rng = np.random.default_rng(seed)
    cells = rng.integers(-bound, bound, size=(size, size), endpoint=True)
    cells = np.tril(cells) if lower else np.triu(cells)
    return Matrix.from_array(cells, INTEGER)


def create_random_integer_vector(
    size: int,
    *,
    bound: int = DEFAULT_BOUND,
    seed: int | None = None,
) -> Vector[int]:
    _check_shape(size, 1, bound)
    rng = np.random.default_rng(seed)
    return Vector.of(rng.integers(-bound, bound, size=size, endpoint=True).tolist(), INTEGER)


@dataclass(frozen=True, slots=True)
class MatrixSummary:
    """Structure, determinant and norms of one matrix.

    Square-only entries are None for non-square matrices.
    """

    domain: str
    """Name of the scalar domain."""

    row_size: int
    column_size: int

    square: bool
    triangular: bool | None
    diagonal: bool | None
    identity: bool | None
    symmetric: bool
    invertible: bool | None

    trace: Any
    determinant: Any

    frobenius_norm: Decimal
    """sqrt(Σ |cell|²) under the summary's square root context."""

    max_norm: Any
    max_abs_row_sum_norm: Any
    max_abs_column_sum_norm: Any

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization (numbers as strings)."""
        return {
            "domain": self.domain,
            "row_size": self.row_size,
            "column_size": self.column_size,
            "square": self.square,
            "triangular": self.triangular,
            "diagonal": self.diagonal,
            "identity": self.identity,
            "symmetric": self.symmetric,
            "invertible": self.invertible,
            "trace": _to_text(self.trace),
            "determinant": _to_text(self.determinant),
            "frobenius_norm": _to_text(self.frobenius_norm),
            "max_norm": _to_text(self.max_norm),
            "max_abs_row_sum_norm": _to_text(self.max_abs_row_sum_norm),
            "max_abs_column_sum_norm": _to_text(self.max_abs_column_sum_norm),
        }


def summarize(
    matrix: Matrix[Any],
    *,
    sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
    context: decimal.Context | None = None,
) -> MatrixSummary:
    """Compute a MatrixSummary.

    Args:
        matrix: Matrix to summarize.
        sqrt_context: Square root contract of the Frobenius and complex norms.
        context: Optional decimal.Context for decimal-based domains.

    Returns:
        MatrixSummary of ``matrix``.
    """
    require_not_none(matrix, "matrix")
    square = matrix.square()
    norms = {"sqrt_context": sqrt_context, "context": context}
    return MatrixSummary(
        domain=matrix.domain.name,
        row_size=matrix.row_size,
        column_size=matrix.column_size,
        square=square,
        triangular=matrix.triangular() if square else None,
        diagonal=matrix.diagonal() if square else None,
        identity=matrix.identity() if square else None,
        symmetric=matrix.symmetric(),
        invertible=matrix.invertible(context=context) if square else None,
        trace=matrix.trace(context=context) if square else None,
        determinant=matrix.determinant(context=context) if square else None,
        frobenius_norm=matrix.frobenius_norm(**norms),
        max_norm=matrix.max_norm(**norms),
        max_abs_row_sum_norm=matrix.max_abs_row_sum_norm(**norms),
        max_abs_column_sum_norm=matrix.max_abs_column_sum_norm(**norms),
    )


def _check_shape(row_size: int, column_size: int, bound: int) -> None:
    if row_size <= 0 or column_size <= 0:
        msg = f"expected positive sizes but actual {row_size} x {column_size}"
        raise IllegalArgumentError(msg)
    if bound < 0:
        msg = f"expected bound >= 0 but actual {bound}"
        raise IllegalArgumentError(msg)


def _to_text(value: Any) -> str | None:
    return None if value is None else str(value)


__all__ = [
    "DEFAULT_BOUND",
    "DEFAULT_SEED",
    "MatrixSummary",
    "create_random_decimal_matrix",
    "create_random_integer_complex_matrix",
    "create_random_integer_matrix",
    "create_random_integer_vector",
    "create_random_triangular_matrix",
    "summarize",
]
