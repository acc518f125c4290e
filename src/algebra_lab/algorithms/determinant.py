"""Determinant algorithms over any scalar domain.

Dispatch order of ``determinant``:
    1. triangular  -> product of the diagonal
    2. 2 x 2       -> a11·a22 - a12·a21
    3. 3 x 3       -> rule of Sarrus
    4. otherwise   -> Leibniz formula

The Leibniz formula enumerates all n! permutations. It is the fallback only;
there is no size cap, so a large non-triangular matrix runs for a very long
time.

All functions take the square matrix as a sequence of rows (0-based here,
the Matrix API is 1-based) and an Arithmetic that fixes domain and rounding.

References:
- Golub & Van Loan: "Matrix Computations" (4th ed.), §2.1
- Strang: "Introduction to Linear Algebra" (5th ed.), §5.2
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from itertools import permutations
from typing import TYPE_CHECKING, TypeVar

from algebra_lab.errors import IllegalArgumentError, MatrixNotSquareError

if TYPE_CHECKING:
    from algebra_lab.scalars.domains import Arithmetic

logger = logging.getLogger(__name__)

E = TypeVar("E")

Rows = Sequence[Sequence[E]]


def count_inversions(permutation: Sequence[int]) -> int:
    """Number of pairs i < j with permutation[i] > permutation[j].

    Brute-force pairwise comparison, O(n²).

    Example:
        >>> count_inversions([2, 0, 1])
        2
    """
    n = len(permutation)
    return sum(
        1 for i in range(n) for j in range(i + 1, n) if permutation[i] > permutation[j]
    )


def permutation_sign(permutation: Sequence[int]) -> int:
    """(-1) ** inversions, i.e. +1 for even and -1 for odd permutations."""
    return -1 if count_inversions(permutation) % 2 else 1


def is_upper_triangular(rows: Rows[E], arithmetic: Arithmetic[E]) -> bool:
    """No non-zero cell strictly below the diagonal."""
    return all(
        arithmetic.is_zero(rows[i][j]) for i in range(len(rows)) for j in range(i)
    )


def is_lower_triangular(rows: Rows[E], arithmetic: Arithmetic[E]) -> bool:
    """No non-zero cell strictly above the diagonal."""
    n = len(rows)
    return all(
        arithmetic.is_zero(rows[i][j]) for i in range(n) for j in range(i + 1, n)
    )


def diagonal_product(rows: Rows[E], arithmetic: Arithmetic[E]) -> E:
    """a11·a22·...·ann, multiplied left to right."""
    return arithmetic.product(rows[i][i] for i in range(len(rows)))


def two_by_two(rows: Rows[E], arithmetic: Arithmetic[E]) -> E:
    """a11·a22 - a12·a21."""
    _require_size(rows, 2)
    return arithmetic.subtract(
        arithmetic.multiply(rows[0][0], rows[1][1]),
        arithmetic.multiply(rows[0][1], rows[1][0]),
    )


def rule_of_sarrus(rows: Rows[E], arithmetic: Arithmetic[E]) -> E:
    """Closed-form 3 x 3 determinant.

    a11·a22·a33 + a12·a23·a31 + a13·a21·a32
    - a31·a22·a13 - a32·a23·a11 - a33·a21·a12

    The six terms are combined left to right.

    Raises:
        IllegalArgumentError: If the matrix is not 3 x 3.
    """
    _require_size(rows, 3)
    mul = arithmetic.multiply
    (a11, a12, a13), (a21, a22, a23), (a31, a32, a33) = rows
    result = arithmetic.add(mul(mul(a11, a22), a33), mul(mul(a12, a23), a31))
    result = arithmetic.add(result, mul(mul(a13, a21), a32))
    result = arithmetic.subtract(result, mul(mul(a31, a22), a13))
    result = arithmetic.subtract(result, mul(mul(a32, a23), a11))
    return arithmetic.subtract(result, mul(mul(a33, a21), a12))


def leibniz_formula(rows: Rows[E], arithmetic: Arithmetic[E]) -> E:
    """Σ over σ ∈ Sₙ of sign(σ) · Π a[σ(i), i].

    Factorial time in n.
    """
    _require_square(rows)
    n = len(rows)
    logger.debug("leibniz formula over %d x %d matrix: %d permutations", n, n, math.factorial(n))
    result = arithmetic.zero
    for permutation in permutations(range(n)):
        product = arithmetic.product(rows[row][column] for column, row in enumerate(permutation))
        if permutation_sign(permutation) < 0:
            result = arithmetic.subtract(result, product)
        else:
            result = arithmetic.add(result, product)
    return result


def determinant(rows: Rows[E], arithmetic: Arithmetic[E]) -> E:
    """Determinant of a square matrix, dispatched by structure.

    Raises:
        MatrixNotSquareError: If the rows do not form a square matrix.
    """
    _require_square(rows)
    n = len(rows)
    if is_upper_triangular(rows, arithmetic) or is_lower_triangular(rows, arithmetic):
        logger.debug("determinant of %d x %d: triangular", n, n)
        return diagonal_product(rows, arithmetic)
    if n == 2:
        return two_by_two(rows, arithmetic)
    if n == 3:
        return rule_of_sarrus(rows, arithmetic)
    return leibniz_formula(rows, arithmetic)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _require_square(rows: Rows[E]) -> None:
    n = len(rows)
    for row in rows:
        if len(row) != n:
            raise MatrixNotSquareError(n, len(row))


def _require_size(rows: Rows[E], size: int) -> None:
    _require_square(rows)
    if len(rows) != size:
        msg = f"expected {size} x {size} matrix but actual {len(rows)} x {len(rows)}"
        raise IllegalArgumentError(msg)


__all__ = [
    "count_inversions",
    "determinant",
    "diagonal_product",
    "is_lower_triangular",
    "is_upper_triangular",
    "leibniz_formula",
    "permutation_sign",
    "rule_of_sarrus",
    "two_by_two",
]
