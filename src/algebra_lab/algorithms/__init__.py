"""Numerical algorithms module.

This module contains implementations of:
- Heron square root with explicit convergence control (square_root)
- Determinant dispatch: triangular, 2 x 2, Sarrus, Leibniz (determinant)
- Reproducible random matrices and matrix summaries (matrices)

Only the square root is re-exported here; import the other modules directly.
"""

from algebra_lab.algorithms.square_root import (
    perfect_square,
    sqrt,
    sqrt_of_perfect_square,
)

__all__ = [
    "perfect_square",
    "sqrt",
    "sqrt_of_perfect_square",
]
