"""Algebra Lab: exact and context-rounded vectors, matrices and square roots."""

import logging

__version__ = "0.1.0"

from algebra_lab.algorithms.square_root import perfect_square, sqrt, sqrt_of_perfect_square
from algebra_lab.data import (
    DEFAULT_SQUARE_ROOT_CONTEXT,
    DecimalFormat,
    SquareRootContext,
    get_context,
)
from algebra_lab.errors import (
    AlgebraError,
    IllegalArgumentError,
    IllegalStateError,
    NullArgumentError,
)
from algebra_lab.linear import (
    Matrix,
    Vector,
    identity_matrix,
    zero_matrix,
    zero_vector,
)
from algebra_lab.scalars import (
    DECIMAL,
    DECIMAL_COMPLEX,
    INTEGER,
    INTEGER_COMPLEX,
    DecimalComplex,
    IntegerComplex,
    get_domain,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "DECIMAL",
    "DECIMAL_COMPLEX",
    "DEFAULT_SQUARE_ROOT_CONTEXT",
    "INTEGER",
    "INTEGER_COMPLEX",
    "AlgebraError",
    "DecimalComplex",
    "DecimalFormat",
    "IllegalArgumentError",
    "IllegalStateError",
    "IntegerComplex",
    "Matrix",
    "NullArgumentError",
    "SquareRootContext",
    "Vector",
    "get_context",
    "get_domain",
    "identity_matrix",
    "perfect_square",
    "sqrt",
    "sqrt_of_perfect_square",
    "zero_matrix",
    "zero_vector",
]
