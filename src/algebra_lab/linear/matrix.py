"""Immutable R x C matrices over one scalar domain.

Rows and columns are indexed from 1. Like Vector, every arithmetic
operation takes a keyword-only ``context`` (exact when omitted) and the
norms needing a square root take a ``sqrt_context``.

Square-only operations (trace, determinant, triangular/diagonal/identity/
invertible predicates) raise MatrixNotSquareError on a non-square matrix.
"""

from __future__ import annotations

import decimal
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar

import numpy as np
import numpy.typing as npt

from algebra_lab.algorithms import determinant as det
from algebra_lab.algorithms.square_root import sqrt
from algebra_lab.data.square_root_context import (
    DEFAULT_SQUARE_ROOT_CONTEXT,
    SquareRootContext,
)
from algebra_lab.errors import (
    DomainMismatchError,
    IllegalArgumentError,
    IllegalStateError,
    IndexOutOfRangeError,
    MatrixNotSquareError,
    NullArgumentError,
    SizeMismatchError,
    require_not_none,
)
from algebra_lab.linear.vector import Vector
from algebra_lab.scalars.domains import Arithmetic, Domain, get_domain

E = TypeVar("E")


class Matrix(Generic[E]):
    """Fixed-size matrix stored as a tuple of row tuples."""

    __slots__ = ("_domain", "_rows")

    _domain: Domain[E]
    _rows: tuple[tuple[E, ...], ...]

    def __init__(self, rows: Iterable[Iterable[E]], domain: Domain[E] | str) -> None:
        """Build from rows of elements that already belong to ``domain``.

        Raises:
            NullArgumentError: If rows, domain or a cell is None.
            IllegalArgumentError: If there are no rows or columns, or the
                rows differ in length.
            DomainMismatchError: If a cell belongs to another domain.
        """
        require_not_none(rows, "rows")
        domain = get_domain(require_not_none(domain, "domain"))
        checked = tuple(
            tuple(domain.check(e, "element") for e in require_not_none(row, "row"))
            for row in rows
        )
        if not checked or not checked[0]:
            msg = "expected row_size > 0 and column_size > 0"
            raise IllegalArgumentError(msg)
        for row in checked:
            if len(row) != len(checked[0]):
                raise SizeMismatchError("row lengths", len(checked[0]), len(row))
        object.__setattr__(self, "_domain", domain)
        object.__setattr__(self, "_rows", checked)

    @classmethod
    def _from_trusted(
        cls, domain: Domain[E], rows: tuple[tuple[E, ...], ...]
    ) -> Matrix[E]:
        matrix = cls.__new__(cls)
        object.__setattr__(matrix, "_domain", domain)
        object.__setattr__(matrix, "_rows", rows)
        return matrix

    @staticmethod
    def builder(row_size: int, column_size: int, domain: Domain[E] | str) -> MatrixBuilder[E]:
        return MatrixBuilder(row_size, column_size, domain)

    @classmethod
    def of(cls, rows: Iterable[Iterable[Any]], domain: Domain[E] | str) -> Matrix[E]:
        """Build from nested plain Python values, coercing every cell.

        Example:
            >>> Matrix.of([[1, 2], [3, 4]], "integer").determinant()
            -2
        """
        require_not_none(rows, "rows")
        resolved = get_domain(require_not_none(domain, "domain"))
        return cls(
            [[resolved.coerce(e) for e in require_not_none(row, "row")] for row in rows],
            resolved,
        )

    @classmethod
    def from_array(cls, array: npt.ArrayLike, domain: Domain[E] | str) -> Matrix[E]:
        """Build from a 2-D numpy array (any dtype), coercing every cell.

        Raises:
            IllegalArgumentError: If the array is not two-dimensional.
        """
        require_not_none(array, "array")
        values = np.asarray(array, dtype=object)
        if values.ndim != 2:
            msg = f"expected a 2-D array but actual {values.ndim}-D"
            raise IllegalArgumentError(msg)
        return cls.of(values.tolist(), domain)

    # -------------------------------------------------------------------------
    # accessors
    # -------------------------------------------------------------------------

    @property
    def domain(self) -> Domain[E]:
        return self._domain

    @property
    def row_size(self) -> int:
        return len(self._rows)

    @property
    def column_size(self) -> int:
        return len(self._rows[0])

    @property
    def size(self) -> int:
        """Number of cells."""
        return self.row_size * self.column_size

    @property
    def row_indexes(self) -> range:
        return range(1, self.row_size + 1)

    @property
    def column_indexes(self) -> range:
        return range(1, self.column_size + 1)

    def element(self, row_index: int, column_index: int) -> E:
        """Cell at 1-based (row_index, column_index).

        Raises:
            NullArgumentError: If an index is None.
            IndexOutOfRangeError: If an index is out of range.
        """
        require_not_none(row_index, "row_index")
        require_not_none(column_index, "column_index")
        _check_index("row_index", row_index, self.row_size)
        _check_index("column_index", column_index, self.column_size)
        return self._rows[row_index - 1][column_index - 1]

    def row(self, row_index: int) -> dict[int, E]:
        """Row as column index -> element."""
        require_not_none(row_index, "row_index")
        _check_index("row_index", row_index, self.row_size)
        return dict(enumerate(self._rows[row_index - 1], start=1))

    def column(self, column_index: int) -> dict[int, E]:
        """Column as row index -> element."""
        require_not_none(column_index, "column_index")
        _check_index("column_index", column_index, self.column_size)
        return {i: row[column_index - 1] for i, row in enumerate(self._rows, start=1)}

    def rows(self) -> dict[int, dict[int, E]]:
        return {i: self.row(i) for i in self.row_indexes}

    def columns(self) -> dict[int, dict[int, E]]:
        return {j: self.column(j) for j in self.column_indexes}

    def row_vector(self, row_index: int) -> Vector[E]:
        require_not_none(row_index, "row_index")
        _check_index("row_index", row_index, self.row_size)
        return Vector._from_trusted(self._domain, self._rows[row_index - 1])

    def column_vector(self, column_index: int) -> Vector[E]:
        require_not_none(column_index, "column_index")
        _check_index("column_index", column_index, self.column_size)
        return Vector._from_trusted(self._domain, self._column(column_index - 1))

    def cells(self) -> Iterator[tuple[int, int, E]]:
        """(row_index, column_index, element) in row-major order."""
        for i, row in enumerate(self._rows, start=1):
            for j, e in enumerate(row, start=1):
                yield i, j, e

    def elements(self) -> tuple[E, ...]:
        """All cells in row-major order."""
        return tuple(e for row in self._rows for e in row)

    def to_array(self) -> npt.NDArray[np.object_]:
        """Cells as a 2-D numpy object array (no precision loss)."""
        array = np.empty((self.row_size, self.column_size), dtype=object)
        for i, row in enumerate(self._rows):
            for j, e in enumerate(row):
                array[i, j] = e
        return array

    # -------------------------------------------------------------------------
    # arithmetic
    # -------------------------------------------------------------------------

    def add(self, summand: Matrix[E], *, context: decimal.Context | None = None) -> Matrix[E]:
        arithmetic = self._same_shape(summand, "summand", context)
        return self._combine(summand, arithmetic.add)

    def subtract(
        self, subtrahend: Matrix[E], *, context: decimal.Context | None = None
    ) -> Matrix[E]:
        arithmetic = self._same_shape(subtrahend, "subtrahend", context)
        return self._combine(subtrahend, arithmetic.subtract)

    def multiply(self, factor: Matrix[E], *, context: decimal.Context | None = None) -> Matrix[E]:
        """Matrix product, (R x K) · (K x C) -> R x C.

        Raises:
            SizeMismatchError: If self.column_size != factor.row_size.
        """
        require_not_none(factor, "factor")
        self._same_domain(factor)
        if self.column_size != factor.row_size:
            raise SizeMismatchError(
                "column size and factor row size", self.column_size, factor.row_size
            )
        arithmetic = self._domain.arithmetic(context)
        columns = [factor._column(j) for j in range(factor.column_size)]
        rows = tuple(
            tuple(_row_times_column(row, column, arithmetic) for column in columns)
            for row in self._rows
        )
        return Matrix._from_trusted(self._domain, rows)

    def multiply_vector(
        self, vector: Vector[E], *, context: decimal.Context | None = None
    ) -> Vector[E]:
        """Matrix-vector product of size row_size.

        Raises:
            SizeMismatchError: If column_size != vector.size.
        """
        require_not_none(vector, "vector")
        if vector.domain is not self._domain:
            raise DomainMismatchError(self._domain.name, vector.domain.name)
        if self.column_size != vector.size:
            raise SizeMismatchError("column size and vector size", self.column_size, vector.size)
        arithmetic = self._domain.arithmetic(context)
        elements = vector.elements()
        return Vector._from_trusted(
            self._domain,
            tuple(_row_times_column(row, elements, arithmetic) for row in self._rows),
        )

    def multiply_row_with_column(
        self,
        row: Sequence[E] | Vector[E],
        column: Sequence[E] | Vector[E],
        *,
        context: decimal.Context | None = None,
    ) -> E:
        """Σ row[k] · column[k].

        Raises:
            SizeMismatchError: If row and column differ in length.
        """
        require_not_none(row, "row")
        require_not_none(column, "column")
        row_elements = tuple(self._domain.check(e, "row element") for e in row)
        column_elements = tuple(self._domain.check(e, "column element") for e in column)
        if len(row_elements) != len(column_elements):
            raise SizeMismatchError("row and column sizes", len(row_elements), len(column_elements))
        return _row_times_column(
            row_elements, column_elements, self._domain.arithmetic(context)
        )

    def scalar_multiply(self, scalar: E, *, context: decimal.Context | None = None) -> Matrix[E]:
        require_not_none(scalar, "scalar")
        self._domain.check(scalar, "scalar")
        arithmetic = self._domain.arithmetic(context)
        return self._map(lambda e: arithmetic.multiply(scalar, e))

    def negate(self, *, context: decimal.Context | None = None) -> Matrix[E]:
        arithmetic = self._domain.arithmetic(context)
        return self._map(arithmetic.negate)

    def trace(self, *, context: decimal.Context | None = None) -> E:
        """Sum of the diagonal."""
        self._require_square()
        arithmetic = self._domain.arithmetic(context)
        return arithmetic.sum(self._rows[i][i] for i in range(self.row_size))

    def determinant(self, *, context: decimal.Context | None = None) -> E:
        """Determinant: triangular, 2 x 2, Sarrus or Leibniz, in that order."""
        self._require_square()
        return det.determinant(self._rows, self._domain.arithmetic(context))

    def leibniz_formula(self, *, context: decimal.Context | None = None) -> E:
        """Determinant over all permutations, regardless of structure."""
        self._require_square()
        return det.leibniz_formula(self._rows, self._domain.arithmetic(context))

    def rule_of_sarrus(self, *, context: decimal.Context | None = None) -> E:
        """Determinant of a 3 x 3 matrix by Sarrus' rule.

        Raises:
            MatrixNotSquareError: If the matrix is not square.
            IllegalArgumentError: If the matrix is square but not 3 x 3.
        """
        self._require_square()
        return det.rule_of_sarrus(self._rows, self._domain.arithmetic(context))

    def transpose(self) -> Matrix[E]:
        return Matrix._from_trusted(
            self._domain, tuple(self._column(j) for j in range(self.column_size))
        )

    def minor(self, row_index: int, column_index: int) -> Matrix[E]:
        """Drop one row and one column; remaining indexes close up from 1.

        Raises:
            IllegalStateError: If the matrix has fewer than 2 rows or columns.
        """
        require_not_none(row_index, "row_index")
        require_not_none(column_index, "column_index")
        _check_index("row_index", row_index, self.row_size)
        _check_index("column_index", column_index, self.column_size)
        if self.row_size < 2 or self.column_size < 2:
            msg = (
                "expected row_size >= 2 and column_size >= 2 but actual "
                f"{self.row_size} x {self.column_size}"
            )
            raise IllegalStateError(msg)
        rows = tuple(
            tuple(e for j, e in enumerate(row, start=1) if j != column_index)
            for i, row in enumerate(self._rows, start=1)
            if i != row_index
        )
        return Matrix._from_trusted(self._domain, rows)

    # -------------------------------------------------------------------------
    # norms
    # -------------------------------------------------------------------------

    def max_abs_column_sum_norm(
        self,
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> Any:
        """max over columns of Σ |cell|."""
        arithmetic = self._domain.arithmetic(context)
        return max(
            arithmetic.sum_norms(self._column(j), sqrt_context)
            for j in range(self.column_size)
        )

    def max_abs_row_sum_norm(
        self,
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> Any:
        """max over rows of Σ |cell|."""
        arithmetic = self._domain.arithmetic(context)
        return max(arithmetic.sum_norms(row, sqrt_context) for row in self._rows)

    def frobenius_norm_pow2(self, *, context: decimal.Context | None = None) -> Any:
        """Σ |cell|² over all cells."""
        return self._domain.arithmetic(context).sum_squares(self.elements())

    def frobenius_norm(
        self,
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> decimal.Decimal:
        return sqrt(self.frobenius_norm_pow2(context=context), sqrt_context)

    def max_norm(
        self,
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> Any:
        """max |cell|."""
        return self._domain.arithmetic(context).max_norm(self.elements(), sqrt_context)

    # -------------------------------------------------------------------------
    # predicates
    # -------------------------------------------------------------------------

    def square(self) -> bool:
        return self.row_size == self.column_size

    def upper_triangular(self) -> bool:
        self._require_square()
        return det.is_upper_triangular(self._rows, self._domain.arithmetic())

    def lower_triangular(self) -> bool:
        self._require_square()
        return det.is_lower_triangular(self._rows, self._domain.arithmetic())

    def triangular(self) -> bool:
        return self.upper_triangular() or self.lower_triangular()

    def diagonal(self) -> bool:
        return self.upper_triangular() and self.lower_triangular()

    def identity(self) -> bool:
        if not self.diagonal():
            return False
        arithmetic = self._domain.arithmetic()
        return all(
            arithmetic.equal(self._rows[i][i], arithmetic.one) for i in range(self.row_size)
        )

    def invertible(self, *, context: decimal.Context | None = None) -> bool:
        """Whether the determinant is a unit of the domain.

        Integer matrices need determinant ±1, Gaussian-integer matrices
        ±1 or ±i; decimal-based matrices any non-zero determinant.
        """
        return self._domain.is_unit(self.determinant(context=context))

    def symmetric(self) -> bool:
        """A == Aᵀ numerically; False for non-square matrices."""
        return self.square() and self.equal_by_comparing_to(self.transpose())

    def skew_symmetric(self) -> bool:
        """A == -Aᵀ numerically; False for non-square matrices."""
        return self.square() and self.equal_by_comparing_to(self.transpose().negate())

    def equal_by_comparing_to(self, other: Matrix[E]) -> bool:
        """Numeric equality of every cell, ignoring decimal scale."""
        require_not_none(other, "other")
        if (
            other._domain is not self._domain
            or other.row_size != self.row_size
            or other.column_size != self.column_size
        ):
            return False
        arithmetic = self._domain.arithmetic()
        return all(
            arithmetic.equal(a, b)
            for row, other_row in zip(self._rows, other._rows)
            for a, b in zip(row, other_row)
        )

    # -------------------------------------------------------------------------
    # dunder
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        """Structural equality; decimal scale counts (``1.0 != 1.00``)."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._domain is other._domain
            and self.column_size == other.column_size
            and self._key() == other._key()
        )

    def __hash__(self) -> int:
        return hash((self._domain.name, self.column_size, self._key()))

    def __repr__(self) -> str:
        rows = [list(row) for row in self._rows]
        return f"Matrix[{self._domain.name}]({rows!r})"

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __add__(self, other: object) -> Matrix[E]:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Matrix[E]:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> Matrix[E]:
        return self.negate()

    def __mul__(self, scalar: object) -> Matrix[E]:
        if not self._domain.accepts(scalar):
            return NotImplemented
        return self.scalar_multiply(scalar)  # type: ignore[arg-type]

    __rmul__ = __mul__

    def __matmul__(self, other: object) -> Any:
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Vector):
            return self.multiply_vector(other)
        return NotImplemented

    # -------------------------------------------------------------------------
    # internal helpers
    # -------------------------------------------------------------------------

    def _column(self, j: int) -> tuple[E, ...]:
        return tuple(row[j] for row in self._rows)

    def _key(self) -> tuple[Any, ...]:
        key = self._domain.structural_key
        return tuple(key(e) for row in self._rows for e in row)

    def _map(self, operation: Any) -> Matrix[E]:
        return Matrix._from_trusted(
            self._domain, tuple(tuple(operation(e) for e in row) for row in self._rows)
        )

    def _combine(self, other: Matrix[E], operation: Any) -> Matrix[E]:
        return Matrix._from_trusted(
            self._domain,
            tuple(
                tuple(operation(a, b) for a, b in zip(row, other_row))
                for row, other_row in zip(self._rows, other._rows)
            ),
        )

    def _same_domain(self, other: Matrix[E]) -> None:
        if other._domain is not self._domain:
            raise DomainMismatchError(self._domain.name, other._domain.name)

    def _same_shape(
        self, other: Matrix[E], name: str, context: decimal.Context | None
    ) -> Arithmetic[E]:
        require_not_none(other, name)
        self._same_domain(other)
        if other.row_size != self.row_size:
            raise SizeMismatchError("row sizes", self.row_size, other.row_size)
        if other.column_size != self.column_size:
            raise SizeMismatchError("column sizes", self.column_size, other.column_size)
        return self._domain.arithmetic(context)

    def _require_square(self) -> None:
        if not self.square():
            raise MatrixNotSquareError(self.row_size, self.column_size)


class MatrixBuilder(Generic[E]):
    """Mutable staging table for exactly one Matrix."""

    def __init__(self, row_size: int, column_size: int, domain: Domain[E] | str) -> None:
        require_not_none(row_size, "row_size")
        require_not_none(column_size, "column_size")
        require_not_none(domain, "domain")
        if row_size <= 0:
            msg = f"expected row_size > 0 but actual {row_size}"
            raise IllegalArgumentError(msg)
        if column_size <= 0:
            msg = f"expected column_size > 0 but actual {column_size}"
            raise IllegalArgumentError(msg)
        self._row_size = row_size
        self._column_size = column_size
        self._domain: Domain[E] = get_domain(domain)
        self._table: list[list[E | None]] = [[None] * column_size for _ in range(row_size)]

    @property
    def row_size(self) -> int:
        return self._row_size

    @property
    def column_size(self) -> int:
        return self._column_size

    @property
    def domain(self) -> Domain[E]:
        return self._domain

    def element(self, row_index: int, column_index: int) -> E | None:
        """Staged cell, None while unset."""
        self._check_position(row_index, column_index)
        return self._table[row_index - 1][column_index - 1]

    def put(self, row_index: int, column_index: int, element: E) -> MatrixBuilder[E]:
        require_not_none(element, "element")
        self._check_position(row_index, column_index)
        self._table[row_index - 1][column_index - 1] = self._domain.check(element, "element")
        return self

    def put_all(self, element: E) -> MatrixBuilder[E]:
        require_not_none(element, "element")
        self._domain.check(element, "element")
        for row in self._table:
            row[:] = [element] * self._column_size
        return self

    def fill_missing(self, element: E) -> MatrixBuilder[E]:
        """Put ``element`` on every cell that is still unset."""
        require_not_none(element, "element")
        self._domain.check(element, "element")
        for row in self._table:
            row[:] = [element if e is None else e for e in row]
        return self

    def build(self) -> Matrix[E]:
        """Snapshot the staged table.

        Raises:
            NullArgumentError: If a cell is still unset.
        """
        for i, row in enumerate(self._table, start=1):
            for j, e in enumerate(row, start=1):
                if e is None:
                    raise NullArgumentError(f"element at ({i}, {j})")
        rows = tuple(tuple(row) for row in self._table)
        return Matrix._from_trusted(self._domain, rows)  # type: ignore[arg-type]

    def _check_position(self, row_index: int, column_index: int) -> None:
        require_not_none(row_index, "row_index")
        require_not_none(column_index, "column_index")
        _check_index("row_index", row_index, self._row_size)
        _check_index("column_index", column_index, self._column_size)

    def __repr__(self) -> str:
        return (
            f"MatrixBuilder[{self._domain.name}]"
            f"({self._row_size} x {self._column_size})"
        )


def _row_times_column(
    row: Sequence[E], column: Sequence[E], arithmetic: Arithmetic[E]
) -> E:
    return arithmetic.sum(arithmetic.multiply(a, b) for a, b in zip(row, column))


def _check_index(what: str, index: int, size: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= size:
        raise IndexOutOfRangeError(what, index, size)


__all__ = [
    "Matrix",
    "MatrixBuilder",
]
