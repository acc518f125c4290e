"""Immutable 1-indexed vectors over one scalar domain.

Every arithmetic operation takes a keyword-only ``context``: without one the
operation is exact, with a ``decimal.Context`` every elementary step of a
decimal-based domain is rounded to it. Norms needing a square root take a
``sqrt_context`` as well.

Checks run in a fixed order: null operands, then domain, then size.
"""

from __future__ import annotations

import decimal
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import numpy as np
import numpy.typing as npt

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
    NullArgumentError,
    SizeMismatchError,
    require_not_none,
)
from algebra_lab.scalars.domains import Arithmetic, Domain, get_domain

if TYPE_CHECKING:
    from algebra_lab.linear.matrix import Matrix

E = TypeVar("E")


class Vector(Generic[E]):
    """Fixed-size vector, indexed from 1 to ``size``."""

    __slots__ = ("_domain", "_elements")

    _domain: Domain[E]
    _elements: tuple[E, ...]

    def __init__(self, elements: Iterable[E], domain: Domain[E] | str) -> None:
        """Build from elements that already belong to ``domain``.

        Raises:
            NullArgumentError: If elements, domain or an element is None.
            IllegalArgumentError: If there are no elements.
            DomainMismatchError: If an element belongs to another domain.
        """
        require_not_none(elements, "elements")
        domain = get_domain(require_not_none(domain, "domain"))
        checked = tuple(domain.check(e, "element") for e in elements)
        if not checked:
            msg = "expected size > 0 but actual 0"
            raise IllegalArgumentError(msg)
        object.__setattr__(self, "_domain", domain)
        object.__setattr__(self, "_elements", checked)

    @classmethod
    def _from_trusted(cls, domain: Domain[E], elements: tuple[E, ...]) -> Vector[E]:
        vector = cls.__new__(cls)
        object.__setattr__(vector, "_domain", domain)
        object.__setattr__(vector, "_elements", elements)
        return vector

    @staticmethod
    def builder(size: int, domain: Domain[E] | str) -> VectorBuilder[E]:
        return VectorBuilder(size, domain)

    @classmethod
    def of(cls, values: Iterable[Any], domain: Domain[E] | str) -> Vector[E]:
        """Build from plain Python values, coercing each into ``domain``.

        Example:
            >>> Vector.of([3, 4], "integer").euclidean_norm()
            Decimal('5')
        """
        require_not_none(values, "values")
        resolved = get_domain(require_not_none(domain, "domain"))
        return cls([resolved.coerce(v) for v in values], resolved)

    # -------------------------------------------------------------------------
    # accessors
    # -------------------------------------------------------------------------

    @property
    def domain(self) -> Domain[E]:
        return self._domain

    @property
    def size(self) -> int:
        return len(self._elements)

    def element(self, index: int) -> E:
        """Element at 1-based ``index``.

        Raises:
            NullArgumentError: If index is None.
            IndexOutOfRangeError: If index is not in [1, size].
        """
        require_not_none(index, "index")
        _check_index("index", index, self.size)
        return self._elements[index - 1]

    def elements(self) -> tuple[E, ...]:
        return self._elements

    def entries(self) -> dict[int, E]:
        """1-based index -> element."""
        return {i: e for i, e in enumerate(self._elements, start=1)}

    def to_array(self) -> npt.NDArray[np.object_]:
        """Elements as a 1-D numpy object array (no precision loss)."""
        array = np.empty(self.size, dtype=object)
        for i, e in enumerate(self._elements):
            array[i] = e
        return array

    # -------------------------------------------------------------------------
    # vector space operations
    # -------------------------------------------------------------------------

    def add(self, summand: Vector[E], *, context: decimal.Context | None = None) -> Vector[E]:
        arithmetic = self._binary(summand, "summand", context)
        return self._combine(summand, arithmetic.add)

    def subtract(
        self, subtrahend: Vector[E], *, context: decimal.Context | None = None
    ) -> Vector[E]:
        arithmetic = self._binary(subtrahend, "subtrahend", context)
        return self._combine(subtrahend, arithmetic.subtract)

    def scalar_multiply(self, scalar: E, *, context: decimal.Context | None = None) -> Vector[E]:
        require_not_none(scalar, "scalar")
        self._domain.check(scalar, "scalar")
        arithmetic = self._domain.arithmetic(context)
        return Vector._from_trusted(
            self._domain, tuple(arithmetic.multiply(scalar, e) for e in self._elements)
        )

    def negate(self, *, context: decimal.Context | None = None) -> Vector[E]:
        arithmetic = self._domain.arithmetic(context)
        return Vector._from_trusted(
            self._domain, tuple(arithmetic.negate(e) for e in self._elements)
        )

    def dot_product(self, other: Vector[E], *, context: decimal.Context | None = None) -> E:
        """Σ self[i] · other[i] (no conjugation for complex domains)."""
        arithmetic = self._binary(other, "other", context)
        return arithmetic.sum(
            arithmetic.multiply(a, b) for a, b in zip(self._elements, other._elements)
        )

    def dyadic_product(
        self, other: Vector[E], *, context: decimal.Context | None = None
    ) -> Matrix[E]:
        """Outer product: cell (i, j) is self[i] · other[j]."""
        from algebra_lab.linear.matrix import Matrix

        arithmetic = self._binary(other, "other", context)
        rows = tuple(
            tuple(arithmetic.multiply(a, b) for b in other._elements) for a in self._elements
        )
        return Matrix._from_trusted(self._domain, rows)

    def orthogonal_to(self, other: Vector[E], *, context: decimal.Context | None = None) -> bool:
        product = self.dot_product(other, context=context)
        return self._domain.arithmetic(context).is_zero(product)

    # -------------------------------------------------------------------------
    # norms and distances
    # -------------------------------------------------------------------------

    def euclidean_norm_pow2(self, *, context: decimal.Context | None = None) -> Any:
        """Σ |e|², equal to ``dot_product(self)`` for the real domains."""
        return self._domain.arithmetic(context).sum_squares(self._elements)

    def taxicab_norm(
        self,
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> Any:
        """Σ |e|."""
        return self._domain.arithmetic(context).sum_norms(self._elements, sqrt_context)

    def euclidean_norm(
        self,
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> decimal.Decimal:
        return sqrt(self.euclidean_norm_pow2(context=context), sqrt_context)

    def max_norm(
        self,
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> Any:
        """max |e|."""
        return self._domain.arithmetic(context).max_norm(self._elements, sqrt_context)

    def taxicab_distance(
        self,
        other: Vector[E],
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> Any:
        return self.subtract(other, context=context).taxicab_norm(
            sqrt_context=sqrt_context, context=context
        )

    def euclidean_distance_pow2(
        self, other: Vector[E], *, context: decimal.Context | None = None
    ) -> Any:
        return self.subtract(other, context=context).euclidean_norm_pow2(context=context)

    def euclidean_distance(
        self,
        other: Vector[E],
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> decimal.Decimal:
        return self.subtract(other, context=context).euclidean_norm(
            sqrt_context=sqrt_context, context=context
        )

    def max_distance(
        self,
        other: Vector[E],
        *,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
        context: decimal.Context | None = None,
    ) -> Any:
        return self.subtract(other, context=context).max_norm(
            sqrt_context=sqrt_context, context=context
        )

    # -------------------------------------------------------------------------
    # comparison
    # -------------------------------------------------------------------------

    def equal_by_comparing_to(self, other: Vector[E]) -> bool:
        """Numeric equality of every element, ignoring decimal scale."""
        require_not_none(other, "other")
        if other._domain is not self._domain or other.size != self.size:
            return False
        arithmetic = self._domain.arithmetic()
        return all(
            arithmetic.equal(a, b) for a, b in zip(self._elements, other._elements)
        )

    def __eq__(self, other: object) -> bool:
        """Structural equality; decimal scale counts (``1.0 != 1.00``)."""
        if not isinstance(other, Vector):
            return NotImplemented
        return self._domain is other._domain and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((self._domain.name, self._key()))

    def __repr__(self) -> str:
        return f"Vector[{self._domain.name}]({list(self._elements)!r})"

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[E]:
        return iter(self._elements)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __add__(self, other: object) -> Vector[E]:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Vector[E]:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> Vector[E]:
        return self.negate()

    def __mul__(self, scalar: object) -> Vector[E]:
        if not self._domain.accepts(scalar):
            return NotImplemented
        return self.scalar_multiply(scalar)  # type: ignore[arg-type]

    __rmul__ = __mul__

    def __matmul__(self, other: object) -> E:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dot_product(other)

    # -------------------------------------------------------------------------
    # internal helpers
    # -------------------------------------------------------------------------

    def _binary(
        self, other: Vector[E], name: str, context: decimal.Context | None
    ) -> Arithmetic[E]:
        require_not_none(other, name)
        if other._domain is not self._domain:
            raise DomainMismatchError(self._domain.name, other._domain.name)
        if other.size != self.size:
            raise SizeMismatchError("sizes", self.size, other.size)
        return self._domain.arithmetic(context)

    def _key(self) -> tuple[Any, ...]:
        return tuple(self._domain.structural_key(e) for e in self._elements)

    def _combine(self, other: Vector[E], operation: Any) -> Vector[E]:
        return Vector._from_trusted(
            self._domain,
            tuple(operation(a, b) for a, b in zip(self._elements, other._elements)),
        )


class VectorBuilder(Generic[E]):
    """Mutable staging area for exactly one Vector."""

    def __init__(self, size: int, domain: Domain[E] | str) -> None:
        require_not_none(size, "size")
        require_not_none(domain, "domain")
        if size <= 0:
            msg = f"expected size > 0 but actual {size}"
            raise IllegalArgumentError(msg)
        self._size = size
        self._domain: Domain[E] = get_domain(domain)
        self._staging: dict[int, E] = {}

    @property
    def size(self) -> int:
        return self._size

    @property
    def domain(self) -> Domain[E]:
        return self._domain

    def element(self, index: int) -> E | None:
        """Staged element at ``index``, None while unset."""
        require_not_none(index, "index")
        _check_index("index", index, self._size)
        return self._staging.get(index)

    def put(self, index: int, element: E) -> VectorBuilder[E]:
        require_not_none(index, "index")
        require_not_none(element, "element")
        _check_index("index", index, self._size)
        self._staging[index] = self._domain.check(element, "element")
        return self

    def append(self, element: E) -> VectorBuilder[E]:
        """Put ``element`` on the first free index.

        Raises:
            IllegalStateError: If every index is already set.
        """
        require_not_none(element, "element")
        self._domain.check(element, "element")
        for index in range(1, self._size + 1):
            if index not in self._staging:
                self._staging[index] = element
                return self
        msg = f"expected a free index in [1, {self._size}] but actual none"
        raise IllegalStateError(msg)

    def put_all(self, element: E) -> VectorBuilder[E]:
        require_not_none(element, "element")
        self._domain.check(element, "element")
        for index in range(1, self._size + 1):
            self._staging[index] = element
        return self

    def fill_missing(self, element: E) -> VectorBuilder[E]:
        """Put ``element`` on every index that is still unset."""
        require_not_none(element, "element")
        self._domain.check(element, "element")
        for index in range(1, self._size + 1):
            self._staging.setdefault(index, element)
        return self

    def build(self) -> Vector[E]:
        """Snapshot the staged elements.

        Raises:
            NullArgumentError: If an index is still unset.
        """
        missing = [i for i in range(1, self._size + 1) if i not in self._staging]
        if missing:
            raise NullArgumentError(f"element at index {missing[0]}")
        elements = tuple(self._staging[i] for i in range(1, self._size + 1))
        return Vector._from_trusted(self._domain, elements)

    def __repr__(self) -> str:
        return f"VectorBuilder[{self._domain.name}](size={self._size}, staged={len(self._staging)})"


def _check_index(what: str, index: int, size: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= size:
        raise IndexOutOfRangeError(what, index, size)


__all__ = [
    "Vector",
    "VectorBuilder",
]
