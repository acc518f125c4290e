"""Scalar domains and their arithmetic policies.

A Domain describes one element kind (what values belong, what zero and one
are, which values are ring units). An Arithmetic binds a domain to a
rounding policy:

- exact: integers use Python ints, decimals run under EXACT_CONTEXT
- context: every elementary decimal step is rounded by a caller context

Vectors, matrices and the determinant algorithms only ever talk to an
Arithmetic, so both policies share one code path.
"""

from __future__ import annotations

import decimal
from abc import ABC, abstractmethod
from collections.abc import Iterable
from decimal import Decimal
from functools import reduce
from typing import Any, Generic, TypeVar

from algebra_lab.algorithms.square_root import sqrt
from algebra_lab.data.decimal_formats import EXACT_CONTEXT
from algebra_lab.data.square_root_context import (
    DEFAULT_SQUARE_ROOT_CONTEXT,
    SquareRootContext,
)
from algebra_lab.errors import (
    DomainMismatchError,
    IllegalArgumentError,
    require_not_none,
)
from algebra_lab.scalars.complex_numbers import (
    DecimalComplex,
    IntegerComplex,
    to_decimal,
    to_int,
)

E = TypeVar("E")


# =============================================================================
# ARITHMETIC POLICIES
# =============================================================================


class Arithmetic(ABC, Generic[E]):
    """Elementary operations of one domain under one rounding policy."""

    def __init__(self, domain: Domain[E], context: decimal.Context | None = None) -> None:
        self._domain = domain
        self._context = context

    @property
    def domain(self) -> Domain[E]:
        return self._domain

    @property
    def context(self) -> decimal.Context | None:
        """Rounding context, ``None`` in exact mode."""
        return self._context

    @property
    def exact(self) -> bool:
        return self._context is None

    @property
    def zero(self) -> E:
        return self._domain.zero

    @property
    def one(self) -> E:
        return self._domain.one

    @abstractmethod
    def add(self, first: E, second: E) -> E: ...

    @abstractmethod
    def subtract(self, first: E, second: E) -> E: ...

    @abstractmethod
    def multiply(self, first: E, second: E) -> E: ...

    @abstractmethod
    def negate(self, value: E) -> E: ...

    @abstractmethod
    def is_zero(self, value: E) -> bool: ...

    @abstractmethod
    def equal(self, first: E, second: E) -> bool:
        """Numeric equality, ignoring decimal scale."""

    @abstractmethod
    def abs(self, value: E, sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> Any:
        """Absolute value (modulus for complex elements)."""

    @abstractmethod
    def abs_pow2(self, value: E) -> Any:
        """Squared absolute value, never needs a square root."""

    @abstractmethod
    def add_norms(self, first: Any, second: Any) -> Any:
        """Add two results of abs or abs_pow2."""

    def sum(self, values: Iterable[E]) -> E:
        """Left fold of add; the first value is taken as is, zero when empty."""
        iterator = iter(values)
        first = next(iterator, None)
        if first is None:
            return self.zero
        return reduce(self.add, iterator, first)

    def product(self, values: Iterable[E]) -> E:
        """Left fold of multiply; the first value is taken as is, one when empty."""
        iterator = iter(values)
        first = next(iterator, None)
        if first is None:
            return self.one
        return reduce(self.multiply, iterator, first)

    def sum_norms(
        self,
        values: Iterable[E],
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
    ) -> Any:
        """Σ|v| over ``values``."""
        return self._sum_norms(self.abs(v, sqrt_context) for v in values)

    def sum_squares(self, values: Iterable[E]) -> Any:
        """Σ|v|² over ``values``."""
        return self._sum_norms(self.abs_pow2(v) for v in values)

    def max_norm(
        self,
        values: Iterable[E],
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
    ) -> Any:
        """max |v| over a non-empty ``values``."""
        return max(self.abs(v, sqrt_context) for v in values)

    def _sum_norms(self, norms: Iterable[Any]) -> Any:
        iterator = iter(norms)
        first = next(iterator, None)
        if first is None:
            return 0
        return reduce(self.add_norms, iterator, first)

    def __repr__(self) -> str:
        mode = "exact" if self.exact else f"prec={self._context.prec}"  # type: ignore[union-attr]
        return f"{type(self).__name__}({self._domain.name}, {mode})"


class IntegerArithmetic(Arithmetic[int]):
    """Exact big-integer arithmetic."""

    def add(self, first: int, second: int) -> int:
        return first + second

    def subtract(self, first: int, second: int) -> int:
        return first - second

    def multiply(self, first: int, second: int) -> int:
        return first * second

    def negate(self, value: int) -> int:
        return -value

    def is_zero(self, value: int) -> bool:
        return value == 0

    def equal(self, first: int, second: int) -> bool:
        return first == second

    def abs(self, value: int, sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> int:
        return abs(value)

    def abs_pow2(self, value: int) -> int:
        return value * value

    def add_norms(self, first: int, second: int) -> int:
        return first + second


class DecimalArithmetic(Arithmetic[Decimal]):
    """Decimal arithmetic; exact under EXACT_CONTEXT, otherwise rounded per step."""

    @property
    def _ctx(self) -> decimal.Context:
        return self._context or EXACT_CONTEXT

    def add(self, first: Decimal, second: Decimal) -> Decimal:
        return self._ctx.add(first, second)

    def subtract(self, first: Decimal, second: Decimal) -> Decimal:
        return self._ctx.subtract(first, second)

    def multiply(self, first: Decimal, second: Decimal) -> Decimal:
        return self._ctx.multiply(first, second)

    def negate(self, value: Decimal) -> Decimal:
        return self._ctx.minus(value)

    def is_zero(self, value: Decimal) -> bool:
        return value.is_zero()

    def equal(self, first: Decimal, second: Decimal) -> bool:
        return first == second

    def abs(
        self, value: Decimal, sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
    ) -> Decimal:
        return self._ctx.abs(value)

    def abs_pow2(self, value: Decimal) -> Decimal:
        return self._ctx.multiply(value, value)

    def add_norms(self, first: Decimal, second: Decimal) -> Decimal:
        return self._ctx.add(first, second)


class IntegerComplexArithmetic(Arithmetic[IntegerComplex]):
    """Exact Gaussian-integer arithmetic. Moduli are decimals, squared moduli ints."""

    def add(self, first: IntegerComplex, second: IntegerComplex) -> IntegerComplex:
        return first.add(second)

    def subtract(self, first: IntegerComplex, second: IntegerComplex) -> IntegerComplex:
        return first.subtract(second)

    def multiply(self, first: IntegerComplex, second: IntegerComplex) -> IntegerComplex:
        return first.multiply(second)

    def negate(self, value: IntegerComplex) -> IntegerComplex:
        return value.negate()

    def is_zero(self, value: IntegerComplex) -> bool:
        return value == IntegerComplex.ZERO

    def equal(self, first: IntegerComplex, second: IntegerComplex) -> bool:
        return first.equals_by_comparing_parts(second)

    def abs(
        self,
        value: IntegerComplex,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
    ) -> Decimal:
        return value.abs(sqrt_context)

    def abs_pow2(self, value: IntegerComplex) -> int:
        return value.abs_pow2()

    def add_norms(self, first: int | Decimal, second: int | Decimal) -> int | Decimal:
        if isinstance(first, int) and isinstance(second, int):
            return first + second
        return EXACT_CONTEXT.add(Decimal(first), Decimal(second))


class DecimalComplexArithmetic(Arithmetic[DecimalComplex]):
    """Complex-over-decimal arithmetic, exact or rounded per step."""

    @property
    def _ctx(self) -> decimal.Context:
        return self._context or EXACT_CONTEXT

    def add(self, first: DecimalComplex, second: DecimalComplex) -> DecimalComplex:
        return first.add(second, self._ctx)

    def subtract(self, first: DecimalComplex, second: DecimalComplex) -> DecimalComplex:
        return first.subtract(second, self._ctx)

    def multiply(self, first: DecimalComplex, second: DecimalComplex) -> DecimalComplex:
        return first.multiply(second, self._ctx)

    def negate(self, value: DecimalComplex) -> DecimalComplex:
        return value.negate(self._ctx)

    def is_zero(self, value: DecimalComplex) -> bool:
        return not value.invertible()

    def equal(self, first: DecimalComplex, second: DecimalComplex) -> bool:
        return first.equals_by_comparing_parts(second)

    def abs(
        self,
        value: DecimalComplex,
        sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
    ) -> Decimal:
        return sqrt(value.abs_pow2(self._ctx), sqrt_context)

    def abs_pow2(self, value: DecimalComplex) -> Decimal:
        return value.abs_pow2(self._ctx)

    def add_norms(self, first: Decimal, second: Decimal) -> Decimal:
        return self._ctx.add(Decimal(first), Decimal(second))


# =============================================================================
# DOMAINS
# =============================================================================


class Domain(ABC, Generic[E]):
    """One of the four scalar element kinds."""

    name: str
    zero: E
    one: E
    supports_context: bool = False

    def __init__(self) -> None:
        self._exact = self._new_arithmetic(None)

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Whether ``value`` already is an element of this domain."""

    @abstractmethod
    def coerce(self, value: Any) -> E:
        """Convert a plain Python value into an element of this domain.

        Raises:
            IllegalArgumentError: If the value has no representation here.
        """

    @abstractmethod
    def is_unit(self, value: E) -> bool:
        """Whether ``value`` has a multiplicative inverse inside this domain."""

    @abstractmethod
    def _new_arithmetic(self, context: decimal.Context | None) -> Arithmetic[E]: ...

    def structural_key(self, value: E) -> Any:
        """Hashable key of ``value`` for structural equality."""
        return value

    def check(self, value: Any, name: str = "value") -> E:
        """Return ``value`` if it belongs to this domain.

        Raises:
            NullArgumentError: If value is None.
            DomainMismatchError: If value is an element of another kind.
        """
        require_not_none(value, name)
        if not self.accepts(value):
            raise DomainMismatchError(self.name, type(value).__name__)
        return value

    def arithmetic(self, context: decimal.Context | None = None) -> Arithmetic[E]:
        """Arithmetic of this domain, exact without a context.

        Raises:
            IllegalArgumentError: If a context is passed to an integer domain,
                or ``context`` is not a decimal.Context.
        """
        if context is None:
            return self._exact
        if not isinstance(context, decimal.Context):
            msg = f"expected decimal.Context but actual {type(context).__name__}"
            raise IllegalArgumentError(msg)
        if not self.supports_context:
            msg = f"expected a decimal-based domain for a rounding context but actual {self.name}"
            raise IllegalArgumentError(msg)
        return self._new_arithmetic(context)

    def __repr__(self) -> str:
        return self.name.upper()


class IntegerDomain(Domain[int]):
    name = "integer"
    zero = 0
    one = 1

    def accepts(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    def coerce(self, value: Any) -> int:
        require_not_none(value, "value")
        return to_int(value)

    def is_unit(self, value: int) -> bool:
        return value in (1, -1)

    def _new_arithmetic(self, context: decimal.Context | None) -> Arithmetic[int]:
        return IntegerArithmetic(self, context)


class DecimalDomain(Domain[Decimal]):
    name = "decimal"
    zero = Decimal(0)
    one = Decimal(1)
    supports_context = True

    def accepts(self, value: Any) -> bool:
        return isinstance(value, Decimal) and value.is_finite()

    def coerce(self, value: Any) -> Decimal:
        require_not_none(value, "value")
        return to_decimal(value)

    def is_unit(self, value: Decimal) -> bool:
        return not value.is_zero()

    def structural_key(self, value: Decimal) -> Any:
        """Digits, sign and exponent, so ``1.0`` and ``1.00`` differ."""
        return value.as_tuple()

    def _new_arithmetic(self, context: decimal.Context | None) -> Arithmetic[Decimal]:
        return DecimalArithmetic(self, context)


class IntegerComplexDomain(Domain[IntegerComplex]):
    name = "integer_complex"
    zero = IntegerComplex.ZERO
    one = IntegerComplex.ONE

    _UNITS = frozenset(
        {
            IntegerComplex(1, 0),
            IntegerComplex(-1, 0),
            IntegerComplex(0, 1),
            IntegerComplex(0, -1),
        }
    )

    def accepts(self, value: Any) -> bool:
        return isinstance(value, IntegerComplex)

    def coerce(self, value: Any) -> IntegerComplex:
        """Accepts IntegerComplex, (real, imaginary) pairs and integral values."""
        require_not_none(value, "value")
        if isinstance(value, IntegerComplex):
            return value
        if isinstance(value, tuple) and len(value) == 2:
            return IntegerComplex.of(*value)
        if isinstance(value, complex):
            if not (value.real.is_integer() and value.imag.is_integer()):
                msg = f"expected integral complex parts but actual {value}"
                raise IllegalArgumentError(msg)
            return IntegerComplex(int(value.real), int(value.imag))
        return IntegerComplex.of(value)

    def is_unit(self, value: IntegerComplex) -> bool:
        return value in self._UNITS

    def _new_arithmetic(self, context: decimal.Context | None) -> Arithmetic[IntegerComplex]:
        return IntegerComplexArithmetic(self, context)


class DecimalComplexDomain(Domain[DecimalComplex]):
    name = "decimal_complex"
    zero = DecimalComplex.ZERO
    one = DecimalComplex.ONE
    supports_context = True

    def accepts(self, value: Any) -> bool:
        return isinstance(value, DecimalComplex)

    def coerce(self, value: Any) -> DecimalComplex:
        """Accepts complex numbers of both kinds, pairs, Python complex and reals."""
        require_not_none(value, "value")
        if isinstance(value, DecimalComplex):
            return value
        if isinstance(value, tuple) and len(value) == 2:
            return DecimalComplex.of(*value)
        if isinstance(value, complex):
            return DecimalComplex.of(value.real, value.imag)
        return DecimalComplex.of(value)

    def is_unit(self, value: DecimalComplex) -> bool:
        return value.invertible()

    def _new_arithmetic(self, context: decimal.Context | None) -> Arithmetic[DecimalComplex]:
        return DecimalComplexArithmetic(self, context)


INTEGER: Domain[int] = IntegerDomain()
DECIMAL: Domain[Decimal] = DecimalDomain()
INTEGER_COMPLEX: Domain[IntegerComplex] = IntegerComplexDomain()
DECIMAL_COMPLEX: Domain[DecimalComplex] = DecimalComplexDomain()

_DOMAINS: dict[str, Domain[Any]] = {
    "integer": INTEGER,
    "decimal": DECIMAL,
    "integercomplex": INTEGER_COMPLEX,
    "decimalcomplex": DECIMAL_COMPLEX,
}


def get_domain(name: Domain[Any] | str) -> Domain[Any]:
    """
    Look up a domain by name.

    Args:
        name: Domain instance or name like 'integer', 'decimal-complex'

    Returns:
        The domain singleton

    Raises:
        ValueError: If the name is unknown

    Example:
        >>> get_domain("Integer_Complex") is INTEGER_COMPLEX
        True
    """
    if isinstance(name, Domain):
        return name
    normalized = name.lower().replace("-", "").replace("_", "").replace(" ", "")
    if normalized in _DOMAINS:
        return _DOMAINS[normalized]
    valid = [d.name for d in _DOMAINS.values()]
    raise ValueError(f"Unknown domain: '{name}'. Valid: {valid}")


def list_domains() -> list[Domain[Any]]:
    """All domains, integers first."""
    return list(_DOMAINS.values())


__all__ = [
    "DECIMAL",
    "DECIMAL_COMPLEX",
    "INTEGER",
    "INTEGER_COMPLEX",
    "Arithmetic",
    "DecimalArithmetic",
    "DecimalComplexArithmetic",
    "Domain",
    "IntegerArithmetic",
    "IntegerComplexArithmetic",
    "get_domain",
    "list_domains",
]
