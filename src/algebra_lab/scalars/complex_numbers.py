"""Complex numbers over arbitrary-precision integers and decimals.

Two immutable value types:
- IntegerComplex: real and imaginary parts are Python ints (Gaussian integers)
- DecimalComplex: real and imaginary parts are decimal.Decimal

Division leaves the integers, so every quotient or inverse is a
DecimalComplex. DecimalComplex operations take an optional decimal context;
without one they run exactly.

Key identities:
    (a + bi)(c + di) = (ac - bd) + (ad + bc)i
    (a + bi)/(c + di) = ((ac + bd) + (bc - ad)i) / (c² + d²)
    |a + bi|² = a² + b²
"""

from __future__ import annotations

import decimal
import numbers
import operator
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar

from algebra_lab.algorithms.square_root import sqrt
from algebra_lab.data.decimal_formats import EXACT_CONTEXT, DecimalFormat, get_context
from algebra_lab.data.square_root_context import (
    DEFAULT_SQUARE_ROOT_CONTEXT,
    SquareRootContext,
)
from algebra_lab.errors import (
    IllegalArgumentError,
    IllegalStateError,
    require_not_none,
)

if TYPE_CHECKING:
    from algebra_lab.linear.matrix import Matrix

DEFAULT_DIVISION_FORMAT: DecimalFormat = DecimalFormat.DECIMAL128
"""Format of quotients when divide/invert get no explicit context."""


@dataclass(frozen=True, slots=True)
class IntegerComplex:
    """Complex number with integer parts."""

    real: int
    imaginary: int

    ZERO: ClassVar[IntegerComplex]
    ONE: ClassVar[IntegerComplex]
    IMAGINARY: ClassVar[IntegerComplex]

    def __post_init__(self) -> None:
        require_not_none(self.real, "real")
        require_not_none(self.imaginary, "imaginary")
        for name, part in (("real", self.real), ("imaginary", self.imaginary)):
            if isinstance(part, bool) or not isinstance(part, int):
                msg = f"expected int {name} part but actual {type(part).__name__}"
                raise IllegalArgumentError(msg)

    @classmethod
    def of(cls, real: Any, imaginary: Any = 0) -> IntegerComplex:
        """Build from any integral values (ints, numpy integers, ...)."""
        require_not_none(real, "real")
        require_not_none(imaginary, "imaginary")
        return cls(to_int(real, "real"), to_int(imaginary, "imaginary"))

    def add(self, summand: IntegerComplex) -> IntegerComplex:
        require_not_none(summand, "summand")
        return IntegerComplex(self.real + summand.real, self.imaginary + summand.imaginary)

    def subtract(self, subtrahend: IntegerComplex) -> IntegerComplex:
        require_not_none(subtrahend, "subtrahend")
        return IntegerComplex(
            self.real - subtrahend.real, self.imaginary - subtrahend.imaginary
        )

    def multiply(self, factor: IntegerComplex) -> IntegerComplex:
        require_not_none(factor, "factor")
        return IntegerComplex(
            self.real * factor.real - self.imaginary * factor.imaginary,
            self.real * factor.imaginary + self.imaginary * factor.real,
        )

    def divide(
        self, divisor: IntegerComplex, context: decimal.Context | None = None
    ) -> DecimalComplex:
        """Quotient as a DecimalComplex, rounded by ``context`` (default DECIMAL128).

        Raises:
            IllegalArgumentError: If divisor is zero.
        """
        require_not_none(divisor, "divisor")
        if not divisor.invertible():
            msg = f"expected divisor to be invertible but actual {divisor!r}"
            raise IllegalArgumentError(msg)
        return DecimalComplex.of(self).divide(DecimalComplex.of(divisor), context)

    def pow(self, exponent: int) -> IntegerComplex:
        """Non-negative integer power by repeated multiplication."""
        _check_exponent(exponent)
        result = IntegerComplex.ONE
        for _ in range(exponent):
            result = result.multiply(self)
        return result

    def negate(self) -> IntegerComplex:
        return IntegerComplex(-self.real, -self.imaginary)

    def invert(self, context: decimal.Context | None = None) -> DecimalComplex:
        """Multiplicative inverse as a DecimalComplex.

        Raises:
            IllegalStateError: If this is zero.
        """
        if not self.invertible():
            msg = f"expected to be invertible but actual {self!r}"
            raise IllegalStateError(msg)
        return IntegerComplex.ONE.divide(self, context)

    def invertible(self) -> bool:
        """Whether a (decimal) inverse exists, i.e. this is not zero."""
        return self != IntegerComplex.ZERO

    def abs(self, sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> Decimal:
        """Modulus sqrt(real² + imaginary²)."""
        require_not_none(sqrt_context, "sqrt_context")
        return sqrt(self.abs_pow2(), sqrt_context)

    def abs_pow2(self) -> int:
        """Squared modulus, exact."""
        return self.real * self.real + self.imaginary * self.imaginary

    def conjugate(self) -> IntegerComplex:
        return IntegerComplex(self.real, -self.imaginary)

    def matrix(self) -> Matrix[int]:
        """Real 2x2 representation [[re, -im], [im, re]]."""
        from algebra_lab.linear.matrix import Matrix
        from algebra_lab.scalars.domains import INTEGER

        return Matrix.of(
            [[self.real, -self.imaginary], [self.imaginary, self.real]], INTEGER
        )

    def equals_by_comparing_parts(self, other: IntegerComplex) -> bool:
        require_not_none(other, "other")
        return self.real == other.real and self.imaginary == other.imaginary

    def __str__(self) -> str:
        sign = "-" if self.imaginary < 0 else "+"
        return f"{self.real}{sign}{abs(self.imaginary)}i"

    def __add__(self, other: object) -> IntegerComplex:
        if not isinstance(other, IntegerComplex):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> IntegerComplex:
        if not isinstance(other, IntegerComplex):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> IntegerComplex:
        if not isinstance(other, IntegerComplex):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> DecimalComplex:
        if not isinstance(other, IntegerComplex):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> IntegerComplex:
        return self.negate()


IntegerComplex.ZERO = IntegerComplex(0, 0)
IntegerComplex.ONE = IntegerComplex(1, 0)
IntegerComplex.IMAGINARY = IntegerComplex(0, 1)


@dataclass(frozen=True, slots=True, eq=False)
class DecimalComplex:
    """Complex number with decimal parts.

    ``==`` is structural: parts must match in value and scale, so
    ``1.0 + 0i`` and ``1.00 + 0i`` differ. Use equals_by_comparing_parts
    to compare numerically.
    """

    real: Decimal
    imaginary: Decimal

    ZERO: ClassVar[DecimalComplex]
    ONE: ClassVar[DecimalComplex]
    IMAGINARY: ClassVar[DecimalComplex]

    def __post_init__(self) -> None:
        require_not_none(self.real, "real")
        require_not_none(self.imaginary, "imaginary")
        for name, part in (("real", self.real), ("imaginary", self.imaginary)):
            if not isinstance(part, Decimal):
                msg = f"expected Decimal {name} part but actual {type(part).__name__}"
                raise IllegalArgumentError(msg)
            if not part.is_finite():
                msg = f"expected finite {name} part but actual {part}"
                raise IllegalArgumentError(msg)

    @classmethod
    def of(cls, real: Any, imaginary: Any = 0) -> DecimalComplex:
        """Build from decimals, integers, strings or floats.

        An IntegerComplex passed as ``real`` is widened.

        Example:
            >>> DecimalComplex.of("1.5", 2)
            DecimalComplex(real=Decimal('1.5'), imaginary=Decimal('2'))
        """
        require_not_none(real, "real")
        if isinstance(real, IntegerComplex):
            return cls(Decimal(real.real), Decimal(real.imaginary))
        require_not_none(imaginary, "imaginary")
        return cls(to_decimal(real, "real"), to_decimal(imaginary, "imaginary"))

    def add(
        self, summand: DecimalComplex, context: decimal.Context | None = None
    ) -> DecimalComplex:
        require_not_none(summand, "summand")
        ctx = context or EXACT_CONTEXT
        return DecimalComplex(
            ctx.add(self.real, summand.real), ctx.add(self.imaginary, summand.imaginary)
        )

    def subtract(
        self, subtrahend: DecimalComplex, context: decimal.Context | None = None
    ) -> DecimalComplex:
        require_not_none(subtrahend, "subtrahend")
        ctx = context or EXACT_CONTEXT
        return DecimalComplex(
            ctx.subtract(self.real, subtrahend.real),
            ctx.subtract(self.imaginary, subtrahend.imaginary),
        )

    def multiply(
        self, factor: DecimalComplex, context: decimal.Context | None = None
    ) -> DecimalComplex:
        require_not_none(factor, "factor")
        ctx = context or EXACT_CONTEXT
        real = ctx.subtract(
            ctx.multiply(self.real, factor.real),
            ctx.multiply(self.imaginary, factor.imaginary),
        )
        imaginary = ctx.add(
            ctx.multiply(self.real, factor.imaginary),
            ctx.multiply(self.imaginary, factor.real),
        )
        return DecimalComplex(real, imaginary)

    def divide(
        self, divisor: DecimalComplex, context: decimal.Context | None = None
    ) -> DecimalComplex:
        """Quotient rounded by ``context`` (default DECIMAL128).

        Raises:
            IllegalArgumentError: If divisor is zero.
        """
        require_not_none(divisor, "divisor")
        if not divisor.invertible():
            msg = f"expected divisor to be invertible but actual {divisor!r}"
            raise IllegalArgumentError(msg)
        ctx = context or get_context(DEFAULT_DIVISION_FORMAT)
        denominator = divisor.abs_pow2(ctx)
        real = ctx.add(
            ctx.multiply(self.real, divisor.real),
            ctx.multiply(self.imaginary, divisor.imaginary),
        )
        imaginary = ctx.subtract(
            ctx.multiply(self.imaginary, divisor.real),
            ctx.multiply(self.real, divisor.imaginary),
        )
        return DecimalComplex(ctx.divide(real, denominator), ctx.divide(imaginary, denominator))

    def pow(self, exponent: int, context: decimal.Context | None = None) -> DecimalComplex:
        """Non-negative integer power by repeated multiplication."""
        _check_exponent(exponent)
        result = DecimalComplex.ONE
        for _ in range(exponent):
            result = result.multiply(self, context)
        return result

    def negate(self, context: decimal.Context | None = None) -> DecimalComplex:
        ctx = context or EXACT_CONTEXT
        return DecimalComplex(ctx.minus(self.real), ctx.minus(self.imaginary))

    def invert(self, context: decimal.Context | None = None) -> DecimalComplex:
        """Multiplicative inverse.

        Raises:
            IllegalStateError: If this is zero.
        """
        if not self.invertible():
            msg = f"expected to be invertible but actual {self!r}"
            raise IllegalStateError(msg)
        return DecimalComplex.ONE.divide(self, context)

    def invertible(self) -> bool:
        """Whether this is not (numerically) zero."""
        return not (self.real.is_zero() and self.imaginary.is_zero())

    def abs(self, sqrt_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> Decimal:
        """Modulus sqrt(real² + imaginary²)."""
        require_not_none(sqrt_context, "sqrt_context")
        return sqrt(self.abs_pow2(), sqrt_context)

    def abs_pow2(self, context: decimal.Context | None = None) -> Decimal:
        """Squared modulus real² + imaginary²."""
        ctx = context or EXACT_CONTEXT
        return ctx.add(
            ctx.multiply(self.real, self.real),
            ctx.multiply(self.imaginary, self.imaginary),
        )

    def conjugate(self, context: decimal.Context | None = None) -> DecimalComplex:
        ctx = context or EXACT_CONTEXT
        return DecimalComplex(self.real, ctx.minus(self.imaginary))

    def matrix(self) -> Matrix[Decimal]:
        """Real 2x2 representation [[re, -im], [im, re]]."""
        from algebra_lab.linear.matrix import Matrix
        from algebra_lab.scalars.domains import DECIMAL

        minus_imaginary = EXACT_CONTEXT.minus(self.imaginary)
        return Matrix.of(
            [[self.real, minus_imaginary], [self.imaginary, self.real]], DECIMAL
        )

    def equals_by_comparing_parts(self, other: DecimalComplex) -> bool:
        """Numeric equality of both parts, ignoring scale."""
        require_not_none(other, "other")
        return self.real == other.real and self.imaginary == other.imaginary

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return (
            self.real.as_tuple() == other.real.as_tuple()
            and self.imaginary.as_tuple() == other.imaginary.as_tuple()
        )

    def __hash__(self) -> int:
        return hash((self.real.as_tuple(), self.imaginary.as_tuple()))

    def __str__(self) -> str:
        sign = "-" if self.imaginary.is_signed() else "+"
        return f"{self.real}{sign}{self.imaginary.copy_abs()}i"

    def __add__(self, other: object) -> DecimalComplex:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> DecimalComplex:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> DecimalComplex:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> DecimalComplex:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> DecimalComplex:
        return self.negate()


DecimalComplex.ZERO = DecimalComplex(Decimal(0), Decimal(0))
DecimalComplex.ONE = DecimalComplex(Decimal(1), Decimal(0))
DecimalComplex.IMAGINARY = DecimalComplex(Decimal(0), Decimal(1))


# =============================================================================
# COERCION HELPERS
# =============================================================================


def to_decimal(value: Any, name: str = "value") -> Decimal:
    """Convert a number or numeric string to a finite Decimal.

    Floats go through their shortest repr, so ``0.1`` becomes ``Decimal('0.1')``.

    Raises:
        IllegalArgumentError: If the value is not numeric or not finite.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        msg = f"expected numeric {name} but actual bool"
        raise IllegalArgumentError(msg)
    elif isinstance(value, numbers.Integral):
        result = Decimal(int(value))
    elif isinstance(value, numbers.Real):
        result = Decimal(repr(float(value)))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except decimal.InvalidOperation as e:
            msg = f"expected numeric {name} but actual {value!r}"
            raise IllegalArgumentError(msg) from e
    else:
        msg = f"expected numeric {name} but actual {type(value).__name__}"
        raise IllegalArgumentError(msg)

    if not result.is_finite():
        msg = f"expected finite {name} but actual {result}"
        raise IllegalArgumentError(msg)
    return result


def to_int(value: Any, name: str = "value") -> int:
    """Convert an integral value or integer string to an int.

    Raises:
        IllegalArgumentError: If the value is not integral.
    """
    if isinstance(value, bool):
        msg = f"expected integral {name} but actual bool"
        raise IllegalArgumentError(msg)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            msg = f"expected integral {name} but actual {value!r}"
            raise IllegalArgumentError(msg) from e
    try:
        return operator.index(value)
    except TypeError as e:
        msg = f"expected integral {name} but actual {type(value).__name__}"
        raise IllegalArgumentError(msg) from e


def _check_exponent(exponent: int) -> None:
    require_not_none(exponent, "exponent")
    if exponent < 0:
        msg = f"expected exponent >= 0 but actual {exponent}"
        raise IllegalArgumentError(msg)


__all__ = [
    "DEFAULT_DIVISION_FORMAT",
    "DecimalComplex",
    "IntegerComplex",
    "to_decimal",
    "to_int",
]
