"""Convergence contract of the square root engine."""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal

from algebra_lab.data.decimal_formats import DecimalFormat, get_spec
from algebra_lab.errors import IllegalArgumentError, require_not_none

DEFAULT_ABORT_CRITERION: Decimal = Decimal("0.0000000001")
"""Default ε: iteration stops once successive values differ by at most this."""

DEFAULT_MAX_ITERATIONS: int = 10
DEFAULT_INITIAL_SCALE: int = 10
DEFAULT_PRECISION: int = get_spec(DecimalFormat.DECIMAL128).precision

_ROUNDING_MODES = frozenset(
    {
        decimal.ROUND_CEILING,
        decimal.ROUND_DOWN,
        decimal.ROUND_FLOOR,
        decimal.ROUND_HALF_DOWN,
        decimal.ROUND_HALF_EVEN,
        decimal.ROUND_HALF_UP,
        decimal.ROUND_UP,
        decimal.ROUND_05UP,
    }
)


@dataclass(frozen=True, slots=True)
class SquareRootContext:
    """Parameters of one square root computation.

    Attributes are validated on construction; derive variants with
    ``dataclasses.replace``.
    """

    abort_criterion: Decimal = DEFAULT_ABORT_CRITERION
    """ε in (0, 1), exclusive."""

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    """Iteration budget, > 0."""

    initial_scale: int = DEFAULT_INITIAL_SCALE
    """Scale the radicand is rounded to before iterating, >= 0."""

    precision: int = DEFAULT_PRECISION
    """Significant digits kept by every Heron step."""

    rounding: str = decimal.ROUND_HALF_EVEN
    """Rounding mode of scaling and of every Heron step."""

    def __post_init__(self) -> None:
        require_not_none(self.abort_criterion, "abort_criterion")
        require_not_none(self.rounding, "rounding")
        if not isinstance(self.abort_criterion, Decimal):
            msg = (
                "expected abort_criterion of type Decimal but actual "
                f"{type(self.abort_criterion).__name__}"
            )
            raise IllegalArgumentError(msg)
        if not Decimal(0) < self.abort_criterion < Decimal(1):
            msg = f"expected abort_criterion in (0, 1) but actual {self.abort_criterion}"
            raise IllegalArgumentError(msg)
        if self.max_iterations <= 0:
            msg = f"expected max_iterations > 0 but actual {self.max_iterations}"
            raise IllegalArgumentError(msg)
        if self.initial_scale < 0:
            msg = f"expected initial_scale >= 0 but actual {self.initial_scale}"
            raise IllegalArgumentError(msg)
        if self.precision <= 0:
            msg = f"expected precision > 0 but actual {self.precision}"
            raise IllegalArgumentError(msg)
        if self.rounding not in _ROUNDING_MODES:
            msg = f"expected a decimal rounding mode but actual {self.rounding!r}"
            raise IllegalArgumentError(msg)

    @classmethod
    def from_format(
        cls,
        fmt: DecimalFormat | str,
        *,
        abort_criterion: Decimal = DEFAULT_ABORT_CRITERION,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        initial_scale: int = DEFAULT_INITIAL_SCALE,
    ) -> SquareRootContext:
        """Build a context whose Heron steps run in a named decimal format.

        The unlimited format has no bounded precision and cannot drive an
        iterative square root.

        Example:
            >>> SquareRootContext.from_format("decimal64").precision
            16
        """
        spec = get_spec(fmt)
        if spec.exact:
            msg = f"expected a bounded decimal format but actual {spec.format.value}"
            raise IllegalArgumentError(msg)
        return cls(
            abort_criterion=abort_criterion,
            max_iterations=max_iterations,
            initial_scale=initial_scale,
            precision=spec.precision,
            rounding=spec.rounding,
        )

    def to_context(self) -> decimal.Context:
        """Fresh decimal context carrying this precision and rounding."""
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )


DEFAULT_SQUARE_ROOT_CONTEXT: SquareRootContext = SquareRootContext()


__all__ = [
    "DEFAULT_ABORT_CRITERION",
    "DEFAULT_INITIAL_SCALE",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_PRECISION",
    "DEFAULT_SQUARE_ROOT_CONTEXT",
    "SquareRootContext",
]
