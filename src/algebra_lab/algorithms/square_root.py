"""Arbitrary-precision square root via Heron's method.

Every Euclidean-type norm in the package ends up here. The engine is a
best-effort iteration: it stops on convergence or when the iteration budget
of the SquareRootContext runs out, and returns the last iterate either way.

Algorithm (Heron / Newton on f(x) = x² - a):
    x₀      = (a + 1) / 2
    x_{n+1} = (x_n² + a) / (2·x_n)

Integers that are perfect squares take an exact path and never iterate.

References:
- Heath: "Scientific Computing" (2nd ed.), §5.5
- Knuth: TAOCP Vol. 2 (3rd ed.), §4.3.3
"""

from __future__ import annotations

import decimal
import logging
import math
from decimal import Decimal

from algebra_lab.data.decimal_formats import EXACT_CONTEXT
from algebra_lab.data.square_root_context import (
    DEFAULT_SQUARE_ROOT_CONTEXT,
    SquareRootContext,
)
from algebra_lab.errors import IllegalArgumentError, require_not_none

logger = logging.getLogger(__name__)

_ONE = Decimal(1)
_TWO = Decimal(2)


def sqrt(
    value: int | Decimal,
    context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
) -> Decimal:
    """Square root of a non-negative integer or decimal.

    Args:
        value: Radicand, ``int`` or finite ``Decimal`` >= 0.
        context: Convergence contract (abort criterion, iteration budget,
            initial scale, precision and rounding of each step).

    Returns:
        The exact root for perfect-square integers, otherwise the last Heron
        iterate. Non-convergence is not an error.

    Raises:
        NullArgumentError: If value or context is None.
        IllegalArgumentError: If value is negative or not a number.

    Example:
        >>> sqrt(16)
        Decimal('4')
        >>> abs(sqrt(2) ** 2 - 2) < Decimal("1e-10")
        True
    """
    require_not_none(value, "value")
    require_not_none(context, "context")
    _check_radicand(value)

    if isinstance(value, int):
        root = math.isqrt(value)
        if root * root == value:
            return Decimal(root)
        return _herons_method(Decimal(value), context)
    return _herons_method(value, context)


def perfect_square(integer: int) -> bool:
    """Whether ``integer`` is the square of an integer.

    Sums consecutive odd numbers 1 + 3 + 5 + ... until the sum reaches
    the candidate; n² is exactly the sum of the first n odd numbers.
    Linear in the root, so meant for moderate inputs.

    Raises:
        NullArgumentError: If integer is None.
        IllegalArgumentError: If integer is negative.
    """
    require_not_none(integer, "integer")
    _check_integer(integer)
    total = 0
    odd = 1
    while total < integer:
        total += odd
        odd += 2
    return total == integer


def sqrt_of_perfect_square(integer: int) -> int:
    """Exact integer root of a perfect square.

    Raises:
        NullArgumentError: If integer is None.
        IllegalArgumentError: If integer is negative or not a perfect square.
    """
    require_not_none(integer, "integer")
    _check_integer(integer)
    root = math.isqrt(integer)
    if root * root != integer:
        msg = f"expected perfect square but actual {integer}"
        raise IllegalArgumentError(msg)
    return root


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _herons_method(value: Decimal, sqrt_context: SquareRootContext) -> Decimal:
    if value.is_zero():
        return Decimal(0)

    abort_criterion = sqrt_context.abort_criterion
    context = sqrt_context.to_context()
    logger.debug(
        "calculating square root of %s with abort criterion %s",
        value,
        abort_criterion,
    )

    quantum = Decimal((0, (1,), -sqrt_context.initial_scale))
    scaled = value.quantize(quantum, rounding=sqrt_context.rounding, context=EXACT_CONTEXT)
    predecessor = context.divide(context.add(scaled, _ONE), _TWO)
    logger.debug("seed value = %s", predecessor)

    successor = _successor(predecessor, scaled, abort_criterion, context)
    iterations = 1
    while (
        _distance(successor, predecessor) > abort_criterion
        and iterations <= sqrt_context.max_iterations
    ):
        predecessor = successor
        successor = _successor(successor, scaled, abort_criterion, context)
        iterations += 1

    if _distance(successor, predecessor) > abort_criterion:
        logger.debug(
            "no convergence after %d iterations, returning last iterate", iterations
        )
    logger.debug("terminated after %d iterations: sqrt(%s) = %s", iterations, value, successor)
    return successor


def _successor(
    predecessor: Decimal,
    value: Decimal,
    abort_criterion: Decimal,
    context: decimal.Context,
) -> Decimal:
    divisor = context.multiply(_TWO, predecessor)
    if divisor.is_zero():
        # divisor rounded to zero: the step yields ε
        return abort_criterion
    successor = context.divide(
        context.add(context.multiply(predecessor, predecessor), value), divisor
    )
    logger.debug("successor = %s", successor)
    return successor


def _distance(first: Decimal, second: Decimal) -> Decimal:
    return EXACT_CONTEXT.abs(EXACT_CONTEXT.subtract(first, second))


def _check_radicand(value: int | Decimal) -> None:
    if isinstance(value, bool) or not isinstance(value, int | Decimal):
        msg = f"expected int or Decimal but actual {type(value).__name__}"
        raise IllegalArgumentError(msg)
    if isinstance(value, Decimal) and not value.is_finite():
        msg = f"expected finite value but actual {value}"
        raise IllegalArgumentError(msg)
    if value < 0:
        msg = f"expected value >= 0 but actual {value}"
        raise IllegalArgumentError(msg)


def _check_integer(integer: int) -> None:
    if isinstance(integer, bool) or not isinstance(integer, int):
        msg = f"expected int but actual {type(integer).__name__}"
        raise IllegalArgumentError(msg)
    if integer < 0:
        msg = f"expected integer >= 0 but actual {integer}"
        raise IllegalArgumentError(msg)


__all__ = [
    "perfect_square",
    "sqrt",
    "sqrt_of_perfect_square",
]
