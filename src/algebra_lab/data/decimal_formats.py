"""
Decimal Format Definitions - Single Source of Truth

This module defines the decimal arithmetic formats used by the context-aware
operations, with their precision, rounding and exponent range.

The bounded formats follow the IEEE 754-2008 decimal interchange formats;
``UNLIMITED`` is the exact format used when no context is passed.

References:
    - IEEE 754-2008 Standard for Floating-Point Arithmetic, Section 3.5
    - General Decimal Arithmetic Specification (Cowlishaw), "Context"
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from enum import Enum


class DecimalFormat(Enum):
    """Supported decimal arithmetic formats."""

    DECIMAL32 = "decimal32"
    DECIMAL64 = "decimal64"
    DECIMAL128 = "decimal128"
    UNLIMITED = "unlimited"  # exact add/subtract/multiply, no rounding


@dataclass(frozen=True, slots=True)
class DecimalFormatSpec:
    """Specification for a decimal arithmetic format."""

    format: DecimalFormat
    precision: int
    rounding: str
    emax: int
    emin: int
    exact: bool

    @property
    def digits(self) -> str:
        """Human readable precision."""
        return "unbounded" if self.exact else str(self.precision)

    def to_context(self) -> decimal.Context:
        """Build a fresh ``decimal.Context`` for this format."""
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding,
            Emax=self.emax,
            Emin=self.emin,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )


# =============================================================================
# FORMAT SPECIFICATIONS
# =============================================================================
# Precision in significant decimal digits, exponent range per IEEE 754-2008.
# Bounded formats round half-even.

_FORMAT_SPECS: dict[DecimalFormat, DecimalFormatSpec] = {
    DecimalFormat.DECIMAL32: DecimalFormatSpec(
        format=DecimalFormat.DECIMAL32,
        precision=7,
        rounding=decimal.ROUND_HALF_EVEN,
        emax=96,
        emin=-95,
        exact=False,
    ),
    DecimalFormat.DECIMAL64: DecimalFormatSpec(
        format=DecimalFormat.DECIMAL64,
        precision=16,
        rounding=decimal.ROUND_HALF_EVEN,
        emax=384,
        emin=-383,
        exact=False,
    ),
    DecimalFormat.DECIMAL128: DecimalFormatSpec(
        format=DecimalFormat.DECIMAL128,
        precision=34,
        rounding=decimal.ROUND_HALF_EVEN,
        emax=6144,
        emin=-6143,
        exact=False,
    ),
    DecimalFormat.UNLIMITED: DecimalFormatSpec(
        format=DecimalFormat.UNLIMITED,
        precision=decimal.MAX_PREC,
        rounding=decimal.ROUND_HALF_EVEN,
        emax=decimal.MAX_EMAX,
        emin=decimal.MIN_EMIN,
        exact=True,
    ),
}

EXACT_CONTEXT: decimal.Context = _FORMAT_SPECS[DecimalFormat.UNLIMITED].to_context()
"""Context of exact mode. Never mutate; use get_context() for a private copy."""


# =============================================================================
# PUBLIC API
# =============================================================================


def get_spec(fmt: DecimalFormat | str) -> DecimalFormatSpec:
    """
    Get the full specification for a decimal format.

    Args:
        fmt: Decimal format (enum or string like 'decimal64', 'DECIMAL-128')

    Returns:
        DecimalFormatSpec with all format properties

    Raises:
        ValueError: If format is unknown

    Example:
        >>> get_spec("decimal64").precision
        16
    """
    if isinstance(fmt, str):
        fmt = _parse_format(fmt)
    return _FORMAT_SPECS[fmt]


def get_context(fmt: DecimalFormat | str) -> decimal.Context:
    """
    Get a fresh decimal context for a format.

    Every call returns a new object, so callers may adjust flags or traps
    without affecting anybody else.

    Args:
        fmt: Decimal format

    Returns:
        decimal.Context with the format's precision, rounding and exponent range

    Example:
        >>> get_context("decimal32").prec
        7
    """
    return get_spec(fmt).to_context()


def list_formats() -> list[DecimalFormat]:
    """
    List decimal formats ordered from lowest to highest precision.

    Returns:
        List of DecimalFormat from DECIMAL32 to UNLIMITED
    """
    return [
        DecimalFormat.DECIMAL32,
        DecimalFormat.DECIMAL64,
        DecimalFormat.DECIMAL128,
        DecimalFormat.UNLIMITED,
    ]


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _parse_format(name: str) -> DecimalFormat:
    """Parse a string into a DecimalFormat enum."""
    normalized = name.lower().replace("-", "").replace("_", "").replace(" ", "")

    for fmt in DecimalFormat:
        if fmt.value == normalized:
            return fmt

    valid = [f.value for f in DecimalFormat]
    raise ValueError(f"Unknown decimal format: '{name}'. Valid: {valid}")
