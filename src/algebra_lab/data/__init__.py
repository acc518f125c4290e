"""Data module for decimal formats and square root contexts."""

from algebra_lab.data.decimal_formats import (
    EXACT_CONTEXT,
    DecimalFormat,
    DecimalFormatSpec,
    get_context,
    get_spec,
    list_formats,
)
from algebra_lab.data.square_root_context import (
    DEFAULT_SQUARE_ROOT_CONTEXT,
    SquareRootContext,
)

__all__ = [
    "DEFAULT_SQUARE_ROOT_CONTEXT",
    "EXACT_CONTEXT",
    "DecimalFormat",
    "DecimalFormatSpec",
    "SquareRootContext",
    "get_context",
    "get_spec",
    "list_formats",
]
