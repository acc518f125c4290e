"""Scalar element types and the domains that bind them to arithmetic."""

from algebra_lab.scalars.complex_numbers import DecimalComplex, IntegerComplex
from algebra_lab.scalars.domains import (
    DECIMAL,
    DECIMAL_COMPLEX,
    INTEGER,
    INTEGER_COMPLEX,
    Arithmetic,
    Domain,
    get_domain,
    list_domains,
)

__all__ = [
    "DECIMAL",
    "DECIMAL_COMPLEX",
    "INTEGER",
    "INTEGER_COMPLEX",
    "Arithmetic",
    "DecimalComplex",
    "Domain",
    "IntegerComplex",
    "get_domain",
    "list_domains",
]
