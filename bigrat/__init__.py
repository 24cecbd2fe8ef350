"""Exact arbitrary-precision rational numbers."""

from .arrays import as_rational_array, zeros, zeros_like
from .rational import (
    DEFAULT_MAX_DENOMINATOR,
    InvalidDenominator,
    Rational,
    make,
    rationalize,
)

__all__ = [
    "DEFAULT_MAX_DENOMINATOR",
    "InvalidDenominator",
    "Rational",
    "as_rational_array",
    "make",
    "rationalize",
    "zeros",
    "zeros_like",
]
