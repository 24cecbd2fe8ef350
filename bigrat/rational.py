"""Exact rational numbers over Python integers with NumPy interoperability."""
from __future__ import annotations

import math
import numbers
import operator
from fractions import Fraction
from typing import Any, Optional, Tuple, Union

import numpy as np

NumberLike = Union["Rational", Fraction, numbers.Real]

DEFAULT_MAX_DENOMINATOR = 10**6


class InvalidDenominator(ZeroDivisionError, ValueError):
    """Raised when a :class:`Rational` would be built with a zero denominator."""


def _ensure_int(value: numbers.Real, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


def _canonicalize(num: int, den: int) -> Tuple[int, int]:
    if den == 0:
        raise InvalidDenominator(f"denominator must be non-zero (numerator {num})")
    # math.gcd works on absolute values; gcd(0, den) == |den| collapses 0/n to 0/1.
    divisor = math.gcd(num, den)
    num //= divisor
    den //= divisor
    if den < 0:
        num, den = -num, -den
    return num, den


def _round_half_away(num: int, den: int) -> int:
    """Nearest integer to ``num / den`` (``den > 0``), ties away from zero."""
    quotient, remainder = divmod(abs(num), den)
    if 2 * remainder >= den:
        quotient += 1
    return quotient if num >= 0 else -quotient


class Rational:
    """Immutable fraction kept in lowest terms with a positive denominator.

    Every instance satisfies ``gcd(|numerator|, denominator) == 1`` and
    ``denominator > 0``, so two values are equal exactly when their
    components are.  Arithmetic is exact and always returns a new instance.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.

    def __init__(
        self,
        numerator: Union[int, numbers.Integral] = 0,
        denominator: Union[int, numbers.Integral] = 1,
    ) -> None:
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")
        num, den = _canonicalize(num, den)
        object.__setattr__(self, "_numerator", num)
        object.__setattr__(self, "_denominator", den)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._numerator, self._denominator))

    def __copy__(self) -> "Rational":
        return self

    def __deepcopy__(self, memo) -> "Rational":
        return self

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def zero(cls) -> "Rational":
        return cls(0)

    @classmethod
    def one(cls) -> "Rational":
        return cls(1)

    @classmethod
    def from_float(
        cls, value: float, *, max_denominator: Optional[int] = None
    ) -> "Rational":
        """Return *value* as an exact :class:`Rational`.

        With ``max_denominator`` the closest fraction whose denominator does
        not exceed the bound is returned instead.
        """
        if isinstance(value, numbers.Integral):
            return cls(int(value))
        value = float(value)
        if math.isnan(value) or math.isinf(value):
            raise ValueError("cannot convert NaN or infinity to Rational")
        frac = Fraction.from_float(value)
        if max_denominator is not None:
            frac = frac.limit_denominator(max_denominator)
        return cls(frac.numerator, frac.denominator)

    @classmethod
    def from_fraction(cls, value: Fraction) -> "Rational":
        """Create a :class:`Rational` from :class:`fractions.Fraction`."""
        return cls(value.numerator, value.denominator)

    @classmethod
    def rationalize(
        cls, value: NumberLike, *, max_denominator: Optional[int] = None
    ) -> "Rational":
        """Coerce a numeric-like value into :class:`Rational`."""
        if isinstance(value, Rational):
            if max_denominator is None:
                return value
            return value.limit_denominator(max_denominator)
        if isinstance(value, Fraction):
            result = cls.from_fraction(value)
            if max_denominator is None:
                return result
            return result.limit_denominator(max_denominator)
        if isinstance(value, np.generic):
            return cls.rationalize(value.item(), max_denominator=max_denominator)
        if isinstance(value, numbers.Integral):
            return cls(int(value))
        if isinstance(value, numbers.Real):
            return cls.from_float(float(value), max_denominator=max_denominator)
        raise TypeError(f"Cannot convert {type(value)!r} to Rational")

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    def limit_denominator(
        self, max_denominator: int = DEFAULT_MAX_DENOMINATOR
    ) -> "Rational":
        """Return the closest :class:`Rational` with denominator at most *max_denominator*."""
        if max_denominator < 1:
            raise ValueError("max_denominator must be >= 1")
        fraction = self.as_fraction().limit_denominator(max_denominator)
        return Rational(fraction.numerator, fraction.denominator)

    # ------------------------------------------------------------------
    # Core operations
    def equals(self, other: "Rational") -> bool:
        return (
            self._numerator == other._numerator
            and self._denominator == other._denominator
        )

    def plus(self, other: "Rational") -> "Rational":
        return Rational(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def opposite(self) -> "Rational":
        return Rational(-self._numerator, self._denominator)

    def minus(self, other: "Rational") -> "Rational":
        return self.plus(other.opposite())

    def times(self, other: "Rational") -> "Rational":
        return Rational(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def reciprocal(self) -> "Rational":
        """Return ``1 / self``; raises :class:`InvalidDenominator` for zero."""
        return Rational(self._denominator, self._numerator)

    def divide(self, other: "Rational") -> "Rational":
        return self.times(other.reciprocal())

    def round(self) -> int:
        """Return the nearest integer, rounding exact halves away from zero.

        ``Rational(5, 2).round() == 3`` and ``Rational(-7, 2).round() == -4``.
        """
        return _round_half_away(self._numerator, self._denominator)

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return self._numerator / self._denominator

    def __int__(self) -> int:
        quotient = abs(self._numerator) // self._denominator
        return quotient if self._numerator >= 0 else -quotient

    __trunc__ = __int__

    def __floor__(self) -> int:
        return self._numerator // self._denominator

    def __ceil__(self) -> int:
        return -(-self._numerator // self._denominator)

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __round__(self, ndigits: Optional[int] = None) -> Union[int, "Rational"]:
        if ndigits is None:
            return self.round()
        scale = 10 ** abs(ndigits)
        if ndigits >= 0:
            return Rational(
                _round_half_away(self._numerator * scale, self._denominator), scale
            )
        return Rational(
            _round_half_away(self._numerator, self._denominator * scale) * scale
        )

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        return f"{self._numerator}/{self._denominator}"

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r"):
            return str(self)
        return format(float(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    def _binary_operation(self, other: Any, op, *, reflected: bool = False):
        if isinstance(other, (list, tuple)):
            other = np.array(other, dtype=object)
        if isinstance(other, np.ndarray):
            if reflected:
                vectorised = np.vectorize(
                    lambda x: op(_coerce_scalar(x), self), otypes=[object]
                )
            else:
                vectorised = np.vectorize(
                    lambda x: op(self, _coerce_scalar(x)), otypes=[object]
                )
            return vectorised(other)
        try:
            other_rat = _coerce_scalar(other)
        except TypeError:
            return NotImplemented
        if reflected:
            return op(other_rat, self)
        return op(self, other_rat)

    @staticmethod
    def _coerce_power(value: Any) -> int:
        if isinstance(value, np.generic):
            return Rational._coerce_power(value.item())
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Rational):
            if value.denominator != 1:
                raise ValueError("Exponent must be an integer")
            return value.numerator
        if isinstance(value, numbers.Real):
            if not float(value).is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.plus)

    def __radd__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.plus, reflected=True)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.minus)

    def __rsub__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.minus, reflected=True)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.times)

    def __rmul__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.times, reflected=True)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.divide)

    def __rtruediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.divide, reflected=True)

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        power = self._coerce_power(exponent)
        if power >= 0:
            return Rational(self._numerator ** power, self._denominator ** power)
        positive = -power
        return Rational(self._denominator ** positive, self._numerator ** positive)

    def __neg__(self) -> "Rational":
        return self.opposite()

    def __pos__(self) -> "Rational":
        return self

    def __abs__(self) -> "Rational":
        if self._numerator >= 0:
            return self
        return self.opposite()

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op) -> bool:
        if isinstance(other, np.generic):
            other = other.item()
        if isinstance(other, float) and not math.isfinite(other):
            return op(self.as_fraction(), other)
        try:
            other_rat = _coerce_scalar(other)
        except TypeError:
            return NotImplemented
        return op(
            self._numerator * other_rat._denominator,
            other_rat._numerator * self._denominator,
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Rational):
            return self.equals(other)
        if isinstance(other, np.generic):
            other = other.item()
        if isinstance(other, numbers.Rational):
            return (
                self._numerator == other.numerator
                and self._denominator == other.denominator
            )
        if isinstance(other, numbers.Real):
            # Fraction compares exactly against floats, including nan and inf.
            return self.as_fraction() == other
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        # Matches int, Fraction and float hashing for equal values.
        return hash(self.as_fraction())

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
        np.equal: operator.eq,
        np.not_equal: operator.ne,
        np.less: operator.lt,
        np.less_equal: operator.le,
        np.greater: operator.gt,
        np.greater_equal: operator.ge,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Rational):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(_coerce_scalar, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(_coerce_scalar(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def _coerce_scalar(value: Any) -> Rational:
    """Convert an operand to :class:`Rational` exactly, or raise ``TypeError``."""
    if isinstance(value, Rational):
        return value
    if isinstance(value, Fraction):
        return Rational.from_fraction(value)
    if isinstance(value, np.generic):
        return _coerce_scalar(value.item())
    if isinstance(value, numbers.Integral):
        return Rational(int(value))
    if isinstance(value, numbers.Real):
        return Rational.from_float(float(value))
    raise TypeError(f"Cannot interpret {type(value)!r} as Rational")


def make(
    numerator: Union[int, numbers.Integral],
    denominator: Union[int, numbers.Integral] = 1,
) -> Rational:
    """Build the canonical :class:`Rational` for ``numerator / denominator``."""

    return Rational(numerator, denominator)


def rationalize(value: NumberLike, *, max_denominator: Optional[int] = None) -> Rational:
    """Public helper to convert *value* into :class:`Rational`."""

    return Rational.rationalize(value, max_denominator=max_denominator)


__all__ = [
    "DEFAULT_MAX_DENOMINATOR",
    "InvalidDenominator",
    "Rational",
    "make",
    "rationalize",
]
