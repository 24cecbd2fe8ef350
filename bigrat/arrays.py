"""NumPy object-array helpers for vectors of :class:`Rational`."""
from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple, Union

import numpy as np

from .rational import Rational, rationalize

ShapeLike = Union[int, Tuple[int, ...]]


def as_rational_array(
    values: Union[Iterable[Any], np.ndarray],
    *,
    copy: bool = True,
    max_denominator: Optional[int] = None,
) -> np.ndarray:
    """Return an ``object`` array whose elements are all :class:`Rational`.

    With ``copy=False`` an object array that already holds only
    :class:`Rational` elements is returned as is.
    """
    array = np.asarray(values, dtype=object)
    if not copy and array.dtype == object and all(
        isinstance(item, Rational) for item in array.flat
    ):
        return array
    result = np.empty(array.shape, dtype=object)
    for index, item in np.ndenumerate(array):
        result[index] = rationalize(item, max_denominator=max_denominator)
    return result


def zeros(shape: ShapeLike) -> np.ndarray:
    """Return an ``object`` array of the given shape filled with zero."""
    result = np.empty(shape, dtype=object)
    result.fill(Rational.zero())
    return result


def zeros_like(values: Union[Iterable[Any], np.ndarray]) -> np.ndarray:
    return zeros(np.shape(values))


__all__ = ["as_rational_array", "zeros", "zeros_like"]
