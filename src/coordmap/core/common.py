from __future__ import annotations

import functools
import numbers
import operator
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Final, TypeGuard

from coordmap.errors import ShapeError

if TYPE_CHECKING:
    from coordmap.core.keys import Key


ShapeLike = Iterable[int] | int
ElementFactory = Callable[..., Any]
ConfigurationsLike = Mapping["Key", Any] | Sequence[Any]
AXIS_NAMES: Final = ("w", "z", "y", "x")
MAX_NDIM: Final = len(AXIS_NAMES)


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


UNSET: Final = _Unset()


def product(tup: tuple[int, ...]) -> int:
    return functools.reduce(operator.mul, tup, 1)


def is_integer(x: Any) -> TypeGuard[int]:
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


def parse_axis_sizes(data: ShapeLike) -> tuple[int, ...]:
    """
    Normalize a per-axis element count into a tuple, slowest axis first.

    Unlike array shapes, every axis of a grid must hold at least one element.
    """
    if is_integer(data):
        data = (data,)
    try:
        data_tuple = tuple(data)  # type: ignore[arg-type]
    except TypeError as e:
        msg = f"Expected an integer or an iterable of integers. Got {data} instead."
        raise TypeError(msg) from e

    if not all(is_integer(v) for v in data_tuple):
        msg = f"Expected an iterable of integers. Got {data} instead."
        raise TypeError(msg)
    if not 1 <= len(data_tuple) <= MAX_NDIM:
        raise ShapeError(f"Expected between 1 and {MAX_NDIM} axes. Got {len(data_tuple)}.")
    if not all(v > 0 for v in data_tuple):
        raise ShapeError(f"Expected all axis sizes to be positive. Got {data_tuple} instead.")
    return tuple(int(v) for v in data_tuple)
