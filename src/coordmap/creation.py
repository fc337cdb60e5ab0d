"""
Convenience functions to build containers of one to four dimensions, or over a list of
named positions. All of them forward ``configuration``, ``configurations``, ``name`` and
``observer`` to :class:`coordmap.CoordMap`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from coordmap.core.common import ShapeLike
from coordmap.core.composite import CompositeRange
from coordmap.core.container import CoordMap
from coordmap.core.keys import Key, ListKey
from coordmap.core.ranges import ListRange
from coordmap.errors import ShapeError

if TYPE_CHECKING:
    from coordmap.core.common import ElementFactory

__all__ = [
    "create",
    "cube",
    "from_keys",
    "from_list",
    "from_range",
    "hypercube",
    "linear",
    "square",
]


def create(
    shape: ShapeLike,
    factory: ElementFactory,
    *,
    start: Key | Sequence[int] | int | None = None,
    **kwargs: Any,
) -> CoordMap[Any]:
    """
    Create a container with ``shape[i]`` elements along axis ``i``, slowest axis first.

    Parameters
    ----------
    shape : int or tuple of ints
        Number of elements per axis. A 2D shape is ``(size_y, size_x)``.
    factory : Callable
        Builds the element for a key, see :class:`coordmap.CoordMap`.
    start : Key or tuple of ints, optional
        Key of the first element. Defaults to all zeros.
    **kwargs
        Passed on to :class:`coordmap.CoordMap`.

    Returns
    -------
    CoordMap

    Examples
    --------
    >>> grid = create((3, 2), lambda key: key.to_string())
    >>> grid.shape
    (3, 2)
    """
    return CoordMap(CompositeRange.from_shape(shape, start), factory, **kwargs)


def linear(
    size_x: int, factory: ElementFactory, *, start: int = 0, **kwargs: Any
) -> CoordMap[Any]:
    """Create a one-dimensional container of ``size_x`` elements, keyed from ``start``."""
    return create((size_x,), factory, start=(start,), **kwargs)


def square(
    size_y: int,
    size_x: int,
    factory: ElementFactory,
    *,
    start: Key | Sequence[int] | None = None,
    **kwargs: Any,
) -> CoordMap[Any]:
    """Create a ``size_y`` by ``size_x`` container."""
    return create((size_y, size_x), factory, start=start, **kwargs)


def cube(
    size_z: int,
    size_y: int,
    size_x: int,
    factory: ElementFactory,
    *,
    start: Key | Sequence[int] | None = None,
    **kwargs: Any,
) -> CoordMap[Any]:
    return create((size_z, size_y, size_x), factory, start=start, **kwargs)


def hypercube(
    size_w: int,
    size_z: int,
    size_y: int,
    size_x: int,
    factory: ElementFactory,
    *,
    start: Key | Sequence[int] | None = None,
    **kwargs: Any,
) -> CoordMap[Any]:
    return create((size_w, size_z, size_y, size_x), factory, start=start, **kwargs)


def from_keys(
    start_key: Key, end_key: Key, factory: ElementFactory, **kwargs: Any
) -> CoordMap[Any]:
    """
    Create a container holding every key between ``start_key`` and ``end_key``, both
    inclusive. Axes whose start value is greater than the end value are stored in descending
    order.
    """
    return CoordMap(CompositeRange.from_keys(start_key, end_key), factory, **kwargs)


def from_range(key_range: CompositeRange, factory: ElementFactory, **kwargs: Any) -> CoordMap[Any]:
    return CoordMap(key_range, factory, **kwargs)


def from_list(values: Iterable[Any], factory: ElementFactory, **kwargs: Any) -> CoordMap[Any]:
    """
    Create a container addressed by ``ListKey``, holding one element per value in the given
    order, e.g. ``from_list("ab", factory)`` for elements at ``ListKey("a")`` and
    ``ListKey("b")``.
    """
    values = tuple(values)
    if not values:
        raise ShapeError("Expected at least one value to build a list container.")
    return CoordMap(CompositeRange((ListRange(values),), ListKey), factory, **kwargs)
