from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from coordmap.core.common import AXIS_NAMES, MAX_NDIM, ShapeLike, parse_axis_sizes, product
from coordmap.core.keys import Key, ListKey, key_class, parse_key
from coordmap.core.ranges import KeyRange, ListRange, RegularRange
from coordmap.errors import KeyFamilyError, RangeError, ShapeError

__all__ = ["CompositeRange"]


def _default_key_type(axes: Sequence[KeyRange]) -> type[Key]:
    if len(axes) == 1 and isinstance(axes[0], ListRange):
        return ListKey
    return key_class(len(axes))


@dataclass(frozen=True)
class CompositeRange(KeyRange):
    """
    An N-dimensional range composed of one single-axis range per dimension.

    Axes are given slowest first, so that for a 2D range ``axes == (y_range, x_range)``. Keys
    are visited in odometer order: the last (X) axis varies fastest, and whenever an axis runs
    out it is reset to its first value and the next slower axis is advanced. Every axis keeps
    its own counting direction.

    Parameters
    ----------
    axes : Iterable[KeyRange]
        One RegularRange or ListRange per dimension, slowest axis first.
    key_type : type[Key], optional
        The key family produced by this range. Defaults to ``Key1D`` .. ``Key4D`` according to
        the number of axes, or ``ListKey`` for a single ListRange axis.
    """

    axes: tuple[KeyRange, ...]
    key_type: type[Key]

    def __init__(self, axes: Iterable[KeyRange], key_type: type[Key] | None = None) -> None:
        axes_parsed = tuple(axes)
        if not 1 <= len(axes_parsed) <= MAX_NDIM:
            raise ShapeError(f"Expected between 1 and {MAX_NDIM} axes. Got {len(axes_parsed)}.")
        if any(isinstance(axis, CompositeRange) for axis in axes_parsed):
            raise TypeError("The axes of a CompositeRange must be single-axis ranges.")
        if key_type is None:
            key_type = _default_key_type(axes_parsed)
        if key_type.ndim != len(axes_parsed):
            raise ShapeError(
                f"{key_type.__name__} has {key_type.ndim} axes, but {len(axes_parsed)} were given."
            )

        object.__setattr__(self, "axes", axes_parsed)
        object.__setattr__(self, "key_type", key_type)

    @classmethod
    def from_keys(cls, start_key: Key, end_key: Key) -> CompositeRange:
        """
        Build the box range between two keys of the same regular family, both inclusive.
        Axes where the start value is greater than the end value count down.
        """
        key_type = type(start_key)
        if key_type is ListKey or not isinstance(start_key, Key):
            raise TypeError(f"Expected a regular key. Got {start_key!r} instead.")
        end_key = parse_key(end_key, key_type)
        bounds = zip(start_key.as_tuple(), end_key.as_tuple(), strict=True)
        return cls((RegularRange(s, e) for s, e in bounds), key_type)

    @classmethod
    def from_shape(
        cls, shape: ShapeLike, start: Key | Sequence[int] | int | None = None
    ) -> CompositeRange:
        """
        Build an ascending range with ``shape[i]`` values along axis ``i``, slowest axis first,
        starting at ``start`` (all zeros by default).
        """
        sizes = parse_axis_sizes(shape)
        key_type = key_class(len(sizes))
        if start is None:
            start_key = key_type(*(0,) * len(sizes))
        elif isinstance(start, Key):
            start_key = parse_key(start, key_type)
        else:
            start_key = parse_key(tuple(start) if isinstance(start, Sequence) else start, key_type)
        return cls(
            (RegularRange(s, s + n - 1) for s, n in zip(start_key.as_tuple(), sizes, strict=True)),
            key_type,
        )

    @property
    def ndim(self) -> int:
        return len(self.axes)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(len(axis) for axis in self.axes)

    @property
    def size(self) -> int:
        return product(self.shape)

    def axis(self, name: str) -> KeyRange:
        """Return the single-axis range of the axis called ``name`` ("x", "y", "z" or "w")."""
        names = AXIS_NAMES[MAX_NDIM - self.ndim :]
        try:
            return self.axes[names.index(name)]
        except ValueError as e:
            raise AttributeError(f"{self.ndim}-dimensional range has no axis {name!r}.") from e

    def size_of(self, name: str) -> int:
        return len(self.axis(name))

    def _values(self, key: Key) -> tuple[Any, ...]:
        if not isinstance(key, self.key_type):
            raise KeyFamilyError(
                f"Expected a {self.key_type.__name__}. Got {key!r} of type {type(key).__name__}."
            )
        return key.as_tuple()

    def _make_key(self, values: Iterable[Any]) -> Key:
        return self.key_type(*values)

    def first(self) -> Key:
        return self._make_key(axis.first() for axis in self.axes)

    def last(self) -> Key:
        return self._make_key(axis.last() for axis in self.axes)

    def contains(self, key: Key) -> bool:
        values = self._values(key)
        return all(axis.contains(v) for axis, v in zip(self.axes, values, strict=True))

    def has_next(self, key: Key) -> bool:
        values = self._values(key)
        if not self.contains(key):
            raise RangeError(key, self)
        return any(axis.has_next(v) for axis, v in zip(self.axes, values, strict=True))

    def next_key(self, key: Key) -> Key:
        values = list(self._values(key))
        if not self.contains(key):
            raise RangeError(key, self)

        # advance the fastest axis, carrying into slower axes as they run out
        for dim in reversed(range(self.ndim)):
            axis = self.axes[dim]
            if axis.has_next(values[dim]):
                values[dim] = axis.next_key(values[dim])
                return self._make_key(values)
            values[dim] = axis.first()

        raise RangeError(f"No key follows {key!r} in {self!r}.")

    def index(self, key: Key) -> int:
        """
        Return the storage offset of ``key``. With per-axis positions ``w, z, y, x`` and sizes
        ``size_Z, size_Y, size_X`` this is ``((w * size_Z + z) * size_Y + y) * size_X + x``.
        """
        values = self._values(key)
        if not self.contains(key):
            raise RangeError(key, self)
        positions = tuple(axis.index(v) for axis, v in zip(self.axes, values, strict=True))
        return int(np.ravel_multi_index(positions, self.shape))

    def at(self, index: int) -> Key:
        if not 0 <= index < self.size:
            raise RangeError(f"Position {index} is outside of {self!r}.")
        positions = np.unravel_index(index, self.shape)
        return self._make_key(axis.at(int(p)) for axis, p in zip(self.axes, positions, strict=True))

    def sub_range(self, start: Key, end: Key) -> CompositeRange:
        """
        Clip every axis to the interval between the matching values of ``start`` and ``end``.
        Each clipped axis takes its direction from its own bounds, independent of this range.
        """
        start_values = self._values(parse_key(start, self.key_type))
        end_values = self._values(parse_key(end, self.key_type))
        return CompositeRange(
            (
                axis.sub_range(s, e)
                for axis, s, e in zip(self.axes, start_values, end_values, strict=True)
            ),
            self.key_type,
        )

    def __len__(self) -> int:
        return self.size
