from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from logging import getLogger
from typing import Any, Generic, TypeVar

import numpy as np
import numpy.typing as npt

from coordmap.core._info import CoordMapInfo
from coordmap.core.common import UNSET, ConfigurationsLike, ElementFactory
from coordmap.core.composite import CompositeRange
from coordmap.core.iterator import GridIterator
from coordmap.core.keys import Key, element_name, parse_key
from coordmap.core.ranges import KeyRange
from coordmap.errors import BoundsError, ShapeError

__all__ = ["CoordMap"]

logger = getLogger(__name__)

T = TypeVar("T")


def _parse_configurations(
    key_range: CompositeRange, keys: Sequence[Key], configurations: ConfigurationsLike
) -> list[Any]:
    """
    Expand per-element configurations into one value per key, in storage order.
    """
    if isinstance(configurations, Mapping):
        parsed: dict[Key, Any] = {}
        for raw_key, value in configurations.items():
            key = parse_key(raw_key, key_range.key_type)
            if key in parsed:
                raise ShapeError(f"Configuration given more than once for key {key}.")
            parsed[key] = value
        configurations = parsed
        missing = [key for key in keys if key not in configurations]
        if missing:
            raise ShapeError(
                f"No configuration given for key(s) {', '.join(map(str, missing))} of a "
                f"container with shape {key_range.shape}."
            )
        if len(configurations) != len(keys):
            extra = [key for key in configurations if key not in key_range]
            raise ShapeError(
                f"Configuration given for key(s) {', '.join(map(str, extra))} outside of a "
                f"container with shape {key_range.shape}."
            )
        return [configurations[key] for key in keys]

    if isinstance(configurations, str) or not isinstance(configurations, Sequence):
        raise TypeError(
            f"Expected a mapping or a sequence of configurations. Got {type(configurations)}."
        )
    if len(configurations) != len(keys):
        raise ShapeError(len(keys), key_range.shape, len(configurations))
    return list(configurations)


class CoordMap(Generic[T]):
    """
    A dense grid of managed elements addressed by coordinate keys.

    The container owns one element per key of its range. Elements are created once, in
    storage order, when the container is built; its shape never changes afterwards. Storage
    is row-major with the X axis varying fastest, so that the storage order is the iteration
    order of the range.

    Parameters
    ----------
    key_range : CompositeRange
        The full coordinate space of the container.
    factory : Callable
        Called as ``factory(key)`` for every key, or as ``factory(key, configuration)`` when a
        configuration is given, and returns the element to store at ``key``.
    configuration : Any, optional
        A single configuration value shared by all elements.
    configurations : Mapping[Key, Any] or Sequence[Any], optional
        One configuration per element, either keyed by ``Key`` or as a flat sequence in
        storage order. Mutually exclusive with ``configuration``.
    name : str, optional
        Base name of the container, used to derive element names.
    observer : Callable, optional
        Called with the container once it has been built.
    """

    _range: CompositeRange
    _elements: npt.NDArray[np.object_]
    name: str

    def __init__(
        self,
        key_range: CompositeRange,
        factory: ElementFactory,
        *,
        configuration: Any = UNSET,
        configurations: ConfigurationsLike | None = None,
        name: str | None = None,
        observer: Callable[[CoordMap[T]], None] | None = None,
    ) -> None:
        if not isinstance(key_range, CompositeRange):
            raise TypeError(f"Expected a CompositeRange. Got {type(key_range)}.")
        if configuration is not UNSET and configurations is not None:
            raise ShapeError("Pass either a shared configuration or per-element configurations.")

        keys = list(key_range)
        if configurations is not None:
            configs: list[Any] | None = _parse_configurations(key_range, keys, configurations)
        elif configuration is not UNSET:
            configs = [configuration] * len(keys)
        else:
            configs = None

        elements = np.empty(len(keys), dtype=object)
        for offset, key in enumerate(keys):
            if configs is None:
                elements[offset] = factory(key)
            else:
                elements[offset] = factory(key, configs[offset])
        elements.flags.writeable = False

        self._range = key_range
        self._elements = elements
        self.name = name if name is not None else "coordmap"
        logger.debug("created %s with shape %s (%d elements)", self.name, self.shape, self.size)

        if observer is not None:
            observer(self)

    @property
    def range(self) -> CompositeRange:
        return self._range

    @property
    def key_type(self) -> type[Key]:
        return self._range.key_type

    @property
    def shape(self) -> tuple[int, ...]:
        return self._range.shape

    @property
    def ndim(self) -> int:
        return self._range.ndim

    @property
    def size(self) -> int:
        return self._range.size

    @property
    def size_x(self) -> int:
        return self._range.size_of("x")

    @property
    def size_y(self) -> int:
        return self._range.size_of("y")

    @property
    def size_z(self) -> int:
        return self._range.size_of("z")

    @property
    def size_w(self) -> int:
        return self._range.size_of("w")

    @property
    def info(self) -> CoordMapInfo:
        return CoordMapInfo(
            _name=self.name,
            _key_type=self.key_type.__name__,
            _shape=self.shape,
            _size=self.size,
            _first=str(self._range.first()),
            _last=str(self._range.last()),
            _element_type=type(self._elements[0]).__name__,
        )

    def element_at(self, key: Key | Any) -> T:
        """
        Return the element stored at ``key``. Raises ``BoundsError`` if the key is outside of
        the container.
        """
        key = parse_key(key, self.key_type)
        if not self._range.contains(key):
            raise BoundsError(key, self.shape)
        return self._elements[self._range.index(key)]  # type: ignore[no-any-return]

    def key_of(self, element: Any) -> tuple[bool, Key | None]:
        """
        Look up the key of ``element`` by identity. Returns ``(True, key)`` if the element is
        part of this container and ``(False, None)`` otherwise.
        """
        for offset, candidate in enumerate(self._elements):
            if candidate is element:
                return True, self._range.at(offset)
        return False, None

    def element_name(self, key: Key | Any) -> str:
        return element_name(self.name, parse_key(key, self.key_type))

    def slice(self, start: Key | Any, end: Key | Any) -> GridIterator:
        """
        Return an iterator over the box between ``start`` and ``end``, both inclusive. An axis
        counts down when its start value is greater than its end value.
        """
        return GridIterator(self, self._range.sub_range(start, end))

    def iter_range(self, key_range: KeyRange) -> GridIterator:
        """
        Return an iterator over a range of keys of this container, e.g. a ListRange snapshot.
        On a one-dimensional container a single-axis range of plain values, such as
        ``RegularRange(1, 2)``, is taken as a range over the matching keys.
        """
        if (
            self.ndim == 1
            and not isinstance(key_range, CompositeRange)
            and not isinstance(key_range.first(), Key)
        ):
            key_range = CompositeRange((key_range,), self.key_type)
        return GridIterator(self, key_range)

    def begin(self) -> GridIterator:
        return GridIterator(self)

    def end(self) -> GridIterator:
        return GridIterator(self, at_end=True)

    def keys(self) -> Iterator[Key]:
        return iter(self._range)

    def items(self) -> Iterator[tuple[Key, T]]:
        return zip(self._range, self._elements, strict=True)

    def write(self, value: Any) -> int:
        return self.begin().write(value)

    def bind(self, target: Any) -> int:
        return self.begin().bind(target)

    def as_array(self) -> npt.NDArray[np.object_]:
        """Return a read-only view of the elements with the shape of the container."""
        return self._elements.reshape(self.shape)

    def __getitem__(self, selection: Any) -> Any:
        if isinstance(selection, slice):
            if selection.step is not None:
                raise IndexError("Slices of a CoordMap do not support a step.")
            start = self._range.first() if selection.start is None else selection.start
            end = self._range.last() if selection.stop is None else selection.stop
            return self.slice(start, end)
        return self.element_at(selection)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, self.key_type):
            return False
        return self._range.contains(key)

    def __iter__(self) -> Iterator[T]:
        return iter(self._elements)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"<CoordMap {self.name!r} shape={self.shape} key_type={self.key_type.__name__}>"
