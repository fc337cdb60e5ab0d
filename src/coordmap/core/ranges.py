from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from coordmap.core.common import is_integer
from coordmap.core.config import config
from coordmap.errors import RangeError, ShapeError

if TYPE_CHECKING:
    from typing import Self

__all__ = ["Direction", "KeyRange", "ListRange", "RegularRange"]


class Direction(Enum):
    """
    Counting direction of a single axis.
    """

    UP = 1
    DOWN = -1


class KeyRange(ABC):
    """
    An iterable coordinate space.

    A range knows its first and last position and, given a position, whether a next one
    exists and what it is. Advancing never wraps around: once ``has_next`` is False the caller
    restarts explicitly from ``first()``.
    """

    @abstractmethod
    def first(self) -> Any: ...

    @abstractmethod
    def last(self) -> Any: ...

    @abstractmethod
    def has_next(self, key: Any) -> bool:
        """Return True if ``key`` is not the last position of this range."""

    @abstractmethod
    def next_key(self, key: Any) -> Any:
        """Return the position following ``key``. Raises ``RangeError`` at the last position."""

    @abstractmethod
    def contains(self, key: Any) -> bool: ...

    @abstractmethod
    def index(self, key: Any) -> int:
        """Return the position of ``key`` along the iteration order, starting at 0."""

    @abstractmethod
    def at(self, index: int) -> Any:
        """Return the key found at position ``index`` along the iteration order."""

    @abstractmethod
    def sub_range(self, start: Any, end: Any) -> KeyRange:
        """Return the range running from ``start`` to ``end``, both inclusive."""

    @abstractmethod
    def __len__(self) -> int: ...

    def copy(self) -> Self:
        return dataclasses.replace(self)  # type: ignore[type-var]

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[Any]:
        key = self.first()
        yield key
        while self.has_next(key):
            key = self.next_key(key)
            yield key


def _check_bounds(parent: KeyRange, start: Any, end: Any) -> None:
    if not config.get("range.validate_bounds"):
        return
    for bound in (start, end):
        if not parent.contains(bound):
            raise RangeError(bound, parent)


@dataclass(frozen=True)
class RegularRange(KeyRange):
    """
    A contiguous, inclusive interval of integers along one axis.

    The direction is derived from the bounds: the range counts down when ``start`` is
    greater than ``end``.

    Parameters
    ----------
    start : int
        The first value of the range.
    end : int
        The last value of the range.
    """

    start: int
    end: int
    direction: Direction = field(init=False)

    def __init__(self, start: int, end: int) -> None:
        if not (is_integer(start) and is_integer(end)):
            raise TypeError(f"Expected integer bounds. Got {start!r} and {end!r} instead.")

        object.__setattr__(self, "start", int(start))
        object.__setattr__(self, "end", int(end))
        object.__setattr__(self, "direction", Direction.UP if end >= start else Direction.DOWN)

    @property
    def step(self) -> int:
        return self.direction.value

    def first(self) -> int:
        return self.start

    def last(self) -> int:
        return self.end

    def contains(self, key: Any) -> bool:
        if not is_integer(key):
            return False
        return min(self.start, self.end) <= key <= max(self.start, self.end)

    def has_next(self, key: int) -> bool:
        if not self.contains(key):
            raise RangeError(key, self)
        return key != self.end

    def next_key(self, key: int) -> int:
        if not self.has_next(key):
            raise RangeError(f"No value follows {key!r} in {self!r}.")
        return key + self.step

    def index(self, key: int) -> int:
        if not self.contains(key):
            raise RangeError(key, self)
        return (key - self.start) * self.step

    def at(self, index: int) -> int:
        if not 0 <= index < len(self):
            raise RangeError(f"Position {index} is outside of {self!r}.")
        return self.start + index * self.step

    def sub_range(self, start: int, end: int) -> RegularRange:
        _check_bounds(self, start, end)
        return RegularRange(start, end)

    def __len__(self) -> int:
        return abs(self.end - self.start) + 1


@dataclass(frozen=True)
class ListRange(KeyRange):
    """
    An explicit, ordered sequence of keys.

    The keys need not be contiguous or numeric; their order is the order in which they were
    given. Lookups scan the sequence linearly.

    Parameters
    ----------
    keys : Iterable
        The keys of the range, in iteration order. They must be unique and hashable.
    """

    keys: tuple[Any, ...]

    def __init__(self, keys: Iterable[Any]) -> None:
        keys_parsed = tuple(keys)
        if len(keys_parsed) == 0:
            raise ShapeError("A ListRange needs at least one key.")
        if len(set(keys_parsed)) != len(keys_parsed):
            raise ShapeError(f"The keys of a ListRange must be unique. Got {keys_parsed}.")

        object.__setattr__(self, "keys", keys_parsed)

    @classmethod
    def from_range(cls, source: KeyRange, start: Any, end: Any) -> ListRange:
        """
        Snapshot the part of ``source`` running from ``start`` to ``end`` into a ListRange.

        Raises ``RangeError`` if either bound is not part of ``source``, or if ``end`` does not
        come after ``start`` in the iteration order of ``source``.
        """
        for bound in (start, end):
            if not source.contains(bound):
                raise RangeError(bound, source)

        key = start
        collected = [key]
        while key != end:
            if not source.has_next(key):
                raise RangeError(f"{end!r} does not follow {start!r} in {source!r}.")
            key = source.next_key(key)
            collected.append(key)
        return cls(collected)

    def first(self) -> Any:
        return self.keys[0]

    def last(self) -> Any:
        return self.keys[-1]

    def contains(self, key: Any) -> bool:
        return key in self.keys

    def has_next(self, key: Any) -> bool:
        return self.index(key) < len(self.keys) - 1

    def next_key(self, key: Any) -> Any:
        position = self.index(key) + 1
        if position == len(self.keys):
            raise RangeError(f"No key follows {key!r} in {self!r}.")
        return self.keys[position]

    def index(self, key: Any) -> int:
        try:
            return self.keys.index(key)
        except ValueError as e:
            raise RangeError(key, self) from e

    def at(self, index: int) -> Any:
        if not 0 <= index < len(self.keys):
            raise RangeError(f"Position {index} is outside of {self!r}.")
        return self.keys[index]

    def sub_range(self, start: Any, end: Any) -> ListRange:
        return ListRange.from_range(self, start, end)

    def to_list(self) -> list[Any]:
        return list(self.keys)

    def __len__(self) -> int:
        return len(self.keys)
