from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Iterator
from logging import getLogger
from typing import TYPE_CHECKING, Any, Protocol

from coordmap.core.composite import CompositeRange
from coordmap.core.config import config, parse_broadcast_scope
from coordmap.core.ranges import RegularRange
from coordmap.errors import IteratorMisuseError, RangeError

if TYPE_CHECKING:
    from typing import Self

    from coordmap.core.container import CoordMap
    from coordmap.core.keys import Key
    from coordmap.core.ranges import KeyRange

__all__ = ["Cursor", "Element", "GridIterator", "SequenceCursor"]

logger = getLogger(__name__)


class Element(Protocol):
    """
    The capabilities a managed element has to offer for bulk operations. What writing and
    binding mean is up to the element.
    """

    def write(self, value: Any) -> None: ...

    def bind(self, target: Any) -> None: ...


class Cursor(Protocol):
    """
    A position in a sequence of elements that can be dereferenced and advanced, regardless of
    the shape of whatever it walks over. Paired binds run two cursors in lock-step.
    """

    @property
    def at_end(self) -> bool: ...

    @property
    def element(self) -> Any: ...

    def advance(self) -> Any: ...


def _is_cursor(obj: Any) -> bool:
    # look the members up on the type, so that no property is evaluated
    return all(hasattr(type(obj), name) for name in ("at_end", "element", "advance"))


class SequenceCursor:
    """
    Cursor over an arbitrary iterable, e.g. a list of signals to bind to a grid of ports.
    """

    def __init__(self, items: Iterable[Any]) -> None:
        self._items = iter(items)
        self._element: Any = None
        self._at_end = False
        self.advance()

    @property
    def at_end(self) -> bool:
        return self._at_end

    @property
    def element(self) -> Any:
        if self._at_end:
            raise IteratorMisuseError("Cannot dereference a cursor that has reached its end.")
        return self._element

    def advance(self) -> SequenceCursor:
        if not self._at_end:
            try:
                self._element = next(self._items)
            except StopIteration:
                self._element = None
                self._at_end = True
        return self


class GridIterator:
    """
    A cursor over the elements of a container, restricted to a key range.

    The iterator owns a copy of its range, so any number of iterators can walk overlapping
    parts of the same container independently. It starts at the first key of the range and,
    once advanced past the last one, stays at its end for good.

    Parameters
    ----------
    container : CoordMap
        The container whose elements are visited. The iterator does not keep it alive beyond
        its own lifetime and must not outlive its usefulness.
    key_range : KeyRange, optional
        The keys to visit, in order. Defaults to the full range of the container.
    position : Key, optional
        The key to start from. Defaults to the first key of ``key_range``.
    at_end : bool
        Construct the iterator in its end state.
    """

    def __init__(
        self,
        container: CoordMap[Any],
        key_range: KeyRange | None = None,
        *,
        position: Key | None = None,
        at_end: bool = False,
    ) -> None:
        if key_range is None:
            key_range = container.range
        else:
            _check_range(container, key_range)

        self._container = container
        self._range = key_range.copy()
        if position is None:
            position = self._range.first()
        elif not self._range.contains(position):
            raise RangeError(position, self._range)
        self._key = position
        self._at_end = at_end

    @property
    def container(self) -> CoordMap[Any]:
        return self._container

    @property
    def range(self) -> KeyRange:
        return self._range

    @property
    def at_end(self) -> bool:
        return self._at_end

    @property
    def key(self) -> Key:
        self._check_active("read the key of")
        return self._key

    def get_key(self) -> tuple[bool, Key]:
        """
        Return a pair of the end flag and the current key. Once the iterator reached its end
        the key is the last one it pointed to.
        """
        return self._at_end, self._key

    @property
    def element(self) -> Any:
        self._check_active("dereference")
        return self._container.element_at(self._key)

    def advance(self) -> Self:
        """Move to the next key of the range. Advancing an iterator at its end does nothing."""
        if not self._at_end:
            if self._range.has_next(self._key):
                self._key = self._range.next_key(self._key)
            else:
                self._at_end = True
        return self

    def copy(self) -> GridIterator:
        other = copy.copy(self)
        other._range = self._range.copy()
        return other

    def keys(self) -> Iterator[Key]:
        """Yield the keys still to be visited, without moving this iterator."""
        cursor = self.copy()
        while not cursor.at_end:
            yield cursor.key
            cursor.advance()

    def write(self, value: Any) -> int:
        """
        Write ``value`` to every element from the current position onwards.

        With the default ``iterator.broadcast_scope`` of ``"container"`` the write runs on to
        the last key of the container, following the container's order; with ``"range"`` it
        stops at the end of this iterator's range. The iterator is at its end afterwards.

        Returns
        -------
        int
            The number of elements written.
        """
        count = self._broadcast("write", lambda element: element.write(value))
        logger.debug("write: %d element(s) of %s", count, self._container.name)
        return count

    def bind(self, target: Any) -> int:
        """
        Bind the elements of this iterator to ``target``.

        If ``target`` is a GridIterator, a container or any other cursor, the elements are
        bound pairwise in lock-step until either side reaches its end; a GridIterator target
        is copied first and so is left where it was. Any other object is bound to every
        element from the current position onwards, with the same scope as ``write``.

        Returns
        -------
        int
            The number of bind calls made.
        """
        from coordmap.core.container import CoordMap

        if isinstance(target, CoordMap):
            count = self._bind_paired(target.begin())
        elif isinstance(target, GridIterator):
            count = self._bind_paired(target.copy())
        elif _is_cursor(target):
            count = self._bind_paired(target)
        else:
            count = self._broadcast("bind", lambda element: element.bind(target))
        logger.debug("bind: %d element(s) of %s", count, self._container.name)
        return count

    def bind_each(self, targets: Iterable[Any]) -> int:
        """Bind the elements of this iterator pairwise to the items of ``targets``."""
        return self._bind_paired(SequenceCursor(targets))

    def _bind_paired(self, source: Cursor) -> int:
        self._check_active("bind")
        count = 0
        while not (self._at_end or source.at_end):
            self.element.bind(source.element)
            self.advance()
            source.advance()
            count += 1
        return count

    def _broadcast(self, operation: str, apply: Callable[[Element], None]) -> int:
        self._check_active(operation)
        scope = parse_broadcast_scope(config.get("iterator.broadcast_scope"))
        if scope == "container":
            cursor = GridIterator(self._container, position=self._key)
        else:
            cursor = self

        count = 0
        while not cursor.at_end:
            apply(cursor.element)
            cursor.advance()
            count += 1
        self._at_end = True
        return count

    def _check_active(self, operation: str) -> None:
        if self._at_end:
            raise IteratorMisuseError(f"Cannot {operation} an iterator that has reached its end.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridIterator):
            return NotImplemented
        if self._at_end or other._at_end:
            return self._at_end and other._at_end
        return self._container is other._container and self._key == other._key

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Any:
        if self._at_end:
            raise StopIteration
        element = self.element
        self.advance()
        return element

    def __repr__(self) -> str:
        if self._at_end:
            return f"<GridIterator of {self._container.name!r} at end>"
        return f"<GridIterator of {self._container.name!r} at {self._key}>"


def _check_range(container: CoordMap[Any], key_range: KeyRange) -> None:
    if not config.get("range.validate_bounds"):
        return
    # a box is inside a box when both of its corners are
    if _is_box(key_range) and _is_box(container.range):
        candidates: Iterable[Any] = (key_range.first(), key_range.last())
    else:
        candidates = key_range
    for key in candidates:
        if not container.range.contains(key):
            raise RangeError(key, container.range)


def _is_box(key_range: KeyRange) -> bool:
    return isinstance(key_range, CompositeRange) and all(
        isinstance(axis, RegularRange) for axis in key_range.axes
    )
