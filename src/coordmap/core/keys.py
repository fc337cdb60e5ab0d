from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from coordmap.core.common import is_integer
from coordmap.core.config import config
from coordmap.errors import KeyFamilyError

if TYPE_CHECKING:
    from typing import Self

__all__ = [
    "Key",
    "Key1D",
    "Key2D",
    "Key3D",
    "Key4D",
    "ListKey",
    "element_name",
    "key_class",
    "parse_key",
]


@dataclass(frozen=True, eq=False)
class Key(ABC):
    """
    Immutable coordinate of one addressable position in a grid.

    Every key family stores its axis values slowest axis first, so that the natural
    lexicographic order of ``as_tuple()`` is the iteration order of a grid, with the X axis
    varying fastest. Keys of different families can not be compared; doing so raises a
    ``KeyFamilyError``.
    """

    ndim: ClassVar[int]
    axes: ClassVar[tuple[str, ...]]

    def __post_init__(self) -> None:
        for axis in self.axes:
            value = getattr(self, axis)
            if not is_integer(value):
                raise TypeError(
                    f"Expected an integer for axis {axis!r} of {type(self).__name__}. "
                    f"Got {value!r} instead."
                )
            object.__setattr__(self, axis, int(value))

    def as_tuple(self) -> tuple[Any, ...]:
        return tuple(getattr(self, axis) for axis in self.axes)

    def to_string(self, separator: str = ",") -> str:
        return separator.join(str(v) for v in self.as_tuple())

    def _check_family(self, other: object) -> bool:
        if not isinstance(other, Key):
            return False
        if type(other) is not type(self):
            raise KeyFamilyError(
                f"Cannot compare a {type(self).__name__} with a {type(other).__name__}."
            )
        return True

    def __eq__(self, other: object) -> bool:
        if not self._check_family(other):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()  # type: ignore[attr-defined]

    def __ne__(self, other: object) -> bool:
        if not self._check_family(other):
            return NotImplemented
        return self.as_tuple() != other.as_tuple()  # type: ignore[attr-defined]

    def __lt__(self, other: Self) -> bool:
        if not self._check_family(other):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: Self) -> bool:
        if not self._check_family(other):
            return NotImplemented
        return self.as_tuple() <= other.as_tuple()

    def __gt__(self, other: Self) -> bool:
        if not self._check_family(other):
            return NotImplemented
        return self.as_tuple() > other.as_tuple()

    def __ge__(self, other: Self) -> bool:
        if not self._check_family(other):
            return NotImplemented
        return self.as_tuple() >= other.as_tuple()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.as_tuple()))

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True, eq=False)
class Key1D(Key):
    ndim: ClassVar[int] = 1
    axes: ClassVar[tuple[str, ...]] = ("x",)

    x: int


@dataclass(frozen=True, eq=False)
class Key2D(Key):
    ndim: ClassVar[int] = 2
    axes: ClassVar[tuple[str, ...]] = ("y", "x")

    y: int
    x: int


@dataclass(frozen=True, eq=False)
class Key3D(Key):
    ndim: ClassVar[int] = 3
    axes: ClassVar[tuple[str, ...]] = ("z", "y", "x")

    z: int
    y: int
    x: int


@dataclass(frozen=True, eq=False)
class Key4D(Key):
    ndim: ClassVar[int] = 4
    axes: ClassVar[tuple[str, ...]] = ("w", "z", "y", "x")

    w: int
    z: int
    y: int
    x: int


@dataclass(frozen=True, eq=False)
class ListKey(Key):
    """
    Key of a list-addressed axis. The value is an opaque token chosen by the caller, e.g. a
    character or a port name; it must be hashable, and orderable if keys are to be sorted.
    """

    ndim: ClassVar[int] = 1
    axes: ClassVar[tuple[str, ...]] = ("value",)

    value: Any

    def __post_init__(self) -> None:
        hash(self.value)


_KEY_CLASSES: dict[int, type[Key]] = {1: Key1D, 2: Key2D, 3: Key3D, 4: Key4D}


def key_class(ndim: int) -> type[Key]:
    """Return the regular key family for a grid with ``ndim`` axes."""
    try:
        return _KEY_CLASSES[ndim]
    except KeyError as e:
        raise ValueError(f"Expected a dimensionality between 1 and 4. Got {ndim}.") from e


def parse_key(data: Any, key_type: type[Key]) -> Key:
    """
    Convert an integer, a tuple of integers or a key into a key of family ``key_type``.

    A key of another family is rejected with a ``KeyFamilyError``.
    """
    if isinstance(data, Key):
        if type(data) is not key_type:
            raise KeyFamilyError(f"Expected a {key_type.__name__}. Got a {type(data).__name__}.")
        return data
    if key_type is ListKey:
        return ListKey(data)
    if is_integer(data):
        data = (data,)
    if not isinstance(data, tuple) or len(data) != key_type.ndim:
        raise TypeError(
            f"Expected a {key_type.__name__} or a tuple of {key_type.ndim} integers. "
            f"Got {data!r} instead."
        )
    return key_type(*data)


def element_name(base: str, key: Key, separator: str | None = None) -> str:
    """
    Derive the hierarchical name of the element stored at ``key``, e.g. ``signal_2_1``.

    The separator defaults to ``config["naming.separator"]``.
    """
    if separator is None:
        separator = config.get("naming.separator")
    return f"{base}{separator}{key.to_string(separator)}"
