from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from coordmap.core.iterator import GridIterator
    from coordmap.core.keys import Key

__all__ = ["RecordingFactory", "Signal", "visited_keys"]


@dataclass(eq=False)
class Signal:
    """
    A minimal managed element for tests. It remembers the last value written to it, every
    target it was bound to, and the configuration it was built with.
    """

    key: Key
    configuration: Any = None
    value: Any = None
    writes: int = 0
    bound: list[Any] = field(default_factory=list)

    def write(self, value: Any) -> None:
        self.value = value
        self.writes += 1

    def bind(self, target: Any) -> None:
        self.bound.append(target)


class RecordingFactory:
    """Element factory building ``Signal`` objects and recording the keys it was called with."""

    def __init__(self) -> None:
        self.calls: list[Key] = []

    def __call__(self, key: Key, *configuration: Any) -> Signal:
        self.calls.append(key)
        return Signal(key, *configuration)


def visited_keys(iterator: GridIterator) -> list[Key]:
    """Drain ``iterator`` and return the keys of the elements it visited."""
    keys = []
    while not iterator.at_end:
        keys.append(iterator.key)
        iterator.advance()
    return keys
