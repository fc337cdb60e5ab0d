__all__ = [
    "BaseCoordMapError",
    "BoundsError",
    "IteratorMisuseError",
    "KeyFamilyError",
    "RangeError",
    "ShapeError",
]


class BaseCoordMapError(ValueError):
    """
    Base error which all coordmap errors are sub-classed from.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for a template string class
        variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class ShapeError(BaseCoordMapError):
    """
    Raised when a container or range cannot be built from the requested shape or
    configuration, e.g. a non-positive axis size or a configuration sequence whose length
    does not match the number of elements.
    """

    _msg = "Expected {} configuration value(s) for shape {}. Got {}."


class RangeError(BaseCoordMapError):
    """
    Raised when a key or a pair of bounds falls outside the range it is applied to.
    """

    _msg = "Key {!r} is outside of range {!r}."


class BoundsError(BaseCoordMapError, IndexError):
    """Raised when an element is looked up with a key outside the container's shape."""

    _msg = "Key {!r} is out of bounds for container with shape {}."


class IteratorMisuseError(BaseCoordMapError, RuntimeError):
    """Raised when an iterator that already reached its end is dereferenced or operated on."""


class KeyFamilyError(TypeError):
    """Raised when keys of two different families are compared or mixed."""
