from coordmap._version import version as __version__
from coordmap.core.composite import CompositeRange
from coordmap.core.config import config
from coordmap.core.container import CoordMap
from coordmap.core.iterator import Cursor, Element, GridIterator, SequenceCursor
from coordmap.core.keys import Key, Key1D, Key2D, Key3D, Key4D, ListKey, element_name, key_class
from coordmap.core.ranges import Direction, KeyRange, ListRange, RegularRange
from coordmap.creation import (
    create,
    cube,
    from_keys,
    from_list,
    from_range,
    hypercube,
    linear,
    square,
)
from coordmap.errors import (
    BoundsError,
    IteratorMisuseError,
    KeyFamilyError,
    RangeError,
    ShapeError,
)

__all__ = [
    "BoundsError",
    "CompositeRange",
    "CoordMap",
    "Cursor",
    "Direction",
    "Element",
    "GridIterator",
    "IteratorMisuseError",
    "Key",
    "Key1D",
    "Key2D",
    "Key3D",
    "Key4D",
    "KeyFamilyError",
    "KeyRange",
    "ListKey",
    "ListRange",
    "RangeError",
    "RegularRange",
    "SequenceCursor",
    "ShapeError",
    "__version__",
    "config",
    "create",
    "cube",
    "element_name",
    "from_keys",
    "from_list",
    "from_range",
    "hypercube",
    "key_class",
    "linear",
    "square",
]
