import dataclasses
import textwrap
from typing import Literal


@dataclasses.dataclass(kw_only=True)
class CoordMapInfo:
    """
    Visual summary for a CoordMap.

    Note that this method and its properties is not part of
    coordmap's public API.
    """

    _name: str
    _type: Literal["CoordMap"] = "CoordMap"
    _key_type: str
    _shape: tuple[int, ...]
    _size: int
    _first: str
    _last: str
    _element_type: str

    def __repr__(self) -> str:
        template = textwrap.dedent("""\
        Name         : {_name}
        Type         : {_type}
        Key type     : {_key_type}
        Shape        : {_shape}
        No. elements : {_size}
        First key    : {_first}
        Last key     : {_last}
        Element type : {_element_type}""")

        return template.format(**dataclasses.asdict(self))
