"""
The config module is responsible for managing the configuration of coordmap and is based on the
Donfig python library.

Example:
    Range bounds checking can be switched off for trusted, hot code paths:

    ```python
    from coordmap.core.config import config

    with config.set({"range.validate_bounds": False}):
        ...
    ```

    Instead of setting the value programmatically with ``config.set``, you can also set the value
    with an environment variable. The environment variable ``COORDMAP_RANGE__VALIDATE_BOUNDS`` can
    be set to ``False``. The double underscore ``__`` is used to indicate nested access.

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Any, Literal, cast

from donfig import Config as DConfig

BroadcastScope = Literal["container", "range"]


class BadConfigError(ValueError):
    _msg = "bad Config: %r"


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "COORDMAP_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for coordmap
config = Config(
    "coordmap",
    defaults=[
        {
            "range": {"validate_bounds": True},
            "iterator": {"broadcast_scope": "container"},
            "naming": {"separator": "_"},
        }
    ],
)


def parse_broadcast_scope(data: Any) -> BroadcastScope:
    if data in ("container", "range"):
        return cast("BroadcastScope", data)
    raise BadConfigError(f"Expected one of ('container', 'range'), got {data} instead.")
