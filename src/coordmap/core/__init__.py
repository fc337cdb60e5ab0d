"""
The ``coordmap.core`` module is considered private API and should not be imported
directly by 3rd-party code.
"""

from __future__ import annotations

from coordmap.core.composite import CompositeRange  # noqa: F401
from coordmap.core.container import CoordMap  # noqa: F401
