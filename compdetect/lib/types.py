"""
Type aliases used for type hints throughout the package.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing import Union

    buf = Union[bytes, bytearray, memoryview]
else:
    buf = Any

__all__ = ['buf']
