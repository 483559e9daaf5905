"""Storage: the TypeMap container and its read-only protocol."""

from typemap.storage.protocol import ReadOnlyTypeMap
from typemap.storage.typemap import TypeMap

__all__ = [
    "TypeMap",
    "ReadOnlyTypeMap",
]
