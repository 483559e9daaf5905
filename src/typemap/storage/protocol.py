"""Read-only protocol for layers that must not mutate a TypeMap.

Usage:
    def render(ctx: ReadOnlyTypeMap) -> str:
        return ctx.find(Locale) or "en"
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from typemap.core.association import Assoc
from typemap.core.types import Borrow


@runtime_checkable
class ReadOnlyTypeMap(Protocol):
    """Read-only TypeMap view. TypeMap satisfies it structurally."""

    def find[V](self, key: Assoc[V] | type[Assoc[V]]) -> Borrow[V] | None:
        """Get the value stored under a tag."""
        ...

    def contains(self, key: Any) -> bool:
        """Check if a tag has a stored value."""
        ...

    def size(self) -> int:
        """Number of stored entries."""
        ...

    def __contains__(self, key: Any) -> bool: ...

    def __len__(self) -> int: ...
