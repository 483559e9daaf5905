"""In-memory map keyed by tag classes, one value per tag.

Each tag class is declared with the single value type it may store, so every
layer sharing the map reads back exactly the type it wrote.

Usage:
    class RequestId(Assoc[str]): ...

    class Attempts(Assoc[int]): ...

    ctx = TypeMap()
    ctx.insert(RequestId, "req-42")
    ctx[Attempts] = 3

    ctx.find(RequestId)      # "req-42"
    RequestId in ctx         # True
    del ctx[Attempts]
    len(ctx)                 # 1
"""

from __future__ import annotations

import warnings
from typing import Any

from typemap.config import TypeMapSettings, get_settings
from typemap.core.association import Assoc, AssociationError, resolve_tag
from typemap.core.carrier import Carrier
from typemap.core.identity import KeyIdentity
from typemap.core.types import Borrow


class TypeMap:
    """Heterogeneous container holding at most one value per tag class.

    Structure:
        _data[key_identity] = Carrier(value)

    Keys may be given as the tag class or as any instance of it; only the class
    matters. Values are stored and handed back by reference, never copied.

    Not thread-safe: one owner mutates at a time.

    Args:
        settings: Boundary-check settings (default: shared get_settings()).
    """

    __slots__ = ("_data", "_settings")

    def __init__(self, settings: TypeMapSettings | None = None) -> None:
        """Initialize an empty map.

        Args:
            settings: Boundary-check settings (default: get_settings()).
        """
        self._settings = settings if settings is not None else get_settings()
        self._data: dict[KeyIdentity, Carrier[Any]] = {}

    @property
    def settings(self) -> TypeMapSettings:
        """Settings this map was created with."""
        return self._settings

    def _lookup(self, key: Any) -> Any:
        """Resolve, fetch and downcast; mismatches read as absent.

        Every public lookup calls this directly, so the warning is attributed
        two frames up, to the caller of that lookup.
        """
        meta = resolve_tag(key)
        carrier = self._data.get(meta.key)
        if carrier is None:
            return None
        if carrier.holds(meta.runtime_type):
            return carrier.unwrap()
        if self._settings.warn_on_mismatch:
            warnings.warn(
                f"Value stored under {meta.type_name} is {carrier.value_type.__qualname__}, "
                f"not {meta.value_type_name}; treating it as absent.",
                RuntimeWarning,
                stacklevel=3,
            )
        return None

    def insert[V](self, key: Assoc[V] | type[Assoc[V]], value: V) -> bool:
        """Store a value under a tag, replacing any previous value.

        The previous value is released immediately.

        Args:
            key: Tag class or tag instance.
            value: Value of the tag's declared type.

        Returns:
            True if an entry already existed under this tag, False otherwise.

        Raises:
            AssociationError: If key is not a tag, or if value does not match
                the declared type while insert validation is enabled.
        """
        meta = resolve_tag(key)
        carrier = Carrier(value)
        if self._settings.validate_inserts and not carrier.holds(meta.runtime_type):
            raise AssociationError(
                f"{meta.type_name} stores {meta.value_type_name}, "
                f"got {type(value).__qualname__}"
            )
        existed = meta.key in self._data
        self._data[meta.key] = carrier
        return existed

    def find[V](self, key: Assoc[V] | type[Assoc[V]]) -> Borrow[V] | None:
        """Get the value stored under a tag.

        Args:
            key: Tag class or tag instance.

        Returns:
            The stored value (not a copy), or None if absent.
        """
        return self._lookup(key)

    def find_mut[V](self, key: Assoc[V] | type[Assoc[V]]) -> Borrow[V] | None:
        """Get the value stored under a tag for in-place mutation.

        Returns the same object as find(); mutating it is visible to later
        lookups. Ownership stays with the map.

        Args:
            key: Tag class or tag instance.

        Returns:
            The stored value, or None if absent.
        """
        return self._lookup(key)

    def contains(self, key: Any) -> bool:
        """Check if a tag has a stored value.

        Args:
            key: Tag class or tag instance.

        Returns:
            True if an entry exists under this tag.
        """
        return resolve_tag(key).key in self._data

    def remove(self, key: Any) -> bool:
        """Remove the value stored under a tag.

        Args:
            key: Tag class or tag instance.

        Returns:
            True if an entry was removed, False if none was present.
        """
        return self._data.pop(resolve_tag(key).key, None) is not None

    def size(self) -> int:
        """Return the number of stored entries."""
        return len(self._data)

    def clear(self) -> None:
        """Remove every entry."""
        self._data.clear()

    # Dict-style access

    def __getitem__[V](self, key: Assoc[V] | type[Assoc[V]]) -> Borrow[V] | None:
        """Get value, or None if absent."""
        return self._lookup(key)

    def __setitem__[V](self, key: Assoc[V] | type[Assoc[V]], value: V) -> None:
        """Insert or replace value."""
        self.insert(key, value)

    def __delitem__(self, key: Any) -> None:
        """Remove value. Silent if absent."""
        self.remove(key)

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"TypeMap(size={len(self._data)})"
