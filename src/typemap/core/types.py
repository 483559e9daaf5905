"""Core type definitions for typemap."""

type Borrow[T] = T
"""Type alias indicating a value is a reference into a TypeMap, not a copy.

When you see `Borrow[T]` in a return type, the returned object is the one the
map owns. In-place mutations are visible to later lookups. Do not hold on to it
across an insert, remove or clear of the same key.
"""
