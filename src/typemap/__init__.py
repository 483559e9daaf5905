"""typemap: a heterogeneous container keyed by tag classes.

Usage:
    from typemap import Assoc, TypeMap

    class RequestId(Assoc[str]): ...

    class Attempts(Assoc[int]): ...

    ctx = TypeMap()
    ctx.insert(RequestId, "req-42")
    ctx.insert(Attempts, 0)

    ctx.find(RequestId)         # "req-42"
    ctx.find(Attempts)          # 0
    ctx.insert(Attempts, "x")   # AssociationError: Attempts stores int
"""

__version__ = "0.1.0"

# Configuration
from typemap.config import TypeMapSettings, get_settings

# Core primitives
from typemap.core import (
    Assoc,
    AssociationError,
    AssociationMeta,
    AssociationRegistry,
    Borrow,
    Carrier,
    KeyIdentity,
    get_registry,
    key_identity,
    resolve_tag,
    runtime_type,
)

# Storage
from typemap.storage import (
    ReadOnlyTypeMap,
    TypeMap,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Assoc",
    "AssociationError",
    "AssociationMeta",
    "AssociationRegistry",
    "Borrow",
    "Carrier",
    "KeyIdentity",
    "get_registry",
    "key_identity",
    "resolve_tag",
    "runtime_type",
    # Storage
    "TypeMap",
    "ReadOnlyTypeMap",
    # Config
    "TypeMapSettings",
    "get_settings",
]
