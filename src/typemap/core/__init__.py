"""Core functionalities: tag declarations, identities, and value carriers.

Architecture Note:
    core/ holds the building blocks with no container state of their own.
    The container itself lives in storage/.
"""

from typemap.core.association import (
    Assoc,
    AssociationError,
    AssociationMeta,
    AssociationRegistry,
    get_registry,
    key_identity,
    resolve_tag,
)
from typemap.core.carrier import Carrier, RuntimeType, runtime_type
from typemap.core.identity import KeyIdentity
from typemap.core.types import Borrow

__all__ = [
    # Types
    "Borrow",
    # Identity
    "KeyIdentity",
    # Association
    "Assoc",
    "AssociationError",
    "AssociationMeta",
    "AssociationRegistry",
    "get_registry",
    "key_identity",
    "resolve_tag",
    # Carrier
    "Carrier",
    "RuntimeType",
    "runtime_type",
]
