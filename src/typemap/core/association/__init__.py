"""Association functionality: tag declaration, registry, and identity lookup."""

from typemap.core.association.core import (
    Assoc,
    AssociationRegistry,
    get_registry,
    key_identity,
    resolve_tag,
)
from typemap.core.association.models import AssociationError, AssociationMeta

__all__ = [
    # Models
    "AssociationMeta",
    "AssociationError",
    # Core
    "Assoc",
    "AssociationRegistry",
    "get_registry",
    "key_identity",
    "resolve_tag",
]
