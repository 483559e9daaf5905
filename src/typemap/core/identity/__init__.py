"""Key identity functionality: lightweight tokens derived from tag classes."""

from typemap.core.identity.models import KeyIdentity

__all__ = [
    "KeyIdentity",
]
