"""Key identity models.

Usage:
    ident = key_identity(RequestId)
    assert ident == key_identity(RequestId())
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class KeyIdentity:
    """Process-stable lookup token for a tag class.

    Only ``key_type_id`` takes part in equality and hashing; ``type_name``
    is carried for diagnostics.
    """

    key_type_id: int
    type_name: str = field(default="", compare=False)

    def __hash__(self) -> int:
        return hash(self.key_type_id)

    def __repr__(self) -> str:
        return f"KeyIdentity({self.key_type_id}, {self.type_name!r})"
