"""Association models: declaration metadata and errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from typemap.core.carrier import RuntimeType
from typemap.core.identity import KeyIdentity


class AssociationError(TypeError):
    """Raised when a tag is misdeclared or used against its declaration."""

    pass


@dataclass(slots=True, frozen=True)
class AssociationMeta:
    """Metadata for a declared tag class."""

    key: KeyIdentity
    value_type: Any  # Annotation as written in Assoc[...]
    runtime_type: RuntimeType

    @property
    def type_name(self) -> str:
        """Fully qualified name of the tag class."""
        return self.key.type_name

    @property
    def value_type_name(self) -> str:
        """Readable name of the declared value type."""
        return describe_type(self.value_type)


def describe_type(value_type: Any) -> str:
    """Readable name for a value annotation."""
    if isinstance(value_type, type):
        return value_type.__qualname__
    return repr(value_type)
