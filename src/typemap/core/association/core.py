"""Association base class, registry, and key identity lookup.

Usage:
    class RequestId(Assoc[str]): ...

    class Attempts(Assoc[int]): ...

    key_identity(RequestId)    # same token ...
    key_identity(RequestId())  # ... for the class and any instance

    # Subclasses are distinct tags that keep the parent's value type:
    class RetryAttempts(Attempts): ...
"""

from __future__ import annotations

import itertools
import warnings
from typing import Any, ClassVar, TypeVar, get_args, get_origin

from typemap.core.association.models import AssociationError, AssociationMeta, describe_type
from typemap.core.carrier import runtime_type
from typemap.core.identity import KeyIdentity

_key_type_ids = itertools.count(1)


def _key_identity_for(cls: type) -> KeyIdentity:
    """Issue (once) and return the identity token stored on a tag class.

    Tokens come from a process-wide counter and live in the class's own
    namespace, so every registry and every reference to the class agree on
    them. Class names are kept for diagnostics only: two classes sharing a
    qualified name still get different tokens.

    Args:
        cls: Tag class.

    Returns:
        The class's KeyIdentity.
    """
    identity = cls.__dict__.get("__key_identity__")
    if identity is None:
        identity = KeyIdentity(
            key_type_id=next(_key_type_ids),
            type_name=f"{cls.__module__}.{cls.__qualname__}",
        )
        cls.__key_identity__ = identity  # type: ignore
    return identity


class AssociationRegistry:
    """Process-local registry mapping tag classes to their associations.

    Maintains bidirectional mapping between tag classes and key type IDs.
    """

    def __init__(self) -> None:
        """Initialize empty association registry."""
        self._by_tag: dict[type, AssociationMeta] = {}
        self._by_key_type_id: dict[int, type] = {}

    def register(self, cls: type, value_type: Any) -> AssociationMeta:
        """Register a tag class and return its association metadata.

        Registering the same class again is a no-op. If the second call names
        a different value type, a RuntimeWarning is emitted and the first
        declaration is kept.

        Args:
            cls: Tag class to register.
            value_type: The single value type the tag may store.

        Returns:
            Association metadata including the key identity.

        Raises:
            RuntimeError: If the key type ID is already bound to another class.
        """
        existing = self._by_tag.get(cls)
        if existing is not None:
            if existing.value_type != value_type:
                warnings.warn(
                    f"{cls.__qualname__} is already associated with "
                    f"{describe_type(existing.value_type)}; ignoring {describe_type(value_type)}.",
                    RuntimeWarning,
                    stacklevel=2,
                )
            return existing

        key = _key_identity_for(cls)
        if key.key_type_id in self._by_key_type_id:
            other = self._by_key_type_id[key.key_type_id]
            raise RuntimeError(
                f"Key identity collision: {cls} and {other} share {key.key_type_id}"
            )

        meta = AssociationMeta(
            key=key,
            value_type=value_type,
            runtime_type=runtime_type(value_type),
        )
        self._by_tag[cls] = meta
        self._by_key_type_id[key.key_type_id] = cls
        return meta

    def get_meta(self, cls: type) -> AssociationMeta | None:
        """Get metadata for a registered tag class.

        Args:
            cls: Tag class to look up.

        Returns:
            Association metadata if registered, None otherwise.
        """
        return self._by_tag.get(cls)

    def get_tag(self, key_type_id: int) -> type | None:
        """Get the tag class bound to a key type ID.

        Args:
            key_type_id: Key type ID to look up.

        Returns:
            Tag class if found, None otherwise.
        """
        return self._by_key_type_id.get(key_type_id)

    def is_registered(self, cls: type) -> bool:
        """Check if a class is registered as a tag.

        Args:
            cls: Class to check.

        Returns:
            True if class is a declared tag, False otherwise.
        """
        return cls in self._by_tag


# Module-level registry instance
_registry = AssociationRegistry()


def get_registry() -> AssociationRegistry:
    """Access the global association registry.

    Returns:
        The process-local AssociationRegistry instance.
    """
    return _registry


_MISSING: Any = object()


def _substitute(template: Any, mapping: dict[Any, Any]) -> Any:
    """Replace type parameters in a value annotation with concrete arguments."""
    if isinstance(template, TypeVar):
        return mapping.get(template, template)
    params = _free_params(template)
    if not params:
        return template
    return template[tuple(mapping.get(p, p) for p in params)]


def _free_params(value_type: Any) -> tuple[Any, ...]:
    """Type parameters still unbound in a value annotation."""
    if isinstance(value_type, TypeVar):
        return (value_type,)
    if isinstance(value_type, type):
        # A bare generic class such as `Box` is a complete value type
        return ()
    return tuple(getattr(value_type, "__parameters__", ()))


def _base_value_type(base: Any) -> Any:
    """Value type a (possibly parameterized) base contributes, or _MISSING."""
    origin = get_origin(base)
    if origin is Assoc:
        return get_args(base)[0]
    if origin is not None:
        template = getattr(origin, "__assoc_template__", _MISSING)
        if template is _MISSING:
            return _MISSING
        mapping = dict(zip(getattr(origin, "__parameters__", ()), get_args(base)))
        return _substitute(template, mapping)
    return getattr(base, "__assoc_template__", _MISSING)


class Assoc[V]:
    """Base class declaring that a tag class may store values of type ``V``.

    Subclass it once per piece of data:

        >>> class Locale(Assoc[str]): ...

    Generic bases are not tags themselves; their parameterized subclasses are:

        >>> class Setting[T](Assoc[T]): ...
        >>> class Port(Setting[int]): ...

    The tag carries no data. TypeMap operations accept either the class or an
    instance of it and only look at the class.
    """

    __slots__ = ()

    __assoc_meta__: ClassVar[AssociationMeta]
    __assoc_template__: ClassVar[Any]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        value_types: list[Any] = []
        for base in cls.__dict__.get("__orig_bases__", cls.__bases__):
            value_type = _base_value_type(base)
            if value_type is not _MISSING and value_type not in value_types:
                value_types.append(value_type)

        if not value_types:
            # Bare `class X(Assoc)` is an abstract base, not a tag
            return
        if len(value_types) > 1:
            names = ", ".join(describe_type(v) for v in value_types)
            raise AssociationError(
                f"Tag {cls.__qualname__} declares conflicting value types: {names}"
            )

        cls.__assoc_template__ = value_types[0]
        if _free_params(value_types[0]):
            # Generic base such as `class Setting[T](Assoc[T])`
            return
        cls.__assoc_meta__ = _registry.register(cls, value_types[0])


def resolve_tag(tag: Any) -> AssociationMeta:
    """Get the association metadata for a tag class or tag instance.

    Args:
        tag: A tag class declared as Assoc[V], or any instance of one.

    Returns:
        The tag's association metadata.

    Raises:
        AssociationError: If tag is not a declared tag class or instance.
    """
    cls = tag if isinstance(tag, type) else type(tag)
    meta = _registry.get_meta(cls)
    if meta is None:
        raise AssociationError(
            f"{cls.__qualname__} is not a tag. Declare it as `class {cls.__name__}(Assoc[V])`."
        )
    return meta


def key_identity(tag: Any) -> KeyIdentity:
    """Get the key identity for a tag class or tag instance.

    Args:
        tag: A tag class declared as Assoc[V], or any instance of one.

    Returns:
        The tag's KeyIdentity.

    Raises:
        AssociationError: If tag is not a declared tag class or instance.
    """
    return resolve_tag(tag).key
