"""Value carriers: owned slots that keep enough type information to downcast.

Usage:
    carrier = Carrier([1, 2, 3])
    carrier.downcast(runtime_type(list[int]))  # [1, 2, 3]
    carrier.downcast(str)                      # None
"""

from __future__ import annotations

from types import NoneType, UnionType
from typing import (
    Annotated,
    Any,
    Literal,
    NewType,
    ParamSpec,
    TypeAliasType,
    TypeVar,
    TypeVarTuple,
    Union,
    get_args,
    get_origin,
    is_typeddict,
)

type RuntimeType = type | tuple[type, ...]


def runtime_type(annotation: Any) -> RuntimeType:
    """Resolve a value annotation into something ``isinstance`` accepts.

    Parameterized generics collapse to their origin, unions to a tuple of
    their members, TypedDicts to ``dict`` and NewTypes to their supertype.
    Anything that cannot be checked at runtime (``Any``, type variables,
    literals, non-runtime protocols) resolves to ``object``.

    Args:
        annotation: Value type as written in ``Assoc[...]``.

    Returns:
        A class or tuple of classes usable as the second argument of isinstance.
    """
    if annotation is None or annotation is NoneType:
        return NoneType
    if annotation is Any or isinstance(annotation, (TypeVar, ParamSpec, TypeVarTuple)):
        return object
    if isinstance(annotation, TypeAliasType):
        return runtime_type(annotation.__value__)
    if isinstance(annotation, NewType):
        return runtime_type(annotation.__supertype__)
    if is_typeddict(annotation):
        return dict

    origin = get_origin(annotation)
    if origin is Annotated:
        return runtime_type(get_args(annotation)[0])
    if origin is Literal:
        return object
    if origin is Union or origin is UnionType:
        members: list[type] = []
        for arg in get_args(annotation):
            resolved = runtime_type(arg)
            if resolved is object:
                return object
            members.extend(resolved if isinstance(resolved, tuple) else (resolved,))
        return tuple(dict.fromkeys(members))
    if origin is not None:
        annotation = origin

    if not isinstance(annotation, type):
        return object
    # Plain protocols and other special classes reject isinstance checks
    try:
        isinstance(None, annotation)
    except TypeError:
        return object
    return annotation


class Carrier[T]:
    """Owns one stored value and checks downcasts against it."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def unwrap(self) -> T:
        """Return the carried value itself (no copy)."""
        return self._value

    @property
    def value_type(self) -> type[T]:
        """Return the dynamic type of the carried value."""
        return type(self._value)

    def holds(self, expected: RuntimeType) -> bool:
        """Check whether the carried value is an instance of ``expected``.

        A target that rejects instance checks never matches.
        """
        try:
            return isinstance(self._value, expected)
        except TypeError:
            return False

    def downcast(self, expected: RuntimeType) -> T | None:
        """Return the value if it matches ``expected``, None otherwise."""
        if self.holds(expected):
            return self._value
        return None

    def __repr__(self) -> str:
        return f"Carrier[{self.value_type.__name__}]"
