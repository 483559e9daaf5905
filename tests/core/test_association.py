"""Tests for tag declaration and the association registry.

Critical Invariants:
- Same tag class always resolves to the same key identity
- Distinct tag classes never share a key identity
- A tag is bound to exactly one value type
"""

import pytest

from typemap import (
    Assoc,
    AssociationError,
    AssociationRegistry,
    KeyIdentity,
    get_registry,
    key_identity,
)
from typemap.core.association import resolve_tag


class RequestId(Assoc[str]):
    pass


class Attempts(Assoc[int]):
    pass


class Retries(Assoc[int]):
    pass


@pytest.fixture
def registry():
    """Create an AssociationRegistry for testing."""
    return AssociationRegistry()


# Identity tests


def test_same_tag_produces_same_identity():
    """CRITICAL: Every reference to a tag class yields the same key identity.

    Why: Layers that never coordinate must still find each other's entries.
    """
    assert key_identity(RequestId) == key_identity(RequestId)
    assert hash(key_identity(RequestId)) == hash(key_identity(RequestId))


def test_tag_instances_share_class_identity():
    """The tag's value is ignored; only its class matters."""
    assert key_identity(RequestId()) == key_identity(RequestId)
    assert key_identity(RequestId()) == key_identity(RequestId())


def test_distinct_tags_get_distinct_identities():
    """Tags with the same value type are still different keys."""
    assert key_identity(Attempts) != key_identity(Retries)
    assert key_identity(Attempts) != key_identity(RequestId)


def test_same_qualified_name_does_not_collide():
    """Identity is not derived from the class name.

    Why: A factory that defines a tag class twice produces two different classes.
    """

    def make_tag():
        class Local(Assoc[int]):
            pass

        return Local

    first, second = make_tag(), make_tag()

    assert first.__qualname__ == second.__qualname__
    assert key_identity(first) != key_identity(second)


def test_identity_stable_across_registry_instances(registry):
    """Registries index the token stored on the class; they do not mint their own."""
    meta = registry.register(RequestId, str)

    assert meta.key == key_identity(RequestId)
    assert registry.get_tag(meta.key.key_type_id) is RequestId


def test_identity_carries_type_name():
    ident = key_identity(RequestId)
    assert ident.type_name.endswith("RequestId")
    assert ident.type_name in repr(ident)


# Declaration tests


def test_declaration_registers_value_type():
    meta = resolve_tag(Attempts)

    assert meta.value_type is int
    assert meta.runtime_type is int
    assert Attempts.__assoc_meta__ is meta
    assert get_registry().is_registered(Attempts)


def test_generic_value_type_is_kept_as_written():
    class Scores(Assoc[list[int]]):
        pass

    meta = resolve_tag(Scores)

    assert meta.value_type == list[int]
    assert meta.runtime_type is list
    assert meta.value_type_name == "list[int]"


def test_subclass_is_distinct_tag_with_inherited_value_type():
    class RetryAttempts(Attempts):
        pass

    meta = resolve_tag(RetryAttempts)

    assert meta.value_type is int
    assert meta.key != key_identity(Attempts)


def test_conflicting_value_types_rejected_at_declaration():
    """CRITICAL: A tag may store exactly one value type.

    Why: Otherwise one site could insert V1 and another read V2 under the same key.
    """
    with pytest.raises(AssociationError, match="conflicting value types"):

        class Bad(Attempts, Assoc[str]):
            pass


def test_two_tag_parents_with_different_value_types_rejected():
    with pytest.raises(AssociationError, match="conflicting"):

        class Mixed(Attempts, RequestId):
            pass


def test_two_tag_parents_with_same_value_type_allowed():
    class Both(Attempts, Retries):
        pass

    assert resolve_tag(Both).value_type is int


def test_bare_subclass_is_not_a_tag():
    class Base(Assoc):
        pass

    assert not get_registry().is_registered(Base)
    with pytest.raises(AssociationError, match="not a tag"):
        key_identity(Base)


def test_tag_derived_from_bare_base():
    class Base(Assoc):
        pass

    class Concrete(Base, Assoc[float]):
        pass

    assert resolve_tag(Concrete).value_type is float


@pytest.mark.parametrize("not_a_tag", [Assoc, str, "RequestId", 42, object()])
def test_non_tags_rejected(not_a_tag):
    with pytest.raises(AssociationError):
        resolve_tag(not_a_tag)


def test_association_error_is_type_error():
    assert issubclass(AssociationError, TypeError)


# Registry tests


def test_register_is_idempotent(registry):
    meta1 = registry.register(RequestId, str)
    meta2 = registry.register(RequestId, str)

    assert meta1 is meta2


def test_reregister_with_other_value_type_warns_and_keeps_first(registry):
    registry.register(RequestId, str)

    with pytest.warns(RuntimeWarning, match="already associated"):
        meta = registry.register(RequestId, int)

    assert meta.value_type is str


def test_registry_lookups(registry):
    assert registry.get_meta(Retries) is None
    assert not registry.is_registered(Retries)

    meta = registry.register(Retries, int)

    assert registry.get_meta(Retries) is meta
    assert registry.is_registered(Retries)
    assert registry.get_tag(meta.key.key_type_id) is Retries
    assert registry.get_tag(-1) is None


def test_identity_collision_raises(registry):
    class First:
        pass

    class Second:
        pass

    meta = registry.register(First, int)
    Second.__key_identity__ = meta.key  # type: ignore[attr-defined]

    with pytest.raises(RuntimeError, match="collision"):
        registry.register(Second, int)


def test_key_identity_equality_ignores_name():
    """Only the issued number identifies a key; the name is diagnostic."""
    assert KeyIdentity(7, "a.Tag") == KeyIdentity(7, "b.Tag")
    assert hash(KeyIdentity(7, "a.Tag")) == hash(KeyIdentity(7, "b.Tag"))
    assert KeyIdentity(7, "a.Tag") != KeyIdentity(8, "a.Tag")


# Generic tag bases


class Setting[T](Assoc[T]):
    pass


class Port(Setting[int]):
    pass


class Listing[T](Assoc[list[T]]):
    pass


def test_generic_base_is_not_a_tag():
    """A base whose value type is still a type parameter cannot store anything."""
    assert not get_registry().is_registered(Setting)
    with pytest.raises(AssociationError, match="not a tag"):
        key_identity(Setting)


def test_parameterized_generic_base_binds_value_type():
    """CRITICAL: `Port(Setting[int])` stores int, not the unbound parameter.

    Why: An unbound parameter resolves to object and would accept any value.
    """
    meta = resolve_tag(Port)

    assert meta.value_type is int
    assert meta.runtime_type is int


def test_parameter_substituted_inside_generic_value_type():
    class Ids(Listing[int]):
        pass

    meta = resolve_tag(Ids)

    assert meta.value_type == list[int]
    assert meta.runtime_type is list


def test_generic_base_chain_stays_generic_until_bound():
    class Named[U](Setting[U]):
        pass

    class Host(Named[str]):
        pass

    assert not get_registry().is_registered(Named)
    assert resolve_tag(Host).value_type is str


def test_subclass_of_bound_generic_tag_inherits_value_type():
    class AdminPort(Port):
        pass

    assert resolve_tag(AdminPort).value_type is int
    assert key_identity(AdminPort) != key_identity(Port)


def test_generic_value_class_is_a_complete_value_type():
    class Box[T]:
        pass

    class BoxKey(Assoc[Box]):
        pass

    assert resolve_tag(BoxKey).runtime_type is Box


def test_bound_generic_conflicting_with_direct_declaration():
    with pytest.raises(AssociationError, match="conflicting"):

        class Confused(Setting[int], Assoc[str]):
            pass
