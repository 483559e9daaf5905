"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass

from typemap import Assoc, TypeMap, TypeMapSettings


@dataclass
class FixtureValue:
    label: str = "value"


class FixtureKey(Assoc[FixtureValue]):
    pass


@pytest.fixture
def settings():
    """Default settings, independent of TYPEMAP_* in the environment."""
    return TypeMapSettings(validate_inserts=True, warn_on_mismatch=True)


@pytest.fixture
def typemap(settings):
    """Fresh, empty TypeMap."""
    return TypeMap(settings=settings)


@pytest.fixture
def lenient_typemap():
    """TypeMap that stores mistyped values and reports them as absent."""
    return TypeMap(settings=TypeMapSettings(validate_inserts=False, warn_on_mismatch=True))


@pytest.fixture
def key_cls():
    return FixtureKey


@pytest.fixture
def value_cls():
    return FixtureValue
