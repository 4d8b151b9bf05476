# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from typestamp import Record, TypeRegistry, TypeTable, set_default_registry, stamp


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture(autouse=True)
def fresh_default_registry():
    """Give every test its own default registry and restore the old one afterwards."""
    registry = TypeRegistry()
    previous = set_default_registry(registry)
    yield registry
    set_default_registry(previous)


@pytest.fixture
def registry():
    """A standalone registry with cycle detection on."""
    return TypeRegistry()


@pytest.fixture
def animal():
    """A root type with one method."""
    animal = TypeTable("Animal")

    @animal.method
    def speak(self):
        return f"{self.name} makes a sound"

    return animal


@pytest.fixture
def dog(animal):
    """A type extending Animal in the default registry."""
    dog = TypeTable("Dog", base=animal)

    @dog.method
    def fetch(self):
        return f"{self.name} fetches"

    return dog


@pytest.fixture
def base_type():
    """
    The 'Base' type from the addition scenario: Base.new(n) builds a record
    with field n whose '+' yields Base.new(lhs.n + rhs.n).
    """
    base = TypeTable("Base")

    def add(lhs, rhs, base_add):
        return base["new"](lhs.n + rhs.n)

    def new(n):
        return stamp(Record(n=n), base, {"add": add})

    base["new"] = new
    return base


@pytest.fixture
def recording_getter():
    """A getter mock that resolves every key to 'computed:<key>'."""
    return MagicMock(side_effect=lambda obj, key, base_get: f"computed:{key}")

