# tests/unit/core/test_table.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from types import SimpleNamespace

import pytest

from typestamp import MISSING, TypeRegistry, TypeTable, get_default_registry
from typestamp.core.table import lookup_member, read_member


def test_requires_name():
    with pytest.raises(ValueError):
        TypeTable("")
    with pytest.raises(ValueError):
        TypeTable(None)


def test_identity_equality():
    first = TypeTable("Same", {"x": 1})
    second = TypeTable("Same", {"x": 1})

    assert first == first
    assert first != second
    assert len({first, second}) == 2


def test_members_and_mapping_protocol():
    point = TypeTable("Point", {"dims": 2})
    point["origin"] = (0, 0)

    assert point["dims"] == 2
    assert "origin" in point
    assert sorted(point) == ["dims", "origin"]
    assert len(point) == 2

    del point["origin"]
    assert "origin" not in point
    with pytest.raises(KeyError):
        point["origin"]


def test_method_decorator_forms():
    shape = TypeTable("Shape")

    @shape.method
    def area(self):
        return 0

    @shape.method(name="perimeter")
    def _perimeter(self):
        return 0

    assert shape["area"] is area
    assert shape["perimeter"] is _perimeter


def test_attribute_access_to_members():
    maker = TypeTable("Maker")
    maker["new"] = lambda n: n * 2

    assert maker.new(21) == 42
    assert maker.name == "Maker"
    with pytest.raises(AttributeError):
        maker.missing_member
    with pytest.raises(AttributeError):
        maker._private


def test_base_registers_edge_and_inherits_members():
    animal = TypeTable("Animal", {"legs": 4})
    dog = TypeTable("Dog", {"sound": "woof"}, base=animal)

    assert get_default_registry().parent_of(dog) is animal
    assert dog.base is animal
    assert dog["legs"] == 4
    assert dog.lookup("sound") == "woof"
    # Own members only
    assert list(dog) == ["sound"]


def test_override_shadows_base_member():
    animal = TypeTable("Animal", {"sound": "..."})
    cat = TypeTable("Cat", {"sound": "meow"}, base=animal)

    assert cat["sound"] == "meow"
    assert animal["sound"] == "..."


def test_explicit_registry():
    registry = TypeRegistry()
    animal = TypeTable("Animal")
    dog = TypeTable("Dog", base=animal, registry=registry)

    assert registry.parent_of(dog) is animal
    assert get_default_registry().parent_of(dog) is None


def test_base_may_be_plain_mapping():
    base = {"greeting": "hi"}
    derived = TypeTable("Derived", base=base)

    assert derived["greeting"] == "hi"


def test_repr():
    assert repr(TypeTable("Point")) == "TypeTable('Point')"


class TestLookupMember:
    def test_type_table(self):
        table = TypeTable("T", {"x": 1})
        assert lookup_member(table, "x") == 1
        assert lookup_member(table, "y") is MISSING

    def test_plain_dict(self):
        assert lookup_member({"x": None}, "x") is None
        assert lookup_member({}, "x") is MISSING

    def test_namespace_and_class(self):
        class Kind:
            label = "kind"

        assert lookup_member(Kind, "label") == "kind"
        assert lookup_member(SimpleNamespace(label="ns"), "label") == "ns"
        assert lookup_member(SimpleNamespace(), "label") is MISSING

    def test_non_string_key_on_object(self):
        assert lookup_member(SimpleNamespace(), 3) is MISSING

    def test_falsy_members_are_present(self):
        assert lookup_member({"flag": False}, "flag") is False
        assert lookup_member(TypeTable("T", {"zero": 0}), "zero") == 0


class TestParentFollowsRegistry:
    def test_base_tracks_reparenting(self):
        first = TypeTable("First", {"who": "first", "only_first": 1})
        second = TypeTable("Second", {"who": "second"})
        child = TypeTable("Child", base=first)

        get_default_registry().extends(child, second)

        assert child.base is second
        assert child["who"] == "second"
        assert "only_first" not in child

    def test_explicit_registry_drives_lookup(self):
        registry = TypeRegistry()
        animal = TypeTable("Animal", {"legs": 4})
        dog = TypeTable("Dog", base=animal, registry=registry)

        assert dog["legs"] == 4
        registry.clear()
        assert dog.base is None
        assert dog.lookup("legs") is MISSING

    def test_table_without_base_has_no_parent(self):
        assert TypeTable("Root").base is None


class TestReadMember:
    def test_methods_bind_and_other_functions_do_not(self):
        shape = TypeTable("Shape")

        @shape.method
        def area(self):
            return self * 2

        @shape.static(name="make")
        def _make(size):
            return size

        shape["helper"] = len

        assert read_member(shape, "area", 21)() == 42
        assert read_member(shape, "make", 21) is _make
        assert read_member(shape, "helper", 21) is len
        assert read_member(shape, "absent", 21) is MISSING

    def test_reassigning_a_method_makes_it_plain(self):
        shape = TypeTable("Shape")

        @shape.method
        def area(self):
            return 0

        shape["area"] = area
        assert read_member(shape, "area", object()) is area

    def test_inherited_methods_bind_to_instance(self):
        animal = TypeTable("Animal")
        dog = TypeTable("Dog", base=animal)

        @animal.method
        def ident(self):
            return self

        marker = object()
        assert read_member(dog, "ident", marker)() is marker

    def test_class_members(self):
        class Kind:
            label = "kind"

            def echo(self):
                return self

            @staticmethod
            def build():
                return "built"

        marker = object()
        assert read_member(Kind, "echo", marker)() is marker
        assert read_member(Kind, "build", marker) is Kind.build
        assert read_member(Kind, "label", marker) == "kind"
        assert read_member(Kind, "absent", marker) is MISSING

    def test_mapping_members_returned_as_stored(self):
        greet = lambda self: "hi"  # noqa: E731
        assert read_member({"greet": greet}, "greet", object()) is greet
