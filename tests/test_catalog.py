"""
Tests for the descriptor catalog and the JavaType queries it links up.
"""

import pytest

from implementor.codegen.core.catalog import DescriptorError, TypeCatalog, TypeNotFoundError
from implementor.codegen.core.types import Modifier, Nesting, TypeKind


class TestTypeCatalog:
    """Test suite for loading and looking up type descriptors."""

    def test_builtins_are_present(self):
        catalog = TypeCatalog()
        assert catalog.get("java.lang.Object").superclass is None
        assert catalog.get("java.lang.Enum").superclass.name == "java.lang.Object"
        assert catalog.get("int").is_primitive

    def test_unknown_type_raises(self, catalog):
        with pytest.raises(TypeNotFoundError) as exc_info:
            catalog.get("com.example.Nope")
        assert exc_info.value.type_name == "com.example.Nope"

    def test_referenced_type_is_opaque(self, catalog):
        assert "java.lang.String" not in catalog
        with pytest.raises(TypeNotFoundError):
            catalog.get("java.lang.String")
        string = catalog.resolve("java.lang.String")
        assert string.superclass.name == "java.lang.Object"
        assert string.modifiers == Modifier.PUBLIC

    def test_array_lookup(self, catalog):
        array = catalog.get("com.example.Greeter[]")
        assert array.is_array
        assert array.component.name == "com.example.Greeter"

    def test_package_is_derived(self, catalog):
        assert catalog.get("com.example.Greeter").package_name == "com.example"
        assert catalog.get("Plain").package_name == ""

    def test_member_type_package_comes_from_enclosing_type(self, catalog):
        inner = catalog.get("com.example.Outer.Inner")
        assert inner.package_name == "com.example"
        assert inner.simple_name == "Inner"
        assert inner.nesting == Nesting.MEMBER

    def test_interface_methods_are_public_abstract(self, catalog):
        method = catalog.get("com.example.Greeter").declared_methods()[0]
        assert method.modifiers & Modifier.PUBLIC
        assert method.modifiers & Modifier.ABSTRACT

    def test_enum_defaults(self, catalog):
        color = catalog.get("com.example.Color")
        assert color.kind == TypeKind.ENUM
        assert color.is_final
        assert color.superclass.name == "java.lang.Enum"

    def test_reload_updates_existing_type(self, catalog):
        task = catalog.get("com.example.Task")
        catalog.load([{"name": "com.example.Task", "modifiers": ["public", "final"]}])
        assert catalog.get("com.example.Task") is task
        assert task.is_final

    def test_described_names(self, catalog):
        names = catalog.names()
        assert "com.example.Greeter" in names
        assert "java.lang.String" not in names

    @pytest.mark.parametrize(
        "document",
        [
            {"nothing": []},
            {"types": {"name": "x"}},
            [{"kind": "class"}],
            [{"name": "int"}],
            [{"name": "a.B", "kind": "struct"}],
            [{"name": "a.B", "modifiers": ["publik"]}],
            [{"name": "a.B", "fields": [{"name": "x"}]}],
        ],
    )
    def test_malformed_documents_raise(self, document):
        with pytest.raises(DescriptorError):
            TypeCatalog().load(document)


class TestJavaTypeQueries:
    """Test suite for inheritance and assignability queries."""

    def test_reference_assignability(self, catalog):
        obj = catalog.get("java.lang.Object")
        string = catalog.resolve("java.lang.String")
        assert obj.is_assignable_from(string)
        assert not string.is_assignable_from(obj)

    def test_subclass_assignability(self, catalog):
        base = catalog.get("com.example.Base")
        child = catalog.get("com.example.Child")
        assert base.is_assignable_from(child)
        assert not child.is_assignable_from(base)

    def test_primitives_are_only_assignable_to_themselves(self, catalog):
        assert catalog.get("int").is_assignable_from(catalog.get("int"))
        assert not catalog.get("long").is_assignable_from(catalog.get("int"))
        assert not catalog.get("java.lang.Object").is_assignable_from(catalog.get("int"))

    def test_array_assignability(self, catalog):
        cloneable = catalog.resolve("java.lang.Cloneable", TypeKind.INTERFACE)
        assert cloneable.is_assignable_from(catalog.get("int[]"))
        assert catalog.get("java.lang.Object").is_assignable_from(catalog.get("int[]"))
        assert not catalog.get("long[]").is_assignable_from(catalog.get("int[]"))

    def test_public_methods_include_inherited(self, catalog):
        names = [m.name for m in catalog.get("com.example.Task").public_methods()]
        assert names[0] == "run"
        assert "toString" in names
        assert "clone" not in names

    def test_public_fields_skip_private(self, catalog):
        names = [f.name for f in catalog.get("com.example.Shape").public_fields()]
        assert names == ["SIDES", "label"]

    def test_public_constructors(self, catalog):
        shape = catalog.get("com.example.Shape")
        assert len(shape.declared_constructors()) == 2
        assert len(shape.public_constructors()) == 1
