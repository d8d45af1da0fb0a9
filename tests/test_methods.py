"""
Tests for method-set resolution.
"""

from implementor.codegen.java.methods import MethodKey, MethodSetResolver, are_equivalent


class TestMethodSetResolver:
    """Test suite for collecting and de-duplicating overridable methods."""

    def setup_method(self):
        self.resolver = MethodSetResolver()

    def _signatures(self, methods):
        return [(m.name, tuple(t.name for t in m.parameter_types)) for m in methods]

    def test_no_two_methods_are_equivalent(self, catalog):
        for name in ["com.example.Shape", "com.example.Overloads", "com.example.Child"]:
            methods = self.resolver.resolve(catalog.get(name))
            for i, first in enumerate(methods):
                for second in methods[i + 1:]:
                    assert MethodKey.of(first) != MethodKey.of(second)
                    assert not are_equivalent(first, second)

    def test_assignable_parameters_are_merged(self, catalog):
        methods = self.resolver.resolve(catalog.get("com.example.Overloads"))
        assert self._signatures(methods) == [
            ("process", ("java.lang.Object",)),
            ("count", ("int",)),
            ("count", ("long",)),
        ]

    def test_approximate_merges_are_reported(self, catalog):
        merges = self.resolver.approximate_merges(catalog.get("com.example.Overloads"))
        assert len(merges) == 1
        kept, dropped = merges[0]
        assert kept.parameter_types[0].name == "java.lang.Object"
        assert dropped.parameter_types[0].name == "java.lang.String"

    def test_declared_method_wins_over_inherited(self, catalog):
        methods = self.resolver.resolve(catalog.get("com.example.Child"))
        name_methods = [m for m in methods if m.name == "name"]
        assert len(name_methods) == 1
        assert name_methods[0].declaring_type == "com.example.Child"

    def test_final_and_native_methods_are_dropped(self, catalog):
        names = [m.name for m in self.resolver.resolve(catalog.get("com.example.Shape"))]
        assert names == ["area", "size", "equals", "toString"]

    def test_non_public_declared_methods_are_kept(self, catalog):
        methods = self.resolver.resolve(catalog.get("com.example.Shape"))
        size = next(m for m in methods if m.name == "size")
        assert not size.is_public

    def test_order_is_stable(self, catalog):
        target = catalog.get("com.example.Shape")
        first = self._signatures(self.resolver.resolve(target))
        second = self._signatures(self.resolver.resolve(target))
        assert first == second

    def test_interface_target_has_no_object_methods(self, catalog):
        names = [m.name for m in self.resolver.resolve(catalog.get("com.example.Greeter"))]
        assert names == ["greet"]


class TestMethodKey:
    """Test suite for method identity."""

    def test_key_fields(self, catalog):
        method = catalog.get("com.example.Greeter").declared_methods()[0]
        key = MethodKey.of(method)
        assert key == MethodKey("greet", 1, ("java.lang.String",))
        assert key.slot == ("greet", 1)

    def test_different_arity_is_not_equivalent(self, catalog):
        methods = catalog.get("java.lang.Object").declared_methods()
        waits = [m for m in methods if m.name == "wait"]
        assert not are_equivalent(waits[0], waits[1])
