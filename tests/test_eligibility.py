"""
Tests for target eligibility.
"""

import pytest

from implementor.codegen.core.generator import ErrorKind, GenerationError
from implementor.codegen.java.eligibility import check_eligibility, ineligibility_reason


class TestEligibility:
    """Test suite for rejecting types that cannot be subtyped."""

    @pytest.mark.parametrize(
        "type_name, reason",
        [
            ("com.example.Sealed", "final"),
            ("com.example.Color", "final"),
            ("int", "primitive"),
            ("com.example.Greeter[]", "array"),
            ("com.example.Local", "local"),
            ("com.example.Anon", "anonymous"),
            ("com.example.Outer.Inner", "member"),
            ("com.example.Empty", "no constructors"),
            ("java.lang.Enum", "java.lang.Enum"),
        ],
    )
    def test_rejected(self, catalog, type_name, reason):
        target = catalog.get(type_name)
        with pytest.raises(GenerationError) as exc_info:
            check_eligibility(target)
        assert exc_info.value.kind == ErrorKind.UNSUPPORTED
        assert reason in exc_info.value.message

    @pytest.mark.parametrize(
        "type_name",
        ["com.example.Greeter", "com.example.Task", "com.example.Shape", "com.example.Hidden", "Plain"],
    )
    def test_accepted(self, catalog, type_name):
        assert ineligibility_reason(catalog.get(type_name)) is None
        check_eligibility(catalog.get(type_name))
