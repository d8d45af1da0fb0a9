"""
Tests for rendering Java implementation units.
"""

import json

import pytest

from implementor.codegen import generate_from_catalog, quick_generate
from implementor.codegen.core.catalog import TypeNotFoundError
from implementor.codegen.core.config import GeneratorConfig
from implementor.codegen.core.generator import ErrorKind, GenerationError, generate_code
from implementor.codegen.java.generator import JavaImplGenerator, create_java_generator

GREETER_IMPL = """\
package com.example;

public class GreeterImpl implements Greeter {

    public java.lang.String greet(java.lang.String arg0) {
        return null;
    }
}
"""

TASK_IMPL = """\
package com.example;

public class TaskImpl extends Task {

    protected TaskImpl() {
        super();
    }

    public void run() {
        return;
    }

    public boolean equals(java.lang.Object arg0) {
        return false;
    }

    public java.lang.String toString() {
        return null;
    }
}
"""


class TestJavaImplGenerator:
    """Test suite for complete generated units."""

    def test_interface_unit(self, catalog, generator):
        assert generator.generate(catalog.get("com.example.Greeter")) == GREETER_IMPL

    def test_comparable_shaped_interface(self, catalog, generator):
        code = generator.generate(catalog.get("com.example.Ordered"))
        assert "public class OrderedImpl implements Ordered {" in code
        assert code.count("compareTo(") == 1
        assert "public int compareTo(java.lang.Object arg0) {\n        return 0;\n    }" in code

    def test_abstract_class_unit(self, catalog, generator):
        assert generator.generate(catalog.get("com.example.Task")) == TASK_IMPL

    def test_fields_constructors_and_methods(self, catalog, generator):
        code = generator.generate(catalog.get("com.example.Shape"))
        assert "public class ShapeImpl extends Shape {" in code
        assert "    public static final int field0 = 0;\n" in code
        assert "    public java.lang.String field1;\n" in code
        assert (
            "    public ShapeImpl(int arg0, java.lang.String arg1) throws java.io.IOException {\n"
            "        super(arg0, arg1);\n"
            "    }\n"
        ) in code
        assert "public double area() {\n        return 0.0d;" in code
        assert "protected long size() {\n        return 0L;" in code
        assert "describe" not in code
        assert "nativeOp" not in code
        assert "abstract" not in code

    def test_non_ascii_names_are_escaped(self, catalog, generator):
        code = generator.generate(catalog.get("com.example.Café"))
        assert "é" not in code
        assert "public class Caf\\u00e9Impl implements Caf\\u00e9 {" in code
        assert "public Caf\\u00e9 prix() {" in code

    def test_default_package_has_no_package_line(self, catalog, generator):
        code = generator.generate(catalog.get("Plain"))
        assert code.startswith("public class PlainImpl implements Plain {")
        assert "return false;" in code

    def test_nested_units(self, catalog, generator):
        code = generator.generate(catalog.get("com.example.Outer"))
        assert "public class OuterImpl extends Outer {" in code
        assert "    public static class InnerImpl extends Inner {" in code
        assert "        public int value() {\n            return 0;\n        }" in code
        assert "Locked" not in code

    def test_rendered_unit_names(self, catalog, generator):
        unit = generator.render_unit(generator.plan(catalog.get("com.example.Outer")))
        assert unit.unit_names() == ["OuterImpl", "OuterImpl$InnerImpl"]

    def test_ineligible_target_raises(self, catalog, generator):
        with pytest.raises(GenerationError) as exc_info:
            generator.generate(catalog.get("com.example.Sealed"))
        assert exc_info.value.kind == ErrorKind.UNSUPPORTED

    def test_private_constructors_raise(self, catalog, generator):
        with pytest.raises(GenerationError) as exc_info:
            generator.generate(catalog.get("com.example.Hidden"))
        assert exc_info.value.kind == ErrorKind.NO_CONSTRUCTOR

    def test_indent_size(self, catalog):
        generator = JavaImplGenerator(GeneratorConfig(indent_size=2))
        code = generator.generate(catalog.get("com.example.Greeter"))
        assert "\n  public java.lang.String greet(java.lang.String arg0) {\n    return null;\n  }\n" in code

    def test_comment(self, catalog):
        generator = JavaImplGenerator(GeneratorConfig(add_comments=True))
        code = generator.generate(catalog.get("com.example.Greeter"))
        assert "// Generated stub implementation of com.example.Greeter\npublic class" in code

    def test_merge_warnings(self, catalog, generator):
        warnings = generator.collect_warnings(catalog.get("com.example.Overloads"))
        assert len(warnings) == 1
        assert "treated as the same override" in warnings[0]

    def test_create_java_generator(self, catalog):
        generator = create_java_generator({"unit_suffix": "Stub"})
        assert generator.unit_name(catalog.get("com.example.Task")) == "TaskStub"
        assert generator.file_extension == ".java"


class TestGenerateCode:
    """Test suite for result-value generation."""

    def test_success(self, catalog, generator):
        result = generate_code(generator, catalog.get("com.example.Greeter"))
        assert result.success
        assert result.code == GREETER_IMPL
        assert result.metadata["unit_name"] == "GreeterImpl"
        assert result.metadata["package"] == "com.example"
        assert result.warnings == []

    def test_failure(self, catalog, generator):
        result = generate_code(generator, catalog.get("com.example.Sealed"))
        assert not result.success
        assert result.error_message.startswith("Code generation failed")
        assert result.exception.kind == ErrorKind.UNSUPPORTED


class TestConvenienceFunctions:
    """Test suite for the package-level generation helpers."""

    def test_generate_from_catalog(self, catalog):
        result = generate_from_catalog(catalog, "com.example.Greeter")
        assert result.success
        assert result.code == GREETER_IMPL

    def test_quick_generate_from_document(self, sample_document):
        assert quick_generate(sample_document, "com.example.Task") == TASK_IMPL

    def test_quick_generate_from_json_string(self, sample_document):
        document = json.dumps(sample_document)
        code = quick_generate(document, "com.example.Task", unit_suffix="Stub")
        assert "public class TaskStub extends Task {" in code
        assert "protected TaskStub() {" in code

    def test_quick_generate_failure(self, sample_document):
        with pytest.raises(RuntimeError, match="Code generation failed"):
            quick_generate(sample_document, "com.example.Sealed")

    def test_quick_generate_unknown_type(self, sample_document):
        with pytest.raises(TypeNotFoundError):
            quick_generate(sample_document, "com.example.Missing")
