"""
Shared fixtures: an in-memory descriptor catalog and fake compilers.
"""

import copy
import json
import logging
from pathlib import Path

import pytest

from implementor.codegen.core.catalog import TypeCatalog
from implementor.codegen.core.config import GeneratorConfig
from implementor.codegen.java.generator import JavaImplGenerator
from implementor.toolchain import Compiler

SAMPLE_TYPES = {
    "types": [
        {
            "name": "com.example.Greeter",
            "kind": "interface",
            "modifiers": ["public"],
            "methods": [
                {
                    "name": "greet",
                    "return_type": "java.lang.String",
                    "parameters": ["java.lang.String"],
                }
            ],
        },
        {
            "name": "com.example.Ordered",
            "kind": "interface",
            "modifiers": ["public"],
            "methods": [
                {"name": "compareTo", "return_type": "int", "parameters": ["java.lang.Object"]}
            ],
        },
        {
            "name": "com.example.Task",
            "modifiers": ["public", "abstract"],
            "constructors": [{"modifiers": ["protected"]}],
            "methods": [{"name": "run", "modifiers": ["public", "abstract"], "return_type": "void"}],
        },
        {
            "name": "com.example.Shape",
            "modifiers": ["public", "abstract"],
            "fields": [
                {"name": "SIDES", "type": "int", "modifiers": ["public", "static", "final"]},
                {"name": "label", "type": "java.lang.String", "modifiers": ["public"]},
                {"name": "hidden", "type": "int", "modifiers": ["private"]},
            ],
            "constructors": [
                {
                    "modifiers": ["public"],
                    "parameters": ["int", "java.lang.String"],
                    "exceptions": ["java.io.IOException"],
                },
                {"modifiers": ["private"]},
            ],
            "methods": [
                {"name": "area", "modifiers": ["public", "abstract"], "return_type": "double"},
                {"name": "describe", "modifiers": ["public", "final"], "return_type": "java.lang.String"},
                {"name": "nativeOp", "modifiers": ["public", "native"], "return_type": "void"},
                {"name": "size", "modifiers": ["protected"], "return_type": "long"},
            ],
        },
        {
            "name": "com.example.Sealed",
            "modifiers": ["public", "final"],
            "constructors": [{"modifiers": ["public"]}],
        },
        {
            "name": "com.example.Hidden",
            "modifiers": ["public"],
            "constructors": [{"modifiers": ["private"]}],
        },
        {"name": "com.example.Empty", "modifiers": ["public"]},
        {
            "name": "com.example.Outer",
            "modifiers": ["public"],
            "constructors": [{"modifiers": ["public"]}],
            "member_types": ["com.example.Outer.Inner", "com.example.Outer.Locked"],
        },
        {
            "name": "com.example.Outer.Inner",
            "nesting": "member",
            "modifiers": ["public", "static", "abstract"],
            "constructors": [{"modifiers": ["public"]}],
            "methods": [{"name": "value", "modifiers": ["public", "abstract"], "return_type": "int"}],
        },
        {
            "name": "com.example.Outer.Locked",
            "nesting": "member",
            "modifiers": ["public", "static", "final"],
            "constructors": [{"modifiers": ["public"]}],
        },
        {
            "name": "com.example.Local",
            "nesting": "local",
            "constructors": [{"modifiers": ["public"]}],
        },
        {
            "name": "com.example.Anon",
            "nesting": "anonymous",
            "constructors": [{"modifiers": []}],
        },
        {
            "name": "com.example.Overloads",
            "kind": "interface",
            "modifiers": ["public"],
            "methods": [
                {"name": "process", "parameters": ["java.lang.Object"]},
                {"name": "process", "parameters": ["java.lang.String"]},
                {"name": "count", "parameters": ["int"]},
                {"name": "count", "parameters": ["long"]},
            ],
        },
        {
            "name": "com.example.Base",
            "modifiers": ["public"],
            "constructors": [{"modifiers": ["public"]}],
            "methods": [{"name": "name", "modifiers": ["public"], "return_type": "java.lang.String"}],
        },
        {
            "name": "com.example.Child",
            "modifiers": ["public"],
            "superclass": "com.example.Base",
            "constructors": [{"modifiers": ["public"]}],
            "methods": [{"name": "name", "modifiers": ["public"], "return_type": "java.lang.String"}],
        },
        {"name": "com.example.Color", "kind": "enum", "modifiers": ["public"]},
        {
            "name": "com.example.Café",
            "kind": "interface",
            "modifiers": ["public"],
            "methods": [{"name": "prix", "return_type": "com.example.Café"}],
        },
        {
            "name": "com.other.Tagged",
            "modifiers": ["public"],
            "annotations": [
                "com.other.Marker",
                "java.lang.FunctionalInterface",
                {"type": "com.other.Level", "elements": {"value": 1}},
            ],
            "constructors": [{"modifiers": ["public"]}],
        },
        {
            "name": "Plain",
            "kind": "interface",
            "modifiers": ["public"],
            "methods": [{"name": "ok", "return_type": "boolean"}],
        },
    ]
}


class FakeCompiler(Compiler):
    """Writes placeholder class files next to each source, or fails."""

    def __init__(self, status=0, nested=(), produce=True):
        self.status = status
        self.nested = list(nested)
        self.produce = produce
        self.calls = []

    def compile(self, sources, working_dir=None):
        self.calls.append((list(sources), working_dir))
        if self.status == 0 and self.produce:
            for source in sources:
                source = Path(source)
                source.with_suffix(".class").write_bytes(b"\xca\xfe\xba\xbe")
                for name in self.nested:
                    (source.parent / f"{source.stem}${name}.class").write_bytes(b"\xca\xfe\xba\xbe")
        return self.status


@pytest.fixture
def catalog():
    """Catalog loaded with the sample descriptors."""
    return TypeCatalog([SAMPLE_TYPES])


@pytest.fixture
def sample_document():
    """A fresh copy of the sample descriptor document."""
    return copy.deepcopy(SAMPLE_TYPES)


@pytest.fixture
def generator():
    return JavaImplGenerator(GeneratorConfig())


@pytest.fixture
def types_file(tmp_path):
    """Sample descriptors written to a JSON file."""
    path = tmp_path / "types.json"
    path.write_text(json.dumps(SAMPLE_TYPES, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def fake_compiler():
    return FakeCompiler()


@pytest.fixture
def failing_compiler():
    return FakeCompiler(status=1)


@pytest.fixture
def compiler_factory():
    return FakeCompiler


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("implementor")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
