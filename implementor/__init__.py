"""
Implementor: minimal Java implementations of classes and interfaces.
"""

from .codegen import (
    ErrorKind,
    GenerationError,
    GeneratorConfig,
    JavaImplGenerator,
    TypeCatalog,
    TypeNotFoundError,
    generate_from_catalog,
    quick_generate,
)
from .orchestrator import GenerationContext, Implementor, implement, implement_jar
from .utils import DescriptorLoadError, load_catalog

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "GenerationError",
    "GeneratorConfig",
    "JavaImplGenerator",
    "TypeCatalog",
    "TypeNotFoundError",
    "generate_from_catalog",
    "quick_generate",
    "GenerationContext",
    "Implementor",
    "implement",
    "implement_jar",
    "DescriptorLoadError",
    "load_catalog",
]
