"""
Core code generation components.

Provides the type model, the catalog that builds it from descriptors, and
the base classes and utilities used by implementation generators.
"""

from .generator import CodeGenerator, ErrorKind, GenerationError, GenerationResult, generate_code
from .types import (
    AnnotationRef,
    ConstructorInfo,
    FieldInfo,
    JavaType,
    MethodInfo,
    Modifier,
    Nesting,
    TypeKind,
)
from .catalog import DescriptorError, TypeCatalog, TypeNotFoundError
from .naming import NameAllocator, escape_non_ascii, unescape_unicode
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "ErrorKind",
    "GenerationError",
    "GenerationResult",
    "generate_code",
    # Type model
    "AnnotationRef",
    "ConstructorInfo",
    "FieldInfo",
    "JavaType",
    "MethodInfo",
    "Modifier",
    "Nesting",
    "TypeKind",
    # Descriptor catalog
    "DescriptorError",
    "TypeCatalog",
    "TypeNotFoundError",
    # Naming utilities
    "NameAllocator",
    "escape_non_ascii",
    "unescape_unicode",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
