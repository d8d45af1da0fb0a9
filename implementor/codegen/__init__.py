"""
Implementor Code Generation Module

Generates minimal Java implementations of classes and interfaces from
type descriptors.
"""

from .core.generator import CodeGenerator, ErrorKind, GenerationError, GenerationResult, generate_code
from .core.catalog import TypeCatalog, TypeNotFoundError
from .core.config import GeneratorConfig, ConfigManager, load_config
from .java.generator import JavaImplGenerator, create_java_generator


# Convenience functions
def generate_from_catalog(catalog, type_name, config=None):
    """
    Generate the implementation of a catalog type.

    Args:
        catalog: TypeCatalog holding the target type
        type_name: Qualified name of the target type
        config: Generator configuration dict

    Returns:
        GenerationResult with generated code
    """
    target = catalog.get(type_name)
    return generate_code(create_java_generator(config), target)


def quick_generate(document, type_name, **options):
    """
    Quick code generation from a descriptor document.

    Args:
        document: Descriptor document (dict/list/JSON string)
        type_name: Qualified name of the target type
        **options: Generator options

    Returns:
        Generated code string
    """
    if isinstance(document, str):
        import json

        document = json.loads(document)

    result = generate_from_catalog(TypeCatalog([document]), type_name, options)

    if result.success:
        return result.code
    else:
        raise RuntimeError(f"Code generation failed: {result.error_message}")


__all__ = [
    "CodeGenerator",
    "ErrorKind",
    "GenerationError",
    "GenerationResult",
    "generate_code",
    "TypeCatalog",
    "TypeNotFoundError",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "JavaImplGenerator",
    "create_java_generator",
    "generate_from_catalog",
    "quick_generate",
]
