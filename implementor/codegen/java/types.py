"""
Java-specific type rendering for code generation.

Maps type descriptors to the source text used in declarations and to the
literal that represents each type's zero value.
"""

from typing import Iterable, List, Optional

from ..core.naming import escape_non_ascii
from ..core.types import JavaType

# Zero value literals of the primitive types
PRIMITIVE_DEFAULTS = {
    "boolean": "false",
    "char": "'\\u0000'",
    "long": "0L",
    "int": "0",
    "short": "0",
    "byte": "0",
    "float": "0.0f",
    "double": "0.0d",
    "void": "",
}


def default_value(java_type: JavaType) -> str:
    """
    Return the literal expression of a type's zero value.

    Returns:
        Literal source text; empty for void, ``null`` for reference types
    """
    if java_type.is_primitive:
        return PRIMITIVE_DEFAULTS[java_type.name]
    return "null"


class TypeNameResolver:
    """
    Renders type references relative to the type being implemented.

    Types from the context's package are written with their simple name,
    everything else with the qualified name. Annotations declared on the
    referenced type are prepended unless excluded.
    """

    def __init__(self, context: JavaType, excluded_annotations: Optional[Iterable[str]] = None):
        """
        Initialize resolver.

        Args:
            context: Type whose package decides between simple and qualified names
            excluded_annotations: Annotation type names never rendered
        """
        self.context = context
        self.excluded_annotations = set(excluded_annotations or ())

    def type_name(self, java_type: JavaType) -> str:
        """Render the bare or qualified name of a type, without annotations."""
        if java_type.is_array:
            return self.type_name(java_type.component) + "[]"
        if java_type.is_primitive:
            return java_type.name
        if java_type.package_name == self.context.package_name:
            return java_type.simple_name
        return java_type.name

    def annotations(self, java_type: JavaType) -> List[str]:
        """Rendered annotations of a type, excluded ones filtered out."""
        return [
            annotation.render()
            for annotation in java_type.annotations
            if annotation.type_name not in self.excluded_annotations
        ]

    def annotated_name(self, java_type: JavaType) -> str:
        """Render annotations followed by the type name."""
        parts = self.annotations(java_type)
        parts.append(self.type_name(java_type))
        return " ".join(parts)

    def escaped_name(self, java_type: JavaType) -> str:
        """Annotated name with non-ASCII characters escaped."""
        return escape_non_ascii(self.annotated_name(java_type))

    def escaped_names(self, java_types: Iterable[JavaType]) -> List[str]:
        return [self.escaped_name(t) for t in java_types]
