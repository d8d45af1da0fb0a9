"""
Modifier normalization for generated Java declarations.
"""

from enum import Enum

from ..core.types import Modifier


class MemberKind(Enum):
    """Declaration kinds with distinct legal modifier vocabularies."""

    INTERFACE = "interface"
    CLASS = "class"
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    METHOD = "method"


_ACCESS = Modifier.PUBLIC | Modifier.PROTECTED | Modifier.PRIVATE

# Same vocabularies as java.lang.reflect.Modifier#xxxModifiers()
LEGAL_MODIFIERS = {
    MemberKind.INTERFACE: _ACCESS | Modifier.ABSTRACT | Modifier.STATIC | Modifier.STRICT,
    MemberKind.CLASS: _ACCESS
    | Modifier.ABSTRACT
    | Modifier.STATIC
    | Modifier.FINAL
    | Modifier.STRICT,
    MemberKind.FIELD: _ACCESS
    | Modifier.STATIC
    | Modifier.FINAL
    | Modifier.TRANSIENT
    | Modifier.VOLATILE,
    MemberKind.CONSTRUCTOR: _ACCESS,
    MemberKind.METHOD: _ACCESS
    | Modifier.ABSTRACT
    | Modifier.STATIC
    | Modifier.FINAL
    | Modifier.SYNCHRONIZED
    | Modifier.NATIVE
    | Modifier.STRICT,
}


def normalize_modifiers(modifiers: Modifier, kind: MemberKind) -> Modifier:
    """Strip abstractness and mask to the modifiers legal for ``kind``."""
    stripped = modifiers.without(Modifier.ABSTRACT, Modifier.INTERFACE)
    return Modifier(int(stripped) & int(LEGAL_MODIFIERS[kind]))


def modifiers_string(modifiers: Modifier, kind: MemberKind) -> str:
    """
    Render normalized modifiers as source text.

    Returns:
        Space separated keywords with one trailing space, or "" if none remain
    """
    keywords = normalize_modifiers(modifiers, kind).keywords()
    if not keywords:
        return ""
    return " ".join(keywords) + " "
