"""
Eligibility rules for implementation targets.
"""

from typing import Optional

from ..core.generator import ErrorKind, GenerationError
from ..core.types import ENUM, JavaType


def ineligibility_reason(target: JavaType) -> Optional[str]:
    """Return why ``target`` cannot be subtyped, or None if it can."""
    if target.is_local:
        return "local classes cannot be implemented"
    if target.is_anonymous:
        return "anonymous classes cannot be implemented"
    # TODO: accept static member types by extending the enclosing-qualified name
    if target.is_member:
        return "member types cannot be implemented directly"
    if target.is_primitive:
        return "primitive types cannot be implemented"
    if target.is_array:
        return "array types cannot be implemented"
    if target.is_final:
        return "final types cannot be extended"
    if target.name == ENUM:
        return f"{ENUM} cannot be extended"
    if not target.is_interface and not target.declared_constructors():
        return "class declares no constructors"
    return None


def check_eligibility(target: JavaType) -> None:
    """
    Reject targets that cannot be validly subtyped.

    Raises:
        GenerationError: With kind UNSUPPORTED when the target is ineligible
    """
    reason = ineligibility_reason(target)
    if reason is not None:
        raise GenerationError(f"Cannot implement {target.name}: {reason}", ErrorKind.UNSUPPORTED)
