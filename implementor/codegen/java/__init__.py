"""
Java implementation generator.
"""

from .generator import JavaImplGenerator, RenderedUnit, create_java_generator
from .eligibility import check_eligibility, ineligibility_reason
from .methods import MethodKey, MethodSetResolver, are_equivalent
from .modifiers import MemberKind, modifiers_string, normalize_modifiers
from .plan import FieldPlan, GenerationPlan, PlanBuilder
from .types import TypeNameResolver, default_value

__all__ = [
    "JavaImplGenerator",
    "RenderedUnit",
    "create_java_generator",
    "check_eligibility",
    "ineligibility_reason",
    "MethodKey",
    "MethodSetResolver",
    "are_equivalent",
    "MemberKind",
    "modifiers_string",
    "normalize_modifiers",
    "FieldPlan",
    "GenerationPlan",
    "PlanBuilder",
    "TypeNameResolver",
    "default_value",
]
