"""
Generation plans: what a unit must declare, decided before any rendering.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ...logging_config import get_logger
from ..core.config import GeneratorConfig
from ..core.generator import ErrorKind, GenerationError
from ..core.naming import NameAllocator
from ..core.types import ConstructorInfo, FieldInfo, JavaType, MethodInfo
from .methods import MethodSetResolver

logger = get_logger(__name__)


@dataclass
class FieldPlan:
    """A field to redeclare, with its synthesized name."""

    field: FieldInfo
    name: str

    @property
    def needs_initializer(self) -> bool:
        return self.field.is_final


@dataclass
class GenerationPlan:
    """Everything one unit declares, plus the plans of its nested units."""

    target: JavaType
    unit_name: str
    fields: List[FieldPlan] = field(default_factory=list)
    constructors: List[ConstructorInfo] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)
    nested: List["GenerationPlan"] = field(default_factory=list)

    def walk(self):
        """Yield this plan and every nested plan, depth first."""
        yield self
        for child in self.nested:
            yield from child.walk()


class PlanBuilder:
    """Builds a fresh GenerationPlan tree for a target type."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        method_resolver: Optional[MethodSetResolver] = None,
    ):
        self.config = config or GeneratorConfig()
        self.method_resolver = method_resolver or MethodSetResolver()

    def build(
        self,
        target: JavaType,
        unit_name: Optional[str] = None,
        _enclosing: Tuple[str, ...] = (),
    ) -> GenerationPlan:
        """
        Build the plan for ``target`` and its nested member types.

        Raises:
            GenerationError: If a class offers no usable constructor
        """
        enclosing = _enclosing + (target.name,)
        unit_name = unit_name or f"{target.simple_name}{self.config.unit_suffix}"
        field_names = NameAllocator(self.config.field_prefix)

        plan = GenerationPlan(
            target=target,
            unit_name=unit_name,
            fields=[FieldPlan(f, field_names.next_name()) for f in target.public_fields()],
            constructors=self.constructors(target),
            methods=self.method_resolver.resolve(target),
        )

        for member in self.nested_types(target):
            # A member type inheriting from its enclosing type sees itself again
            if member.name in enclosing:
                logger.debug("Skipping recursive member type %s", member.name)
                continue
            plan.nested.append(self.build(member, _enclosing=enclosing))

        logger.debug(
            "Planned %s: %d fields, %d constructors, %d methods, %d nested",
            unit_name,
            len(plan.fields),
            len(plan.constructors),
            len(plan.methods),
            len(plan.nested),
        )
        return plan

    def constructors(self, target: JavaType) -> List[ConstructorInfo]:
        """
        Constructors to forward.

        Public constructors are used when present; a class without any falls
        back to its non-private declared constructors.
        """
        if target.is_interface:
            return []

        constructors = [c for c in target.public_constructors() if not c.is_private]
        if constructors:
            return constructors

        constructors = [c for c in target.declared_constructors() if not c.is_private]
        if not constructors:
            raise GenerationError(
                f"Cannot extend {target.name}: no accessible constructors",
                ErrorKind.NO_CONSTRUCTOR,
            )
        return constructors

    def nested_types(self, target: JavaType) -> List[JavaType]:
        """Public member types that can be implemented inside the unit."""
        return [
            member
            for member in target.public_member_types()
            if not member.is_final and not member.is_private
        ]
