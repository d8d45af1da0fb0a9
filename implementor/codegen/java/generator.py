"""
Java implementation generator.

Renders a minimal concrete subtype of a class or interface: forwarded
constructors, stub methods returning zero values, redeclared fields and
implementations of nested member types.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from ..core.config import GeneratorConfig
from ..core.generator import CodeGenerator
from ..core.naming import NameAllocator, escape_non_ascii
from ..core.types import ConstructorInfo, JavaType, MethodInfo
from .eligibility import check_eligibility
from .methods import MethodSetResolver
from .modifiers import MemberKind, modifiers_string
from .plan import FieldPlan, GenerationPlan, PlanBuilder
from .types import TypeNameResolver, default_value

logger = get_logger(__name__)


UNIT_TEMPLATE = """\
{% if comment %}
{{ comment | comment }}
{% endif %}
{{ header }} {
{% filter indent(indent_size) %}
{% for field in fields %}
{{ field.modifiers }}{{ field.type }} {{ field.name }}{% if field.initializer %} = {{ field.initializer }}{% endif %};
{% endfor %}
{% for ctor in constructors %}

{{ ctor.modifiers }}{{ unit_name }}({{ ctor.parameters | join(", ") }}){% if ctor.exceptions %} throws {{ ctor.exceptions | join(", ") }}{% endif %} {
{{ tab }}super({{ ctor.arguments | join(", ") }});
}
{% endfor %}
{% for method in methods %}

{{ method.modifiers }}{{ method.return_type }} {{ method.name }}({{ method.parameters | join(", ") }}){% if method.exceptions %} throws {{ method.exceptions | join(", ") }}{% endif %} {
{{ tab }}return{% if method.value %} {{ method.value }}{% endif %};
}
{% endfor %}
{% for child in nested %}

{{ child }}
{% endfor %}
{% endfilter %}
}
"""

FILE_TEMPLATE = """\
{% if package %}
package {{ package }};

{% endif %}
{{ unit }}
"""


@dataclass
class RenderedUnit:
    """Source text of one unit; nested units are embedded in ``text``."""

    name: str
    target: str
    text: str
    children: List["RenderedUnit"] = field(default_factory=list)

    def unit_names(self) -> List[str]:
        """Binary names of this unit and its nested units, e.g. ``AImpl$BImpl``."""
        names = [self.name]
        for child in self.children:
            names.extend(f"{self.name}${name}" for name in child.unit_names())
        return names


class JavaImplGenerator(CodeGenerator):
    """Code generator for minimal Java implementations of a type."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        plan_builder: Optional[PlanBuilder] = None,
    ):
        """Initialize Java generator with configuration."""
        super().__init__(config)
        self.method_resolver = MethodSetResolver()
        self.plan_builder = plan_builder or PlanBuilder(self.config, self.method_resolver)

    @property
    def language_name(self) -> str:
        return "java"

    @property
    def file_extension(self) -> str:
        return ".java"

    def get_templates(self) -> Dict[str, str]:
        return {"unit.java.j2": UNIT_TEMPLATE, "file.java.j2": FILE_TEMPLATE}

    def plan(self, target: JavaType) -> GenerationPlan:
        """Check eligibility and build the generation plan for ``target``."""
        check_eligibility(target)
        return self.plan_builder.build(target, self.unit_name(target))

    def generate(self, target: JavaType) -> str:
        """Generate the complete compilation unit for ``target``."""
        plan = self.plan(target)
        unit = self.render_unit(plan)
        code = self.render_template(
            "file.java.j2",
            {"package": escape_non_ascii(target.package_name), "unit": unit.text},
        )
        logger.debug("Generated %s for %s", unit.name, target.name)
        return self.format_code(code)

    def render_unit(self, plan: GenerationPlan) -> RenderedUnit:
        """Render one unit and, recursively, its nested units."""
        target = plan.target
        resolver = TypeNameResolver(target, self.config.excluded_annotations)
        unit_name = escape_non_ascii(plan.unit_name)

        children = [self.render_unit(child) for child in plan.nested]

        context = {
            "comment": self._comment(target),
            "header": self._header(plan),
            "unit_name": unit_name,
            "indent_size": self.config.indent_size,
            "tab": " " * self.config.indent_size,
            "fields": [self._field_context(f, resolver) for f in plan.fields],
            "constructors": [self._constructor_context(c, resolver) for c in plan.constructors],
            "methods": [self._method_context(m, resolver) for m in plan.methods],
            "nested": [child.text for child in children],
        }
        text = self.render_template("unit.java.j2", context)
        return RenderedUnit(name=plan.unit_name, target=target.name, text=text, children=children)

    def collect_warnings(self, target: JavaType) -> List[str]:
        """Report merges made by the loose override-equivalence check."""
        warnings = []
        for kept, dropped in self.method_resolver.approximate_merges(target):
            warnings.append(
                f"{dropped.declaring_type}.{dropped.signature()} treated as the same "
                f"override as {kept.declaring_type}.{kept.signature()}"
            )
        for method in self.method_resolver.resolve(target):
            if method.is_static:
                warnings.append(f"Static method {method.signature()} will be hidden, not overridden")
        return warnings

    # Context builders

    def _comment(self, target: JavaType) -> Optional[str]:
        if not self.config.add_comments:
            return None
        return escape_non_ascii(f"Generated stub implementation of {target.name}")

    def _header(self, plan: GenerationPlan) -> str:
        target = plan.target
        if target.is_interface:
            kind, relation = MemberKind.INTERFACE, "implements"
        else:
            kind, relation = MemberKind.CLASS, "extends"
        modifiers = modifiers_string(target.modifiers, kind)
        return modifiers + "class " + escape_non_ascii(
            f"{plan.unit_name} {relation} {target.simple_name}"
        )

    def _field_context(self, field_plan: FieldPlan, resolver: TypeNameResolver) -> Dict[str, Any]:
        info = field_plan.field
        return {
            "modifiers": modifiers_string(info.modifiers, MemberKind.FIELD),
            "type": resolver.escaped_name(info.type),
            "name": field_plan.name,
            "initializer": default_value(info.type) if field_plan.needs_initializer else None,
        }

    def _parameters(self, executable, resolver: TypeNameResolver):
        names = NameAllocator(self.config.parameter_prefix).names(len(executable.parameter_types))
        declarations = [
            f"{type_name} {name}"
            for type_name, name in zip(resolver.escaped_names(executable.parameter_types), names)
        ]
        return declarations, names

    def _constructor_context(
        self, constructor: ConstructorInfo, resolver: TypeNameResolver
    ) -> Dict[str, Any]:
        parameters, arguments = self._parameters(constructor, resolver)
        return {
            "modifiers": modifiers_string(constructor.modifiers, MemberKind.CONSTRUCTOR),
            "parameters": parameters,
            "arguments": arguments,
            "exceptions": resolver.escaped_names(constructor.exception_types),
        }

    def _method_context(self, method: MethodInfo, resolver: TypeNameResolver) -> Dict[str, Any]:
        parameters, _ = self._parameters(method, resolver)
        return {
            "modifiers": modifiers_string(method.modifiers, MemberKind.METHOD),
            "return_type": resolver.escaped_name(method.return_type),
            "name": escape_non_ascii(method.name),
            "parameters": parameters,
            "exceptions": resolver.escaped_names(method.exception_types),
            "value": default_value(method.return_type),
        }


def create_java_generator(config: Optional[Dict[str, Any]] = None) -> JavaImplGenerator:
    """Create a Java generator from a dict of configuration overrides."""
    from ..core.config import load_config

    return JavaImplGenerator(load_config(custom_config=config))
