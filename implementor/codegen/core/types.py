"""
Core type representation for code generation.

Read-only descriptors of the JVM types an implementation is generated for:
modifiers, kinds, fields, constructors, methods and member types, together
with the inheritance queries the generators need.
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Dict, Iterable, Iterator, List, Optional


class Modifier(IntFlag):
    """Java access and property modifiers, bit-compatible with the JVM flags."""

    PUBLIC = 0x001
    PRIVATE = 0x002
    PROTECTED = 0x004
    STATIC = 0x008
    FINAL = 0x010
    SYNCHRONIZED = 0x020
    VOLATILE = 0x040
    TRANSIENT = 0x080
    NATIVE = 0x100
    INTERFACE = 0x200
    ABSTRACT = 0x400
    STRICT = 0x800

    @classmethod
    def none(cls) -> "Modifier":
        return cls(0)

    @classmethod
    def from_keywords(cls, keywords: Iterable[str]) -> "Modifier":
        """
        Build a modifier set from Java keywords.

        Args:
            keywords: Keywords such as "public", "abstract", "strictfp"

        Returns:
            Combined modifier flags

        Raises:
            ValueError: If a keyword is not a Java modifier
        """
        result = 0
        for keyword in keywords:
            keyword = keyword.strip().lower()
            if keyword in _IGNORED_KEYWORDS:
                continue
            if keyword not in _KEYWORD_FLAGS:
                raise ValueError(f"Unknown modifier keyword: {keyword}")
            result |= _KEYWORD_FLAGS[keyword]
        return cls(result)

    def keywords(self) -> List[str]:
        """Return the keywords of this set in canonical Java order."""
        return [word for word, flag in _CANONICAL_ORDER if self & flag]

    def without(self, *flags: "Modifier") -> "Modifier":
        """Return a copy with the given flags cleared."""
        value = int(self)
        for flag in flags:
            value &= ~int(flag)
        return Modifier(value)


# Order used by java.lang.reflect.Modifier#toString
_CANONICAL_ORDER = [
    ("public", Modifier.PUBLIC),
    ("protected", Modifier.PROTECTED),
    ("private", Modifier.PRIVATE),
    ("abstract", Modifier.ABSTRACT),
    ("static", Modifier.STATIC),
    ("final", Modifier.FINAL),
    ("transient", Modifier.TRANSIENT),
    ("volatile", Modifier.VOLATILE),
    ("synchronized", Modifier.SYNCHRONIZED),
    ("native", Modifier.NATIVE),
    ("strictfp", Modifier.STRICT),
    ("interface", Modifier.INTERFACE),
]

_KEYWORD_FLAGS = {word: flag for word, flag in _CANONICAL_ORDER}

# Source-level keywords with no reflective flag
_IGNORED_KEYWORDS = {"default", "sealed", "non-sealed"}


class TypeKind(Enum):
    """Kinds of JVM types a descriptor can describe."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"
    PRIMITIVE = "primitive"
    ARRAY = "array"


class Nesting(Enum):
    """Where a type is declared relative to other types."""

    TOP_LEVEL = "top_level"
    MEMBER = "member"
    LOCAL = "local"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class AnnotationRef:
    """An annotation present on a type declaration."""

    type_name: str
    elements: Dict[str, str] = field(default_factory=dict, hash=False)

    def render(self) -> str:
        """Render as Java source, e.g. ``@a.b.Tag(value=1)``."""
        if not self.elements:
            return f"@{self.type_name}"
        args = ", ".join(f"{key}={value}" for key, value in self.elements.items())
        return f"@{self.type_name}({args})"


@dataclass
class FieldInfo:
    """A field declared on a type."""

    name: str
    type: "JavaType"
    modifiers: Modifier
    declaring_type: str

    @property
    def is_final(self) -> bool:
        return bool(self.modifiers & Modifier.FINAL)


@dataclass
class ConstructorInfo:
    """A constructor declared on a class."""

    modifiers: Modifier
    parameter_types: List["JavaType"]
    exception_types: List["JavaType"]
    declaring_type: str

    @property
    def is_private(self) -> bool:
        return bool(self.modifiers & Modifier.PRIVATE)

    @property
    def is_public(self) -> bool:
        return bool(self.modifiers & Modifier.PUBLIC)


@dataclass
class MethodInfo:
    """A method declared on a type."""

    name: str
    modifiers: Modifier
    return_type: "JavaType"
    parameter_types: List["JavaType"]
    exception_types: List["JavaType"]
    declaring_type: str

    @property
    def is_final(self) -> bool:
        return bool(self.modifiers & Modifier.FINAL)

    @property
    def is_native(self) -> bool:
        return bool(self.modifiers & Modifier.NATIVE)

    @property
    def is_static(self) -> bool:
        return bool(self.modifiers & Modifier.STATIC)

    @property
    def is_public(self) -> bool:
        return bool(self.modifiers & Modifier.PUBLIC)

    def signature(self) -> str:
        """Human-readable signature used in logs and warnings."""
        params = ", ".join(t.name for t in self.parameter_types)
        return f"{self.return_type.name} {self.name}({params})"


@dataclass(eq=False)
class JavaType:
    """
    Read-only descriptor of a JVM type.

    Instances are produced by a TypeCatalog and stay immutable for the
    duration of a generation. Identity is the qualified (canonical) name.
    """

    name: str
    simple_name: str
    package: Optional[str]
    kind: TypeKind
    modifiers: Modifier = field(default_factory=Modifier.none)
    nesting: Nesting = Nesting.TOP_LEVEL
    superclass: Optional["JavaType"] = None
    interfaces: List["JavaType"] = field(default_factory=list)
    annotations: List[AnnotationRef] = field(default_factory=list)
    component: Optional["JavaType"] = None
    fields: List[FieldInfo] = field(default_factory=list)
    constructors: List[ConstructorInfo] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)
    member_types: List["JavaType"] = field(default_factory=list)

    def __eq__(self, other) -> bool:
        return isinstance(other, JavaType) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"JavaType({self.name!r}, {self.kind.value})"

    # Kind queries

    @property
    def is_interface(self) -> bool:
        return self.kind in (TypeKind.INTERFACE, TypeKind.ANNOTATION)

    @property
    def is_primitive(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE

    @property
    def is_array(self) -> bool:
        return self.kind == TypeKind.ARRAY

    @property
    def is_void(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE and self.name == "void"

    @property
    def is_final(self) -> bool:
        return bool(self.modifiers & Modifier.FINAL)

    @property
    def is_private(self) -> bool:
        return bool(self.modifiers & Modifier.PRIVATE)

    @property
    def is_member(self) -> bool:
        return self.nesting == Nesting.MEMBER

    @property
    def is_local(self) -> bool:
        return self.nesting == Nesting.LOCAL

    @property
    def is_anonymous(self) -> bool:
        return self.nesting == Nesting.ANONYMOUS

    @property
    def package_name(self) -> str:
        """Package name, empty for the default package and for primitives."""
        return self.package or ""

    # Supertype traversal

    def supertypes(self) -> Iterator["JavaType"]:
        """Yield every direct and indirect supertype once, nearest first."""
        seen = set()
        pending = self._direct_supertypes()
        while pending:
            current = pending.pop(0)
            if current.name in seen:
                continue
            seen.add(current.name)
            yield current
            pending.extend(current._direct_supertypes())

    def _direct_supertypes(self) -> List["JavaType"]:
        direct = []
        if self.superclass is not None:
            direct.append(self.superclass)
        direct.extend(self.interfaces)
        return direct

    def is_assignable_from(self, other: "JavaType") -> bool:
        """
        Check whether a value of ``other`` can be assigned to this type.

        Mirrors Class#isAssignableFrom: identity for primitives, widening
        reference conversion for everything else.
        """
        if self.name == other.name:
            return True
        if self.is_primitive or other.is_primitive:
            return False
        if self.name == OBJECT:
            return True
        if other.is_array:
            if self.is_array:
                return self.component.is_assignable_from(other.component)
            return self.name in ARRAY_SUPERINTERFACES
        if self.is_array:
            return False
        return any(supertype.name == self.name for supertype in other.supertypes())

    # Member enumeration

    def declared_fields(self) -> List[FieldInfo]:
        return list(self.fields)

    def public_fields(self) -> List[FieldInfo]:
        """Public fields: declared, then superinterfaces', then superclass'."""
        result: List[FieldInfo] = []
        seen = set()

        def add(items: Iterable[FieldInfo]):
            for item in items:
                key = (item.declaring_type, item.name)
                if key not in seen:
                    seen.add(key)
                    result.append(item)

        add(f for f in self.fields if f.modifiers & Modifier.PUBLIC)
        for interface in self.interfaces:
            add(interface.public_fields())
        if self.superclass is not None:
            add(self.superclass.public_fields())
        return result

    def declared_constructors(self) -> List[ConstructorInfo]:
        return list(self.constructors)

    def public_constructors(self) -> List[ConstructorInfo]:
        return [c for c in self.constructors if c.is_public]

    def declared_methods(self) -> List[MethodInfo]:
        return list(self.methods)

    def public_methods(self) -> List[MethodInfo]:
        """
        Public methods reachable on this type, in discovery order.

        Declared public methods come first, then those of the superclass
        chain, then non-static methods of the superinterfaces (including
        default methods). Duplicates from diamond inheritance are dropped;
        overrides are left for the method-set resolver to merge.
        """
        result: List[MethodInfo] = []
        seen = set()

        def add(items: Iterable[MethodInfo]):
            for item in items:
                if id(item) not in seen:
                    seen.add(id(item))
                    result.append(item)

        add(m for m in self.methods if m.is_public)
        if self.superclass is not None:
            add(self.superclass.public_methods())
        for interface in self.interfaces:
            add(m for m in interface.public_methods() if not m.is_static)
        return result

    def public_member_types(self) -> List["JavaType"]:
        """Public member types, declared first, then inherited from superclasses."""
        result = [t for t in self.member_types if t.modifiers & Modifier.PUBLIC]
        if self.superclass is not None:
            names = {t.name for t in result}
            result.extend(
                t for t in self.superclass.public_member_types() if t.name not in names
            )
        return result


OBJECT = "java.lang.Object"
ENUM = "java.lang.Enum"
ARRAY_SUPERINTERFACES = {"java.lang.Cloneable", "java.io.Serializable"}

PRIMITIVE_NAMES = (
    "boolean",
    "byte",
    "char",
    "short",
    "int",
    "long",
    "float",
    "double",
    "void",
)
