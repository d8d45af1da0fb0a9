"""
Type catalog built from serialized type descriptors.

Converts descriptor documents (JSON-compatible dicts) into linked JavaType
objects that generators can query consistently, the same way a reflective
introspection facility would answer them.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from ...logging_config import get_logger
from .types import (
    ENUM,
    OBJECT,
    PRIMITIVE_NAMES,
    AnnotationRef,
    ConstructorInfo,
    FieldInfo,
    JavaType,
    MethodInfo,
    Modifier,
    Nesting,
    TypeKind,
)

logger = get_logger(__name__)


class TypeNotFoundError(LookupError):
    """Raised when a type name cannot be resolved by the catalog."""

    def __init__(self, name: str):
        super().__init__(f"Type not found: {name}")
        self.type_name = name


class DescriptorError(ValueError):
    """Raised for malformed type descriptors."""

    pass


def split_name(name: str) -> tuple:
    """Split a qualified name into (package, simple name)."""
    if "." not in name:
        return "", name
    package, simple = name.rsplit(".", 1)
    return package, simple


class TypeCatalog:
    """
    Registry of JavaType descriptors keyed by qualified name.

    Primitive types, ``java.lang.Object`` and ``java.lang.Enum`` are always
    present. Types referenced by descriptors but never described themselves
    are created as opaque public classes extending Object; they take part in
    type rendering and assignability but cannot be looked up with get().
    """

    def __init__(self, documents: Optional[Iterable[Any]] = None):
        self._types: Dict[str, JavaType] = {}
        self._described: set = set()
        self._install_builtins()
        for document in documents or []:
            self.load(document)

    def __contains__(self, name: str) -> bool:
        return name in self._described

    def __len__(self) -> int:
        return len(self._described)

    def names(self) -> List[str]:
        """Names of all described (lookup-able) types."""
        return sorted(self._described)

    def get(self, name: str) -> JavaType:
        """
        Look up a described type by qualified name.

        Raises:
            TypeNotFoundError: If the type was never described
        """
        name = name.strip()
        if name.endswith("[]"):
            component = self.get(name[:-2])
            return self._array_of(component)
        if name not in self._described:
            raise TypeNotFoundError(name)
        return self._types[name]

    def resolve(self, name: str, kind: TypeKind = TypeKind.CLASS) -> JavaType:
        """Resolve a referenced type name, creating an opaque type when unknown."""
        name = name.strip()
        if not name:
            raise DescriptorError("Empty type name")
        if name.endswith("[]"):
            return self._array_of(self.resolve(name[:-2]))
        if name not in self._types:
            package, simple = split_name(name)
            logger.debug("Creating opaque %s type %s", kind.value, name)
            opaque = JavaType(
                name=name,
                simple_name=simple,
                package=package,
                kind=kind,
                modifiers=Modifier.PUBLIC
                | (Modifier.INTERFACE | Modifier.ABSTRACT if kind == TypeKind.INTERFACE else 0),
            )
            if kind != TypeKind.INTERFACE:
                opaque.superclass = self._types[OBJECT]
            self._types[name] = opaque
        return self._types[name]

    def load(self, document: Union[Dict[str, Any], List[Dict[str, Any]]]) -> List[JavaType]:
        """
        Load a descriptor document.

        Args:
            document: A list of type descriptors or a dict with a "types" list

        Returns:
            The JavaType objects described by the document, in document order
        """
        if isinstance(document, dict):
            if "types" not in document:
                raise DescriptorError("Descriptor document must contain a 'types' list")
            entries = document["types"]
        else:
            entries = document

        if not isinstance(entries, list):
            raise DescriptorError("Descriptor 'types' must be a list")

        # First pass creates every described type so references can link to them
        shells = []
        for entry in entries:
            if not isinstance(entry, dict) or "name" not in entry:
                raise DescriptorError(f"Invalid type descriptor: {entry!r}")
            shells.append((self._create_shell(entry), entry))

        for java_type, entry in shells:
            if java_type.package is None:
                java_type.package = self._derive_package(java_type)

        for java_type, entry in shells:
            self._link(java_type, entry)

        logger.debug("Loaded %d type descriptors", len(shells))
        return [java_type for java_type, _ in shells]

    # Construction helpers

    def _create_shell(self, entry: Dict[str, Any]) -> JavaType:
        name = entry["name"]
        try:
            kind = TypeKind(entry.get("kind", "class"))
            nesting = Nesting(entry.get("nesting", "top_level"))
            modifiers = Modifier.from_keywords(entry.get("modifiers", []))
        except ValueError as e:
            raise DescriptorError(f"Invalid descriptor for {name}: {e}") from e

        if kind in (TypeKind.PRIMITIVE, TypeKind.ARRAY) or name in PRIMITIVE_NAMES:
            raise DescriptorError(f"Cannot describe primitive or array type {name}")
        if kind in (TypeKind.INTERFACE, TypeKind.ANNOTATION):
            modifiers |= Modifier.INTERFACE | Modifier.ABSTRACT
        if kind == TypeKind.ENUM:
            modifiers |= Modifier.FINAL
        # Member interfaces and enums are implicitly static
        if nesting == Nesting.MEMBER and kind != TypeKind.CLASS:
            modifiers |= Modifier.STATIC

        _, simple = split_name(name)
        java_type = JavaType(
            name=name,
            simple_name=entry.get("simple_name", "" if nesting == Nesting.ANONYMOUS else simple),
            package=entry.get("package"),
            kind=kind,
            modifiers=modifiers,
            nesting=nesting,
        )
        # Update in place so earlier references see the new description
        existing = self._types.get(name)
        if existing is not None:
            existing.__dict__.update(java_type.__dict__)
            java_type = existing
        self._types[name] = java_type
        self._described.add(name)
        return java_type

    def _derive_package(self, java_type: JavaType) -> str:
        if java_type.nesting == Nesting.TOP_LEVEL:
            return split_name(java_type.name)[0]
        # Nested names carry their enclosing type as prefix
        prefix = java_type.name
        while "." in prefix:
            prefix = prefix.rsplit(".", 1)[0]
            enclosing = self._types.get(prefix)
            if enclosing is not None and prefix in self._described:
                return enclosing.package_name or self._derive_package(enclosing)
        return split_name(java_type.name)[0]

    def _link(self, java_type: JavaType, entry: Dict[str, Any]):
        name = java_type.name

        superclass = entry.get("superclass")
        if superclass:
            java_type.superclass = self.resolve(superclass)
        elif java_type.kind == TypeKind.ENUM:
            java_type.superclass = self._types[ENUM]
        elif java_type.kind == TypeKind.CLASS and name != OBJECT:
            java_type.superclass = self._types[OBJECT]
        else:
            java_type.superclass = None

        java_type.interfaces = [
            self.resolve(iface, TypeKind.INTERFACE) for iface in entry.get("interfaces", [])
        ]
        java_type.annotations = [
            self._annotation(a) for a in entry.get("annotations", [])
        ]
        java_type.fields = [self._field(f, name) for f in entry.get("fields", [])]
        java_type.constructors = [
            self._constructor(c, name) for c in entry.get("constructors", [])
        ]
        java_type.methods = [self._method(m, name) for m in entry.get("methods", [])]
        java_type.member_types = [self.resolve(t) for t in entry.get("member_types", [])]

    def _annotation(self, entry: Union[str, Dict[str, Any]]) -> AnnotationRef:
        if isinstance(entry, str):
            return AnnotationRef(entry.lstrip("@"))
        return AnnotationRef(
            entry["type"].lstrip("@"),
            {key: str(value) for key, value in entry.get("elements", {}).items()},
        )

    def _modifiers(self, entry: Dict[str, Any], owner: str) -> Modifier:
        try:
            return Modifier.from_keywords(entry.get("modifiers", []))
        except ValueError as e:
            raise DescriptorError(f"Invalid member of {owner}: {e}") from e

    def _field(self, entry: Dict[str, Any], owner: str) -> FieldInfo:
        if "name" not in entry or "type" not in entry:
            raise DescriptorError(f"Field of {owner} needs 'name' and 'type'")
        return FieldInfo(
            name=entry["name"],
            type=self.resolve(entry["type"]),
            modifiers=self._modifiers(entry, owner),
            declaring_type=owner,
        )

    def _constructor(self, entry: Dict[str, Any], owner: str) -> ConstructorInfo:
        return ConstructorInfo(
            modifiers=self._modifiers(entry, owner),
            parameter_types=[self.resolve(p) for p in entry.get("parameters", [])],
            exception_types=[self.resolve(e) for e in entry.get("exceptions", [])],
            declaring_type=owner,
        )

    def _method(self, entry: Dict[str, Any], owner: str) -> MethodInfo:
        if "name" not in entry:
            raise DescriptorError(f"Method of {owner} needs a 'name'")
        modifiers = self._modifiers(entry, owner)
        owner_type = self._types[owner]
        # Interface methods are implicitly public; those without a body are abstract
        if owner_type.is_interface and not modifiers & Modifier.PRIVATE:
            modifiers |= Modifier.PUBLIC
            has_body = (
                modifiers & Modifier.STATIC
                or entry.get("default", False)
                or "default" in entry.get("modifiers", [])
            )
            if not has_body:
                modifiers |= Modifier.ABSTRACT
        return MethodInfo(
            name=entry["name"],
            modifiers=modifiers,
            return_type=self.resolve(entry.get("return_type", "void")),
            parameter_types=[self.resolve(p) for p in entry.get("parameters", [])],
            exception_types=[self.resolve(e) for e in entry.get("exceptions", [])],
            declaring_type=owner,
        )

    def _array_of(self, component: JavaType) -> JavaType:
        name = f"{component.name}[]"
        if name not in self._types:
            self._types[name] = JavaType(
                name=name,
                simple_name=f"{component.simple_name}[]",
                package=None,
                kind=TypeKind.ARRAY,
                modifiers=Modifier.PUBLIC | Modifier.ABSTRACT | Modifier.FINAL,
                superclass=self._types[OBJECT],
                component=component,
            )
        return self._types[name]

    def _install_builtins(self):
        for primitive in PRIMITIVE_NAMES:
            self._types[primitive] = JavaType(
                name=primitive,
                simple_name=primitive,
                package=None,
                kind=TypeKind.PRIMITIVE,
                modifiers=Modifier.PUBLIC | Modifier.ABSTRACT | Modifier.FINAL,
            )
            self._described.add(primitive)
        self.load(BUILTIN_DESCRIPTORS)


def _object_method(name, return_type="void", parameters=(), modifiers=("public",), exceptions=()):
    return {
        "name": name,
        "modifiers": list(modifiers),
        "return_type": return_type,
        "parameters": list(parameters),
        "exceptions": list(exceptions),
    }


BUILTIN_DESCRIPTORS = {
    "types": [
        {
            "name": OBJECT,
            "modifiers": ["public"],
            "constructors": [{"modifiers": ["public"]}],
            "methods": [
                _object_method("getClass", "java.lang.Class", modifiers=("public", "final", "native")),
                _object_method("hashCode", "int", modifiers=("public", "native")),
                _object_method("equals", "boolean", [OBJECT]),
                _object_method(
                    "clone",
                    OBJECT,
                    modifiers=("protected", "native"),
                    exceptions=("java.lang.CloneNotSupportedException",),
                ),
                _object_method("toString", "java.lang.String"),
                _object_method("notify", modifiers=("public", "final", "native")),
                _object_method("notifyAll", modifiers=("public", "final", "native")),
                _object_method(
                    "wait",
                    parameters=["long"],
                    modifiers=("public", "final", "native"),
                    exceptions=("java.lang.InterruptedException",),
                ),
                _object_method(
                    "wait", modifiers=("public", "final"), exceptions=("java.lang.InterruptedException",)
                ),
                _object_method(
                    "wait",
                    parameters=["long", "int"],
                    modifiers=("public", "final"),
                    exceptions=("java.lang.InterruptedException",),
                ),
                _object_method(
                    "finalize", modifiers=("protected",), exceptions=("java.lang.Throwable",)
                ),
            ],
        },
        {
            "name": ENUM,
            "modifiers": ["public", "abstract"],
            "interfaces": ["java.lang.Comparable", "java.io.Serializable"],
            "constructors": [
                {"modifiers": ["protected"], "parameters": ["java.lang.String", "int"]}
            ],
            "methods": [
                _object_method("name", "java.lang.String", modifiers=("public", "final")),
                _object_method("ordinal", "int", modifiers=("public", "final")),
                _object_method(
                    "compareTo", "int", [ENUM], modifiers=("public", "final")
                ),
            ],
        },
    ]
}
