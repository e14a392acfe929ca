"""Native declarations and generic type expressions.

These are the raw records a `ClassPath` hands out: the equivalent of host
reflection objects. They are mutable while a class path is being loaded
and treated as read-only afterwards. Declarations compare by identity;
type expressions compare structurally, ignoring their annotations.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING

from typemirror.modifiers import Access

if TYPE_CHECKING:
    from typemirror.source.classpath import ClassPath


class ClassKind(StrEnum):
    """Kind of a native class."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"
    PRIMITIVE = "primitive"


class Nesting(StrEnum):
    """Where a class is declared relative to other classes."""

    TOP_LEVEL = "top_level"
    MEMBER = "member"
    LOCAL = "local"
    ANONYMOUS = "anonymous"


# =============================================================================
# Declarations
# =============================================================================


@dataclass(eq=False, repr=False)
class NativeAnnotation:
    """An annotation instance: its type plus explicitly given attribute values.

    Values are plain Python objects (bool, int, float, str), `NativeClass`
    for class literals, `NativeField` for enum constants, `NativeAnnotation`
    for nested annotations, or tuples of those.
    """

    annotation_type: NativeClass
    values: dict[str, object] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"NativeAnnotation(@{self.annotation_type.name})"


@dataclass(eq=False, repr=False)
class NativePackage:
    """A package of a class path."""

    name: str
    class_path: ClassPath | None = None
    annotations: list[NativeAnnotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"NativePackage({self.name!r})"


@dataclass(eq=False, repr=False)
class NativeTypeVariable:
    """A declared type parameter of a class or executable."""

    name: str
    declarer: NativeClass | NativeExecutable
    bounds: list[NativeType] = field(default_factory=list)
    annotations: list[NativeAnnotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"NativeTypeVariable({self.name!r})"


@dataclass(eq=False, repr=False)
class NativeClass:
    """A class, interface, enum, annotation type or primitive pseudo-class."""

    name: str
    simple_name: str
    kind: ClassKind
    package: NativePackage | None
    access: Access = Access(0)
    nesting: Nesting = Nesting.TOP_LEVEL
    enclosing: NativeClass | None = None
    enclosing_executable: NativeExecutable | None = None
    type_parameters: list[NativeTypeVariable] = field(default_factory=list)
    superclass: NativeType | None = None
    interfaces: list[NativeType] = field(default_factory=list)
    fields: list[NativeField] = field(default_factory=list)
    constructors: list[NativeExecutable] = field(default_factory=list)
    methods: list[NativeExecutable] = field(default_factory=list)
    member_classes: list[NativeClass] = field(default_factory=list)
    annotations: list[NativeAnnotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"NativeClass({self.name!r})"

    @property
    def is_primitive(self) -> bool:
        return self.kind is ClassKind.PRIMITIVE

    @property
    def is_interface(self) -> bool:
        return self.kind in (ClassKind.INTERFACE, ClassKind.ANNOTATION)

    @property
    def is_static(self) -> bool:
        """True when instances carry no enclosing instance."""
        if self.nesting is Nesting.TOP_LEVEL:
            return True
        if self.nesting is Nesting.MEMBER:
            enclosing = self.enclosing
            return (
                Access.STATIC in self.access
                or self.kind is not ClassKind.CLASS
                or (enclosing is not None and enclosing.is_interface)
            )
        return False

    @property
    def binary_name(self) -> str:
        """Name as the host's class loader would know it (``a.b.Outer$Inner``)."""
        if self.enclosing is None:
            return self.name
        if self.nesting is Nesting.MEMBER:
            return f"{self.enclosing.binary_name}${self.simple_name}"
        return self.name

    def raw_supertypes(self) -> list[NativeClass]:
        """Superclass then interfaces, as raw classes."""
        result = []
        if self.superclass is not None:
            result.append(raw_class_of(self.superclass))
        result.extend(raw_class_of(i) for i in self.interfaces)
        return result

    def is_subclass_of(self, other: NativeClass) -> bool:
        """Raw assignability: can a value of this class be used as ``other``.

        Primitive pseudo-classes relate only to themselves. Every other
        class, interfaces included, is a subclass of ``java.lang.Object``.
        """
        if self is other:
            return True
        if self.is_primitive or other.is_primitive:
            return False
        if other.superclass is None and not other.is_interface:
            # the root class
            return True
        seen: set[int] = set()
        pending = self.raw_supertypes()
        while pending:
            current = pending.pop()
            if current is other:
                return True
            if id(current) in seen:
                continue
            seen.add(id(current))
            pending.extend(current.raw_supertypes())
        return False


@dataclass(eq=False, repr=False)
class NativeParameter:
    """A formal parameter of an executable."""

    name: str
    declarer: NativeExecutable
    type: NativeType
    access: Access = Access(0)
    annotations: list[NativeAnnotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"NativeParameter({self.name!r})"


@dataclass(eq=False, repr=False)
class NativeExecutable:
    """A method or constructor."""

    name: str
    declarer: NativeClass
    access: Access = Access(0)
    is_constructor: bool = False
    type_parameters: list[NativeTypeVariable] = field(default_factory=list)
    return_type: NativeType | None = None
    parameters: list[NativeParameter] = field(default_factory=list)
    thrown: list[NativeType] = field(default_factory=list)
    annotations: list[NativeAnnotation] = field(default_factory=list)
    varargs: bool = False
    default_value: object = None

    def __repr__(self) -> str:
        return f"NativeExecutable({self.declarer.name}.{self.name})"

    @property
    def is_static(self) -> bool:
        return Access.STATIC in self.access


@dataclass(eq=False, repr=False)
class NativeField:
    """A field or enum constant."""

    name: str
    declarer: NativeClass
    type: NativeType
    access: Access = Access(0)
    enum_constant: bool = False
    constant_value: object = None
    annotations: list[NativeAnnotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"NativeField({self.declarer.name}.{self.name})"


type NativeDeclaration = (
    NativePackage
    | NativeClass
    | NativeExecutable
    | NativeField
    | NativeParameter
    | NativeTypeVariable
)


# =============================================================================
# Generic type expressions
# =============================================================================


@dataclass(frozen=True)
class ClassRef:
    """A plain (non-parameterized) use of a class, primitive or ``void``."""

    target: NativeClass
    annotations: tuple[NativeAnnotation, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class ArrayOf:
    """An array type expression."""

    component: NativeType
    annotations: tuple[NativeAnnotation, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class Parameterized:
    """A parameterized type expression, optionally owned by an outer type."""

    raw: NativeClass
    args: tuple[NativeType, ...]
    owner: NativeType | None = None
    annotations: tuple[NativeAnnotation, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class WildcardOf:
    """A wildcard type argument; empty bound tuples mean the defaults."""

    upper: tuple[NativeType, ...] = ()
    lower: tuple[NativeType, ...] = ()
    annotations: tuple[NativeAnnotation, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class TypeVarRef:
    """A use of a declared type variable."""

    variable: NativeTypeVariable
    annotations: tuple[NativeAnnotation, ...] = field(default=(), compare=False)


type NativeType = ClassRef | ArrayOf | Parameterized | WildcardOf | TypeVarRef


def raw_class_of(expr: NativeType) -> NativeClass:
    """The class a supertype expression names, without its arguments.

    Raises:
        TypeError: If the expression does not name a class

    """
    match expr:
        case ClassRef(target):
            return target
        case Parameterized(raw=raw):
            return raw
    msg = f"Type expression does not name a class: {expr!r}"
    raise TypeError(msg)


def with_annotations[T: NativeType](expr: T, annotations: tuple[NativeAnnotation, ...]) -> T:
    """Return ``expr`` with ``annotations`` prepended to its own."""
    if not annotations:
        return expr
    return replace(expr, annotations=annotations + expr.annotations)
