"""Declarations: immutable values representing named program entities.

Each element wraps the native declaration it was built from and compares
by the identity of that native object, so two elements built separately
from the same declaration are equal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from typemirror.errors import InvalidArgumentKind
from typemirror.modifiers import Access, Modifier, modifiers_of_mask
from typemirror.source.classpath import self_type_expression
from typemirror.source.native import (
    ClassKind,
    NativeClass,
    NativeExecutable,
    NativeField,
    NativePackage,
    NativeParameter,
    NativeTypeVariable,
    Nesting,
)
from typemirror.types import (
    CapturedType,
    DeclaredType,
    ExecutableType,
    NoneType,
    PackageType,
    TypeMirror,
    TypeVariable,
    VoidType,
)

if TYPE_CHECKING:
    from typemirror.annotation_mirrors import AnnotationMirror, AnnotationValue
    from typemirror.source.native import NativeAnnotation, NativeType


class ElementKind(StrEnum):
    """Kind of a declaration."""

    PACKAGE = "package"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION_TYPE = "annotation_type"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    FIELD = "field"
    ENUM_CONSTANT = "enum_constant"
    PARAMETER = "parameter"
    TYPE_PARAMETER = "type_parameter"
    OTHER = "other"

    @property
    def is_class(self) -> bool:
        return self in (ElementKind.CLASS, ElementKind.ENUM)

    @property
    def is_interface(self) -> bool:
        return self in (ElementKind.INTERFACE, ElementKind.ANNOTATION_TYPE)


_CLASS_KINDS = {
    ClassKind.CLASS: ElementKind.CLASS,
    ClassKind.INTERFACE: ElementKind.INTERFACE,
    ClassKind.ENUM: ElementKind.ENUM,
    ClassKind.ANNOTATION: ElementKind.ANNOTATION_TYPE,
}


def _mirrors(natives: list[NativeAnnotation]) -> tuple[AnnotationMirror, ...]:
    from typemirror.annotation_mirrors import to_annotation_mirror

    return tuple(to_annotation_mirror(a) for a in natives)


def _descriptor(native_type: NativeType) -> Any:
    from typemirror.factory import descriptor_of

    return descriptor_of(native_type)


@dataclass(frozen=True, repr=False)
class Element(ABC):
    """Base for declarations."""

    @property
    @abstractmethod
    def kind(self) -> ElementKind:
        """The kind of program entity declared."""
        ...

    @property
    @abstractmethod
    def simple_name(self) -> str:
        """The unqualified name, empty for anonymous classes."""
        ...

    @property
    def enclosing_element(self) -> Element | None:
        return None

    @property
    def enclosed_elements(self) -> tuple[Element, ...]:
        return ()

    @property
    def modifiers(self) -> frozenset[Modifier]:
        return frozenset()

    @property
    def annotation_mirrors(self) -> tuple[AnnotationMirror, ...]:
        return ()

    def as_type(self) -> TypeMirror:
        msg = f"{self!r} declares no type"
        raise InvalidArgumentKind(msg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.simple_name})"


@dataclass(frozen=True, repr=False)
class PackageElement(Element):
    """A package; its enclosed elements are its top-level types."""

    native: NativePackage

    @property
    def kind(self) -> ElementKind:
        return ElementKind.PACKAGE

    @property
    def qualified_name(self) -> str:
        return self.native.name

    @property
    def simple_name(self) -> str:
        return self.native.name.rpartition(".")[2]

    @property
    def is_unnamed(self) -> bool:
        return not self.native.name

    @property
    def enclosed_elements(self) -> tuple[TypeElement, ...]:
        class_path = self.native.class_path
        if class_path is None:
            return ()
        classes = sorted(class_path.classes_in(self.native.name), key=lambda c: c.name)
        return tuple(TypeElement(c) for c in classes)

    @property
    def annotation_mirrors(self) -> tuple[AnnotationMirror, ...]:
        return _mirrors(self.native.annotations)

    def as_type(self) -> PackageType:
        return PackageType(self)

    def __repr__(self) -> str:
        return f"PackageElement({self.qualified_name})"


@dataclass(frozen=True, repr=False)
class TypeElement(Element):
    """A class, interface, enum or annotation type."""

    native: NativeClass

    def __post_init__(self) -> None:
        if self.native.is_primitive:
            msg = f"{self.native.name} is a primitive pseudo-class, not a type declaration"
            raise InvalidArgumentKind(msg)

    @property
    def kind(self) -> ElementKind:
        return _CLASS_KINDS[self.native.kind]

    @property
    def simple_name(self) -> str:
        return self.native.simple_name

    @property
    def qualified_name(self) -> str:
        """Canonical name; empty for local and anonymous classes."""
        if self.native.nesting in (Nesting.LOCAL, Nesting.ANONYMOUS):
            return ""
        return self.native.name

    @property
    def nesting_kind(self) -> Nesting:
        return self.native.nesting

    @property
    def enclosing_element(self) -> Element:
        native = self.native
        if native.enclosing_executable is not None:
            return ExecutableElement(native.enclosing_executable)
        if native.enclosing is not None:
            return TypeElement(native.enclosing)
        if native.package is None:
            msg = f"Top-level class {native.name} has no package"
            raise InvalidArgumentKind(msg)
        return PackageElement(native.package)

    @property
    def enclosed_elements(self) -> tuple[Element, ...]:
        native = self.native
        return (
            *(VariableElement(f) for f in native.fields),
            *(ExecutableElement(c) for c in native.constructors),
            *(ExecutableElement(m) for m in native.methods),
            *(TypeElement(c) for c in native.member_classes),
        )

    @property
    def modifiers(self) -> frozenset[Modifier]:
        return modifiers_of_mask(self.native.access)

    @property
    def annotation_mirrors(self) -> tuple[AnnotationMirror, ...]:
        return _mirrors(self.native.annotations)

    @property
    def type_parameters(self) -> tuple[TypeParameterElement, ...]:
        return tuple(TypeParameterElement(v) for v in self.native.type_parameters)

    @property
    def superclass(self) -> TypeMirror:
        """Direct superclass, or `NoneType` for interfaces and the root class."""
        if self.native.superclass is None:
            return NoneType()
        return _descriptor(self.native.superclass)

    @property
    def interfaces(self) -> tuple[TypeMirror, ...]:
        return tuple(_descriptor(i) for i in self.native.interfaces)

    def as_type(self) -> DeclaredType:
        """This type parameterized by its own type variables."""
        return _descriptor(self_type_expression(self.native))

    def __repr__(self) -> str:
        return f"TypeElement({self.native.name})"


@dataclass(frozen=True, repr=False)
class ExecutableElement(Element):
    """A method or constructor."""

    native: NativeExecutable

    @property
    def kind(self) -> ElementKind:
        return ElementKind.CONSTRUCTOR if self.native.is_constructor else ElementKind.METHOD

    @property
    def simple_name(self) -> str:
        return self.native.name

    @property
    def enclosing_element(self) -> TypeElement:
        return TypeElement(self.native.declarer)

    @property
    def modifiers(self) -> frozenset[Modifier]:
        return modifiers_of_mask(self.native.access)

    @property
    def annotation_mirrors(self) -> tuple[AnnotationMirror, ...]:
        return _mirrors(self.native.annotations)

    @property
    def parameters(self) -> tuple[VariableElement, ...]:
        return tuple(VariableElement(p) for p in self.native.parameters)

    @property
    def type_parameters(self) -> tuple[TypeParameterElement, ...]:
        return tuple(TypeParameterElement(v) for v in self.native.type_parameters)

    @property
    def return_type(self) -> TypeMirror:
        if self.native.is_constructor or self.native.return_type is None:
            return VoidType()
        return _descriptor(self.native.return_type)

    @property
    def receiver_type(self) -> TypeMirror:
        """Type of ``this`` inside the executable, `NoneType` when there is none."""
        declarer = self.native.declarer
        if self.native.is_constructor:
            if declarer.is_static or declarer.enclosing is None:
                return NoneType()
            return TypeElement(declarer.enclosing).as_type()
        if self.native.is_static:
            return NoneType()
        return TypeElement(declarer).as_type()

    @property
    def thrown_types(self) -> tuple[TypeMirror, ...]:
        return tuple(_descriptor(t) for t in self.native.thrown)

    @property
    def is_varargs(self) -> bool:
        return self.native.varargs

    @property
    def is_default(self) -> bool:
        return Access.DEFAULT in self.native.access

    @property
    def default_value(self) -> AnnotationValue | None:
        """Default of an annotation type attribute."""
        from typemirror.annotation_mirrors import to_annotation_value

        if self.native.default_value is None:
            return None
        return to_annotation_value(self.native.default_value)

    def as_type(self) -> ExecutableType:
        return ExecutableType(
            element=self,
            type_variables=tuple(p.as_type() for p in self.type_parameters),
            return_type=self.return_type,
            parameter_types=tuple(p.as_type() for p in self.parameters),
            receiver_type=self.receiver_type,
            thrown_types=self.thrown_types,
        )

    def __repr__(self) -> str:
        return f"ExecutableElement({self.native.declarer.name}.{self.native.name})"


@dataclass(frozen=True, repr=False)
class VariableElement(Element):
    """A field, enum constant or parameter."""

    native: NativeField | NativeParameter

    @property
    def kind(self) -> ElementKind:
        match self.native:
            case NativeParameter():
                return ElementKind.PARAMETER
            case NativeField(enum_constant=True):
                return ElementKind.ENUM_CONSTANT
        return ElementKind.FIELD

    @property
    def simple_name(self) -> str:
        return self.native.name

    @property
    def enclosing_element(self) -> Element:
        match self.native:
            case NativeParameter(declarer=executable):
                return ExecutableElement(executable)
            case NativeField(declarer=cls):
                return TypeElement(cls)
        raise AssertionError(self.native)

    @property
    def modifiers(self) -> frozenset[Modifier]:
        return modifiers_of_mask(self.native.access)

    @property
    def annotation_mirrors(self) -> tuple[AnnotationMirror, ...]:
        return _mirrors(self.native.annotations)

    @property
    def constant_value(self) -> object:
        if isinstance(self.native, NativeField):
            return self.native.constant_value
        return None

    def as_type(self) -> TypeMirror:
        return _descriptor(self.native.type)


@dataclass(frozen=True, repr=False)
class TypeParameterElement(Element):
    """A declared type parameter of a class or executable."""

    native: NativeTypeVariable

    @property
    def kind(self) -> ElementKind:
        return ElementKind.TYPE_PARAMETER

    @property
    def simple_name(self) -> str:
        return self.native.name

    @property
    def generic_element(self) -> TypeElement | ExecutableElement:
        declarer = self.native.declarer
        if isinstance(declarer, NativeClass):
            return TypeElement(declarer)
        return ExecutableElement(declarer)

    @property
    def enclosing_element(self) -> Element:
        return self.generic_element

    @property
    def annotation_mirrors(self) -> tuple[AnnotationMirror, ...]:
        return _mirrors(self.native.annotations)

    @property
    def bounds(self) -> tuple[TypeMirror, ...]:
        """Declared bounds; ``Object`` when none were declared."""
        from typemirror.factory import object_type

        if not self.native.bounds:
            return (object_type(),)
        return tuple(_descriptor(b) for b in self.native.bounds)

    def as_type(self) -> TypeVariable:
        return TypeVariable(self)


@dataclass(frozen=True, repr=False)
class CaptureSiteElement(Element):
    """Synthetic declaration introducing the variables of one capture."""

    site: int

    @property
    def kind(self) -> ElementKind:
        return ElementKind.OTHER

    @property
    def simple_name(self) -> str:
        return f"capture-site#{self.site}"


@dataclass(frozen=True, repr=False)
class CapturedTypeParameterElement(Element):
    """Synthetic type parameter behind a captured wildcard."""

    captured: CapturedType

    @property
    def kind(self) -> ElementKind:
        return ElementKind.TYPE_PARAMETER

    @property
    def simple_name(self) -> str:
        return f"capture#{self.captured.token}"

    @property
    def generic_element(self) -> CaptureSiteElement:
        return CaptureSiteElement(self.captured.site)

    @property
    def enclosing_element(self) -> Element:
        return self.generic_element

    @property
    def bounds(self) -> tuple[TypeMirror, ...]:
        return (self.captured.upper_bound,)

    def as_type(self) -> CapturedType:
        return self.captured


# =============================================================================
# Construction and accessors
# =============================================================================


def declaration_of(
    native: NativePackage
    | NativeClass
    | NativeExecutable
    | NativeField
    | NativeParameter
    | NativeTypeVariable,
) -> Element:
    """Build the declaration for a native declaration.

    Raises:
        InvalidArgumentKind: If ``native`` is not a native declaration

    """
    match native:
        case NativePackage():
            return PackageElement(native)
        case NativeClass():
            return TypeElement(native)
        case NativeExecutable():
            return ExecutableElement(native)
        case NativeField() | NativeParameter():
            return VariableElement(native)
        case NativeTypeVariable():
            return TypeParameterElement(native)
    msg = f"Not a native declaration: {native!r}"
    raise InvalidArgumentKind(msg)


def enclosing(d: Element) -> Element | None:
    """The declaration ``d`` is declared in; None for packages."""
    return d.enclosing_element


def modifiers(d: Element) -> frozenset[Modifier]:
    return d.modifiers


def annotations_of(d: Element) -> tuple[AnnotationMirror, ...]:
    """Annotations present directly on ``d``."""
    return d.annotation_mirrors


def as_element(t: TypeMirror) -> Element | None:
    """The declaration behind a descriptor, if it has one."""
    match t:
        case DeclaredType(element=element) | TypeVariable(element=element):
            return element
        case ExecutableType(element=element) | PackageType(element=element):
            return element
        case CapturedType():
            return t.element
    return None
