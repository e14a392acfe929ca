"""Type descriptors: immutable values representing type expressions.

Descriptors are frozen dataclasses compared structurally, with two
exceptions: annotations never take part in equality, and a
`CapturedType` compares only by the token minted when it was created.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar, dataclass_transform

from typemirror.errors import InvalidArgumentKind, StructuralMismatch

if TYPE_CHECKING:
    from typemirror.annotation_mirrors import AnnotationMirror
    from typemirror.elements import (
        CapturedTypeParameterElement,
        ExecutableElement,
        PackageElement,
        TypeElement,
        TypeParameterElement,
    )


class TypeKind(StrEnum):
    """Kind of a type descriptor."""

    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    CHAR = "char"
    FLOAT = "float"
    DOUBLE = "double"
    VOID = "void"
    NONE = "none"
    NULL = "null"
    ARRAY = "array"
    DECLARED = "declared"
    TYPEVAR = "typevar"
    WILDCARD = "wildcard"
    PACKAGE = "package"
    EXECUTABLE = "executable"
    UNION = "union"
    INTERSECTION = "intersection"

    @property
    def is_primitive(self) -> bool:
        return self in _PRIMITIVE_KINDS


_PRIMITIVE_KINDS = frozenset(
    {
        TypeKind.BOOLEAN,
        TypeKind.BYTE,
        TypeKind.SHORT,
        TypeKind.INT,
        TypeKind.LONG,
        TypeKind.CHAR,
        TypeKind.FLOAT,
        TypeKind.DOUBLE,
    }
)


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TypeMirror:
    """Base for type descriptors.

    Subclasses are turned into frozen dataclasses automatically and declare
    their kind in the class statement: ``class ArrayType(TypeMirror,
    kind=TypeKind.ARRAY)``.
    """

    kind: ClassVar[TypeKind]
    annotations: tuple[AnnotationMirror, ...] = field(
        default=(), compare=False, kw_only=True, repr=False
    )

    def __init_subclass__(cls, kind: TypeKind | None = None) -> None:
        dataclass(frozen=True)(cls)
        if kind is not None:
            cls.kind = kind

    def __str__(self) -> str:
        from typemirror.formatting import type_name

        return type_name(self)


class PrimitiveType(TypeMirror):
    """One of the eight primitive types."""

    kind: TypeKind  # type: ignore[misc]

    def __post_init__(self) -> None:
        if not self.kind.is_primitive:
            msg = f"Not a primitive kind: {self.kind}"
            raise InvalidArgumentKind(msg)


class NoneType(TypeMirror, kind=TypeKind.NONE):
    """Absence of a type, e.g. the enclosing type of a top-level class."""


class VoidType(TypeMirror, kind=TypeKind.VOID):
    """Return type of a method that returns nothing."""


class NullType(TypeMirror, kind=TypeKind.NULL):
    """Type of the null literal; subtype of every reference type."""


class ArrayType(TypeMirror, kind=TypeKind.ARRAY):
    """Array type: ``String[]`` -> ArrayType(DeclaredType(String))."""

    component: TypeMirror

    def __post_init__(self) -> None:
        if isinstance(self.component, (ExecutableType, PackageType, WildcardType)):
            msg = f"Invalid array component kind: {self.component.kind}"
            raise InvalidArgumentKind(msg)


class DeclaredType(TypeMirror, kind=TypeKind.DECLARED):
    """A use of a class or interface, possibly parameterized.

    ``owner`` is the enclosing type for non-static member classes and None
    otherwise. ``args`` is empty for non-generic and raw uses.
    """

    element: TypeElement
    args: tuple[TypeMirror, ...] = ()
    owner: DeclaredType | None = None

    def __post_init__(self) -> None:
        expected = len(self.element.native.type_parameters)
        if self.args and len(self.args) != expected:
            msg = (
                f"{self.element.qualified_name} expects {expected} type argument(s), "
                f"got {len(self.args)}"
            )
            raise StructuralMismatch(msg)
        for arg in self.args:
            if not isinstance(arg, (*REFERENCE_TYPES, WildcardType)) or isinstance(
                arg, IntersectionType
            ):
                msg = f"Invalid type argument kind: {arg.kind}"
                raise InvalidArgumentKind(msg)

    @property
    def enclosing_type(self) -> TypeMirror:
        return self.owner if self.owner is not None else NoneType()

    @property
    def is_raw(self) -> bool:
        """True for an argument-less use of a generic declaration."""
        return not self.args and bool(self.element.native.type_parameters)


class TypeVariable(TypeMirror, kind=TypeKind.TYPEVAR):
    """A use of a declared type parameter."""

    element: TypeParameterElement

    @property
    def upper_bound(self) -> TypeMirror:
        bounds = self.element.bounds
        return bounds[0] if len(bounds) == 1 else IntersectionType(tuple(bounds))

    @property
    def lower_bound(self) -> TypeMirror:
        return NullType()


class WildcardType(TypeMirror, kind=TypeKind.WILDCARD):
    """A wildcard type argument.

    Unspecified bounds default to ``Object`` (extends) and the null type
    (super); at most one side may be given explicitly.
    """

    extends_bound: TypeMirror | None = None
    super_bound: TypeMirror | None = None

    def __post_init__(self) -> None:
        from typemirror.factory import is_object, object_type

        extends_bound, super_bound = self.extends_bound, self.super_bound
        if extends_bound is not None and is_object(extends_bound):
            extends_bound = None
        if isinstance(super_bound, NullType):
            super_bound = None
        if extends_bound is not None and super_bound is not None:
            msg = "A wildcard cannot have both an extends and a super bound"
            raise StructuralMismatch(msg)
        for bound in (extends_bound, super_bound):
            if isinstance(bound, (WildcardType, ExecutableType, PackageType, PrimitiveType)):
                msg = f"Invalid wildcard bound kind: {bound.kind}"
                raise InvalidArgumentKind(msg)
        object.__setattr__(self, "extends_bound", extends_bound or object_type())
        object.__setattr__(self, "super_bound", super_bound or NullType())

    @property
    def is_unbounded(self) -> bool:
        from typemirror.factory import is_object

        return is_object(self.extends_bound) and isinstance(self.super_bound, NullType)


class CapturedType(TypeMirror, kind=TypeKind.TYPEVAR):
    """A fresh type variable standing for a captured wildcard.

    Only ``token`` takes part in equality and hashing: two captures of equal
    wildcards are different types.
    """

    wildcard: WildcardType = field(compare=False)
    token: int
    site: int = field(default=0, compare=False)

    @property
    def upper_bound(self) -> TypeMirror:
        return self.wildcard.extends_bound

    @property
    def lower_bound(self) -> TypeMirror:
        return self.wildcard.super_bound

    @property
    def element(self) -> CapturedTypeParameterElement:
        from typemirror.elements import CapturedTypeParameterElement

        return CapturedTypeParameterElement(self)


class IntersectionType(TypeMirror, kind=TypeKind.INTERSECTION):
    """``A & B``; holds at least two bounds."""

    bounds: tuple[TypeMirror, ...]

    def __post_init__(self) -> None:
        if len(self.bounds) < 2:
            msg = "An intersection type needs at least two bounds"
            raise StructuralMismatch(msg)


class UnionType(TypeMirror, kind=TypeKind.UNION):
    """``A | B``; holds at least two alternatives."""

    alternatives: tuple[TypeMirror, ...]

    def __post_init__(self) -> None:
        if len(self.alternatives) < 2:
            msg = "A union type needs at least two alternatives"
            raise StructuralMismatch(msg)


class ExecutableType(TypeMirror, kind=TypeKind.EXECUTABLE):
    """The type of a method or constructor, as seen from some containing type."""

    element: ExecutableElement
    type_variables: tuple[TypeVariable, ...]
    return_type: TypeMirror
    parameter_types: tuple[TypeMirror, ...]
    receiver_type: TypeMirror
    thrown_types: tuple[TypeMirror, ...]


class PackageType(TypeMirror, kind=TypeKind.PACKAGE):
    """Pseudo-type of a package."""

    element: PackageElement


REFERENCE_TYPES = (ArrayType, DeclaredType, TypeVariable, CapturedType, NullType, IntersectionType)


def is_reference(t: TypeMirror) -> bool:
    return isinstance(t, REFERENCE_TYPES)
