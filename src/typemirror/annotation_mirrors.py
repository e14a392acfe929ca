"""Annotation mirrors and annotation values.

Bridges native annotation instances and attribute values into immutable
mirrors that refer to declarations and descriptors instead of native
objects.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from typemirror.elements import ExecutableElement, TypeElement, VariableElement
from typemirror.errors import StructuralMismatch, UnsupportedValueKind
from typemirror.formatting import constant_expression
from typemirror.source.native import NativeAnnotation, NativeClass, NativeField
from typemirror.types import DeclaredType, PrimitiveType, TypeKind, TypeMirror, VoidType


@dataclass(frozen=True)
class AnnotationValue:
    """A single attribute value.

    ``value`` is a bool, int, float or str, a `TypeMirror` for class
    literals, a `VariableElement` for enum constants, an `AnnotationMirror`
    for nested annotations, or a tuple of `AnnotationValue` for arrays.
    """

    value: object

    def __str__(self) -> str:
        match self.value:
            case bool() | int() | float() | str():
                return constant_expression(self.value)
            case TypeMirror():
                return f"{self.value}.class"
            case VariableElement(simple_name=name):
                return name
            case tuple(items):
                return "{" + ", ".join(str(item) for item in items) + "}"
        return str(self.value)


@dataclass(frozen=True)
class AnnotationMirror:
    """An annotation: its type plus the attribute values given explicitly."""

    annotation_type: DeclaredType
    values: tuple[tuple[ExecutableElement, AnnotationValue], ...] = ()

    @property
    def element_values(self) -> Mapping[ExecutableElement, AnnotationValue]:
        return dict(self.values)

    def __str__(self) -> str:
        name = f"@{self.annotation_type.element.qualified_name}"
        if not self.values:
            return name
        rendered = ", ".join(f"{attribute.simple_name}={value}" for attribute, value in self.values)
        return f"{name}({rendered})"


def _class_literal(cls: NativeClass) -> TypeMirror:
    if cls.is_primitive:
        return VoidType() if cls.name == "void" else PrimitiveType(TypeKind(cls.name))
    return DeclaredType(TypeElement(cls))


def _category(value: AnnotationValue) -> str:
    inner = value.value
    if isinstance(inner, tuple):
        msg = "Annotation arrays cannot be nested"
        raise UnsupportedValueKind(msg)
    match inner:
        case TypeMirror():
            return "class"
        case VariableElement(native=constant):
            return f"enum {constant.declarer.name}"
        case AnnotationMirror(annotation_type=annotation_type):
            return f"annotation {annotation_type.element.qualified_name}"
    return type(inner).__name__


def to_annotation_value(obj: object) -> AnnotationValue:
    """Wrap a native attribute value.

    Raises:
        UnsupportedValueKind: If the value is not a primitive, string, class
            literal, enum constant, nested annotation or a homogeneous
            one-dimensional array of those

    """
    match obj:
        case AnnotationValue():
            return obj
        case bool() | int() | float() | str():
            return AnnotationValue(obj)
        case NativeClass():
            return AnnotationValue(_class_literal(obj))
        case NativeField(enum_constant=True):
            return AnnotationValue(VariableElement(obj))
        case NativeAnnotation():
            return AnnotationValue(to_annotation_mirror(obj))
        case list() | tuple():
            items = tuple(to_annotation_value(item) for item in obj)
            if len({_category(item) for item in items}) > 1:
                msg = "Annotation array elements must all have the same kind"
                raise UnsupportedValueKind(msg)
            return AnnotationValue(items)
    msg = f"Unsupported annotation value: {obj!r} ({type(obj).__name__})"
    raise UnsupportedValueKind(msg)


def to_annotation_mirror(annotation: NativeAnnotation) -> AnnotationMirror:
    """Mirror a native annotation, listing its values in attribute declaration order.

    Raises:
        StructuralMismatch: If a value is given for an attribute the
            annotation type does not declare

    """
    attributes = annotation.annotation_type.methods
    known = {method.name for method in attributes}
    if unknown := set(annotation.values) - known:
        msg = (
            f"@{annotation.annotation_type.name} has no attribute(s) "
            f"{', '.join(sorted(unknown))}"
        )
        raise StructuralMismatch(msg)
    values = tuple(
        (ExecutableElement(method), to_annotation_value(annotation.values[method.name]))
        for method in attributes
        if method.name in annotation.values
    )
    return AnnotationMirror(DeclaredType(TypeElement(annotation.annotation_type)), values)


def get_element_values_with_defaults(
    mirror: AnnotationMirror,
) -> dict[ExecutableElement, AnnotationValue]:
    """Explicit values of ``mirror`` plus attribute defaults, in declaration order."""
    explicit = mirror.element_values
    result = {}
    for method in mirror.annotation_type.element.native.methods:
        attribute = ExecutableElement(method)
        if attribute in explicit:
            result[attribute] = explicit[attribute]
        elif (default := attribute.default_value) is not None:
            result[attribute] = default
    return result
