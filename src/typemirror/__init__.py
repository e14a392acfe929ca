"""typemirror - a nominal, generic, annotated type algebra for Python 3.12+."""

import logging

from typemirror.annotation_mirrors import (
    AnnotationMirror,
    AnnotationValue,
    get_element_values_with_defaults,
    to_annotation_mirror,
    to_annotation_value,
)
from typemirror.capture import capture
from typemirror.elements import (
    CapturedTypeParameterElement,
    CaptureSiteElement,
    Element,
    ElementKind,
    ExecutableElement,
    PackageElement,
    TypeElement,
    TypeParameterElement,
    VariableElement,
    annotations_of,
    as_element,
    declaration_of,
    enclosing,
    modifiers,
)
from typemirror.erasure import erase
from typemirror.errors import (
    InvalidArgumentKind,
    NoErasure,
    NotAMember,
    SignatureError,
    StructuralMismatch,
    TypeMirrorError,
    TypeNotFound,
    UnsupportedKind,
    UnsupportedValueKind,
)
from typemirror.factory import (
    boxed_class,
    declared_type_of,
    descriptor_of,
    get_array_type,
    get_declared_type,
    get_no_type,
    get_null_type,
    get_primitive_type,
    get_wildcard_type,
    object_type,
    unboxed_type,
)
from typemirror.formatting import constant_expression, type_name
from typemirror.members import (
    get_all_annotation_mirrors,
    get_binary_name,
    get_package_element,
    get_package_of,
    get_type_element,
    hides,
    is_deprecated,
    members,
    overrides,
)
from typemirror.modifiers import Access, Modifier
from typemirror.source import ClassPath, system_class_path
from typemirror.substitution import as_member_of, resolve_supertype, substitute
from typemirror.subtyping import (
    contains,
    is_assignable,
    is_same_type,
    is_subsignature,
    is_subtype,
)
from typemirror.supertypes import (
    all_supertypes,
    direct_supertypes,
    greatest_lower_bound,
    least_upper_bounds,
)
from typemirror.types import (
    ArrayType,
    CapturedType,
    DeclaredType,
    ExecutableType,
    IntersectionType,
    NoneType,
    NullType,
    PackageType,
    PrimitiveType,
    TypeKind,
    TypeMirror,
    TypeVariable,
    UnionType,
    VoidType,
    WildcardType,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Modifiers
    "Access",
    # Annotations
    "AnnotationMirror",
    "AnnotationValue",
    # Type descriptors
    "ArrayType",
    "CaptureSiteElement",
    "CapturedType",
    "CapturedTypeParameterElement",
    # Declaration source
    "ClassPath",
    "DeclaredType",
    # Declarations
    "Element",
    "ElementKind",
    "ExecutableElement",
    "ExecutableType",
    "IntersectionType",
    # Errors
    "InvalidArgumentKind",
    "Modifier",
    "NoErasure",
    "NoneType",
    "NotAMember",
    "NullType",
    "PackageElement",
    "PackageType",
    "PrimitiveType",
    "SignatureError",
    "StructuralMismatch",
    "TypeElement",
    "TypeKind",
    "TypeMirror",
    "TypeMirrorError",
    "TypeNotFound",
    "TypeParameterElement",
    "TypeVariable",
    "UnionType",
    "UnsupportedKind",
    "UnsupportedValueKind",
    "VariableElement",
    "VoidType",
    # Operations
    "all_supertypes",
    "annotations_of",
    "as_element",
    "as_member_of",
    "boxed_class",
    "capture",
    "constant_expression",
    "contains",
    "declaration_of",
    "declared_type_of",
    "descriptor_of",
    "direct_supertypes",
    "enclosing",
    "erase",
    "get_all_annotation_mirrors",
    "get_array_type",
    "get_binary_name",
    "get_declared_type",
    "get_element_values_with_defaults",
    "get_no_type",
    "get_null_type",
    "get_package_element",
    "get_package_of",
    "get_primitive_type",
    "get_type_element",
    "get_wildcard_type",
    "greatest_lower_bound",
    "hides",
    "is_assignable",
    "is_deprecated",
    "is_same_type",
    "is_subsignature",
    "is_subtype",
    "least_upper_bounds",
    "members",
    "modifiers",
    "object_type",
    "overrides",
    "resolve_supertype",
    "substitute",
    "system_class_path",
    "to_annotation_mirror",
    "to_annotation_value",
    "type_name",
    "unboxed_type",
]
