"""The declaration source: native declarations, stub loading and class paths."""

from typemirror.source.classpath import (
    ClassPath,
    NativeMembers,
    self_type_expression,
    system_class_path,
)
from typemirror.source.native import (
    ArrayOf,
    ClassKind,
    ClassRef,
    NativeAnnotation,
    NativeClass,
    NativeExecutable,
    NativeField,
    NativePackage,
    NativeParameter,
    NativeType,
    NativeTypeVariable,
    Nesting,
    Parameterized,
    TypeVarRef,
    WildcardOf,
)
from typemirror.source.signatures import Scope, parse_bounds, parse_type

__all__ = [
    # Type expressions
    "ArrayOf",
    "ClassKind",
    # Class paths
    "ClassPath",
    "ClassRef",
    # Declarations
    "NativeAnnotation",
    "NativeClass",
    "NativeExecutable",
    "NativeField",
    "NativeMembers",
    "NativePackage",
    "NativeParameter",
    "NativeType",
    "NativeTypeVariable",
    "Nesting",
    "Parameterized",
    # Signatures
    "Scope",
    "TypeVarRef",
    "WildcardOf",
    "parse_bounds",
    "parse_type",
    "self_type_expression",
    "system_class_path",
]
