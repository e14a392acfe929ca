"""Shared fixtures: a user class path with a small example library."""

import pytest

from typemirror import (
    ClassPath,
    DeclaredType,
    ElementKind,
    ExecutableElement,
    TypeElement,
    TypeMirror,
    TypeVariable,
    VariableElement,
    get_declared_type,
    system_class_path,
)

MARKER_RETENTION = {
    "type": "java.lang.annotation.Retention",
    "values": {"value": {"enum": "java.lang.annotation.RetentionPolicy.RUNTIME"}},
}

EXAMPLE = {
    "package": "com.example",
    "imports": ["java.util.*", "java.util.function.Supplier"],
    "types": [
        {
            "name": "Box",
            "modifiers": ["public"],
            "type_params": ["T extends Number"],
            "fields": [{"name": "value", "type": "T", "modifiers": ["protected"]}],
            "methods": [
                {"name": "get", "returns": "T", "modifiers": ["public"]},
                {
                    "name": "set",
                    "params": [{"name": "value", "type": "T"}],
                    "modifiers": ["public"],
                },
                {
                    "name": "create",
                    "type_params": ["U extends Number"],
                    "returns": "Box<U>",
                    "params": ["U"],
                    "modifiers": ["public", "static"],
                },
            ],
            "types": [
                {
                    "nesting": "anonymous",
                    "interfaces": ["Supplier<T>"],
                    "methods": [{"name": "get", "returns": "T", "modifiers": ["public"]}],
                },
            ],
        },
        {
            "name": "Outer",
            "modifiers": ["public"],
            "type_params": ["T"],
            "fields": [{"name": "inner", "type": "Inner"}],
            "methods": [
                {
                    "name": "shadow",
                    "type_params": ["T"],
                    "returns": "T",
                    "params": ["T"],
                    "modifiers": ["public"],
                },
            ],
            "types": [
                {
                    "name": "Inner",
                    "modifiers": ["public"],
                    "methods": [{"name": "outer", "returns": "T", "modifiers": ["public"]}],
                },
                {"name": "Nested", "modifiers": ["public", "static"]},
            ],
        },
        {
            "name": "Node",
            "modifiers": ["public"],
            "type_params": ["T extends Comparable<T>"],
            "fields": [{"name": "next", "type": "Node<T>"}],
        },
        {
            "name": "Marker",
            "kind": "annotation",
            "modifiers": ["public"],
            "annotations": ["java.lang.annotation.Inherited", MARKER_RETENTION],
            "methods": [
                {"name": "value", "returns": "String", "default": "none"},
                {"name": "priority", "returns": "int", "default": 1},
            ],
        },
        {"name": "Plain", "kind": "annotation", "modifiers": ["public"]},
        {
            "name": "Base",
            "modifiers": ["public"],
            "annotations": [{"type": "Marker", "values": {"value": "base"}}, "Plain"],
            "fields": [
                {"name": "count", "type": "int", "modifiers": ["protected"]},
                {"name": "secret", "type": "int", "modifiers": ["private"]},
            ],
            "methods": [
                {"name": "describe", "returns": "String", "modifiers": ["public"]},
                {"name": "create", "returns": "Base", "modifiers": ["public", "static"]},
                {"name": "internal"},
            ],
        },
        {
            "name": "Derived",
            "modifiers": ["public"],
            "superclass": "Base",
            "annotations": ["Deprecated"],
            "fields": [
                {"name": "count", "type": "long", "modifiers": ["public"]},
                {"name": "secret", "type": "int"},
                {"name": "label", "type": "@Marker String"},
            ],
            "methods": [
                {"name": "describe", "returns": "String", "modifiers": ["public"]},
                {"name": "create", "returns": "Derived", "modifiers": ["public", "static"]},
                {
                    "name": "setCount",
                    "params": [{"name": "count", "type": "long"}],
                    "modifiers": ["public"],
                },
            ],
        },
        {
            "name": "Version",
            "modifiers": ["public", "final"],
            "interfaces": ["Comparable<Version>"],
            "methods": [
                {
                    "name": "compareTo",
                    "returns": "int",
                    "params": ["Version"],
                    "modifiers": ["public"],
                },
            ],
        },
        {"name": "Color", "kind": "enum", "modifiers": ["public"], "constants": ["RED", "GREEN"]},
    ],
}

OTHER = {
    "package": "com.other",
    "imports": ["com.example.Base"],
    "types": [
        {
            "name": "Remote",
            "modifiers": ["public"],
            "superclass": "Base",
            "methods": [
                {"name": "internal"},
                {"name": "describe", "returns": "String", "modifiers": ["public"]},
            ],
        },
    ],
}


@pytest.fixture(scope="session")
def class_path() -> ClassPath:
    """Class path holding the example library on top of the system class path."""
    path = ClassPath()
    path.load(EXAMPLE, OTHER)
    return path


def element(name: str, class_path: ClassPath | None = None) -> TypeElement:
    """Type element of a class on the given (or system) class path."""
    return TypeElement((class_path or system_class_path()).require_type(name))


def declared(name: str, *args: TypeMirror, class_path: ClassPath | None = None) -> DeclaredType:
    """Create a declared type, parameterized by ``args`` when given."""
    return get_declared_type(element(name, class_path), *args)


def type_var(name: str, index: int = 0, class_path: ClassPath | None = None) -> TypeVariable:
    """Type variable of a generic class."""
    return element(name, class_path).type_parameters[index].as_type()


def method(owner: TypeElement, name: str, arity: int | None = None) -> ExecutableElement:
    """First method of ``owner`` called ``name`` (with ``arity`` parameters when given)."""
    for member in owner.enclosed_elements:
        if (
            isinstance(member, ExecutableElement)
            and member.kind is ElementKind.METHOD
            and member.simple_name == name
            and (arity is None or len(member.parameters) == arity)
        ):
            return member
    msg = f"{owner.qualified_name} has no method {name}"
    raise LookupError(msg)


def field(owner: TypeElement, name: str) -> VariableElement:
    """Field of ``owner`` called ``name``."""
    for member in owner.enclosed_elements:
        if (
            isinstance(member, VariableElement)
            and member.kind in (ElementKind.FIELD, ElementKind.ENUM_CONSTANT)
            and member.simple_name == name
        ):
            return member
    msg = f"{owner.qualified_name} has no field {name}"
    raise LookupError(msg)
