"""Loading native declarations from stub documents.

A stub document describes one package::

    {
        "package": "com.example",
        "imports": ["java.util.List"],
        "types": [
            {
                "name": "Box",
                "kind": "class",
                "modifiers": ["public"],
                "type_params": ["T extends Number"],
                "interfaces": ["java.lang.Comparable<Box<T>>"],
                "fields": [{"name": "value", "type": "T"}],
                "methods": [{"name": "get", "returns": "T"}],
            }
        ],
    }

Loading runs in two passes so that types may refer to each other (and to
themselves) in any order: first every class and type variable is declared,
then supertypes, members and annotations are parsed. Annotations of a
package are attached only once every body has been parsed, and
`ClassPath.load` discards the declarations of a load that fails.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from typemirror.errors import StructuralMismatch
from typemirror.modifiers import Access, access_of_keywords
from typemirror.source.native import (
    ClassKind,
    ClassRef,
    NativeAnnotation,
    NativeClass,
    NativeExecutable,
    NativeField,
    NativePackage,
    NativeParameter,
    NativeTypeVariable,
    Nesting,
    Parameterized,
)
from typemirror.source.signatures import (
    Scope,
    parse_bounds,
    parse_type,
    split_type_parameter,
)

if TYPE_CHECKING:
    from typemirror.source.classpath import ClassPath

logger = logging.getLogger(__name__)

OBJECT = "java.lang.Object"
ENUM = "java.lang.Enum"
ANNOTATION = "java.lang.annotation.Annotation"

_KIND_ACCESS = {
    ClassKind.CLASS: Access(0),
    ClassKind.INTERFACE: Access.INTERFACE | Access.ABSTRACT,
    ClassKind.ENUM: Access.ENUM,
    ClassKind.ANNOTATION: Access.ANNOTATION | Access.INTERFACE | Access.ABSTRACT,
}


@dataclass
class _Pending:
    """A class declared in the first pass, waiting for its body."""

    cls: NativeClass
    entry: Mapping[str, Any]
    scope: Scope


def load_stubs(class_path: ClassPath, documents: Iterable[Mapping[str, Any]]) -> list[NativeClass]:
    """Declare every type of ``documents`` in ``class_path``.

    Args:
        class_path: The class path receiving the declarations
        documents: Stub documents, one per package

    Returns:
        The newly declared classes, nested ones included, in document order

    Raises:
        StructuralMismatch: If a document is malformed or redeclares a type
        SignatureError: If a type expression cannot be parsed

    """
    pending: list[_Pending] = []
    packages: list[tuple[NativePackage, Mapping[str, Any], Scope]] = []
    for document in documents:
        if not isinstance(document, Mapping) or "package" not in document:
            msg = "Stub document must be an object with a 'package' field"
            raise StructuralMismatch(msg)
        package = class_path.define_package(document["package"])
        scope = Scope(
            class_path=class_path,
            package=package.name,
            imports=tuple(document.get("imports", ())),
        )
        packages.append((package, document, scope))
        for entry in document.get("types", ()):
            _declare(class_path, package, entry, None, scope, pending)
        logger.debug(
            "Declared %d type(s) in package %s", len(document.get("types", ())), package.name
        )

    package_annotations = [
        (package, _annotations(document.get("annotations", ()), scope))
        for package, document, scope in packages
    ]
    for item in pending:
        _define(item.cls, item.entry, item.scope)
    for package, annotations in package_annotations:
        package.annotations.extend(annotations)
    return [item.cls for item in pending]


def load_json_stubs(class_path: ClassPath, text: str) -> list[NativeClass]:
    """Load one stub document, or a JSON array of them, from JSON text.

    Raises:
        StructuralMismatch: If the JSON is not a document or list of documents

    """
    data = json.loads(text)
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        msg = "Expected a JSON object or array of stub documents"
        raise StructuralMismatch(msg)
    return load_stubs(class_path, data)


# =============================================================================
# Pass 1: declarations
# =============================================================================


def _declare(
    class_path: ClassPath,
    package: NativePackage,
    entry: Mapping[str, Any],
    enclosing: NativeClass | None,
    outer_scope: Scope,
    pending: list[_Pending],
) -> NativeClass:
    if not isinstance(entry, Mapping):
        msg = f"Type entry must be an object, got {entry!r}"
        raise StructuralMismatch(msg)
    kind = _choice(ClassKind, entry.get("kind", "class"))
    nesting = _choice(Nesting, entry.get("nesting", "member" if enclosing else "top_level"))
    simple_name = entry.get("name", "")
    if enclosing is None:
        if nesting is not Nesting.TOP_LEVEL:
            msg = f"Only nested types can be {nesting.value} ({simple_name!r})"
            raise StructuralMismatch(msg)
        name = f"{package.name}.{simple_name}" if package.name else simple_name
    elif nesting is Nesting.MEMBER:
        name = f"{enclosing.name}.{simple_name}"
    else:
        index = len(class_path.local_classes(enclosing)) + 1
        name = f"{enclosing.binary_name}${index}{simple_name}"
    if not simple_name and nesting is not Nesting.ANONYMOUS:
        msg = "Only anonymous types may omit their name"
        raise StructuralMismatch(msg)

    cls = NativeClass(
        name=name,
        simple_name=simple_name,
        kind=kind,
        package=package,
        access=access_of_keywords(entry.get("modifiers", ())) | _KIND_ACCESS[kind],
        nesting=nesting,
        enclosing=enclosing,
    )
    if kind is ClassKind.ENUM and nesting is Nesting.MEMBER:
        cls.access |= Access.STATIC
    cls.type_parameters = [
        NativeTypeVariable(split_type_parameter(text)[0], cls)
        for text in entry.get("type_params", ())
    ]
    class_path.register(cls)
    if enclosing is not None and nesting is Nesting.MEMBER:
        enclosing.member_classes.append(cls)

    for constant in entry.get("constants", ()):
        cls.fields.append(
            NativeField(
                name=constant,
                declarer=cls,
                type=ClassRef(cls),
                access=Access.PUBLIC | Access.STATIC | Access.FINAL | Access.ENUM,
                enum_constant=True,
            )
        )

    outer_variables = {} if cls.is_static else outer_scope.type_variables
    scope = Scope(
        class_path=class_path,
        package=outer_scope.package,
        imports=outer_scope.imports,
        type_variables=outer_variables,
    ).child(cls.type_parameters, context=cls)
    pending.append(_Pending(cls, entry, scope))
    for nested in entry.get("types", ()):
        _declare(class_path, package, nested, cls, scope, pending)
    return cls


# =============================================================================
# Pass 2: bodies
# =============================================================================


def _define(cls: NativeClass, entry: Mapping[str, Any], scope: Scope) -> None:
    _bind_type_parameters(cls.type_parameters, entry.get("type_params", ()), scope)
    lookup = scope.class_path.require_type

    if "superclass" in entry:
        cls.superclass = parse_type(entry["superclass"], scope)
    elif cls.kind is ClassKind.CLASS and cls.name != OBJECT:
        cls.superclass = ClassRef(lookup(OBJECT))
    elif cls.kind is ClassKind.ENUM:
        cls.superclass = Parameterized(lookup(ENUM), (ClassRef(cls),))
    cls.interfaces = [parse_type(text, scope) for text in entry.get("interfaces", ())]
    if cls.kind is ClassKind.ANNOTATION:
        cls.interfaces.append(ClassRef(lookup(ANNOTATION)))
    cls.annotations.extend(_annotations(entry.get("annotations", ()), scope))

    for field_entry in entry.get("fields", ()):
        name = _required(field_entry, "name", cls.name)
        text = _required(field_entry, "type", cls.name)
        access = access_of_keywords(field_entry.get("modifiers", ()))
        if cls.is_interface:
            access |= Access.PUBLIC | Access.STATIC | Access.FINAL
        cls.fields.append(
            NativeField(
                name=name,
                declarer=cls,
                type=parse_type(text, scope),
                access=access,
                constant_value=field_entry.get("value"),
                annotations=_annotations(field_entry.get("annotations", ()), scope),
            )
        )

    constructors = entry.get("constructors")
    if constructors is None and cls.kind in (ClassKind.CLASS, ClassKind.ENUM):
        default_access = "private" if cls.kind is ClassKind.ENUM else None
        constructors = [{"modifiers": _visibility(cls, default_access)}]
    for ctor_entry in constructors or ():
        cls.constructors.append(_executable(cls, "<init>", ctor_entry, scope, constructor=True))
    for method_entry in entry.get("methods", ()):
        name = _required(method_entry, "name", cls.name)
        cls.methods.append(_executable(cls, name, method_entry, scope))


def _required(entry: Any, key: str, where: str) -> Any:
    if not isinstance(entry, Mapping) or key not in entry:
        msg = f"Entry in {where} is missing {key!r}: {entry!r}"
        raise StructuralMismatch(msg)
    return entry[key]


def _choice[E: StrEnum](enum: type[E], value: Any) -> E:
    try:
        return enum(value)
    except ValueError:
        msg = f"Unknown {enum.__name__} {value!r}, expected one of: {', '.join(enum)}"
        raise StructuralMismatch(msg) from None


def _visibility(cls: NativeClass, fallback: str | None) -> list[str]:
    for flag, keyword in (
        (Access.PUBLIC, "public"),
        (Access.PROTECTED, "protected"),
        (Access.PRIVATE, "private"),
    ):
        if flag in cls.access:
            return [keyword]
    return [fallback] if fallback else []


def _bind_type_parameters(
    variables: list[NativeTypeVariable], texts: Sequence[str], scope: Scope
) -> None:
    for variable, text in zip(variables, texts, strict=True):
        _, bounds = split_type_parameter(text)
        if bounds:
            variable.bounds = parse_bounds(bounds, scope)


def _executable(
    cls: NativeClass,
    name: str,
    entry: Mapping[str, Any],
    class_scope: Scope,
    *,
    constructor: bool = False,
) -> NativeExecutable:
    keywords = list(entry.get("modifiers", ()))
    access = access_of_keywords(keywords)
    if cls.is_interface and not constructor:
        if "default" in keywords or "static" in keywords:
            access |= Access.PUBLIC
        elif "private" not in keywords:
            access |= Access.PUBLIC | Access.ABSTRACT
    executable = NativeExecutable(
        name=name,
        declarer=cls,
        access=access,
        is_constructor=constructor,
        default_value=entry.get("default"),
    )
    executable.type_parameters = [
        NativeTypeVariable(split_type_parameter(text)[0], executable)
        for text in entry.get("type_params", ())
    ]
    scope = class_scope.child(executable.type_parameters)
    _bind_type_parameters(executable.type_parameters, entry.get("type_params", ()), scope)

    if constructor:
        executable.return_type = ClassRef(scope.class_path.require_type("void"))
    else:
        executable.return_type = parse_type(entry.get("returns", "void"), scope)
    params = entry.get("params", ())
    for index, param in enumerate(params):
        if isinstance(param, str):
            param = {"type": param}
        text = _required(param, "type", cls.name)
        if text.rstrip().endswith("..."):
            if index != len(params) - 1:
                msg = f"Only the last parameter of {cls.name}.{name} may be variadic"
                raise StructuralMismatch(msg)
            executable.varargs = True
        executable.parameters.append(
            NativeParameter(
                name=param.get("name", f"arg{index}"),
                declarer=executable,
                type=parse_type(text, scope),
                access=access_of_keywords(param.get("modifiers", ())),
                annotations=_annotations(param.get("annotations", ()), scope),
            )
        )
    executable.thrown = [parse_type(text, scope) for text in entry.get("throws", ())]
    executable.annotations = _annotations(entry.get("annotations", ()), scope)
    if executable.default_value is not None:
        executable.default_value = _annotation_value(executable.default_value, scope)
    return executable


# =============================================================================
# Annotations
# =============================================================================


def _annotations(entries: Iterable[Any], scope: Scope) -> list[NativeAnnotation]:
    return [_annotation(entry, scope) for entry in entries]


def _annotation(entry: Any, scope: Scope) -> NativeAnnotation:
    if isinstance(entry, str):
        entry = {"type": entry}
    name = _required(entry, "type", "annotation").removeprefix("@")
    cls = scope.resolve_class(name)
    if cls is None or cls.kind is not ClassKind.ANNOTATION:
        msg = f"Not an annotation type: {name!r}"
        raise StructuralMismatch(msg)
    values = {
        key: _annotation_value(value, scope) for key, value in entry.get("values", {}).items()
    }
    return NativeAnnotation(cls, values)


def _annotation_value(raw: Any, scope: Scope) -> object:
    """Convert a stub annotation value into its native form.

    Class literals are written ``{"class": "java.lang.String"}``, enum
    constants ``{"enum": "java.lang.annotation.RetentionPolicy.RUNTIME"}``
    and nested annotations ``{"annotation": {...}}``.
    """
    match raw:
        case {"class": str(name)}:
            cls = scope.resolve_class(name)
            if cls is None:
                msg = f"Cannot resolve class literal {name!r}"
                raise StructuralMismatch(msg)
            return cls
        case {"enum": str(qualified)}:
            owner_name, _, constant = qualified.rpartition(".")
            owner = scope.resolve_class(owner_name)
            for candidate in owner.fields if owner is not None else ():
                if candidate.enum_constant and candidate.name == constant:
                    return candidate
            msg = f"Cannot resolve enum constant {qualified!r}"
            raise StructuralMismatch(msg)
        case {"annotation": nested}:
            return _annotation(nested, scope)
        case list() | tuple():
            return tuple(_annotation_value(item, scope) for item in raw)
    return raw
