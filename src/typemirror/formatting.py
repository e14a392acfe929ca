"""Rendering descriptors in source syntax."""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from typemirror.errors import InvalidArgumentKind
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
    TypeMirror,
    TypeVariable,
    UnionType,
    VoidType,
    WildcardType,
)


def _declared_name(t: DeclaredType) -> str:
    if t.owner is not None and (t.owner.args or t.owner.owner is not None):
        name = f"{type_name(t.owner)}.{t.element.simple_name}"
    else:
        name = t.element.native.name
    if t.args:
        name += f"<{', '.join(type_name(a) for a in t.args)}>"
    return name


def _wildcard_name(t: WildcardType) -> str:
    if not isinstance(t.super_bound, NullType):
        return f"? super {type_name(t.super_bound)}"
    if t.is_unbounded:
        return "?"
    return f"? extends {type_name(t.extends_bound)}"


def _executable_name(t: ExecutableType) -> str:
    prefix = ""
    if t.type_variables:
        prefix = f"<{', '.join(type_name(v) for v in t.type_variables)}>"
    params = ", ".join(type_name(p) for p in t.parameter_types)
    result = f"{prefix}({params}){type_name(t.return_type)}"
    if t.thrown_types:
        result += f" throws {', '.join(type_name(x) for x in t.thrown_types)}"
    return result


_TYPE_FORMATTERS: dict[type[TypeMirror], Callable[[Any], str]] = {
    PrimitiveType: lambda t: t.kind.value,
    NoneType: lambda _: "none",
    VoidType: lambda _: "void",
    NullType: lambda _: "null",
    ArrayType: lambda t: f"{type_name(t.component)}[]",
    DeclaredType: _declared_name,
    TypeVariable: lambda t: t.element.simple_name,
    CapturedType: lambda t: f"capture#{t.token} of {_wildcard_name(t.wildcard)}",
    WildcardType: _wildcard_name,
    IntersectionType: lambda t: " & ".join(type_name(b) for b in t.bounds),
    UnionType: lambda t: " | ".join(type_name(a) for a in t.alternatives),
    ExecutableType: _executable_name,
    PackageType: lambda t: t.element.qualified_name,
}


def type_name(t: TypeMirror) -> str:
    """Human-readable source form of a descriptor, annotations first."""
    text = _TYPE_FORMATTERS[type(t)](t)
    if t.annotations:
        return " ".join([*(str(a) for a in t.annotations), text])
    return text


# =============================================================================
# Constant expressions
# =============================================================================

_ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}


def _escape(ch: str) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    code = ord(ch)
    if 31 < code < 127:
        return ch
    if code > 0xFFFF:
        # source text is UTF-16: one escape per surrogate
        code -= 0x10000
        return f"\\u{0xD800 + (code >> 10):04x}\\u{0xDC00 + (code & 0x3FF):04x}"
    return f"\\u{code:04x}"


def constant_expression(value: object) -> str:
    """Source literal for a primitive or string constant.

    Non-finite floats render as the division that produces them, and
    string characters outside printable ASCII are escaped.

    Raises:
        InvalidArgumentKind: If ``value`` is not a bool, int, float or str

    """
    match value:
        case bool(flag):
            return "true" if flag else "false"
        case int(number):
            return str(number)
        case float(number):
            if math.isnan(number):
                return "0.0/0.0"
            if math.isinf(number):
                return "1.0/0.0" if number > 0 else "-1.0/0.0"
            return repr(number)
        case str(text):
            return '"' + "".join(_escape(ch) for ch in text) + '"'
    msg = f"Not a constant value: {value!r} ({type(value).__name__})"
    raise InvalidArgumentKind(msg)
