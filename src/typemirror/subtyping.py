"""Subtyping, assignability and type identity.

`is_subtype` is the strict relation: primitive widening and reference
subtyping with wildcard containment, nothing else. `is_assignable` also
allows boxing, unboxing and unchecked conversion from raw types.
"""

from __future__ import annotations

from typemirror.erasure import erase
from typemirror.errors import InvalidArgumentKind
from typemirror.factory import boxed_class, is_object, unboxed_kind
from typemirror.substitution import resolve_supertype, substitute
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

_ARRAY_SUPERTYPES = frozenset({"java.lang.Object", "java.lang.Cloneable", "java.io.Serializable"})

# Widening primitive conversions: each kind widens to the kinds listed.
_WIDENING: dict[TypeKind, frozenset[TypeKind]] = {
    TypeKind.BYTE: frozenset(
        {TypeKind.SHORT, TypeKind.INT, TypeKind.LONG, TypeKind.FLOAT, TypeKind.DOUBLE}
    ),
    TypeKind.SHORT: frozenset({TypeKind.INT, TypeKind.LONG, TypeKind.FLOAT, TypeKind.DOUBLE}),
    TypeKind.CHAR: frozenset({TypeKind.INT, TypeKind.LONG, TypeKind.FLOAT, TypeKind.DOUBLE}),
    TypeKind.INT: frozenset({TypeKind.LONG, TypeKind.FLOAT, TypeKind.DOUBLE}),
    TypeKind.LONG: frozenset({TypeKind.FLOAT, TypeKind.DOUBLE}),
    TypeKind.FLOAT: frozenset({TypeKind.DOUBLE}),
}


def _require_type(t: TypeMirror) -> None:
    if isinstance(t, (ExecutableType, PackageType)):
        msg = f"Expected a type, got a {t.kind} type"
        raise InvalidArgumentKind(msg)


def is_subtype(t1: TypeMirror, t2: TypeMirror) -> bool:
    """Check if t1 is a subtype of t2.

    Args:
        t1: The potential subtype.
        t2: The potential supertype.

    Returns:
        True if t1 is a subtype of t2 without boxing or unchecked conversion.

    Raises:
        InvalidArgumentKind: If either side is an executable or package type

    """
    _require_type(t1)
    _require_type(t2)
    return _check(t1, t2, unchecked=False)


def is_assignable(t1: TypeMirror, t2: TypeMirror) -> bool:
    """Check if a value of type t1 can be assigned to a variable of type t2.

    Besides subtyping this allows boxing, unboxing followed by widening,
    and unchecked conversion from a raw type to any parameterization.

    Raises:
        InvalidArgumentKind: If either side is an executable or package type

    """
    _require_type(t1)
    _require_type(t2)
    return _check(t1, t2, unchecked=True)


def _check(s: TypeMirror, t: TypeMirror, *, unchecked: bool) -> bool:
    if s is t:
        return True
    match s, t:
        case _, IntersectionType(bounds):
            return all(_check(s, b, unchecked=unchecked) for b in bounds)
        case UnionType(alternatives), _:
            return all(_check(a, t, unchecked=unchecked) for a in alternatives)
        case IntersectionType(bounds), _:
            return any(_check(b, t, unchecked=unchecked) for b in bounds)
        case _, UnionType(alternatives):
            return any(_check(s, a, unchecked=unchecked) for a in alternatives)
    return _compare(s, t, unchecked=unchecked)


def _compare(s: TypeMirror, t: TypeMirror, *, unchecked: bool) -> bool:
    # Wildcards are only subtypes of themselves by identity, checked by the caller.
    if not isinstance(s, WildcardType) and s == t:
        return True
    if isinstance(s, PrimitiveType) or isinstance(t, PrimitiveType):
        return _primitive(s, t, unchecked=unchecked)
    if isinstance(s, (NoneType, VoidType)) or isinstance(t, (NoneType, VoidType)):
        return False
    if isinstance(s, NullType) or is_object(t):
        return True

    # A type below the lower bound of a captured variable or wildcard is below the type itself.
    if isinstance(t, CapturedType) and _check(s, t.lower_bound, unchecked=unchecked):
        return True
    if isinstance(t, WildcardType) and _check(s, t.super_bound, unchecked=unchecked):
        return True

    match s:
        case TypeVariable() | CapturedType():
            return _check(s.upper_bound, t, unchecked=unchecked)
        case WildcardType(extends_bound=upper):
            return _check(upper, t, unchecked=unchecked)
        case ArrayType(component):
            return _array(component, t, unchecked=unchecked)
        case DeclaredType() if isinstance(t, DeclaredType):
            return _declared(s, t, unchecked=unchecked)
    return False


def _primitive(s: TypeMirror, t: TypeMirror, *, unchecked: bool) -> bool:
    match s, t:
        case PrimitiveType(kind=source), PrimitiveType(kind=target):
            return source == target or target in _WIDENING.get(source, ())
        case PrimitiveType(), _ if unchecked and not isinstance(t, (NoneType, VoidType)):
            return _check(DeclaredType(boxed_class(s)), t, unchecked=unchecked)
        case _, PrimitiveType(kind=target) if unchecked:
            source = unboxed_kind(s)
            return source is not None and (source == target or target in _WIDENING.get(source, ()))
    return False


def _array(component: TypeMirror, t: TypeMirror, *, unchecked: bool) -> bool:
    match t:
        case ArrayType(component=target):
            if isinstance(component, PrimitiveType) or isinstance(target, PrimitiveType):
                return component == target
            return _check(component, target, unchecked=unchecked)
        case DeclaredType(element=element):
            return element.native.name in _ARRAY_SUPERTYPES
    return False


def _declared(s: DeclaredType, t: DeclaredType, *, unchecked: bool) -> bool:
    if not s.element.native.is_subclass_of(t.element.native):
        return False
    supertype = resolve_supertype(s, t.element)
    if supertype is None:
        return False
    return _parameterization(supertype, t, unchecked=unchecked)


def _parameterization(s: DeclaredType, t: DeclaredType, *, unchecked: bool) -> bool:
    """Compare two uses of the same declaration, argument by argument."""
    if t.args:
        if not s.args:
            return unchecked
        if not all(contains(ta, sa) for ta, sa in zip(t.args, s.args, strict=True)):
            return False
    if t.owner is not None and s.owner is not None:
        return _check(s.owner, t.owner, unchecked=unchecked)
    return True


def contains(t1: TypeMirror, t2: TypeMirror) -> bool:
    """Check if type argument t1 contains type argument t2.

    A wildcard contains every argument whose bounds lie within its own;
    any other argument contains only the same type.

    Raises:
        InvalidArgumentKind: If either side is an executable or package type

    """
    _require_type(t1)
    _require_type(t2)
    match t1, t2:
        case WildcardType(extends_bound=upper, super_bound=lower), WildcardType():
            return is_subtype(t2.extends_bound, upper) and is_subtype(lower, t2.super_bound)
        case WildcardType(extends_bound=upper, super_bound=lower), _:
            return is_subtype(t2, upper) and is_subtype(lower, t2)
    return is_same_type(t1, t2)


def is_same_type(t1: TypeMirror, t2: TypeMirror) -> bool:
    """Check if two descriptors denote the same type.

    A wildcard is never the same type as anything, itself included, and
    captured variables are the same only when they come from one capture.
    """
    if isinstance(t1, WildcardType) or isinstance(t2, WildcardType):
        return False
    match t1, t2:
        case IntersectionType(bounds=a), IntersectionType(bounds=b):
            return frozenset(a) == frozenset(b)
        case UnionType(alternatives=a), UnionType(alternatives=b):
            return frozenset(a) == frozenset(b)
    return t1 == t2


def is_subsignature(m1: ExecutableType, m2: ExecutableType) -> bool:
    """Check if the signature of m1 is a subsignature of that of m2.

    True when both have the same parameter types (after renaming m2's type
    parameters to m1's), or when m1 matches the erasure of m2.

    Raises:
        InvalidArgumentKind: If either argument is not an executable type

    """
    for m in (m1, m2):
        if not isinstance(m, ExecutableType):
            msg = f"Expected an executable type, got {m.kind}"
            raise InvalidArgumentKind(msg)
    return _same_signature(m1, m2) or _same_signature(m1, erase(m2))  # type: ignore[arg-type]


def _same_signature(m1: ExecutableType, m2: ExecutableType) -> bool:
    if len(m1.parameter_types) != len(m2.parameter_types):
        return False
    if len(m1.type_variables) != len(m2.type_variables):
        return False
    renaming = {
        v2.element: v1 for v1, v2 in zip(m1.type_variables, m2.type_variables, strict=True)
    }
    return all(
        is_same_type(p1, substitute(p2, renaming))
        for p1, p2 in zip(m1.parameter_types, m2.parameter_types, strict=True)
    )
