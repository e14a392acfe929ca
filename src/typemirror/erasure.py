"""Type erasure."""

from __future__ import annotations

from typemirror.errors import NoErasure
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


def erase(t: TypeMirror) -> TypeMirror:
    """Strip generic information from ``t``.

    Declared types lose their arguments and owner, type variables and
    wildcards become the erasure of their leftmost bound, and a union
    erases to the erasure of its least upper bound. Generic executable
    types are erased part by part and lose their type parameters.

    Raises:
        NoErasure: If ``t`` is a package type

    """
    match t:
        case PrimitiveType() | NoneType() | VoidType() | NullType():
            return t
        case PackageType():
            msg = f"Package {t.element.qualified_name} has no erasure"
            raise NoErasure(msg)
        case DeclaredType(element=element):
            if not t.args and t.owner is None:
                return t
            return DeclaredType(element, annotations=t.annotations)
        case ArrayType(component):
            erased = erase(component)
            return t if erased is component else ArrayType(erased, annotations=t.annotations)
        case TypeVariable() | CapturedType():
            return erase(t.upper_bound)
        case WildcardType(extends_bound=bound):
            return erase(bound)
        case IntersectionType(bounds):
            return erase(bounds[0])
        case UnionType(alternatives):
            from typemirror.supertypes import least_upper_bounds

            lubs = least_upper_bounds(*alternatives)
            if not lubs:
                msg = f"Union {t} has no common supertype to erase to"
                raise NoErasure(msg)
            return erase(lubs[0] if len(lubs) == 1 else IntersectionType(tuple(lubs)))
        case ExecutableType():
            if not _is_generic_executable(t):
                return t
            return ExecutableType(
                element=t.element,
                type_variables=(),
                return_type=erase(t.return_type),
                parameter_types=tuple(erase(p) for p in t.parameter_types),
                receiver_type=erase(t.receiver_type),
                thrown_types=tuple(erase(x) for x in t.thrown_types),
            )
    msg = f"Unexpected type: {t!r}"
    raise NoErasure(msg)


def _is_generic(t: TypeMirror) -> bool:
    match t:
        case DeclaredType(args=args, owner=owner):
            return bool(args) or (owner is not None and _is_generic(owner))
        case ArrayType(component):
            return _is_generic(component)
        case PrimitiveType() | NoneType() | VoidType() | NullType():
            return False
    return True


def _is_generic_executable(t: ExecutableType) -> bool:
    return bool(t.type_variables) or any(
        _is_generic(part)
        for part in (t.return_type, t.receiver_type, *t.parameter_types, *t.thrown_types)
    )
