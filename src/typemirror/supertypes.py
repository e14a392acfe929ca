"""Supertype enumeration and least upper bounds."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from typemirror.erasure import erase
from typemirror.errors import InvalidArgumentKind, StructuralMismatch
from typemirror.factory import declared_type_of, is_object, object_type
from typemirror.substitution import declared_supertypes, resolve_supertype
from typemirror.subtyping import is_subtype
from typemirror.types import (
    ArrayType,
    CapturedType,
    DeclaredType,
    ExecutableType,
    IntersectionType,
    NullType,
    PackageType,
    PrimitiveType,
    TypeKind,
    TypeMirror,
    TypeVariable,
    UnionType,
    WildcardType,
)

logger = logging.getLogger(__name__)

# Direct supertype of each primitive under widening; double and boolean have none.
_PRIMITIVE_SUPERTYPES: dict[TypeKind, TypeKind] = {
    TypeKind.BYTE: TypeKind.SHORT,
    TypeKind.SHORT: TypeKind.INT,
    TypeKind.CHAR: TypeKind.INT,
    TypeKind.INT: TypeKind.LONG,
    TypeKind.LONG: TypeKind.FLOAT,
    TypeKind.FLOAT: TypeKind.DOUBLE,
}

_ARRAY_SUPERTYPES = ("java.lang.Object", "java.lang.Cloneable", "java.io.Serializable")

type Memo = dict[frozenset[TypeMirror], list[TypeMirror]]


# =============================================================================
# Supertypes
# =============================================================================


def direct_supertypes(t: TypeMirror) -> list[TypeMirror]:
    """The immediate supertypes of ``t``.

    Declared types yield their superclass and interfaces parameterized
    through ``t`` (erased when ``t`` is raw); arrays yield arrays of their
    component's supertypes, or the array root types; primitives yield the
    next wider primitive. Root types yield nothing.

    Raises:
        InvalidArgumentKind: If ``t`` is an executable or package type

    """
    match t:
        case ExecutableType() | PackageType():
            msg = f"A {t.kind} type has no supertypes"
            raise InvalidArgumentKind(msg)
        case IntersectionType(bounds):
            return list(bounds)
        case UnionType(alternatives):
            lubs = least_upper_bounds(*alternatives)
            if len(lubs) > 1:
                return [IntersectionType(tuple(lubs))]
            return lubs
        case PrimitiveType(kind=kind):
            wider = _PRIMITIVE_SUPERTYPES.get(kind)
            return [PrimitiveType(wider)] if wider is not None else []
        case DeclaredType():
            return declared_supertypes(t)
        case ArrayType(component):
            if isinstance(component, PrimitiveType) or is_object(component):
                return [declared_type_of(name) for name in _ARRAY_SUPERTYPES]
            return [ArrayType(_upper(s)) for s in direct_supertypes(component)]
        case TypeVariable(element=element):
            return list(element.bounds)
        case CapturedType() | WildcardType():
            return [t.upper_bound if isinstance(t, CapturedType) else t.extends_bound]
    return []


def _upper(t: TypeMirror) -> TypeMirror:
    return t.extends_bound if isinstance(t, WildcardType) else t  # type: ignore[return-value]


def all_supertypes(t: TypeMirror) -> list[TypeMirror]:
    """Every proper supertype of ``t``, nearest first, without duplicates.

    Self-referential bounds such as ``T extends Comparable<T>`` terminate
    because a type already seen is never expanded again.
    """
    seen: dict[TypeMirror, None] = {t: None}
    queue = deque(direct_supertypes(t))
    while queue:
        supertype = queue.popleft()
        if supertype in seen:
            continue
        seen[supertype] = None
        queue.extend(direct_supertypes(supertype))
    del seen[t]
    return list(seen)


# =============================================================================
# Least upper bound
# =============================================================================


def least_upper_bounds(*types: TypeMirror) -> list[TypeMirror]:
    """The least upper bounds of ``types``.

    The result holds at most one class type, placed first, followed by
    interface types. When the bound would be recursive (for example
    ``Comparable<lub>``), the recursion is cut with ``Object``, so
    ``least_upper_bounds(Integer, String)`` is ``[Comparable<?>,
    Serializable]``.

    Args:
        types: One or more types

    Returns:
        The bounds, or an empty list when the types mix primitive and
        reference types (or are unrelated primitives)

    Raises:
        StructuralMismatch: If no types are given
        InvalidArgumentKind: If a type is an executable or package type

    """
    if not types:
        msg = "least_upper_bounds needs at least one type"
        raise StructuralMismatch(msg)
    for t in types:
        if isinstance(t, (ExecutableType, PackageType)):
            msg = f"A {t.kind} type has no upper bound"
            raise InvalidArgumentKind(msg)
    unique = list(dict.fromkeys(types))
    if len(unique) == 1:
        return [types[0]]
    return _lub(unique, {}, set())


def _lub(
    types: list[TypeMirror], memo: Memo, active: set[frozenset[TypeMirror]]
) -> list[TypeMirror]:
    references = [t for t in types if not isinstance(t, NullType)]
    if not references:
        return [NullType()]
    if len(references) == 1:
        return references

    key = frozenset(references)
    if key in memo:
        return memo[key]
    if key in active:
        logger.debug("Cut recursive upper bound of %s with Object", ", ".join(map(str, references)))
        return [object_type()]
    active.add(key)
    try:
        result = _compute_lub(references, memo, active)
    finally:
        active.discard(key)
    memo[key] = result
    return result


def _compute_lub(
    types: list[TypeMirror], memo: Memo, active: set[frozenset[TypeMirror]]
) -> list[TypeMirror]:
    candidates = _erased_supertypes(types[0])
    for t in types[1:]:
        others = _erased_supertypes(t)
        candidates = {c: None for c in candidates if c in others}
    if not candidates:
        return []

    minimal = [
        c for c in candidates if not any(o != c and is_subtype(o, c) for o in candidates)
    ]
    results = [_parameterize(candidate, types, memo, active) for candidate in minimal]
    classes = [r for r in results if not _is_interface(r)]
    return classes[:1] + [r for r in results if _is_interface(r)] + classes[1:]


def _erased_supertypes(t: TypeMirror) -> dict[TypeMirror, None]:
    return {erase(s): None for s in (t, *all_supertypes(t))}


def _is_interface(t: TypeMirror) -> bool:
    return isinstance(t, DeclaredType) and t.element.native.is_interface


def _parameterize(
    candidate: TypeMirror,
    types: list[TypeMirror],
    memo: Memo,
    active: set[frozenset[TypeMirror]],
) -> TypeMirror:
    """Best common parameterization of an erased candidate."""
    if not isinstance(candidate, DeclaredType) or not candidate.element.native.type_parameters:
        return candidate
    parameterized: DeclaredType | None = None
    for t in types:
        resolved = resolve_supertype(t, candidate.element)
        if resolved is None or resolved.is_raw:
            return candidate
        if parameterized is None:
            parameterized = resolved
        else:
            parameterized = _least_containing_invocation(parameterized, resolved, memo, active)
    return parameterized if parameterized is not None else candidate


def _least_containing_invocation(
    t1: DeclaredType, t2: DeclaredType, memo: Memo, active: set[frozenset[TypeMirror]]
) -> DeclaredType:
    owner = t1.owner
    if t1.owner is not None and t2.owner is not None:
        if not t1.owner.args:
            owner = t1.owner
        elif not t2.owner.args:
            owner = t2.owner
        else:
            owner = _least_containing_invocation(t1.owner, t2.owner, memo, active)
    args = tuple(
        _least_containing_argument(a1, a2, memo, active)
        for a1, a2 in zip(t1.args, t2.args, strict=True)
    )
    return DeclaredType(t1.element, args, owner)


def _least_containing_argument(
    u: TypeMirror, v: TypeMirror, memo: Memo, active: set[frozenset[TypeMirror]]
) -> TypeMirror:
    if not isinstance(u, WildcardType):
        if not isinstance(v, WildcardType):
            if u == v:
                return u
            return WildcardType(_as_bound(_lub([u, v], memo, active)))
        return _least_containing_argument(v, u, memo, active)

    u_super = not isinstance(u.super_bound, NullType)
    match v:
        case WildcardType(super_bound=v_lower) if u_super and not isinstance(v_lower, NullType):
            return WildcardType(super_bound=greatest_lower_bound(u.super_bound, v_lower))
        case WildcardType(super_bound=v_lower) if u_super or not isinstance(v_lower, NullType):
            if u_super:
                lower, upper = u.super_bound, v.extends_bound
            else:
                lower, upper = v_lower, u.extends_bound
            return lower if lower == upper else WildcardType()
        case WildcardType(extends_bound=v_upper):
            return WildcardType(_as_bound(_lub([u.extends_bound, v_upper], memo, active)))
    if u_super:
        return WildcardType(super_bound=greatest_lower_bound(u.super_bound, v))
    return WildcardType(_as_bound(_lub([u.extends_bound, v], memo, active)))


def _as_bound(bounds: list[TypeMirror]) -> TypeMirror | None:
    if not bounds:
        return None
    if len(bounds) == 1:
        return bounds[0]
    return IntersectionType(tuple(bounds))


# =============================================================================
# Greatest lower bound
# =============================================================================


def greatest_lower_bound(t1: TypeMirror, t2: TypeMirror) -> TypeMirror:
    """The intersection of two types, reduced to its most specific members.

    An intersection may hold only one class. Two unrelated class bounds
    are merged through their least upper bound, so the glb of ``String``
    and ``Integer`` contains ``Serializable`` and ``Comparable<?>``
    rather than an impossible ``String & Integer``.
    """
    if is_subtype(t1, t2):
        return t1
    if is_subtype(t2, t1):
        return t2

    bounds = list(dict.fromkeys([*_flatten(t1), *_flatten(t2)]))
    classes = [b for b in bounds if not _is_interface(b)]
    interfaces = [b for b in bounds if _is_interface(b)]
    if len(classes) > 1:
        merged = least_upper_bounds(*classes)
        classes = [m for m in merged if not _is_interface(m)]
        interfaces.extend(m for m in merged if _is_interface(m))

    reduced = _most_specific([*classes, *interfaces])
    return reduced[0] if len(reduced) == 1 else IntersectionType(tuple(reduced))


def _flatten(t: TypeMirror) -> Iterable[TypeMirror]:
    return t.bounds if isinstance(t, IntersectionType) else (t,)


def _most_specific(types: list[TypeMirror]) -> list[TypeMirror]:
    unique = list(dict.fromkeys(types))
    return [t for t in unique if not any(o != t and is_subtype(o, t) for o in unique)]
