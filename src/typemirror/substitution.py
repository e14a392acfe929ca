"""Type variable substitution and member types.

`substitute` rewrites a descriptor, replacing type variables according to
a mapping. `resolve_supertype` finds how a type parameterizes one of its
supertypes, and `as_member_of` combines the two to view a member through
a parameterized containing type.
"""

from __future__ import annotations

from collections.abc import Mapping

from typemirror.elements import (
    Element,
    ExecutableElement,
    TypeElement,
    TypeParameterElement,
    VariableElement,
)
from typemirror.erasure import erase
from typemirror.errors import InvalidArgumentKind, NotAMember
from typemirror.factory import descriptor_of, is_object, object_type
from typemirror.source.native import NativeParameter, Nesting
from typemirror.types import (
    ArrayType,
    CapturedType,
    DeclaredType,
    ExecutableType,
    IntersectionType,
    TypeMirror,
    TypeVariable,
    UnionType,
    WildcardType,
)

type TypeMapping = Mapping[TypeParameterElement, TypeMirror]

_ARRAY_SUPERTYPES = ("java.lang.Object", "java.lang.Cloneable", "java.io.Serializable")


def substitute(t: TypeMirror, mapping: TypeMapping) -> TypeMirror:
    """Replace the type variables of ``t`` found in ``mapping``.

    Unchanged parts are shared with the input, and an input containing no
    mapped variable is returned as-is. Where a wildcard lands somewhere a
    wildcard cannot appear (an array component, a wildcard bound or an
    intersection), its bound is used instead.
    """
    if not mapping:
        return t
    match t:
        case TypeVariable(element=element):
            return mapping.get(element, t)
        case DeclaredType(element=element, args=args, owner=owner):
            new_args = tuple(substitute(a, mapping) for a in args)
            new_owner = substitute(owner, mapping) if owner is not None else None
            if new_owner is owner and all(n is a for n, a in zip(new_args, args, strict=True)):
                return t
            return DeclaredType(
                element, new_args, new_owner, annotations=t.annotations  # type: ignore[arg-type]
            )
        case ArrayType(component):
            new_component = _upper(substitute(component, mapping))
            if new_component is component:
                return t
            return ArrayType(new_component, annotations=t.annotations)
        case WildcardType(extends_bound=upper, super_bound=lower):
            new_upper = _upper(substitute(upper, mapping))
            new_lower = _lower(substitute(lower, mapping))
            if new_upper is upper and new_lower is lower:
                return t
            return WildcardType(new_upper, new_lower, annotations=t.annotations)
        case IntersectionType(bounds):
            new_bounds = tuple(_upper(substitute(b, mapping)) for b in bounds)
            if all(n is b for n, b in zip(new_bounds, bounds, strict=True)):
                return t
            return IntersectionType(new_bounds, annotations=t.annotations)
        case UnionType(alternatives):
            new_alternatives = tuple(substitute(a, mapping) for a in alternatives)
            if all(n is a for n, a in zip(new_alternatives, alternatives, strict=True)):
                return t
            return UnionType(new_alternatives, annotations=t.annotations)
        case ExecutableType():
            return ExecutableType(
                element=t.element,
                type_variables=t.type_variables,
                return_type=substitute(t.return_type, mapping),
                parameter_types=tuple(substitute(p, mapping) for p in t.parameter_types),
                receiver_type=substitute(t.receiver_type, mapping),
                thrown_types=tuple(substitute(x, mapping) for x in t.thrown_types),
                annotations=t.annotations,
            )
    return t


def _upper(t: TypeMirror) -> TypeMirror:
    return t.extends_bound if isinstance(t, WildcardType) else t  # type: ignore[return-value]


def _lower(t: TypeMirror) -> TypeMirror:
    return t.super_bound if isinstance(t, WildcardType) else t  # type: ignore[return-value]


def type_mapping(t: DeclaredType) -> dict[TypeParameterElement, TypeMirror]:
    """Actual arguments of ``t`` and its owners, keyed by type parameter."""
    mapping = type_mapping(t.owner) if t.owner is not None else {}
    if t.args:
        mapping.update(zip(t.element.type_parameters, t.args, strict=True))
    return mapping


def declared_supertypes(t: DeclaredType) -> list[TypeMirror]:
    """Superclass and interfaces of ``t``, parameterized through ``t``.

    Supertypes of a raw type are erased. An interface without
    superinterfaces has ``Object`` as its only supertype.
    """
    native = t.element.native
    expressions = [native.superclass] if native.superclass is not None else []
    expressions.extend(native.interfaces)
    if not expressions:
        return [] if is_object(t) else [object_type()]
    supertypes = [descriptor_of(e) for e in expressions]
    if t.is_raw:
        return [erase(s) for s in supertypes]
    mapping = type_mapping(t)
    return [substitute(s, mapping) for s in supertypes]


def resolve_supertype(t: TypeMirror, target: TypeElement) -> DeclaredType | None:
    """The supertype of ``t`` declared by ``target``, with ``t``'s arguments applied.

    Returns the raw ``target`` type when ``t`` is a raw type, and None when
    ``target`` is not a supertype of ``t``.
    """
    match t:
        case DeclaredType(element=element):
            if element == target:
                return t
            if not element.native.is_subclass_of(target.native):
                return None
            for supertype in declared_supertypes(t):
                if (found := resolve_supertype(supertype, target)) is not None:
                    return found
            return None
        case TypeVariable() | CapturedType():
            return resolve_supertype(t.upper_bound, target)
        case WildcardType(extends_bound=bound):
            return resolve_supertype(bound, target)
        case IntersectionType(bounds):
            for bound in bounds:
                if (found := resolve_supertype(bound, target)) is not None:
                    return found
            return None
        case ArrayType() if target.native.name in _ARRAY_SUPERTYPES:
            return DeclaredType(target)
    return None


def _declaring_type(member: Element) -> TypeElement | None:
    match member:
        case TypeElement(native=native):
            return TypeElement(native.enclosing) if native.enclosing is not None else None
        case ExecutableElement(native=native):
            return TypeElement(native.declarer)
        case VariableElement(native=NativeParameter(declarer=executable)):
            return TypeElement(executable.declarer)
        case VariableElement(native=native):
            return TypeElement(native.declarer)  # type: ignore[union-attr]
        case TypeParameterElement():
            generic = member.generic_element
            if isinstance(generic, ExecutableElement):
                return generic.enclosing_element
            return generic
    msg = f"{member!r} cannot be a member of a type"
    raise InvalidArgumentKind(msg)


def as_member_of(containing: TypeMirror, member: Element) -> TypeMirror:
    """The type of ``member`` when viewed as a member of ``containing``.

    The containing type's arguments are substituted for the type
    parameters of the class that declares ``member``. For an anonymous
    class the result is its (resolved) direct supertype; other member
    classes are returned as their own type.

    Args:
        containing: A declared type that has ``member`` as a member
        member: A nested type, executable, field, parameter or type parameter

    Raises:
        InvalidArgumentKind: If ``containing`` is not a declared type
        NotAMember: If ``member``'s declaring class is not a supertype of
            ``containing``

    """
    if not isinstance(containing, DeclaredType):
        msg = f"Containing type must be a declared type, got {containing.kind}"
        raise InvalidArgumentKind(msg)
    declarer = _declaring_type(member)
    if declarer is None or not containing.element.native.is_subclass_of(declarer.native):
        msg = f"{member!r} is not a member of {containing}"
        raise NotAMember(msg)

    supertype = resolve_supertype(containing, declarer)
    mapping = type_mapping(supertype) if supertype is not None else {}
    match member:
        case TypeElement(native=native) if native.nesting is Nesting.ANONYMOUS:
            parent = member.interfaces[0] if native.interfaces else member.superclass
            return substitute(parent, mapping)
        case TypeElement():
            return member.as_type()
    return substitute(member.as_type(), mapping)