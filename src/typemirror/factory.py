"""Building type descriptors.

`descriptor_of` converts native type expressions from a class path into
descriptors; the ``get_*`` functions build descriptors directly, checking
the same structural rules.
"""

from __future__ import annotations

from typemirror.annotation_mirrors import AnnotationMirror, to_annotation_mirror
from typemirror.elements import TypeElement, TypeParameterElement
from typemirror.errors import InvalidArgumentKind, StructuralMismatch, UnsupportedKind
from typemirror.source.classpath import system_class_path
from typemirror.source.native import (
    ArrayOf,
    ClassRef,
    NativeClass,
    NativeType,
    Parameterized,
    TypeVarRef,
    WildcardOf,
)
from typemirror.types import (
    ArrayType,
    DeclaredType,
    IntersectionType,
    NoneType,
    NullType,
    PrimitiveType,
    TypeKind,
    TypeMirror,
    TypeVariable,
    VoidType,
    WildcardType,
)

OBJECT = "java.lang.Object"

BOXES: dict[TypeKind, str] = {
    TypeKind.BOOLEAN: "java.lang.Boolean",
    TypeKind.BYTE: "java.lang.Byte",
    TypeKind.SHORT: "java.lang.Short",
    TypeKind.INT: "java.lang.Integer",
    TypeKind.LONG: "java.lang.Long",
    TypeKind.CHAR: "java.lang.Character",
    TypeKind.FLOAT: "java.lang.Float",
    TypeKind.DOUBLE: "java.lang.Double",
}
UNBOXES: dict[str, TypeKind] = {name: kind for kind, name in BOXES.items()}


# =============================================================================
# Native expressions -> descriptors
# =============================================================================


def descriptor_of(expr: NativeType) -> TypeMirror:
    """Convert a native type expression into a descriptor.

    Non-static member classes get an explicit owner built from their
    enclosing class; static and top-level classes have none.

    Raises:
        UnsupportedKind: If ``expr`` is not a native type expression

    """
    annotations = _annotations(expr)
    match expr:
        case ClassRef(target):
            if target.is_primitive:
                if target.name == "void":
                    return VoidType(annotations=annotations)
                return PrimitiveType(TypeKind(target.name), annotations=annotations)
            return DeclaredType(
                TypeElement(target), owner=_implicit_owner(target), annotations=annotations
            )
        case ArrayOf(component):
            return ArrayType(descriptor_of(component), annotations=annotations)
        case Parameterized(raw, args, owner):
            owner_type = descriptor_of(owner) if owner is not None else _implicit_owner(raw)
            if owner_type is not None and not isinstance(owner_type, DeclaredType):
                msg = f"Owner of {raw.name} is not a declared type: {owner!r}"
                raise UnsupportedKind(msg)
            return DeclaredType(
                TypeElement(raw),
                tuple(descriptor_of(a) for a in args),
                owner_type,
                annotations=annotations,
            )
        case WildcardOf(upper, lower):
            return WildcardType(
                extends_bound=_bound(upper),
                super_bound=_bound(lower),
                annotations=annotations,
            )
        case TypeVarRef(variable):
            return TypeVariable(TypeParameterElement(variable), annotations=annotations)
    msg = f"Unsupported native type expression: {expr!r}"
    raise UnsupportedKind(msg)


def _annotations(expr: NativeType) -> tuple[AnnotationMirror, ...]:
    natives = getattr(expr, "annotations", ())
    return tuple(to_annotation_mirror(a) for a in natives)


def _implicit_owner(cls: NativeClass) -> DeclaredType | None:
    """Owner of an unqualified use of a non-static member class: the enclosing self type."""
    if cls.is_static or cls.enclosing is None:
        return None
    return TypeElement(cls.enclosing).as_type()


def _bound(bounds: tuple[NativeType, ...]) -> TypeMirror | None:
    if not bounds:
        return None
    if len(bounds) == 1:
        return descriptor_of(bounds[0])
    return IntersectionType(tuple(descriptor_of(b) for b in bounds))


# =============================================================================
# Direct construction
# =============================================================================


def object_type() -> DeclaredType:
    """The root class type."""
    return DeclaredType(TypeElement(system_class_path().require_type(OBJECT)))


def is_object(t: TypeMirror) -> bool:
    return isinstance(t, DeclaredType) and t.element.native.name == OBJECT


def declared_type_of(name: str) -> DeclaredType:
    """Raw or non-generic use of a class on the system class path."""
    return DeclaredType(TypeElement(system_class_path().require_type(name)))


def get_primitive_type(kind: TypeKind) -> PrimitiveType:
    return PrimitiveType(kind)


def get_null_type() -> NullType:
    return NullType()


def get_no_type(kind: TypeKind) -> NoneType | VoidType:
    """The `NoneType` or `VoidType` pseudo-type.

    Raises:
        InvalidArgumentKind: For any other kind

    """
    match kind:
        case TypeKind.NONE:
            return NoneType()
        case TypeKind.VOID:
            return VoidType()
    msg = f"Not a no-type kind: {kind}"
    raise InvalidArgumentKind(msg)


def get_array_type(component: TypeMirror) -> ArrayType:
    return ArrayType(component)


def get_wildcard_type(
    extends_bound: TypeMirror | None = None, super_bound: TypeMirror | None = None
) -> WildcardType:
    return WildcardType(extends_bound, super_bound)


def get_declared_type(
    element: TypeElement, *args: TypeMirror, owner: DeclaredType | None = None
) -> DeclaredType:
    """Parameterize ``element`` with ``args``.

    With no arguments the result is the raw (or non-generic) type. Each
    non-wildcard argument must satisfy the bounds of its type parameter,
    with the other arguments substituted into the bounds.

    Raises:
        StructuralMismatch: On a wrong argument count, an argument outside
            its bounds, or an owner that does not enclose ``element``

    """
    from typemirror.substitution import substitute
    from typemirror.subtyping import is_subtype

    native = element.native
    if owner is not None:
        if native.enclosing is None or not owner.element.native.is_subclass_of(native.enclosing):
            msg = f"{owner} is not an owner of {element.qualified_name}"
            raise StructuralMismatch(msg)
        if native.is_static:
            owner = None
    else:
        owner = _implicit_owner(native)
    result = DeclaredType(element, tuple(args), owner)
    if not args:
        return result

    mapping = dict(zip(element.type_parameters, args, strict=True))
    for parameter, arg in mapping.items():
        if isinstance(arg, WildcardType):
            continue
        for bound in parameter.bounds:
            if not is_subtype(arg, substitute(bound, mapping)):
                msg = f"Type argument {arg} is not within bound {bound} of {parameter.simple_name}"
                raise StructuralMismatch(msg)
    return result


# =============================================================================
# Boxing
# =============================================================================


def boxed_class(primitive: PrimitiveType) -> TypeElement:
    """The box class of a primitive type."""
    return TypeElement(system_class_path().require_type(BOXES[primitive.kind]))


def unboxed_kind(t: TypeMirror) -> TypeKind | None:
    if isinstance(t, DeclaredType):
        return UNBOXES.get(t.element.native.name)
    return None


def unboxed_type(t: TypeMirror) -> PrimitiveType:
    """The primitive type a box type unboxes to.

    Raises:
        InvalidArgumentKind: If ``t`` has no unboxing conversion

    """
    if (kind := unboxed_kind(t)) is None:
        msg = f"{t} has no unboxed type"
        raise InvalidArgumentKind(msg)
    return PrimitiveType(kind)
