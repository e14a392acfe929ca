"""Queries over declarations: members, hiding, overriding and lookups."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Hashable, Iterable

from typemirror.annotation_mirrors import AnnotationMirror
from typemirror.elements import (
    Element,
    ElementKind,
    ExecutableElement,
    PackageElement,
    TypeElement,
    TypeParameterElement,
    VariableElement,
)
from typemirror.erasure import erase
from typemirror.errors import InvalidArgumentKind
from typemirror.modifiers import Access
from typemirror.source.classpath import ClassPath, system_class_path
from typemirror.source.native import (
    NativeClass,
    NativeExecutable,
    NativeField,
    NativeParameter,
    NativeTypeVariable,
    Nesting,
    raw_class_of,
)
from typemirror.substitution import as_member_of
from typemirror.subtyping import is_subsignature
from typemirror.types import ExecutableType

DEPRECATED = "java.lang.Deprecated"
INHERITED = "java.lang.annotation.Inherited"


# =============================================================================
# Members
# =============================================================================


def _class_path_of(native: NativeClass) -> ClassPath:
    package = native.package
    if package is not None and package.class_path is not None:
        return package.class_path
    return system_class_path()


def _hierarchy(native: NativeClass) -> list[NativeClass]:
    """``native`` and its raw supertypes, breadth first."""
    order: dict[int, NativeClass] = {}
    queue = deque([native])
    while queue:
        current = queue.popleft()
        if id(current) in order:
            continue
        order[id(current)] = current
        queue.extend(current.raw_supertypes())
    return list(order.values())


def _crawl[T](
    classes: list[NativeClass],
    extract: Callable[[NativeClass], Iterable[T]],
    key: Callable[[T], Hashable],
) -> list[T]:
    found: dict[Hashable, T] = {}
    for cls in classes:
        for member in extract(cls):
            found.setdefault(key(member), member)
    return list(found.values())


def _erased_parameters(executable: NativeExecutable) -> tuple[Hashable, ...]:
    return tuple(erase(p.as_type()) for p in ExecutableElement(executable).parameters)


def members(d: TypeElement) -> tuple[Element, ...]:
    """All members of a type, declared and inherited.

    The type is scanned first, then its supertypes breadth first. A member
    masks any member of a more distant supertype with the same key: fields
    and nested classes are keyed by name, methods and constructors by name
    and erased parameter types.

    Returns:
        Fields, then constructors, then methods, then nested classes

    Raises:
        InvalidArgumentKind: If ``d`` is not a type declaration

    """
    if not isinstance(d, TypeElement):
        msg = f"Only type declarations have members, got {d!r}"
        raise InvalidArgumentKind(msg)
    class_path = _class_path_of(d.native)
    classes = _hierarchy(d.native)
    declared = {id(cls): class_path.members_of(cls) for cls in classes}

    fields = _crawl(classes, lambda c: declared[id(c)].fields, lambda f: f.name)
    constructors = _crawl(
        classes,
        lambda c: declared[id(c)].constructors,
        lambda c: ("<init>", _erased_parameters(c)),
    )
    methods = _crawl(
        classes,
        lambda c: declared[id(c)].methods,
        lambda m: (m.name, _erased_parameters(m)),
    )
    nested = _crawl(classes, lambda c: declared[id(c)].classes, lambda c: c.simple_name)
    return (
        *(VariableElement(f) for f in fields),
        *(ExecutableElement(c) for c in constructors),
        *(ExecutableElement(m) for m in methods),
        *(TypeElement(c) for c in nested),
    )


# =============================================================================
# Annotations
# =============================================================================


def _is_inherited(mirror: AnnotationMirror) -> bool:
    annotation_type = mirror.annotation_type.element.native
    return any(a.annotation_type.name == INHERITED for a in annotation_type.annotations)


def get_all_annotation_mirrors(d: Element) -> tuple[AnnotationMirror, ...]:
    """Annotations present on ``d``, directly or inherited.

    Only classes inherit annotations, and only those whose type is
    meta-annotated ``@Inherited``. A superclass annotation is skipped
    when a nearer class already has one of the same type.
    """
    if not isinstance(d, TypeElement) or not d.kind.is_class:
        return d.annotation_mirrors
    result = list(d.annotation_mirrors)
    present = {m.annotation_type for m in result}
    superclass = d.native.superclass
    while superclass is not None:
        cls = raw_class_of(superclass)
        for mirror in TypeElement(cls).annotation_mirrors:
            if mirror.annotation_type not in present and _is_inherited(mirror):
                present.add(mirror.annotation_type)
                result.append(mirror)
        superclass = cls.superclass
    return tuple(result)


def is_deprecated(d: Element) -> bool:
    return any(m.annotation_type.element.qualified_name == DEPRECATED for m in d.annotation_mirrors)


# =============================================================================
# Lookups
# =============================================================================


def get_type_element(name: str, *, class_path: ClassPath | None = None) -> TypeElement | None:
    """The type with canonical or binary name ``name``, or None."""
    native = (class_path or system_class_path()).lookup_type(name)
    if native is None or native.is_primitive:
        return None
    return TypeElement(native)


def get_package_element(name: str, *, class_path: ClassPath | None = None) -> PackageElement | None:
    native = (class_path or system_class_path()).lookup_package(name)
    return PackageElement(native) if native is not None else None


def get_package_of(d: Element) -> PackageElement:
    """The package ``d`` is declared in (``d`` itself for a package).

    Raises:
        InvalidArgumentKind: For synthetic declarations that belong to no package

    """
    current: Element | None = d
    while current is not None:
        if isinstance(current, PackageElement):
            return current
        current = current.enclosing_element
    msg = f"{d!r} is not declared in a package"
    raise InvalidArgumentKind(msg)


def get_binary_name(t: TypeElement) -> str:
    return t.native.binary_name


# =============================================================================
# Hiding
# =============================================================================


def _package_name(cls: NativeClass) -> str:
    return cls.package.name if cls.package is not None else ""


def _superclass(cls: NativeClass) -> NativeClass | None:
    return raw_class_of(cls.superclass) if cls.superclass is not None else None


def _visible(
    access: Access,
    declarer: NativeClass,
    from_class: NativeClass,
    broadened: Callable[[NativeClass], bool] | None = None,
) -> bool:
    """Whether a member of ``declarer`` with ``access`` is visible from ``from_class``.

    A package-private member is visible from another package only when a
    class between the two redeclares it as public or protected, which
    ``broadened`` checks for each intermediate superclass.
    """
    if access & (Access.PUBLIC | Access.PROTECTED):
        return True
    if Access.PRIVATE in access:
        return False
    if _package_name(declarer) == _package_name(from_class):
        return True
    if broadened is None:
        return False
    current = _superclass(from_class)
    while current is not None and current is not declarer:
        if broadened(current):
            return True
        current = _superclass(current)
    return False


def _redeclares_visibly(method: NativeExecutable) -> Callable[[NativeClass], bool]:
    signature = (method.name, _erased_parameters(method))

    def check(cls: NativeClass) -> bool:
        return any(
            (m.name, _erased_parameters(m)) == signature
            and bool(m.access & (Access.PUBLIC | Access.PROTECTED))
            for m in cls.methods
        )

    return check


def _hides_field(hiding_type: NativeClass, hidden: Element, *, include_own: bool) -> bool:
    if not isinstance(hidden, VariableElement) or not isinstance(hidden.native, NativeField):
        return False
    declarer = hidden.native.declarer
    if not hiding_type.is_subclass_of(declarer):
        return False
    if declarer is hiding_type and not include_own:
        return False
    return _visible(hidden.native.access, declarer, hiding_type)


def _hides_method(hider: NativeExecutable, hidden: Element) -> bool:
    if not isinstance(hidden, ExecutableElement) or hidden.kind is not ElementKind.METHOD:
        return False
    if hider.is_constructor or not hider.is_static or not hidden.native.is_static:
        return False
    declarer = hidden.native.declarer
    if not hider.declarer.is_subclass_of(declarer):
        return False
    if not is_subsignature(ExecutableElement(hider).as_type(), hidden.as_type()):
        return False
    return _visible(
        hidden.native.access, declarer, hider.declarer, _redeclares_visibly(hidden.native)
    )


type _Scope = NativeClass | NativeExecutable


def _scope_of(native: NativeClass | NativeTypeVariable) -> _Scope | None:
    """Immediately enclosing class or executable."""
    match native:
        case NativeTypeVariable(declarer=declarer):
            return declarer
        case NativeClass(nesting=Nesting.LOCAL | Nesting.ANONYMOUS):
            if native.enclosing is not None and native.enclosing.nesting is Nesting.LOCAL:
                return native.enclosing
            return native.enclosing_executable or native.enclosing
    return native.enclosing


def _enclosing_scope(scope: _Scope) -> _Scope | None:
    if isinstance(scope, NativeExecutable):
        return scope.declarer
    return _scope_of(scope)


def _scope_is_static(scope: _Scope) -> bool:
    return scope.is_static


def _scopes_match(hider_scope: _Scope, hidden_scope: _Scope | None) -> bool:
    if hider_scope is hidden_scope:
        return True
    return (
        isinstance(hider_scope, NativeClass)
        and isinstance(hidden_scope, NativeClass)
        and hider_scope.is_subclass_of(hidden_scope)
    )


def _hides_type(start: _Scope, hidden: Element) -> bool:
    """Member and local types, and type parameters, hide types of enclosing scopes.

    A hidden type variable must belong to an enclosing scope that is
    reached without crossing a static boundary.
    """
    match hidden:
        case TypeElement(native=native):
            hidden_is_variable = False
            hidden_scope = _scope_of(native)
        case TypeParameterElement(native=native):
            hidden_is_variable = True
            hidden_scope = _scope_of(native)
        case _:
            return False
    scope: _Scope | None = start
    while scope is not None:
        if hidden_is_variable and _scope_is_static(scope):
            return False
        enclosing = _enclosing_scope(scope)
        if enclosing is None:
            return False
        if _scopes_match(enclosing, hidden_scope):
            return True
        scope = enclosing
    return False


def hides(hider: Element, hidden: Element) -> bool:
    """Check if ``hider`` hides ``hidden``.

    Fields hide visible fields of supertypes, parameters shadow visible
    fields of their own class and its supertypes, and static methods hide
    visible static methods with a subsignature. Member and local types,
    and type parameters, hide same-named types and type variables of
    enclosing scopes.
    """
    if hider == hidden or hider.simple_name != hidden.simple_name:
        return False
    match hider:
        case VariableElement(native=NativeParameter(declarer=executable)):
            return _hides_field(executable.declarer, hidden, include_own=True)
        case VariableElement(native=NativeField(declarer=declarer)):
            return _hides_field(declarer, hidden, include_own=False)
        case ExecutableElement(native=native):
            return _hides_method(native, hidden)
        case TypeElement(native=native):
            if native.nesting is Nesting.TOP_LEVEL or native.nesting is Nesting.ANONYMOUS:
                return False
            return _hides_type(native, hidden)
        case TypeParameterElement(native=native):
            declarer = native.declarer
            if isinstance(declarer, NativeClass) and declarer.nesting is Nesting.TOP_LEVEL:
                return False
            return _hides_type(declarer, hidden)
    return False


# =============================================================================
# Overriding
# =============================================================================


def overrides(
    overrider: ExecutableElement, overridden: ExecutableElement, in_type: TypeElement
) -> bool:
    """Check if ``overrider`` overrides ``overridden`` as a member of ``in_type``.

    Both must be instance methods that are members of ``in_type``. The
    overrider's signature, viewed as a member of ``in_type``, must be a
    subsignature of the overridden one, and the overridden method must be
    visible from the overrider's class. A class method can also override
    an interface method it does not itself inherit, when ``in_type``
    inherits both.
    """
    if overrider.kind is not ElementKind.METHOD or overridden.kind is not ElementKind.METHOD:
        return False
    if overrider == overridden or overrider.simple_name != overridden.simple_name:
        return False
    if overrider.native.is_static or overridden.native.is_static:
        return False

    overrider_type = overrider.native.declarer
    overridden_type = overridden.native.declarer
    cls = in_type.native
    if not cls.is_subclass_of(overrider_type) or not cls.is_subclass_of(overridden_type):
        return False
    if not overrider_type.is_subclass_of(overridden_type) and (
        overrider_type.is_interface or not overridden_type.is_interface
    ):
        return False

    containing = in_type.as_type()
    overrider_signature = as_member_of(containing, overrider)
    overridden_signature = as_member_of(containing, overridden)
    if not isinstance(overrider_signature, ExecutableType) or not isinstance(
        overridden_signature, ExecutableType
    ):
        msg = f"{overrider} and {overridden} must both be methods of {in_type}"
        raise InvalidArgumentKind(msg)
    if not is_subsignature(overrider_signature, overridden_signature):
        return False
    return _visible(
        overridden.native.access,
        overridden_type,
        overrider_type,
        _redeclares_visibly(overridden.native),
    )
