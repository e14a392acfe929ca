"""Class paths: registries of native declarations.

A `ClassPath` answers name lookups and enumerates packages. Lookups are
delegated to the parent first, so a user class path can never shadow the
core library. The core library itself lives in the system class path,
which is built once per process on first use.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from typemirror.errors import InvalidArgumentKind, StructuralMismatch, TypeNotFound
from typemirror.modifiers import Access
from typemirror.source.jdk import CORE_LIBRARY
from typemirror.source.native import (
    ClassKind,
    ClassRef,
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
)
from typemirror.source.stubs import load_json_stubs, load_stubs

logger = logging.getLogger(__name__)

PRIMITIVE_NAMES = ("boolean", "byte", "short", "char", "int", "long", "float", "double")
VOID_NAME = "void"


@dataclass(frozen=True)
class NativeMembers:
    """The raw members a class declares itself, in declaration order."""

    fields: tuple[NativeField, ...]
    constructors: tuple[NativeExecutable, ...]
    methods: tuple[NativeExecutable, ...]
    classes: tuple[NativeClass, ...]


class ClassPath:
    """A registry of packages and classes.

    Args:
        parent: Class path consulted first; defaults to the system class path
        bootstrap: Build a root class path with no parent at all

    """

    def __init__(self, parent: ClassPath | None = None, *, bootstrap: bool = False) -> None:
        if parent is None and not bootstrap:
            parent = system_class_path()
        self.parent = parent
        self._types: dict[str, NativeClass] = {}
        self._packages: dict[str, NativePackage] = {}

    def __repr__(self) -> str:
        return f"ClassPath({len(self._types)} types, parent={self.parent!r})"

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup_type(name) is not None

    # -- lookups -------------------------------------------------------------

    def lookup_type(self, name: str) -> NativeClass | None:
        """Find a class by canonical name (``java.util.Map.Entry``) or binary name."""
        if self.parent is not None and (found := self.parent.lookup_type(name)) is not None:
            return found
        found = self._types.get(name)
        if found is None and "$" in name:
            found = self._types.get(name.replace("$", "."))
        return found

    def require_type(self, name: str) -> NativeClass:
        """Like `lookup_type` but raises `TypeNotFound` for unknown names."""
        found = self.lookup_type(name)
        if found is None:
            msg = f"No type named {name!r} on the class path"
            raise TypeNotFound(msg)
        return found

    def lookup_package(self, name: str) -> NativePackage | None:
        if self.parent is not None and (found := self.parent.lookup_package(name)) is not None:
            return found
        return self._packages.get(name)

    def package_exists(self, name: str) -> bool:
        return self.lookup_package(name) is not None

    def packages(self) -> list[str]:
        """Names of every package visible from this class path, sorted."""
        names = set(self._packages)
        if self.parent is not None:
            names.update(self.parent.packages())
        return sorted(names)

    def classes_in(self, package_name: str) -> set[NativeClass]:
        """Top-level classes of a package."""
        result = {
            cls
            for cls in self._types.values()
            if cls.nesting is Nesting.TOP_LEVEL
            and cls.package is not None
            and cls.package.name == package_name
        }
        if self.parent is not None:
            result |= self.parent.classes_in(package_name)
        return result

    def local_classes(self, enclosing: NativeClass) -> list[NativeClass]:
        """Local and anonymous classes declared inside ``enclosing``."""
        return [
            cls
            for cls in self._types.values()
            if cls.enclosing is enclosing and cls.nesting is not Nesting.MEMBER
        ]

    def members_of(self, native: NativeClass) -> NativeMembers:
        """Raw members declared directly by ``native``."""
        return NativeMembers(
            fields=tuple(native.fields),
            constructors=tuple(native.constructors),
            methods=tuple(native.methods),
            classes=tuple(native.member_classes),
        )

    def generic_type_expression_of(
        self,
        entity: NativeClass
        | NativeField
        | NativeParameter
        | NativeExecutable
        | NativeTypeVariable,
    ) -> NativeType:
        """The generic type expression an entity is declared with.

        A class yields its own type parameterized by its type variables, an
        executable its return type.

        Raises:
            InvalidArgumentKind: If the entity has no type

        """
        match entity:
            case NativeClass():
                return self_type_expression(entity)
            case NativeField(type=declared) | NativeParameter(type=declared):
                return declared
            case NativeExecutable(return_type=declared) if declared is not None:
                return declared
            case NativeTypeVariable():
                return TypeVarRef(entity)
        msg = f"{entity!r} has no generic type expression"
        raise InvalidArgumentKind(msg)

    # -- definition ----------------------------------------------------------

    def define_package(self, name: str) -> NativePackage:
        """Return the package called ``name``, creating it here if needed."""
        if (existing := self.lookup_package(name)) is not None:
            return existing
        package = NativePackage(name, class_path=self)
        self._packages[name] = package
        return package

    def register(self, cls: NativeClass) -> None:
        """Add a class.

        Raises:
            StructuralMismatch: If the name is already taken

        """
        if self.lookup_type(cls.name) is not None:
            msg = f"Type {cls.name!r} is already defined"
            raise StructuralMismatch(msg)
        self._types[cls.name] = cls

    def load(self, *documents: Mapping[str, Any]) -> list[NativeClass]:
        """Load stub documents (see `typemirror.source.stubs`).

        A load that fails leaves the class path as it was before the call.
        """
        with self._rollback_on_error():
            return load_stubs(self, documents)

    def load_json(self, text: str) -> list[NativeClass]:
        """Load stub documents from JSON text, all or nothing like `load`."""
        with self._rollback_on_error():
            return load_json_stubs(self, text)

    @contextmanager
    def _rollback_on_error(self) -> Iterator[None]:
        types, packages = dict(self._types), dict(self._packages)
        try:
            yield
        except Exception:
            logger.debug(
                "Discarding %d type(s) declared by a failed load",
                len(self._types) - len(types),
            )
            self._types, self._packages = types, packages
            raise

    def classes(self) -> Iterable[NativeClass]:
        """Classes registered directly on this class path."""
        return self._types.values()


def self_type_expression(cls: NativeClass) -> NativeType:
    """``cls`` parameterized by its own type variables (and those of its owners)."""
    owner = None
    if not cls.is_static and cls.enclosing is not None:
        enclosing = self_type_expression(cls.enclosing)
        if isinstance(enclosing, Parameterized):
            owner = enclosing
    if not cls.type_parameters and owner is None:
        return ClassRef(cls)
    return Parameterized(cls, tuple(TypeVarRef(v) for v in cls.type_parameters), owner)


# =============================================================================
# System class path
# =============================================================================

_system: ClassPath | None = None
_system_lock = threading.Lock()


def system_class_path() -> ClassPath:
    """The shared class path holding the core library.

    Built on first call; concurrent first calls block until the one that
    won the lock has finished, and all receive the same instance.
    """
    global _system
    if _system is None:
        with _system_lock:
            if _system is None:
                _system = _build_system_class_path()
    return _system


def _build_system_class_path() -> ClassPath:
    class_path = ClassPath(bootstrap=True)
    for name in (*PRIMITIVE_NAMES, VOID_NAME):
        class_path.register(
            NativeClass(
                name=name,
                simple_name=name,
                kind=ClassKind.PRIMITIVE,
                package=None,
                access=Access.PUBLIC | Access.FINAL | Access.ABSTRACT,
            )
        )
    loaded = class_path.load(*CORE_LIBRARY)
    logger.info(
        "System class path initialized: %d types in %d packages",
        len(loaded),
        len(class_path.packages()),
    )
    return class_path
