"""Recursive-descent parser for generic type expressions.

Stub documents describe types in source syntax, for example
``java.util.Map<K, ? extends java.util.List<@NonNull T>>[]``. The parser
turns such text into native type expressions, resolving names through a
`Scope`:

1. type variables in scope (innermost declaration first)
2. member classes of the enclosing classes and their supertypes
3. fully qualified names
4. classes of the current package, explicit imports, then ``java.lang``
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NoReturn

from typemirror.errors import SignatureError
from typemirror.source.native import (
    ArrayOf,
    ClassKind,
    ClassRef,
    NativeAnnotation,
    NativeClass,
    NativeType,
    NativeTypeVariable,
    Parameterized,
    TypeVarRef,
    WildcardOf,
    with_annotations,
)

if TYPE_CHECKING:
    from typemirror.source.classpath import ClassPath

_TOKEN = re.compile(r"\s*(?:(\.\.\.)|([A-Za-z_$][\w$]*)|([@<>,?\[\].&]))")
_TYPE_PARAMETER = re.compile(r"\s*([A-Za-z_$][\w$]*)\s*(?:extends\s+(.+?))?\s*$", re.DOTALL)

IMPLICIT_IMPORT = "java.lang"


@dataclass
class Scope:
    """Name resolution context for a signature."""

    class_path: ClassPath
    package: str = ""
    imports: tuple[str, ...] = ()
    type_variables: dict[str, NativeTypeVariable] = field(default_factory=dict)
    context: NativeClass | None = None

    def child(
        self,
        variables: Sequence[NativeTypeVariable] = (),
        context: NativeClass | None = None,
    ) -> Scope:
        """Nested scope: ``variables`` shadow the outer type variables."""
        return Scope(
            class_path=self.class_path,
            package=self.package,
            imports=self.imports,
            type_variables={**self.type_variables, **{v.name: v for v in variables}},
            context=context if context is not None else self.context,
        )

    def resolve_class(self, dotted: str) -> NativeClass | None:
        """Resolve a simple or qualified class name."""
        first, _, rest = dotted.partition(".")
        start = self._resolve_simple(first)
        if start is not None:
            found = _member_path(start, rest.split(".") if rest else [])
            if found is not None:
                return found
        return self.class_path.lookup_type(dotted) or _qualified_prefix(
            self.class_path, dotted
        )

    def _resolve_simple(self, name: str) -> NativeClass | None:
        context = self.context
        while context is not None:
            if (member := _inherited_member_class(context, name)) is not None:
                return member
            context = context.enclosing
        lookup = self.class_path.lookup_type
        if self.package and (found := lookup(f"{self.package}.{name}")) is not None:
            return found
        for imported in self.imports:
            if imported.rpartition(".")[2] == name and (found := lookup(imported)):
                return found
        for imported in self.imports:
            if imported.endswith(".*") and (found := lookup(f"{imported[:-2]}.{name}")):
                return found
        return lookup(f"{IMPLICIT_IMPORT}.{name}") or lookup(name)


def _inherited_member_class(cls: NativeClass, name: str) -> NativeClass | None:
    pending = [cls]
    seen: set[int] = set()
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        for member in current.member_classes:
            if member.simple_name == name:
                return member
        pending.extend(current.raw_supertypes())
    return None


def _member_path(start: NativeClass, names: list[str]) -> NativeClass | None:
    current = start
    for name in names:
        member = _inherited_member_class(current, name)
        if member is None:
            return None
        current = member
    return current


def _qualified_prefix(class_path: ClassPath, dotted: str) -> NativeClass | None:
    """Resolve ``pkg.Outer.Inner`` by finding the longest known class prefix."""
    parts = dotted.split(".")
    for split in range(len(parts) - 1, 0, -1):
        outer = class_path.lookup_type(".".join(parts[:split]))
        if outer is not None:
            return _member_path(outer, parts[split:])
    return None


class SignatureParser:
    """Parses one piece of signature text against a scope."""

    def __init__(self, text: str, scope: Scope) -> None:
        self.text = text
        self.scope = scope
        self.tokens: list[tuple[str, int]] = []
        position = 0
        while position < len(text):
            if not text[position:].strip():
                break
            match = _TOKEN.match(text, position)
            if match is None:
                self._fail("Unexpected character", position + _leading_space(text, position))
            token = next(group for group in match.groups() if group is not None)
            self.tokens.append((token, match.start(match.lastindex or 0)))
            position = match.end()
        self.index = 0

    # -- token helpers -------------------------------------------------------

    def _fail(self, message: str, position: int | None = None) -> NoReturn:
        if position is None:
            at_end = self.index >= len(self.tokens)
            position = len(self.text) if at_end else self.tokens[self.index][1]
        raise SignatureError(message, self.text, position)

    def _peek(self) -> str | None:
        return self.tokens[self.index][0] if self.index < len(self.tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            self._fail("Unexpected end of signature")
        self.index += 1
        return token

    def _expect(self, expected: str) -> None:
        if self._peek() != expected:
            self._fail(f"Expected {expected!r}")
        self.index += 1

    def _identifier(self) -> str:
        token = self._next()
        if not (token[0].isalpha() or token[0] in "_$"):
            self.index -= 1
            self._fail("Expected an identifier")
        return token

    def finish(self) -> None:
        if self._peek() is not None:
            self._fail("Unexpected trailing text")

    # -- grammar -------------------------------------------------------------

    def annotations(self) -> tuple[NativeAnnotation, ...]:
        result = []
        while self._peek() == "@":
            self.index += 1
            name = self._qualified_name()
            cls = self.scope.resolve_class(name)
            if cls is None or cls.kind is not ClassKind.ANNOTATION:
                self._fail(f"Not an annotation type: {name}")
            result.append(NativeAnnotation(cls))
        return tuple(result)

    def _qualified_name(self) -> str:
        parts = [self._identifier()]
        while self._peek() == "." and self._lookahead_identifier():
            self.index += 1
            parts.append(self._identifier())
        return ".".join(parts)

    def _lookahead_identifier(self) -> bool:
        if self.index + 1 >= len(self.tokens):
            return False
        token = self.tokens[self.index + 1][0]
        return token[0].isalpha() or token[0] in "_$"

    def type(self) -> NativeType:
        """type := annotation* reference ('[' ']' | '...')*"""
        annotations = self.annotations()
        result = with_annotations(self._reference(), annotations)
        while self._peek() in ("[", "..."):
            if self._next() == "[":
                self._expect("]")
            result = ArrayOf(result)
        return result

    def bounds(self) -> list[NativeType]:
        """bounds := type ('&' type)*"""
        result = [self.type()]
        while self._peek() == "&":
            self.index += 1
            result.append(self.type())
        return result

    def _reference(self) -> NativeType:
        start = self.index
        name = self._qualified_name()
        if "." not in name and (variable := self.scope.type_variables.get(name)):
            if self._peek() in ("<", "."):
                self._fail(f"Type variable {name} cannot be qualified or parameterized")
            return TypeVarRef(variable)
        cls = self.scope.resolve_class(name)
        if cls is None:
            self._fail(f"Cannot resolve type {name!r}", self.tokens[start][1])
        result = self._parameterize(cls, None)
        while self._peek() == ".":
            self.index += 1
            member_name = self._identifier()
            member = _inherited_member_class(cls, member_name)
            if member is None:
                self._fail(f"{cls.name} has no member type {member_name!r}")
            cls = member
            owner = result if isinstance(result, Parameterized) else None
            result = self._parameterize(cls, owner)
        return result

    def _parameterize(self, cls: NativeClass, owner: Parameterized | None) -> NativeType:
        args: tuple[NativeType, ...] = ()
        if self._peek() == "<":
            position = self.tokens[self.index][1]
            self.index += 1
            args = tuple(self._arguments())
            if cls.is_primitive:
                self._fail(f"Primitive type {cls.name} cannot be parameterized", position)
            if len(args) != len(cls.type_parameters):
                self._fail(
                    f"{cls.name} expects {len(cls.type_parameters)} type argument(s), "
                    f"got {len(args)}",
                    position,
                )
        if not args and owner is None:
            return ClassRef(cls)
        return Parameterized(cls, args, owner)

    def _arguments(self) -> list[NativeType]:
        args = [self._argument()]
        while self._peek() == ",":
            self.index += 1
            args.append(self._argument())
        self._expect(">")
        return args

    def _argument(self) -> NativeType:
        save = self.index
        annotations = self.annotations()
        if self._peek() != "?":
            self.index = save
            return self.type()
        self.index += 1
        match self._peek():
            case "extends":
                self.index += 1
                return WildcardOf(upper=(self.type(),), annotations=annotations)
            case "super":
                self.index += 1
                return WildcardOf(lower=(self.type(),), annotations=annotations)
        return WildcardOf(annotations=annotations)


def _leading_space(text: str, position: int) -> int:
    return len(text[position:]) - len(text[position:].lstrip())


def parse_type(text: str, scope: Scope) -> NativeType:
    """Parse a single type expression.

    Raises:
        SignatureError: If the text is malformed or names an unknown type

    """
    parser = SignatureParser(text, scope)
    result = parser.type()
    parser.finish()
    return result


def parse_bounds(text: str, scope: Scope) -> list[NativeType]:
    """Parse an intersection of bounds (``A & B & C``)."""
    parser = SignatureParser(text, scope)
    result = parser.bounds()
    parser.finish()
    return result


def split_type_parameter(text: str) -> tuple[str, str | None]:
    """Split ``"T extends Comparable<T>"`` into its name and bound text.

    Raises:
        SignatureError: If the text is not a type parameter declaration

    """
    match = _TYPE_PARAMETER.match(text)
    if match is None:
        msg = "Malformed type parameter"
        raise SignatureError(msg, text, 0)
    return match.group(1), match.group(2)
