"""Tests for type descriptors."""

import pytest

from typemirror import (
    AnnotationMirror,
    ArrayType,
    CapturedType,
    DeclaredType,
    IntersectionType,
    InvalidArgumentKind,
    NoneType,
    NullType,
    PrimitiveType,
    StructuralMismatch,
    TypeKind,
    UnionType,
    WildcardType,
    declared_type_of,
    object_type,
)

from conftest import declared, element


def string() -> DeclaredType:
    return declared_type_of("java.lang.String")


class TestPrimitiveType:
    """Tests for primitive descriptors."""

    def test_kind(self) -> None:
        """A primitive descriptor carries its kind."""
        assert PrimitiveType(TypeKind.INT).kind is TypeKind.INT

    def test_rejects_non_primitive_kind(self) -> None:
        """Only the eight primitive kinds are accepted."""
        with pytest.raises(InvalidArgumentKind):
            PrimitiveType(TypeKind.DECLARED)

    def test_structural_equality(self) -> None:
        """Equal kinds give equal, hash-compatible descriptors."""
        assert PrimitiveType(TypeKind.LONG) == PrimitiveType(TypeKind.LONG)
        assert len({PrimitiveType(TypeKind.LONG), PrimitiveType(TypeKind.LONG)}) == 1


class TestArrayType:
    """Tests for array descriptors."""

    def test_component(self) -> None:
        """An array exposes its component."""
        assert ArrayType(string()).component == string()

    def test_rejects_wildcard_component(self) -> None:
        """A wildcard cannot be an array component."""
        with pytest.raises(InvalidArgumentKind):
            ArrayType(WildcardType())


class TestDeclaredType:
    """Tests for declared descriptors."""

    def test_wrong_argument_count(self) -> None:
        """Argument count must match the declaration."""
        with pytest.raises(StructuralMismatch):
            DeclaredType(element("java.util.List"), (string(), string()))

    def test_primitive_argument(self) -> None:
        """Primitives are not valid type arguments."""
        with pytest.raises(InvalidArgumentKind):
            DeclaredType(element("java.util.List"), (PrimitiveType(TypeKind.INT),))

    def test_intersection_argument(self) -> None:
        """Intersections are not valid type arguments."""
        bounds = (declared_type_of("java.lang.Number"), declared_type_of("java.io.Serializable"))
        with pytest.raises(InvalidArgumentKind):
            DeclaredType(element("java.util.List"), (IntersectionType(bounds),))

    def test_raw(self) -> None:
        """Only argument-less uses of generic declarations are raw."""
        assert declared_type_of("java.util.List").is_raw
        assert not declared("java.util.List", string()).is_raw
        assert not string().is_raw

    def test_top_level_has_no_enclosing_type(self) -> None:
        """A top-level class has the none type as its enclosing type."""
        assert string().enclosing_type == NoneType()

    def test_annotations_ignored_in_equality(self) -> None:
        """Type annotations take no part in equality or hashing."""
        mirror = AnnotationMirror(declared_type_of("java.lang.Deprecated"))
        annotated = DeclaredType(element("java.lang.String"), annotations=(mirror,))
        assert annotated == string()
        assert hash(annotated) == hash(string())
        assert annotated.annotations == (mirror,)


class TestWildcardType:
    """Tests for wildcard descriptors."""

    def test_defaults(self) -> None:
        """Missing bounds default to Object above and null below."""
        wildcard = WildcardType()
        assert wildcard.extends_bound == object_type()
        assert wildcard.super_bound == NullType()
        assert wildcard.is_unbounded

    def test_object_bound_is_unbounded(self) -> None:
        """``? extends Object`` is the same descriptor as ``?``."""
        assert WildcardType(object_type()) == WildcardType()

    def test_both_bounds_rejected(self) -> None:
        """A wildcard has at most one explicit bound."""
        with pytest.raises(StructuralMismatch):
            WildcardType(string(), declared_type_of("java.lang.Integer"))

    def test_primitive_bound_rejected(self) -> None:
        """Primitives cannot bound a wildcard."""
        with pytest.raises(InvalidArgumentKind):
            WildcardType(PrimitiveType(TypeKind.INT))

    def test_super_bound(self) -> None:
        """A lower-bounded wildcard keeps Object as its upper bound."""
        wildcard = WildcardType(super_bound=string())
        assert wildcard.extends_bound == object_type()
        assert not wildcard.is_unbounded


class TestCompositeTypes:
    """Tests for intersection and union descriptors."""

    def test_intersection_needs_two_bounds(self) -> None:
        """A single-bound intersection is rejected."""
        with pytest.raises(StructuralMismatch):
            IntersectionType((string(),))

    def test_union_needs_two_alternatives(self) -> None:
        """A single-alternative union is rejected."""
        with pytest.raises(StructuralMismatch):
            UnionType((string(),))

    def test_kinds(self) -> None:
        """Composite descriptors report their kinds."""
        pair = (string(), declared_type_of("java.lang.Integer"))
        assert IntersectionType(pair).kind is TypeKind.INTERSECTION
        assert UnionType(pair).kind is TypeKind.UNION


class TestCapturedType:
    """Tests for captured type variables."""

    def test_identity_by_token(self) -> None:
        """Only the token decides equality."""
        wildcard = WildcardType(declared_type_of("java.lang.Number"))
        assert CapturedType(wildcard, 1) == CapturedType(WildcardType(), 1)
        assert CapturedType(wildcard, 1) != CapturedType(wildcard, 2)

    def test_kind_and_bounds(self) -> None:
        """A captured variable is a type variable bounded by its wildcard."""
        number = declared_type_of("java.lang.Number")
        captured = CapturedType(WildcardType(number), 7)
        assert captured.kind is TypeKind.TYPEVAR
        assert captured.upper_bound == number
        assert captured.lower_bound == NullType()
