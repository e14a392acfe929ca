"""Tests for the generic signature parser."""

import pytest

from typemirror import SignatureError, system_class_path
from typemirror.source import (
    ArrayOf,
    ClassRef,
    NativeClass,
    Parameterized,
    Scope,
    TypeVarRef,
    WildcardOf,
    parse_bounds,
    parse_type,
)
from typemirror.source.signatures import split_type_parameter


@pytest.fixture
def scope() -> Scope:
    return Scope(class_path=system_class_path())


def native(name: str) -> NativeClass:
    return system_class_path().require_type(name)


class TestParseType:
    """Tests for single type expressions."""

    def test_implicit_java_lang(self, scope: Scope) -> None:
        """Simple names resolve against java.lang."""
        assert parse_type("String", scope) == ClassRef(native("java.lang.String"))

    def test_nested_generics(self, scope: Scope) -> None:
        """Arguments, wildcards and array brackets nest."""
        result = parse_type("java.util.Map<String, ? extends java.util.List<Integer>>[]", scope)
        expected = ArrayOf(
            Parameterized(
                native("java.util.Map"),
                (
                    ClassRef(native("java.lang.String")),
                    WildcardOf(
                        upper=(
                            Parameterized(
                                native("java.util.List"), (ClassRef(native("java.lang.Integer")),)
                            ),
                        )
                    ),
                ),
            )
        )
        assert result == expected

    def test_super_and_unbounded_wildcards(self, scope: Scope) -> None:
        """``? super X`` and ``?`` are both accepted."""
        result = parse_type("java.util.Map<? super Integer, ?>", scope)
        assert isinstance(result, Parameterized)
        integer = ClassRef(native("java.lang.Integer"))
        assert result.args == (WildcardOf(lower=(integer,)), WildcardOf())

    def test_varargs(self, scope: Scope) -> None:
        """A trailing ellipsis is an array."""
        assert parse_type("int...", scope) == ArrayOf(ClassRef(native("int")))

    def test_member_class(self, scope: Scope) -> None:
        """Qualified member classes resolve through their owner."""
        result = parse_type("java.util.Map.Entry<String, Integer>", scope)
        assert isinstance(result, Parameterized)
        assert result.raw is native("java.util.Map.Entry")

    def test_type_variables(self) -> None:
        """Names in scope resolve to type variables first."""
        variable = native("java.util.List").type_parameters[0]
        scope = Scope(class_path=system_class_path(), type_variables={"E": variable})
        assert parse_type("E[]", scope) == ArrayOf(TypeVarRef(variable))

    def test_type_annotations(self, scope: Scope) -> None:
        """Annotations attach to the type use but do not affect equality."""
        result = parse_type("@Deprecated String", scope)
        assert result == ClassRef(native("java.lang.String"))
        assert [a.annotation_type.name for a in result.annotations] == ["java.lang.Deprecated"]


class TestParseErrors:
    """Tests for malformed signatures."""

    @pytest.mark.parametrize(
        "text",
        [
            "java.util.List<",
            "Unknown",
            "int<String>",
            "java.util.List<String, String>",
            "String extra",
            "String%",
        ],
    )
    def test_rejected(self, scope: Scope, text: str) -> None:
        """Malformed text raises a signature error."""
        with pytest.raises(SignatureError):
            parse_type(text, scope)

    def test_parameterized_type_variable(self) -> None:
        """Type variables take no arguments."""
        variable = native("java.util.List").type_parameters[0]
        scope = Scope(class_path=system_class_path(), type_variables={"E": variable})
        with pytest.raises(SignatureError):
            parse_type("E<String>", scope)

    def test_error_points_at_position(self, scope: Scope) -> None:
        """The message shows the text with a caret under the problem."""
        with pytest.raises(SignatureError) as exc_info:
            parse_type("Unknown", scope)
        assert exc_info.value.position == 0
        assert str(exc_info.value).endswith("Unknown\n  ^")


class TestTypeParameters:
    """Tests for bounds and type parameter declarations."""

    def test_parse_bounds(self, scope: Scope) -> None:
        """Bounds are separated by ampersands."""
        bounds = parse_bounds("Number & Comparable<Integer>", scope)
        assert bounds[0] == ClassRef(native("java.lang.Number"))
        assert isinstance(bounds[1], Parameterized)

    def test_split_type_parameter(self) -> None:
        """A declaration splits into a name and optional bound text."""
        assert split_type_parameter("T extends Comparable<T>") == ("T", "Comparable<T>")
        assert split_type_parameter("U") == ("U", None)

    def test_malformed_type_parameter(self) -> None:
        """A declaration must start with a name."""
        with pytest.raises(SignatureError):
            split_type_parameter("<T>")
