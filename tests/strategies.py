"""Hypothesis strategies producing type recipes.

A recipe is a zero-argument callable that builds a fresh descriptor each
time it is called, so properties can compare two structurally equal but
distinct objects.
"""

from collections.abc import Callable

from hypothesis import strategies as st

from typemirror import (
    ArrayType,
    DeclaredType,
    PrimitiveType,
    TypeElement,
    TypeKind,
    TypeMirror,
    WildcardType,
    declared_type_of,
    system_class_path,
)

type Recipe = Callable[[], TypeMirror]


def _element(name: str) -> TypeElement:
    return TypeElement(system_class_path().require_type(name))


def _list_variable() -> TypeMirror:
    return _element("java.util.List").type_parameters[0].as_type()


REFERENCE_LEAVES: list[Recipe] = [
    lambda: declared_type_of("java.lang.String"),
    lambda: declared_type_of("java.lang.Integer"),
    lambda: declared_type_of("java.lang.Object"),
    lambda: declared_type_of("java.lang.Number"),
    lambda: declared_type_of("java.util.List"),
    _list_variable,
]

PRIMITIVE_LEAVES: list[Recipe] = [
    lambda: PrimitiveType(TypeKind.INT),
    lambda: PrimitiveType(TypeKind.DOUBLE),
    lambda: PrimitiveType(TypeKind.BOOLEAN),
]


def _array(inner: Recipe) -> Recipe:
    return lambda: ArrayType(inner())


def _list(inner: Recipe) -> Recipe:
    return lambda: DeclaredType(_element("java.util.List"), (inner(),))


def _extends_list(inner: Recipe) -> Recipe:
    return lambda: DeclaredType(_element("java.util.List"), (WildcardType(inner()),))


def _super_list(inner: Recipe) -> Recipe:
    return lambda: DeclaredType(
        _element("java.util.List"), (WildcardType(super_bound=inner()),)
    )


def _map(pair: tuple[Recipe, Recipe]) -> Recipe:
    key, value = pair
    return lambda: DeclaredType(_element("java.util.Map"), (key(), value()))


reference_recipes: st.SearchStrategy[Recipe] = st.recursive(
    st.sampled_from(REFERENCE_LEAVES),
    lambda children: st.one_of(
        children.map(_array),
        children.map(_list),
        children.map(_extends_list),
        children.map(_super_list),
        st.tuples(children, children).map(_map),
    ),
    max_leaves=6,
)

type_recipes: st.SearchStrategy[Recipe] = st.one_of(
    st.sampled_from(PRIMITIVE_LEAVES),
    st.sampled_from(PRIMITIVE_LEAVES).map(_array),
    reference_recipes,
)
