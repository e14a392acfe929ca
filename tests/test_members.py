"""Tests for member enumeration, hiding, overriding and lookups."""

import pytest

from typemirror import (
    ClassPath,
    ElementKind,
    InvalidArgumentKind,
    TypeElement,
    VariableElement,
    WildcardType,
    as_element,
    capture,
    get_all_annotation_mirrors,
    get_binary_name,
    get_package_of,
    get_type_element,
    hides,
    is_deprecated,
    members,
    overrides,
)

from conftest import declared, element, field, method


class TestMembers:
    """Tests for collecting declared and inherited members."""

    def test_fields_mask_inherited(self, class_path: ClassPath) -> None:
        """A redeclared field masks the inherited one."""
        derived = element("com.example.Derived", class_path)
        fields = [m for m in members(derived) if isinstance(m, VariableElement)]
        assert [f.simple_name for f in fields] == ["count", "secret", "label"]
        assert all(f.enclosing_element == derived for f in fields)

    def test_constructors_merged_by_signature(self, class_path: ClassPath) -> None:
        """Default constructors of a class and its superclass share one key."""
        derived = element("com.example.Derived", class_path)
        constructors = [m for m in members(derived) if m.kind is ElementKind.CONSTRUCTOR]
        assert len(constructors) == 1
        assert constructors[0].enclosing_element == derived

    def test_methods_in_hierarchy_order(self, class_path: ClassPath) -> None:
        """Own methods come first, then those of superclasses, nearest first."""
        derived = element("com.example.Derived", class_path)
        methods = [m for m in members(derived) if m.kind is ElementKind.METHOD]
        assert [m.simple_name for m in methods] == [
            "describe",
            "create",
            "setCount",
            "internal",
            "getClass",
            "hashCode",
            "equals",
            "clone",
            "toString",
        ]
        describe = methods[0]
        assert describe.enclosing_element == derived

    def test_kind_order(self, class_path: ClassPath) -> None:
        """Fields, then constructors, then methods, then nested classes."""
        outer = element("com.example.Outer", class_path)
        kinds = [m.kind for m in members(outer)]
        assert kinds.index(ElementKind.FIELD) < kinds.index(ElementKind.CONSTRUCTOR)
        assert kinds.index(ElementKind.CONSTRUCTOR) < kinds.index(ElementKind.METHOD)
        nested = [m.simple_name for m in members(outer) if isinstance(m, TypeElement)]
        assert nested == ["Inner", "Nested"]

    def test_interface_methods_inherited(self) -> None:
        """Members of superinterfaces are included."""
        names = {m.simple_name for m in members(element("java.util.ArrayList"))}
        assert {"get", "addAll", "iterator"} <= names

    def test_rejects_non_type(self, class_path: ClassPath) -> None:
        """Only type declarations have members."""
        get = method(element("com.example.Box", class_path), "get")
        with pytest.raises(InvalidArgumentKind):
            members(get)  # type: ignore[arg-type]


class TestHides:
    """Tests for hiding and shadowing."""

    def test_field_hides_visible_field(self, class_path: ClassPath) -> None:
        """A field hides a visible field of a superclass with the same name."""
        derived = element("com.example.Derived", class_path)
        base = element("com.example.Base", class_path)
        assert hides(field(derived, "count"), field(base, "count"))
        assert not hides(field(base, "count"), field(derived, "count"))

    def test_private_field_not_hidden(self, class_path: ClassPath) -> None:
        """Private fields are not inherited, so nothing hides them."""
        derived = element("com.example.Derived", class_path)
        base = element("com.example.Base", class_path)
        assert not hides(field(derived, "secret"), field(base, "secret"))

    def test_parameter_shadows_fields(self, class_path: ClassPath) -> None:
        """A parameter shadows fields of its own class and inherited ones."""
        derived = element("com.example.Derived", class_path)
        base = element("com.example.Base", class_path)
        (count,) = method(derived, "setCount").parameters
        assert hides(count, field(derived, "count"))
        assert hides(count, field(base, "count"))

    def test_static_method_hides(self, class_path: ClassPath) -> None:
        """Static methods hide; instance methods override instead."""
        derived = element("com.example.Derived", class_path)
        base = element("com.example.Base", class_path)
        assert hides(method(derived, "create"), method(base, "create"))
        assert not hides(method(derived, "describe"), method(base, "describe"))

    def test_type_parameter_shadows(self, class_path: ClassPath) -> None:
        """A method's type parameter shadows the class's parameter of the same name."""
        outer = element("com.example.Outer", class_path)
        (method_t,) = method(outer, "shadow").type_parameters
        (class_t,) = outer.type_parameters
        assert hides(method_t, class_t)
        assert not hides(class_t, method_t)

    def test_different_names(self, class_path: ClassPath) -> None:
        """Only same-named declarations hide each other."""
        derived = element("com.example.Derived", class_path)
        base = element("com.example.Base", class_path)
        assert not hides(field(derived, "label"), field(base, "count"))
        assert not hides(derived, derived)


class TestOverrides:
    """Tests for method overriding."""

    def test_class_method(self, class_path: ClassPath) -> None:
        """A subclass method overrides the superclass method it redeclares."""
        derived = element("com.example.Derived", class_path)
        base = element("com.example.Base", class_path)
        assert overrides(method(derived, "describe"), method(base, "describe"), derived)
        assert not overrides(method(base, "describe"), method(derived, "describe"), derived)

    def test_across_packages(self, class_path: ClassPath) -> None:
        """Public methods are overridden across packages, package-private ones are not."""
        remote = element("com.other.Remote", class_path)
        base = element("com.example.Base", class_path)
        assert overrides(method(remote, "describe"), method(base, "describe"), remote)
        assert not overrides(method(remote, "internal"), method(base, "internal"), remote)

    def test_static_methods_never_override(self, class_path: ClassPath) -> None:
        """Static methods hide rather than override."""
        derived = element("com.example.Derived", class_path)
        base = element("com.example.Base", class_path)
        assert not overrides(method(derived, "create"), method(base, "create"), derived)

    def test_generic_interface_method(self, class_path: ClassPath) -> None:
        """Signatures are compared as members of the given type."""
        version = element("com.example.Version", class_path)
        compare_to = method(element("java.lang.Comparable"), "compareTo")
        assert overrides(method(version, "compareTo"), compare_to, version)
        string = element("java.lang.String")
        assert overrides(method(string, "compareTo"), compare_to, string)

    def test_library_hierarchy(self) -> None:
        """Class methods override interface methods through the hierarchy."""
        array_list = element("java.util.ArrayList")
        get = method(array_list, "get")
        assert overrides(get, method(element("java.util.List"), "get"), array_list)


class TestAnnotations:
    """Tests for inherited annotations and deprecation."""

    def test_inherited_annotations(self, class_path: ClassPath) -> None:
        """Only @Inherited annotations of superclasses are added, after direct ones."""
        derived = element("com.example.Derived", class_path)
        names = [
            m.annotation_type.element.qualified_name for m in get_all_annotation_mirrors(derived)
        ]
        assert names == ["java.lang.Deprecated", "com.example.Marker"]

    def test_non_class_annotations_direct_only(self, class_path: ClassPath) -> None:
        """Members only report their own annotations."""
        derived = element("com.example.Derived", class_path)
        label = field(derived, "label")
        assert get_all_annotation_mirrors(label) == label.annotation_mirrors

    def test_deprecated(self, class_path: ClassPath) -> None:
        """Deprecation is only read from direct annotations."""
        assert is_deprecated(element("com.example.Derived", class_path))
        assert not is_deprecated(element("com.example.Base", class_path))


class TestLookups:
    """Tests for name lookups."""

    def test_get_type_element(self) -> None:
        """Types are found by canonical or binary name."""
        entry = get_type_element("java.util.Map$Entry")
        assert entry is not None
        assert entry == get_type_element("java.util.Map.Entry")
        assert get_type_element("int") is None
        assert get_type_element("java.util.Nope") is None

    def test_get_type_element_on_class_path(self, class_path: ClassPath) -> None:
        """User types are found on their own class path only."""
        assert get_type_element("com.example.Box", class_path=class_path) is not None
        assert get_type_element("com.example.Box") is None

    def test_get_package_of(self, class_path: ClassPath) -> None:
        """Members belong to the package of their class."""
        get = method(element("com.example.Box", class_path), "get")
        assert get_package_of(get).qualified_name == "com.example"
        package = get_package_of(element("java.lang.String"))
        assert get_package_of(package) is package

    def test_captured_variable_has_no_package(self) -> None:
        """Synthetic capture declarations belong to no package."""
        (arg,) = capture(declared("java.util.List", WildcardType())).args
        captured = as_element(arg)
        assert captured is not None
        with pytest.raises(InvalidArgumentKind):
            get_package_of(captured)

    def test_binary_names(self, class_path: ClassPath) -> None:
        """Nested classes use ``$`` and anonymous classes are numbered."""
        entry = get_type_element("java.util.Map.Entry")
        assert entry is not None
        assert get_binary_name(entry) == "java.util.Map$Entry"
        box = class_path.require_type("com.example.Box")
        anonymous = TypeElement(class_path.local_classes(box)[0])
        assert get_binary_name(anonymous) == "com.example.Box$1"
