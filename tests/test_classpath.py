"""Tests for class paths and stub loading."""

import json
import logging
import threading

import pytest

from typemirror import (
    ClassPath,
    SignatureError,
    StructuralMismatch,
    TypeNotFound,
    system_class_path,
)
from typemirror.source import Nesting, Parameterized, TypeVarRef, classpath


class TestLookups:
    """Tests for name lookups."""

    def test_canonical_and_binary_names(self) -> None:
        """Member classes are found by canonical and binary name."""
        path = system_class_path()
        assert path.lookup_type("java.util.Map$Entry") is path.lookup_type("java.util.Map.Entry")

    def test_unknown_type(self) -> None:
        """Unknown names give None, or TypeNotFound when required."""
        path = system_class_path()
        assert path.lookup_type("java.lang.Nope") is None
        with pytest.raises(TypeNotFound):
            path.require_type("java.lang.Nope")

    def test_contains(self, class_path: ClassPath) -> None:
        """Membership checks see the parent's classes too."""
        assert "com.example.Box" in class_path
        assert "java.lang.String" in class_path
        assert "com.example.Box" not in system_class_path()

    def test_primitives_registered(self) -> None:
        """Primitive pseudo-classes live on the system class path."""
        assert system_class_path().require_type("int").is_primitive

    def test_packages(self, class_path: ClassPath) -> None:
        """Packages of the class path and its parent are listed, sorted."""
        packages = class_path.packages()
        assert {"com.example", "com.other", "java.lang", "java.util"} <= set(packages)
        assert packages == sorted(packages)

    def test_package_exists(self, class_path: ClassPath) -> None:
        """Packages are known once a class path or its parent defines them."""
        assert class_path.package_exists("com.example")
        assert class_path.package_exists("java.util")
        assert not class_path.package_exists("com")
        assert not system_class_path().package_exists("com.example")

    def test_classes_in_package(self, class_path: ClassPath) -> None:
        """Only top-level classes are listed for a package."""
        names = {cls.simple_name for cls in class_path.classes_in("com.example")}
        assert names == {
            "Box",
            "Outer",
            "Node",
            "Marker",
            "Plain",
            "Base",
            "Derived",
            "Version",
            "Color",
        }

    def test_local_classes(self, class_path: ClassPath) -> None:
        """Anonymous classes are numbered after their enclosing class."""
        box = class_path.require_type("com.example.Box")
        (anonymous,) = class_path.local_classes(box)
        assert anonymous.name == "com.example.Box$1"
        assert anonymous.nesting is Nesting.ANONYMOUS

    def test_generic_type_expression_of_class(self, class_path: ClassPath) -> None:
        """A class's generic expression is its self type."""
        box = class_path.require_type("com.example.Box")
        expression = class_path.generic_type_expression_of(box)
        assert expression == Parameterized(box, (TypeVarRef(box.type_parameters[0]),))

    def test_members_of(self, class_path: ClassPath) -> None:
        """Declared members come back in declaration order."""
        box = class_path.require_type("com.example.Box")
        found = class_path.members_of(box)
        assert [m.name for m in found.methods] == ["get", "set", "create"]
        assert [f.name for f in found.fields] == ["value"]
        assert len(found.constructors) == 1


class TestLoading:
    """Tests for loading stub documents."""

    def test_core_library_cannot_be_shadowed(self) -> None:
        """A user class path cannot redefine a parent's class."""
        with pytest.raises(StructuralMismatch, match="already defined"):
            ClassPath().load({"package": "java.lang", "types": [{"name": "String"}]})

    def test_missing_package(self) -> None:
        """Documents must name their package."""
        with pytest.raises(StructuralMismatch):
            ClassPath().load({"types": []})

    def test_unnamed_member_class(self) -> None:
        """Only anonymous classes may omit their name."""
        document = {"package": "org.sample", "types": [{"name": "A", "types": [{}]}]}
        with pytest.raises(StructuralMismatch):
            ClassPath().load(document)

    def test_load_json(self) -> None:
        """JSON text holding one document is accepted."""
        path = ClassPath()
        text = json.dumps(
            {
                "package": "org.sample",
                "types": [{"name": "Pair", "type_params": ["A", "B extends A"]}],
            }
        )
        (pair,) = path.load_json(text)
        assert pair.name == "org.sample.Pair"
        assert [v.name for v in pair.type_parameters] == ["A", "B"]
        assert pair.type_parameters[1].bounds == [TypeVarRef(pair.type_parameters[0])]

    def test_load_json_rejects_scalars(self) -> None:
        """JSON that is neither an object nor an array is rejected."""
        with pytest.raises(StructuralMismatch):
            ClassPath().load_json("42")

    def test_forward_references(self) -> None:
        """Types may refer to types declared later in the same load."""
        path = ClassPath()
        path.load(
            {
                "package": "org.sample",
                "types": [
                    {"name": "First", "superclass": "Second"},
                    {"name": "Second"},
                ],
            }
        )
        first = path.require_type("org.sample.First")
        assert first.is_subclass_of(path.require_type("org.sample.Second"))

    def test_failed_load_leaves_no_declarations(self) -> None:
        """A load that fails part way can be retried once corrected."""
        path = ClassPath()
        broken = {"package": "p", "types": [{"name": "A"}, {"name": "B", "superclass": "Nope"}]}
        with pytest.raises(SignatureError, match="Nope"):
            path.load(broken)
        assert "p.A" not in path
        assert "p.B" not in path
        assert not path.package_exists("p")

        first, second = path.load(
            {"package": "p", "types": [{"name": "A"}, {"name": "B", "superclass": "A"}]}
        )
        assert second.is_subclass_of(first)

    def test_failed_load_keeps_existing_package(self) -> None:
        """Earlier declarations and package annotations survive a failed load."""
        path = ClassPath()
        path.load({"package": "p", "types": [{"name": "Kept"}]})
        broken = {
            "package": "p",
            "annotations": ["java.lang.Deprecated"],
            "types": [{"name": "Dropped", "interfaces": ["Missing"]}],
        }
        with pytest.raises(SignatureError):
            path.load(broken)
        assert "p.Kept" in path
        assert "p.Dropped" not in path
        assert path.define_package("p").annotations == []

    def test_failed_json_load_rolled_back(self) -> None:
        """JSON loads are all or nothing as well."""
        path = ClassPath()
        text = json.dumps(
            [{"package": "p", "types": [{"name": "A"}]}, {"package": "q", "types": [{}]}]
        )
        with pytest.raises(StructuralMismatch):
            path.load_json(text)
        assert "p.A" not in path

    @pytest.mark.parametrize(
        "entry",
        [
            {"name": "A", "kind": "struct"},
            {"name": "A", "nesting": "sideways"},
            {"name": "A", "fields": [{"name": "x"}]},
            {"name": "A", "fields": [{"type": "int"}]},
            {"name": "A", "methods": [{"returns": "void"}]},
            {"name": "A", "methods": [{"name": "m", "params": [{"name": "x"}]}]},
            {"name": "A", "annotations": [{"values": {}}]},
            "A",
        ],
        ids=[
            "bad-kind",
            "bad-nesting",
            "field-without-type",
            "field-without-name",
            "method-without-name",
            "parameter-without-type",
            "annotation-without-type",
            "entry-not-object",
        ],
    )
    def test_malformed_entries(self, entry: object) -> None:
        """Malformed entries are reported as structural mismatches."""
        path = ClassPath()
        with pytest.raises(StructuralMismatch):
            path.load({"package": "p", "types": [entry]})
        assert "p.A" not in path

class TestSystemClassPath:
    """Tests for the shared system class path."""

    def test_singleton(self) -> None:
        """Every call returns the same instance."""
        assert system_class_path() is system_class_path()

    def test_concurrent_first_use_builds_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Racing first calls build the class path exactly once."""
        builds = []
        build = classpath._build_system_class_path

        def counting_build() -> ClassPath:
            builds.append(threading.get_ident())
            return build()

        monkeypatch.setattr(classpath, "_system", None)
        monkeypatch.setattr(classpath, "_build_system_class_path", counting_build)

        barrier = threading.Barrier(8)
        results: list[ClassPath] = []
        lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            path = classpath.system_class_path()
            with lock:
                results.append(path)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(builds) == 1
        assert len(results) == 8
        assert all(path is results[0] for path in results)

    def test_initialization_logged(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Building the system class path logs a summary."""
        monkeypatch.setattr(classpath, "_system", None)
        with caplog.at_level(logging.INFO, logger="typemirror.source.classpath"):
            classpath.system_class_path()
        assert "System class path initialized" in caplog.text
