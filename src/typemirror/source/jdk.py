"""Stub documents for the core library on the system class path.

Only the parts of the platform the type algebra needs to reason about
everyday code are described: the root class, boxes, strings, the
throwable hierarchy, the meta-annotations and the collection interfaces.
"""

from __future__ import annotations

from typing import Any

_NUMBER_METHODS = [
    {"name": "intValue", "returns": "int", "modifiers": ["public", "abstract"]},
    {"name": "longValue", "returns": "long", "modifiers": ["public", "abstract"]},
    {"name": "doubleValue", "returns": "double", "modifiers": ["public", "abstract"]},
]


def _box(name: str, primitive: str, *, numeric: bool) -> dict[str, Any]:
    return {
        "name": name,
        "modifiers": ["public", "final"],
        **({"superclass": "Number"} if numeric else {}),
        "interfaces": ["java.io.Serializable", f"Comparable<{name}>"] if not numeric
        else [f"Comparable<{name}>"],
        "fields": [
            {"name": "TYPE", "type": f"Class<{name}>", "modifiers": ["public", "static", "final"]},
        ],
        "constructors": [{"params": [primitive], "modifiers": ["public"]}],
        "methods": [
            {"name": "valueOf", "returns": name, "params": [primitive],
             "modifiers": ["public", "static"]},
            {"name": f"{primitive}Value", "returns": primitive, "modifiers": ["public"]},
            {"name": "compareTo", "returns": "int", "params": [name], "modifiers": ["public"]},
        ],
    }


JAVA_LANG: dict[str, Any] = {
    "package": "java.lang",
    "imports": ["java.io.Serializable"],
    "types": [
        {
            "name": "Object",
            "modifiers": ["public"],
            "constructors": [{"modifiers": ["public"]}],
            "methods": [
                {"name": "getClass", "returns": "Class<?>",
                 "modifiers": ["public", "final", "native"]},
                {"name": "hashCode", "returns": "int", "modifiers": ["public", "native"]},
                {"name": "equals", "returns": "boolean", "params": ["Object"],
                 "modifiers": ["public"]},
                {"name": "clone", "returns": "Object", "modifiers": ["protected", "native"],
                 "throws": ["CloneNotSupportedException"]},
                {"name": "toString", "returns": "String", "modifiers": ["public"]},
            ],
        },
        {"name": "Cloneable", "kind": "interface", "modifiers": ["public"]},
        {
            "name": "Comparable",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["T"],
            "methods": [{"name": "compareTo", "returns": "int", "params": ["T"]}],
        },
        {
            "name": "CharSequence",
            "kind": "interface",
            "modifiers": ["public"],
            "methods": [
                {"name": "length", "returns": "int"},
                {"name": "charAt", "returns": "char", "params": ["int"]},
            ],
        },
        {
            "name": "Iterable",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["T"],
            "methods": [{"name": "iterator", "returns": "java.util.Iterator<T>"}],
        },
        {
            "name": "Runnable",
            "kind": "interface",
            "modifiers": ["public"],
            "annotations": ["FunctionalInterface"],
            "methods": [{"name": "run"}],
        },
        {
            "name": "AutoCloseable",
            "kind": "interface",
            "modifiers": ["public"],
            "methods": [{"name": "close", "throws": ["Exception"]}],
        },
        {
            "name": "Class",
            "modifiers": ["public", "final"],
            "type_params": ["T"],
            "interfaces": ["Serializable"],
            "constructors": [{"modifiers": ["private"]}],
            "methods": [
                {"name": "getName", "returns": "String", "modifiers": ["public"]},
                {"name": "cast", "returns": "T", "params": ["Object"], "modifiers": ["public"]},
                {"name": "isInstance", "returns": "boolean", "params": ["Object"],
                 "modifiers": ["public", "native"]},
            ],
        },
        {
            "name": "String",
            "modifiers": ["public", "final"],
            "interfaces": ["Serializable", "Comparable<String>", "CharSequence"],
            "fields": [
                {"name": "CASE_INSENSITIVE_ORDER", "type": "java.util.Comparator<String>",
                 "modifiers": ["public", "static", "final"]},
            ],
            "constructors": [
                {"modifiers": ["public"]},
                {"params": ["char[]"], "modifiers": ["public"]},
            ],
            "methods": [
                {"name": "length", "returns": "int", "modifiers": ["public"]},
                {"name": "charAt", "returns": "char", "params": ["int"], "modifiers": ["public"]},
                {"name": "compareTo", "returns": "int", "params": ["String"],
                 "modifiers": ["public"]},
                {"name": "valueOf", "returns": "String", "params": ["Object"],
                 "modifiers": ["public", "static"]},
                {"name": "format", "returns": "String", "params": ["String", "Object..."],
                 "modifiers": ["public", "static"]},
            ],
        },
        {
            "name": "Number",
            "modifiers": ["public", "abstract"],
            "interfaces": ["Serializable"],
            "constructors": [{"modifiers": ["public"]}],
            "methods": _NUMBER_METHODS,
        },
        _box("Byte", "byte", numeric=True),
        _box("Short", "short", numeric=True),
        _box("Integer", "int", numeric=True),
        _box("Long", "long", numeric=True),
        _box("Float", "float", numeric=True),
        _box("Double", "double", numeric=True),
        _box("Character", "char", numeric=False),
        _box("Boolean", "boolean", numeric=False),
        {
            "name": "Void",
            "modifiers": ["public", "final"],
            "constructors": [{"modifiers": ["private"]}],
        },
        {
            "name": "Enum",
            "modifiers": ["public", "abstract"],
            "type_params": ["E extends Enum<E>"],
            "interfaces": ["Comparable<E>", "Serializable"],
            "constructors": [{"params": ["String", "int"], "modifiers": ["protected"]}],
            "methods": [
                {"name": "name", "returns": "String", "modifiers": ["public", "final"]},
                {"name": "ordinal", "returns": "int", "modifiers": ["public", "final"]},
                {"name": "compareTo", "returns": "int", "params": ["E"],
                 "modifiers": ["public", "final"]},
                {"name": "valueOf", "type_params": ["T extends Enum<T>"], "returns": "T",
                 "params": ["Class<T>", "String"], "modifiers": ["public", "static"]},
            ],
        },
        {
            "name": "Throwable",
            "modifiers": ["public"],
            "interfaces": ["Serializable"],
            "constructors": [
                {"modifiers": ["public"]},
                {"params": ["String"], "modifiers": ["public"]},
            ],
            "methods": [
                {"name": "getMessage", "returns": "String", "modifiers": ["public"]},
                {"name": "getCause", "returns": "Throwable", "modifiers": ["public"]},
            ],
        },
        {"name": "Exception", "modifiers": ["public"], "superclass": "Throwable"},
        {"name": "Error", "modifiers": ["public"], "superclass": "Throwable"},
        {"name": "RuntimeException", "modifiers": ["public"], "superclass": "Exception"},
        {"name": "CloneNotSupportedException", "modifiers": ["public"], "superclass": "Exception"},
        {"name": "IllegalArgumentException", "modifiers": ["public"],
         "superclass": "RuntimeException"},
        {"name": "IllegalStateException", "modifiers": ["public"],
         "superclass": "RuntimeException"},
        {
            "name": "Deprecated",
            "kind": "annotation",
            "modifiers": ["public"],
            "annotations": [
                "java.lang.annotation.Documented",
                {"type": "java.lang.annotation.Retention",
                 "values": {"value": {"enum": "java.lang.annotation.RetentionPolicy.RUNTIME"}}},
            ],
        },
        {
            "name": "FunctionalInterface",
            "kind": "annotation",
            "modifiers": ["public"],
            "annotations": [
                "java.lang.annotation.Documented",
                {"type": "java.lang.annotation.Retention",
                 "values": {"value": {"enum": "java.lang.annotation.RetentionPolicy.RUNTIME"}}},
            ],
        },
        {
            "name": "Override",
            "kind": "annotation",
            "modifiers": ["public"],
            "annotations": [
                {"type": "java.lang.annotation.Retention",
                 "values": {"value": {"enum": "java.lang.annotation.RetentionPolicy.SOURCE"}}},
            ],
        },
        {
            "name": "SuppressWarnings",
            "kind": "annotation",
            "modifiers": ["public"],
            "methods": [{"name": "value", "returns": "String[]"}],
        },
    ],
}

JAVA_LANG_ANNOTATION: dict[str, Any] = {
    "package": "java.lang.annotation",
    "types": [
        {
            "name": "Annotation",
            "kind": "interface",
            "modifiers": ["public"],
            "methods": [{"name": "annotationType", "returns": "Class<? extends Annotation>"}],
        },
        {
            "name": "RetentionPolicy",
            "kind": "enum",
            "modifiers": ["public"],
            "constants": ["SOURCE", "CLASS", "RUNTIME"],
        },
        {
            "name": "ElementType",
            "kind": "enum",
            "modifiers": ["public"],
            "constants": [
                "TYPE", "FIELD", "METHOD", "PARAMETER", "CONSTRUCTOR", "LOCAL_VARIABLE",
                "ANNOTATION_TYPE", "PACKAGE", "TYPE_PARAMETER", "TYPE_USE",
            ],
        },
        {
            "name": "Retention",
            "kind": "annotation",
            "modifiers": ["public"],
            "annotations": ["Documented"],
            "methods": [{"name": "value", "returns": "RetentionPolicy"}],
        },
        {
            "name": "Target",
            "kind": "annotation",
            "modifiers": ["public"],
            "annotations": ["Documented"],
            "methods": [{"name": "value", "returns": "ElementType[]"}],
        },
        {"name": "Documented", "kind": "annotation", "modifiers": ["public"]},
        {"name": "Inherited", "kind": "annotation", "modifiers": ["public"]},
    ],
}

JAVA_IO: dict[str, Any] = {
    "package": "java.io",
    "types": [
        {"name": "Serializable", "kind": "interface", "modifiers": ["public"]},
        {
            "name": "Closeable",
            "kind": "interface",
            "modifiers": ["public"],
            "interfaces": ["AutoCloseable"],
            "methods": [{"name": "close", "throws": ["IOException"]}],
        },
        {"name": "IOException", "modifiers": ["public"], "superclass": "Exception"},
    ],
}

JAVA_UTIL: dict[str, Any] = {
    "package": "java.util",
    "imports": ["java.io.Serializable"],
    "types": [
        {
            "name": "Iterator",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["E"],
            "methods": [
                {"name": "hasNext", "returns": "boolean"},
                {"name": "next", "returns": "E"},
            ],
        },
        {
            "name": "Comparator",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["T"],
            "annotations": ["FunctionalInterface"],
            "methods": [{"name": "compare", "returns": "int", "params": ["T", "T"]}],
        },
        {"name": "RandomAccess", "kind": "interface", "modifiers": ["public"]},
        {
            "name": "Collection",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["E"],
            "interfaces": ["Iterable<E>"],
            "methods": [
                {"name": "size", "returns": "int"},
                {"name": "isEmpty", "returns": "boolean"},
                {"name": "contains", "returns": "boolean", "params": ["Object"]},
                {"name": "add", "returns": "boolean", "params": ["E"]},
                {"name": "addAll", "returns": "boolean", "params": ["Collection<? extends E>"]},
                {"name": "toArray", "type_params": ["T"], "returns": "T[]", "params": ["T[]"]},
            ],
        },
        {
            "name": "List",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["E"],
            "interfaces": ["Collection<E>"],
            "methods": [
                {"name": "get", "returns": "E", "params": [{"name": "index", "type": "int"}]},
                {"name": "set", "returns": "E", "params": ["int", "E"]},
                {"name": "add", "returns": "boolean", "params": ["E"]},
                {"name": "subList", "returns": "List<E>", "params": ["int", "int"]},
                {"name": "sort", "returns": "void", "params": ["Comparator<? super E>"],
                 "modifiers": ["default"]},
            ],
        },
        {
            "name": "Set",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["E"],
            "interfaces": ["Collection<E>"],
        },
        {
            "name": "AbstractCollection",
            "modifiers": ["public", "abstract"],
            "type_params": ["E"],
            "interfaces": ["Collection<E>"],
            "constructors": [{"modifiers": ["protected"]}],
            "methods": [
                {"name": "size", "returns": "int", "modifiers": ["public", "abstract"]},
                {"name": "add", "returns": "boolean", "params": ["E"], "modifiers": ["public"]},
                {"name": "toString", "returns": "String", "modifiers": ["public"]},
            ],
        },
        {
            "name": "AbstractList",
            "modifiers": ["public", "abstract"],
            "type_params": ["E"],
            "superclass": "AbstractCollection<E>",
            "interfaces": ["List<E>"],
            "fields": [
                {"name": "modCount", "type": "int", "modifiers": ["protected", "transient"]},
            ],
            "constructors": [{"modifiers": ["protected"]}],
            "methods": [
                {"name": "get", "returns": "E", "params": ["int"],
                 "modifiers": ["public", "abstract"]},
            ],
        },
        {
            "name": "ArrayList",
            "modifiers": ["public"],
            "type_params": ["E"],
            "superclass": "AbstractList<E>",
            "interfaces": ["List<E>", "RandomAccess", "Cloneable", "Serializable"],
            "fields": [{"name": "size", "type": "int", "modifiers": ["private"]}],
            "constructors": [
                {"modifiers": ["public"]},
                {"params": ["int"], "modifiers": ["public"]},
                {"params": ["Collection<? extends E>"], "modifiers": ["public"]},
            ],
            "methods": [
                {"name": "get", "returns": "E", "params": ["int"], "modifiers": ["public"]},
                {"name": "size", "returns": "int", "modifiers": ["public"]},
                {"name": "trimToSize", "modifiers": ["public"]},
            ],
        },
        {
            "name": "Map",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["K", "V"],
            "types": [
                {
                    "name": "Entry",
                    "kind": "interface",
                    "modifiers": ["public", "static"],
                    "type_params": ["K", "V"],
                    "methods": [
                        {"name": "getKey", "returns": "K"},
                        {"name": "getValue", "returns": "V"},
                    ],
                },
            ],
            "methods": [
                {"name": "get", "returns": "V", "params": ["Object"]},
                {"name": "put", "returns": "V", "params": ["K", "V"]},
                {"name": "entrySet", "returns": "Set<Map.Entry<K, V>>"},
                {"name": "keySet", "returns": "Set<K>"},
            ],
        },
        {
            "name": "AbstractMap",
            "modifiers": ["public", "abstract"],
            "type_params": ["K", "V"],
            "interfaces": ["Map<K, V>"],
            "constructors": [{"modifiers": ["protected"]}],
        },
        {
            "name": "HashMap",
            "modifiers": ["public"],
            "type_params": ["K", "V"],
            "superclass": "AbstractMap<K, V>",
            "interfaces": ["Map<K, V>", "Cloneable", "Serializable"],
            "constructors": [{"modifiers": ["public"]}],
        },
    ],
}

JAVA_UTIL_FUNCTION: dict[str, Any] = {
    "package": "java.util.function",
    "types": [
        {
            "name": "Supplier",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["T"],
            "annotations": ["FunctionalInterface"],
            "methods": [{"name": "get", "returns": "T"}],
        },
        {
            "name": "Function",
            "kind": "interface",
            "modifiers": ["public"],
            "type_params": ["T", "R"],
            "annotations": ["FunctionalInterface"],
            "methods": [{"name": "apply", "returns": "R", "params": ["T"]}],
        },
    ],
}

CORE_LIBRARY: tuple[dict[str, Any], ...] = (
    JAVA_LANG_ANNOTATION,
    JAVA_LANG,
    JAVA_IO,
    JAVA_UTIL,
    JAVA_UTIL_FUNCTION,
)
