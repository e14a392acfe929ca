"""Declaration modifiers.

Native declarations carry their modifiers as an access bit-mask (the
class-file encoding); declarations expose them as a set of `Modifier`
members. `modifiers_of_mask` bridges the two.
"""

from __future__ import annotations

from enum import IntFlag, StrEnum


class Access(IntFlag):
    """Access and property flags in class-file encoding."""

    PUBLIC = 0x0001
    PRIVATE = 0x0002
    PROTECTED = 0x0004
    STATIC = 0x0008
    FINAL = 0x0010
    SYNCHRONIZED = 0x0020
    VOLATILE = 0x0040
    TRANSIENT = 0x0080
    NATIVE = 0x0100
    INTERFACE = 0x0200
    ABSTRACT = 0x0400
    STRICT = 0x0800
    SYNTHETIC = 0x1000
    ANNOTATION = 0x2000
    ENUM = 0x4000
    DEFAULT = 0x10000  # not a class-file bit; marks interface default methods


class Modifier(StrEnum):
    """Source-level modifiers of a declaration."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    DEFAULT = "default"
    STATIC = "static"
    FINAL = "final"
    TRANSIENT = "transient"
    VOLATILE = "volatile"
    SYNCHRONIZED = "synchronized"
    NATIVE = "native"
    STRICTFP = "strictfp"


_MASK_TO_MODIFIER: tuple[tuple[Access, Modifier], ...] = (
    (Access.PUBLIC, Modifier.PUBLIC),
    (Access.PROTECTED, Modifier.PROTECTED),
    (Access.PRIVATE, Modifier.PRIVATE),
    (Access.ABSTRACT, Modifier.ABSTRACT),
    (Access.DEFAULT, Modifier.DEFAULT),
    (Access.STATIC, Modifier.STATIC),
    (Access.FINAL, Modifier.FINAL),
    (Access.TRANSIENT, Modifier.TRANSIENT),
    (Access.VOLATILE, Modifier.VOLATILE),
    (Access.SYNCHRONIZED, Modifier.SYNCHRONIZED),
    (Access.NATIVE, Modifier.NATIVE),
    (Access.STRICT, Modifier.STRICTFP),
)

# Keywords accepted in stub documents, mapped to their access bits.
ACCESS_KEYWORDS: dict[str, Access] = {
    **{modifier.value: flag for flag, modifier in _MASK_TO_MODIFIER},
    "synthetic": Access.SYNTHETIC,
}


def modifiers_of_mask(mask: int) -> frozenset[Modifier]:
    """Convert an access bit-mask into the set of modifiers it encodes.

    Bits that have no source-level modifier (interface, annotation, enum,
    synthetic) are ignored.
    """
    flags = Access(mask)
    return frozenset(modifier for flag, modifier in _MASK_TO_MODIFIER if flag in flags)


def access_of_keywords(keywords: list[str] | tuple[str, ...]) -> Access:
    """Combine modifier keywords (``"public"``, ``"static"``...) into a mask.

    Raises:
        ValueError: If a keyword is not a known modifier

    """
    mask = Access(0)
    for keyword in keywords:
        if (flag := ACCESS_KEYWORDS.get(keyword)) is None:
            msg = f"Unknown modifier keyword: {keyword!r}"
            raise ValueError(msg)
        mask |= flag
    return mask
