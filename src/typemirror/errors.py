"""Error kinds raised by the type algebra.

Every error is a caller-code defect rather than a transient condition:
operations either return a value or raise one of the classes below.
"""

from __future__ import annotations


class TypeMirrorError(Exception):
    """Base class for all type algebra errors."""


class InvalidArgumentKind(TypeMirrorError, TypeError):
    """An operation received a descriptor or declaration of an unsupported kind."""


class UnsupportedKind(InvalidArgumentKind):
    """A native type expression is not one of the recognised forms."""


class NoErasure(InvalidArgumentKind):
    """Erasure is undefined for the given descriptor."""


class UnsupportedValueKind(InvalidArgumentKind):
    """A value cannot be represented as an annotation value."""


class StructuralMismatch(TypeMirrorError, ValueError):
    """A well-kinded input is semantically invalid.

    Raised for wrong type argument counts, arguments that violate a type
    parameter's bounds and similar structural defects.
    """


class NotAMember(StructuralMismatch):
    """A declaration does not belong to the containing type."""


class SignatureError(StructuralMismatch):
    """Generic signature text could not be parsed."""

    def __init__(self, message: str, text: str = "", position: int = 0) -> None:
        super().__init__(message)
        self.text = text
        self.position = position

    def __str__(self) -> str:
        base = super().__str__()
        if not self.text:
            return base
        return f"{base}\n  {self.text}\n  {' ' * self.position}^"


class TypeNotFound(TypeMirrorError, LookupError):
    """No declaration is registered under the requested name."""
