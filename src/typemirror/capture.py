"""Capture conversion.

Replaces the wildcard arguments of a parameterized type with fresh type
variables. Each captured variable gets a token from a process-wide
counter, so capturing equal types twice yields different variables.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import replace

from typemirror.errors import InvalidArgumentKind
from typemirror.types import (
    CapturedType,
    DeclaredType,
    ExecutableType,
    PackageType,
    TypeMirror,
    WildcardType,
)

logger = logging.getLogger(__name__)

_tokens = itertools.count(1)
_sites = itertools.count(1)


def capture(t: TypeMirror) -> TypeMirror:
    """Capture the wildcard arguments of ``t``.

    Types without wildcard arguments, including every non-declared type,
    are returned as-is (the same object).

    Args:
        t: The type to capture.

    Returns:
        A declared type whose wildcard arguments are replaced by captured
        type variables, each bounded above by its wildcard's extends bound.

    Raises:
        InvalidArgumentKind: If ``t`` is an executable or package type

    """
    if isinstance(t, (ExecutableType, PackageType)):
        msg = f"Cannot capture a {t.kind} type"
        raise InvalidArgumentKind(msg)
    if not isinstance(t, DeclaredType) or not any(isinstance(a, WildcardType) for a in t.args):
        return t

    site = next(_sites)
    args = tuple(
        CapturedType(arg, next(_tokens), site) if isinstance(arg, WildcardType) else arg
        for arg in t.args
    )
    logger.debug("Captured %s at site %d", t, site)
    return replace(t, args=args)
