"""
Helpers shared by the predicate library and callers.

- ``resolve_property``: read a (dotted) property from a mapping or object
- ``strict_equals``: equality that does not conflate ``bool`` with ``int``
- ``select``: in-memory fallback filtering over a collection
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Final, TypeVar

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .base import Specification

logger = logging.getLogger("domaindriven.specifications")

T = TypeVar("T")


class _Missing:
    """Sentinel type for a property absent from a candidate."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def resolve_property(candidate: Any, path: str) -> Any:
    """
    Resolve a dot-separated property path on *candidate*.

    Mappings are read by key, anything else by attribute.  Returns
    :data:`MISSING` when the candidate is ``None`` or any segment of the
    path is absent, so that "missing" and "present but ``None``" stay
    distinguishable.
    """
    if candidate is None:
        return MISSING
    current = candidate
    for part in path.split("."):
        if current is None:
            return MISSING
        if isinstance(current, Mapping):
            if part not in current:
                return MISSING
            current = current[part]
        else:
            current = getattr(current, part, MISSING)
            if current is MISSING:
                return MISSING
    return current


def strict_equals(actual: Any, expected: Any) -> bool:
    """
    Equality without cross-type coercion between ``bool`` and numbers.

    ``True == 1`` holds in Python; here it does not.  ``MISSING`` never
    equals anything.
    """
    if actual is MISSING or expected is MISSING:
        return False
    if isinstance(actual, bool) or isinstance(expected, bool):
        return (
            isinstance(actual, bool)
            and isinstance(expected, bool)
            and actual is expected
        )
    try:
        return bool(actual == expected)
    except (TypeError, ValueError, ArithmeticError):
        logger.debug(
            "Equality between %r and %r is undefined; treating as unequal",
            type(actual).__name__,
            type(expected).__name__,
        )
        return False


def select(
    specification: Specification[T] | Callable[[T], Any],
    candidates: Iterable[T],
) -> list[T]:
    """
    Return the candidates satisfying *specification*, in input order.

    This is the fallback a repository uses when a specification has no
    query translation.  A bare predicate callable is accepted as well.

    Raises:
        ConfigurationError: If *specification* is neither a specification
            nor callable.
    """
    from .base import Specification

    if isinstance(specification, Specification):
        predicate: Callable[[T], Any] = specification.is_satisfied_by
    elif callable(specification):
        predicate = specification
    else:
        raise ConfigurationError(
            "select() requires a Specification or a predicate callable, "
            f"got {type(specification).__name__}"
        )
    return [candidate for candidate in candidates if predicate(candidate)]
