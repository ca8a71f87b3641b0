"""
The immutable ``Specification`` value and its factory.

Example::

    is_active = specification(
        name="IsActive",
        is_satisfied_by=lambda user: user.status == "active",
        to_query=lambda: {"status": "active"},
    )
    is_active.is_satisfied_by(user)   # → bool
    is_active.to_query()              # → {"status": "active"}
    (is_active & is_admin).name       # → "IsActive AND IsAdmin"
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError
from .operators import LOGICAL_OPERATORS, SpecificationOperator
from .options import SpecificationOptions, parse_options
from .query import Filter, QueryFn

logger = logging.getLogger("domaindriven.specifications")

T = TypeVar("T")


@dataclass(frozen=True, eq=False, repr=False)
class Specification(Generic[T]):
    """
    A named, pure boolean rule over candidates of type ``T``.

    ``query`` is the optional translation into a structured filter; ``None``
    means the specification can only be evaluated in memory.  ``operator``
    and ``operands`` record how a composite was built; ``attr`` and
    ``value`` describe leaves produced by the predicate library.

    Instances are never mutated.  Composition returns new objects and
    leaves the operands untouched, so a specification can be shared by any
    number of composites.
    """

    name: str
    predicate: Callable[[T], Any]
    query: QueryFn | None = None
    operator: SpecificationOperator | None = field(default=None, kw_only=True)
    operands: tuple[Specification[Any], ...] = field(default=(), kw_only=True)
    attr: str | None = field(default=None, kw_only=True)
    value: Any = field(default=None, kw_only=True)

    def __post_init__(self) -> None:
        try:
            SpecificationOptions(
                name=self.name,
                is_satisfied_by=self.predicate,
                to_query=self.query,
            )
        except PydanticValidationError as exc:
            raise ConfigurationError.from_pydantic(
                "Invalid specification", exc
            ) from exc

    # -- evaluation ----------------------------------------------------------

    def is_satisfied_by(self, candidate: T) -> bool:
        """Return whether *candidate* satisfies this rule."""
        return bool(self.predicate(candidate))

    @property
    def supports_query(self) -> bool:
        """True when the specification can be translated into a filter."""
        return self.query is not None

    def to_query(self) -> Filter | None:
        """
        Translate into a structured filter.

        Returns ``None`` when no translation exists; callers then fall back
        to :func:`~domaindriven_specifications.utils.select`.
        """
        if self.query is None:
            return None
        return self.query()

    # -- composition ---------------------------------------------------------

    def and_(self, other: Specification[T]) -> Specification[T]:
        from .composite import and_specification

        return and_specification(self, other)

    def or_(self, other: Specification[T]) -> Specification[T]:
        from .composite import or_specification

        return or_specification(self, other)

    def not_(self) -> Specification[T]:
        from .composite import not_specification

        return not_specification(self)

    def __and__(self, other: Specification[T]) -> Specification[T]:
        return self.and_(other)

    def __or__(self, other: Specification[T]) -> Specification[T]:
        return self.or_(other)

    def __invert__(self) -> Specification[T]:
        return self.not_()

    # -- serialisation -------------------------------------------------------

    @property
    def is_composite(self) -> bool:
        return self.operator in LOGICAL_OPERATORS

    def to_dict(self) -> dict[str, Any]:
        """Describe the expression tree (composites nest their operands)."""
        if self.operator is None:
            return {"name": self.name}
        data: dict[str, Any] = {"op": self.operator.value, "name": self.name}
        if self.is_composite:
            data["conditions"] = [operand.to_dict() for operand in self.operands]
        elif self.attr is not None:
            data["attr"] = self.attr
            value = self.value
            data["val"] = list(value) if isinstance(value, list) else value
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def specification(
    options: SpecificationOptions | Mapping[str, Any] | None = None,
    /,
    **kwargs: Any,
) -> Specification[Any]:
    """
    Create an atomic specification.

    Options may be given as a mapping, a :class:`SpecificationOptions`
    instance, keyword arguments, or a mapping with keyword overrides.

    Raises:
        ConfigurationError: If no options are given, ``name`` is missing or
            empty, ``is_satisfied_by`` is missing or not callable, or
            ``to_query`` is not callable.
    """
    opts = parse_options(SpecificationOptions, options, kwargs, context="Specification")
    spec: Specification[Any] = Specification(
        opts.name, opts.is_satisfied_by, opts.to_query
    )
    logger.debug(
        "Created specification %r (query=%s)", spec.name, spec.supports_query
    )
    return spec
