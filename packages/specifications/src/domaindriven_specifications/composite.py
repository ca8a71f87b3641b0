"""
AND / OR / NOT composites.

Closure rules:

- the name literalises the fold order: ``a.and_(b).and_(c)`` is named
  ``"A AND B AND C"`` with no parentheses;
- evaluation short-circuits left to right;
- a composite has a query only if every operand has one, otherwise its
  query is ``None``.  A missing translation is never approximated.

Composites are never simplified: ``a.and_(a)`` and ``NOT NOT a`` are kept
as built.

Evaluation, ``to_query()`` and ``to_dict()`` recurse through the operand
tree, about two interpreter frames per nesting level.  A single chain is
therefore bounded by ``sys.getrecursionlimit()``: with the default limit of
1000, a fold of a few hundred ``and_``/``or_`` calls works and one of about
500 raises ``RecursionError``.  Build very long rule lists from balanced
pairs, or raise the limit, when more are needed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from .base import Specification
from .exceptions import ConfigurationError
from .operators import SpecificationOperator
from .query import Filter, QueryFn, combine_and, combine_or, negate

logger = logging.getLogger("domaindriven.specifications")

T = TypeVar("T")


def and_specification(
    left: Specification[T], right: Specification[T]
) -> Specification[T]:
    _require_specification(left, SpecificationOperator.AND)
    _require_specification(right, SpecificationOperator.AND)

    def predicate(candidate: T) -> bool:
        return left.is_satisfied_by(candidate) and right.is_satisfied_by(candidate)

    return _composite(
        f"{left.name} AND {right.name}",
        predicate,
        _combine_queries(left, right, combine_and),
        SpecificationOperator.AND,
        (left, right),
    )


def or_specification(
    left: Specification[T], right: Specification[T]
) -> Specification[T]:
    _require_specification(left, SpecificationOperator.OR)
    _require_specification(right, SpecificationOperator.OR)

    def predicate(candidate: T) -> bool:
        return left.is_satisfied_by(candidate) or right.is_satisfied_by(candidate)

    return _composite(
        f"{left.name} OR {right.name}",
        predicate,
        _combine_queries(left, right, combine_or),
        SpecificationOperator.OR,
        (left, right),
    )


def not_specification(spec: Specification[T]) -> Specification[T]:
    _require_specification(spec, SpecificationOperator.NOT)

    def predicate(candidate: T) -> bool:
        return not spec.is_satisfied_by(candidate)

    return _composite(
        f"NOT {spec.name}",
        predicate,
        _negate_query(spec),
        SpecificationOperator.NOT,
        (spec,),
    )


# -- internals ---------------------------------------------------------------


def _composite(
    name: str,
    predicate: Callable[[Any], bool],
    query: QueryFn | None,
    operator: SpecificationOperator,
    operands: tuple[Specification[Any], ...],
) -> Specification[Any]:
    spec: Specification[Any] = Specification(
        name, predicate, query, operator=operator, operands=operands
    )
    logger.debug("Composed %s specification %r", operator.name, name)
    return spec


def _combine_queries(
    left: Specification[Any],
    right: Specification[Any],
    combiner: Callable[[Filter, Filter], Filter],
) -> QueryFn | None:
    if left.query is None or right.query is None:
        return None
    left_query, right_query = left.query, right.query

    def query() -> Filter:
        return combiner(left_query(), right_query())

    return query


def _negate_query(spec: Specification[Any]) -> QueryFn | None:
    if spec.query is None:
        return None
    inner_query = spec.query

    def query() -> Filter:
        return negate(inner_query())

    return query


def _require_specification(value: Any, operator: SpecificationOperator) -> None:
    if not isinstance(value, Specification):
        raise ConfigurationError(
            f"{operator.name} operand must be a Specification, "
            f"got {type(value).__name__}"
        )
