"""
Catalogue of ready-made specifications.

Every constructor is null-safe: a ``None`` candidate, or a candidate
without the inspected property, does not satisfy the specification and
never raises.  Properties are read by key from mappings and by attribute
from other objects; dotted paths (``"address.city"``) reach nested values.

Each constructor also supplies a MongoDB-style query and accepts an
optional ``name`` overriding the templated one::

    affordable = between("price", 10, 25)
    featured = equals("featured", True, "Is Featured")
    (affordable & featured).name
    # → "Property price Between 10 and 25 AND Is Featured"
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .base import Specification
from .exceptions import ConfigurationError
from .operators import SpecificationOperator
from .options import ParameterizedOptions, parse_options
from .query import (
    Filter,
    QueryFn,
    empty_filter,
    regex_options,
    unsatisfiable_filter,
)
from .utils import MISSING, resolve_property, strict_equals

logger = logging.getLogger("domaindriven.specifications.common")


def _leaf(
    name: str,
    predicate: Callable[[Any], bool],
    query: QueryFn,
    operator: SpecificationOperator,
    attr: str | None = None,
    value: Any = None,
) -> Specification[Any]:
    return Specification(
        name, predicate, query, operator=operator, attr=attr, value=value
    )


def _compare(
    actual: Any, expected: Any, compare: Callable[[Any, Any], bool]
) -> bool:
    if actual is MISSING or actual is None:
        return False
    try:
        return bool(compare(actual, expected))
    except (TypeError, ArithmeticError):
        logger.debug(
            "Cannot compare %s with %s; treating as unsatisfied",
            type(actual).__name__,
            type(expected).__name__,
        )
        return False


# -- comparison ----------------------------------------------------------------


def equals(
    property_name: str, value: Any, name: str | None = None
) -> Specification[Any]:
    """Property strictly equals *value* (``True`` does not equal ``1``)."""

    def predicate(candidate: Any) -> bool:
        return strict_equals(resolve_property(candidate, property_name), value)

    def query() -> Filter:
        if value is None:
            # A bare {property: None} also matches documents lacking it.
            return {property_name: {"$exists": True, "$eq": None}}
        return {property_name: value}

    return _leaf(
        name or f"Property {property_name} Equals {value}",
        predicate,
        query,
        SpecificationOperator.EQ,
        property_name,
        value,
    )


def greater_than(
    property_name: str, value: Any, name: str | None = None
) -> Specification[Any]:
    """Property is strictly greater than *value*."""

    def predicate(candidate: Any) -> bool:
        actual = resolve_property(candidate, property_name)
        return _compare(actual, value, lambda a, b: a > b)

    def query() -> Filter:
        return {property_name: {"$gt": value}}

    return _leaf(
        name or f"Property {property_name} > {value}",
        predicate,
        query,
        SpecificationOperator.GT,
        property_name,
        value,
    )


def less_than(
    property_name: str, value: Any, name: str | None = None
) -> Specification[Any]:
    """Property is strictly less than *value*."""

    def predicate(candidate: Any) -> bool:
        actual = resolve_property(candidate, property_name)
        return _compare(actual, value, lambda a, b: a < b)

    def query() -> Filter:
        return {property_name: {"$lt": value}}

    return _leaf(
        name or f"Property {property_name} < {value}",
        predicate,
        query,
        SpecificationOperator.LT,
        property_name,
        value,
    )


def between(
    property_name: str, minimum: Any, maximum: Any, name: str | None = None
) -> Specification[Any]:
    """Property lies in ``[minimum, maximum]``, both ends inclusive."""

    def predicate(candidate: Any) -> bool:
        actual = resolve_property(candidate, property_name)
        return _compare(actual, (minimum, maximum), lambda a, b: b[0] <= a <= b[1])

    def query() -> Filter:
        return {property_name: {"$gte": minimum, "$lte": maximum}}

    return _leaf(
        name or f"Property {property_name} Between {minimum} and {maximum}",
        predicate,
        query,
        SpecificationOperator.BETWEEN,
        property_name,
        [minimum, maximum],
    )


def within(
    property_name: str, values: Iterable[Any], name: str | None = None
) -> Specification[Any]:
    """Property is one of *values* (compared with strict equality)."""
    if isinstance(values, str | bytes | Mapping) or not isinstance(values, Iterable):
        raise ConfigurationError(
            f"within() requires a collection of values, got {type(values).__name__}"
        )
    if isinstance(values, set | frozenset):
        # Sets have no stable iteration order across interpreter runs.
        options = tuple(sorted(values, key=str))
    else:
        options = tuple(values)

    def predicate(candidate: Any) -> bool:
        actual = resolve_property(candidate, property_name)
        if actual is MISSING:
            return False
        return any(strict_equals(actual, option) for option in options)

    def query() -> Filter:
        if any(option is None for option in options):
            return {property_name: {"$exists": True, "$in": list(options)}}
        return {property_name: {"$in": list(options)}}

    rendered = ", ".join(str(option) for option in options)
    return _leaf(
        name or f"Property {property_name} In [{rendered}]",
        predicate,
        query,
        SpecificationOperator.IN,
        property_name,
        list(options),
    )


# -- string / collection -------------------------------------------------------


def contains(
    property_name: str, value: Any, name: str | None = None
) -> Specification[Any]:
    """
    Property is a list/tuple holding *value*, or a string holding *value*
    as a substring.

    Any other container (set, dict, ...) does not satisfy the rule.
    """

    def predicate(candidate: Any) -> bool:
        actual = resolve_property(candidate, property_name)
        if isinstance(actual, list | tuple):
            return any(strict_equals(item, value) for item in actual)
        if isinstance(actual, str) and isinstance(value, str):
            return value in actual
        return False

    def query() -> Filter:
        # $elemMatch only matches arrays, so list items are compared whole.
        element: Filter = {property_name: {"$elemMatch": {"$eq": value}}}
        if not isinstance(value, str):
            return element
        substring = {
            property_name: {
                "$not": {"$type": "array"},
                "$regex": re.escape(value),
                "$options": "",
            }
        }
        return {"$or": [element, substring]}

    return _leaf(
        name or f"Property {property_name} Contains {value}",
        predicate,
        query,
        SpecificationOperator.CONTAINS,
        property_name,
        value,
    )


def matches(
    property_name: str, pattern: str | re.Pattern[str], name: str | None = None
) -> Specification[Any]:
    """Property is a string in which *pattern* is found (``re.search``)."""
    if isinstance(pattern, str):
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise ConfigurationError(
                f"Invalid regular expression for {property_name!r}: {exc}",
                {"pattern": [str(exc)]},
            ) from exc
    elif isinstance(pattern, re.Pattern) and isinstance(pattern.pattern, str):
        compiled = pattern
    else:
        raise ConfigurationError(
            "matches() requires a pattern string or a compiled str pattern, "
            f"got {type(pattern).__name__}"
        )
    # Only user-visible flags translate to $options; re.UNICODE is implicit.
    options = regex_options(compiled.flags)

    def predicate(candidate: Any) -> bool:
        actual = resolve_property(candidate, property_name)
        if not isinstance(actual, str):
            return False
        return compiled.search(actual) is not None

    def query() -> Filter:
        return {property_name: {"$regex": compiled.pattern, "$options": options}}

    return _leaf(
        name or f"Property {property_name} Matches {compiled.pattern}",
        predicate,
        query,
        SpecificationOperator.REGEX,
        property_name,
        compiled.pattern,
    )


# -- null checks ---------------------------------------------------------------


def is_null(property_name: str, name: str | None = None) -> Specification[Any]:
    """Property is absent or ``None`` on a non-``None`` candidate."""

    def predicate(candidate: Any) -> bool:
        if candidate is None:
            return False
        actual = resolve_property(candidate, property_name)
        return actual is MISSING or actual is None

    def query() -> Filter:
        return {
            "$or": [
                {property_name: None},
                {property_name: {"$exists": False}},
            ]
        }

    return _leaf(
        name or f"Property {property_name} Is Null",
        predicate,
        query,
        SpecificationOperator.IS_NULL,
        property_name,
    )


def is_not_null(property_name: str, name: str | None = None) -> Specification[Any]:
    """Property is present and not ``None``."""

    def predicate(candidate: Any) -> bool:
        actual = resolve_property(candidate, property_name)
        return actual is not MISSING and actual is not None

    def query() -> Filter:
        return {property_name: {"$exists": True, "$ne": None}}

    return _leaf(
        name or f"Property {property_name} Is Not Null",
        predicate,
        query,
        SpecificationOperator.IS_NOT_NULL,
        property_name,
    )


# -- constants -----------------------------------------------------------------


def always(name: str | None = None) -> Specification[Any]:
    """Satisfied by every candidate; its query matches everything."""
    return _leaf(
        name or "Always True",
        lambda _candidate: True,
        empty_filter,
        SpecificationOperator.ALWAYS,
    )


def never(
    name: str | None = None, *, query: Filter | None = None
) -> Specification[Any]:
    """
    Satisfied by no candidate.

    The default query (``{"$where": "false"}``) is unsatisfiable in a
    MongoDB-style backend only.  Pass *query* to use another dialect's
    unsatisfiable filter.
    """
    dialect_filter = dict(query) if query is not None else None

    def query_fn() -> Filter:
        if dialect_filter is None:
            return unsatisfiable_filter()
        return dict(dialect_filter)

    return _leaf(
        name or "Always False",
        lambda _candidate: False,
        query_fn,
        SpecificationOperator.NEVER,
    )


# -- parameterised families ----------------------------------------------------


class ParameterizedSpecification:
    """
    A reusable family of specifications instantiated per parameter set.

    Usage::

        price_range = parameterized(
            name=lambda p: f"Price Between {p['min']} and {p['max']}",
            create_predicate=lambda p: (
                lambda product: p["min"] <= product.price <= p["max"]
            ),
            create_query=lambda p: (
                lambda: {"price": {"$gte": p["min"], "$lte": p["max"]}}
            ),
        )
        budget = price_range({"min": 0, "max": 10})
    """

    def __init__(self, options: ParameterizedOptions) -> None:
        self._options = options

    @property
    def options(self) -> ParameterizedOptions:
        return self._options

    def __call__(self, params: Any = None) -> Specification[Any]:
        opts = self._options
        spec_name = opts.name(params) if callable(opts.name) else opts.name
        predicate = opts.create_predicate(params)
        query = opts.create_query(params) if opts.create_query is not None else None
        spec: Specification[Any] = Specification(spec_name, predicate, query)
        logger.debug("Instantiated parameterized specification %r", spec.name)
        return spec

    def __repr__(self) -> str:
        name = self._options.name
        label = name if isinstance(name, str) else "<dynamic>"
        return f"{type(self).__name__}({label!r})"


def parameterized(
    options: ParameterizedOptions | Mapping[str, Any] | None = None,
    /,
    **kwargs: Any,
) -> ParameterizedSpecification:
    """
    Build a specification family from ``name``, ``create_predicate`` and an
    optional ``create_query``.

    Raises:
        ConfigurationError: If ``name`` or ``create_predicate`` is missing or
            invalid.  Instantiating the family raises ``ConfigurationError``
            when the created predicate or query is not callable.
    """
    opts = parse_options(
        ParameterizedOptions, options, kwargs, context="Parameterized specification"
    )
    return ParameterizedSpecification(opts)
