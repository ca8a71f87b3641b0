"""Specifications consumed by a repository.

``ProductRepository`` is a test double for a storage adapter: it hands
``to_query()`` to a tiny MongoDB-style matcher when a translation exists
and falls back to ``select()`` otherwise.  Running both paths over the same
catalogue checks that each query agrees with its in-memory predicate.
"""

from __future__ import annotations

import re
from typing import Any

import pytest

from domaindriven_specifications import (
    Specification,
    always,
    between,
    contains,
    equals,
    greater_than,
    is_not_null,
    is_null,
    less_than,
    matches,
    never,
    select,
    specification,
    within,
)

_ABSENT = object()


_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def _eq(value: Any, arg: Any) -> bool:
    # {field: null} also matches documents without the field.
    if arg is None:
        return value is _ABSENT or value is None
    if value is _ABSENT:
        return False
    if isinstance(value, list) and not isinstance(arg, list):
        return arg in value
    return bool(value == arg)


def _compare(value: Any, op: str, arg: Any) -> bool:
    if value is _ABSENT or value is None:
        return False
    try:
        if op == "$gt":
            return bool(value > arg)
        if op == "$lt":
            return bool(value < arg)
        if op == "$gte":
            return bool(value >= arg)
        return bool(value <= arg)
    except TypeError:
        return False


def _regex(value: Any, pattern: str, options: str) -> bool:
    flags = 0
    for letter in options:
        flags |= _REGEX_FLAGS[letter]
    items = value if isinstance(value, list) else [value]
    return any(
        isinstance(item, str) and re.search(pattern, item, flags) for item in items
    )


def _field_matches(value: Any, condition: Any) -> bool:
    is_operator_doc = isinstance(condition, dict) and any(
        key.startswith("$") for key in condition
    )
    if not is_operator_doc:
        return _eq(value, condition)
    for op, arg in condition.items():
        if op == "$options":
            continue
        if op == "$eq":
            ok = _eq(value, arg)
        elif op == "$ne":
            ok = not _eq(value, arg)
        elif op == "$exists":
            ok = (value is not _ABSENT) is arg
        elif op == "$in":
            ok = any(_eq(value, item) for item in arg)
        elif op == "$regex":
            ok = _regex(value, arg, condition.get("$options", ""))
        elif op == "$elemMatch":
            ok = isinstance(value, list) and any(
                _field_matches(item, arg) for item in value
            )
        elif op == "$type":
            ok = arg == "array" and isinstance(value, list)
        elif op == "$not":
            ok = not _field_matches(value, arg)
        else:
            ok = _compare(value, op, arg)
        if not ok:
            return False
    return True


def mongo_match(document: dict[str, Any], query: dict[str, Any]) -> bool:
    """Evaluate the subset of the MongoDB dialect produced by the library."""
    for key, condition in query.items():
        if key == "$and":
            if not all(mongo_match(document, sub) for sub in condition):
                return False
        elif key == "$or":
            if not any(mongo_match(document, sub) for sub in condition):
                return False
        elif key == "$not":
            if mongo_match(document, condition):
                return False
        elif key == "$where":
            if condition == "false":
                return False
        elif not _field_matches(document.get(key, _ABSENT), condition):
            return False
    return True


class ProductRepository:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents
        self.queries: list[dict[str, Any]] = []

    def find_by_specification(
        self, spec: Specification[Any]
    ) -> list[dict[str, Any]]:
        query = spec.to_query()
        if query is None:
            return select(spec, self._documents)
        self.queries.append(query)
        return [doc for doc in self._documents if mongo_match(doc, query)]


@pytest.fixture
def documents(products) -> list[dict[str, Any]]:
    docs = [product.model_dump() for product in products]
    # Absent rather than None on one document, as a schemaless store allows.
    del docs[0]["discontinued_at"]
    return docs


@pytest.fixture
def repository(documents: list[dict[str, Any]]) -> ProductRepository:
    return ProductRepository(documents)


def _ids(rows: list[dict[str, Any]]) -> list[str]:
    return [row["id"] for row in rows]


# -- repository scenarios -----------------------------------------------------


def test_simple_specification(repository: ProductRepository):
    results = repository.find_by_specification(equals("in_stock", True))
    assert len(results) == 4
    assert all(row["in_stock"] is True for row in results)
    assert repository.queries == [{"in_stock": True}]


def test_combined_specification(repository: ProductRepository):
    expensive_electronics = equals("category", "electronics").and_(
        greater_than("price", 500)
    )
    assert _ids(repository.find_by_specification(expensive_electronics)) == [
        "prod-2"
    ]


def test_or_specification(repository: ProductRepository):
    electronics = equals("category", "electronics")
    furniture = equals("category", "furniture")
    in_stock = equals("in_stock", True)

    spec = in_stock.and_(electronics.or_(furniture))
    results = repository.find_by_specification(spec)
    assert _ids(results) == ["prod-1", "prod-2", "prod-4", "prod-5"]


def test_not_specification(repository: ProductRepository):
    not_electronics = equals("category", "electronics").not_()
    assert _ids(repository.find_by_specification(not_electronics)) == [
        "prod-3",
        "prod-5",
    ]


def test_memory_only_specification_falls_back(repository: ProductRepository):
    has_two_tags = specification(
        name="HasTwoTags", is_satisfied_by=lambda row: len(row["tags"]) == 2
    )
    spec = has_two_tags.and_(equals("category", "furniture"))
    assert _ids(repository.find_by_specification(spec)) == ["prod-3"]
    assert repository.queries == []


# -- query / predicate agreement ----------------------------------------------


AGREEMENT_CASES: list[Specification[Any]] = [
    equals("category", "electronics"),
    equals("discontinued_at", None),
    contains("name", "Lap"),
    contains("tags", "premium"),
    contains("tags", "prem"),
    matches("name", r"^(Budget|Coffee)"),
    greater_than("price", 299.99),
    less_than("price", 200),
    between("price", 149.99, 499.99),
    within("category", ["furniture", "toys"]),
    is_null("discontinued_at"),
    is_not_null("discontinued_at"),
    always(),
    never(),
    between("price", 10, 500).and_(equals("in_stock", True)),
    greater_than("price", 900).or_(less_than("price", 150)).not_(),
    equals("category", "electronics").and_(equals("category", "electronics")),
    within("category", ["furniture"]).not_().not_(),
]


@pytest.mark.parametrize("spec", AGREEMENT_CASES, ids=lambda s: s.name)
def test_query_agrees_with_predicate(
    spec: Specification[Any], documents: list[dict[str, Any]]
):
    query = spec.to_query()
    assert query is not None
    by_query = [doc for doc in documents if mongo_match(doc, query)]
    assert _ids(by_query) == _ids(select(spec, documents))


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ({"tags": ["premium"]}, False),
        ({"tags": ["prem"]}, True),
        ({"tags": "premium"}, True),
        ({"tags": ("premium",)}, False),
        ({}, False),
    ],
)
def test_contains_query_keeps_list_items_whole(
    document: dict[str, Any], expected: bool
):
    spec = contains("tags", "prem")
    query = spec.to_query()
    assert query is not None
    assert spec.is_satisfied_by(document) is expected
    assert mongo_match(document, query) is expected
