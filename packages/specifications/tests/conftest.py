"""Shared fixtures for specifications tests."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ConfigDict

from domaindriven_specifications import Specification, specification


class Product(BaseModel):
    """Immutable candidate shaped like a catalogue aggregate."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float
    category: str
    tags: list[str] = []
    in_stock: bool = True
    discontinued_at: str | None = None


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(
            id="prod-1",
            name="Budget Laptop",
            price=499.99,
            category="electronics",
            tags=["budget", "laptop"],
        ),
        Product(
            id="prod-2",
            name="Premium Smartphone",
            price=999.99,
            category="electronics",
            tags=["premium", "smartphone"],
        ),
        Product(
            id="prod-3",
            name="Ergonomic Chair",
            price=299.99,
            category="furniture",
            tags=["office", "ergonomic"],
            in_stock=False,
        ),
        Product(
            id="prod-4",
            name="Wireless Headphones",
            price=149.99,
            category="electronics",
            tags=["audio", "wireless"],
        ),
        Product(
            id="prod-5",
            name="Coffee Table",
            price=199.99,
            category="furniture",
            tags=["living room"],
            discontinued_at="2024-01-31",
        ),
    ]


@pytest.fixture
def is_positive() -> Specification[int]:
    return specification(
        name="IsPositive",
        is_satisfied_by=lambda n: n > 0,
        to_query=lambda: {"value": {"$gt": 0}},
    )


@pytest.fixture
def is_even() -> Specification[int]:
    return specification(
        name="IsEven",
        is_satisfied_by=lambda n: n % 2 == 0,
        to_query=lambda: {"value": {"$mod": [2, 0]}},
    )


@pytest.fixture
def is_less_than_10() -> Specification[int]:
    return specification(
        name="IsLessThan10",
        is_satisfied_by=lambda n: n < 10,
        to_query=lambda: {"value": {"$lt": 10}},
    )


@pytest.fixture
def is_prime() -> Specification[int]:
    """Memory-only specification: no query translation."""

    def predicate(n: int) -> bool:
        return n > 1 and all(n % d for d in range(2, int(n**0.5) + 1))

    return specification(name="IsPrime", is_satisfied_by=predicate)
