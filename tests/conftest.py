"""Pytest fixtures: a small shop with three products and a few discounts."""

from datetime import timedelta
from decimal import Decimal

import pytest
from helpers import NOW, TODAY, make_discount

from digigoods import FixedClock, ProductId, UserId
from digigoods.catalog import Product
from digigoods.checkout import CheckoutOrchestrator
from digigoods.ledger import Discount, DiscountKind
from digigoods.users import User
from digigoods.uow import InMemoryStore


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def p1() -> Product:
    return Product(ProductId(1), "E-book bundle", Decimal("100.00"), 10)


@pytest.fixture
def p2() -> Product:
    return Product(ProductId(2), "Soundtrack", Decimal("50.00"), 5)


@pytest.fixture
def p3() -> Product:
    return Product(ProductId(3), "Signed edition", Decimal("20.00"), 1)


@pytest.fixture
def general20() -> Discount:
    return make_discount(1, "GENERAL20", "20.00")


@pytest.fixture
def product10() -> Discount:
    return make_discount(2, "PRODUCT10", "10.00", DiscountKind.PRODUCT_SPECIFIC, products=frozenset({ProductId(1)}))


@pytest.fixture
def excessive80() -> Discount:
    return make_discount(3, "EXCESSIVE80", "80.00")


@pytest.fixture
def onetime() -> Discount:
    return make_discount(4, "ONETIME", "5.00", usage_limit=1)


@pytest.fixture
def usedup() -> Discount:
    return make_discount(5, "USEDUP", "5.00", usage_limit=0)


@pytest.fixture
def lastyear() -> Discount:
    return make_discount(
        6,
        "LASTYEAR",
        "15.00",
        valid_from=TODAY - timedelta(days=365),
        valid_until=TODAY - timedelta(days=1),
    )


@pytest.fixture
def discounts(
    general20: Discount,
    product10: Discount,
    excessive80: Discount,
    onetime: Discount,
    usedup: Discount,
    lastyear: Discount,
) -> list[Discount]:
    return [general20, product10, excessive80, onetime, usedup, lastyear]


@pytest.fixture
def store(p1: Product, p2: Product, p3: Product, discounts: list[Discount]) -> InMemoryStore:
    store = InMemoryStore()

    store.add_user(User(UserId(1), "alice", "alice@example.com", "Alice", None, None, NOW, NOW))
    store.add_user(User(UserId(2), "bob", "bob@example.com", "Bob", None, None, NOW, NOW))

    for product in (p1, p2, p3):
        store.add_product(product)
    for discount in discounts:
        store.add_discount(discount)

    return store


@pytest.fixture
def orchestrator(store: InMemoryStore, clock: FixedClock) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(store.unit_of_work, clock=clock)
