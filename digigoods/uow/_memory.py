"""
In-memory unit of work.

The store's lock is held from __aenter__ to __aexit__, so units of work
run one at a time and staged counters never race.
"""

from __future__ import annotations

import asyncio
import dataclasses
from collections import Counter
from dataclasses import dataclass, field
from types import TracebackType
from typing import Self

from digigoods._types import DiscountId, OrderId, ProductId, UserId
from digigoods.catalog import InMemoryCatalog, Product
from digigoods.ledger import Discount, InMemoryLedger
from digigoods.orders import InMemoryOrderStore, Order
from digigoods.users import InMemoryUserStore, User

# ═══════════════════════════════════════════════════════════════════════════════
# Store (committed state)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class InMemoryStore:
    products: dict[ProductId, Product] = field(default_factory=dict[ProductId, Product])
    discounts: dict[str, Discount] = field(default_factory=dict[str, Discount])
    users: dict[UserId, User] = field(default_factory=dict[UserId, User])
    orders: dict[OrderId, Order] = field(default_factory=dict[OrderId, Order])
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def add_product(self, product: Product) -> None:
        self.products[product.id] = product

    def add_discount(self, discount: Discount) -> None:
        self.discounts[discount.code] = discount

    def add_user(self, user: User) -> None:
        self.users[user.id] = user

    def unit_of_work(self) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(self)


# ═══════════════════════════════════════════════════════════════════════════════
# Journal (staged changes)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class Journal:
    reserved: Counter[ProductId] = field(default_factory=Counter[ProductId])
    used: Counter[DiscountId] = field(default_factory=Counter[DiscountId])
    orders: list[Order] = field(default_factory=list[Order])
    users: dict[UserId, User] = field(default_factory=dict[UserId, User])

    def apply(self, store: InMemoryStore) -> None:
        for product_id, quantity in self.reserved.items():
            product = store.products[product_id]
            store.products[product_id] = dataclasses.replace(product, stock=product.stock - quantity)

        by_id = {d.id: d for d in store.discounts.values()}
        for discount_id, uses in self.used.items():
            discount = by_id[discount_id]
            store.discounts[discount.code] = dataclasses.replace(
                discount, usage_limit=discount.usage_limit - uses
            )

        for order in self.orders:
            store.orders[order.id] = order
        store.users.update(self.users)


# ═══════════════════════════════════════════════════════════════════════════════
# Unit of Work
# ═══════════════════════════════════════════════════════════════════════════════


class InMemoryUnitOfWork:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._journal = Journal()
        self.catalog = InMemoryCatalog(store.products, self._journal.reserved)
        self.ledger = InMemoryLedger(store.discounts, self._journal.used)
        self.orders = InMemoryOrderStore(store.orders, self._journal.orders)
        self.users = InMemoryUserStore(store.users, self._journal.users)

    async def __aenter__(self) -> Self:
        await self._store.lock.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._discard()
        self._store.lock.release()

    async def commit(self) -> None:
        self._journal.apply(self._store)
        self._discard()

    def _discard(self) -> None:
        self._journal.reserved.clear()
        self._journal.used.clear()
        self._journal.orders.clear()
        self._journal.users.clear()


__all__ = ("InMemoryStore", "Journal", "InMemoryUnitOfWork")
