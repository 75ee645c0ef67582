"""
In-memory order store.
"""

from __future__ import annotations

from collections.abc import Mapping

from digigoods._types import OrderId, UserId
from digigoods.orders._types import Order


class InMemoryOrderStore:
    """Reads committed orders plus the ones staged by this unit of work."""

    def __init__(
        self,
        orders: Mapping[OrderId, Order],
        staged: list[Order],
    ) -> None:
        self._orders = orders
        self._staged = staged

    async def add(self, order: Order) -> None:
        if order.id in self._orders or any(o.id == order.id for o in self._staged):
            raise ValueError(f"Order {order.id.value} already exists")
        self._staged.append(order)

    async def get(self, order_id: OrderId) -> Order | None:
        if order_id in self._orders:
            return self._orders[order_id]
        return next((o for o in self._staged if o.id == order_id), None)

    async def list_for_user(self, user_id: UserId) -> tuple[Order, ...]:
        orders = [*self._orders.values(), *self._staged]
        return tuple(o for o in orders if o.user_id == user_id)


__all__ = ("InMemoryOrderStore",)
