"""
Order types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from digigoods._types import OrderId, ProductId, UserId


@dataclass(frozen=True, slots=True)
class Order:
    """A committed checkout. Written once, never updated."""

    id: OrderId
    user_id: UserId
    product_ids: tuple[ProductId, ...]
    final_price: Decimal
    created_at: datetime


class OrderStore(Protocol):
    async def add(self, order: Order) -> None: ...

    async def get(self, order_id: OrderId) -> Order | None: ...

    async def list_for_user(self, user_id: UserId) -> tuple[Order, ...]: ...


__all__ = ("Order", "OrderStore")
