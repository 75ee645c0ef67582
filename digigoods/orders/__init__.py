"""
Orders — persisted results of committed checkouts.
"""

from __future__ import annotations

from digigoods.orders._types import Order, OrderStore
from digigoods.orders._memory import InMemoryOrderStore
from digigoods.orders._sqlalchemy import SQLAlchemyOrderStore

__all__ = (
    "Order",
    "OrderStore",
    "InMemoryOrderStore",
    "SQLAlchemyOrderStore",
)
