"""
SQLAlchemy order store.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from digigoods._types import OrderId, ProductId, UserId
from digigoods.db import OrderItemTable, OrderTable
from digigoods.orders._types import Order


def to_order(row: OrderTable) -> Order:
    return Order(
        id=OrderId(row.id),
        user_id=UserId(row.user_id),
        product_ids=tuple(ProductId(item.product_id) for item in row.items),
        final_price=row.final_price,
        created_at=row.created_at,
    )


class SQLAlchemyOrderStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, order: Order) -> None:
        self._session.add(
            OrderTable(
                id=order.id.value,
                user_id=order.user_id.value,
                final_price=order.final_price,
                created_at=order.created_at,
                items=[
                    OrderItemTable(position=position, product_id=product_id.value)
                    for position, product_id in enumerate(order.product_ids)
                ],
            )
        )
        await self._session.flush()

    async def get(self, order_id: OrderId) -> Order | None:
        row = await self._session.get(OrderTable, order_id.value)
        return None if row is None else to_order(row)

    async def list_for_user(self, user_id: UserId) -> tuple[Order, ...]:
        rows = (
            await self._session.execute(
                select(OrderTable)
                .where(OrderTable.user_id == user_id.value)
                .order_by(OrderTable.created_at)
            )
        ).scalars()
        return tuple(to_order(row) for row in rows)


__all__ = ("SQLAlchemyOrderStore", "to_order")
