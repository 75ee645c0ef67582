"""
SQLAlchemy catalog — guarded stock decrements.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Any, cast

import structlog
from kungfu import Error, Ok, Result
from sqlalchemy import select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession

from digigoods._errors import InsufficientStockError, ProductNotFoundError
from digigoods._types import ProductId
from digigoods.catalog._types import Product
from digigoods.db import ProductTable

logger = structlog.get_logger(__name__)


def to_product(row: ProductTable) -> Product:
    return Product(
        id=ProductId(row.id),
        name=row.name,
        price=row.price,
        stock=row.stock,
    )


class SQLAlchemyCatalog:
    """
    Catalog bound to one session (one transaction).

    reserve_stock issues `UPDATE ... WHERE stock >= n` per product, so two
    transactions racing for the last unit cannot both succeed. On a
    shortfall the decrements already taken are given back in the same
    transaction before the error is returned.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def resolve(
        self,
        product_ids: Sequence[ProductId],
    ) -> Result[tuple[Product, ...], ProductNotFoundError]:
        wanted = {p.value for p in product_ids}
        rows = (
            await self._session.execute(
                select(ProductTable).where(ProductTable.id.in_(wanted))
            )
        ).scalars()
        by_id = {row.id: to_product(row) for row in rows}

        resolved: list[Product] = []
        for product_id in product_ids:
            product = by_id.get(product_id.value)
            if product is None:
                return Error(ProductNotFoundError(product_id))
            resolved.append(product)
        return Ok(tuple(resolved))

    async def reserve_stock(
        self,
        product_ids: Sequence[ProductId],
    ) -> Result[None, InsufficientStockError]:
        wanted = Counter(product_ids)
        taken: dict[ProductId, int] = {}

        for product_id, quantity in wanted.items():
            if not await self._take(product_id, quantity):
                await self._give_back(taken)
                return Error(InsufficientStockError(product_id, quantity))
            taken[product_id] = quantity

        logger.debug("stock_reserved", products={p.value: q for p, q in taken.items()})
        return Ok(None)

    async def _take(self, product_id: ProductId, quantity: int) -> bool:
        stmt = (
            update(ProductTable)
            .where(ProductTable.id == product_id.value, ProductTable.stock >= quantity)
            .values(stock=ProductTable.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        cursor = cast(CursorResult[Any], await self._session.execute(stmt))
        return cursor.rowcount == 1

    async def _give_back(self, taken: dict[ProductId, int]) -> None:
        for product_id, quantity in taken.items():
            await self._session.execute(
                update(ProductTable)
                .where(ProductTable.id == product_id.value)
                .values(stock=ProductTable.stock + quantity)
                .execution_options(synchronize_session=False)
            )
        if taken:
            logger.debug("stock_released", products={p.value: q for p, q in taken.items()})


__all__ = ("SQLAlchemyCatalog", "to_product")
