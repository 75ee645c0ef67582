"""
In-memory catalog.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence

import structlog
from kungfu import Error, Ok, Result

from digigoods._errors import InsufficientStockError, ProductNotFoundError
from digigoods._types import ProductId
from digigoods.catalog._types import Product

logger = structlog.get_logger(__name__)


class InMemoryCatalog:
    """
    Catalog over a product mapping.

    Reservations are staged in `reserved` and only reach `products`
    when the owning unit of work commits.
    """

    def __init__(
        self,
        products: Mapping[ProductId, Product],
        reserved: Counter[ProductId],
    ) -> None:
        self._products = products
        self._reserved = reserved

    async def resolve(
        self,
        product_ids: Sequence[ProductId],
    ) -> Result[tuple[Product, ...], ProductNotFoundError]:
        resolved: list[Product] = []
        for product_id in product_ids:
            product = self._products.get(product_id)
            if product is None:
                return Error(ProductNotFoundError(product_id))
            resolved.append(product)
        return Ok(tuple(resolved))

    async def reserve_stock(
        self,
        product_ids: Sequence[ProductId],
    ) -> Result[None, InsufficientStockError]:
        wanted = Counter(product_ids)

        # Check everything first so a shortfall leaves nothing staged
        for product_id, quantity in wanted.items():
            product = self._products.get(product_id)
            available = 0 if product is None else product.stock - self._reserved[product_id]
            if available < quantity:
                return Error(InsufficientStockError(product_id, quantity, available))

        self._reserved.update(wanted)
        logger.debug("stock_reserved", products={p.value: q for p, q in wanted.items()})
        return Ok(None)


__all__ = ("InMemoryCatalog",)
