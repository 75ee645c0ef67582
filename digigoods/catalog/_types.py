"""
Catalog types — products and the catalog contract.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from kungfu import Result

from digigoods._errors import InsufficientStockError, ProductNotFoundError
from digigoods._types import ZERO, ProductId

# ═══════════════════════════════════════════════════════════════════════════════
# Product
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Product:
    """
    A sellable product.

    Pricing only reads products. Stock changes go through
    Catalog.reserve_stock inside a unit of work.
    """

    id: ProductId
    name: str
    price: Decimal
    stock: int

    def __post_init__(self) -> None:
        if not self.price.is_finite() or self.price < ZERO:
            raise ValueError(f"Product {self.id.value}: price must be >= 0, got {self.price}")
        if self.stock < 0:
            raise ValueError(f"Product {self.id.value}: stock must be >= 0, got {self.stock}")


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog Contract
# ═══════════════════════════════════════════════════════════════════════════════


class Catalog(Protocol):
    """
    Resolves product ids and owns stock mutation.

    resolve:
        One Product per requested id, in request order, repeated ids
        included. Fails on the first id that does not exist.

    reserve_stock:
        Takes one unit per occurrence of an id. All-or-nothing: when any
        product falls short, nothing is reserved.
    """

    async def resolve(
        self,
        product_ids: Sequence[ProductId],
    ) -> Result[tuple[Product, ...], ProductNotFoundError]: ...

    async def reserve_stock(
        self,
        product_ids: Sequence[ProductId],
    ) -> Result[None, InsufficientStockError]: ...


__all__ = ("Product", "Catalog")
