"""
Catalog — products, prices and stock.

    from digigoods import catalog

    match await uow.catalog.resolve([ProductId(1), ProductId(1)]):
        case Ok(products): ...
        case Error(ProductNotFoundError(product_id=missing)): ...
"""

from __future__ import annotations

from digigoods.catalog._types import Product, Catalog
from digigoods.catalog._memory import InMemoryCatalog
from digigoods.catalog._sqlalchemy import SQLAlchemyCatalog

__all__ = (
    "Product",
    "Catalog",
    "InMemoryCatalog",
    "SQLAlchemyCatalog",
)
