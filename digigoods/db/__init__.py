"""
Database — SQLAlchemy models and engine setup.

    from digigoods import db

    session_factory, engine = await db.create_database("sqlite+aiosqlite:///shop.db")
"""

from __future__ import annotations

from digigoods.db._tables import (
    Base,
    UserTable,
    ProductTable,
    DiscountTable,
    discount_products,
    OrderTable,
    OrderItemTable,
)
from digigoods.db._engine import create_database

__all__ = (
    "Base",
    "UserTable",
    "ProductTable",
    "DiscountTable",
    "discount_products",
    "OrderTable",
    "OrderItemTable",
    "create_database",
)
