"""
Unit of work — one transaction across catalog, ledger, orders and users.

    from digigoods import uow as U

    store = U.InMemoryStore()
    factory = store.unit_of_work

    session_factory, engine = await db.create_database(url)
    factory = U.sqlalchemy_uow_factory(session_factory)
"""

from __future__ import annotations

from digigoods.uow._types import UnitOfWork, UnitOfWorkFactory
from digigoods.uow._memory import InMemoryStore, Journal, InMemoryUnitOfWork
from digigoods.uow._sqlalchemy import SQLAlchemyUnitOfWork, sqlalchemy_uow_factory

__all__ = (
    "UnitOfWork",
    "UnitOfWorkFactory",
    "InMemoryStore",
    "Journal",
    "InMemoryUnitOfWork",
    "SQLAlchemyUnitOfWork",
    "sqlalchemy_uow_factory",
)
