"""
SQLAlchemy unit of work — one session, one transaction.
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from digigoods.catalog import SQLAlchemyCatalog
from digigoods.ledger import SQLAlchemyLedger
from digigoods.orders import SQLAlchemyOrderStore
from digigoods.users import SQLAlchemyUserStore


class SQLAlchemyUnitOfWork:
    """
    Wraps one AsyncSession.

    Stores are created on __aenter__ and bound to that session. On exit
    without commit() the transaction is rolled back.
    """

    catalog: SQLAlchemyCatalog
    ledger: SQLAlchemyLedger
    orders: SQLAlchemyOrderStore
    users: SQLAlchemyUserStore

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> Self:
        session = self._session_factory()
        self._session = session
        self.catalog = SQLAlchemyCatalog(session)
        self.ledger = SQLAlchemyLedger(session)
        self.orders = SQLAlchemyOrderStore(session)
        self.users = SQLAlchemyUserStore(session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session = self._require_session()
        try:
            await session.rollback()
        finally:
            await session.close()
            self._session = None

    async def commit(self) -> None:
        await self._require_session().commit()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work used outside of `async with`")
        return self._session


def sqlalchemy_uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for the checkout orchestrator and profile service."""
    return lambda: SQLAlchemyUnitOfWork(session_factory)


__all__ = ("SQLAlchemyUnitOfWork", "sqlalchemy_uow_factory")
