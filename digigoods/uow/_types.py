"""
Unit of work contract.
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType
from typing import Protocol, Self

from digigoods.catalog import Catalog
from digigoods.ledger import Ledger
from digigoods.orders import OrderStore
from digigoods.users import UserStore


class UnitOfWork(Protocol):
    """
    One transaction over every store.

    Nothing done through the stores is visible to other units of work
    until commit(). Leaving the context without committing (early
    return, exception, cancellation) discards all of it.

    Example:
        async with uow_factory() as uow:
            await uow.catalog.reserve_stock(ids)
            await uow.ledger.record_usage(discount_ids)
            await uow.orders.add(order)
            await uow.commit()
    """

    catalog: Catalog
    ledger: Ledger
    orders: OrderStore
    users: UserStore

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def commit(self) -> None: ...


type UnitOfWorkFactory = Callable[[], UnitOfWork]

__all__ = ("UnitOfWork", "UnitOfWorkFactory")
