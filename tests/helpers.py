"""Shared helpers for the test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Any

import pytest
from kungfu import Error, Ok
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from digigoods import DiscountId, ProductId
from digigoods.db import DiscountTable, ProductTable, UserTable, create_database
from digigoods.ledger import Discount, DiscountKind


NOW = datetime(2026, 6, 15, 12, 0, tzinfo=UTC)
TODAY = NOW.date()


def make_discount(
    discount_id: int,
    code: str,
    percentage: str,
    kind: DiscountKind = DiscountKind.GENERAL,
    *,
    products: frozenset[ProductId] = frozenset(),
    usage_limit: int = 10,
    valid_from: date = TODAY - timedelta(days=1),
    valid_until: date = TODAY + timedelta(days=30),
) -> Discount:
    return Discount(
        id=DiscountId(discount_id),
        code=code,
        percentage=Decimal(percentage),
        kind=kind,
        valid_from=valid_from,
        valid_until=valid_until,
        usage_limit=usage_limit,
        applicable_products=products,
    )


def expect_ok(result: Any) -> Any:
    match result:
        case Ok(value):
            return value
        case Error(e):
            pytest.fail(f"expected Ok, got Error({e!r})")


def expect_error(result: Any) -> Any:
    match result:
        case Error(e):
            return e
        case Ok(value):
            pytest.fail(f"expected Error, got Ok({value!r})")


def maybe_error(result: Any) -> Any:
    match result:
        case Ok(_):
            return None
        case Error(e):
            return e


@asynccontextmanager
async def sqlite_shop(
    url: str,
    discounts: list[Discount],
    now: datetime,
) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Database with users 1-2, products 1 (100.00 x10), 2 (50.00 x5), 3 (20.00 x1)."""
    session_factory, engine = await create_database(url)
    try:
        async with session_factory() as session:
            session.add_all(
                [
                    UserTable(id=1, username="alice", email="alice@example.com", created_at=now, updated_at=now),
                    UserTable(id=2, username="bob", email="bob@example.com", created_at=now, updated_at=now),
                    ProductTable(id=1, name="E-book bundle", price=Decimal("100.00"), stock=10),
                    ProductTable(id=2, name="Soundtrack", price=Decimal("50.00"), stock=5),
                    ProductTable(id=3, name="Signed edition", price=Decimal("20.00"), stock=1),
                ]
            )
            await session.flush()
            for d in discounts:
                products = (
                    await session.execute(
                        select(ProductTable).where(
                            ProductTable.id.in_([p.value for p in d.applicable_products])
                        )
                    )
                ).scalars().all()
                session.add(
                    DiscountTable(
                        id=d.id.value,
                        code=d.code,
                        percentage=d.percentage,
                        kind=d.kind.value,
                        valid_from=d.valid_from,
                        valid_until=d.valid_until,
                        usage_limit=d.usage_limit,
                        applicable_products=list(products),
                    )
                )
            await session.commit()
        yield session_factory
    finally:
        await engine.dispose()


async def stock_of(session_factory: async_sessionmaker[AsyncSession], product_id: int) -> int:
    async with session_factory() as session:
        row = await session.get(ProductTable, product_id)
        assert row is not None
        return row.stock


async def uses_left(session_factory: async_sessionmaker[AsyncSession], code: str) -> int:
    async with session_factory() as session:
        return (
            await session.execute(select(DiscountTable.usage_limit).where(DiscountTable.code == code))
        ).scalar_one()
