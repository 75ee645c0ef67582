"""
SQLAlchemy ledger — guarded usage decrements.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any, cast

import structlog
from kungfu import Error, Ok, Result
from sqlalchemy import select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession

from digigoods._errors import (
    DiscountExhaustedError,
    DiscountLookupError,
    DiscountNotFoundError,
)
from digigoods._types import DiscountId, ProductId
from digigoods.db import DiscountTable
from digigoods.ledger._types import Discount, DiscountKind, check_eligibility

logger = structlog.get_logger(__name__)


def to_discount(row: DiscountTable) -> Discount:
    return Discount(
        id=DiscountId(row.id),
        code=row.code,
        percentage=row.percentage,
        kind=DiscountKind(row.kind),
        valid_from=row.valid_from,
        valid_until=row.valid_until,
        usage_limit=row.usage_limit,
        applicable_products=frozenset(ProductId(p.id) for p in row.applicable_products),
    )


class SQLAlchemyLedger:
    """Ledger bound to one session (one transaction)."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def resolve(
        self,
        codes: Sequence[str],
        on: date,
    ) -> Result[tuple[Discount, ...], DiscountLookupError]:
        if not codes:
            return Ok(())

        rows = (
            await self._session.execute(
                select(DiscountTable).where(DiscountTable.code.in_(set(codes)))
            )
        ).scalars()
        by_code = {row.code: to_discount(row) for row in rows}

        resolved: list[Discount] = []
        for code in codes:
            discount = by_code.get(code)
            if discount is None:
                return Error(DiscountNotFoundError(code))
            match check_eligibility(discount, on):
                case Ok(eligible):
                    resolved.append(eligible)
                case Error(e):
                    return Error(e)
        return Ok(tuple(resolved))

    async def record_usage(
        self,
        discount_ids: Sequence[DiscountId],
    ) -> Result[None, DiscountExhaustedError | DiscountNotFoundError]:
        taken: list[DiscountId] = []

        for discount_id in discount_ids:
            stmt = (
                update(DiscountTable)
                .where(DiscountTable.id == discount_id.value, DiscountTable.usage_limit > 0)
                .values(usage_limit=DiscountTable.usage_limit - 1)
                .execution_options(synchronize_session=False)
            )
            cursor = cast(CursorResult[Any], await self._session.execute(stmt))
            if cursor.rowcount == 0:
                await self._give_back(taken)
                return Error(await self._usage_failure(discount_id))
            taken.append(discount_id)

        logger.debug("discount_usage_recorded", discounts=[d.value for d in taken])
        return Ok(None)

    async def _give_back(self, taken: Sequence[DiscountId]) -> None:
        for discount_id in taken:
            await self._session.execute(
                update(DiscountTable)
                .where(DiscountTable.id == discount_id.value)
                .values(usage_limit=DiscountTable.usage_limit + 1)
                .execution_options(synchronize_session=False)
            )

    async def _usage_failure(
        self,
        discount_id: DiscountId,
    ) -> DiscountExhaustedError | DiscountNotFoundError:
        code = (
            await self._session.execute(
                select(DiscountTable.code).where(DiscountTable.id == discount_id.value)
            )
        ).scalar_one_or_none()
        if code is None:
            return DiscountNotFoundError(f"#{discount_id.value}")
        return DiscountExhaustedError(code)


__all__ = ("SQLAlchemyLedger", "to_discount")
