"""
In-memory ledger.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from datetime import date

import structlog
from kungfu import Error, Ok, Result

from digigoods._errors import (
    DiscountExhaustedError,
    DiscountLookupError,
    DiscountNotFoundError,
)
from digigoods._types import DiscountId
from digigoods.ledger._types import Discount, check_eligibility

logger = structlog.get_logger(__name__)


class InMemoryLedger:
    """Ledger over a code -> discount mapping; uses are staged in `used`."""

    def __init__(
        self,
        discounts: Mapping[str, Discount],
        used: Counter[DiscountId],
    ) -> None:
        self._discounts = discounts
        self._used = used

    def _remaining(self, discount: Discount) -> int:
        return discount.usage_limit - self._used[discount.id]

    async def resolve(
        self,
        codes: Sequence[str],
        on: date,
    ) -> Result[tuple[Discount, ...], DiscountLookupError]:
        resolved: list[Discount] = []
        for code in codes:
            discount = self._discounts.get(code)
            if discount is None:
                return Error(DiscountNotFoundError(code))
            match check_eligibility(discount, on, self._remaining(discount)):
                case Ok(eligible):
                    resolved.append(eligible)
                case Error(e):
                    return Error(e)
        return Ok(tuple(resolved))

    async def record_usage(
        self,
        discount_ids: Sequence[DiscountId],
    ) -> Result[None, DiscountExhaustedError | DiscountNotFoundError]:
        by_id = {d.id: d for d in self._discounts.values()}
        wanted = Counter(discount_ids)

        for discount_id, uses in wanted.items():
            discount = by_id.get(discount_id)
            if discount is None:
                return Error(DiscountNotFoundError(f"#{discount_id.value}"))
            if self._remaining(discount) < uses:
                return Error(DiscountExhaustedError(discount.code))

        self._used.update(wanted)
        logger.debug("discount_usage_recorded", discounts={d.value: n for d, n in wanted.items()})
        return Ok(None)


__all__ = ("InMemoryLedger",)
