"""
Ledger types — discounts, eligibility and the ledger contract.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Protocol

from kungfu import Error, Ok, Result

from digigoods._errors import (
    DiscountExhaustedError,
    DiscountExpiredError,
    DiscountLookupError,
    DiscountNotFoundError,
)
from digigoods._types import HUNDRED, DiscountId, ProductId, is_percentage

# ═══════════════════════════════════════════════════════════════════════════════
# Discount
# ═══════════════════════════════════════════════════════════════════════════════


class DiscountKind(Enum):
    GENERAL = "GENERAL"
    PRODUCT_SPECIFIC = "PRODUCT_SPECIFIC"


@dataclass(frozen=True, slots=True)
class Discount:
    """
    A percentage discount.

    GENERAL discounts reduce the running total; PRODUCT_SPECIFIC ones reduce
    only lines whose product is in `applicable_products`.

    usage_limit counts remaining redemptions.
    """

    id: DiscountId
    code: str
    percentage: Decimal
    kind: DiscountKind
    valid_from: date
    valid_until: date
    usage_limit: int
    applicable_products: frozenset[ProductId] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not is_percentage(self.percentage):
            raise ValueError(f"Discount {self.code}: percentage must be within 0..100, got {self.percentage}")
        if self.usage_limit < 0:
            raise ValueError(f"Discount {self.code}: usage_limit must be >= 0, got {self.usage_limit}")
        if self.valid_from > self.valid_until:
            raise ValueError(f"Discount {self.code}: window starts after it ends")
        if self.kind is DiscountKind.GENERAL and self.applicable_products:
            raise ValueError(f"Discount {self.code}: general discounts cannot target products")

    @property
    def rate(self) -> Decimal:
        """Percentage as a fraction: 20 -> 0.2."""
        return self.percentage / HUNDRED

    def applies_to(self, product_id: ProductId) -> bool:
        return self.kind is DiscountKind.PRODUCT_SPECIFIC and product_id in self.applicable_products

    def is_active_on(self, day: date) -> bool:
        return self.valid_from <= day <= self.valid_until


def check_eligibility(
    discount: Discount,
    on: date,
    remaining: int | None = None,
) -> Result[Discount, DiscountExpiredError | DiscountExhaustedError]:
    """
    Eligibility invariant: inside the window and at least one use left.

    `remaining` overrides discount.usage_limit when uses are already staged.
    """
    if not discount.is_active_on(on):
        return Error(DiscountExpiredError(discount.code, discount.valid_from, discount.valid_until, on))
    left = discount.usage_limit if remaining is None else remaining
    if left <= 0:
        return Error(DiscountExhaustedError(discount.code))
    return Ok(discount)


# ═══════════════════════════════════════════════════════════════════════════════
# Ledger Contract
# ═══════════════════════════════════════════════════════════════════════════════


class Ledger(Protocol):
    """
    Resolves discount codes and owns usage mutation.

    resolve:
        One Discount per code, in the order given. Unknown code ->
        DiscountNotFoundError; otherwise eligibility is checked on `on`.

    record_usage:
        Takes one use per id. All-or-nothing: when any id has no use
        left, no use is taken.
    """

    async def resolve(
        self,
        codes: Sequence[str],
        on: date,
    ) -> Result[tuple[Discount, ...], DiscountLookupError]: ...

    async def record_usage(
        self,
        discount_ids: Sequence[DiscountId],
    ) -> Result[None, DiscountExhaustedError | DiscountNotFoundError]: ...


__all__ = (
    "DiscountKind",
    "Discount",
    "check_eligibility",
    "Ledger",
)
