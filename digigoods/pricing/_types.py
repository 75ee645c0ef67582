"""
Pricing types — the priced breakdown of a checkout.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from digigoods._types import ProductId
from digigoods.ledger import Discount


@dataclass(frozen=True, slots=True)
class PricedLine:
    """
    One line after product-specific discounts.

    `price` is exact; rounding happens only on Quote.final_price.
    """

    product_id: ProductId
    unit_price: Decimal
    price: Decimal
    applied: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Quote:
    """
    Engine output.

    subtotal:            sum of unit prices
    discounted_subtotal: sum of line prices after pass 1
    total:               after pass 2, exact
    final_price:         total rounded half-up to cents
    """

    lines: tuple[PricedLine, ...]
    discounts: tuple[Discount, ...]
    subtotal: Decimal
    discounted_subtotal: Decimal
    total: Decimal
    final_price: Decimal

    @property
    def product_ids(self) -> tuple[ProductId, ...]:
        return tuple(line.product_id for line in self.lines)


__all__ = ("PricedLine", "Quote")
