"""
Checkout types — request, result and lifecycle states.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from digigoods._types import OrderId, ProductId, UserId

SUCCESS_MESSAGE = "Order created successfully!"


class CheckoutState(Enum):
    """
    Lifecycle of one checkout:

        START → AUTHORIZED → PRICED → COMMITTED
          └──────────┴──────────┴──→ FAILED
    """

    START = "start"
    AUTHORIZED = "authorized"
    PRICED = "priced"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class CheckoutRequest:
    """
    Checkout input.

    product_ids: one entry per line, repeats are separate lines.
    discount_codes: as submitted; a repeated code counts once.
    """

    user_id: UserId
    product_ids: tuple[ProductId, ...]
    discount_codes: tuple[str, ...] = ()

    @property
    def unique_discount_codes(self) -> tuple[str, ...]:
        """Codes in first-seen order, repeats dropped."""
        return tuple(dict.fromkeys(self.discount_codes))


@dataclass(frozen=True, slots=True)
class OrderResult:
    message: str
    final_price: Decimal
    order_id: OrderId


__all__ = (
    "SUCCESS_MESSAGE",
    "CheckoutState",
    "CheckoutRequest",
    "OrderResult",
)
