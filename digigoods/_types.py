"""
Core types for digigoods.

Identity wrappers, money helpers and the clock used for time-dependent rules.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

# ═══════════════════════════════════════════════════════════════════════════════
# Identity
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class UserId:
    value: int


@dataclass(frozen=True, slots=True)
class ProductId:
    value: int


@dataclass(frozen=True, slots=True)
class DiscountId:
    value: int


@dataclass(frozen=True, slots=True)
class OrderId:
    value: str

    @classmethod
    def new(cls) -> OrderId:
        return cls(f"ord_{uuid.uuid4().hex[:12]}")


# ═══════════════════════════════════════════════════════════════════════════════
# Money
# ═══════════════════════════════════════════════════════════════════════════════

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_money(amount: Decimal) -> Decimal:
    """Round to cents, half-up. Only for values leaving the system."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def is_percentage(value: Decimal) -> bool:
    """Finite and within 0..100."""
    return value.is_finite() and ZERO <= value <= HUNDRED


# ═══════════════════════════════════════════════════════════════════════════════
# Clock
# ═══════════════════════════════════════════════════════════════════════════════


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Clock pinned to one instant."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant


__all__ = (
    "UserId",
    "ProductId",
    "DiscountId",
    "OrderId",
    "CENT",
    "ZERO",
    "HUNDRED",
    "to_money",
    "is_percentage",
    "Clock",
    "SystemClock",
    "FixedClock",
)
