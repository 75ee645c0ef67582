"""
Pricing policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from digigoods._config import Settings
from digigoods._types import is_percentage


@dataclass(frozen=True, slots=True)
class PricingPolicy:
    """
    Limits the engine enforces.

    max_discount_percentage:
        Largest percentage a single discount may carry. Checked per
        discount before any of them is applied; equal is allowed.
    """

    max_discount_percentage: Decimal = Decimal("50")

    def __post_init__(self) -> None:
        if not is_percentage(self.max_discount_percentage):
            raise ValueError(
                f"max_discount_percentage must be within 0..100, got {self.max_discount_percentage}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> PricingPolicy:
        return cls(max_discount_percentage=settings.max_discount_percentage)


DEFAULT_POLICY = PricingPolicy()

__all__ = ("PricingPolicy", "DEFAULT_POLICY")
