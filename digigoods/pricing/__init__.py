"""
Pricing — the checkout pricing engine.

    from digigoods import pricing as P

    result = P.quote(products, discounts, P.PricingPolicy())
"""

from __future__ import annotations

from digigoods.pricing._policy import PricingPolicy, DEFAULT_POLICY
from digigoods.pricing._types import PricedLine, Quote
from digigoods.pricing._engine import quote, price_line, guard_excessive

__all__ = (
    "PricingPolicy",
    "DEFAULT_POLICY",
    "PricedLine",
    "Quote",
    "quote",
    "price_line",
    "guard_excessive",
)
