"""
Pricing engine — pure, no I/O.

Composition order is fixed and not commutative:

    1. product-specific discounts, per line, in the order supplied
       (several on one line compound)
    2. subtotal of the discounted lines
    3. general discounts on the running total, in the order supplied
       (several compound)
    4. round half-up to cents

Before anything is applied every discount is checked against the policy.
"""

from __future__ import annotations

from collections.abc import Sequence

from kungfu import Error, Ok, Result

from digigoods._errors import ExcessiveDiscountError
from digigoods._types import ZERO, to_money
from digigoods.catalog import Product
from digigoods.ledger import Discount, DiscountKind
from digigoods.pricing._policy import DEFAULT_POLICY, PricingPolicy
from digigoods.pricing._types import PricedLine, Quote


def guard_excessive(
    discounts: Sequence[Discount],
    policy: PricingPolicy = DEFAULT_POLICY,
) -> Result[None, ExcessiveDiscountError]:
    """Reject the first discount whose percentage exceeds the policy cap."""
    for discount in discounts:
        if discount.percentage > policy.max_discount_percentage:
            return Error(
                ExcessiveDiscountError(
                    discount.code,
                    discount.percentage,
                    policy.max_discount_percentage,
                )
            )
    return Ok(None)


def price_line(product: Product, discounts: Sequence[Discount]) -> PricedLine:
    price = product.price
    applied: list[str] = []
    for discount in discounts:
        if discount.applies_to(product.id):
            price -= price * discount.rate
            applied.append(discount.code)
    return PricedLine(
        product_id=product.id,
        unit_price=product.price,
        price=price,
        applied=tuple(applied),
    )


def quote(
    products: Sequence[Product],
    discounts: Sequence[Discount] = (),
    policy: PricingPolicy = DEFAULT_POLICY,
) -> Result[Quote, ExcessiveDiscountError]:
    """
    Price a checkout.

    Args:
        products: one entry per line, in request order
        discounts: eligible discounts, in the order they were supplied
        policy: engine limits

    Example:
        match quote(products, discounts):
            case Ok(q):
                print(q.final_price)
            case Error(e):
                print(e.message)
    """
    match guard_excessive(discounts, policy):
        case Error(e):
            return Error(e)
        case Ok(_):
            pass

    specific = [d for d in discounts if d.kind is DiscountKind.PRODUCT_SPECIFIC]
    general = [d for d in discounts if d.kind is DiscountKind.GENERAL]

    lines = tuple(price_line(p, specific) for p in products)
    subtotal = sum((line.unit_price for line in lines), ZERO)
    discounted = sum((line.price for line in lines), ZERO)

    total = discounted
    for discount in general:
        total *= 1 - discount.rate

    return Ok(
        Quote(
            lines=lines,
            discounts=tuple(discounts),
            subtotal=subtotal,
            discounted_subtotal=discounted,
            total=total,
            final_price=to_money(total),
        )
    )


__all__ = ("quote", "price_line", "guard_excessive")
