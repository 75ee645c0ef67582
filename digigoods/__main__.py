"""
Run one checkout against a seeded in-memory shop and print the outcome.

    python -m digigoods --products 1,2 --codes PRODUCT10,GENERAL20
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from kungfu import Error, Ok

from digigoods._config import Settings
from digigoods._logging import configure_logging
from digigoods._types import DiscountId, ProductId, UserId
from digigoods.catalog import Product
from digigoods.checkout import CheckoutOrchestrator, CheckoutRequest
from digigoods.ledger import Discount, DiscountKind
from digigoods.pricing import PricingPolicy
from digigoods.profiles import ProfileService
from digigoods.users import User
from digigoods.uow import InMemoryStore


def seed(store: InMemoryStore, today: date) -> None:
    now = datetime.now(UTC)
    window = (today - timedelta(days=1), today + timedelta(days=30))

    store.add_user(User(UserId(1), "alice", "alice@example.com", "Alice", None, None, now, now))
    store.add_user(User(UserId(2), "bob", "bob@example.com", "Bob", None, None, now, now))

    store.add_product(Product(ProductId(1), "E-book bundle", Decimal("100.00"), 10))
    store.add_product(Product(ProductId(2), "Soundtrack", Decimal("50.00"), 5))

    store.add_discount(Discount(DiscountId(1), "GENERAL20", Decimal("20"), DiscountKind.GENERAL, *window, 10))
    store.add_discount(
        Discount(
            DiscountId(2),
            "PRODUCT10",
            Decimal("10"),
            DiscountKind.PRODUCT_SPECIFIC,
            *window,
            10,
            frozenset({ProductId(1)}),
        )
    )
    store.add_discount(Discount(DiscountId(3), "EXCESSIVE80", Decimal("80"), DiscountKind.GENERAL, *window, 10))


def _ids(raw: str) -> tuple[ProductId, ...]:
    return tuple(ProductId(int(part)) for part in raw.split(",") if part.strip())


def _codes(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


async def run(args: argparse.Namespace, settings: Settings) -> int:
    store = InMemoryStore()
    seed(store, datetime.now(UTC).date())

    user_id = UserId(args.user_id)
    profiles = ProfileService(store.unit_of_work)
    if not await profiles.user_exists(user_id):
        print(f"note: user {user_id.value} is not registered, checkout will be refused")

    orchestrator = CheckoutOrchestrator(
        store.unit_of_work,
        policy=PricingPolicy.from_settings(settings),
    )
    request = CheckoutRequest(user_id, _ids(args.products), _codes(args.codes))
    result = await orchestrator.process_checkout(request, UserId(args.auth_user_id or args.user_id))

    print("\n=== RESULT ===")
    match result:
        case Ok(order):
            print(f"{order.message} order={order.order_id.value} final_price={order.final_price}")
            status = 0
        case Error(e):
            print(f"failed: {e.code} ({e.status}) {e.message}")
            status = 1

    async with store.unit_of_work() as uow:
        orders = await uow.orders.list_for_user(user_id)

    print("stock:", {p.id.value: p.stock for p in store.products.values()})
    print("uses left:", {d.code: d.usage_limit for d in store.discounts.values()})
    print(f"orders of user {user_id.value}:", [(o.id.value, str(o.final_price)) for o in orders])
    return status


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one checkout against a seeded in-memory shop.")
    parser.add_argument("--user-id", type=int, default=1)
    parser.add_argument("--auth-user-id", type=int, default=None, help="Caller identity; defaults to --user-id")
    parser.add_argument("--products", type=str, default="1,2", help="Comma-separated product ids")
    parser.add_argument("--codes", type=str, default="", help="Comma-separated discount codes")
    args = parser.parse_args()

    settings = Settings.from_env()
    configure_logging(settings)
    raise SystemExit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
