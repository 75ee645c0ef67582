"""Discount ledger: resolution checks and usage accounting."""

import asyncio
from datetime import timedelta
from decimal import Decimal

import pytest
from helpers import TODAY, expect_error, expect_ok, make_discount

from digigoods import (
    DiscountExhaustedError,
    DiscountExpiredError,
    DiscountId,
    DiscountNotFoundError,
    ProductId,
)
from digigoods.ledger import Discount, DiscountKind, check_eligibility
from digigoods.uow import InMemoryStore


def resolve(store: InMemoryStore, codes: list[str], on=TODAY):
    async def scenario():
        async with store.unit_of_work() as uow:
            return await uow.ledger.resolve(codes, on=on)

    return asyncio.run(scenario())


def test_resolve_keeps_supplied_order(store: InMemoryStore) -> None:
    discounts = expect_ok(resolve(store, ["PRODUCT10", "GENERAL20"]))

    assert [d.code for d in discounts] == ["PRODUCT10", "GENERAL20"]
    assert discounts[0].kind is DiscountKind.PRODUCT_SPECIFIC


def test_resolve_empty_codes(store: InMemoryStore) -> None:
    assert expect_ok(resolve(store, [])) == ()


def test_unknown_code(store: InMemoryStore) -> None:
    e = expect_error(resolve(store, ["GENERAL20", "NOPE"]))

    assert isinstance(e, DiscountNotFoundError)
    assert e.discount_code == "NOPE"
    assert e.status == 404


def test_expired_code(store: InMemoryStore) -> None:
    e = expect_error(resolve(store, ["LASTYEAR"]))

    assert isinstance(e, DiscountExpiredError)
    assert e.evaluated_on == TODAY
    assert e.status == 400


def test_not_yet_started_counts_as_expired(store: InMemoryStore) -> None:
    e = expect_error(resolve(store, ["GENERAL20"], on=TODAY - timedelta(days=2)))

    assert isinstance(e, DiscountExpiredError)


def test_window_bounds_are_inclusive(general20: Discount) -> None:
    assert expect_ok(check_eligibility(general20, general20.valid_from)) == general20
    assert expect_ok(check_eligibility(general20, general20.valid_until)) == general20
    assert isinstance(
        expect_error(check_eligibility(general20, general20.valid_until + timedelta(days=1))),
        DiscountExpiredError,
    )


def test_exhausted_code(store: InMemoryStore) -> None:
    e = expect_error(resolve(store, ["USEDUP"]))

    assert isinstance(e, DiscountExhaustedError)
    assert e.status == 409


def test_expiry_is_checked_before_exhaustion() -> None:
    stale = make_discount(
        9,
        "STALE",
        "5.00",
        usage_limit=0,
        valid_from=TODAY - timedelta(days=10),
        valid_until=TODAY - timedelta(days=5),
    )

    assert isinstance(expect_error(check_eligibility(stale, TODAY)), DiscountExpiredError)


def test_resolve_does_not_consume_uses(store: InMemoryStore) -> None:
    expect_ok(resolve(store, ["ONETIME"]))
    expect_ok(resolve(store, ["ONETIME"]))

    assert store.discounts["ONETIME"].usage_limit == 1


def test_record_usage_applies_on_commit(store: InMemoryStore) -> None:
    async def scenario(commit: bool) -> None:
        async with store.unit_of_work() as uow:
            expect_ok(await uow.ledger.record_usage([DiscountId(1), DiscountId(2)]))
            if commit:
                await uow.commit()

    asyncio.run(scenario(commit=False))
    assert store.discounts["GENERAL20"].usage_limit == 10

    asyncio.run(scenario(commit=True))
    assert store.discounts["GENERAL20"].usage_limit == 9
    assert store.discounts["PRODUCT10"].usage_limit == 9


def test_staged_usage_counts_against_limit(store: InMemoryStore) -> None:
    async def scenario() -> None:
        async with store.unit_of_work() as uow:
            expect_ok(await uow.ledger.record_usage([DiscountId(4)]))
            assert isinstance(expect_error(await uow.ledger.resolve(["ONETIME"], on=TODAY)), DiscountExhaustedError)
            assert isinstance(expect_error(await uow.ledger.record_usage([DiscountId(4)])), DiscountExhaustedError)

    asyncio.run(scenario())


def test_record_usage_unknown_id(store: InMemoryStore) -> None:
    async def scenario():
        async with store.unit_of_work() as uow:
            return await uow.ledger.record_usage([DiscountId(404)])

    assert isinstance(expect_error(asyncio.run(scenario())), DiscountNotFoundError)


@pytest.mark.parametrize(
    "overrides",
    [
        {"percentage": "100.01"},
        {"percentage": "-1"},
        {"percentage": "NaN"},
        {"percentage": "sNaN"},
        {"usage_limit": -1},
        {"valid_from": TODAY + timedelta(days=40)},
    ],
)
def test_discount_validation(overrides: dict) -> None:
    kwargs = {"discount_id": 9, "code": "BAD", "percentage": "10.00", **overrides}

    with pytest.raises(ValueError):
        make_discount(**kwargs)


def test_general_discount_cannot_target_products() -> None:
    with pytest.raises(ValueError):
        make_discount(9, "BAD", "10.00", DiscountKind.GENERAL, products=frozenset({ProductId(1)}))


def test_rate_is_fraction() -> None:
    assert make_discount(9, "TWENTY", "20.00").rate == Decimal("0.2")
