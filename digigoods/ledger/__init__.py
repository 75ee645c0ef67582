"""
Ledger — discount codes, eligibility and usage counters.

    from digigoods import ledger

    match await uow.ledger.resolve(["GENERAL20"], on=date.today()):
        case Ok(discounts): ...
        case Error(DiscountExpiredError() as e): ...
"""

from __future__ import annotations

from digigoods.ledger._types import (
    DiscountKind,
    Discount,
    check_eligibility,
    Ledger,
)
from digigoods.ledger._memory import InMemoryLedger
from digigoods.ledger._sqlalchemy import SQLAlchemyLedger

__all__ = (
    "DiscountKind",
    "Discount",
    "check_eligibility",
    "Ledger",
    "InMemoryLedger",
    "SQLAlchemyLedger",
)
