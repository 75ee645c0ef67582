"""
Checkout — the one externally invoked operation.

    from digigoods import checkout

    orchestrator = checkout.CheckoutOrchestrator(uow_factory, policy=policy)
    result = await orchestrator.process_checkout(
        checkout.CheckoutRequest(UserId(1), (ProductId(1), ProductId(2)), ("GENERAL20",)),
        authenticated_user_id=UserId(1),
    )
"""

from __future__ import annotations

from digigoods.checkout._types import (
    SUCCESS_MESSAGE,
    CheckoutState,
    CheckoutRequest,
    OrderResult,
)
from digigoods.checkout._orchestrator import CheckoutOrchestrator

__all__ = (
    "SUCCESS_MESSAGE",
    "CheckoutState",
    "CheckoutRequest",
    "OrderResult",
    "CheckoutOrchestrator",
)
