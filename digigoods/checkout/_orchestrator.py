"""
Checkout orchestrator.

Authorize, resolve, price, then commit stock, discount usage and the
order in one unit of work. The first failure ends the checkout and
nothing is committed.
"""

from __future__ import annotations

from datetime import datetime

import structlog
from combinators import lift as L
from kungfu import Error, Ok, Result

from digigoods._errors import (
    CheckoutError,
    ErrorKind,
    PersistenceError,
    UnauthorizedAccessError,
    UserNotFoundError,
)
from digigoods._types import Clock, OrderId, SystemClock, UserId
from digigoods.checkout._types import (
    SUCCESS_MESSAGE,
    CheckoutRequest,
    CheckoutState,
    OrderResult,
)
from digigoods.orders import Order
from digigoods.pricing import DEFAULT_POLICY, PricingPolicy, Quote, quote
from digigoods.uow import UnitOfWork, UnitOfWorkFactory

logger = structlog.get_logger(__name__)

type BoundLogger = structlog.typing.FilteringBoundLogger


class CheckoutOrchestrator:
    """
    Runs checkouts. Stateless between calls; safe to share.

    Example:
        orchestrator = CheckoutOrchestrator(store.unit_of_work)

        match await orchestrator.process_checkout(request, authenticated):
            case Ok(result):
                print(result.final_price)
            case Error(e):
                print(e.code, e.message)
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        policy: PricingPolicy = DEFAULT_POLICY,
        clock: Clock | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy
        self._clock = clock or SystemClock()

    async def process_checkout(
        self,
        request: CheckoutRequest,
        authenticated_user_id: UserId,
    ) -> Result[OrderResult, CheckoutError]:
        log: BoundLogger = logger.bind(
            user_id=request.user_id.value,
            lines=len(request.product_ids),
            codes=list(request.unique_discount_codes),
        )
        log.debug("checkout_state", state=CheckoutState.START.value)

        # Authorization happens before any store is touched
        if request.user_id != authenticated_user_id:
            return self._fail(
                log,
                CheckoutState.START,
                UnauthorizedAccessError(request.user_id, authenticated_user_id),
            )
        log.debug("checkout_state", state=CheckoutState.AUTHORIZED.value)

        reached: list[CheckoutState] = [CheckoutState.AUTHORIZED]
        outcome = await L.catching_async(
            lambda: self._run(request, log, reached),
            on_error=PersistenceError.from_exception,
        )

        match outcome:
            case Ok(Ok(result)):
                log.info(
                    "checkout_committed",
                    state=CheckoutState.COMMITTED.value,
                    order_id=result.order_id.value,
                    final_price=str(result.final_price),
                )
                return Ok(result)
            case Ok(Error(e)) | Error(e):
                return self._fail(log, reached[-1], e)

    async def _run(
        self,
        request: CheckoutRequest,
        log: BoundLogger,
        reached: list[CheckoutState],
    ) -> Result[OrderResult, CheckoutError]:
        now = self._clock.now()

        async with self._uow_factory() as uow:
            match await self._price(uow, request, now):
                case Error(e):
                    return Error(e)
                case Ok(priced):
                    reached.append(CheckoutState.PRICED)
                    log.debug(
                        "checkout_state",
                        state=CheckoutState.PRICED.value,
                        subtotal=str(priced.subtotal),
                        final_price=str(priced.final_price),
                    )

            if await uow.users.get(request.user_id) is None:
                return Error(UserNotFoundError(request.user_id))

            match await uow.catalog.reserve_stock(priced.product_ids):
                case Error(e):
                    return Error(e)
                case Ok(_):
                    pass

            match await uow.ledger.record_usage([d.id for d in priced.discounts]):
                case Error(e):
                    return Error(e)
                case Ok(_):
                    pass

            order = Order(
                id=OrderId.new(),
                user_id=request.user_id,
                product_ids=priced.product_ids,
                final_price=priced.final_price,
                created_at=now,
            )
            await uow.orders.add(order)
            await uow.commit()

        return Ok(OrderResult(SUCCESS_MESSAGE, order.final_price, order.id))

    async def _price(
        self,
        uow: UnitOfWork,
        request: CheckoutRequest,
        now: datetime,
    ) -> Result[Quote, CheckoutError]:
        match await uow.catalog.resolve(request.product_ids):
            case Error(e):
                return Error(e)
            case Ok(products):
                pass

        match await uow.ledger.resolve(request.unique_discount_codes, on=now.date()):
            case Error(e):
                return Error(e)
            case Ok(discounts):
                pass

        match quote(products, discounts, self._policy):
            case Error(e):
                return Error(e)
            case Ok(priced):
                return Ok(priced)

    def _fail(
        self,
        log: BoundLogger,
        state: CheckoutState,
        error: CheckoutError,
    ) -> Result[OrderResult, CheckoutError]:
        report = log.error if error.kind is ErrorKind.INFRASTRUCTURE else log.warning
        report(
            "checkout_failed",
            state=CheckoutState.FAILED.value,
            failed_from=state.value,
            code=error.code,
            reason=error.message,
        )
        return Error(error)


__all__ = ("CheckoutOrchestrator",)
