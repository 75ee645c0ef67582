"""
digigoods — checkout backend for a digital goods shop.

    from digigoods import checkout, uow as U

    store = U.InMemoryStore()
    orchestrator = checkout.CheckoutOrchestrator(store.unit_of_work)
    result = await orchestrator.process_checkout(request, authenticated_user_id)

Components, leaves first:

    catalog   products, prices, stock
    ledger    discount codes, eligibility, usage
    pricing   pure two-pass discount composition
    checkout  authorize → price → commit
"""

from digigoods import catalog
from digigoods import ledger
from digigoods import pricing
from digigoods import orders
from digigoods import users
from digigoods import uow
from digigoods import checkout
from digigoods import profiles
from digigoods._config import Settings
from digigoods._logging import configure_logging
from digigoods._types import (
    UserId,
    ProductId,
    DiscountId,
    OrderId,
    Clock,
    SystemClock,
    FixedClock,
    to_money,
)
from digigoods._errors import (
    ErrorKind,
    CheckoutError,
    UnauthorizedAccessError,
    ProductNotFoundError,
    DiscountNotFoundError,
    UserNotFoundError,
    DiscountExpiredError,
    DiscountExhaustedError,
    ExcessiveDiscountError,
    InsufficientStockError,
    PersistenceError,
)

__version__ = "0.1.0"

__all__ = (
    "catalog",
    "ledger",
    "pricing",
    "orders",
    "users",
    "uow",
    "checkout",
    "profiles",
    "Settings",
    "configure_logging",
    "UserId",
    "ProductId",
    "DiscountId",
    "OrderId",
    "Clock",
    "SystemClock",
    "FixedClock",
    "to_money",
    "ErrorKind",
    "CheckoutError",
    "UnauthorizedAccessError",
    "ProductNotFoundError",
    "DiscountNotFoundError",
    "UserNotFoundError",
    "DiscountExpiredError",
    "DiscountExhaustedError",
    "ExcessiveDiscountError",
    "InsufficientStockError",
    "PersistenceError",
)
