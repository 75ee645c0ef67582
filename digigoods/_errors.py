"""
Checkout errors — returned as values inside kungfu.Error.

Every error knows its kind and the status code the HTTP adapter answers with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum, auto
from typing import ClassVar

from digigoods._types import ProductId, UserId

# ═══════════════════════════════════════════════════════════════════════════════
# Error Kind
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorKind(Enum):
    """
    Failure taxonomy.

    None of these are retried by the core: every failure ends the
    current checkout with the unit of work rolled back.
    """

    AUTHORIZATION = auto()
    NOT_FOUND = auto()
    VALIDATION = auto()
    CONTENTION = auto()
    INFRASTRUCTURE = auto()


# ═══════════════════════════════════════════════════════════════════════════════
# Base
# ═══════════════════════════════════════════════════════════════════════════════


class CheckoutError(Exception):
    kind: ClassVar[ErrorKind]
    status: ClassVar[int]
    code: ClassVar[str]

    @property
    def message(self) -> str:
        return str(self)


# ═══════════════════════════════════════════════════════════════════════════════
# Authorization
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class UnauthorizedAccessError(CheckoutError):
    kind: ClassVar[ErrorKind] = ErrorKind.AUTHORIZATION
    status: ClassVar[int] = 403
    code: ClassVar[str] = "UNAUTHORIZED_ACCESS"

    requested: UserId
    authenticated: UserId

    def __str__(self) -> str:
        return f"User {self.authenticated.value} cannot act on behalf of user {self.requested.value}"


# ═══════════════════════════════════════════════════════════════════════════════
# Not Found
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ProductNotFoundError(CheckoutError):
    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND
    status: ClassVar[int] = 404
    code: ClassVar[str] = "PRODUCT_NOT_FOUND"

    product_id: ProductId

    def __str__(self) -> str:
        return f"Product {self.product_id.value} not found"


@dataclass(frozen=True, slots=True)
class DiscountNotFoundError(CheckoutError):
    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND
    status: ClassVar[int] = 404
    code: ClassVar[str] = "DISCOUNT_NOT_FOUND"

    discount_code: str

    def __str__(self) -> str:
        return f"Discount code {self.discount_code} not found"


@dataclass(frozen=True, slots=True)
class UserNotFoundError(CheckoutError):
    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND
    status: ClassVar[int] = 404
    code: ClassVar[str] = "USER_NOT_FOUND"

    user_id: UserId

    def __str__(self) -> str:
        return f"User {self.user_id.value} not found"


# ═══════════════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DiscountExpiredError(CheckoutError):
    """Evaluated outside the discount's [valid_from, valid_until] window."""

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION
    status: ClassVar[int] = 400
    code: ClassVar[str] = "DISCOUNT_EXPIRED"

    discount_code: str
    valid_from: date
    valid_until: date
    evaluated_on: date

    def __str__(self) -> str:
        return (
            f"Discount code {self.discount_code} is valid from {self.valid_from} "
            f"to {self.valid_until}, not on {self.evaluated_on}"
        )


@dataclass(frozen=True, slots=True)
class DiscountExhaustedError(CheckoutError):
    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION
    status: ClassVar[int] = 409
    code: ClassVar[str] = "DISCOUNT_EXHAUSTED"

    discount_code: str

    def __str__(self) -> str:
        return f"Discount code {self.discount_code} has no remaining uses"


@dataclass(frozen=True, slots=True)
class ExcessiveDiscountError(CheckoutError):
    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION
    status: ClassVar[int] = 400
    code: ClassVar[str] = "EXCESSIVE_DISCOUNT"

    discount_code: str
    percentage: Decimal
    threshold: Decimal

    def __str__(self) -> str:
        return (
            f"Discount code {self.discount_code} takes {self.percentage}% off, "
            f"more than the allowed {self.threshold}%"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Contention
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class InsufficientStockError(CheckoutError):
    kind: ClassVar[ErrorKind] = ErrorKind.CONTENTION
    status: ClassVar[int] = 409
    code: ClassVar[str] = "INSUFFICIENT_STOCK"

    product_id: ProductId
    requested: int
    available: int | None = None

    def __str__(self) -> str:
        if self.available is None:
            return f"Insufficient stock for product {self.product_id.value}: need {self.requested}"
        return (
            f"Insufficient stock for product {self.product_id.value}: "
            f"need {self.requested}, have {self.available}"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Infrastructure
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PersistenceError(CheckoutError):
    """Storage failure. Nothing was committed."""

    kind: ClassVar[ErrorKind] = ErrorKind.INFRASTRUCTURE
    status: ClassVar[int] = 500
    code: ClassVar[str] = "PERSISTENCE_FAILURE"

    reason: str
    cause: Exception | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_exception(cls, exc: BaseException) -> PersistenceError:
        """Lift a storage exception. Cancellation and exits are re-raised."""
        if not isinstance(exc, Exception):
            raise exc
        return cls(f"{type(exc).__name__}: {exc}", exc)

    def __str__(self) -> str:
        return self.reason


type DiscountLookupError = DiscountNotFoundError | DiscountExpiredError | DiscountExhaustedError

__all__ = (
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
    "DiscountLookupError",
)
