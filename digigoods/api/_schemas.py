"""
HTTP schemas — pydantic models at the edge.

Request models convert to domain values with to_domain(); response models
are built from domain values with from_domain().
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from digigoods._errors import CheckoutError
from digigoods._types import ProductId, UserId
from digigoods.checkout import CheckoutRequest, OrderResult
from digigoods.users import ProfileUpdate, User

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# Money leaves the API as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout
# ═══════════════════════════════════════════════════════════════════════════════


class CheckoutIn(_CamelModel):
    user_id: int = Field(alias="userId")
    product_ids: list[int] = Field(alias="productIds", min_length=1)
    discount_codes: list[str] = Field(default_factory=list, alias="discountCodes")

    def to_domain(self) -> CheckoutRequest:
        return CheckoutRequest(
            user_id=UserId(self.user_id),
            product_ids=tuple(ProductId(p) for p in self.product_ids),
            discount_codes=tuple(self.discount_codes),
        )


class OrderOut(_CamelModel):
    message: str
    final_price: Money = Field(alias="finalPrice")
    order_id: str = Field(alias="orderId")

    @classmethod
    def from_domain(cls, dom: OrderResult) -> OrderOut:
        return cls(
            message=dom.message,
            final_price=dom.final_price,
            order_id=dom.order_id.value,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Profiles
# ═══════════════════════════════════════════════════════════════════════════════


class ProfileIn(_CamelModel):
    email: str | None = Field(default=None, pattern=_EMAIL_PATTERN, max_length=255)
    first_name: str | None = Field(default=None, alias="firstName", max_length=50)
    last_name: str | None = Field(default=None, alias="lastName", max_length=50)
    phone_number: str | None = Field(default=None, alias="phoneNumber", max_length=20)

    def to_domain(self) -> ProfileUpdate:
        return ProfileUpdate(
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            phone_number=self.phone_number,
        )


class ProfileOut(_CamelModel):
    id: int
    username: str
    email: str | None
    first_name: str | None = Field(alias="firstName")
    last_name: str | None = Field(alias="lastName")
    phone_number: str | None = Field(alias="phoneNumber")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_domain(cls, dom: User) -> ProfileOut:
        return cls(
            id=dom.id.value,
            username=dom.username,
            email=dom.email,
            first_name=dom.first_name,
            last_name=dom.last_name,
            phone_number=dom.phone_number,
            created_at=dom.created_at,
            updated_at=dom.updated_at,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorOut(BaseModel):
    status: int
    error: str
    message: str
    path: str | None = None

    @classmethod
    def from_domain(cls, dom: CheckoutError, path: str | None = None) -> ErrorOut:
        return cls(status=dom.status, error=dom.code, message=dom.message, path=path)

    @classmethod
    def from_validation(cls, errors: Sequence[Any], path: str | None = None) -> ErrorOut:
        """One `field: reason` entry per failed field, body prefix dropped."""
        parts: list[str] = []
        for err in errors:
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            parts.append(f"{'.'.join(loc)}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid"))
        return cls(status=400, error="VALIDATION_FAILED", message="; ".join(parts), path=path)


__all__ = (
    "CheckoutIn",
    "OrderOut",
    "ProfileIn",
    "ProfileOut",
    "ErrorOut",
)
