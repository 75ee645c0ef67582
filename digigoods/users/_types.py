"""
User types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from digigoods._types import UserId


@dataclass(frozen=True, slots=True)
class User:
    id: UserId
    username: str
    email: str | None
    first_name: str | None
    last_name: str | None
    phone_number: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class ProfileUpdate:
    """Fields a user may change on their own profile."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None


class UserStore(Protocol):
    async def get(self, user_id: UserId) -> User | None: ...

    async def save(self, user: User) -> None: ...


__all__ = ("User", "ProfileUpdate", "UserStore")
