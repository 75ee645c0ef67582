"""
In-memory user store.
"""

from __future__ import annotations

from collections.abc import Mapping

from digigoods._types import UserId
from digigoods.users._types import User


class InMemoryUserStore:
    def __init__(
        self,
        users: Mapping[UserId, User],
        staged: dict[UserId, User],
    ) -> None:
        self._users = users
        self._staged = staged

    async def get(self, user_id: UserId) -> User | None:
        return self._staged.get(user_id) or self._users.get(user_id)

    async def save(self, user: User) -> None:
        self._staged[user.id] = user


__all__ = ("InMemoryUserStore",)
