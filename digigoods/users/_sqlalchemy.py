"""
SQLAlchemy user store.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from digigoods._types import UserId
from digigoods.db import UserTable
from digigoods.users._types import User


def to_user(row: UserTable) -> User:
    return User(
        id=UserId(row.id),
        username=row.username,
        email=row.email,
        first_name=row.first_name,
        last_name=row.last_name,
        phone_number=row.phone_number,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAlchemyUserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: UserId) -> User | None:
        row = await self._session.get(UserTable, user_id.value)
        return None if row is None else to_user(row)

    async def save(self, user: User) -> None:
        row = await self._session.get(UserTable, user.id.value)
        if row is None:
            row = UserTable(id=user.id.value, username=user.username, created_at=user.created_at)
            self._session.add(row)
        row.email = user.email
        row.first_name = user.first_name
        row.last_name = user.last_name
        row.phone_number = user.phone_number
        row.updated_at = user.updated_at
        await self._session.flush()


__all__ = ("SQLAlchemyUserStore", "to_user")
