"""
Profile service — read and edit a user's own profile.
"""

from __future__ import annotations

import dataclasses

import structlog
from combinators import lift as L
from kungfu import Error, Ok, Result

from digigoods._errors import PersistenceError, UserNotFoundError
from digigoods._types import Clock, SystemClock, UserId
from digigoods.uow import UnitOfWorkFactory
from digigoods.users import ProfileUpdate, User

logger = structlog.get_logger(__name__)


class ProfileService:
    def __init__(self, uow_factory: UnitOfWorkFactory, clock: Clock | None = None) -> None:
        self._uow_factory = uow_factory
        self._clock = clock or SystemClock()

    async def get_profile(
        self,
        user_id: UserId,
    ) -> Result[User, UserNotFoundError | PersistenceError]:
        async def load() -> User | None:
            async with self._uow_factory() as uow:
                return await uow.users.get(user_id)

        match await L.catching_async(load, on_error=PersistenceError.from_exception):
            case Ok(None):
                return Error(UserNotFoundError(user_id))
            case Ok(user):
                return Ok(user)
            case Error(e):
                return Error(e)

    async def update_profile(
        self,
        user_id: UserId,
        update: ProfileUpdate,
    ) -> Result[User, UserNotFoundError | PersistenceError]:
        """Copy every profile field from `update`, including cleared ones."""

        async def save() -> User | None:
            async with self._uow_factory() as uow:
                user = await uow.users.get(user_id)
                if user is None:
                    return None
                updated = dataclasses.replace(
                    user,
                    email=update.email,
                    first_name=update.first_name,
                    last_name=update.last_name,
                    phone_number=update.phone_number,
                    updated_at=self._clock.now(),
                )
                await uow.users.save(updated)
                await uow.commit()
                return updated

        match await L.catching_async(save, on_error=PersistenceError.from_exception):
            case Ok(None):
                return Error(UserNotFoundError(user_id))
            case Ok(user):
                logger.info("profile_updated", user_id=user_id.value)
                return Ok(user)
            case Error(e):
                logger.error("profile_update_failed", user_id=user_id.value, reason=e.message)
                return Error(e)

    async def user_exists(self, user_id: UserId) -> bool:
        async with self._uow_factory() as uow:
            return await uow.users.get(user_id) is not None


__all__ = ("ProfileService",)
