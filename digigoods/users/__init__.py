"""
Users — account records behind profiles and orders.
"""

from __future__ import annotations

from digigoods.users._types import User, ProfileUpdate, UserStore
from digigoods.users._memory import InMemoryUserStore
from digigoods.users._sqlalchemy import SQLAlchemyUserStore

__all__ = (
    "User",
    "ProfileUpdate",
    "UserStore",
    "InMemoryUserStore",
    "SQLAlchemyUserStore",
)
