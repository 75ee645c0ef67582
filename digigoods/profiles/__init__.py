"""
Profiles — user-facing view of account records.
"""

from __future__ import annotations

from digigoods.profiles._service import ProfileService

__all__ = ("ProfileService",)
