"""
API — FastAPI adapter over checkout and profiles.

    from digigoods.api import create_app

    app = create_app(store.unit_of_work)
    # or, against the configured database:
    app = create_app_from_settings(Settings.from_env())
"""

from __future__ import annotations

from digigoods.api._app import (
    Services,
    create_app,
    create_app_from_settings,
    router,
    error_response,
)
from digigoods.api._schemas import CheckoutIn, OrderOut, ProfileIn, ProfileOut, ErrorOut

__all__ = (
    "Services",
    "create_app",
    "create_app_from_settings",
    "router",
    "error_response",
    "CheckoutIn",
    "OrderOut",
    "ProfileIn",
    "ProfileOut",
    "ErrorOut",
)
