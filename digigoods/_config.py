"""
Settings — process configuration read once at startup.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from digigoods._types import is_percentage

ENV_PREFIX = "DIGIGOODS_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Runtime configuration.

    Example:
        settings = Settings.from_env()
        settings = Settings(database_url="sqlite+aiosqlite:///shop.db")
    """

    database_url: str = "sqlite+aiosqlite:///:memory:"
    db_echo: bool = False
    max_discount_percentage: Decimal = Decimal("50")
    log_level: str = "INFO"
    log_json: bool = True

    def __post_init__(self) -> None:
        if not is_percentage(self.max_discount_percentage):
            raise ValueError(
                f"max_discount_percentage must be within 0..100, got {self.max_discount_percentage}"
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from DIGIGOODS_* variables, defaults for the rest."""
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name)

        return cls(
            database_url=get("DATABASE_URL") or defaults.database_url,
            db_echo=_parse_bool("DB_ECHO", get("DB_ECHO"), defaults.db_echo),
            max_discount_percentage=_parse_decimal(
                "MAX_DISCOUNT_PERCENTAGE",
                get("MAX_DISCOUNT_PERCENTAGE"),
                defaults.max_discount_percentage,
            ),
            log_level=(get("LOG_LEVEL") or defaults.log_level).upper(),
            log_json=_parse_bool("LOG_JSON", get("LOG_JSON"), defaults.log_json),
        )


def _parse_bool(name: str, raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name}: expected a boolean, got {raw!r}")


def _parse_decimal(name: str, raw: str | None, default: Decimal) -> Decimal:
    if raw is None:
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"{ENV_PREFIX}{name}: expected a number, got {raw!r}") from None
    if not value.is_finite():
        raise ValueError(f"{ENV_PREFIX}{name}: expected a finite number, got {raw!r}")
    return value


__all__ = ("Settings", "ENV_PREFIX")
