"""
Environment configuration for calckit.

Environment Variables:
    CALCKIT_LOG_LEVEL: Logging level name (default: INFO)
    CALCKIT_LOG_FILE: Optional log file path (default: stderr)
    CALCKIT_DEFAULT_DECIMALS: Decimal places used by the CLI formatters (default: 2)
    CALCKIT_LOCALE: Locale tag selecting the number format (default: en)
    CALCKIT_UNITS_FILE: Optional YAML file with extra unit families

Values are read after ``load_dotenv()``, so a ``.env`` file in the working
directory works as well as exported variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError
from .numeric.coercion import parse_number
from .numeric.formatting import NumberFormat

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    log_level: str = "INFO"
    log_file: Optional[str] = None
    default_decimals: int = 2
    locale: str = "en"
    units_file: Optional[str] = None

    @property
    def number_format(self) -> NumberFormat:
        return NumberFormat.for_locale(self.locale)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        log_level = os.getenv("CALCKIT_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"CALCKIT_LOG_LEVEL: unknown level '{log_level}'")

        raw_decimals = os.getenv("CALCKIT_DEFAULT_DECIMALS", "2")
        decimals = parse_number(raw_decimals, fallback=-1)
        if decimals < 0 or decimals != int(decimals):
            raise ConfigError(
                f"CALCKIT_DEFAULT_DECIMALS must be a non-negative integer, got '{raw_decimals}'"
            )

        locale = os.getenv("CALCKIT_LOCALE", "en")
        try:
            NumberFormat.for_locale(locale)
        except ValueError as exc:
            raise ConfigError(f"CALCKIT_LOCALE: {exc}") from exc

        return cls(
            log_level=log_level,
            log_file=os.getenv("CALCKIT_LOG_FILE") or None,
            default_decimals=int(decimals),
            locale=locale,
            units_file=os.getenv("CALCKIT_UNITS_FILE") or None,
        )


_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the cached Settings, reading the environment on first use."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings.from_env()
        logger.debug("Loaded settings: %s", _settings_instance)
    return _settings_instance


def reset_settings() -> None:
    global _settings_instance
    _settings_instance = None
