"""Configuration management for the finance core.

This module centralizes paths, defaults and environment variable overrides,
and defines :class:`AppSettings`, the process-wide display settings that the
host application builds once at startup with :func:`load_settings` and passes
to whatever needs them.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from .logging_setup import get_logger

_logger = get_logger("finance_core.config")

# Base project root - assumes this file is in finance_core/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("FINANCE_CORE_DATA_DIR", _PROJECT_ROOT / "user_data"))
BUDGET_FILENAME = "budgets.json"

# AI collaborator
AI_MODEL = os.getenv("FINANCE_CORE_AI_MODEL", "gpt-4o-mini")
AI_TIMEOUT_SECONDS = float(os.getenv("FINANCE_CORE_AI_TIMEOUT", "60"))

DEFAULT_CURRENCY_CODE = "USD"
DEFAULT_CURRENCY_SYMBOL = "$"

_CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


class Theme(str, Enum):
    DARK = "DARK"
    LIGHT = "LIGHT"


@dataclass(frozen=True)
class AppSettings:
    """Display settings shared by the application's views."""

    currency_code: str = DEFAULT_CURRENCY_CODE
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    theme: Theme = Theme.DARK

    def with_currency(self, code: str, symbol: str) -> "AppSettings":
        """Return a copy using another currency.

        Raises:
            ValueError: If ``code`` is not a three-letter ISO 4217 style code
        """
        code = (code or "").strip().upper()
        if not _CURRENCY_CODE_PATTERN.match(code):
            raise ValueError(f"Invalid ISO 4217 currency code: {code!r}")
        return replace(self, currency_code=code, currency_symbol=symbol or code)

    def with_theme(self, theme: str) -> "AppSettings":
        return replace(self, theme=parse_theme(theme))


def parse_theme(value: Optional[str]) -> Theme:
    """Parse a theme name, defaulting to :attr:`Theme.DARK` for unknown values."""
    try:
        return Theme(str(value or "").strip().upper())
    except ValueError:
        return Theme.DARK


def load_settings(environ: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Build :class:`AppSettings` from environment variables.

    Invalid currency codes fall back to the defaults rather than failing
    startup.
    """
    env = os.environ if environ is None else environ
    settings = AppSettings(theme=parse_theme(env.get("FINANCE_CORE_THEME")))
    code = env.get("FINANCE_CORE_CURRENCY")
    if code:
        try:
            settings = settings.with_currency(code, env.get("FINANCE_CORE_CURRENCY_SYMBOL", ""))
        except ValueError as exc:
            _logger.warning("Ignoring FINANCE_CORE_CURRENCY: %s", exc)
    return settings


def user_data_dir(username: str, base_dir: Optional[Path] = None) -> Path:
    """Return the per-user data directory (not created)."""
    return Path(base_dir or DATA_DIR) / username


def ensure_data_directories(base_dir: Optional[Path] = None) -> Path:
    """Create the data directory if it doesn't exist and return it."""
    target = Path(base_dir or DATA_DIR)
    target.mkdir(parents=True, exist_ok=True)
    return target
