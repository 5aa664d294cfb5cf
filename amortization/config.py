"""Runtime settings read from the environment.

The CLI and the web API share these values. Each setting maps to an
``AMORTIZATION_``-prefixed environment variable, e.g. ``AMORTIZATION_MAX_TERM``.
Tests build :class:`Settings` directly with keyword overrides.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "AMORTIZATION_", "env_ignore_empty": True, "frozen": True}

    # Logging
    log_level: str = "WARNING"

    # Display
    currency: str = "UGX"
    max_rows: int = 120

    # Loan-request limits
    min_amount: Decimal = Decimal("1000")
    max_amount: Decimal = Decimal("10000000")
    max_term: int = 60

    @field_validator("log_level", "currency")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()


def load_settings() -> Settings:
    """Read :class:`Settings` from the process environment.

    Malformed values raise ``pydantic.ValidationError`` (a ``ValueError``)
    naming the offending setting.
    """
    return Settings()


def configure_logging(level: str) -> None:
    """Configure the root logger; unknown level names fall back to WARNING."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
