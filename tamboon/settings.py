"""Defaults and environment-driven configuration."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

DEFAULT_MAX_RETRIES = 5
DEFAULT_MAX_DONATION_WORKERS = 4

DEFAULT_TOKEN_URL = "https://vault.omise.co/tokens"
DEFAULT_CHARGE_URL = "https://api.omise.co/charges"
CURRENCY = "THB"
RETURN_URI = "http://www.example.com/orders/complete"

DEFAULT_MAX_RECORDS = 5
DEFAULT_EXP_YEAR_INCREASE = 5

COL_NAME = 0
COL_AMOUNT_SUBUNITS = 1
COL_CC_NUMBER = 2
COL_CVV = 3
COL_EXP_MONTH = 4
COL_EXP_YEAR = 5

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def get_env_int(key: str, default: int) -> int:
    """Return the environment variable ``key`` as an integer, or ``default``.

    The default is used when the variable is unset or is not a plain
    signed 64-bit decimal integer.
    """
    value = os.environ.get(key)
    if value is None or not _INT_PATTERN.fullmatch(value):
        return default
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return default
    return number


@dataclass(frozen=True)
class ClientConfig:
    """Settings for the payment client."""

    max_retries: int = DEFAULT_MAX_RETRIES
    max_donation_workers: int = DEFAULT_MAX_DONATION_WORKERS

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            max_retries=get_env_int("MAX_RETRIES", DEFAULT_MAX_RETRIES),
            max_donation_workers=get_env_int(
                "MAX_DONATION_GOROUTINES", DEFAULT_MAX_DONATION_WORKERS
            ),
        )


@dataclass(frozen=True)
class ProcessorConfig:
    """Settings for reading donation files."""

    max_records: int = DEFAULT_MAX_RECORDS
    exp_year_increase: int = DEFAULT_EXP_YEAR_INCREASE

    @classmethod
    def from_env(cls) -> "ProcessorConfig":
        return cls(
            max_records=get_env_int("MAX_RECORDS", DEFAULT_MAX_RECORDS),
            exp_year_increase=get_env_int(
                "EXP_YEAR_INCREASE", DEFAULT_EXP_YEAR_INCREASE
            ),
        )