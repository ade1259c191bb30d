"""
Deed Ledger Configuration

Fee policy and logging settings, read from environment variables.

Environment variables:
- DEED_APPROVAL_FEE: payment required by approve() (default 0)
- DEED_TRANSFER_FEE: payment required by take_ownership() (default 0)
- DEED_LOG_LEVEL: logging level (default INFO)
- DEED_ENVIRONMENT: environment name attached to log records (default production)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_APPROVAL_FEE = 0
DEFAULT_TRANSFER_FEE = 0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ENVIRONMENT = "production"


def _get_int_env(env_var: str, default: int) -> int:
    """Read a non-negative integer from the environment."""
    raw = os.getenv(env_var, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{env_var} must be an integer, got {raw!r}",
            details={"env_var": env_var, "value": raw},
        )


@dataclass(frozen=True)
class LedgerConfig:
    """Runtime policy for a deed ledger instance."""

    approval_fee: int = DEFAULT_APPROVAL_FEE
    transfer_fee: int = DEFAULT_TRANSFER_FEE
    log_level: str = DEFAULT_LOG_LEVEL
    environment: str = DEFAULT_ENVIRONMENT

    def __post_init__(self) -> None:
        for name in ("approval_fee", "transfer_fee"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer", details={name: value})
            if value < 0:
                raise ConfigurationError(f"{name} cannot be negative", details={name: value})
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level {self.log_level!r}",
                details={"log_level": self.log_level},
            )

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Build a config from DEED_* environment variables."""
        config = cls(
            approval_fee=_get_int_env("DEED_APPROVAL_FEE", DEFAULT_APPROVAL_FEE),
            transfer_fee=_get_int_env("DEED_TRANSFER_FEE", DEFAULT_TRANSFER_FEE),
            log_level=os.getenv("DEED_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip() or DEFAULT_LOG_LEVEL,
            environment=os.getenv("DEED_ENVIRONMENT", DEFAULT_ENVIRONMENT).strip() or DEFAULT_ENVIRONMENT,
        )
        if config.approval_fee or config.transfer_fee:
            logger.info(
                "Deed ledger fees configured",
                extra={
                    "event": "config.fees",
                    "approval_fee": config.approval_fee,
                    "transfer_fee": config.transfer_fee,
                },
            )
        return config
