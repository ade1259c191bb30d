"""
Deed Ledger - Structured Logging Configuration

Configures structured JSON logging:
- JSON format for easy parsing and aggregation
- Log rotation to prevent disk space issues
- Ledger event payloads (passed via ``extra``) land as top-level fields

Usage:
    from deedledger.core.logging_config import setup_logging

    logger = setup_logging(name="deedledger", level="INFO")
    logger.info("Deed minted", extra={"event": "deed.mint", "token_id": 7})
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any

from pythonjsonlogger import jsonlogger

from .config import LedgerConfig


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter with additional context fields.

    Adds timestamp, environment, service and source location to all log records.
    """

    def __init__(
        self,
        fmt: str = "%(timestamp)s %(level)s %(name)s %(message)s",
        timestamp: bool = True,
        environment: Optional[str] = None,
        service_name: str = "deedledger",
    ):
        super().__init__(fmt=fmt)
        self.timestamp = timestamp
        self.environment = environment or "production"
        self.service_name = service_name

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        if self.timestamp and not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        log_record["environment"] = self.environment
        log_record["service"] = self.service_name

        if not log_record.get("level"):
            log_record["level"] = record.levelname.lower()

        log_record["source"] = {
            "function": record.funcName,
            "module": record.module,
            "line": record.lineno,
        }


def setup_logging(
    name: str = "deedledger",
    log_file: Optional[str] = None,
    level: str = "INFO",
    environment: str = "production",
    enable_console: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    Setup structured JSON logging.

    Args:
        name: Logger name (child loggers such as ``deedledger.core`` inherit it)
        log_file: Path to JSON log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment identifier attached to every record
        enable_console: Whether to log to stdout
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    formatter = CustomJsonFormatter(
        environment=environment,
        service_name=name.split(".")[0],
    )

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, level.upper()))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Get a logger, configuring it only if it has no handlers yet."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logging(name=name, level=level)
    return logger


def setup_ledger_logging(
    config: Optional[LedgerConfig] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Setup logging for the ``deedledger`` package from a ledger config."""
    config = config or LedgerConfig.from_env()
    return setup_logging(
        name="deedledger",
        log_file=log_file,
        level=config.log_level,
        environment=config.environment,
    )
