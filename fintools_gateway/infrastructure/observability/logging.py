"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "fintools-gateway"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_validation(
    request_id: str,
    tool: str,
    valid: bool,
    duration_ms: float,
) -> None:
    """Log a validation outcome; the validated value itself is never logged"""
    logging.info(
        "Validation completed",
        extra={
            "request_id": request_id,
            "tool": tool,
            "step": "validation_complete",
            "outcome": "valid" if valid else "invalid",
            "duration_ms": duration_ms,
        },
    )


def log_derivation(
    request_id: str,
    chains: int,
    state: str,
    duration_ms: float,
) -> None:
    """Log a derivation outcome: phrase state and chain count only, no key material"""
    logging.info(
        "Derivation completed",
        extra={
            "request_id": request_id,
            "step": "derivation_complete",
            "mnemonic_state": state,
            "chain_count": chains,
            "duration_ms": duration_ms,
        },
    )
