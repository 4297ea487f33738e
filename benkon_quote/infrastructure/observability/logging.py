"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from benkon_quote.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_quote_calculated(
    request_id: str,
    number_of_stores: int,
    purchase_total: float,
    rental_total: float,
    cheaper_option: str,
    duration_ms: float,
) -> None:
    """Log a completed comparison; customer identity stays out of the logs"""
    logging.info(
        "Quote calculated",
        extra={
            "request_id": request_id,
            "step": "quote_calculated",
            "number_of_stores": number_of_stores,
            "purchase_total": purchase_total,
            "rental_total": rental_total,
            "cheaper_option": cheaper_option,
            "duration_ms": duration_ms,
        },
    )


def log_quote_exported(request_id: str, quote_number: str, locale: str, size_bytes: int, duration_ms: float) -> None:
    """Log a generated quotation document"""
    logging.info(
        "Quotation exported",
        extra={
            "request_id": request_id,
            "step": "quote_exported",
            "quote_number": quote_number,
            "locale": locale,
            "size_bytes": size_bytes,
            "duration_ms": duration_ms,
        },
    )
