"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "viah-budget"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_estimate(
    request_id: str,
    event_count: int,
    fallback_count: int,
    current_low: int,
    current_high: int,
    duration_ms: float,
) -> None:
    """Log structured wedding estimate outcome"""
    logging.info(
        "Estimate completed",
        extra={
            "request_id": request_id,
            "step": "estimate_complete",
            "event_count": event_count,
            "fallback_count": fallback_count,
            "current_low": current_low,
            "current_high": current_high,
            "duration_ms": duration_ms,
        },
    )


def log_forecast(
    request_id: str,
    contract_count: int,
    scheduled_payments: int,
    malformed_contracts: int,
    wedding_id: Optional[str] = None,
) -> None:
    """Log structured cash-flow forecast outcome"""
    logging.info(
        "Forecast completed",
        extra={
            "request_id": request_id,
            "wedding_id": wedding_id,
            "step": "forecast_complete",
            "contract_count": contract_count,
            "scheduled_payments": scheduled_payments,
            "malformed_contracts": malformed_contracts,
        },
    )


def log_budget_applied(request_id: str, wedding_id: str, total_budget: int) -> None:
    """Log the budget pushed to the wedding record"""
    logging.info(
        "Budget applied",
        extra={
            "request_id": request_id,
            "wedding_id": wedding_id,
            "step": "budget_applied",
            "total_budget": total_budget,
        },
    )


def log_catalog_seeded(request_id: str, added: int, total: int) -> None:
    """Log built-in ceremony templates loaded into the database"""
    logging.info(
        "Catalog seeded",
        extra={
            "request_id": request_id,
            "step": "catalog_seeded",
            "added": added,
            "total": total,
        },
    )
