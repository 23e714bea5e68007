# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up a smart logging system that records what happens in the marketplace in a structured way,
# so every order, payment and status change can be traced back to the request that caused it.

# 🧪 Purpose (Technical Summary):
# Structured logging with python-json-logger, request-scoped context (request id, user id)
# carried in contextvars and stamped onto every record, and helpers for business events.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (setup), app.api.middleware.logging (request context),
# order/payment services (business events), error handling middleware

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Optional
from uuid import uuid4

from pythonjsonlogger import jsonlogger

from app.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

_logging_configured = False

SERVICE_NAME = 'food-delivery-api'


class RequestContextFilter(logging.Filter):
    """
    Stamps request ID, user ID and service name onto every log record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.service = SERVICE_NAME
        return True


class JSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for structured logging.

    Renames the standard attributes to the field names log aggregation
    expects and drops empty context values.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        for key in ('request_id', 'user_id'):
            if not log_record.get(key):
                log_record.pop(key, None)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Logging level name, defaults to settings.LOG_LEVEL
        log_format: 'json' or 'text', defaults to settings.LOG_FORMAT
        enable_console: Attach a stdout handler

    Returns:
        logging.Logger: The startup logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter: logging.Formatter = JSONFormatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s %(user_id)s %(service)s',
            timestamp=True,
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(RequestContextFilter())
        root_logger.addHandler(console_handler)

    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(request_id: Optional[str] = None, user_id: Optional[str] = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier (generated when omitted)
        user_id: User identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {'request_id': request_id, 'user_id': user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)


def bind_user(user_id: str) -> None:
    """Attach the authenticated user to the current request's log context."""
    user_id_var.set(user_id)


def log_business_event(
    logger: logging.Logger,
    event_type: str,
    description: str,
    entity_id: Optional[str] = None,
    entity_type: Optional[str] = None,
    **fields: Any
) -> None:
    """
    Log a business event (order placed, settled, payment captured...) for analytics.

    Args:
        logger: Module logger to emit on
        event_type: Machine-readable event name
        description: Human readable message
        entity_id: Affected aggregate id
        entity_type: Affected aggregate type
        **fields: Extra structured fields
    """
    extra = {
        'event_type': 'business_event',
        'business_event_type': event_type,
        **fields,
    }
    if entity_id:
        extra['entity_id'] = entity_id
    if entity_type:
        extra['entity_type'] = entity_type

    logger.info(description, extra=extra)
