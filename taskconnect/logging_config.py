"""
Logging setup for the TaskConnect API.

JSON logs in production, plain text for local development. Lifecycle
operations are logged through the ``logged_operation`` decorator so the
business rules in the services layer stay free of logging calls.
"""

import functools
import logging
import sys
from datetime import datetime
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from taskconnect.exceptions import LifecycleError, PersistenceError


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps every record with the standard fields."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.utcnow().isoformat() + 'Z'
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName

        if record.levelno >= logging.WARNING:
            log_record['line'] = record.lineno
            log_record['pathname'] = record.pathname


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON output when True, human-readable lines otherwise
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)

    if json_logs:
        formatter = CustomJsonFormatter(
            '%(timestamp)s %(level)s %(logger)s %(module)s %(funcName)s %(message)s'
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    # Driver heartbeat chatter
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("motor").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)


def _principal_id(args, kwargs):
    principal = kwargs.get("principal")
    if principal is None:
        principal = next((a for a in args if hasattr(a, "role")), None)
    return getattr(principal, "id", None)


def logged_operation(name: str):
    """
    Log the outcome of an async lifecycle operation.

    Successful calls log at INFO, rule violations (access denied, not found,
    duplicate application, invalid transition) at WARNING and store failures
    at ERROR. Exceptions are always re-raised unchanged.
    """
    logger = logging.getLogger("taskconnect.lifecycle")

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            principal_id = _principal_id(args[1:], kwargs)
            extra = {"operation": name, "principal": principal_id}
            try:
                result = await func(*args, **kwargs)
            except PersistenceError as e:
                logger.error(f"{name} failed: {e}", extra=extra)
                raise
            except LifecycleError as e:
                logger.warning(f"{name} rejected ({e.kind}): {e}", extra=extra)
                raise
            logger.info(f"{name} succeeded", extra=extra)
            return result

        return wrapper

    return decorator
