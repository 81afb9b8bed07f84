"""
Logging for the Catapult SDK.

The SDK logs through structlog under the ``catapult.*`` logger names and
leaves output configuration to the application, unless it calls
:func:`setup_logging` (directly or through ``Client.from_config``).
A correlation id set by the caller is attached to every event logged while
it is active, tying API requests back to the caller's own operation.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from structlog.types import EventDict


correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """structlog processor copying the active correlation id into the event."""
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Tag the API calls made from the current context with a correlation id.

    Args:
        correlation_id: Id to use, e.g. the id of an inbound webhook or web
            request. A random UUID is generated when omitted.

    Returns:
        The correlation id now in effect
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    correlation_id_var.set(None)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Route SDK log events to stderr or a file.

    Replaces the handlers of the root logger. API requests are logged at
    DEBUG, rejected requests and transport failures at ERROR.

    Args:
        level: Log level name; unknown names fall back to INFO.
        log_file: Optional log file (parent directories are created).
        json_format: One JSON object per line, or colored console output.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    root_logger.handlers.clear()

    handler: logging.Handler
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    # structlog renders the whole line
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named ``catapult.<name>`` (``__name__`` is used as is)."""
    if not name.startswith("catapult"):
        name = f"catapult.{name}"
    return structlog.get_logger(name)


# API request events

def log_api_request(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    status_code: int,
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """
    Log a completed API request.

    The url is logged as built; credentials travel in headers and are never
    part of the logged event.

    Args:
        logger: Logger instance
        method: HTTP method
        url: Fully qualified request url
        status_code: HTTP status code of the response
        duration_ms: Round-trip duration in milliseconds
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "api_request",
        "method": method,
        "url": url,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }

    log_data.update(kwargs)

    logger.debug("api_request", **log_data)


def log_api_error(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    status_code: int,
    code: Optional[str] = None,
    message: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log an API request that the server rejected.

    Args:
        logger: Logger instance
        method: HTTP method
        url: Fully qualified request url
        status_code: HTTP status code of the response
        code: Error code reported by the API
        message: Error message reported by the API
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "api_error",
        "method": method,
        "url": url,
        "status_code": status_code,
    }

    if code is not None:
        log_data["code"] = code
    if message is not None:
        log_data["message"] = message

    log_data.update(kwargs)

    logger.error("api_error", **log_data)
