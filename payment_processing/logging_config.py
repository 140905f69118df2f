"""
Structured logging configuration.

Uses structlog on top of the standard library so that processor events
(``payment_executed``, ``api_key_rejected``, ...) come out as key/value
records, or as JSON lines when ``json_logs`` is enabled.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from pythonjsonlogger import jsonlogger

from payment_processing.config import get_settings

SENSITIVE_KEYS = ("api_key", "secret", "password", "token")


def add_app_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Add application context to log events.

    Args:
        logger: Logger instance
        method_name: Log method name
        event_dict: Event dictionary

    Returns:
        dict[str, Any]: Enhanced event dictionary
    """
    settings = get_settings()
    event_dict["app_name"] = settings.app_name
    event_dict["app_env"] = settings.app_env
    return event_dict


def mask_sensitive_data(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace credentials with their last four characters."""
    for key in SENSITIVE_KEYS:
        value = event_dict.get(key)
        if value is None:
            continue
        if isinstance(value, str) and len(value) > 4:
            event_dict[key] = f"***{value[-4:]}"
        else:
            event_dict[key] = "***REDACTED***"
    return event_dict


def setup_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configure structlog and the root stdlib logger.

    Log records go to stderr so they never mix with the user-facing
    payment messages on stdout.

    Args:
        level: Log level, defaults to the configured ``log_level``
        json_logs: Emit JSON lines, defaults to the configured ``json_logs``
    """
    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    use_json = settings.json_logs if json_logs is None else json_logs

    # JSON mode hands the event dict to the stdlib record and lets
    # python-json-logger serialize it.
    renderer: Any = (
        structlog.stdlib.render_to_log_kwargs
        if use_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_app_context,
            mask_sensitive_data,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers are module-level; caching would pin them to the first config.
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(
            jsonlogger.JsonFormatter(
                "%(message)s",
                rename_fields={"message": "event"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    logger = get_logger(__name__)
    logger.debug("logging_configured", log_level=log_level, json_logs=use_json)


def get_logger(name: str) -> Any:
    """
    Get a structured logger backed by the stdlib logger ``name``.

    Until ``setup_logging`` runs, events follow whatever stdlib logging the
    host application has set up instead of printing to stdout.

    Args:
        name: Logger name

    Returns:
        Any: Structured logger
    """
    return structlog.wrap_logger(logging.getLogger(name))
