"""
Structured logging configuration.

Use `get_logger` from this module, not print() or logging.getLogger().
"""
from typing import Optional, Any
import structlog
from studygroup_service.config.settings import get_settings
from studygroup_service.api.middleware.request_id import add_request_id_to_log


# Key fragments whose values never reach the log output
SENSITIVE_KEYS = frozenset({
    "password",
    "secret",
    "token",
    "api_key",
    "authorization",
    "credentials",
})

MASK = "****"


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(fragment in lowered for fragment in SENSITIVE_KEYS)


def mask_sensitive_in_dict(data: dict) -> dict:
    """
    Recursively mask values stored under sensitive keys.

    Args:
        data: Dictionary potentially containing secrets

    Returns:
        New dictionary with sensitive values masked

    Example:
        >>> mask_sensitive_in_dict({"nickname": "jordan", "new_password": "hunter22"})
        {'nickname': 'jordan', 'new_password': '****'}
    """
    masked = {}
    for key, value in data.items():
        if isinstance(key, str) and _is_sensitive(key):
            masked[key] = MASK if value else value
        elif isinstance(value, dict):
            masked[key] = mask_sensitive_in_dict(value)
        else:
            masked[key] = value
    return masked


def mask_secrets_processor(logger_obj: Any, method_name: str, event_dict: dict) -> dict:
    """
    Structlog processor that masks sensitive fields.

    Runs after context merging so bound values are covered too.
    """
    return mask_sensitive_in_dict(event_dict)


def console_renderer_with_colors():
    """Console renderer with colors for development."""
    return structlog.dev.ConsoleRenderer(
        colors=True,
        pad_event=25,
        exception_formatter=structlog.dev.plain_traceback,
    )


def json_renderer():
    """JSON renderer for production."""
    return structlog.processors.JSONRenderer()


def configure_logging() -> None:
    """
    Configure structured logging with secret masking and request context.

    This sets up the logging system with:
    - Context variable merging (for bind_contextvars usage)
    - Request ID tracking
    - Automatic masking of passwords, tokens and similar keys
    - JSON formatting for production or colored console for development
    """
    settings = get_settings()

    if settings.log_format == "json":
        renderer = json_renderer()
    else:
        renderer = console_renderer_with_colors()

    processors = [
        structlog.contextvars.merge_contextvars,
        add_request_id_to_log,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        mask_secrets_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger instance with structured logging support.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        BoundLogger instance with all configured processors

    Usage:
        >>> from studygroup_service.infrastructure.observability.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("profile updated", nickname="jordan")
    """
    return structlog.get_logger(name)
