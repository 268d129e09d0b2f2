"""
hierview.log - Logging module with proper Python exception handling.

Usage:
    from hierview import log

    log.info("Hierarchy rebuilt")
    log.warn("Entity has no name")

    try:
        graph.name_of(entity)
    except Exception as e:
        log.warn(e, "Name lookup failed")  # includes traceback
"""

import logging
import traceback

_logger = logging.getLogger("hierview")


class Level:
    """Log levels understood by set_level()."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


def debug(msg_or_exc, context: str = ""):
    """Log debug message or exception with context."""
    _dispatch(_logger.debug, msg_or_exc, context)


def info(msg_or_exc, context: str = ""):
    """Log info message or exception with context."""
    _dispatch(_logger.info, msg_or_exc, context)


def warn(msg_or_exc, context: str = ""):
    """Log warning message or exception with context."""
    _dispatch(_logger.warning, msg_or_exc, context)


def warning(msg_or_exc, context: str = ""):
    """Alias for warn()."""
    warn(msg_or_exc, context)


def error(msg_or_exc, context: str = ""):
    """Log error message or exception with context."""
    _dispatch(_logger.error, msg_or_exc, context)


def exception(msg: str = ""):
    """Log error with current exception traceback."""
    _logger.exception(msg)


def set_level(level: int) -> None:
    """Set minimum level for hierview messages."""
    _logger.setLevel(level)


def _dispatch(log_func, msg_or_exc, context: str):
    if isinstance(msg_or_exc, BaseException):
        _log_exception(log_func, msg_or_exc, context)
    elif context:
        log_func(f"{context}: {msg_or_exc}")
    else:
        log_func(str(msg_or_exc))


def _log_exception(log_func, exc: BaseException, context: str):
    """Format and log exception with traceback."""
    exc_type = type(exc).__name__
    exc_msg = str(exc)

    # Get traceback if available
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    if context:
        full_msg = f"{context}: {exc_type}: {exc_msg}\n{tb}"
    else:
        full_msg = f"{exc_type}: {exc_msg}\n{tb}"

    log_func(full_msg)
