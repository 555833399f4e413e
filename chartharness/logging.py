"""Logging helpers for femtologging integration.

Every chartharness module obtains its logger here and emits pre-formatted
messages through the ``log_*`` helpers, so render and evaluation traces
look the same whether they come from the engines, the runner or the CLI.

Example:
>>> from chartharness.logging import get_logger, log_debug
>>> logger = get_logger(__name__)
>>> log_debug(logger, "Rendered %d document(s)", 1)

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Supported log levels for femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Normalize a log level string and report invalid inputs.

    Parameters
    ----------
    level : str | None
        Raw log level string to normalize.

    Returns
    -------
    tuple[str, bool]
        The normalized log level and a flag indicating invalid input.

    """
    if not level:
        return ("INFO", True)

    normalized = level.strip().upper()
    if normalized in LogLevel.__members__:
        return (normalized, False)

    return ("INFO", True)


def configure_logging(level: str, *, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging and return the normalized level.

    Parameters
    ----------
    level : str
        Raw log level string to normalize.
    force : bool, optional
        Whether to replace any existing handler configuration.

    Returns
    -------
    tuple[str, bool]
        The normalized log level and a flag indicating invalid input.

    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def _format_message(template: str, *args: object) -> str:
    """Format a message using percent-style interpolation."""
    return template % args


class _SupportsLog(typ.Protocol):
    """Protocol for femtologging-compatible loggers."""

    def log(self, level: str, message: str, /) -> str | None: ...


def _log_at_level(
    logger: _SupportsLog, level: str, template: str, args: tuple[object, ...]
) -> None:
    logger.log(level, _format_message(template, *args))


def log_debug(logger: _SupportsLog, template: str, *args: object) -> None:
    """Log a DEBUG message; used for per-render and per-case traces."""
    _log_at_level(logger, "DEBUG", template, args)


def log_info(logger: _SupportsLog, template: str, *args: object) -> None:
    """Log an INFO message with percent-style formatting.

    Parameters
    ----------
    logger : _SupportsLog
        Logger that receives the formatted message.
    template : str
        Message template using percent-style placeholders.
    *args : object
        Values to interpolate into the template.

    """
    _log_at_level(logger, "INFO", template, args)


def log_warning(logger: _SupportsLog, template: str, *args: object) -> None:
    """Log a WARNING message, such as a case that failed to render."""
    _log_at_level(logger, "WARNING", template, args)


__all__ = [
    "LogLevel",
    "configure_logging",
    "get_logger",
    "log_debug",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
