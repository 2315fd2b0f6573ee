"""Loguru setup for the GitHub REST client.

The library itself only emits DEBUG traces (one per completed call, bound
with the HTTP method and path); failures are raised, not logged.
Applications embedding the client call ``setup_logging`` once to choose
where those traces go:

    from github_rest.logging import setup_logging
    setup_logging("DEBUG", log_file=Path("github.log"))

httpx and httpcore log through the standard library; their records are
forwarded into loguru so one configuration governs everything.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger, Record

    from github_rest.config import LoggingConfig

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Standard library loggers forwarded into loguru
HTTP_LOGGERS = ("httpx", "httpcore")

_configured = False

_CONSOLE_FORMAT = (
    "<dim>{time:HH:mm:ss}</dim> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - "
    "<level>{message}</level>"
)

_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[name]}:{function}:{line} | {extra} | {message}"
)


class InterceptHandler(logging.Handler):
    """Forward standard library records to loguru at the caller's depth."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(name=record.name).log(
            level, record.getMessage()
        )


def _has_name(record: Record) -> bool:
    return "name" in record["extra"]


def _effective_level(level: LogLevel, verbose: bool, quiet: bool) -> LogLevel:
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return level


def setup_logging(
    level: LogLevel = "INFO",
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> Logger:
    """Install console (and optional rotating file) sinks.

    Args:
        level: Console level
        verbose: Force DEBUG; wins over quiet
        quiet: Force WARNING
        log_file: Also write DEBUG and above to this file
        rotation: Size or age at which the file rotates
        retention: How long rotated files are kept
        serialize: Write the file as JSON lines

    Returns:
        The configured loguru logger
    """
    global _configured

    console_level = _effective_level(level, verbose, quiet)

    logger.remove()
    logger.add(
        sys.stderr,
        level=console_level,
        format=_CONSOLE_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=False,
        filter=_has_name,
    )
    # Records logged without get_logger() (no "name" extra)
    logger.add(
        sys.stderr,
        level=console_level,
        format=_CONSOLE_FORMAT.replace("{extra[name]}", "{name}"),
        colorize=True,
        diagnose=False,
        filter=lambda record: not _has_name(record),
    )

    if log_file is not None:
        logger.add(
            log_file,
            level="DEBUG",
            format=_FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
            serialize=serialize,
            filter=_has_name,
        )

    _route_http_loggers(console_level)

    _configured = True
    return logger


def setup_logging_from_config(level: LogLevel, config: LoggingConfig) -> Logger:
    """Configure logging from the ``logging`` section of Settings."""
    return setup_logging(
        level,
        log_file=Path(config.log_file) if config.log_file else None,
        rotation=config.rotation,
        retention=config.retention,
        serialize=config.serialize,
    )


def _route_http_loggers(level: LogLevel) -> None:
    """Send stdlib logging through loguru; HTTP libraries speak only at DEBUG."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    http_level = logging.DEBUG if level in ("TRACE", "DEBUG") else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> Logger:
    """Logger carrying ``name`` (usually ``__name__``) as context."""
    return logger.bind(name=name)


def bind_repo(owner: str, repo: str) -> Logger:
    """Logger for a repository-scoped service, tagged ``repo=owner/name``."""
    return logger.bind(name="github_rest.services", repo=f"{owner}/{repo}")


def bind_request(method: str, path: str) -> Logger:
    """Logger for one HTTP call, tagged with its method and URL path."""
    return logger.bind(name="github_rest.client", method=method, path=path)


class LogContext:
    """Attach extra fields to every record logged inside a ``with`` block.

    Usage:
        with LogContext(release="v1.0.0"):
            client.repo("octocat", "Hello-World").releases.upload_asset(...)
    """

    def __init__(self, **fields: Any) -> None:
        self._fields = fields
        self._cm: Any = None

    def __enter__(self) -> Logger:
        self._cm = logger.contextualize(**self._fields)
        self._cm.__enter__()
        return logger

    def __exit__(self, *exc_info: Any) -> None:
        if self._cm is not None:
            self._cm.__exit__(*exc_info)
            self._cm = None


def is_configured() -> bool:
    return _configured


def reset_logging() -> None:
    """Drop every sink and forget setup_logging() was called (for tests)."""
    global _configured
    logger.remove()
    _configured = False
