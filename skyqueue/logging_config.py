"""
SKYQUEUE Logging Configuration

Centralized logging for the simulator. All loggers live under the
``skyqueue`` namespace so one call to setup_logging() configures the
engine, the services and the headless runner together.

Usage:
    from skyqueue.logging_config import setup_logging, get_logger

    setup_logging(log_level="INFO", log_file="skyqueue.log")

    logger = get_logger(__name__)
    logger.info("Night started", extra={"night": 0})

    # Tag every record of a simulated week with one id
    with correlation_context(prefix="week"):
        orchestrator.run_week()
"""

import logging
import sys
import time
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Generator, Optional

ROOT_LOGGER_NAME = "skyqueue"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FORMAT_WITH_CORRELATION = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# =============================================================================
# Correlation ID Support
# =============================================================================

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Inject the current correlation id (or "-") into every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"
        return True


def get_correlation_id() -> Optional[str]:
    """Return the correlation id of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> None:
    """Set the correlation id for the current context.

    Prefer correlation_context(), which restores the previous value.
    """
    _correlation_id.set(correlation_id)


def generate_correlation_id(prefix: str = "sq") -> str:
    """Generate an id such as ``week-1a2b3c4d``."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


@contextmanager
def correlation_context(
    correlation_id: Optional[str] = None,
    prefix: str = "sq",
) -> Generator[str, None, None]:
    """Run a block with a correlation id, generating one when none is given.

    Args:
        correlation_id: Id to use, or None to generate one
        prefix: Prefix for generated ids

    Yields:
        The correlation id in effect inside the block.
    """
    cid = correlation_id or generate_correlation_id(prefix)
    token = _correlation_id.set(cid)
    try:
        yield cid
    finally:
        _correlation_id.reset(token)


# =============================================================================
# Setup
# =============================================================================


def _make_handler(
    handler: logging.Handler,
    level: int,
    enable_correlation: bool,
) -> logging.Handler:
    log_format = (
        DEFAULT_LOG_FORMAT_WITH_CORRELATION if enable_correlation else DEFAULT_LOG_FORMAT
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, DEFAULT_DATE_FORMAT))
    # On the handler, not the logger: records from child loggers skip logger filters
    if enable_correlation:
        handler.addFilter(CorrelationIdFilter())
    return handler


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str | Path] = None,
    enable_correlation: bool = True,
) -> None:
    """Configure the ``skyqueue`` logger tree.

    Installs a stdout handler and, when log_file is given, a rotating file
    handler. Safe to call again: existing handlers are replaced.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: Optional path for a rotating log file
        enable_correlation: Include the correlation id in every line
    """
    level = LOG_LEVELS.get(log_level.upper(), logging.INFO)

    tree = logging.getLogger(ROOT_LOGGER_NAME)
    tree.setLevel(level)
    tree.handlers.clear()
    tree.addHandler(
        _make_handler(logging.StreamHandler(sys.stdout), level, enable_correlation)
    )

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            path, maxBytes=DEFAULT_MAX_BYTES, backupCount=DEFAULT_BACKUP_COUNT
        )
        tree.addHandler(_make_handler(rotating, level, enable_correlation))


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``skyqueue`` namespace.

    ``services.weather.engine`` becomes ``skyqueue.services.weather.engine``,
    so set_service_level("weather") reaches it.
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_service_level(service_name: str, level: str) -> None:
    """Set the level of one service package (catalog, scoring, weather, leaderboard)."""
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.services.{service_name}")
    logger.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))


# =============================================================================
# Convenience Helpers
# =============================================================================


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """Log an exception with its type, message and optionally the traceback."""
    exc_type = type(exc).__name__
    extra = {"exception_type": exc_type, "exception_message": str(exc)}

    if include_traceback:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        extra["traceback"] = tb
        logger.log(level, f"{message}: [{exc_type}] {exc}\n{tb}", extra=extra)
    else:
        logger.log(level, f"{message}: [{exc_type}] {exc}", extra=extra)


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    warn_threshold_sec: Optional[float] = None,
) -> Generator[None, None, None]:
    """Log how long a block took, warning above warn_threshold_sec."""
    start_time = time.perf_counter()
    logger.log(level, f"{operation} started")

    try:
        yield
    finally:
        elapsed = time.perf_counter() - start_time
        extra = {"operation": operation, "elapsed_seconds": round(elapsed, 3)}

        if warn_threshold_sec is not None and elapsed > warn_threshold_sec:
            logger.warning(
                f"{operation} completed in {elapsed:.3f}s "
                f"(exceeded {warn_threshold_sec}s threshold)",
                extra=extra,
            )
        else:
            logger.log(level, f"{operation} completed in {elapsed:.3f}s", extra=extra)
