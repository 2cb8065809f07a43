import logging
from functools import partial
from typing import Callable

from gbfs_exporter.config import Settings

LOG_FORMAT = "%(asctime)s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def _ensure_logging_configured() -> None:
    if logging.getLogger().handlers:
        return
    level = logging.getLevelName(Settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def get_logger(name: str) -> logging.Logger:
    _ensure_logging_configured()
    return logging.getLogger(name)


def _format_fields(fields: dict[str, object]) -> str:
    return " ".join(f"{key}={value}" for key, value in fields.items())


def log_event(logger: logging.Logger, event: str, **fields: object) -> None:
    if not Settings.ingest_log:
        return
    logger.info("%-8s %s", event.upper(), _format_fields(fields))


def log_failure(
    logger: logging.Logger, event: str, exc: BaseException, **fields: object
) -> None:
    # Failures are logged even when event logging is off
    fields["error_type"] = type(exc).__name__
    fields["error"] = exc
    logger.warning("%-8s %s", event.upper(), _format_fields(fields))


def get_event_logger(name: str) -> Callable[..., None]:
    logger = get_logger(name)
    return partial(log_event, logger)


def get_failure_logger(name: str) -> Callable[..., None]:
    logger = get_logger(name)
    return partial(log_failure, logger)
