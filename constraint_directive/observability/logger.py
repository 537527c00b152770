"""
Structured JSON logging for constraint-directive

Every module logs through ``get_logger(__name__)``. Module loggers propagate
to one package logger, configured once with python-json-logger, that writes
to stderr so command output on stdout stays machine readable.

Environment:
    LOG_LEVEL: DEBUG, INFO (default), WARNING, ERROR or CRITICAL
    LOG_FORMAT: json (default) or text
"""
import logging
import os
import sys
import time

from pythonjsonlogger.json import JsonFormatter

PACKAGE_LOGGER = "constraint_directive"

JSON_FORMAT = "%(timestamp)s %(level)s %(logger)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Extra fields promoted to top-level keys when present on a record
CONTEXT_FIELDS = ("field_name", "kind", "type_name", "operation")


class ConstraintJsonFormatter(JsonFormatter):
    """
    JSON formatter for validation logs

    Every record gets timestamp, level and logger keys; field_name, kind,
    type_name and operation are copied over when a caller passed them in
    ``extra``.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = log_record.get("timestamp") or self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record.update(
            (key, getattr(record, key))
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        )


def resolve_level(level: str | None) -> int:
    """Map a level name (or LOG_LEVEL) onto a logging level, INFO when unknown."""
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Attach a single stderr handler to a logger

    Calling it again replaces the handler, so it is safe to reconfigure.

    Args:
        name: Logger name
        level: Level name (defaults to LOG_LEVEL, then INFO)
        format_type: "json" or "text" (defaults to LOG_FORMAT, then json)

    Returns:
        The configured logger
    """
    log_level = resolve_level(level)
    use_json = (format_type or os.getenv("LOG_FORMAT", "json")) == "json"

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        ConstraintJsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
        if use_json
        else logging.Formatter(fmt=TEXT_FORMAT)
    )

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Return a module logger, configuring the package logger on first use

    Args:
        name: Usually the calling module's ``__name__``
    """
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        setup_logger(PACKAGE_LOGGER)
    return logging.getLogger(name)


class log_operation:
    """
    Context manager logging the start and outcome of an operation

    The closing record carries ``duration_seconds`` and ``status``; errors
    are logged and re-raised.

    Usage:
        with log_operation("Validating payloads", logger=logger, count=3):
            ...
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.started = 0.0

    def _extra(self, **fields) -> dict:
        return {"operation": self.operation_name, **fields, **self.extra_fields}

    def __enter__(self):
        self.started = time.perf_counter()
        self.logger.info(f"Starting: {self.operation_name}", extra=self._extra())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = round(time.perf_counter() - self.started, 6)

        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra=self._extra(duration_seconds=duration, status="success"),
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra=self._extra(
                    duration_seconds=duration,
                    status="error",
                    error_type=exc_type.__name__,
                    error_message=str(exc_val),
                ),
            )
        return False
