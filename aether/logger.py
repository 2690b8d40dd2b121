"""Levelled logging with key/value fields and pipeline event helpers."""

from __future__ import annotations

import sys
import time
from datetime import timedelta
from enum import IntEnum
from typing import Any, Callable, TextIO, TypeVar

T = TypeVar("T")


class LogLevel(IntEnum):
    """Severity of a log message; higher is more severe."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3


class Logger:
    """Writes timestamped lines at or above a minimum level."""

    def __init__(self, level: LogLevel = LogLevel.INFO, stream: TextIO | None = None):
        self.level = level
        self._stream = stream

    def debug(self, message: str, *args: Any) -> None:
        self._log(LogLevel.DEBUG, message, args)

    def info(self, message: str, *args: Any) -> None:
        self._log(LogLevel.INFO, message, args)

    def warn(self, message: str, *args: Any) -> None:
        self._log(LogLevel.WARN, message, args)

    def error(self, message: str, *args: Any) -> None:
        self._log(LogLevel.ERROR, message, args)

    def set_level(self, level: LogLevel) -> None:
        self.level = level

    def _log(self, level: LogLevel, message: str, fields: tuple[Any, ...]) -> None:
        if self.level > level:
            return
        fields_str = ""
        if fields:
            fields_str = " | [" + " ".join(str(f) for f in fields) + "]"
        stamp = time.strftime("%Y/%m/%d %H:%M:%S")
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(f"{stamp} [{level.name}] {message}{fields_str}\n")
        stream.flush()


def parse_log_level(level_str: str) -> LogLevel:
    """Map 'debug', 'info', 'warn' or 'error' to a level; anything else is INFO."""
    return {
        "debug": LogLevel.DEBUG,
        "info": LogLevel.INFO,
        "warn": LogLevel.WARN,
        "error": LogLevel.ERROR,
    }.get(level_str, LogLevel.INFO)


def log_operation(logger: Logger, operation: str, fn: Callable[[], T]) -> T:
    """Run ``fn``, logging its start, outcome and duration; errors propagate."""
    logger.info(f"Starting: {operation}")
    start = time.monotonic()
    try:
        result = fn()
    except Exception as err:
        duration = timedelta(seconds=time.monotonic() - start)
        logger.error(f"Failed: {operation}", "duration", duration, "error", err)
        raise
    duration = timedelta(seconds=time.monotonic() - start)
    logger.info(f"Completed: {operation}", "duration", duration)
    return result


def log_retry(
    logger: Logger, operation: str, attempt: int, max_attempts: int, err: Any
) -> None:
    """Log a retry attempt; line breaks are stripped from the operation name."""
    safe_operation = operation.replace("\n", "").replace("\r", "")
    logger.warn(
        f"Retry attempt {attempt + 1}/{max_attempts} for: {safe_operation}",
        "error",
        err,
    )


def log_step_start(logger: Logger, step_name: str, job_id: str) -> None:
    logger.info("Step started", "step", step_name, "job_id", job_id)


def log_step_complete(
    logger: Logger, step_name: str, job_id: str, files_processed: int, duration: Any
) -> None:
    logger.info(
        "Step completed",
        "step", step_name,
        "job_id", job_id,
        "files", files_processed,
        "duration", duration,
    )


def log_step_failed(
    logger: Logger, step_name: str, job_id: str, err: Any, retryable: bool
) -> None:
    logger.error(
        "Step failed",
        "step", step_name,
        "job_id", job_id,
        "error", err,
        "retryable", str(retryable).lower(),
    )


def log_job_created(logger: Logger, job_id: str, input_source: str) -> None:
    logger.info("Job created", "job_id", job_id, "input_source", input_source)


def log_job_completed(
    logger: Logger, job_id: str, total_files: int, duration: Any
) -> None:
    logger.info(
        "Job completed",
        "job_id", job_id,
        "total_files", total_files,
        "duration", duration,
    )


def log_service_call(logger: Logger, service: str, endpoint: str, method: str) -> None:
    logger.debug(
        "Service call", "service", service, "endpoint", endpoint, "method", method
    )


def log_service_response(
    logger: Logger, service: str, status_code: int, duration: Any
) -> None:
    """Responses with status 400 or above are warnings, others debug."""
    emit = logger.warn if status_code >= 400 else logger.debug
    emit("Service response", "service", service, "status", status_code, "duration", duration)