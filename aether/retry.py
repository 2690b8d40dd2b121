"""Exponential backoff and retry decisions for transient failures."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Callable, TypeVar

T = TypeVar("T")

_NETWORK_ERROR_PATTERNS = (
    "connection refused",
    "connection reset",
    "no such host",
    "timeout",
    "temporary failure",
    "network is unreachable",
    "deadline exceeded",
    "EOF",
)

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


class ErrorType(str, Enum):
    """Whether a failure may go away on its own."""

    TRANSIENT = "transient"
    NON_TRANSIENT = "non_transient"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RetryConfig:
    """Parameters of the retry strategy."""

    max_attempts: int = 5
    initial_backoff_ms: int = 1000
    max_backoff_ms: int = 30000


class NonRetryableError(Exception):
    """An operation failed with an error that must not be retried."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"non-retryable error: {cause}")
        self.cause = cause


class RetriesExhaustedError(Exception):
    """An operation kept failing until every attempt was used up."""

    def __init__(self, attempts: int, cause: BaseException | None) -> None:
        super().__init__(f"operation failed after {attempts} attempts: {cause}")
        self.attempts = attempts
        self.cause = cause


def calculate_backoff(
    attempt: int, initial_backoff_ms: int, max_backoff_ms: int
) -> timedelta:
    """Return ``min(initial * 2**attempt, max)`` milliseconds as a timedelta."""
    attempt = max(attempt, 0)
    backoff_ms = min(float(initial_backoff_ms) * 2.0 ** attempt, float(max_backoff_ms))
    return timedelta(milliseconds=int(backoff_ms))


def should_retry(error_type: ErrorType, current_retries: int, max_retries: int) -> bool:
    """Only transient errors are retried, and only while retries remain."""
    if error_type is not ErrorType.TRANSIENT:
        return False
    return current_retries < max_retries


def is_transient_http_status(status_code: int) -> bool:
    """Server errors, timeouts and rate limiting are worth retrying."""
    return status_code >= 500 or status_code in (408, 429)


def classify_http_error(status_code: int) -> ErrorType:
    """Classify an HTTP status as transient or non-transient."""
    if is_transient_http_status(status_code):
        return ErrorType.TRANSIENT
    return ErrorType.NON_TRANSIENT


def execute_with_retry(
    operation: Callable[[], T],
    config: RetryConfig,
    should_retry: Callable[[BaseException], bool],
) -> T:
    """Run ``operation`` with exponential backoff between failed attempts.

    Returns the operation's result on success. Raises NonRetryableError as
    soon as ``should_retry`` rejects an error, and RetriesExhaustedError once
    all attempts have failed.
    """
    last_error: BaseException | None = None
    for attempt in range(config.max_attempts):
        try:
            return operation()
        except Exception as err:  # noqa: BLE001 - classified by the caller
            last_error = err
            if not should_retry(err):
                raise NonRetryableError(err) from err
            if attempt == config.max_attempts - 1:
                break
            backoff = calculate_backoff(
                attempt, config.initial_backoff_ms, config.max_backoff_ms
            )
            time.sleep(backoff.total_seconds())
    raise RetriesExhaustedError(config.max_attempts, last_error) from last_error


def is_network_error(err: BaseException | None) -> bool:
    """Guess from its message whether an error is a transient network problem."""
    if err is None:
        return False
    message = str(err)
    return any(contains_ignore_case(message, p) for p in _NETWORK_ERROR_PATTERNS)


def contains_ignore_case(s: str, substr: str) -> bool:
    """Substring test that ignores ASCII letter case."""
    return substr.translate(_ASCII_LOWER) in s.translate(_ASCII_LOWER)