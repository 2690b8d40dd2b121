from datetime import timedelta

import pytest

from aether.retry import (
    ErrorType,
    NonRetryableError,
    RetriesExhaustedError,
    RetryConfig,
    calculate_backoff,
    classify_http_error,
    contains_ignore_case,
    execute_with_retry,
    is_network_error,
    is_transient_http_status,
    should_retry,
)


@pytest.mark.parametrize(
    "error_type, retry_count, max_attempts, expected",
    [
        (ErrorType.TRANSIENT, 0, 5, True),
        (ErrorType.TRANSIENT, 4, 5, True),
        (ErrorType.TRANSIENT, 5, 5, False),
        (ErrorType.NON_TRANSIENT, 0, 5, False),
        (ErrorType.TRANSIENT, 2, 5, True),
    ],
)
def test_should_retry(error_type, retry_count, max_attempts, expected):
    assert should_retry(error_type, retry_count, max_attempts) is expected


@pytest.mark.parametrize(
    "attempt, initial, maximum, expected_ms",
    [
        (0, 1000, 30000, 1000),
        (1, 1000, 30000, 2000),
        (2, 1000, 30000, 4000),
        (3, 1000, 30000, 8000),
        (10, 1000, 30000, 30000),
    ],
)
def test_calculate_backoff(attempt, initial, maximum, expected_ms):
    assert calculate_backoff(attempt, initial, maximum) == timedelta(
        milliseconds=expected_ms
    )


def test_negative_attempt_treated_as_zero():
    assert calculate_backoff(-3, 1000, 30000) == calculate_backoff(0, 1000, 30000)


@pytest.mark.parametrize("status", [500, 502, 503, 504])
def test_server_errors_are_transient(status):
    assert is_transient_http_status(status)
    assert classify_http_error(status) is ErrorType.TRANSIENT


@pytest.mark.parametrize("status", [400, 422])
def test_client_errors_are_not_transient(status):
    assert not is_transient_http_status(status)
    assert classify_http_error(status) is ErrorType.NON_TRANSIENT


def test_execute_with_retry_succeeds_after_failures(monkeypatch):
    delays = []
    monkeypatch.setattr("time.sleep", delays.append)
    calls = []

    def operation():
        calls.append(1)
        if len(calls) < 3:
            raise ConnectionError("connection refused")
        return "done"

    config = RetryConfig(max_attempts=5, initial_backoff_ms=1000, max_backoff_ms=30000)
    assert execute_with_retry(operation, config, lambda err: True) == "done"
    assert len(calls) == 3
    assert delays == [1.0, 2.0]


def test_execute_with_retry_stops_on_non_retryable(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda seconds: None)
    calls = []
    failure = ValueError("bad data")

    def operation():
        calls.append(1)
        raise failure

    with pytest.raises(NonRetryableError) as excinfo:
        execute_with_retry(operation, RetryConfig(max_attempts=3), lambda err: False)
    assert len(calls) == 1
    assert excinfo.value.cause is failure
    assert "non-retryable error" in str(excinfo.value)


def test_execute_with_retry_exhausts_attempts(monkeypatch):
    delays = []
    monkeypatch.setattr("time.sleep", delays.append)
    calls = []

    def operation():
        calls.append(1)
        raise TimeoutError("timeout")

    config = RetryConfig(max_attempts=3, initial_backoff_ms=10, max_backoff_ms=100)
    with pytest.raises(RetriesExhaustedError) as excinfo:
        execute_with_retry(operation, config, is_network_error)
    assert len(calls) == 3
    assert len(delays) == 2
    assert excinfo.value.attempts == 3
    assert "operation failed after 3 attempts" in str(excinfo.value)


@pytest.mark.parametrize(
    "message",
    [
        "dial tcp: connection refused",
        "read: Connection Reset by peer",
        "context deadline exceeded",
        "unexpected EOF",
        "lookup foo: no such host",
    ],
)
def test_is_network_error_matches(message):
    assert is_network_error(RuntimeError(message))


def test_is_network_error_rejects_other_errors():
    assert not is_network_error(RuntimeError("invalid json"))
    assert not is_network_error(None)


def test_contains_ignore_case():
    assert contains_ignore_case("Connection REFUSED", "connection refused")
    assert contains_ignore_case("anything", "")
    assert not contains_ignore_case("short", "much longer text")