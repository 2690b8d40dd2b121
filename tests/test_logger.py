import io
from datetime import datetime

import pytest

from aether.logger import (
    LogLevel,
    Logger,
    log_job_completed,
    log_job_created,
    log_operation,
    log_retry,
    log_service_call,
    log_service_response,
    log_step_complete,
    log_step_failed,
    log_step_start,
    parse_log_level,
)


def make_logger(level=LogLevel.DEBUG):
    stream = io.StringIO()
    return Logger(level, stream), stream


def test_line_format_has_timestamp_level_and_fields():
    logger, stream = make_logger()
    logger.info("hello", "job_id", "abc")
    line = stream.getvalue()
    assert line[19:] == " [INFO] hello | [job_id abc]\n"
    stamp = datetime.strptime(line[:19], "%Y/%m/%d %H:%M:%S")
    assert stamp.year >= 2000


def test_message_without_fields_has_no_separator():
    logger, stream = make_logger()
    logger.warn("plain")
    assert stream.getvalue().endswith("[WARN] plain\n")


def test_level_filtering():
    logger, stream = make_logger(LogLevel.WARN)
    logger.debug("d")
    logger.info("i")
    assert stream.getvalue() == ""
    logger.error("e")
    assert "[ERROR] e" in stream.getvalue()


def test_set_level_changes_filtering():
    logger, stream = make_logger(LogLevel.ERROR)
    logger.info("hidden")
    logger.set_level(LogLevel.DEBUG)
    logger.debug("shown")
    output = stream.getvalue()
    assert "hidden" not in output
    assert "[DEBUG] shown" in output


@pytest.mark.parametrize(
    "text, level",
    [
        ("debug", LogLevel.DEBUG),
        ("info", LogLevel.INFO),
        ("warn", LogLevel.WARN),
        ("error", LogLevel.ERROR),
        ("verbose", LogLevel.INFO),
        ("", LogLevel.INFO),
    ],
)
def test_parse_log_level(text, level):
    assert parse_log_level(text) is level


def test_log_operation_returns_result_and_logs():
    logger, stream = make_logger()
    assert log_operation(logger, "copy files", lambda: 42) == 42
    output = stream.getvalue()
    assert "Starting: copy files" in output
    assert "Completed: copy files" in output


def test_log_operation_reraises_and_logs_failure():
    logger, stream = make_logger()

    def fail():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        log_operation(logger, "copy files", fail)
    output = stream.getvalue()
    assert "[ERROR] Failed: copy files" in output
    assert "boom" in output


def test_log_retry_strips_line_breaks():
    logger, stream = make_logger()
    log_retry(logger, "fetch\nfake\rline", 0, 3, "timeout")
    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert "Retry attempt 1/3 for: fetchfakeline" in lines[0]
    assert "[WARN]" in lines[0]


def test_step_and_job_events():
    logger, stream = make_logger()
    log_step_start(logger, "import", "job-1")
    log_step_complete(logger, "import", "job-1", 7, "2s")
    log_step_failed(logger, "dimp", "job-1", "Network error", True)
    log_job_created(logger, "job-1", "/data")
    log_job_completed(logger, "job-1", 7, "5s")
    lines = stream.getvalue().splitlines()
    assert len(lines) == 5
    assert "Step started | [step import job_id job-1]" in lines[0]
    assert "Step completed" in lines[1] and "files 7" in lines[1]
    assert "[ERROR] Step failed" in lines[2] and "retryable true" in lines[2]
    assert "input_source /data" in lines[3]
    assert "Job completed" in lines[4] and "total_files 7" in lines[4]


def test_service_response_level_depends_on_status():
    logger, stream = make_logger(LogLevel.INFO)
    log_service_response(logger, "DIMP", 200, "1s")
    log_service_call(logger, "DIMP", "/pseudonymize", "POST")
    assert stream.getvalue() == ""
    log_service_response(logger, "DIMP", 503, "1s")
    output = stream.getvalue()
    assert "[WARN] Service response" in output
    assert "status 503" in output