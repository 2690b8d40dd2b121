"""Text formatting for job listings and pipeline status output."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Union

from aether.steps import JobStatus, StepStatus

Duration = Union[timedelta, int, float]

_KB = 1024
_MB = 1024 * _KB
_GB = 1024 * _MB

_JOB_STATUS_SYMBOLS = {
    JobStatus.COMPLETED.value: "✓",
    JobStatus.IN_PROGRESS.value: "→",
    JobStatus.FAILED.value: "✗",
    JobStatus.PENDING.value: "○",
}

_STEP_STATUS_SYMBOLS = {
    StepStatus.COMPLETED.value: "✓",
    StepStatus.IN_PROGRESS.value: "→",
    StepStatus.FAILED.value: "✗",
    StepStatus.PENDING.value: " ",
}


def _total_seconds(duration: Duration) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


def format_duration(duration: Duration) -> str:
    """Render an age compactly in whole seconds, minutes, hours or days.

    ``duration`` is a timedelta or a number of seconds. Values are truncated,
    never rounded up.
    """
    seconds = _total_seconds(duration)
    if seconds < 60:
        return f"{int(seconds)}s"
    if seconds < 3600:
        return f"{int(seconds / 60)}m"
    if seconds < 24 * 3600:
        return f"{int(seconds / 3600)}h"
    return f"{int(seconds / 3600 / 24)}d"


def format_bytes(size: int) -> str:
    """Render a byte count with two decimals in KB, MB or GB, or plain bytes."""
    if size >= _GB:
        return f"{size / _GB:.2f} GB"
    if size >= _MB:
        return f"{size / _MB:.2f} MB"
    if size >= _KB:
        return f"{size / _KB:.2f} KB"
    return f"{size} B"


def job_status_symbol(status: str) -> str:
    """Return the symbol shown for a job status; unknown statuses get a blank."""
    return _JOB_STATUS_SYMBOLS.get(str(status), " ")


def step_status_symbol(status: str) -> str:
    """Return the symbol shown for a step status; pending and unknown are blank."""
    return _STEP_STATUS_SYMBOLS.get(str(status), " ")


def is_step_enabled(enabled_steps: Iterable[str], step_name: str) -> bool:
    """True if ``step_name`` is among the configured enabled steps."""
    return any(enabled == step_name for enabled in enabled_steps)