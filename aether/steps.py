"""Pipeline step names and the status values of steps and jobs."""

from __future__ import annotations

from enum import Enum


class StepName(str, Enum):
    """A step of the data use process pipeline."""

    IMPORT = "import"
    DIMP = "dimp"
    VALIDATION = "validation"
    CSV_CONVERSION = "csv_conversion"
    PARQUET_CONVERSION = "parquet_conversion"

    def __str__(self) -> str:
        return self.value


class StepStatus(str, Enum):
    """Execution state of a single pipeline step."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class JobStatus(str, Enum):
    """Execution state of a whole pipeline job."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


def parse_step_name(step: str) -> StepName:
    """Return the step named by ``step``; raise ValueError for unknown names."""
    try:
        return StepName(step)
    except ValueError:
        valid = ", ".join(name.value for name in StepName)
        raise ValueError(
            f"invalid step name '{step}'. Valid steps: {valid}"
        ) from None