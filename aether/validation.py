"""Step prerequisites, input source detection and CRTDL checks."""

from __future__ import annotations

import json
import os
from enum import Enum
from typing import Any, Mapping, Union

from aether.steps import StepName, StepStatus

PathLike = Union[str, "os.PathLike[str]"]


class InputType(str, Enum):
    """Kind of source a pipeline imports its data from."""

    LOCAL = "local"
    HTTP = "http"
    TORCH_URL = "torch_url"
    CRTDL = "crtdl"

    def __str__(self) -> str:
        return self.value


class CRTDLError(ValueError):
    """A CRTDL file is unreadable or structurally invalid."""


STEP_PREREQUISITES: dict[StepName, tuple[StepName, ...]] = {
    StepName.IMPORT: (),
    StepName.DIMP: (StepName.IMPORT,),
    StepName.VALIDATION: (StepName.IMPORT,),
    StepName.CSV_CONVERSION: (StepName.IMPORT,),
    StepName.PARQUET_CONVERSION: (StepName.IMPORT,),
}


def validate_step_prerequisites(
    step_statuses: Mapping[str, str], step_name: str
) -> StepName | None:
    """Return the first prerequisite that has not completed, or None.

    ``step_statuses`` maps each step present in the job to its status.
    Prerequisites absent from it are not enabled and therefore ignored.
    """
    for prerequisite in STEP_PREREQUISITES.get(step_name, ()):
        if prerequisite not in step_statuses:
            continue
        if step_statuses[prerequisite] != StepStatus.COMPLETED:
            return prerequisite
    return None


def can_run_step(step_statuses: Mapping[str, str], step_name: str) -> bool:
    """True if every enabled prerequisite of ``step_name`` has completed."""
    return validate_step_prerequisites(step_statuses, step_name) is None


def get_step_dependencies(step_name: str) -> list[StepName]:
    """Return the steps that must complete before ``step_name``."""
    return list(STEP_PREREQUISITES.get(step_name, ()))


def detect_input_type(input_source: str) -> InputType:
    """Work out what kind of source ``input_source`` names."""
    if not input_source:
        raise ValueError("input source cannot be empty")

    if os.path.isdir(input_source):
        return InputType.LOCAL

    if input_source.startswith(("http://", "https://")):
        if "/fhir/extraction/" in input_source or "/fhir/result/" in input_source:
            return InputType.TORCH_URL
        return InputType.HTTP

    if input_source.endswith((".crtdl", ".json")) and is_crtdl_file(input_source):
        return InputType.CRTDL

    return InputType.LOCAL


def _load_json(path: PathLike) -> Any:
    with open(path, "rb") as handle:
        return json.loads(handle.read())


def is_crtdl_file(path: PathLike) -> bool:
    """True if ``path`` holds a JSON object with cohortDefinition and dataExtraction."""
    try:
        data = _load_json(path)
    except (OSError, ValueError):
        return False
    return isinstance(data, dict) and "cohortDefinition" in data and "dataExtraction" in data


def validate_crtdl_syntax(crtdl_path: PathLike) -> dict[str, Any]:
    """Check the structure of a CRTDL file and return its parsed content."""
    try:
        with open(crtdl_path, "rb") as handle:
            raw = handle.read()
    except OSError as err:
        raise CRTDLError(f"failed to read CRTDL file: {err}") from err

    if not raw:
        raise CRTDLError("CRTDL file is empty")

    try:
        crtdl = json.loads(raw)
    except ValueError as err:
        raise CRTDLError(f"invalid JSON: {err}") from err
    if not isinstance(crtdl, dict):
        raise CRTDLError("invalid JSON: expected a JSON object")

    if "cohortDefinition" not in crtdl:
        raise CRTDLError("missing required key: cohortDefinition")
    if "dataExtraction" not in crtdl:
        raise CRTDLError("missing required key: dataExtraction")

    cohort = crtdl["cohortDefinition"]
    if not isinstance(cohort, dict):
        raise CRTDLError("cohortDefinition must be an object")
    if "inclusionCriteria" not in cohort:
        raise CRTDLError("cohortDefinition missing inclusionCriteria")

    extraction = crtdl["dataExtraction"]
    if not isinstance(extraction, dict):
        raise CRTDLError("dataExtraction must be an object")
    if "attributeGroups" not in extraction:
        raise CRTDLError("dataExtraction missing attributeGroups")

    return crtdl