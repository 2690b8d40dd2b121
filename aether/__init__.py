"""Building blocks for FHIR Data Use Process pipelines: steps, retry, errors, NDJSON and display."""

__version__ = "1.0.0"

__all__ = [
    "display",
    "errors",
    "fhir",
    "fileinfo",
    "logger",
    "retry",
    "steps",
    "validation",
]