# aether

Building blocks for Data Use Process (DUP) pipelines over medical FHIR data
in NDJSON form: step names and statuses, prerequisite checks between steps,
an exponential-backoff retry policy, user-facing error messages with
guidance, streaming NDJSON reading and writing, input-source detection
(local directory, HTTP URL, TORCH result URL, CRTDL file), and the small
formatters used when showing job tables and status lines.

It has no third-party dependencies and runs on Python 3.10 and later.

## Modules

| Module | What it offers |
| --- | --- |
| `aether.steps` | `StepName`, `StepStatus`, `JobStatus` enums and `parse_step_name`, which raises `ValueError` listing the valid names for an unknown step. |
| `aether.retry` | `RetryConfig`, `ErrorType`, `calculate_backoff`, `should_retry`, `is_transient_http_status`, `classify_http_error`, `execute_with_retry`, `is_network_error`, `contains_ignore_case`; failures raise `NonRetryableError` or `RetriesExhaustedError`. |
| `aether.logger` | `Logger` with `LogLevel` filtering and `set_level`, `parse_log_level`, and event helpers `log_operation`, `log_retry`, `log_step_start`, `log_step_complete`, `log_step_failed`, `log_job_created`, `log_job_completed`, `log_service_call`, `log_service_response`. |
| `aether.errors` | `AetherError` with an `ErrorCategory` and `user_message()`, constructors such as `network_unreachable`, `network_timeout`, `file_not_found`, `service_unavailable`, `service_bad_request`, `job_not_found`, `job_locked`, plus `wrap_error` and `classify_error`. |
| `aether.fileinfo` | `file_exists`, `dir_exists`, `get_file_size`, `get_file_mod_time`; none of them raise. |
| `aether.fhir` | `FHIRResource`, `parse_ndjson_line`, `iter_ndjson`, `iter_ndjson_file`, `write_ndjson_line`, `group_by_resource_type`, `validate_fhir_resource`, `count_resources_in_file`; bad data raises `FHIRError`. |
| `aether.validation` | `InputType`, `detect_input_type`, `is_crtdl_file`, `validate_crtdl_syntax` (raises `CRTDLError`), and the prerequisite checks `validate_step_prerequisites`, `can_run_step`, `get_step_dependencies`. |
| `aether.display` | `format_duration`, `format_bytes`, `job_status_symbol`, `step_status_symbol`, `is_step_enabled`. |

## Examples

### Retrying a flaky call

```python
from aether.retry import RetryConfig, execute_with_retry, is_network_error

config = RetryConfig(max_attempts=5, initial_backoff_ms=1000, max_backoff_ms=30000)

def upload():
    ...  # talk to a service; raise on failure

result = execute_with_retry(upload, config, is_network_error)
```

`execute_with_retry` returns the operation's result. The wait between
attempts is `initial_backoff_ms * 2**attempt`, capped at `max_backoff_ms`.
An error the predicate rejects stops at once with `NonRetryableError`;
running out of attempts raises `RetriesExhaustedError`. `classify_http_error`
treats 5xx, 408 and 429 as transient, and `should_retry` allows a retry only
for transient errors while the retry count is below the maximum.

### Reading and writing FHIR NDJSON

```python
import sys
from aether.fhir import iter_ndjson_file, group_by_resource_type, write_ndjson_line

resources = list(iter_ndjson_file("export/Patient.ndjson"))
by_type = group_by_resource_type(resources)
for resource in by_type.get("Patient", []):
    write_ndjson_line(sys.stdout, resource)
```

Empty lines are skipped. A line that is not a JSON object raises `FHIRError`
naming the line number, and so does a line longer than 1 MiB.
`write_ndjson_line` writes compact JSON with sorted keys to a text or binary
writer.

### Detecting the input source

```python
from aether.validation import detect_input_type, validate_crtdl_syntax, InputType

kind = detect_input_type("query.crtdl")
if kind is InputType.CRTDL:
    crtdl = validate_crtdl_syntax("query.crtdl")
```

Existing directories are local imports; `http://` and `https://` addresses
are HTTP downloads, or TORCH result URLs when they contain
`/fhir/extraction/` or `/fhir/result/`; `.crtdl` and `.json` files holding a
JSON object with both `cohortDefinition` and `dataExtraction` are CRTDL
queries. Anything else is treated as a local path. An empty string raises
`ValueError`. `validate_crtdl_syntax` also requires `inclusionCriteria` and
`attributeGroups` and returns the parsed document.

### Checking step prerequisites

```python
from aether.validation import validate_step_prerequisites

statuses = {"import": "completed", "dimp": "pending"}
missing = validate_step_prerequisites(statuses, "dimp")  # None: import is done
```

Prerequisites that are absent from the mapping count as not enabled and are
ignored.

### Explaining errors to users

```python
from aether.errors import classify_error

try:
    ...
except Exception as exc:
    print(classify_error(exc).user_message())
```

`user_message()` states what went wrong, numbered steps to fix it, the
technical cause, and whether the error is transient and will be retried.

## What this package does not do

The package is a library only. It has no command-line program, does not
create, store, lock or resume jobs, does not download or copy input data,
and contains no clients for pseudonymization or conversion services. Those
parts are left to the application that uses these building blocks.

## Tests

The tests are in `tests/` and use pytest, available through the `test`
extra.