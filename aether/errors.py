"""User-facing errors with a category, a cause and guidance on fixing them."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from aether.retry import contains_ignore_case, is_network_error


class ErrorCategory(str, Enum):
    """Broad class of a failure, used to prefix messages."""

    NETWORK = "network"
    FILESYSTEM = "filesystem"
    VALIDATION = "validation"
    SERVICE = "service"
    CONFIGURATION = "configuration"
    STATE = "state"

    def __str__(self) -> str:
        return self.value


class AetherError(Exception):
    """An error with context and advice for the user."""

    def __init__(
        self,
        category: ErrorCategory | str,
        message: str,
        cause: BaseException | None = None,
        guidance: Iterable[str] = (),
        http_status: int = 0,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.category = ErrorCategory(category)
        self.message = message
        self.cause = cause
        self.guidance = list(guidance)
        self.http_status = http_status
        self.is_retryable = is_retryable
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        text = f"[{self.category.value.upper()}] {self.message}"
        if self.cause is not None:
            text += f": {self.cause}"
        if self.http_status > 0:
            text += f" (HTTP {self.http_status})"
        return text

    def user_message(self) -> str:
        """Return a multi-line message suitable for end users."""
        parts = [f"❌ Error: {self.message}\n\n"]
        if self.guidance:
            parts.append("💡 How to fix:\n")
            parts.extend(
                f"  {number}. {guide}\n"
                for number, guide in enumerate(self.guidance, start=1)
            )
        if self.cause is not None:
            parts.append(f"\nTechnical details: {self.cause}\n")
        if self.is_retryable:
            parts.append(
                "\n🔄 This error is transient and will be automatically retried.\n"
            )
        return "".join(parts)


def network_unreachable(url: str, cause: BaseException | None) -> AetherError:
    """A service could not be reached."""
    return AetherError(
        ErrorCategory.NETWORK,
        f"Cannot reach service at {url}",
        cause,
        [
            "Check that the service is running",
            f"Verify the URL is correct: {url}",
            "Check your network connection",
            "Ensure no firewall is blocking the connection",
        ],
        is_retryable=True,
    )


def network_timeout(url: str, cause: BaseException | None) -> AetherError:
    """A request timed out."""
    return AetherError(
        ErrorCategory.NETWORK,
        f"Request to {url} timed out",
        cause,
        [
            "The service may be overloaded or slow to respond",
            "Wait a moment and try again",
            "Check service health and performance",
            "Consider increasing timeout in configuration if large datasets",
        ],
        is_retryable=True,
    )


def file_not_found(path: str) -> AetherError:
    """A file or directory is missing."""
    return AetherError(
        ErrorCategory.FILESYSTEM,
        f"File or directory not found: {path}",
        guidance=[
            "Check that the path is correct",
            "Ensure the file/directory exists",
            "Verify you have permission to access it",
        ],
    )


def file_permission_denied(path: str, cause: BaseException | None) -> AetherError:
    """Access to a path was refused."""
    return AetherError(
        ErrorCategory.FILESYSTEM,
        f"Permission denied accessing: {path}",
        cause,
        [
            "Check file/directory permissions",
            "Ensure your user has read/write access",
            "Try running with appropriate permissions",
        ],
    )


def disk_full(path: str, cause: BaseException | None) -> AetherError:
    """The device ran out of space."""
    return AetherError(
        ErrorCategory.FILESYSTEM,
        "No space left on device",
        cause,
        [
            "Free up disk space",
            f"Clean old jobs from {path}",
            "Use --jobs-dir flag to specify a different location with more space",
            "Consider deleting unnecessary files",
        ],
    )


def invalid_fhir_file(
    filename: str, line: int, cause: BaseException | None
) -> AetherError:
    """A FHIR NDJSON file is malformed; ``line`` > 0 names the failing line."""
    guidance = [
        f"Check FHIR file format in {filename}",
        "Ensure the file contains valid NDJSON (newline-delimited JSON)",
        "Verify each line is valid FHIR resource JSON",
    ]
    if line > 0:
        guidance.append(f"Error occurred at line {line}")
    return AetherError(
        ErrorCategory.VALIDATION,
        f"Invalid FHIR data in {filename}",
        cause,
        guidance,
    )


def service_unavailable(
    service_name: str, status_code: int, cause: BaseException | None
) -> AetherError:
    """A service answered with a server error."""
    return AetherError(
        ErrorCategory.SERVICE,
        f"{service_name} service is temporarily unavailable",
        cause,
        [
            "The service may be experiencing issues",
            "Wait a moment - automatic retry is in progress",
            f"Check {service_name} service logs for errors",
            "Verify the service is running and healthy",
        ],
        http_status=status_code,
        is_retryable=True,
    )


def service_bad_request(
    service_name: str, status_code: int, message: str
) -> AetherError:
    """A service rejected the request as a client error."""
    return AetherError(
        ErrorCategory.SERVICE,
        f"{service_name} rejected the request: {message}",
        guidance=[
            "The data sent to the service was invalid or malformed",
            "Check FHIR resource structure and content",
            "Review service documentation for required formats",
            "This error requires manual investigation - automatic retry will not help",
        ],
        http_status=status_code,
    )


def missing_service_url(step_name: str) -> AetherError:
    """A step is enabled but its service URL is not configured."""
    return AetherError(
        ErrorCategory.CONFIGURATION,
        f"{step_name} step is enabled but service URL is not configured",
        guidance=[
            "Add the service URL to your aether.yaml config file",
            f"Or disable the {step_name} step in pipeline.enabled_steps",
            "See config/aether.example.yaml for reference",
        ],
    )


def invalid_config(field: str, reason: str) -> AetherError:
    """A configuration value failed validation."""
    return AetherError(
        ErrorCategory.CONFIGURATION,
        f"Invalid configuration: {reason}",
        guidance=[
            f"Check the '{field}' field in your config file",
            "Compare with config/aether.example.yaml for correct format",
            "Ensure all required fields are populated",
        ],
    )


def job_not_found(job_id: str) -> AetherError:
    """No state exists for a job."""
    return AetherError(
        ErrorCategory.STATE,
        f"Job '{job_id}' not found",
        guidance=[
            "Check the job ID is correct",
            "Use 'aether job list' to see all available jobs",
            "The job may have been deleted",
        ],
    )


def corrupted_job_state(job_id: str, cause: BaseException | None) -> AetherError:
    """A job's state file could not be read."""
    return AetherError(
        ErrorCategory.STATE,
        f"Job state file for '{job_id}' is corrupted",
        cause,
        [
            "The job state file may have been manually edited or corrupted",
            "Check jobs/<job-id>/state.json for syntax errors",
            "You may need to delete this job and restart",
            "Consider restoring from backup if available",
        ],
    )


def step_prerequisite_not_met(step_name: str, prerequisite: str) -> AetherError:
    """A step was requested before its prerequisite completed."""
    return AetherError(
        ErrorCategory.VALIDATION,
        f"Cannot run {step_name}: prerequisite step {prerequisite} has not completed",
        guidance=[
            f"Ensure {prerequisite} step completes successfully first",
            "Use 'aether pipeline status <job-id>' to check step progress",
            f"Run 'aether pipeline continue <job-id>' to resume from {prerequisite}",
        ],
    )


def job_locked(job_id: str) -> AetherError:
    """Another process holds the job's lock."""
    return AetherError(
        ErrorCategory.STATE,
        f"Job '{job_id}' is currently being modified by another process",
        guidance=[
            "Wait for the other operation to complete",
            "Check if another aether process is running for this job",
            "If stuck, remove the lock file: jobs/<job-id>/.lock",
        ],
        is_retryable=True,
    )


def wrap_error(
    category: ErrorCategory | str,
    message: str,
    cause: BaseException | None,
    *guidance: str,
) -> AetherError:
    """Wrap ``cause``; it is retryable when it looks like a network error."""
    return AetherError(
        category,
        message,
        cause,
        guidance,
        is_retryable=is_network_error(cause),
    )


def classify_error(err: BaseException | None) -> AetherError | None:
    """Turn any error into an AetherError with suitable guidance."""
    if err is None:
        return None
    if isinstance(err, AetherError):
        return err

    text = str(err)
    if is_network_error(err):
        return AetherError(
            ErrorCategory.NETWORK,
            "Network connectivity issue",
            err,
            ["Check network connection", "Verify service is running", "Will retry automatically"],
            is_retryable=True,
        )
    if contains_ignore_case(text, "no space left") or contains_ignore_case(text, "disk full"):
        return AetherError(
            ErrorCategory.FILESYSTEM,
            "Insufficient disk space",
            err,
            ["Free up disk space", "Clean old jobs", "Use --jobs-dir to specify different location"],
        )
    if contains_ignore_case(text, "permission denied") or contains_ignore_case(
        text, "access denied"
    ):
        return AetherError(
            ErrorCategory.FILESYSTEM,
            "Permission denied",
            err,
            ["Check file/directory permissions", "Ensure proper access rights"],
        )
    return AetherError(
        ErrorCategory.VALIDATION,
        "An error occurred",
        err,
        ["Check the technical details below", "See logs for more information"],
    )