"""Reading and writing FHIR resources stored as newline-delimited JSON."""

from __future__ import annotations

import io
import json
import os
from typing import IO, Any, Iterable, Iterator, Mapping, Union

PathLike = Union[str, "os.PathLike[str]"]

MAX_LINE_BYTES = 1024 * 1024

_GO_STYLE_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


class FHIRError(ValueError):
    """FHIR data could not be read, parsed or validated."""


class FHIRResource(dict):
    """A FHIR resource kept as its plain JSON object."""

    def get_resource_type(self) -> str:
        """Return ``resourceType``; raise FHIRError if missing or not a string."""
        if "resourceType" not in self:
            raise FHIRError("missing resourceType field")
        resource_type = self["resourceType"]
        if not isinstance(resource_type, str):
            raise FHIRError("resourceType is not a string")
        return resource_type

    def get_id(self) -> str:
        """Return ``id``, or an empty string when the optional id is absent."""
        if "id" not in self:
            return ""
        resource_id = self["id"]
        if not isinstance(resource_id, str):
            raise FHIRError("id is not a string")
        return resource_id


def parse_ndjson_line(line: str | bytes) -> FHIRResource:
    """Parse one NDJSON line into a resource."""
    if not line:
        raise FHIRError("empty line")
    try:
        data = json.loads(line)
    except (ValueError, UnicodeDecodeError) as err:
        raise FHIRError(f"failed to parse JSON: {err}") from err
    if not isinstance(data, dict):
        raise FHIRError("failed to parse JSON: expected a JSON object")
    return FHIRResource(data)


def _strip_line_end(line: str | bytes) -> str | bytes:
    if isinstance(line, bytes):
        if line.endswith(b"\n"):
            line = line[:-1]
        if line.endswith(b"\r"):
            line = line[:-1]
    else:
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _byte_length(line: str | bytes) -> int:
    if isinstance(line, bytes):
        return len(line)
    return len(line.encode("utf-8"))


def iter_ndjson(stream: Iterable[str | bytes]) -> Iterator[FHIRResource]:
    """Yield each resource of an NDJSON stream, skipping empty lines.

    Lines may be text or bytes. A line that fails to parse raises FHIRError
    naming its line number; a line over 1 MiB raises FHIRError as well.
    """
    for line_number, raw in enumerate(stream, start=1):
        line = _strip_line_end(raw)
        if _byte_length(line) > MAX_LINE_BYTES:
            raise FHIRError("scanner error: token too long")
        if not line:
            continue
        try:
            yield parse_ndjson_line(line)
        except FHIRError as err:
            raise FHIRError(f"line {line_number}: {err}") from err


def iter_ndjson_file(file_path: PathLike) -> Iterator[FHIRResource]:
    """Yield each resource of an NDJSON file."""
    try:
        handle = open(file_path, "rb")
    except OSError as err:
        raise FHIRError(f"failed to open file: {err}") from err
    with handle:
        yield from iter_ndjson(handle)


def _encode_resource(resource: Mapping[str, Any]) -> str:
    try:
        text = json.dumps(
            resource, separators=(",", ":"), sort_keys=True, ensure_ascii=False
        )
    except (TypeError, ValueError) as err:
        raise FHIRError(f"failed to marshal resource: {err}") from err
    for raw, escaped in _GO_STYLE_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def write_ndjson_line(writer: IO[Any], resource: Mapping[str, Any]) -> None:
    """Write one resource as a compact JSON line to a text or binary writer."""
    line = _encode_resource(resource) + "\n"
    if isinstance(writer, (io.RawIOBase, io.BufferedIOBase)):
        writer.write(line.encode("utf-8"))
    else:
        writer.write(line)


def group_by_resource_type(
    resources: Iterable[Mapping[str, Any]],
) -> dict[str, list[FHIRResource]]:
    """Group resources by ``resourceType``, keeping their order within a group."""
    groups: dict[str, list[FHIRResource]] = {}
    for index, resource in enumerate(resources):
        wrapped = resource if isinstance(resource, FHIRResource) else FHIRResource(resource)
        try:
            resource_type = wrapped.get_resource_type()
        except FHIRError as err:
            raise FHIRError(f"resource {index}: {err}") from err
        groups.setdefault(resource_type, []).append(wrapped)
    return groups


def validate_fhir_resource(resource: Mapping[str, Any] | None) -> None:
    """Raise FHIRError unless ``resource`` is an object with a string resourceType."""
    if resource is None:
        raise FHIRError("resource is nil")
    wrapped = resource if isinstance(resource, FHIRResource) else FHIRResource(resource)
    wrapped.get_resource_type()


def count_resources_in_file(file_path: PathLike) -> int:
    """Count the resources in an NDJSON file."""
    return sum(1 for _ in iter_ndjson_file(file_path))