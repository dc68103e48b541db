"""Metalfile read and write handlers.

These functions implement the `validate_metalfile` and `write_metalfile` tools on
raw tool input. They are kept separate from the MCP layer so they can be called
directly with any mapping.

The read path never raises: every failure is returned as descriptive text. The
write path reports input-shape problems and refusals as text, but raises on
authoritative validation failures and file system errors so that nothing is
written from bad data.
"""

import logging
from collections.abc import Mapping
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, ValidationError

from metalfile_mcp._util import resolve_metalfile_path
from metalfile_mcp.constants import DEFAULT_METALFILE_PATH
from metalfile_mcp.metalfile import (
    NonEmptyStr,
    dump_metalfile_yaml,
    failures_from_validation_error,
    format_validation_failures,
    load_metalfile_yaml,
    parse_metalfile,
    validate_metalfile_data,
)


logger = logging.getLogger(__name__)

_WRITE_CONTROL_FIELDS = ("path", "overwrite")


class ValidateMetalfileInput(BaseModel):
    """Input shape for validate_metalfile."""

    model_config = ConfigDict(extra="allow")

    path: NonEmptyStr = DEFAULT_METALFILE_PATH
    content: StrictStr | None = None


class WriteMetalfileInput(BaseModel):
    """Input shape for write_metalfile.

    This is a structural check only. The Metalfile portion is validated again by
    `parse_metalfile()`, which is authoritative.
    """

    model_config = ConfigDict(extra="allow")

    path: NonEmptyStr = DEFAULT_METALFILE_PATH
    overwrite: StrictBool = True
    package: dict[str, Any]
    files: list[dict[str, Any]]
    conffiles: list[Any] | None = None
    postinst: StrictStr | None = None

    def metalfile_data(self) -> dict[str, Any]:
        """Return the Metalfile portion of the input, without destination controls."""
        data: dict[str, Any] = {"package": self.package, "files": self.files}
        if self.conffiles is not None:
            data["conffiles"] = self.conffiles
        if self.postinst is not None:
            data["postinst"] = self.postinst
        for key, value in (self.model_extra or {}).items():
            if key not in _WRITE_CONTROL_FIELDS:
                data[key] = value
        return data


def _invalid_input_message(tool_name: str, error: ValidationError) -> str:
    failures = failures_from_validation_error(error)
    return f"Invalid input for {tool_name}:\n{format_validation_failures(failures)}"


def handle_validate_metalfile(raw_input: Mapping[str, Any] | None) -> str:
    """Validate a Metalfile from disk or from inline content.

    Args:
        raw_input: Tool input with optional `path` and `content`

    Returns:
        A success summary, or a description of the first stage that failed
    """
    try:
        tool_input = ValidateMetalfileInput.model_validate(
            {} if raw_input is None else raw_input
        )
    except ValidationError as ex:
        logger.warning("Rejected validate_metalfile input")
        return _invalid_input_message("validate_metalfile", ex)

    content = tool_input.content
    if content:
        logger.info("Validating Metalfile from provided content")
        source_label = "provided content"
        yaml_source = content
    else:
        full_path = resolve_metalfile_path(tool_input.path)
        logger.info(f"Validating Metalfile at: {full_path}")
        source_label = str(full_path)
        try:
            yaml_source = full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as ex:
            logger.warning(f"Failed to read Metalfile at {full_path}: {ex}")
            return f"Failed to read Metalfile at {full_path}: {ex}"

    try:
        parsed = load_metalfile_yaml(yaml_source)
    except yaml.YAMLError as ex:
        logger.warning(f"YAML parse error in {source_label}: {ex}")
        return f"YAML parse error: {ex}"

    result = validate_metalfile_data(parsed)
    if not result.is_valid or result.metalfile is None:
        logger.warning(f"Invalid Metalfile from {source_label}: {len(result.errors)} error(s)")
        return f"Invalid Metalfile:\n{format_validation_failures(result.errors)}"

    metalfile = result.metalfile
    lines = [
        "Metalfile is valid.",
        f"Source: {source_label}",
        f"Package: {metalfile.package.name}@{metalfile.package.version}",
        f"Files entries: {len(metalfile.files)}",
    ]
    if metalfile.conffiles:
        lines.append(f"Conffiles entries: {len(metalfile.conffiles)}")
    return "\n".join(lines)


def handle_write_metalfile(raw_input: Mapping[str, Any] | None) -> str:
    """Write a Metalfile to disk from structured input.

    Args:
        raw_input: Tool input with `path`, `overwrite`, and the Metalfile fields

    Returns:
        A success summary, an input error report, or an overwrite refusal

    Raises:
        MetalfileValidationError: If the Metalfile portion is not a valid Metalfile
        OSError: If the destination directory or file cannot be written
    """
    try:
        tool_input = WriteMetalfileInput.model_validate({} if raw_input is None else raw_input)
    except ValidationError as ex:
        logger.warning("Rejected write_metalfile input")
        return _invalid_input_message("write_metalfile", ex)

    full_path = resolve_metalfile_path(tool_input.path)

    if not tool_input.overwrite and full_path.exists():
        logger.info(f"Refusing to overwrite existing Metalfile at: {full_path}")
        return f"Refusing to overwrite existing file at {full_path}; set overwrite=true to replace."

    metalfile = parse_metalfile(tool_input.metalfile_data())
    yaml_text = dump_metalfile_yaml(metalfile)

    full_path.parent.mkdir(parents=True, exist_ok=True)
    full_path.write_text(yaml_text, encoding="utf-8")
    logger.info(f"Wrote Metalfile to: {full_path}")

    return (
        f"Wrote Metalfile to {full_path}\n"
        f"Package: {metalfile.package.name}@{metalfile.package.version}\n"
        f"Files entries: {len(metalfile.files)}"
    )
