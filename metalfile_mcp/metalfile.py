"""Metalfile schema, validation, and YAML serialization.

A Metalfile is a YAML package manifest:

```yaml
package:
  name: example-app
  version: 1.0.0
  architecture: all
  depends: [nodejs]
  description: Example package
files:
  - src: ./app/app.js
    dest: /opt/example-app/app.js
conffiles: [/etc/example-app/config.json]
postinst: |
  #!/bin/bash
  echo "installed"
```

Known fields are strongly typed. Unknown fields at any documented level are kept
in each model's `model_extra` mapping and re-emitted after the known fields when
the Metalfile is serialized.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError


logger = logging.getLogger(__name__)

ROOT_FIELD_PATH = "(root)"
"""Field path reported when a failure applies to the whole value."""

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]


class ValidationFailure(BaseModel):
    """A single violated constraint."""

    field_path: str
    message: str


class MetalfileValidationError(ValueError):
    """Raised when a Metalfile fails authoritative validation."""

    def __init__(self, failures: list[ValidationFailure]) -> None:
        self.failures = failures
        super().__init__(f"Invalid Metalfile:\n{format_validation_failures(failures)}")


class _PassthroughModel(BaseModel):
    """Base model that retains unknown fields instead of rejecting them."""

    model_config = ConfigDict(extra="allow")

    def _copy_extra_fields(self) -> dict[str, Any]:
        """Return a copy of the unknown fields, in input order."""
        return copy.deepcopy(dict(self.model_extra or {}))


class MetalfilePackage(_PassthroughModel):
    """The `package` section of a Metalfile."""

    name: Annotated[NonEmptyStr, Field(description="Package name")]
    version: Annotated[NonEmptyStr, Field(description="Package version")]
    architecture: Annotated[
        NonEmptyStr, Field(description="Target architecture (e.g., 'all', 'amd64')")
    ]
    depends: Annotated[
        list[NonEmptyStr],
        Field(default_factory=list, description="Names of packages this package depends on"),
    ]
    description: Annotated[NonEmptyStr, Field(description="Human-readable package description")]

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "architecture": self.architecture,
            "depends": list(self.depends),
            "description": self.description,
        }
        document.update(self._copy_extra_fields())
        return document


class MetalfileFileEntry(_PassthroughModel):
    """A single source-to-destination file mapping."""

    src: Annotated[NonEmptyStr, Field(description="Source path, relative to the build context")]
    dest: Annotated[NonEmptyStr, Field(description="Absolute install destination path")]

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"src": self.src, "dest": self.dest}
        document.update(self._copy_extra_fields())
        return document


class Metalfile(_PassthroughModel):
    """A validated, normalized Metalfile.

    Instances are produced by `parse_metalfile()` or `validate_metalfile_data()`
    and are not meant to be mutated afterwards.
    """

    package: MetalfilePackage
    files: Annotated[
        list[MetalfileFileEntry],
        Field(min_length=1, description="File mappings; at least one entry is required"),
    ]
    conffiles: Annotated[
        list[NonEmptyStr] | None,
        Field(description="Destination paths to preserve across package upgrades"),
    ] = None
    postinst: Annotated[StrictStr | None, Field(description="Post-install script body")] = None

    def to_document(self) -> dict[str, Any]:
        """Return the Metalfile as an ordered mapping ready for serialization.

        Known fields come first in schema order. Optional fields that were not
        provided are omitted. Unknown fields follow in their original order.
        """
        document: dict[str, Any] = {
            "package": self.package.to_document(),
            "files": [entry.to_document() for entry in self.files],
        }
        if self.conffiles is not None:
            document["conffiles"] = list(self.conffiles)
        if self.postinst is not None:
            document["postinst"] = self.postinst
        document.update(self._copy_extra_fields())
        return document


class MetalfileValidationResult(BaseModel):
    """Result of Metalfile validation."""

    is_valid: bool
    metalfile: Metalfile | None = None
    errors: list[ValidationFailure] = []


def failures_from_validation_error(error: ValidationError) -> list[ValidationFailure]:
    """Convert a pydantic ValidationError into an ordered list of failures."""
    return [
        ValidationFailure(
            field_path=".".join(str(part) for part in issue["loc"]) or ROOT_FIELD_PATH,
            message=issue["msg"],
        )
        for issue in error.errors(include_url=False)
    ]


def format_validation_failures(failures: Iterable[ValidationFailure]) -> str:
    """Format failures as one `- <field_path>: <message>` line each."""
    return "\n".join(f"- {failure.field_path}: {failure.message}" for failure in failures)


def validate_metalfile_data(value: Any) -> MetalfileValidationResult:  # noqa: ANN401
    """Validate an arbitrary parsed value as a Metalfile.

    All violations are collected and reported together. The input is never
    modified.

    Args:
        value: Parsed data, typically the output of `load_metalfile_yaml()`

    Returns:
        Validation result with the normalized Metalfile, or the list of failures
    """
    try:
        metalfile = Metalfile.model_validate(value)
    except ValidationError as ex:
        failures = failures_from_validation_error(ex)
        logger.debug(f"Metalfile validation found {len(failures)} failure(s)")
        return MetalfileValidationResult(is_valid=False, errors=failures)

    return MetalfileValidationResult(is_valid=True, metalfile=metalfile)


def parse_metalfile(value: Any) -> Metalfile:  # noqa: ANN401
    """Validate a value as a Metalfile, raising on any violation.

    Raises:
        MetalfileValidationError: If the value is not a valid Metalfile
    """
    result = validate_metalfile_data(value)
    if not result.is_valid or result.metalfile is None:
        raise MetalfileValidationError(result.errors)
    return result.metalfile


class _MetalfileDumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_str(data)


_MetalfileDumper.add_representer(str, _represent_str)


_BOOL_TAG = "tag:yaml.org,2002:bool"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _MetalfileLoader(yaml.SafeLoader):
    """Safe loader with YAML 1.2 boolean rules and no implicit timestamps."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        mapping = super().construct_mapping(node, deep=deep)
        return {_stringify_key(key): value for key, value in mapping.items()}


def _stringify_key(key: Any) -> str:  # noqa: ANN401
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


_MetalfileLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp) for tag, regexp in resolvers if tag not in (_BOOL_TAG, _TIMESTAMP_TAG)
    ]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_MetalfileLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def dump_metalfile_yaml(metalfile: Metalfile) -> str:
    """Serialize a Metalfile to YAML text.

    Output is deterministic: key order follows `Metalfile.to_document()` and
    lines are never wrapped.
    """
    return yaml.dump(
        metalfile.to_document(),
        Dumper=_MetalfileDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )


def load_metalfile_yaml(text: str) -> Any:  # noqa: ANN401
    """Parse YAML text into plain Python data.

    Only `true`/`false` are booleans and dates stay strings, so values such as
    `yes` or `2024-01-01` load as text. Non-string mapping keys become strings.

    Raises:
        yaml.YAMLError: If the text is not valid YAML
    """
    return yaml.load(text, Loader=_MetalfileLoader)  # noqa: S506


def metalfile_json_schema() -> dict[str, Any]:
    """Return the JSON schema describing a valid Metalfile."""
    return Metalfile.model_json_schema()
