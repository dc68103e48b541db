"""Guidance text for the Metalfile MCP server.

This module provides the static usage hints and reference documentation
returned by the guidance tools and prompts.
"""

import json
from typing import Any


WRITE_METALFILE_EXAMPLE_PAYLOAD: dict[str, Any] = {
    "path": "Metalfile.generated.yml",
    "overwrite": True,
    "package": {
        "name": "example-app",
        "version": "1.0.0",
        "architecture": "all",
        "depends": ["nodejs"],
        "description": "Example generated Metalfile",
    },
    "files": [
        {"src": "./app/app.js", "dest": "/opt/example-app/app.js"},
        {"src": "./app/package.json", "dest": "/opt/example-app/package.json"},
        {"src": "./config/config.json", "dest": "/etc/example-app/config.json"},
    ],
    "conffiles": ["/etc/example-app/config.json"],
    "postinst": '#!/bin/bash\necho "postinst hook"',
}
"""Example `write_metalfile` input covering every accepted field."""

WRITE_METALFILE_FIELD_HINTS = """
Key fields:
- path: where to write the Metalfile (default Metalfile.yml)
- overwrite: replace an existing file (default true); with false, an existing file is left untouched
- package: name, version, architecture, depends[] (optional, default []), description
- files: at least one {src, dest} mapping
- conffiles: optional list of destination paths to preserve across upgrades
- postinst: optional post-install script body
- extra_fields: optional mapping of additional top-level fields to keep in the Metalfile
""".strip()

GITHUB_ACTION_NAME = "metalfile-build-action"
GITHUB_ACTION_USES = "metalfile/metalfile-build-action@v1"

GITHUB_ACTION_INFO = f"""
GitHub Action: {GITHUB_ACTION_NAME}

Builds an installable package from a Metalfile. The Metalfile itself is produced
and checked with the write_metalfile and validate_metalfile tools; packaging is
done entirely by this action in CI.

Inputs:
- metalfile: Path to the Metalfile, relative to the repository root (default: Metalfile.yml)
- working-directory: Directory that `files[].src` paths are relative to (default: .)
- output-dir: Directory where the built package is written (default: dist)

Outputs:
- package-path: Path to the built package archive
- package-name: Package name read from the Metalfile
- package-version: Package version read from the Metalfile

Example workflow (.github/workflows/package.yml):

name: Package
on:
  push:
    tags: ["v*"]
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - name: Build package
        id: metalfile
        uses: {GITHUB_ACTION_USES}
        with:
          metalfile: Metalfile.yml
          output-dir: dist
      - uses: actions/upload-artifact@v4
        with:
          name: ${{{{ steps.metalfile.outputs.package-name }}}}-${{{{ steps.metalfile.outputs.package-version }}}}
          path: ${{{{ steps.metalfile.outputs.package-path }}}}

Tips:
- Run validate_metalfile before committing so the CI build does not fail on schema errors.
- Every `files[].src` must exist in the checked-out repository at build time.
- Paths listed in `conffiles` should also appear as a `files[].dest`.
""".strip()


def get_write_metalfile_hint() -> str:
    """Return the usage guide for the write_metalfile tool, with an example payload."""
    return "\n".join(
        [
            "Use the write_metalfile tool to emit a Metalfile to disk.",
            WRITE_METALFILE_FIELD_HINTS,
            "Paths are resolved relative to the server working directory.",
            "Example payload:",
            json.dumps(WRITE_METALFILE_EXAMPLE_PAYLOAD, indent=2),
            "Send the above object as the tool input when invoking write_metalfile.",
        ]
    )


WRITE_METALFILE_PROMPT = """
Create a Metalfile for {package_name}.

1. Inspect the project to decide the package name, version, target architecture,
   runtime dependencies, and a one-line description.
2. List every file to install as a {{src, dest}} mapping. Destinations must be
   absolute paths.
3. Mark configuration files under /etc as conffiles so upgrades keep local edits.
4. Add a postinst script only if the package needs setup after install.
5. Call write_metalfile, then call validate_metalfile on the same path and fix any
   reported problems.

{write_metalfile_hint}
""".strip()
