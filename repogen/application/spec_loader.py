"""Loading of manifests and project specifications from YAML or JSON files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from repogen.domain.models.manifest import Manifest
from repogen.domain.models.project_spec import ProjectSpec


class SpecLoadError(Exception):
    def __init__(self, message: str, *, path: Path | None = None, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message}: {self.path}"


def _load_document(path: Path) -> Any:
    # Parses JSON documents too.
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SpecLoadError("File not found", path=path, cause=e) from e
    except OSError as e:
        raise SpecLoadError("Failed to read file", path=path, cause=e) from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise SpecLoadError("Malformed YAML/JSON", path=path, cause=e) from e


def load_manifest(path: Path) -> Manifest:
    """
    Load a manifest file.

    The root may be a mapping with a `files` list or the list itself. Each
    entry has `path`, `description` and `dependsOn` (or `depends_on`).

    Raises:
        SpecLoadError: If the file is unreadable or structurally invalid
        DuplicatePathError: If two entries share a path
        InvalidPathError: If a path is absolute or escapes the project root
    """
    data = _load_document(path)
    if data is None:
        data = {"files": []}
    if isinstance(data, list):
        data = {"files": data}
    if not isinstance(data, dict):
        raise SpecLoadError("Manifest root must be a mapping or a list", path=path)

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise SpecLoadError(f"Invalid manifest: {e}", path=path, cause=e) from e


def load_project_spec(path: Path) -> ProjectSpec:
    """
    Load a project specification file.

    Raises:
        SpecLoadError: If the file is unreadable or fails validation
    """
    data = _load_document(path)
    if not isinstance(data, dict):
        raise SpecLoadError("Project spec root must be a mapping", path=path)

    try:
        return ProjectSpec.model_validate(data)
    except ValidationError as e:
        raise SpecLoadError(f"Invalid project spec: {e}", path=path, cause=e) from e


def dump_manifest(manifest: Manifest, path: Path) -> None:
    """Write a manifest as YAML using the upstream `dependsOn` key."""
    data = {
        "files": [
            {
                "path": spec.path,
                "description": spec.description,
                "dependsOn": list(spec.depends_on),
            }
            for spec in manifest.files
        ]
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
