"""Manifest models: the flat list of files a run should generate."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from repogen.domain.errors import DuplicatePathError, InvalidPathError
from repogen.domain.validation.path_validator import PathValidationError, PathValidator


class FileSpec(BaseModel):
    """One file to be produced.

    Notes:
    - `path` is relative to the project root and unique within a manifest.
    - `depends_on` may name paths that are not in the manifest; those are
      tolerated at sort time (warning only).
    - Accepts `dependsOn` as an alias so upstream JSON can be used as-is.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    path: str
    description: str = ""
    depends_on: tuple[str, ...] = Field(default=(), alias="dependsOn")

    @field_validator("path")
    @classmethod
    def _path_safe_relative(cls, v: str) -> str:
        try:
            return PathValidator.validate_relative_file_path(v.strip())
        except PathValidationError as e:
            raise InvalidPathError(v, str(e)) from e

    @field_validator("depends_on", mode="before")
    @classmethod
    def _dedupe_dependencies(cls, v: object) -> object:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        seen: dict[str, None] = {}
        for dep in v:  # type: ignore[union-attr]
            dep_str = str(dep).strip()
            if not dep_str:
                continue
            try:
                dep_str = PathValidator.validate_relative_file_path(dep_str)
            except PathValidationError:
                # Unresolvable either way; the sorter reports it.
                pass
            seen.setdefault(dep_str, None)
        return tuple(seen)


class Manifest(BaseModel):
    """Ordered collection of FileSpecs.

    Order is only meaningful for determinism: the sorter walks top-level
    entries in this order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    files: list[FileSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _paths_unique(self) -> "Manifest":
        seen: set[str] = set()
        for spec in self.files:
            if spec.path in seen:
                raise DuplicatePathError(spec.path)
            seen.add(spec.path)
        return self

    def paths(self) -> list[str]:
        """Return manifest paths in original order."""
        return [spec.path for spec in self.files]

    def get(self, path: str) -> FileSpec | None:
        """Look up a FileSpec by path."""
        for spec in self.files:
            if spec.path == path:
                return spec
        return None

    def __len__(self) -> int:
        return len(self.files)
