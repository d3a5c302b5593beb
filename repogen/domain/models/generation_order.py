"""Generation order: a dependency-respecting permutation of a manifest."""

from dataclasses import dataclass
from typing import Iterator

from repogen.domain.models.manifest import FileSpec


@dataclass(frozen=True)
class UnresolvedDependency:
    """A `depends_on` entry that names no file in the manifest."""

    dependent: str
    missing: str


@dataclass(frozen=True)
class GenerationOrder:
    """Immutable result of sorting a manifest.

    Attributes:
        files: FileSpecs in generation order; every resolvable dependency of a
            file appears before it
        unresolved: Dependencies skipped because they name unknown paths, in
            the order they were encountered
    """

    files: tuple[FileSpec, ...]
    unresolved: tuple[UnresolvedDependency, ...] = ()

    @property
    def paths(self) -> list[str]:
        return [spec.path for spec in self.files]

    def __iter__(self) -> Iterator[FileSpec]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def __getitem__(self, index: int) -> FileSpec:
        return self.files[index]
