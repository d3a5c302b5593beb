"""Dependency graph sorting for manifests.

Depth-first topological sort over the `depends_on` relation using an explicit
stack, so large manifests do not hit the interpreter's recursion limit.
"""

import logging
from enum import Enum
from typing import Iterator

from repogen.domain.errors import CircularDependencyError
from repogen.domain.models.generation_order import GenerationOrder, UnresolvedDependency
from repogen.domain.models.manifest import FileSpec, Manifest

logger = logging.getLogger(__name__)


class VisitState(str, Enum):
    """Per-path traversal mark."""

    UNVISITED = "unvisited"
    VISITING = "visiting"  # On the active DFS stack
    DONE = "done"          # Emitted into the order


def sort_manifest(manifest: Manifest) -> GenerationOrder:
    """Compute a deterministic generation order for the manifest.

    Rules:
    - Top-level entries are walked in manifest order, dependencies in the order
      listed, so a fixed input always yields the same order.
    - Files with no dependencies keep their original relative order.
    - A dependency that names no manifest file is skipped with a warning; it
      has no content to generate and trivially precedes everything.
    - Reaching a path that is still VISITING closes a cycle.

    Runs in O(files + edges).

    Args:
        manifest: Manifest with unique paths

    Returns:
        GenerationOrder where each resolvable dependency precedes its dependent

    Raises:
        CircularDependencyError: If the dependency relation has a cycle
    """
    by_path: dict[str, FileSpec] = {spec.path: spec for spec in manifest.files}
    marks: dict[str, VisitState] = {}
    ordered: list[FileSpec] = []
    unresolved: list[UnresolvedDependency] = []

    for root in manifest.files:
        if marks.get(root.path, VisitState.UNVISITED) is VisitState.DONE:
            continue

        marks[root.path] = VisitState.VISITING
        stack: list[tuple[FileSpec, Iterator[str]]] = [(root, iter(root.depends_on))]

        while stack:
            spec, pending = stack[-1]

            for dep in pending:
                target = by_path.get(dep)
                if target is None:
                    logger.warning(
                        f"Dependency '{dep}' for file '{spec.path}' not found. Skipping."
                    )
                    unresolved.append(UnresolvedDependency(dependent=spec.path, missing=dep))
                    continue

                mark = marks.get(dep, VisitState.UNVISITED)
                if mark is VisitState.DONE:
                    continue
                if mark is VisitState.VISITING:
                    chain = [entry.path for entry, _ in stack]
                    cycle = chain[chain.index(dep):] + [dep]
                    raise CircularDependencyError(dep, cycle)

                marks[dep] = VisitState.VISITING
                stack.append((target, iter(target.depends_on)))
                break
            else:
                # All dependencies emitted
                stack.pop()
                marks[spec.path] = VisitState.DONE
                ordered.append(spec)

    logger.debug("Generation order: %s", " -> ".join(spec.path for spec in ordered))
    return GenerationOrder(files=tuple(ordered), unresolved=tuple(unresolved))
