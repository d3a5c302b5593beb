"""Ask a provider to propose the files a project needs.

This sits in front of the generation pipeline: it produces the Manifest the
orchestrator consumes. The orchestrator never decides the file structure.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from repogen.domain.models.manifest import Manifest
from repogen.domain.models.project_spec import ProjectSpec
from repogen.domain.providers.response_provider import ResponseProvider

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


class ManifestPlanningError(Exception):
    """Raised when the provider's answer cannot be turned into a manifest."""

    pass


def build_planning_prompt(project_context: str) -> str:
    return (
        "Create a dependency-ordered project structure based on the following "
        "description. For each file, specify its dependencies using the 'dependsOn' "
        "array. This structure will be used to generate each file sequentially.\n"
        "\n"
        "Respond with JSON only, in this exact shape:\n"
        '{"files": [{"path": "<path relative to the project root>", '
        '"description": "<what the file should contain>", '
        '"dependsOn": ["<path>", ...]}]}\n'
        "Use an empty array when a file has no dependencies.\n"
        "\n"
        f"Project description: {project_context}\n"
    )


def parse_manifest_response(text: str) -> Manifest:
    """Extract and validate the JSON manifest from a provider response.

    Accepts bare JSON or JSON wrapped in a markdown fence.

    Raises:
        ManifestPlanningError: If no valid manifest can be parsed
        DuplicatePathError: If the proposed files repeat a path
        InvalidPathError: If a proposed path is unsafe
    """
    candidate = text.strip()
    fenced = _FENCE_RE.search(candidate)
    if fenced:
        candidate = fenced.group(1).strip()

    start = candidate.find("{")
    end = candidate.rfind("}")
    if start == -1 or end < start:
        raise ManifestPlanningError("Response does not contain a JSON object")

    try:
        data: Any = json.loads(candidate[start:end + 1])
    except json.JSONDecodeError as e:
        raise ManifestPlanningError(f"Response is not valid JSON: {e}") from e

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise ManifestPlanningError(f"Response is not a valid manifest: {e}") from e


class ManifestPlanner:
    """Proposes a manifest for a project using a response provider."""

    def __init__(self, provider: ResponseProvider, *, timeout_seconds: float | None = None) -> None:
        self.provider = provider
        self.timeout_seconds = timeout_seconds

    def plan(self, project: ProjectSpec) -> Manifest:
        """Ask the provider for the project's file structure.

        Raises:
            ProviderError: If the provider call fails
            ManifestPlanningError: If the answer is not a usable manifest
        """
        prompt = build_planning_prompt(project.to_context_string())
        result = self.provider.generate(prompt, timeout=self.timeout_seconds)
        manifest = parse_manifest_response(result.response or "")
        logger.info(f"Planned {len(manifest)} files for project '{project.project_name}'")
        return manifest
