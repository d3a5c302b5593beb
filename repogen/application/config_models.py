"""Generation settings model.

Config structure (.repogen/config.yml):
    provider: codex-cli
    provider_config:
      model: gpt-4.1
    timeout_seconds: 600
    max_chars_per_entry: 2500
    output_base_dir: generated_repos
    on_failure: keep
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from repogen.domain.context.generation_context import DEFAULT_MAX_CHARS_PER_ENTRY


class FailurePolicy(str, Enum):
    """What happens to the output root when a run fails."""

    KEEP_PARTIAL = "keep"      # Leave files written before the failure
    REMOVE_OUTPUT = "remove"   # Delete the output root


class GenerationSettings(BaseModel):
    """Validated run settings (parsed from merged YAML config and CLI flags)."""

    model_config = ConfigDict(extra="forbid")

    provider: str = "codex-cli"
    provider_config: dict[str, Any] = Field(default_factory=dict)
    timeout_seconds: float | None = Field(default=600, gt=0)
    max_chars_per_entry: int = Field(default=DEFAULT_MAX_CHARS_PER_ENTRY, ge=0)
    output_base_dir: str = "generated_repos"
    on_failure: FailurePolicy = FailurePolicy.KEEP_PARTIAL
