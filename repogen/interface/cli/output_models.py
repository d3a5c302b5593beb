from typing import Any, Literal
from pydantic import BaseModel, Field


class BaseOutput(BaseModel):
    schema_version: int = 1
    command: Literal["generate", "order", "plan", "providers"]
    exit_code: int
    error: str | None = None


class GenerateOutput(BaseOutput):
    command: Literal["generate"] = "generate"
    path: str | None = None
    files: list[str] = Field(default_factory=list)
    # Set only when a step failed; `files` then lists what was written before it.
    failed_path: str | None = None
    error_kind: str | None = None


class OrderOutput(BaseOutput):
    command: Literal["order"] = "order"
    files: list[str] = Field(default_factory=list)
    unresolved: list[dict[str, str]] = Field(default_factory=list)
    cycle: list[str] | None = None


class PlanOutput(BaseOutput):
    command: Literal["plan"] = "plan"
    manifest_path: str | None = None
    files: list[str] = Field(default_factory=list)


class ProviderSummary(BaseModel):
    """Summary of a provider for list output."""
    name: str
    description: str
    requires_config: bool = False
    config_keys: list[str] = Field(default_factory=list)


class ProvidersOutput(BaseOutput):
    command: Literal["providers"] = "providers"
    providers: list[ProviderSummary] = Field(default_factory=list)


def provider_summary(key: str, metadata: dict[str, Any] | None) -> ProviderSummary:
    metadata = metadata or {}
    return ProviderSummary(
        name=key,
        description=metadata.get("description", ""),
        requires_config=bool(metadata.get("requires_config", False)),
        config_keys=list(metadata.get("config_keys", [])),
    )
