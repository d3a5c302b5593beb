"""Provider result model for content-generation responses."""

from pydantic import BaseModel


class ProviderResult(BaseModel):
    """Result from a content-generation provider.

    `response` is the raw generated text; the orchestrator trims it before
    writing. `stderr` carries diagnostic output from subprocess providers.
    """

    response: str = ""
    stderr: str | None = None
