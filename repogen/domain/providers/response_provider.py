from abc import ABC, abstractmethod
from typing import Any

from repogen.domain.models.provider_result import ProviderResult


class ResponseProvider(ABC):
    """Abstract content-generation capability (Strategy pattern).

    Given a prompt, returns generated text. Any non-success outcome is
    reported by raising ProviderError; the orchestrator treats every such
    failure the same way.
    """

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        """Return provider metadata for discovery commands.

        Returns:
            dict with keys: name, description, requires_config, config_keys,
                           default_response_timeout
        """
        return {
            "name": "unknown",
            "description": "No description available",
            "requires_config": False,
            "config_keys": [],
            "default_response_timeout": 600,  # 10 minutes
        }

    @abstractmethod
    def validate(self) -> None:
        """Verify provider is accessible and configured correctly.

        Called before a run begins.

        Raises:
            ProviderError: If provider is misconfigured or unreachable
        """
        ...

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        timeout: float | None = None,
        context: dict[str, Any] | None = None,
    ) -> ProviderResult:
        """Generate content for the given prompt.

        Args:
            prompt: The prompt text
            timeout: Upper bound in seconds for this call (None = provider default)
            context: Optional run context (e.g., output_root, path)

        Returns:
            ProviderResult with the generated text

        Raises:
            ProviderTimeoutError: If the call exceeds `timeout`
            ProviderError: If the call fails for any other reason
        """
        ...
