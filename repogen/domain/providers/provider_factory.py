from typing import Any, Callable

from .response_provider import ResponseProvider

ProviderConstructor = Callable[..., ResponseProvider] | type[ResponseProvider]


class ProviderFactory:
    """Factory for creating response provider instances (Factory pattern).

    The registry is only written at import time and by tests; runs read it.
    """

    _registry: dict[str, ProviderConstructor] = {}

    @classmethod
    def register(cls, key: str, provider_class: ProviderConstructor) -> None:
        """
        Register a provider implementation.

        Args:
            key: Provider identifier (e.g., "codex-cli", "claude-code")
            provider_class: The provider class (or zero/one-argument factory)
        """
        cls._registry[key] = provider_class

    @classmethod
    def create(cls, provider_key: str, config: dict[str, Any] | None = None) -> ResponseProvider:
        """
        Create a provider instance.

        Args:
            provider_key: Registered provider identifier
            config: Optional configuration for the provider

        Returns:
            Instantiated ResponseProvider

        Raises:
            KeyError: If provider_key is not registered
        """
        if provider_key not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise KeyError(
                f"Provider: '{provider_key}' not found. "
                f"Available providers: {available}"
            )

        provider_class = cls._registry[provider_key]
        if config:
            return provider_class(config)
        return provider_class()

    @classmethod
    def list_providers(cls) -> list[str]:
        """
        Get list of registered provider keys.
        """
        return list(cls._registry.keys())

    @classmethod
    def get_metadata(cls, provider_key: str) -> dict[str, Any] | None:
        """
        Get metadata for a specific provider.

        Returns:
            Metadata dict if found, None otherwise
        """
        if provider_key not in cls._registry:
            return None
        provider_class = cls._registry[provider_key]
        get_metadata = getattr(provider_class, "get_metadata", None)
        if get_metadata is None:
            return {"name": provider_key, "description": "No description available"}
        return get_metadata()
