"""Fake response provider that returns deterministic responses.

Used for integration testing to simulate generation without running any CLI
or SDK.
"""

import re
from typing import Any, Callable

from repogen.domain.errors import ProviderError, ProviderTimeoutError
from repogen.domain.models.provider_result import ProviderResult
from repogen.domain.providers.response_provider import ResponseProvider


# Type for response generators: (path, prompt) -> content
ResponseGenerator = Callable[[str, str], str]

_TARGET_RE = re.compile(r"source code for the file: (.+?)\.\n")


def target_path(prompt: str) -> str:
    """Extract the file path a generation prompt asks for."""
    match = _TARGET_RE.search(prompt)
    if match is None:
        raise AssertionError(f"Prompt does not name a target file: {prompt[:80]!r}")
    return match.group(1)


class FakeResponseProvider(ResponseProvider):
    """Configurable fake provider for integration testing.

    Usage:
        # Default: "// <path>" for every file
        provider = FakeResponseProvider()

        # Fail (or time out) when asked for a specific path
        provider = FakeResponseProvider(fail_on={"b.ts"})
        provider = FakeResponseProvider(timeout_on={"b.ts"})

        # Custom content
        provider = FakeResponseProvider(generator=lambda path, prompt: f"x = '{path}'")
    """

    def __init__(
        self,
        *,
        generator: ResponseGenerator | None = None,
        fail_on: set[str] | None = None,
        timeout_on: set[str] | None = None,
        responses: dict[str, str] | None = None,
    ):
        self._generator = generator
        self._fail_on = set(fail_on or ())
        self._timeout_on = set(timeout_on or ())
        self._responses = dict(responses or {})

        # Track calls for assertions
        self.call_history: list[tuple[str, float | None, dict[str, Any] | None]] = []

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        return {
            "name": "fake-response",
            "description": "Fake provider returning deterministic responses (testing)",
            "requires_config": False,
            "config_keys": [],
            "default_response_timeout": None,
        }

    def validate(self) -> None:
        """Always valid for testing."""
        pass

    def generate(
        self,
        prompt: str,
        *,
        timeout: float | None = None,
        context: dict[str, Any] | None = None,
    ) -> ProviderResult:
        self.call_history.append((prompt, timeout, context))
        path = target_path(prompt)

        if path in self._timeout_on:
            raise ProviderTimeoutError(f"fake provider timed out on {path}", timeout=timeout)
        if path in self._fail_on:
            raise ProviderError(f"fake provider failed on {path}")
        if path in self._responses:
            return ProviderResult(response=self._responses[path])
        if self._generator is not None:
            return ProviderResult(response=self._generator(path, prompt))
        return ProviderResult(response=f"// {path}")

    @property
    def prompts(self) -> list[str]:
        return [prompt for prompt, _, _ in self.call_history]

    def reset_history(self) -> None:
        """Clear call history."""
        self.call_history.clear()
