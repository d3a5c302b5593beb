"""Generic command response provider.

Runs any local generator: the prompt is written to the command's stdin and
stdout is taken as the generated content.
"""

import shutil
import warnings
from typing import Any

from repogen.domain.errors import ProviderError
from repogen.domain.models.provider_result import ProviderResult
from repogen.domain.providers.process_runner import run_process
from repogen.domain.providers.response_provider import ResponseProvider

DEFAULT_TIMEOUT = 600


class CommandProvider(ResponseProvider):
    """Response provider backed by an arbitrary local command.

    Configuration:
        - command: argv list, e.g. ["llm", "-m", "gpt-4.1"] (required)
        - working_dir: Working directory for the command
        - timeout: Process timeout in seconds (default: 600)
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}
        self._validate_config()

        self._command: list[str] = list(self.config.get("command") or [])
        self._working_dir = self.config.get("working_dir")
        self._timeout = self.config.get("timeout", DEFAULT_TIMEOUT)

    def _validate_config(self) -> None:
        known_keys = set(self.get_metadata()["config_keys"])
        unknown_keys = set(self.config.keys()) - known_keys
        if unknown_keys:
            warnings.warn(
                f"Unknown CommandProvider config keys ignored: {sorted(unknown_keys)}",
                UserWarning,
                stacklevel=3,
            )

        command = self.config.get("command")
        if command is not None and (
            not isinstance(command, list) or not command
            or not all(isinstance(part, str) for part in command)
        ):
            raise ValueError("command must be a non-empty list of strings")

        timeout = self.config.get("timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be > 0")

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        """Return provider metadata."""
        return {
            "name": "command",
            "description": "Any local command (prompt on stdin, content on stdout)",
            "requires_config": True,
            "config_keys": ["command", "working_dir", "timeout"],
            "default_response_timeout": DEFAULT_TIMEOUT,
        }

    def validate(self) -> None:
        """Verify a command is configured and resolvable.

        Raises:
            ProviderError: If no command is configured or it cannot be found
        """
        if not self._command:
            raise ProviderError("CommandProvider requires a 'command' in provider_config")
        if shutil.which(self._command[0]) is None:
            raise ProviderError(f"Command not found: {self._command[0]}")

    def generate(
        self,
        prompt: str,
        *,
        timeout: float | None = None,
        context: dict[str, Any] | None = None,
    ) -> ProviderResult:
        if not self._command:
            raise ProviderError("CommandProvider requires a 'command' in provider_config")

        cwd = self._working_dir
        if not cwd and context and context.get("output_root"):
            cwd = str(context["output_root"])

        effective_timeout = timeout if timeout is not None else self._timeout
        output = run_process(self._command, stdin=prompt, cwd=cwd, timeout=effective_timeout)

        if output.returncode != 0:
            raise ProviderError(
                f"{self._command[0]} failed (exit {output.returncode}): {output.stderr}"
            )

        return ProviderResult(response=output.stdout, stderr=output.stderr or None)
