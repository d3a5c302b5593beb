"""Codex CLI response provider using subprocess.

Runs the `codex` CLI non-interactively with the prompt as a single argument
and treats stdout as the generated file content. Arguments are passed as an
argv list, so the prompt never goes through a shell.
"""

import logging
import shutil
import warnings
from typing import Any

from repogen.domain.errors import ProviderError
from repogen.domain.models.provider_result import ProviderResult
from repogen.domain.providers.process_runner import run_process
from repogen.domain.providers.response_provider import ResponseProvider

logger = logging.getLogger(__name__)

# Valid approval modes
VALID_APPROVAL_MODES = {"suggest", "auto-edit", "full-auto"}

# Default timeout (10 minutes)
DEFAULT_TIMEOUT = 600


class CodexCliProvider(ResponseProvider):
    """Codex CLI response provider using subprocess.

    Requirements:
        - Codex CLI must be installed and on PATH (or `command` configured)
        - Credentials for the chosen backend (e.g. OPENAI_API_KEY) in the environment

    Configuration:
        - command: Executable name or path (default: codex)
        - model: Model to use (default: gpt-4.1)
        - provider: Backend provider passed via -p (default: openai)
        - approval_mode: suggest, auto-edit, full-auto (default: full-auto)
        - quiet: Pass --quiet for non-interactive output (default: True)
        - extra_args: Additional CLI arguments
        - working_dir: Working directory for the CLI
        - timeout: Process timeout in seconds (default: 600)
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}
        self._validate_config()

        self._command = self.config.get("command", "codex")
        self._model = self.config.get("model", "gpt-4.1")
        self._provider = self.config.get("provider", "openai")
        self._approval_mode = self.config.get("approval_mode", "full-auto")
        self._quiet = self.config.get("quiet", True)
        self._extra_args: list[str] = self.config.get("extra_args", [])
        self._working_dir = self.config.get("working_dir")
        self._timeout = self.config.get("timeout", DEFAULT_TIMEOUT)

    def _validate_config(self) -> None:
        """Validate configuration and warn on unknown keys.

        Raises:
            ValueError: If config values are invalid
        """
        if not self.config:
            return

        known_keys = set(self.get_metadata()["config_keys"])
        unknown_keys = set(self.config.keys()) - known_keys
        if unknown_keys:
            warnings.warn(
                f"Unknown CodexCliProvider config keys ignored: {sorted(unknown_keys)}",
                UserWarning,
                stacklevel=3,
            )

        timeout = self.config.get("timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be > 0")

        approval_mode = self.config.get("approval_mode")
        if approval_mode is not None and approval_mode not in VALID_APPROVAL_MODES:
            raise ValueError(
                f"approval_mode must be one of {sorted(VALID_APPROVAL_MODES)}, "
                f"got: {approval_mode!r}"
            )

        extra_args = self.config.get("extra_args")
        if extra_args is not None and not isinstance(extra_args, list):
            raise ValueError(f"extra_args must be a list, got: {type(extra_args).__name__}")

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        """Return provider metadata."""
        return {
            "name": "codex-cli",
            "description": "Codex CLI via subprocess (stdout is the file content)",
            "requires_config": False,
            "config_keys": [
                "command",
                "model",
                "provider",
                "approval_mode",
                "quiet",
                "extra_args",
                "working_dir",
                "timeout",
            ],
            "default_response_timeout": DEFAULT_TIMEOUT,
        }

    def validate(self) -> None:
        """Verify the Codex CLI is available.

        Raises:
            ProviderError: If the CLI is not installed
        """
        if shutil.which(self._command) is None:
            raise ProviderError(
                f"Codex CLI not found ({self._command}). "
                "Install from: https://github.com/openai/codex"
            )

    def generate(
        self,
        prompt: str,
        *,
        timeout: float | None = None,
        context: dict[str, Any] | None = None,
    ) -> ProviderResult:
        """Generate file content by running the Codex CLI.

        Args:
            prompt: The prompt to send
            timeout: Caller timeout in seconds; overrides the configured timeout
            context: Optional context dict, may contain:
                - output_root: Working directory fallback

        Returns:
            ProviderResult with stdout as the response

        Raises:
            ProviderTimeoutError: If the process exceeds the timeout
            ProviderError: If the process fails or exits non-zero
        """
        argv = [self._command, *self._build_args(), prompt]

        cwd = self._working_dir
        if not cwd and context and context.get("output_root"):
            cwd = str(context["output_root"])

        effective_timeout = timeout if timeout is not None else self._timeout
        output = run_process(argv, cwd=cwd, timeout=effective_timeout)

        if output.returncode != 0:
            raise self._wrap_process_error(output.returncode, output.stderr)

        if output.stderr:
            logger.warning(f"Codex CLI stderr: {output.stderr.strip()}")

        return ProviderResult(response=output.stdout, stderr=output.stderr or None)

    def _build_args(self) -> list[str]:
        """Build CLI arguments (excluding the prompt) from config."""
        args: list[str] = []
        if self._model:
            args.extend(["-m", self._model])
        if self._provider:
            args.extend(["-p", self._provider])
        if self._approval_mode:
            args.extend(["-a", self._approval_mode])
        if self._quiet:
            args.append("--quiet")
        args.extend(self._extra_args)
        return args

    def _wrap_process_error(self, returncode: int, stderr: str) -> ProviderError:
        """Wrap subprocess errors with actionable messages."""
        stderr_lower = stderr.lower()

        if "api key" in stderr_lower or "api_key" in stderr_lower:
            return ProviderError(
                f"Codex CLI authentication error. Check OPENAI_API_KEY.\n{stderr}"
            )
        elif returncode == 127:
            return ProviderError(
                "Codex CLI not found. Install from: https://github.com/openai/codex"
            )
        else:
            return ProviderError(f"Codex CLI failed (exit {returncode}): {stderr}")
