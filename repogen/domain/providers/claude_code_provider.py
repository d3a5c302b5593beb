"""Claude Code response provider using the Claude Agent SDK.

Uses the official claude-agent-sdk package for OS-agnostic Claude Code
integration. The assistant's text is taken as the generated file content;
by default only read-only tools are allowed so the agent can inspect files
already written under the output root but not write them itself.
"""

import asyncio
import shutil
import warnings
from typing import Any

from repogen.domain.errors import ProviderError, ProviderTimeoutError
from repogen.domain.models.provider_result import ProviderResult
from repogen.domain.providers.process_runner import run_sync
from repogen.domain.providers.response_provider import ResponseProvider


# Read-only tools: content comes back as text, the engine does the writing
DEFAULT_ALLOWED_TOOLS = ["Read", "Grep", "Glob"]

DEFAULT_TIMEOUT = 600

DEFAULT_SYSTEM_PROMPT = (
    "You generate the complete source of exactly one file. "
    "Reply with the raw file content only: no commentary and no markdown fences."
)


class ClaudeCodeProvider(ResponseProvider):
    """Response provider using Claude Agent SDK.

    Requirements:
        - claude-agent-sdk package must be installed
        - Claude Code CLI must be installed and authenticated (via `claude login`)

    Configuration:
        - model: Model to use (e.g., "sonnet", "opus")
        - allowed_tools: List of tools to allow (default: Read,Grep,Glob)
        - permission_mode: Permission mode (default: "default")
        - working_dir: Working directory for Claude
        - max_turns: Maximum agent iterations
        - system_prompt: Override the default single-file system prompt
        - timeout: Response timeout in seconds (default: 600)

    Example:
        provider = ClaudeCodeProvider({"model": "sonnet", "max_turns": 4})
        result = provider.generate("Generate src/index.ts", timeout=120)
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}
        self._validate_config()

        self._model = self.config.get("model")
        self._allowed_tools = self.config.get("allowed_tools", DEFAULT_ALLOWED_TOOLS)
        self._permission_mode = self.config.get("permission_mode", "default")
        self._working_dir = self.config.get("working_dir")
        self._max_turns = self.config.get("max_turns")
        self._system_prompt = self.config.get("system_prompt", DEFAULT_SYSTEM_PROMPT)
        self._timeout = self.config.get("timeout", DEFAULT_TIMEOUT)

    def _validate_config(self) -> None:
        """Validate configuration and warn on unknown keys.

        Raises:
            ValueError: If config values are invalid (e.g., negative max_turns)
        """
        if not self.config:
            return

        known_keys = set(self.get_metadata()["config_keys"])
        unknown_keys = set(self.config.keys()) - known_keys
        if unknown_keys:
            warnings.warn(
                f"Unknown ClaudeCodeProvider config keys ignored: {sorted(unknown_keys)}",
                UserWarning,
                stacklevel=3,
            )

        max_turns = self.config.get("max_turns")
        if max_turns is not None and max_turns < 1:
            raise ValueError("max_turns must be >= 1")

        timeout = self.config.get("timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be > 0")

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        """Return provider metadata."""
        return {
            "name": "claude-code",
            "description": "Claude Code AI agent via Agent SDK",
            "requires_config": False,
            "config_keys": [
                "model",
                "allowed_tools",
                "permission_mode",
                "working_dir",
                "max_turns",
                "system_prompt",
                "timeout",
            ],
            "default_response_timeout": DEFAULT_TIMEOUT,
        }

    def validate(self) -> None:
        """Verify SDK and CLI are available.

        Raises:
            ProviderError: If SDK not installed or CLI not found
        """
        try:
            from claude_agent_sdk import query  # noqa: F401
        except ImportError:
            raise ProviderError(
                "claude-agent-sdk not installed. "
                "Install with: pip install claude-agent-sdk"
            )

        if shutil.which("claude") is None:
            raise ProviderError(
                "Claude Code CLI not found. "
                "Install from: https://docs.anthropic.com/claude-code"
            )

    def generate(
        self,
        prompt: str,
        *,
        timeout: float | None = None,
        context: dict[str, Any] | None = None,
    ) -> ProviderResult:
        """Generate response using Claude Agent SDK.

        Uses run_sync() to wrap the async SDK in a sync interface.

        Raises:
            ProviderTimeoutError: If no complete response arrives within the timeout
            ProviderError: If SDK fails
        """
        effective_timeout = timeout if timeout is not None else self._timeout
        return run_sync(self._generate_with_timeout(prompt, context, effective_timeout))

    async def _generate_with_timeout(
        self,
        prompt: str,
        context: dict[str, Any] | None,
        timeout: float | None,
    ) -> ProviderResult:
        try:
            return await asyncio.wait_for(self._async_generate(prompt, context), timeout=timeout)
        except asyncio.TimeoutError:
            raise ProviderTimeoutError(
                f"Claude Code timed out after {timeout}s. Consider increasing the timeout.",
                timeout=timeout,
            )

    async def _async_generate(
        self,
        prompt: str,
        context: dict[str, Any] | None,
    ) -> ProviderResult:
        """Async implementation using Claude Agent SDK."""
        try:
            from claude_agent_sdk import query
            from claude_agent_sdk.types import AssistantMessage, TextBlock
        except ImportError:
            raise ProviderError(
                "claude-agent-sdk not installed. "
                "Install with: pip install claude-agent-sdk"
            )

        options = self._build_options(context)

        response_text = ""
        try:
            async for message in query(prompt=prompt, options=options):
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock):
                            response_text += block.text
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise self._wrap_sdk_error(e)

        return ProviderResult(response=response_text)

    def _build_options(self, context: dict[str, Any] | None) -> "ClaudeAgentOptions":
        """Build ClaudeAgentOptions from config and context."""
        from claude_agent_sdk import ClaudeAgentOptions

        cwd = self._working_dir
        if not cwd and context and context.get("output_root"):
            cwd = str(context["output_root"])

        return ClaudeAgentOptions(
            model=self._model,
            allowed_tools=self._allowed_tools,
            permission_mode=self._permission_mode,
            cwd=cwd,
            max_turns=self._max_turns,
            system_prompt=self._system_prompt,
        )

    def _wrap_sdk_error(self, error: Exception) -> ProviderError:
        """Wrap SDK exceptions with actionable error messages."""
        error_type = type(error).__name__

        if error_type == "CLINotFoundError":
            return ProviderError(
                "Claude Code CLI not found. "
                "Install from: https://docs.anthropic.com/claude-code"
            )
        elif error_type == "ProcessError":
            return ProviderError(f"Claude Code process failed: {error}")
        elif error_type == "CLIJSONDecodeError":
            return ProviderError(
                f"Invalid response from Claude Code CLI (malformed JSON): {error}"
            )
        else:
            return ProviderError(f"Claude Agent SDK error ({error_type}): {error}")
