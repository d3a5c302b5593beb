from .response_provider import ResponseProvider
from .provider_factory import ProviderFactory
from .codex_cli_provider import CodexCliProvider
from .claude_code_provider import ClaudeCodeProvider
from .command_provider import CommandProvider

# Register built-in providers
ProviderFactory.register("codex-cli", CodexCliProvider)
ProviderFactory.register("claude-code", ClaudeCodeProvider)
ProviderFactory.register("command", CommandProvider)

__all__ = [
    "ResponseProvider",
    "ProviderFactory",
    "CodexCliProvider",
    "ClaudeCodeProvider",
    "CommandProvider",
]
