"""Unit tests for CodexCliProvider."""

from unittest.mock import patch

import pytest

from repogen.domain.errors import ProviderError, ProviderTimeoutError
from repogen.domain.providers.codex_cli_provider import DEFAULT_TIMEOUT, CodexCliProvider
from repogen.domain.providers.process_runner import ProcessOutput

RUN_PROCESS = "repogen.domain.providers.codex_cli_provider.run_process"


class TestCodexCliProviderInit:
    """Tests for provider initialization."""

    def test_defaults(self):
        provider = CodexCliProvider()

        assert provider._command == "codex"
        assert provider._timeout == DEFAULT_TIMEOUT
        assert provider._build_args() == ["-m", "gpt-4.1", "-p", "openai", "-a", "full-auto", "--quiet"]

    def test_custom_config(self):
        provider = CodexCliProvider(
            {"model": "o4-mini", "approval_mode": "suggest", "quiet": False, "extra_args": ["--no-color"]}
        )
        assert provider._build_args() == ["-m", "o4-mini", "-p", "openai", "-a", "suggest", "--no-color"]

    def test_unknown_config_keys_emit_warning(self):
        with pytest.warns(UserWarning, match="Unknown CodexCliProvider config keys"):
            CodexCliProvider({"bogus": True})

    def test_invalid_approval_mode(self):
        with pytest.raises(ValueError, match="approval_mode must be one of"):
            CodexCliProvider({"approval_mode": "yolo"})

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="timeout must be > 0"):
            CodexCliProvider({"timeout": 0})

    def test_extra_args_must_be_list(self):
        with pytest.raises(ValueError, match="extra_args must be a list"):
            CodexCliProvider({"extra_args": "--flag"})


class TestCodexCliProviderValidation:
    def test_validate_passes_when_cli_available(self):
        with patch("shutil.which", return_value="/usr/bin/codex"):
            CodexCliProvider().validate()

    def test_validate_fails_when_cli_not_found(self):
        with patch("shutil.which", return_value=None):
            with pytest.raises(ProviderError, match="Codex CLI not found"):
                CodexCliProvider().validate()


class TestCodexCliProviderGenerate:
    def test_prompt_is_last_argument(self):
        with patch(RUN_PROCESS, return_value=ProcessOutput(0, "export const a = 1;\n", "")) as mock_run:
            result = CodexCliProvider().generate("make a.ts", context={"output_root": "/out"})

        argv = mock_run.call_args[0][0]
        assert argv[0] == "codex"
        assert argv[-1] == "make a.ts"
        assert mock_run.call_args[1]["cwd"] == "/out"
        assert mock_run.call_args[1]["timeout"] == DEFAULT_TIMEOUT
        assert result.response == "export const a = 1;\n"
        assert result.stderr is None

    def test_caller_timeout_overrides_config(self):
        with patch(RUN_PROCESS, return_value=ProcessOutput(0, "x", "")) as mock_run:
            CodexCliProvider({"timeout": 100}).generate("p", timeout=5)

        assert mock_run.call_args[1]["timeout"] == 5

    def test_working_dir_takes_priority(self):
        with patch(RUN_PROCESS, return_value=ProcessOutput(0, "x", "")) as mock_run:
            CodexCliProvider({"working_dir": "/w"}).generate("p", context={"output_root": "/out"})

        assert mock_run.call_args[1]["cwd"] == "/w"

    def test_nonzero_exit_raises(self):
        with patch(RUN_PROCESS, return_value=ProcessOutput(2, "", "boom")):
            with pytest.raises(ProviderError, match=r"exit 2"):
                CodexCliProvider().generate("p")

    def test_auth_error_is_actionable(self):
        with patch(RUN_PROCESS, return_value=ProcessOutput(1, "", "Missing API key")):
            with pytest.raises(ProviderError, match="OPENAI_API_KEY"):
                CodexCliProvider().generate("p")

    def test_stderr_on_success_is_kept(self):
        with patch(RUN_PROCESS, return_value=ProcessOutput(0, "content", "note")):
            result = CodexCliProvider().generate("p")

        assert result.response == "content"
        assert result.stderr == "note"

    def test_timeout_propagates(self):
        with patch(RUN_PROCESS, side_effect=ProviderTimeoutError("slow", timeout=1)):
            with pytest.raises(ProviderTimeoutError):
                CodexCliProvider().generate("p", timeout=1)
