"""Outcome of one pipeline invocation."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RunStatus(str, Enum):
    SUCCESS = "success"  # Every file generated and written
    FAILED = "failed"    # Halted at `failed_path`; partial output listed


class ErrorKind(str, Enum):
    """Classification of a per-step failure."""

    PROVIDER = "provider"      # Generation capability reported an error
    TIMEOUT = "timeout"        # Generation exceeded the caller's timeout
    FILESYSTEM = "filesystem"  # Directory or file operation failed


class RunResult(BaseModel):
    """Success or failure record for one run.

    On failure `written_paths` holds exactly the files fully written before the
    failing step, in generation order. `failed_path` is None when the failure
    happened while preparing the output root.
    """

    model_config = ConfigDict(frozen=True)

    status: RunStatus
    output_root: str
    written_paths: list[str] = Field(default_factory=list)
    failed_path: str | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.SUCCESS

    @classmethod
    def success(cls, output_root: str, written_paths: list[str]) -> "RunResult":
        return cls(
            status=RunStatus.SUCCESS,
            output_root=output_root,
            written_paths=list(written_paths),
        )

    @classmethod
    def failure(
        cls,
        output_root: str,
        written_paths: list[str],
        *,
        failed_path: str | None,
        error: str,
        error_kind: ErrorKind,
    ) -> "RunResult":
        return cls(
            status=RunStatus.FAILED,
            output_root=output_root,
            written_paths=list(written_paths),
            failed_path=failed_path,
            error=error,
            error_kind=error_kind,
        )

    def to_payload(self) -> dict[str, Any]:
        """Render the caller-facing payload.

        Success: {"path", "files"}. Failure adds "failed_path", "error" and
        "error_kind" so a caller can report a 5xx with diagnostic detail.
        """
        payload: dict[str, Any] = {
            "path": self.output_root,
            "files": list(self.written_paths),
        }
        if not self.succeeded:
            payload["failed_path"] = self.failed_path
            payload["error"] = self.error
            payload["error_kind"] = self.error_kind.value if self.error_kind else None
        return payload
