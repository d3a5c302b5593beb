"""Sequential, dependency-ordered generation of a project's files.

One run: sort the manifest, reset the output root, then for each file in
order compose a prompt from the files already written, call the provider,
write the result and feed it forward. The first failing step halts the run.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from repogen.application.config_models import FailurePolicy, GenerationSettings
from repogen.application.filesystem_sink import FilesystemSink
from repogen.application.prompt_builder import build_file_prompt
from repogen.domain.context.generation_context import (
    DEFAULT_MAX_CHARS_PER_ENTRY,
    GenerationContext,
    render_context,
)
from repogen.domain.errors import ProviderError, ProviderTimeoutError, SinkError
from repogen.domain.events.emitter import RunEventEmitter
from repogen.domain.events.event import RunEvent
from repogen.domain.events.event_types import RunEventType
from repogen.domain.graph.dependency_sorter import sort_manifest
from repogen.domain.models.manifest import Manifest
from repogen.domain.models.project_spec import ProjectSpec
from repogen.domain.models.provider_result import ProviderResult
from repogen.domain.models.run_result import ErrorKind, RunResult
from repogen.domain.providers.provider_factory import ProviderFactory
from repogen.domain.providers.response_provider import ResponseProvider

logger = logging.getLogger(__name__)


@dataclass
class GenerationOrchestrator:
    """Drives one generation run per `run()` call.

    The orchestrator itself holds no per-run state: the generation context,
    sink and written-path list are created inside `run()`, so one instance
    may serve concurrent runs against distinct output roots.
    """

    provider: ResponseProvider
    timeout_seconds: float | None = None
    max_chars_per_entry: int = DEFAULT_MAX_CHARS_PER_ENTRY
    on_failure: FailurePolicy = FailurePolicy.KEEP_PARTIAL
    event_emitter: RunEventEmitter | None = None

    def __post_init__(self) -> None:
        if self.max_chars_per_entry < 0:
            raise ValueError("max_chars_per_entry must be >= 0")
        if self.event_emitter is None:
            self.event_emitter = RunEventEmitter()

    @classmethod
    def from_settings(
        cls,
        settings: GenerationSettings,
        *,
        provider: ResponseProvider | None = None,
        event_emitter: RunEventEmitter | None = None,
    ) -> "GenerationOrchestrator":
        """Build an orchestrator, creating the configured provider if none is given."""
        if provider is None:
            provider = ProviderFactory.create(settings.provider, settings.provider_config)
        return cls(
            provider=provider,
            timeout_seconds=settings.timeout_seconds,
            max_chars_per_entry=settings.max_chars_per_entry,
            on_failure=settings.on_failure,
            event_emitter=event_emitter,
        )

    def run(self, manifest: Manifest, project_context: str, output_root: Path | str) -> RunResult:
        """Generate every manifest file under `output_root`.

        Args:
            manifest: Files to generate with their declared dependencies
            project_context: Opaque project description included in every prompt
            output_root: Directory that receives the tree; replaced if it exists

        Returns:
            Success RunResult, or a failure RunResult naming the failing path
            and listing the files written before it

        Raises:
            CircularDependencyError: Before any filesystem change
        """
        order = sort_manifest(manifest)

        root = Path(output_root)
        root_str = str(root)
        sink = FilesystemSink(root)
        total = len(order)

        self._emit(RunEventType.RUN_STARTED, root_str, total=total)
        for item in order.unresolved:
            self._emit(
                RunEventType.DEPENDENCY_UNRESOLVED,
                root_str,
                path=item.dependent,
                metadata={"missing": item.missing},
            )

        try:
            removed = sink.reset()
        except SinkError as e:
            return self._fail(sink, [], None, e, ErrorKind.FILESYSTEM)
        if removed:
            self._emit(RunEventType.OUTPUT_RESET, root_str)

        context = GenerationContext()
        written: list[str] = []

        for position, spec in enumerate(order, start=1):
            self._emit(RunEventType.FILE_STARTED, root_str, path=spec.path, position=position, total=total)
            logger.info(f"Generating content for {spec.path} ({position}/{total})")

            prompt = build_file_prompt(
                spec,
                project_context,
                render_context(context, self.max_chars_per_entry),
            )

            try:
                sink.ensure_parent(spec.path)
                result = self._generate(prompt, {"output_root": root_str, "path": spec.path})
                content = (result.response or "").strip()
                if not content:
                    logger.warning(f"No content generated for {spec.path}. The file will be empty.")
                    self._emit(RunEventType.FILE_EMPTY, root_str, path=spec.path, position=position, total=total)
                committed = self._commit(sink, spec.path, content)
            except ProviderTimeoutError as e:
                return self._fail(sink, written, spec.path, e, ErrorKind.TIMEOUT)
            except ProviderError as e:
                return self._fail(sink, written, spec.path, e, ErrorKind.PROVIDER)
            except SinkError as e:
                return self._fail(sink, written, spec.path, e, ErrorKind.FILESYSTEM)

            context.update(spec.path, committed)
            written.append(spec.path)
            self._emit(RunEventType.FILE_WRITTEN, root_str, path=spec.path, position=position, total=total)

        self._emit(RunEventType.RUN_COMPLETED, root_str, total=total, metadata={"files": list(written)})
        return RunResult.success(root_str, written)

    def _generate(self, prompt: str, context: dict[str, Any]) -> ProviderResult:
        """Call the provider, reporting any failure it raises as a ProviderError."""
        try:
            return self.provider.generate(prompt, timeout=self.timeout_seconds, context=context)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"Provider raised {type(e).__name__}: {e}") from e

    def _commit(self, sink: FilesystemSink, path: str, content: str) -> str:
        """Write `content` and return what was read back from disk.

        A file that cannot be read back is removed again, so a failed step
        never leaves its own file behind.
        """
        sink.write_file(path, content)
        try:
            return sink.read_file(path)
        except SinkError:
            try:
                sink.remove_file(path)
            except SinkError as cleanup_error:
                logger.error(f"Failed to remove unreadable file {path}: {cleanup_error}")
            raise

    def _fail(
        self,
        sink: FilesystemSink,
        written: list[str],
        failed_path: str | None,
        error: Exception,
        kind: ErrorKind,
    ) -> RunResult:
        root_str = str(sink.root)
        logger.error(f"Generation failed at {failed_path or root_str} ({kind.value}): {error}")

        if self.on_failure == FailurePolicy.REMOVE_OUTPUT:
            try:
                sink.remove_all()
            except SinkError as cleanup_error:
                logger.error(f"Failed to remove output after failure: {cleanup_error}")

        self._emit(
            RunEventType.RUN_FAILED,
            root_str,
            path=failed_path,
            metadata={"error": str(error), "error_kind": kind.value, "files": list(written)},
        )
        return RunResult.failure(
            root_str,
            written,
            failed_path=failed_path,
            error=str(error),
            error_kind=kind,
        )

    def _emit(
        self,
        event_type: RunEventType,
        output_root: str,
        *,
        path: str | None = None,
        position: int | None = None,
        total: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        assert self.event_emitter is not None
        self.event_emitter.emit(
            RunEvent(
                event_type=event_type,
                output_root=output_root,
                timestamp=datetime.now(timezone.utc),
                path=path,
                position=position,
                total=total,
                metadata=metadata or {},
            )
        )


def generate_repository(
    project: ProjectSpec,
    manifest: Manifest,
    output_root: Path | str,
    settings: GenerationSettings,
    *,
    provider: ResponseProvider | None = None,
    event_emitter: RunEventEmitter | None = None,
) -> RunResult:
    """Run the pipeline for a validated project record."""
    orchestrator = GenerationOrchestrator.from_settings(
        settings, provider=provider, event_emitter=event_emitter
    )
    return orchestrator.run(manifest, project.to_context_string(), output_root)
