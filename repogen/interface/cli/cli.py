import click
import logging
from pathlib import Path
from pydantic import BaseModel

from repogen.application.config_loader import load_settings
from repogen.application.spec_loader import dump_manifest, load_manifest, load_project_spec
from repogen.domain.errors import CircularDependencyError
from repogen.interface.cli.output_models import (
    GenerateOutput,
    OrderOutput,
    PlanOutput,
    ProvidersOutput,
    provider_summary,
)

logger = logging.getLogger(__name__)


def _json_emit(model: BaseModel) -> None:
    # Single-line JSON, omit None fields (e.g., GenerateOutput.failed_path on success).
    click.echo(model.model_dump_json(exclude_none=True), nl=True)


def _get_json_mode(ctx: click.Context) -> bool:
    obj = ctx.obj or {}
    return bool(obj.get("json", False))


def _format_error(e: Exception) -> str:
    """Format exception into user-friendly message."""
    if isinstance(e, FileNotFoundError):
        return f"File not found: {e.filename}" if e.filename else str(e)
    if isinstance(e, KeyError):
        return str(e.args[0]) if e.args else str(e)
    return str(e)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group(help="Dependency-ordered repository generator.")
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable JSON on stdout.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr.")
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj["json"] = bool(json_output)
    _configure_logging(verbose)


@cli.command("generate")
@click.option("--spec", "spec_file", required=True, type=click.Path(path_type=Path), help="Project spec (YAML/JSON).")
@click.option("--manifest", "manifest_file", required=True, type=click.Path(path_type=Path), help="File manifest (YAML/JSON).")
@click.option("--output", "output_dir", required=False, type=click.Path(path_type=Path), help="Output root (default: <output_base_dir>/<project slug>).")
@click.option("--provider", "provider_key", required=False, type=str, help="Provider key (overrides config).")
@click.option("--timeout", "timeout_seconds", required=False, type=float, help="Per-file generation timeout in seconds.")
@click.option("--max-chars", "max_chars_per_entry", required=False, type=int, help="Context excerpt size per generated file.")
@click.option(
    "--on-failure",
    "on_failure",
    required=False,
    type=click.Choice(["keep", "remove"]),
    help="Keep partial output or remove the output root when a step fails.",
)
@click.option("--events", "show_events", is_flag=True, help="Print run events to stderr.")
@click.pass_context
def generate_cmd(
    ctx: click.Context,
    spec_file: Path,
    manifest_file: Path,
    output_dir: Path | None,
    provider_key: str | None,
    timeout_seconds: float | None,
    max_chars_per_entry: int | None,
    on_failure: str | None,
    show_events: bool,
) -> None:
    try:
        from repogen.application.generation_orchestrator import generate_repository
        from repogen.domain.events.emitter import RunEventEmitter
        from repogen.domain.events.stderr_observer import StderrEventObserver
        from repogen.domain.providers.provider_factory import ProviderFactory

        settings = load_settings(
            project_root=Path.cwd(),
            user_home=Path.home(),
            overrides={
                "provider": provider_key,
                "timeout_seconds": timeout_seconds,
                "max_chars_per_entry": max_chars_per_entry,
                "on_failure": on_failure,
            },
        )

        project = load_project_spec(spec_file)
        manifest = load_manifest(manifest_file)
        output_root = output_dir if output_dir is not None else Path(settings.output_base_dir) / project.slug()

        provider = ProviderFactory.create(settings.provider, settings.provider_config)
        provider.validate()

        emitter = RunEventEmitter()
        if show_events:
            emitter.subscribe(StderrEventObserver())

        result = generate_repository(
            project,
            manifest,
            output_root,
            settings,
            provider=provider,
            event_emitter=emitter,
        )

        if _get_json_mode(ctx):
            _json_emit(
                GenerateOutput(
                    exit_code=0 if result.succeeded else 1,
                    path=result.output_root,
                    files=result.written_paths,
                    failed_path=result.failed_path,
                    error=result.error,
                    error_kind=result.error_kind.value if result.error_kind else None,
                )
            )
            raise click.exceptions.Exit(0 if result.succeeded else 1)

        click.echo(f"path={result.output_root}")
        for written in result.written_paths:
            click.echo(written)

        if not result.succeeded:
            raise click.ClickException(
                f"Generation failed at {result.failed_path or result.output_root}: {result.error}"
            )

    except (click.exceptions.Exit, click.ClickException):
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(GenerateOutput(exit_code=1, error=_format_error(e)))
            raise click.exceptions.Exit(1)
        raise click.ClickException(_format_error(e)) from e


@cli.command("order")
@click.option("--manifest", "manifest_file", required=True, type=click.Path(path_type=Path), help="File manifest (YAML/JSON).")
@click.pass_context
def order_cmd(ctx: click.Context, manifest_file: Path) -> None:
    try:
        from repogen.domain.graph.dependency_sorter import sort_manifest

        manifest = load_manifest(manifest_file)
        order = sort_manifest(manifest)
        unresolved = [
            {"dependent": item.dependent, "missing": item.missing} for item in order.unresolved
        ]

        if _get_json_mode(ctx):
            _json_emit(OrderOutput(exit_code=0, files=order.paths, unresolved=unresolved))
            raise click.exceptions.Exit(0)

        for item in order.unresolved:
            click.echo(f"warning: '{item.dependent}' depends on unknown '{item.missing}'", err=True)
        for path in order.paths:
            click.echo(path)

    except click.exceptions.Exit:
        raise
    except CircularDependencyError as e:
        if _get_json_mode(ctx):
            _json_emit(OrderOutput(exit_code=1, error=str(e), cycle=e.cycle))
            raise click.exceptions.Exit(1)
        raise click.ClickException(str(e)) from e
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(OrderOutput(exit_code=1, error=_format_error(e)))
            raise click.exceptions.Exit(1)
        raise click.ClickException(_format_error(e)) from e


@cli.command("plan")
@click.option("--spec", "spec_file", required=True, type=click.Path(path_type=Path), help="Project spec (YAML/JSON).")
@click.option("--out", "out_file", default=Path("manifest.yml"), show_default=True, type=click.Path(path_type=Path))
@click.option("--provider", "provider_key", required=False, type=str, help="Provider key (overrides config).")
@click.option("--timeout", "timeout_seconds", required=False, type=float, help="Planning timeout in seconds.")
@click.pass_context
def plan_cmd(
    ctx: click.Context,
    spec_file: Path,
    out_file: Path,
    provider_key: str | None,
    timeout_seconds: float | None,
) -> None:
    try:
        from repogen.application.manifest_planner import ManifestPlanner
        from repogen.domain.providers.provider_factory import ProviderFactory

        settings = load_settings(
            project_root=Path.cwd(),
            user_home=Path.home(),
            overrides={"provider": provider_key, "timeout_seconds": timeout_seconds},
        )
        project = load_project_spec(spec_file)

        provider = ProviderFactory.create(settings.provider, settings.provider_config)
        provider.validate()

        manifest = ManifestPlanner(provider, timeout_seconds=settings.timeout_seconds).plan(project)
        dump_manifest(manifest, out_file)

        if _get_json_mode(ctx):
            _json_emit(PlanOutput(exit_code=0, manifest_path=str(out_file), files=manifest.paths()))
            raise click.exceptions.Exit(0)

        click.echo(str(out_file))

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(PlanOutput(exit_code=1, error=_format_error(e)))
            raise click.exceptions.Exit(1)
        raise click.ClickException(_format_error(e)) from e


@cli.command("providers")
@click.pass_context
def providers_cmd(ctx: click.Context) -> None:
    from repogen.domain.providers.provider_factory import ProviderFactory

    summaries = [
        provider_summary(key, ProviderFactory.get_metadata(key))
        for key in ProviderFactory.list_providers()
    ]

    if _get_json_mode(ctx):
        _json_emit(ProvidersOutput(exit_code=0, providers=summaries))
        raise click.exceptions.Exit(0)

    for summary in summaries:
        click.echo(f"{summary.name}\t{summary.description}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
