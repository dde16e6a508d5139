"""CLI principal (Typer).

Comandos:
- `run`: token → categorías → revistas/suscriptores → cálculo → envío.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
import json

import typer
from rich.console import Console
from rich.markup import escape

from adapters.magazine_store import MagazineStoreClient
from cli import doctor
from cli.logging_config import configure_logging
from cli.options import settings_from_cli
from cli.ui_components import (
    build_answer_panel,
    build_catalog_table,
    build_failures_table,
    build_qualified_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import PipelineResult, StepOutcome
from core.services.answer_pipeline import PipelineHooks, run_pipeline

app = typer.Typer(
    no_args_is_help=True,
    help="Find subscribers with a subscription in every category and submit them.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _print_step(outcome: StepOutcome) -> None:
    status = "[green]ok[/green]  " if outcome.ok else "[red]fail[/red]"
    _console.print(f"{status} {escape(outcome.step)}")


async def _execute(settings: AppSettings, *, submit: bool, strict: bool, quiet: bool) -> PipelineResult:
    hooks = PipelineHooks(
        warning=None if quiet else (lambda msg: _console.print(f"[yellow]warning:[/yellow] {escape(msg)}")),
        step_done=None if quiet else _print_step,
    )
    async with MagazineStoreClient(settings) as store:
        return await run_pipeline(
            settings=settings,
            store=store,
            hooks=hooks,
            submit=submit,
            strict=strict,
        )


def _result_payload(result: PipelineResult) -> dict[str, object]:
    payload = result.model_dump(mode="json", include={"qualified_ids", "categories", "submitted", "answer_raw"})
    payload["answer"] = result.answer.model_dump(mode="json", by_alias=True) if result.answer else None
    payload["degraded"] = result.degraded
    payload["failed_steps"] = [s.model_dump(mode="json") for s in result.failed_steps]
    return payload


@app.command()
def run(
    base_url: str | None = typer.Option(None, "--base-url", help="Override MAGSTORE_BASE_URL."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Compute the answer without submitting it."),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Do not submit (and exit 1) when any fetch failed.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Hide the banner."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, ...)."),
) -> None:
    """Run the full fetch → qualify → submit pipeline."""

    settings = settings_from_cli(base_url=base_url, log_level=log_level)
    configure_logging(settings.log_level)

    if not (as_json or no_banner):
        print_banner(_console)

    result = asyncio.run(_execute(settings, submit=not dry_run, strict=strict, quiet=as_json))

    if as_json:
        typer.echo(json.dumps(_result_payload(result), ensure_ascii=False, indent=2))
    else:
        _console.print(build_catalog_table(result))
        _console.print(build_qualified_table(result))
        if result.degraded:
            _console.print(build_failures_table(result))
        if result.submitted:
            _console.print(build_answer_panel(result))
        elif dry_run:
            _console.print("[dim]Dry run: answer not submitted.[/dim]")

    if strict and result.degraded:
        raise typer.Exit(code=1)


def run_cli() -> None:
    app()
