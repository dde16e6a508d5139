"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.magazine_store import MagazineStoreClient
from cli.options import settings_from_cli
from core.config import AppSettings, get_user_env_file
from core.domain.errors import StoreError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_token(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with MagazineStoreClient(settings) as store:
            token = await store.get_token()
    except StoreError as exc:
        return False, str(exc)
    if not token:
        return False, "Response has no token"
    return True, "Token issued"


@app.command()
def run(
    base_url: str | None = typer.Option(None, "--base-url", help="Override MAGSTORE_BASE_URL."),
) -> None:
    """Show the effective configuration and check the token endpoint."""

    settings = settings_from_cli(base_url=base_url)

    table = Table(title="Magazine Store Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Max concurrency", "OK", str(settings.fetch_max_concurrency))
    env_file = get_user_env_file()
    table.add_row("User .env", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    # Connectivity (best-effort)
    ok_token, detail_token = asyncio.run(_check_token(settings))
    table.add_row("GET /api/token", "OK" if ok_token else "FAIL", detail_token)

    _console.print(table)

    if not ok_token:
        raise typer.Exit(code=1)
