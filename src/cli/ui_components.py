"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import PipelineResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se desactiva en modos no interactivos (`--json`, `--no-banner`).
    """

    title = Text("MAGAZINE STORE", style="bold cyan")
    subtitle = Text("Categorías • Suscriptores • Respuesta", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_catalog_table(result: PipelineResult) -> Table:
    table = Table(title="Catalog")
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Magazines", style="white", justify="right")
    for category in result.categories:
        table.add_row(escape(category), str(len(result.catalog.get(category, []))))
    return table


def build_qualified_table(result: PipelineResult) -> Table:
    """Tabla de suscriptores calificados, en el orden del roster."""

    by_id = {s.id: s for s in result.subscribers}
    table = Table(title=f"Qualified subscribers ({len(result.qualified_ids)}/{len(result.subscribers)})")
    table.add_column("Id", style="magenta", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Magazines", style="green", justify="right")
    for subscriber_id in result.qualified_ids:
        subscriber = by_id.get(subscriber_id)
        name = subscriber.full_name if subscriber else ""
        count = str(len(set(subscriber.magazine_ids))) if subscriber else "-"
        table.add_row(escape(subscriber_id), escape(name), count)
    return table


def build_failures_table(result: PipelineResult) -> Table:
    table = Table(title="Failed steps")
    table.add_column("Step", style="yellow", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Error", style="red")
    for outcome in result.failed_steps:
        status = str(outcome.status_code) if outcome.status_code is not None else "-"
        table.add_row(escape(outcome.step), status, escape(outcome.error or ""))
    return table


def build_answer_panel(result: PipelineResult) -> Panel:
    """Panel con el veredicto de la tienda tras el envío."""

    body = Text()
    answer = result.answer
    if answer is not None:
        if answer.answer_correct is True:
            body.append("Answer correct\n", style="bold green")
        elif answer.answer_correct is False:
            body.append("Answer incorrect\n", style="bold red")
        if answer.total_time:
            body.append(f"Total time: {answer.total_time}\n")
        if answer.should_be:
            body.append("Expected: " + ", ".join(answer.should_be) + "\n", style="dim")
    if result.answer_raw:
        body.append(result.answer_raw.strip(), style="dim")

    border = "green" if answer is not None and answer.answer_correct else "yellow"
    return Panel(body, title=Text("Answer", style="bold"), border_style=border)
