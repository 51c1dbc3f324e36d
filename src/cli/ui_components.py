"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import EnumerationResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite en modo `--silent`)."""

    title = Text("subscout", style="bold cyan")
    subtitle = Text("Passive subdomain discovery", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_statistics_table(result: EnumerationResult) -> Table:
    table = Table(title=f"Sources for {result.domain}")
    table.add_column("Source", style="cyan", no_wrap=True)
    table.add_column("Results", style="green", justify="right")
    table.add_column("Errors", style="red", justify="right")
    table.add_column("Time", style="white", justify="right")
    table.add_column("Status", style="dim")

    for name, stats in result.statistics.items():
        if stats.skipped:
            status = "skipped (no API key)"
        elif stats.errors:
            status = "; ".join(result.errors.get(name, [])) or "failed"
        else:
            status = "ok"
        table.add_row(
            name,
            str(stats.results),
            str(stats.errors),
            f"{stats.time_taken.total_seconds():.1f}s",
            status,
        )
    return table
