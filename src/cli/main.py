"""CLI principal (Typer).

Comandos:
- `enum`: enumera subdominios de un dominio con las fuentes configuradas.
- `doctor`: diagnóstico del entorno y configuración de API keys.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_enumeration_json
from adapters.subdomain_sources import SOURCES, build_sources
from cli import doctor
from cli.ui_components import build_statistics_table, print_banner
from core.cancellation import CancelToken
from core.config import AppSettings
from core.domain.models import ResultItem
from core.log import configure_logging
from core.services.enumeration_pipeline import PipelineHooks, enumerate_domain, normalize_domain

app = typer.Typer(no_args_is_help=True, help="Passive subdomain discovery.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.command(name="enum")
def enum_command(
    domain: str = typer.Argument(..., help="Target domain (e.g. example.com)."),
    source: Optional[List[str]] = typer.Option(
        None, "--source", "-s", help=f"Source to use (repeatable). Available: {', '.join(SOURCES)}."
    ),
    all_sources: bool = typer.Option(False, "--all", help="Use every source, not only the default ones."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Export the result to a JSON file."),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Overall deadline in seconds."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    silent: bool = typer.Option(False, "--silent", help="Print hostnames only."),
) -> None:
    """Enumerate subdomains of DOMAIN and print them as they are found."""

    settings = AppSettings()
    configure_logging(settings.log_level, verbose=verbose, console=_err_console)

    try:
        target = normalize_domain(domain)
    except ValueError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    try:
        sources = build_sources(settings, names=source, include_all=all_sources)
    except KeyError as exc:
        raise typer.BadParameter(f"unknown source: {exc.args[0]}", param_hint="--source")

    if not silent:
        print_banner(_console)

    def on_error(item: ResultItem) -> None:
        if not silent:
            _err_console.print(f"[red]error[/red] {item.error}")

    hooks = PipelineHooks(
        on_result=lambda item: typer.echo(item.value),
        on_error=on_error,
    )
    result = asyncio.run(
        enumerate_domain(domain=target, sources=sources, token=CancelToken(timeout), hooks=hooks)
    )

    if not silent:
        _console.print(build_statistics_table(result))
        _console.print(f"[green]{len(result.hostnames)}[/green] unique hostnames for {result.domain}")

    if json_path is not None:
        path = export_enumeration_json(result=result, output_path=json_path)
        if not silent:
            _console.print(f"[green]Saved JSON to:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
