"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from urllib.parse import urlsplit

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, split_key_pool, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and API key setup.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="subscout doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    keys = settings.quake_key_pool()
    if keys:
        table.add_row("Quake API keys", "OK", f"{len(keys)} key(s) configured")
    else:
        table.add_row("Quake API keys", "MISSING", "Source will be skipped -> run `doctor setup-keys`")
    table.add_row("Quake endpoint", "OK", settings.quake_endpoint)
    table.add_row("Page delay", "OK", f"{settings.quake_page_delay_seconds:g}s")

    if not offline:
        parts = urlsplit(settings.quake_endpoint)
        ok_http, detail_http = asyncio.run(_check_http(f"{parts.scheme}://{parts.netloc}", settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup-keys")
def setup_keys() -> None:
    """Interactive API key setup (stores config in the user config .env)."""

    raw = typer.prompt("Quake API key(s), comma separated", hide_input=True).strip()
    keys = split_key_pool(raw)
    if not keys:
        raise typer.BadParameter("at least one API key is required")

    env_path = write_user_env_vars({"SUBSCOUT_QUAKE_API_KEYS": ",".join(keys)})
    _console.print(f"[green]Saved {len(keys)} Quake key(s) to:[/green] {env_path}")
