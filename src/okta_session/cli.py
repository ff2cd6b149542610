"""CLI for Okta-authenticated requests."""

import os
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from .config import OktaConfig
from .exceptions import OktaSessionError
from .prompts import ConsolePrompter
from .session import OktaSession
from .store import CookieStore

app = typer.Typer(help="Okta SSO session CLI")
console = Console()


def load_env():
    """Load environment from local.env if present."""
    # Try project root first, then parent directories
    for parent in [Path.cwd()] + list(Path.cwd().parents)[:3]:
        env_file = parent / "local.env"
        if env_file.exists():
            with open(env_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, _, value = line.partition("=")
                        value = value.strip().strip('"').strip("'")
                        os.environ.setdefault(key.strip(), value)
            break


def _session() -> OktaSession:
    load_env()
    config = OktaConfig.from_env()
    missing = config.validate()
    if missing:
        console.print(f"[red]Error:[/red] missing configuration: {', '.join(missing)}")
        raise typer.Exit(1)
    try:
        return OktaSession(config, prompter=ConsolePrompter(console))
    except OktaSessionError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def get(
    path: str = typer.Argument(..., help="Path on the service host"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write body to file"),
):
    """GET a path on the service, signing in when needed."""
    session = _session()
    try:
        response = session.get(path)
    except (OktaSessionError, httpx.HTTPError) as e:
        console.print(f"[red]✗ Request failed:[/red] {e}")
        raise typer.Exit(1)

    if output:
        output.write_bytes(response.content)
        console.print(f"[green]✓[/green] Saved {len(response.content)} bytes to {output}")
    else:
        console.print(response.text, markup=False, highlight=False)

    if response.is_error:
        raise typer.Exit(1)


@app.command()
def login():
    """Establish a fresh session regardless of cached cookies."""
    session = _session()
    try:
        session.establish_session()
    except (OktaSessionError, httpx.HTTPError) as e:
        console.print(f"[red]✗ Authentication failed:[/red] {e}")
        raise typer.Exit(1)
    console.print("[green]✓ Session established[/green]")
    console.print(f"Cookies cached in: {session.store.path}")


@app.command()
def cookies():
    """Show hosts and cookie names in the session cache."""
    load_env()
    store = CookieStore(OktaConfig.from_env().cache_file)
    try:
        store.load()
    except OktaSessionError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not store.hosts():
        console.print("[yellow]No cached session found[/yellow]")
        raise typer.Exit(0)

    table = Table(title=str(store.path))
    table.add_column("Host", style="cyan")
    table.add_column("Cookies")
    for host in store.hosts():
        table.add_row(host, ", ".join(sorted(store.cookies_for(host))))
    console.print(table)


@app.command()
def forget(host: Optional[str] = typer.Argument(None, help="Host to drop (default: all)")):
    """Drop cached cookies for a host, or the whole cache."""
    load_env()
    store = CookieStore(OktaConfig.from_env().cache_file)
    if host is None:
        store.forget()
        console.print("[green]✓ Session cache cleared[/green]")
        return

    try:
        store.load()
    except OktaSessionError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    store.forget(host)
    console.print(f"[green]✓ Forgot cookies for {host}[/green]")


if __name__ == "__main__":
    app()
