"""TrayGuard CLI entry point."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="trayguard",
    help="TrayGuard: local service supervisor for the desktop shell",
    no_args_is_help=True,
)
console = Console()

_STATUS_STYLES = {"healthy": "green", "degraded": "yellow", "down": "red"}


def _load(path: Path | None = None):
    from trayguard.config.loader import load_config, load_config_or_default

    try:
        return load_config(path) if path else load_config_or_default()
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


@app.command()
def status(
    timeout: float | None = typer.Option(None, help="Probe timeout in seconds"),
) -> None:
    """Probe every monitored service once and print the result."""
    from trayguard.health.aggregator import probe_all

    config = _load()
    snapshot = asyncio.run(
        probe_all(config.endpoints, timeout=timeout or config.polling.probe_timeout)
    )

    table = Table(title=f"{config.app.name} Service Status")
    table.add_column("Service", style="bold")
    table.add_column("Address")
    table.add_column("Status")

    for s in snapshot.services:
        label, style = ("healthy", "green") if s.healthy else ("unreachable", "red")
        table.add_row(s.name, f"{s.address}:{s.port}", f"[{style}]{label}[/{style}]")

    console.print(table)
    overall = snapshot.overall.value
    style = _STATUS_STYLES[overall]
    console.print(f"Overall: [{style} bold]{overall}[/{style} bold]")


@app.command()
def run(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .trayguard.yaml"),
) -> None:
    """Run the health poll loop headless until interrupted."""
    from trayguard.runtime import build_runtime

    config = _load(path)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    runtime = build_runtime(config)
    console.print(
        f"[bold]{config.app.name}[/bold] polling {len(config.endpoints)} services "
        f"every {config.polling.interval:g}s"
    )
    try:
        asyncio.run(runtime.poll_loop.run_forever())
    except KeyboardInterrupt:
        console.print("Stopped.")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind host"),
    port: int = typer.Option(8765, help="Bind port"),
) -> None:
    """Start the HTTP command bridge with the poll loop running."""
    import uvicorn

    console.print(f"[bold]TrayGuard[/bold] bridge starting on http://{host}:{port}")
    uvicorn.run("trayguard.api.app:app", host=host, port=port, reload=False)


config_app = typer.Typer(name="config", help="Configuration commands")
app.add_typer(config_app)


@config_app.command("validate")
def config_validate(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .trayguard.yaml"),
) -> None:
    """Validate configuration file."""
    from urllib.parse import urlparse

    import yaml

    from trayguard.config.loader import load_config

    try:
        config = load_config(path=path)
        console.print("[green]✓[/green] YAML parses correctly")
        console.print("[green]✓[/green] Pydantic validation passes")
    except FileNotFoundError as exc:
        console.print(f"[red]✗ {exc}[/red]")
        raise typer.Exit(1)
    except yaml.YAMLError as exc:
        console.print(f"[red]✗ YAML parsing failed: {exc}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print(f"[red]✗ Validation failed: {exc}[/red]")
        raise typer.Exit(1)

    from trayguard.events.emitter import EVENT_TYPES

    errors: list[str] = []
    warnings: list[str] = []
    if not config.endpoints:
        warnings.append("No endpoints configured; overall status will always be 'down'")
    for i, wh in enumerate(config.webhooks):
        parsed = urlparse(wh.url)
        if not parsed.scheme or not parsed.netloc:
            errors.append(f"Webhook {i}: invalid URL '{wh.url}'")
        for evt in wh.events:
            if evt not in EVENT_TYPES and evt != "*":
                warnings.append(f"Webhook {i}: unrecognized event type '{evt}'")

    if errors:
        for err in errors:
            console.print(f"[red]✗ {err}[/red]")
        console.print(f"\n[red bold]{len(errors)} validation error(s) found.[/red bold]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {len(config.endpoints)} endpoint(s) configured")
    if config.webhooks:
        console.print(f"[green]✓[/green] {len(config.webhooks)} webhook(s) configured")
    for w in warnings:
        console.print(f"[yellow]! {w}[/yellow]")
    console.print("\n[green bold]Configuration is valid.[/green bold]")


@config_app.command("show")
def config_show(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .trayguard.yaml"),
) -> None:
    """Print resolved configuration."""
    config = _load(path)

    console.print(f"[bold]{config.app.name}[/bold] v{config.app.version}\n")

    console.print("[bold]Polling:[/bold]")
    console.print(f"  Settle delay: {config.polling.settle_delay:g}s")
    console.print(f"  Interval: {config.polling.interval:g}s")
    console.print(f"  Probe timeout: {config.polling.probe_timeout:g}s\n")

    console.print("[bold]Endpoints:[/bold]")
    for entry in config.endpoints:
        console.print(f"  {entry.name} @ {entry.address}:{entry.port}")

    popover = config.popover
    console.print("\n[bold]Popover:[/bold]")
    console.print(f"  {popover.label}: {popover.width:g}x{popover.height:g}")

    indicator = config.indicator
    console.print("\n[bold]Indicator:[/bold]")
    console.print(f"  {indicator.id}: {indicator.title}")
    for status, icon in indicator.icons.items():
        console.print(f"  {status} -> {icon}")


def main() -> None:
    app()
