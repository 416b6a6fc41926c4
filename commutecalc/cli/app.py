"""
Main CLI application for CommuteCalc
Provides commands for estimating commutes and managing configuration
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from commutecalc.config.manager import ConfigManager, ConfigManagerError
from commutecalc.config.models import EngineConfig, GeocoderBackend, RouterBackend
from commutecalc.core.errors import CommuteError
from commutecalc.core.models import ScheduleMode
from commutecalc.planner.factory import create_planner

from .display import render_result

# Initialize Typer app
app = typer.Typer(
    name="commutecalc",
    help="CommuteCalc - Commute time estimates with simulated rush hour traffic",
    add_completion=False,
)

# Console for rich output
console = Console()


def setup_logging(verbose: bool) -> None:
    """Route log records through rich"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_engine_config(
    config_path: Optional[Path],
    router: Optional[str],
    geocoder: Optional[str],
) -> EngineConfig:
    """Load configuration and apply command line overrides"""
    try:
        config = ConfigManager().load_config(config_path)
    except ConfigManagerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    overrides = {}
    if router:
        try:
            overrides["router"] = RouterBackend(router.lower())
        except ValueError:
            console.print(f"[red]Invalid router: {router}[/red]")
            console.print(f"Valid options: {', '.join(b.value for b in RouterBackend)}")
            raise typer.Exit(1)
    if geocoder:
        try:
            overrides["geocoder"] = GeocoderBackend(geocoder.lower())
        except ValueError:
            console.print(f"[red]Invalid geocoder: {geocoder}[/red]")
            console.print(f"Valid options: {', '.join(b.value for b in GeocoderBackend)}")
            raise typer.Exit(1)

    return config.model_copy(update=overrides) if overrides else config


@app.command()
def calculate(
    home: str = typer.Argument(..., help="Home address (e.g. 'Seattle, WA')"),
    office: str = typer.Argument(..., help="Office address (e.g. 'Bellevue, WA')"),
    arrive_by: Optional[str] = typer.Option(None, "--arrive-by", help="Target arrival at the office (HH:MM format)"),
    now: bool = typer.Option(False, "--now", help="Leave now, ignoring any configured default arrival time"),
    router: Optional[str] = typer.Option(None, "--router", help="Routing backend (osrm/google)"),
    geocoder: Optional[str] = typer.Option(None, "--geocoder", help="Geocoding backend (nominatim/traveltime)"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Configuration file (YAML/JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    Estimate commute times to the office and back home

    Examples:
        commutecalc calculate "Seattle, WA" "Bellevue, WA"
        commutecalc calculate "123 Main St, Seattle, WA" "Bellevue, WA" --arrive-by 09:00
        commutecalc calculate "Seattle, WA" "Redmond, WA" --router google
        commutecalc calculate "Seattle, WA" "Bellevue, WA" --now
    """
    setup_logging(verbose)
    config = load_engine_config(config_path, router, geocoder)

    if now and arrive_by:
        console.print("[red]Use either --now or --arrive-by, not both[/red]")
        raise typer.Exit(1)

    arrival_time = None if now else arrive_by or config.default_arrival_time
    mode = ScheduleMode.ARRIVAL if arrival_time else ScheduleMode.NOW

    try:
        planner = create_planner(config)
    except ValueError as e:
        console.print(f"[red]API configuration error: {e}[/red]")
        raise typer.Exit(1)

    async def run():
        with console.status("Calculating commute times..."):
            return await planner.calculate(home, office, mode=mode, arrival_time=arrival_time)

    try:
        result = asyncio.run(run())
    except CommuteError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Calculation cancelled by user[/yellow]")
        raise typer.Exit(0)

    render_result(console, result)


@app.command(name="init-config")
def init_config(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing configuration"),
):
    """Write the default configuration file"""
    manager = ConfigManager()
    try:
        path = manager.create_default_config(overwrite=force)
    except ConfigManagerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Configuration written to {path}[/green]")


@app.command(name="show-config")
def show_config(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Configuration file (YAML/JSON)"),
):
    """Show the effective configuration"""
    config = load_engine_config(config_path, None, None)

    table = Table(title="CommuteCalc Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in config.model_dump(mode="json").items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}={v}" for k, v in value.items())
        table.add_row(key, str(value) if value is not None else "-")

    console.print(table)


@app.callback()
def callback():
    """
    CommuteCalc - Commute time estimates with simulated rush hour traffic

    Resolves home and office addresses, fetches driving routes in both
    directions and suggests departure times.
    """
    pass


def main():
    """Main entry point for CLI"""
    # Load environment variables
    from dotenv import load_dotenv
    load_dotenv()

    app()


if __name__ == "__main__":
    main()
