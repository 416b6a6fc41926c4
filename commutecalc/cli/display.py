"""
Rich rendering of commute results
"""

from typing import List

from rich.console import Console
from rich.table import Table

from commutecalc.core.models import CommuteResult, DepartureScenario
from commutecalc.core.utils import format_clock


def scenario_title(scenario: DepartureScenario) -> str:
    """Heading for one departure scenario"""
    title = f"Leave at {format_clock(scenario.departure_time)}"
    if scenario.target_arrival is not None:
        title += (
            f" (arrive by {format_clock(scenario.target_arrival)}, "
            f"{scenario.buffer_minutes} min buffer)"
        )
    return title


def scenario_table(scenario: DepartureScenario) -> Table:
    """Table of adjusted routes for one scenario"""
    table = Table(title=scenario_title(scenario), title_justify="left")
    table.add_column("Route", style="cyan")
    table.add_column("Duration", justify="right", style="bold")
    table.add_column("Distance", justify="right")
    table.add_column("Highways")
    table.add_column("Via")

    arrive_by = scenario.target_arrival is not None
    if arrive_by:
        table.add_column("Arrival", justify="right")

    fastest = scenario.fastest
    if fastest is not None:
        table.caption = f"Quickest: {fastest.label} ({fastest.duration_display})"

    for route in scenario.routes:
        row = [
            route.label,
            route.duration_display,
            f"{route.distance_km} km",
            ", ".join(route.highways) or "-",
            route.via,
        ]
        if arrive_by:
            arrival = format_clock(route.estimated_arrival)
            row.append(f"[green]{arrival}[/green]" if route.on_time else f"[red]{arrival} late[/red]")
        table.add_row(*row)

    return table


def render_direction(console: Console, heading: str, scenarios: List[DepartureScenario]) -> None:
    console.print(f"\n[bold]{heading}[/bold]")
    for scenario in scenarios:
        console.print(scenario_table(scenario))


def render_result(console: Console, result: CommuteResult) -> None:
    """Print both directions of a commute result"""
    render_direction(console, "To Office", result.to_destination)
    render_direction(console, "Return Home", result.to_origin)
    console.print("\n[dim]Traffic estimates are simulated based on typical rush hour patterns[/dim]")
