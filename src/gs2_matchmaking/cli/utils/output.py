"""Rich console output formatting utilities."""

from datetime import datetime, timezone

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gs2_matchmaking.models import Gathering, Matchmaking

console = Console()


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_timestamp(epoch_ms: int | None) -> str:
    """Format a GS2 millisecond timestamp for display."""
    if epoch_ms is None:
        return "-"
    dt = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def create_matchmaking_table(items: list[Matchmaking]) -> Table:
    """Create a rich table listing matchmaking definitions.

    Args:
        items: Matchmaking objects to list

    Returns:
        Rich Table instance
    """
    table = Table(title="Matchmaking")

    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Max Player", justify="right")
    table.add_column("Service Class")
    table.add_column("Updated", no_wrap=True)

    for item in items:
        table.add_row(
            item.name,
            item.type or "-",
            str(item.max_player) if item.max_player is not None else "-",
            item.service_class or "-",
            format_timestamp(item.update_at),
        )

    return table


def create_matchmaking_panel(item: Matchmaking) -> Panel:
    """Create a detailed panel for a single matchmaking definition."""
    content = f"""[bold]Matchmaking ID:[/bold] {item.matchmaking_id}
[bold]Owner ID:[/bold] {item.owner_id or "-"}
[bold]Description:[/bold] {item.description or "-"}
[bold]Type:[/bold] {item.type or "-"}
[bold]Max Player:[/bold] {item.max_player if item.max_player is not None else "-"}
[bold]Service Class:[/bold] {item.service_class or "-"}
[bold]Callback:[/bold] {item.callback or "-"}
[bold]Created:[/bold] {format_timestamp(item.create_at)}
[bold]Updated:[/bold] {format_timestamp(item.update_at)}"""

    return Panel(content, title=f"[bold]{item.name}[/bold]", border_style="blue")


def create_gathering_table(items: list[Gathering]) -> Table:
    """Create a rich table listing gatherings."""
    table = Table(title="Gatherings")

    table.add_column("Gathering ID", style="cyan", no_wrap=True)
    table.add_column("Players", justify="right", style="green")
    table.add_column("Meta")
    table.add_column("Updated", no_wrap=True)

    for item in items:
        table.add_row(
            item.gathering_id,
            str(item.join_player) if item.join_player is not None else "-",
            item.meta or "",
            format_timestamp(item.update_at),
        )

    return table


def create_gathering_panel(item: Gathering) -> Panel:
    """Create a panel describing a created or joined gathering."""
    content = f"""[bold]Gathering ID:[/bold] {item.gathering_id}
[bold]Players:[/bold] {item.join_player if item.join_player is not None else "-"}"""

    if item.passcode:
        content += f"\n[bold]Passcode:[/bold] {item.passcode}"
    if item.meta:
        content += f"\n[bold]Meta:[/bold] {item.meta}"
    content += f"\n[bold]Updated:[/bold] {format_timestamp(item.update_at)}"

    return Panel(content, title="[bold]Gathering[/bold]", border_style="green")
