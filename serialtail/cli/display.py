"""Display utilities for port listing, selection and startup."""

import sys

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from serialtail import __version__
from serialtail.domain import (
    LineEnding,
    PortInfo,
    PortSelectionCancelledError,
    SerialSettings,
)

# Force UTF-8 for Windows console
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

console = Console()


def build_port_table(ports: list[PortInfo]) -> Table:
    """Table of ports with a selection number per row."""
    table = Table(title="Serial ports", show_lines=False)
    table.add_column("#", justify="right", style="bold cyan")
    table.add_column("Device", style="bold")
    table.add_column("Description")
    table.add_column("Hardware ID", style="dim")

    for index, port in enumerate(ports, start=1):
        table.add_row(str(index), port.device, port.description, port.hwid)

    return table


def display_ports(ports: list[PortInfo]) -> None:
    """Print the port table, or a hint if there are none."""
    if not ports:
        console.print("[yellow]No serial ports detected.[/yellow]")
        console.print("[dim]Pass the port name explicitly, e.g. serialtail COM3[/dim]")
        return
    console.print(build_port_table(ports))


def choose_port(ports: list[PortInfo]) -> str:
    """Pick a port: the only one, or ask the operator.

    Raises:
        PortSelectionCancelledError: No choice was made.
    """
    if len(ports) == 1:
        console.print(f"[dim]Using {ports[0]}[/dim]")
        return ports[0].device

    console.print(build_port_table(ports))
    choices = [str(i) for i in range(1, len(ports) + 1)]
    try:
        answer = Prompt.ask("Select port", choices=choices, console=console)
    except (KeyboardInterrupt, EOFError) as e:
        raise PortSelectionCancelledError("No serial port selected.") from e

    return ports[int(answer) - 1].device


def display_startup(settings: SerialSettings, line_ending: LineEnding) -> None:
    """Print a one-line banner before the console takes over."""
    console.print(
        f"[bold bright_cyan]serialtail[/bold bright_cyan] [dim]v{__version__}[/dim]  "
        f"[bold]{settings}[/bold]  [dim]send ending: {line_ending.label}[/dim]"
    )


def display_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")
