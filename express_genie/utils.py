"""Shared console helpers for express-genie.

All user-facing output goes through the single Rich ``console`` defined here,
so tests can swap it for a recording console.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from express_genie.scaffolder.registry import TEMPLATE_INFO, TemplateKind

console = Console()


# ---------------------------------------------------------------------------
# Status messages
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


# ---------------------------------------------------------------------------
# Tables and panels
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_template_table() -> None:
    """List every template kind with its title and description."""
    table = Table(title="Available templates", show_header=True, header_style="bold cyan")
    table.add_column("Template", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Entry point", style="dim")

    for kind in TemplateKind:
        info = TEMPLATE_INFO[kind]
        table.add_row(
            f"[{info.color}]{kind.value}[/{info.color}]",
            info.title,
            info.description,
            info.entry_point,
        )

    console.print(table)


def print_next_steps(project_path: Path) -> None:
    """Tell the user how to start the freshly generated project.

    The ``cd`` target is relative to the current directory when the project
    lives beneath it, and absolute otherwise.
    """
    try:
        cd_target = project_path.resolve().relative_to(Path.cwd().resolve())
    except ValueError:
        cd_target = project_path.resolve()
    steps = "\n".join(
        [
            f"  cd {escape(str(cd_target))}",
            "  npm install",
            "  npm start",
            "",
            "For development with auto-reload:",
            "  npm run dev",
        ]
    )
    console.print(Panel(steps, title="Next steps", border_style="cyan", expand=False))


def print_troubleshooting() -> None:
    """Print hints shown after a failed ``create``."""
    console.print("[yellow]Troubleshooting tips:[/yellow]")
    console.print("[dim]  - Make sure you have Node.js 16+ installed[/dim]")
    console.print("[dim]  - Check if the project name is valid[/dim]")
    console.print("[dim]  - Ensure you have write permissions in this directory[/dim]")
    console.print("[dim]  - Run 'express-genie list' to see the available templates[/dim]")
