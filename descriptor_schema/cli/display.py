"""
Rich terminal display utilities for CLI.

Provides formatted output using the Rich library for:
- Syntax-highlighted JSON and schemas
- Validation violations
- Success/failure indicators
"""

import json
from typing import Any, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from descriptor_schema.validation.validator import SchemaViolation


console = Console()


def print_header(title: str) -> None:
    """Print a formatted header."""
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    console.print("=" * len(title))
    console.print()


def print_success(message: str) -> None:
    """Print a success message with checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message with X mark."""
    console.print(f"[red]✗[/red] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {message}")


def print_json(data: Any, title: Optional[str] = None) -> None:
    """
    Print JSON data with syntax highlighting.

    Args:
        data: JSON-serializable data or JSON string
        title: Optional title for the panel
    """
    if isinstance(data, str):
        json_str = data
    else:
        json_str = json.dumps(data, indent=2)

    syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)

    if title:
        panel = Panel(syntax, title=f"[bold]{title}[/bold]", border_style="cyan")
        console.print(panel)
    else:
        console.print(syntax)


def print_schema(schema: Any, title: str = "JSON Schema") -> None:
    """Print a schema with syntax highlighting."""
    print_json(schema, title)


def print_violations(violations: List[SchemaViolation]) -> None:
    """
    Print schema violations in a table.

    Args:
        violations: Violations found by validation
    """
    if not violations:
        return

    table = Table(title="Validation Errors", show_header=True, header_style="bold red")
    table.add_column("#", style="dim", width=4)
    table.add_column("Path", style="cyan")
    table.add_column("Problem", style="white")
    table.add_column("Expected", style="green")
    table.add_column("Got", style="yellow")

    for i, violation in enumerate(violations, 1):
        table.add_row(
            str(i),
            violation.path,
            violation.message,
            json.dumps(violation.expected, default=str),
            json.dumps(violation.actual, default=str),
        )

    console.print()
    console.print(table)
    console.print()


def print_separator() -> None:
    """Print a visual separator line."""
    console.print("[dim]" + "─" * 70 + "[/dim]")
