"""Console output helpers for the CLIs."""

import functools
import sys
from typing import Any, Callable, Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()


def info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def create_table(title: Optional[str] = None, **kwargs: Any) -> Table:
    """
    Create a table with the common styling.

    Args:
        title: Optional table title
        **kwargs: Extra arguments for rich.table.Table

    Returns:
        Table instance
    """
    kwargs.setdefault("header_style", "bold magenta")
    kwargs.setdefault("show_lines", False)
    return Table(title=title, **kwargs)


def print_table(table: Table) -> None:
    """Print a table to the shared console."""
    console.print(table)


def handle_errors(func: Callable) -> Callable:
    """
    Turn uncaught exceptions in a CLI entry point into a message and exit code.

    Click's own exceptions and SystemExit pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except KeyboardInterrupt:
            warning("Interrupted by user")
            sys.exit(130)
        except Exception as e:
            error(f"Unexpected error: {e}")
            sys.exit(1)

    return wrapper
