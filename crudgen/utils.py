"""Shared helpers for crudgen.

Provides the Rich console used for all user-facing output, small message
helpers, and the file-system primitives the generator writes through.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def write_file(path: Path, content: str) -> Path:
    """Create parent dirs and write *content*, replacing any existing file."""
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")
    return path


def append_file(path: Path, content: str) -> Path:
    """Append *content* to an existing file."""
    with path.open("a", encoding="utf-8") as fh:
        fh.write(content)
    return path


def display_path(path: Path, base: Path) -> str:
    """Render *path* relative to *base* when possible, for console output."""
    try:
        return str(path.resolve().relative_to(base.resolve()))
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STATUS_STYLES: dict[str, str] = {
    "created": "green",
    "appended": "cyan",
    "skipped": "yellow",
    "missing": "red",
}


def print_summary_table(
    rows: list[tuple[str, str, str]],
    title: str = "Summary",
) -> None:
    """Print an artifact / status / path table.

    Args:
        rows: ``(artifact, status, path)`` triples.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Artifact", style="dim", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Path")

    for artifact, status, path in rows:
        style = STATUS_STYLES.get(status, "white")
        table.add_row(artifact, f"[{style}]{status}[/{style}]", escape(path))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print an error line prefixed with a red ``Error:``."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    console.print(message)


def print_issue_table(
    rows: list[tuple[str, int, str, str]],
    title: str = "Malformed entries",
) -> None:
    """Print an option / position / entry / reason table of spec diagnostics."""
    table = Table(title=title, show_header=True, header_style="bold red")
    table.add_column("Option", no_wrap=True)
    table.add_column("#", justify="right")
    table.add_column("Entry")
    table.add_column("Reason")

    for option, index, raw, reason in rows:
        table.add_row(option, str(index), escape(repr(raw)), escape(reason))

    console.print(table)
