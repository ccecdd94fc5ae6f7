"""Shared utility functions for cquver.

Provides Rich-based progress reporting and the small async file-system
helpers used by the scaffolder.  Progress lines are advisory output only;
nothing reads them back.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def replace_file(path: Path, content: str) -> None:
    """Rewrite *path* in one step via a temporary sibling and ``os.replace``.

    Readers never observe a half-written file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


async def write_text_file(path: Path, content: str) -> Path:
    """Write *content* to *path* in a worker thread and return the path."""
    await asyncio.to_thread(write_file, path, content)
    return path


async def replace_text_file(path: Path, content: str) -> Path:
    """Async wrapper around :func:`replace_file`."""
    await asyncio.to_thread(replace_file, path, content)
    return path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_created_dir(path: Path | str) -> None:
    """Report a newly created directory."""
    console.print(f"[green]+[/green] Created directory: {escape(str(path))}")


def print_existing_dir(path: Path | str) -> None:
    """Report a directory that was already present."""
    console.print(f"[dim]=[/dim] Directory already exists: {escape(str(path))}")


def print_created_file(path: Path | str) -> None:
    """Report a newly written file."""
    console.print(f"[green]+[/green] Created file: {escape(str(path))}")


def print_updated_file(path: Path | str, label: str = "index") -> None:
    """Report a regenerated or patched aggregate file."""
    console.print(f"[cyan]~[/cyan] Updated {label}: {escape(str(path))}")


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


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")
