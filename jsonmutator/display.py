"""Terminal output for the jsonmutator command line."""

from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

# Diagnostics go to stderr so stdout carries only the JSON document
console = Console(stderr=True)

ICONS = {
    "check": "✓",
    "cross": "✗",
    "file": "📄",
    "info": "ℹ",
    "pencil": "✎",
}


def print_error(title: str, message: str) -> None:
    """Print an error panel."""
    console.print()
    console.print(
        Panel(
            Text(message),
            title=f"[bold red]{ICONS['cross']} {title}[/bold red]",
            border_style="red",
            box=box.ROUNDED,
            expand=False,
        )
    )


def print_summary(descriptions: List[str], destination: str) -> None:
    """Print the applied mutations and where the result went."""
    for description in descriptions:
        console.print(f"[dim]{ICONS['pencil']}[/dim] {escape(description)}", highlight=False)
    console.print(
        f"[green]{ICONS['check']}[/green] Applied {len(descriptions)} mutation(s)"
        f" [dim]→ {escape(destination)}[/dim]",
        highlight=False,
    )
