"""
Utility functions for the Organize by Type tool.

Includes:
- Human-readable sizes
- Rich console helpers (headers, messages, tables)
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models import RunStatistics, SkipReason

# Global console instance
console = Console()


def set_colors(enabled: bool) -> None:
    """Turn colored console output on or off."""
    console.no_color = not enabled


def format_size(num_bytes: int) -> str:
    """
    Format a byte count the way the shell tool did.

    Returns:
        '512B', '1.50KB', '3.20MB' or '1.00GB' style strings.
    """
    if num_bytes < 1024:
        return f"{num_bytes}B"
    if num_bytes < 1024 ** 2:
        return f"{num_bytes / 1024:.2f}KB"
    if num_bytes < 1024 ** 3:
        return f"{num_bytes / 1024 ** 2:.2f}MB"
    return f"{num_bytes / 1024 ** 3:.2f}GB"


def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))


def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {msg}")


def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {msg}")


def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {msg}")


def print_preview(summary: dict, ext_limit: int = 15):
    """Print the pre-run summary: total size, top-level folders, file types."""
    console.print(f"[magenta]Total Size:[/magenta] {format_size(summary['total_size_bytes'])}")

    if summary["folders"]:
        table = Table(title="Current Structure")
        table.add_column("Folder", style="cyan")
        table.add_column("Size", style="magenta", justify="right")
        for folder in summary["folders"]:
            table.add_row(folder["name"], format_size(folder["total_size_bytes"]))
        console.print(table)

    histogram = summary["extension_histogram"]
    if histogram:
        table = Table(title="File Types (entire directory tree)")
        table.add_column("Extension", style="cyan")
        table.add_column("Files", style="magenta", justify="right")
        for ext, count in list(histogram.items())[:ext_limit]:
            table.add_row(f".{ext}", str(count))
        if len(histogram) > ext_limit:
            table.add_row(f"[italic]... and {len(histogram) - ext_limit} more[/italic]", "")
        console.print(table)

    console.print(f"[green]Total Files (entire directory): {summary['total_files']}[/green]")
    console.print("\n[yellow]This will organize all files into:[/yellow]")
    console.print(f"   • {summary['unique_bucket_example']} folders (unique files)")
    console.print(f"   • {summary['duplicate_bucket_example']} folders (duplicate content)")


def print_statistics(stats: RunStatistics):
    """Print the final statistics table."""
    table = Table(title="Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta", justify="right")

    table.add_row("Unique files moved", f"[green]{stats.unique}[/green]")
    table.add_row("Duplicate files moved", f"[cyan]{stats.duplicate}[/cyan]")
    table.add_row("Files skipped", f"[yellow]{stats.skipped}[/yellow]")
    for reason in SkipReason:
        count = stats.skipped_by_reason.get(reason, 0)
        if count:
            table.add_row(f"  [dim]{reason.value}[/dim]", f"[dim]{count}[/dim]")
    table.add_row("Errors encountered", f"[red]{stats.errors}[/red]")
    table.add_row("Total files processed", str(stats.total_processed))
    table.add_row("Total size moved", format_size(stats.bytes_moved))

    console.print(table)
