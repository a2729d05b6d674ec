"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mumu_probe.core.coordinator import SearchResult
from mumu_probe.models.config import SearchConfig
from mumu_probe.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "SearchTimeoutError": [
            "• Check the version numbers; the build may not be published yet.",
            "• Raise the time limit with --timeout.",
            "• Lower --concurrency if your network drops connections.",
        ],
        "DownloadError": [
            "• A network or disk error interrupted the download.",
            "• Check free space and write permissions in the target directory.",
            "• The partial file was left on disk; delete it before retrying.",
        ],
        "InvalidUrlFormatError": [
            "• The resolved URL has no file name to save under.",
        ],
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Pass --config to point at a different file.",
        ],
        "ClientResponseError": [
            "• The mirror rejected the request.",
            "• Please try again in a few minutes.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_search_summary(
    console: Console, config: SearchConfig, result: SearchResult
) -> None:
    """Displays statistics for a finished search session."""
    stats = result.stats
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column()

    table.add_row("Version:", f"{config.version_major} / {config.version_minor}")
    table.add_row("Mirror:", f"[dim]{config.base_url}[/dim]")
    table.add_row("Outcome:", result.state.value)
    table.add_row("Elapsed:", format_duration(result.elapsed))
    table.add_row("Dispatched:", str(stats.dispatched))
    table.add_row("Skipped:", str(stats.skipped))
    table.add_row(
        "Completed:",
        f"[green]{stats.succeeded}[/green] ok / {stats.failed} missing"
        f" / [yellow]{stats.inconclusive}[/yellow] no response",
    )
    table.add_row(
        "Peak in flight:", f"{stats.peak_in_flight} (limit {config.concurrency})"
    )

    console.print(
        Panel(table, title="[bold]🔎 Search Summary[/bold]", border_style="blue")
    )


def print_download_complete(console: Console, path: Path, size: int) -> None:
    console.print(
        f"[bold green]🚀 Downloaded to:[/bold green] {path} [dim]({format_size(size)})[/dim]"
    )
