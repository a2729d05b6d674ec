"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from mumu_probe import __version__
from mumu_probe.api.client import ProbeClient
from mumu_probe.core.candidates import CANDIDATE_COUNT, generate_candidates
from mumu_probe.core.coordinator import SearchCoordinator, SearchResult
from mumu_probe.exceptions import MumuProbeError, SearchTimeoutError
from mumu_probe.media.downloader import Downloader, DownloadResult, file_name_from_url
from mumu_probe.models.config import SearchConfig
from mumu_probe.models.probe import ProbeResult
from mumu_probe.storage.config_manager import ConfigManager
from mumu_probe.utils.path import get_config_dir

from .formatters import (
    format_error_with_suggestions,
    print_download_complete,
    print_search_summary,
)
from .progress_manager import ProgressManager

console = Console()
err_console = Console(stderr=True)

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=err_console,
            rich_tracebacks=True,
            show_path=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("mumu_probe")

app = typer.Typer(
    name="mumu-probe",
    help=(
        "Find the published MuMu installer for a version by probing every"
        " build timestamp of the day, then optionally download it."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]mumu-probe[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


async def _search_async(config: SearchConfig, show_progress: bool) -> SearchResult:
    """Runs one search session against the configured mirror."""
    async with (
        ProgressManager(err_console, enabled=show_progress) as progress,
        ProbeClient.from_config(config) as client,
    ):
        coordinator = SearchCoordinator(
            client.probe,
            concurrency=config.concurrency,
            timeout=config.search_timeout,
        )

        def on_result(result: ProbeResult) -> None:
            progress.advance_search(result, coordinator.stats.in_flight)

        coordinator.on_result = on_result
        log.info(
            f"Probing {CANDIDATE_COUNT} candidates with up to "
            f"{config.concurrency} requests in flight..."
        )
        progress.start_search(CANDIDATE_COUNT)
        return await coordinator.run(generate_candidates())


async def _download_async(config: SearchConfig, url: str) -> DownloadResult:
    async with ProgressManager(console, enabled=console.is_terminal) as progress:
        progress.start_download(file_name_from_url(url))
        downloader = Downloader(timeout=config.download_timeout)
        return await downloader.download(
            url, config.download_dir, on_progress=progress.update_download
        )


def _ask_to_download() -> bool:
    """Asks for confirmation on stdin. Only 'y' (any case) counts as yes."""
    console.print("Do you want to download? [y/n]", markup=False)
    try:
        answer = console.input()
    except EOFError:
        answer = ""
    return answer.strip().lower() == "y"


@app.command()
def search(
    version_major: str = typer.Argument(
        ..., help="Installer version, e.g. 4.1.21.3664."
    ),
    version_minor: str = typer.Argument(..., help="Build date prefix, e.g. 0325."),
    download_dir: Path | None = typer.Argument(  # noqa: B008
        None, help="Download the installer into this directory after confirming."
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Give up if nothing is found within this many seconds (default 30).",
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        "-c",
        help="Maximum number of probes in flight (default 1000).",
    ),
    probe_timeout: float | None = typer.Option(
        None, "--probe-timeout", help="Per-request timeout in seconds (default 10)."
    ),
    base_url: str | None = typer.Option(
        None, "--base-url", help="Mirror root the installers are published under."
    ),
    config_file: Path = typer.Option(  # noqa: B008
        CONFIG_FILE, "--config", help="Path to an optional INI configuration file."
    ),
    save_config: bool = typer.Option(
        False,
        "--save-config",
        help="Store the effective network settings in the configuration file.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug and a search summary).",
    ),
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Search for the installer URL of VERSION_MAJOR-VERSION_MINOR."""
    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("mumu_probe").setLevel(log_level)

    cli_options = {
        "search_timeout": timeout,
        "concurrency": concurrency,
        "probe_timeout": probe_timeout,
        "base_url": base_url,
    }
    config_manager = ConfigManager(config_file)
    try:
        config = config_manager.load_config(version_major, version_minor, cli_options)
        config.download_dir = download_dir
        if save_config:
            config_manager.save_config(
                config.model_dump(include=SearchConfig.get_ini_keys())
            )
            log.info(f"Settings saved to {config_file}")
    except MumuProbeError as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    result = asyncio.run(_search_async(config, show_progress=err_console.is_terminal))
    if verbose >= 2:
        print_search_summary(err_console, config, result)

    try:
        url = result.raise_for_timeout()
    except SearchTimeoutError as e:
        err_console.print("[bold red]❌ No valid URL found within time limit[/bold red]")
        raise typer.Exit(code=1) from e

    if config.download_dir is None:
        typer.echo(url)
        return

    console.print(f"[green]✅ Valid URL found:[/green] {url}", soft_wrap=True)
    if not _ask_to_download():
        console.print("Exiting without download.")
        return

    try:
        download = asyncio.run(_download_async(config, url))
    except MumuProbeError as e:
        err_console.print(format_error_with_suggestions(e, {"url": url}))
        raise typer.Exit(code=1) from e

    print_download_complete(console, download.path, download.bytes_written)
