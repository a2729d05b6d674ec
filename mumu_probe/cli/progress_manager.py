"""
Rich progress displays for the search fan-out and the installer download.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from mumu_probe.models.probe import ProbeResult


class ProgressManager:
    """
    Wraps a Rich Progress instance. Used as an async context manager around
    either the search or the download.
    """

    def __init__(self, console: Console, enabled: bool = True):
        self.console = console
        self.enabled = enabled
        self._progress: Progress | None = None
        self._search_task: TaskID | None = None
        self._download_task: TaskID | None = None

    def _search_progress(self) -> Progress:
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            "•",
            TextColumn("[cyan]{task.fields[in_flight]}[/cyan] in flight"),
            "•",
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )

    def _download_progress(self) -> Progress:
        return Progress(
            SpinnerColumn(style="green"),
            TextColumn("[progress.description]{task.description}", justify="left"),
            BarColumn(bar_width=None),
            "[progress.percentage]{task.percentage:>3.0f}%",
            "•",
            DownloadColumn(),
            "•",
            TransferSpeedColumn(),
            "•",
            TimeRemainingColumn(),
            console=self.console,
        )

    def start_search(self, total: int) -> None:
        if not self.enabled:
            return
        self._progress = self._search_progress()
        self._search_task = self._progress.add_task(
            "Probing candidates", total=total, in_flight=0
        )
        self._progress.start()

    def advance_search(self, result: ProbeResult, in_flight: int = 0) -> None:
        if self._progress is None or self._search_task is None:
            return
        if result.is_success:
            self._progress.update(
                self._search_task,
                description=f"[green]Found {result.candidate}[/green]",
            )
        self._progress.update(self._search_task, advance=1, in_flight=in_flight)

    def start_download(self, description: str, total: int | None = None) -> None:
        if not self.enabled:
            return
        self._progress = self._download_progress()
        self._download_task = self._progress.add_task(
            description, total=total or None
        )
        self._progress.start()

    def update_download(self, completed: int, total: int) -> None:
        """Progress callback for the downloader; a zero total means unknown."""
        if self._progress is None or self._download_task is None:
            return
        self._progress.update(
            self._download_task, completed=completed, total=total or None
        )

    def stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
        self._search_task = None
        self._download_task = None

    async def __aenter__(self) -> "ProgressManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
