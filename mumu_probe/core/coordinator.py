"""
Races the fan-out against a global timeout and owns its cancellation.
"""

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from mumu_probe.exceptions import SearchTimeoutError
from mumu_probe.models.stats import SearchStats

from .engine import ProbeFunc, ResultCallback, run_search
from .session import SearchSession

log = logging.getLogger(__name__)


class SearchState(Enum):
    """States of a search session."""

    SEARCHING = "searching"
    FOUND = "found"  # Terminal
    TIMED_OUT = "timed_out"  # Terminal


@dataclass
class SearchResult:
    """What the coordinator reports once a session reaches a terminal state."""

    state: SearchState
    url: Optional[str] = None
    stats: SearchStats = field(default_factory=SearchStats)
    elapsed: float = 0.0

    @property
    def found(self) -> bool:
        return self.state is SearchState.FOUND

    def raise_for_timeout(self) -> str:
        """Returns the URL, or raises SearchTimeoutError if none was found."""
        if self.url is None:
            raise SearchTimeoutError(
                f"No valid URL found within {self.elapsed:.0f}s."
            )
        return self.url


class SearchCoordinator:
    """
    Runs one search session.

    The fan-out runs as a background task while the coordinator waits on the
    session's result slot with a timeout. Whichever settles first decides the
    terminal state; the fan-out is then told to stop and cancelled.
    """

    def __init__(
        self,
        probe: ProbeFunc,
        concurrency: int = 1000,
        timeout: float = 30.0,
        on_result: Optional[ResultCallback] = None,
    ):
        if concurrency < 1:
            raise ValueError("Concurrency must be at least 1.")
        self.probe = probe
        self.concurrency = concurrency
        self.timeout = timeout
        self.on_result = on_result
        self.state = SearchState.SEARCHING
        self.stats = SearchStats()

    async def run(self, candidates: Iterable[str]) -> SearchResult:
        if self.state is not SearchState.SEARCHING:
            raise RuntimeError("A coordinator runs a single search session.")

        session = SearchSession()
        stats = self.stats
        start_time = time.monotonic()
        fan_out = asyncio.create_task(
            run_search(
                candidates,
                self.probe,
                session,
                concurrency=self.concurrency,
                stats=stats,
                on_result=self.on_result,
            )
        )
        url = None
        try:
            url = await asyncio.wait_for(session.wait_result(), timeout=self.timeout)
            self.state = SearchState.FOUND
        except asyncio.TimeoutError:
            self.state = SearchState.TIMED_OUT
            log.debug(f"Search timed out after {self.timeout}s.")
        finally:
            session.cancel()
            fan_out.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await fan_out

        return SearchResult(
            state=self.state,
            url=url,
            stats=stats,
            elapsed=time.monotonic() - start_time,
        )
