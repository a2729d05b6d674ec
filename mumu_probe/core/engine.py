"""
Bounded fan-out of probes over the candidate sequence.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Optional

from mumu_probe.models.probe import ProbeResult
from mumu_probe.models.stats import SearchStats

from .session import SearchSession

log = logging.getLogger(__name__)

ProbeFunc = Callable[[str], Awaitable[ProbeResult]]
ResultCallback = Callable[[ProbeResult], None]


async def run_search(
    candidates: Iterable[str],
    probe: ProbeFunc,
    session: SearchSession,
    concurrency: int = 1000,
    stats: Optional[SearchStats] = None,
    on_result: Optional[ResultCallback] = None,
) -> SearchStats:
    """
    Probes candidates with at most `concurrency` requests in flight.

    Candidates seen after the session stops are skipped without taking a slot.
    The first successful probe offers its URL to the session; the caller
    observes the session's result slot, not the return of this coroutine.
    Cancelling this coroutine cancels every probe still in flight.
    """
    if concurrency < 1:
        raise ValueError("Concurrency must be at least 1.")

    stats = stats if stats is not None else SearchStats()
    semaphore = asyncio.Semaphore(concurrency)
    in_flight: set[asyncio.Task] = set()

    async def _probe_one(candidate: str) -> None:
        try:
            result = await probe(candidate)
        finally:
            stats.on_settled()
            semaphore.release()

        stats.record(result)
        if on_result:
            on_result(result)
        if result.is_success and session.offer(result.url):
            log.info(f"[green]Found valid URL:[/green] {result.url}")

    try:
        for candidate in candidates:
            if session.should_stop:
                stats.skipped += 1
                continue

            await semaphore.acquire()
            # The flag may have flipped while waiting for a slot
            if session.should_stop:
                semaphore.release()
                stats.skipped += 1
                continue

            stats.on_dispatch()
            task = asyncio.create_task(_probe_one(candidate))
            in_flight.add(task)
            task.add_done_callback(in_flight.discard)

        if in_flight:
            await asyncio.gather(*in_flight)
    except asyncio.CancelledError:
        pending = list(in_flight)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        log.debug(f"Fan-out cancelled with {len(pending)} probes in flight.")
        raise

    log.debug(
        f"Fan-out finished: {stats.dispatched} dispatched, {stats.skipped} skipped."
    )
    return stats
