"""
Shared state for one search: the found flag, the single-slot result channel
and the cancellation token checked before every dispatch.
"""

import asyncio
import logging

log = logging.getLogger(__name__)


class SearchSession:
    """
    Owns the only mutable state shared between concurrent probes.

    The found flag only ever moves from False to True. The result slot holds at
    most one URL; offers made once it is full are dropped.
    """

    def __init__(self) -> None:
        self._found = False
        self._cancelled = False
        self._result: asyncio.Queue[str] = asyncio.Queue(maxsize=1)

    @property
    def found(self) -> bool:
        return self._found

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def should_stop(self) -> bool:
        """True once no further probes should be dispatched."""
        return self._found or self._cancelled

    def mark_found(self) -> bool:
        """Sets the found flag. Returns True only for the call that flipped it."""
        if self._found:
            return False
        self._found = True
        return True

    def offer(self, url: str) -> bool:
        """
        Marks the session as found, then tries to deliver `url` without
        blocking. Only the offer that flips the found flag is delivered, even
        after the slot has been drained. Returns whether `url` was accepted.
        """
        if not self.mark_found():
            log.debug(f"Session already found a URL, dropping {url}")
            return False
        try:
            self._result.put_nowait(url)
        except asyncio.QueueFull:
            log.debug(f"Result slot already filled, dropping {url}")
            return False
        return True

    def cancel(self) -> None:
        """Signals the fan-out to stop dispatching new probes."""
        self._cancelled = True

    async def wait_result(self) -> str:
        """Waits for the first delivered URL."""
        return await self._result.get()
