"""
Dataclass for tracking statistics of a single search session.
"""

from dataclasses import dataclass

from .probe import ProbeOutcome, ProbeResult


@dataclass
class SearchStats:
    """Counts probes as the fan-out dispatches and completes them."""

    dispatched: int = 0
    skipped: int = 0
    succeeded: int = 0
    failed: int = 0
    inconclusive: int = 0
    in_flight: int = 0
    peak_in_flight: int = 0

    @property
    def completed(self) -> int:
        return self.succeeded + self.failed + self.inconclusive

    def on_dispatch(self) -> None:
        self.dispatched += 1
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)

    def on_settled(self) -> None:
        self.in_flight -= 1

    def record(self, result: ProbeResult) -> None:
        """Tallies a finished probe by its outcome."""
        if result.outcome is ProbeOutcome.SUCCESS:
            self.succeeded += 1
        elif result.outcome is ProbeOutcome.FAILURE:
            self.failed += 1
        else:
            self.inconclusive += 1
