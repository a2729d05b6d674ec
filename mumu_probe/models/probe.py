"""
Result types for a single existence check against one candidate URL.
"""

from dataclasses import dataclass
from enum import Enum


class ProbeOutcome(Enum):
    """How a single probe ended."""

    SUCCESS = "success"  # 2xx response
    FAILURE = "failure"  # Any other status
    INCONCLUSIVE = "inconclusive"  # No response: transport error or timeout


@dataclass(frozen=True)
class ProbeResult:
    """The classified outcome of probing one candidate."""

    candidate: str
    url: str
    outcome: ProbeOutcome
    status: int | None = None
    error: str | None = None

    @property
    def is_success(self) -> bool:
        return self.outcome is ProbeOutcome.SUCCESS
