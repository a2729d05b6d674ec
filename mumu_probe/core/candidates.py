"""
Generates the candidate build suffixes. Builds are stamped with the
wall-clock time they were produced, so every HHMMSS of a day is a candidate.
"""

from typing import Iterator

CANDIDATE_COUNT = 24 * 60 * 60


def generate_candidates() -> Iterator[str]:
    """Yields every zero-padded HHMMSS string, hour-major, second-minor."""
    for hour in range(24):
        for minute in range(60):
            for second in range(60):
                yield f"{hour:02d}{minute:02d}{second:02d}"
