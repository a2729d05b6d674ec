"""
Core search engine.

The `SearchCoordinator` owns a search session, races the bounded fan-out
driven by `run_search` against a global timeout, and cancels outstanding
probes once a URL is found.
"""

from .candidates import CANDIDATE_COUNT, generate_candidates
from .coordinator import SearchCoordinator, SearchResult, SearchState
from .engine import run_search
from .session import SearchSession

__all__ = [
    "CANDIDATE_COUNT",
    "SearchCoordinator",
    "SearchResult",
    "SearchSession",
    "SearchState",
    "generate_candidates",
    "run_search",
]
