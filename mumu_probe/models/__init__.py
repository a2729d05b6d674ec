"""
Data Models Layer.

This package contains the data structures used throughout the application:
the validated search configuration, per-probe results and search statistics.
"""

from .config import SearchConfig
from .probe import ProbeOutcome, ProbeResult
from .stats import SearchStats

__all__ = ["ProbeOutcome", "ProbeResult", "SearchConfig", "SearchStats"]
