"""
mumu-probe: finds the published MuMu installer build by probing candidate
download URLs concurrently, then optionally downloads it.
"""

__version__ = "0.1.0"
