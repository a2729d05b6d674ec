"""
HTTP Layer.

This package handles the existence checks issued against candidate URLs.
"""

from .client import ProbeClient

__all__ = ["ProbeClient"]
