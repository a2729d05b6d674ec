"""
Media Layer.

This package is responsible for downloading the resolved installer to disk.
"""

from .downloader import Downloader, DownloadResult, file_name_from_url

__all__ = ["DownloadResult", "Downloader", "file_name_from_url"]
