"""
Handles the low-level downloading of the resolved installer over HTTP,
streaming it to disk chunk by chunk.
"""

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import unquote, urlsplit

import aiofiles
import aiohttp

from mumu_probe.exceptions import DownloadError, InvalidUrlFormatError
from mumu_probe.models.config import DEFAULT_DOWNLOAD_TIMEOUT
from mumu_probe.utils.path import create_dir

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class DownloadResult:
    path: Path
    bytes_written: int
    total_size: int


def file_name_from_url(url: str) -> str:
    """Returns the final path segment of `url`, which names the saved file."""
    name = unquote(urlsplit(url).path.rsplit("/", 1)[-1])
    if not name:
        raise InvalidUrlFormatError(f"Cannot derive a file name from URL: {url}")
    return name


class Downloader:
    """A streaming file downloader reporting cumulative progress."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(
        self, timeout: float = DEFAULT_DOWNLOAD_TIMEOUT, chunk_size: int = CHUNK_SIZE
    ):
        self.timeout = timeout
        self.chunk_size = chunk_size

    async def download(
        self,
        url: str,
        directory: Path | str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> DownloadResult:
        """
        Downloads `url` into `directory`, creating it if needed.

        `on_progress` receives (bytes_written, total_size) after every chunk;
        total_size is 0 when the server does not advertise a length. A failed
        download leaves whatever was written on disk.
        """
        destination = Path(directory) / file_name_from_url(url)

        try:
            await asyncio.to_thread(create_dir, Path(directory))
        except OSError as e:
            raise DownloadError("directory", url, e) from e

        timeout = aiohttp.ClientTimeout(total=self.timeout, sock_connect=30)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            try:
                response = await session.get(url, allow_redirects=True)
                response.raise_for_status()
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise DownloadError("request", url, e) from e

            async with response:
                total_size = response.content_length or 0
                log.debug(f"Downloading {url} ({total_size} bytes advertised)")
                bytes_written = await self._stream_to_file(
                    url, response, destination, total_size, on_progress
                )

        log.info(f"Saved {bytes_written} bytes to {destination}")
        return DownloadResult(destination, bytes_written, total_size)

    async def _stream_to_file(
        self,
        url: str,
        response: aiohttp.ClientResponse,
        destination: Path,
        total_size: int,
        on_progress: Optional[ProgressCallback],
    ) -> int:
        bytes_written = 0
        async with contextlib.AsyncExitStack() as stack:
            try:
                f = await stack.enter_async_context(aiofiles.open(destination, "wb"))
            except OSError as e:
                raise DownloadError("create", url, e) from e

            chunks = aiter(response.content.iter_chunked(self.chunk_size))
            while True:
                try:
                    chunk = await anext(chunks)
                except StopAsyncIteration:
                    break
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    raise DownloadError("read", url, e) from e

                try:
                    await f.write(chunk)
                except OSError as e:
                    raise DownloadError("write", url, e) from e

                bytes_written += len(chunk)
                if on_progress:
                    on_progress(bytes_written, total_size)

        return bytes_written
