"""
Async HTTP client that checks whether candidate installer URLs exist.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from mumu_probe import __version__
from mumu_probe.models.config import (
    DEFAULT_BASE_URL,
    DEFAULT_CONCURRENCY,
    DEFAULT_PROBE_TIMEOUT,
    URL_TEMPLATE,
    SearchConfig,
)
from mumu_probe.models.probe import ProbeOutcome, ProbeResult

log = logging.getLogger(__name__)


class ProbeClient:
    """
    Issues lightweight HEAD requests against candidate installer URLs.

    A single aiohttp session is shared by every concurrent probe; its
    connector is sized to the search's concurrency ceiling.
    """

    def __init__(
        self,
        version_major: str,
        version_minor: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        max_connections: int = DEFAULT_CONCURRENCY,
    ):
        """
        Initializes the probe client.

        Args:
            version_major: Dotted installer version, e.g. "4.1.21.3664".
            version_minor: Build date prefix, e.g. "0325".
            base_url: Mirror root the installers are published under.
            timeout: Per-request timeout in seconds.
            max_connections: Connection pool size, matching the concurrency ceiling.
        """
        self.version_major = version_major
        self.version_minor = version_minor
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_connections = max_connections
        self._session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_config(cls, config: SearchConfig) -> "ProbeClient":
        return cls(
            config.version_major,
            config.version_minor,
            base_url=config.base_url,
            timeout=config.probe_timeout,
            max_connections=config.concurrency,
        )

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_connections,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": f"mumu-probe/{__version__}"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "ProbeClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def build_url(self, candidate: str) -> str:
        """Interpolates one candidate suffix into the installer URL template."""
        return URL_TEMPLATE.format(
            base_url=self.base_url,
            version_major=self.version_major,
            version_minor=self.version_minor,
            candidate=candidate,
        )

    async def probe(self, candidate: str) -> ProbeResult:
        """
        Checks whether the URL for `candidate` exists without downloading it.

        Network problems never propagate: a response with a non-2xx status is a
        FAILURE and a request that got no response at all is INCONCLUSIVE.
        """
        url = self.build_url(candidate)
        session = await self._initialize_session()
        try:
            async with session.head(url, allow_redirects=True) as response:
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug(f"Probe for {candidate} got no response: {e!r}")
            return ProbeResult(
                candidate, url, ProbeOutcome.INCONCLUSIVE, error=repr(e)
            )

        if 200 <= status < 300:
            return ProbeResult(candidate, url, ProbeOutcome.SUCCESS, status=status)
        return ProbeResult(candidate, url, ProbeOutcome.FAILURE, status=status)
