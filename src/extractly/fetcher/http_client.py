"""
HTTP client that fetches target pages for extraction.

One aiohttp session is opened per process and reused by every request.
Failures are classified into the service's error taxonomy; nothing is
retried.
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional

import aiohttp
import structlog

from extractly.config.config import FetcherConfig
from extractly.errors import (
    InvalidInputError,
    UnknownError,
    UpstreamHttpError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)
from extractly.extractor.candidates import is_http_url
from extractly.observability.metrics import METRICS

logger = structlog.get_logger(__name__)


class HtmlFetcher:
    """Fetches HTML with a bounded timeout and redirect count."""

    def __init__(self, config: Optional[FetcherConfig] = None):
        self.config = config or FetcherConfig()
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self) -> None:
        """Open the HTTP session."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": self.config.accept,
                    "Accept-Language": self.config.accept_language,
                },
            )
            logger.info(
                "HTML fetcher initialized",
                timeout=self.config.timeout,
                max_redirects=self.config.max_redirects,
            )

    async def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info("HTML fetcher closed")

    async def __aenter__(self) -> "HtmlFetcher":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str) -> str:
        """
        Fetch ``url`` and return its body as text.

        Raises:
            InvalidInputError: URL is not an absolute http(s) URL
            UpstreamTimeoutError: No complete answer within the timeout
            UpstreamUnreachableError: DNS or connection failure
            UpstreamHttpError: Final status outside 200-399
            UnknownError: Any other transport failure
        """
        if not is_http_url(url):
            raise InvalidInputError("Invalid URL format")
        if self.session is None:
            raise RuntimeError("HTML fetcher not initialized")

        start = time.perf_counter()
        try:
            async with self.session.get(
                url,
                allow_redirects=True,
                max_redirects=self.config.max_redirects,
            ) as response:
                if response.status >= 400:
                    raise UpstreamHttpError(response.status)
                if response.status < 200:
                    raise UnknownError(f"Unexpected upstream status: HTTP {response.status}")
                html = await response.text(errors="replace")
        except UpstreamHttpError as e:
            self._record_failure("http_status", url, status=e.upstream_status)
            raise
        except UnknownError:
            self._record_failure("http_status", url)
            raise
        except asyncio.TimeoutError:
            self._record_failure("timeout", url)
            raise UpstreamTimeoutError("Request timed out, please try again later")
        except aiohttp.InvalidURL:
            self._record_failure("invalid_url", url)
            raise InvalidInputError("Invalid URL format")
        except aiohttp.ClientConnectionError as e:
            self._record_failure("unreachable", url, error=str(e))
            raise UpstreamUnreachableError("Unable to connect to the target server")
        except aiohttp.ClientError as e:
            self._record_failure("network", url, error=str(e))
            raise UnknownError(f"Network error: {e}")
        finally:
            METRICS["fetch_duration"].observe(time.perf_counter() - start)

        logger.info("Fetched page", url=url, status=response.status, length=len(html))
        return html

    def _record_failure(self, kind: str, url: str, **details: object) -> None:
        METRICS["fetch_errors"].labels(kind=kind).inc()
        logger.warning("Fetch failed", kind=kind, url=url, **details)
