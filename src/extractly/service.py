"""
Fetch-dispatch-extract orchestration behind ``POST /api/extract``.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from extractly.errors import ExtractlyError
from extractly.extractor import SiteDispatcher, default_dispatcher, extract
from extractly.extractor.models import ExtractionResult
from extractly.observability.metrics import METRICS
from extractly.protocols import PageFetcher

logger = structlog.get_logger(__name__)


class ExtractionService:
    """Runs one extraction request end to end."""

    def __init__(self, fetcher: PageFetcher, dispatcher: Optional[SiteDispatcher] = None):
        self.fetcher = fetcher
        self.dispatcher = dispatcher or default_dispatcher

    async def extract_url(self, url: str) -> ExtractionResult:
        """
        Fetch ``url`` and extract it with the ruleset its shape selects.

        Parsing runs in the default executor since BeautifulSoup is CPU-bound.
        """
        ruleset_id = self.dispatcher.select_ruleset(url)
        try:
            html = await self.fetcher.fetch(url)
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(None, extract, html, url, ruleset_id)
        except ExtractlyError as e:
            METRICS["extract_requests"].labels(ruleset=ruleset_id, outcome=type(e).__name__).inc()
            raise
        except Exception:
            METRICS["extract_requests"].labels(ruleset=ruleset_id, outcome="error").inc()
            raise

        METRICS["extract_requests"].labels(ruleset=ruleset_id, outcome="success").inc()
        logger.info("Extraction complete", url=url, ruleset=ruleset_id)
        return result
