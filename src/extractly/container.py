"""
Application context: the collaborators one process shares across requests.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog

from extractly.auth import Authenticator, JWTManager
from extractly.config import DEFAULT_SECRET_KEY, Config
from extractly.extractor import SiteDispatcher, default_dispatcher
from extractly.fetcher import HtmlFetcher
from extractly.protocols import PageFetcher
from extractly.service import ExtractionService


class AppContext:
    """
    Built once at process start and handed to the web app.

    Construction is cheap and side-effect free; ``initialize`` opens the
    outbound HTTP session and may be called any number of times.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        fetcher: Optional[PageFetcher] = None,
        dispatcher: Optional[SiteDispatcher] = None,
    ) -> None:
        self.config = config or Config()
        self.logger = structlog.get_logger(self.__class__.__name__)

        self.jwt_manager = JWTManager(self.config.auth)
        self.authenticator = Authenticator(self.jwt_manager, bypass=self.config.auth_bypassed)
        self.fetcher: PageFetcher = fetcher or HtmlFetcher(self.config.fetcher)
        self.dispatcher = dispatcher or default_dispatcher
        self.service = ExtractionService(self.fetcher, self.dispatcher)

        self._init_lock = asyncio.Lock()
        self.is_initialized = False

    async def initialize(self) -> None:
        """Open shared resources once."""
        async with self._init_lock:
            if self.is_initialized:
                return

            if self.config.auth.secret_key == DEFAULT_SECRET_KEY and self.config.environment != "development":
                self.logger.warning("Using the default JWT secret; set EXTRACTLY_AUTH__SECRET_KEY")
            if self.authenticator.bypass:
                self.logger.warning("Authentication bypass is active", environment=self.config.environment)

            await self.fetcher.initialize()
            self.is_initialized = True
            self.logger.info("Application context initialized", environment=self.config.environment)

    async def shutdown(self) -> None:
        """Release shared resources."""
        async with self._init_lock:
            if not self.is_initialized:
                return
            await self.fetcher.close()
            self.is_initialized = False
            self.logger.info("Application context shut down")

    @asynccontextmanager
    async def lifecycle(self) -> AsyncIterator[AppContext]:
        """Context manager for proper lifecycle management."""
        try:
            await self.initialize()
            yield self
        finally:
            await self.shutdown()
