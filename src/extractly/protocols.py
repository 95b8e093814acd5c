"""
Protocols for the collaborators the extraction service depends on.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PageFetcher(Protocol):
    """Fetches the raw HTML of a page."""

    async def initialize(self) -> None:
        ...

    async def close(self) -> None:
        ...

    async def fetch(self, url: str) -> str:
        """Return the page body or raise an ``ExtractlyError`` subclass."""
        ...
