"""Outbound page fetching."""

from .http_client import HtmlFetcher

__all__ = ["HtmlFetcher"]
