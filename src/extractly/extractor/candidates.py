"""
Selector candidates and the text / URL helpers they share.

A candidate is a small function over a parsed document. Text candidates
return a normalized string or ``None``; locators return the element that
holds a link, or ``None`` when nothing matches.
"""

from __future__ import annotations

import re
from typing import Callable, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

TextCandidate = Callable[[BeautifulSoup], Optional[str]]
Locator = Callable[[BeautifulSoup], Optional[Tag]]
LinkSynthesizer = Callable[[str], Optional[str]]

_WHITESPACE = re.compile(r"\s+")
_HTTP_URL = TypeAdapter(AnyHttpUrl)


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def is_http_url(url: str) -> bool:
    """True for syntactically valid absolute http(s) URLs with a host."""
    try:
        _HTTP_URL.validate_python(url)
    except ValidationError:
        return False
    return True


def resolve_link(href: object, base_url: str) -> Optional[str]:
    """
    Resolve ``href`` against the request URL.

    Empty or unresolvable values, and anything that does not resolve to an
    absolute http(s) URL (``javascript:``, ``mailto:``), give ``None``.
    """
    if not isinstance(href, str) or not href.strip():
        return None
    try:
        resolved = urljoin(base_url, href.strip())
    except ValueError:
        return None
    return resolved if is_http_url(resolved) else None


# --- Text candidates ---


def text_of(selector: str, separator: str = "") -> TextCandidate:
    """Whitespace-normalized text of the first element matching ``selector``."""

    def candidate(soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(selector)
        if element is None:
            return None
        return normalize_whitespace(element.get_text(separator)) or None

    return candidate


def attr_of(selector: str, attribute: str) -> TextCandidate:
    """Normalized value of ``attribute`` on the first element matching ``selector``."""

    def candidate(soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(selector)
        if element is None:
            return None
        value = element.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        return normalize_whitespace(value) if value else None

    return candidate


def paragraphs_in(container: str, exclude: str) -> TextCandidate:
    """
    Paragraph text inside ``container``, one paragraph per line.

    Paragraphs matching or nested inside ``exclude`` are skipped, as are
    paragraphs that are empty after normalization.
    """

    def candidate(soup: BeautifulSoup) -> Optional[str]:
        root = soup.select_one(container)
        if root is None:
            return None
        lines = []
        for paragraph in root.find_all("p"):
            if paragraph.css.closest(exclude) is not None:
                continue
            text = normalize_whitespace(paragraph.get_text())
            if text:
                lines.append(text)
        return "\n".join(lines) or None

    return candidate


# --- Link locators ---


def first_match(selector: str) -> Locator:
    """The first element matching ``selector``."""

    def locate(soup: BeautifulSoup) -> Optional[Tag]:
        return soup.select_one(selector)

    return locate


def first_within(container: str, selector: str) -> Locator:
    """The first ``selector`` match inside the first ``container`` element."""

    def locate(soup: BeautifulSoup) -> Optional[Tag]:
        root = soup.select_one(container)
        if root is None:
            return None
        return root.select_one(selector)

    return locate
