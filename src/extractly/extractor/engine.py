"""
Applies a ruleset to an HTML document.
"""

from __future__ import annotations

from typing import Optional, Sequence

import structlog
from bs4 import BeautifulSoup

from extractly.errors import InvalidInputError

from .candidates import TextCandidate, is_http_url, resolve_link
from .models import AUTHOR_PLACEHOLDER, CONTENT_PLACEHOLDER, TITLE_PLACEHOLDER, ExtractionResult
from .rulesets import LinkRule, get_ruleset

logger = structlog.get_logger(__name__)

PARSER = "html.parser"


def first_text(candidates: Sequence[TextCandidate], soup: BeautifulSoup) -> Optional[str]:
    """Value of the first candidate that yields non-empty text."""
    for candidate in candidates:
        value = candidate(soup)
        if value:
            return value
    return None


def find_link(rule: LinkRule, soup: BeautifulSoup, base_url: str) -> Optional[str]:
    """Resolve one pagination link, falling back to URL synthesis when no element exists."""
    for locate in rule.locators:
        element = locate(soup)
        if element is not None:
            return resolve_link(element.get("href"), base_url)
    for synthesize in rule.fallbacks:
        link = synthesize(base_url)
        if link:
            return link
    return None


def extract(html: str, base_url: str, ruleset_id: str) -> ExtractionResult:
    """
    Extract article fields from ``html``.

    Args:
        html: Raw page markup, well-formed or not
        base_url: The URL the page was requested from; relative links resolve against it
        ruleset_id: A registered ruleset id, usually chosen by the dispatcher

    Returns:
        ExtractionResult with placeholders for fields nothing matched

    Raises:
        InvalidInputError: If ``base_url`` is not an absolute http(s) URL
        KeyError: If ``ruleset_id`` is not registered
    """
    if not is_http_url(base_url):
        raise InvalidInputError("Invalid URL format")
    ruleset = get_ruleset(ruleset_id)

    soup = BeautifulSoup(html, PARSER)

    result = ExtractionResult(
        title=first_text(ruleset.title, soup) or TITLE_PLACEHOLDER,
        content=first_text(ruleset.content, soup) or CONTENT_PLACEHOLDER,
        author=first_text(ruleset.author, soup) or AUTHOR_PLACEHOLDER,
        prev_link=find_link(ruleset.prev_link, soup, base_url),
        next_link=find_link(ruleset.next_link, soup, base_url),
        book_name=None if ruleset.book_name is None else first_text(ruleset.book_name, soup) or "",
        description=None if ruleset.description is None else first_text(ruleset.description, soup) or "",
    )

    logger.debug(
        "Extracted page",
        url=base_url,
        ruleset=ruleset.name,
        title_found=result.title != TITLE_PLACEHOLDER,
        content_length=len(result.content),
        has_prev=result.prev_link is not None,
        has_next=result.next_link is not None,
    )
    return result
