"""
Per-site extraction rulesets.

A ruleset is plain configuration: for each field an ordered tuple of
candidates, evaluated first-match-wins by the engine. Rulesets hold no
state and are shared by all requests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from .candidates import (
    LinkSynthesizer,
    Locator,
    TextCandidate,
    attr_of,
    first_match,
    first_within,
    paragraphs_in,
    text_of,
)

GENERIC = "generic"
QUANBEN = "quanben"


@dataclass(frozen=True)
class LinkRule:
    """
    How to find one pagination link.

    ``locators`` are tried in order; the first element found decides the
    field, even when its ``href`` turns out to be unusable. ``fallbacks``
    only run when no locator found anything.
    """

    locators: Tuple[Locator, ...]
    fallbacks: Tuple[LinkSynthesizer, ...] = ()


@dataclass(frozen=True)
class Ruleset:
    """Ordered candidates for every field of one site category."""

    name: str
    title: Tuple[TextCandidate, ...]
    content: Tuple[TextCandidate, ...]
    author: Tuple[TextCandidate, ...]
    prev_link: LinkRule
    next_link: LinkRule
    # None means the ruleset does not produce the field at all
    book_name: Optional[Tuple[TextCandidate, ...]] = None
    description: Optional[Tuple[TextCandidate, ...]] = None


# --- Numeric pagination fallback ---

_CHAPTER_PATH = re.compile(r"/n/[^/]+/(\d+)\.html\Z")


def previous_chapter_url(url: str) -> Optional[str]:
    """
    Derive the previous chapter from a ``/n/{book}/{number}.html`` path.

    Chapter 1 has no predecessor. Query string and fragment are dropped.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    match = _CHAPTER_PATH.search(parts.path)
    if match is None:
        return None
    chapter = int(match.group(1))
    if chapter <= 1:
        return None
    path = parts.path[: match.start(1)] + str(chapter - 1) + parts.path[match.end(1) :]
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


# --- Rulesets ---

GENERIC_RULESET = Ruleset(
    name=GENERIC,
    title=(
        text_of("title"),
        text_of("h1"),
        attr_of('meta[property="og:title"]', "content"),
    ),
    # Whole text of the first matching container, no boilerplate removal.
    content=(
        text_of("article", separator=" "),
        text_of(".content", separator=" "),
        text_of(".article-content", separator=" "),
        text_of("main", separator=" "),
    ),
    author=(
        attr_of('meta[name="author"]', "content"),
        text_of(".author"),
        text_of('[rel~="author"]'),
    ),
    prev_link=LinkRule(
        locators=(
            first_match('a[rel~="prev"]'),
            first_match(".prev"),
            first_match(".previous"),
        ),
    ),
    next_link=LinkRule(
        locators=(
            first_match('a[rel~="next"]'),
            first_match(".next"),
        ),
    ),
)

# quanben.io chapter pages: https://quanben.io/n/{book}/{chapter}.html
QUANBEN_RULESET = Ruleset(
    name=QUANBEN,
    title=(text_of('h1.headline[itemprop="headline"]'),),
    content=(paragraphs_in("#content", exclude=".ads"),),
    # The site publishes no author.
    author=(),
    prev_link=LinkRule(
        locators=(
            first_within(".list_page", 'a[rel~="prev"]'),
            first_within(".list_page span", "a"),
        ),
        fallbacks=(previous_chapter_url,),
    ),
    next_link=LinkRule(
        locators=(first_within(".list_page", 'a[rel~="next"]'),),
    ),
    book_name=(text_of("div.name"),),
    description=(attr_of('meta[name="description"]', "content"),),
)

RULESETS: Mapping[str, Ruleset] = MappingProxyType(
    {
        GENERIC: GENERIC_RULESET,
        QUANBEN: QUANBEN_RULESET,
    }
)


def get_ruleset(ruleset_id: str) -> Ruleset:
    """
    Look up a registered ruleset.

    Raises:
        KeyError: If no ruleset is registered under ``ruleset_id``.
    """
    try:
        return RULESETS[ruleset_id]
    except KeyError:
        raise KeyError(f"Unknown ruleset: {ruleset_id!r}") from None
