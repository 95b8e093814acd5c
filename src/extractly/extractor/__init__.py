"""
Site dispatch and rule-based article extraction.

Flow: ``select_ruleset(url)`` picks a ruleset id, ``extract(html, url, id)``
applies that ruleset's candidates to the parsed document.
"""

from .dispatcher import DEFAULT_SITE_RULES, SiteDispatcher, SiteRule, default_dispatcher, select_ruleset
from .engine import extract
from .models import AUTHOR_PLACEHOLDER, CONTENT_PLACEHOLDER, TITLE_PLACEHOLDER, ExtractionResult
from .rulesets import GENERIC, QUANBEN, RULESETS, LinkRule, Ruleset, get_ruleset, previous_chapter_url

__all__ = [
    "DEFAULT_SITE_RULES",
    "SiteDispatcher",
    "SiteRule",
    "default_dispatcher",
    "select_ruleset",
    "extract",
    "ExtractionResult",
    "TITLE_PLACEHOLDER",
    "CONTENT_PLACEHOLDER",
    "AUTHOR_PLACEHOLDER",
    "GENERIC",
    "QUANBEN",
    "RULESETS",
    "LinkRule",
    "Ruleset",
    "get_ruleset",
    "previous_chapter_url",
]
