"""
Maps request URLs to extraction rulesets.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Pattern, Tuple

from .rulesets import GENERIC, QUANBEN


@dataclass(frozen=True)
class SiteRule:
    """A URL shape and the ruleset that handles it."""

    name: str
    pattern: Pattern[str]
    ruleset_id: str

    def matches(self, url: str) -> bool:
        return self.pattern.match(url) is not None


DEFAULT_SITE_RULES: Tuple[SiteRule, ...] = (
    SiteRule(
        name="quanben.io chapter",
        pattern=re.compile(r"^https://quanben\.io/n/[^/]+/\d+\.html\Z"),
        ruleset_id=QUANBEN,
    ),
)


class SiteDispatcher:
    """
    Ordered registry of site rules.

    The first matching rule wins; anything unmatched falls through to the
    default ruleset. Selection never fails.
    """

    def __init__(self, rules: Iterable[SiteRule] = DEFAULT_SITE_RULES, default: str = GENERIC):
        self.rules: Tuple[SiteRule, ...] = tuple(rules)
        self.default = default

    def select_ruleset(self, url: str) -> str:
        for rule in self.rules:
            if rule.matches(url):
                return rule.ruleset_id
        return self.default


default_dispatcher = SiteDispatcher()


def select_ruleset(url: str) -> str:
    """Select a ruleset id for ``url`` using the built-in site rules."""
    return default_dispatcher.select_ruleset(url)
