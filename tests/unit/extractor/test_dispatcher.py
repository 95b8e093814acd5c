"""
Unit tests for site dispatch.
"""

import re

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from extractly.extractor import GENERIC, QUANBEN, RULESETS, SiteDispatcher, SiteRule, select_ruleset
from extractly.extractor.dispatcher import DEFAULT_SITE_RULES

QUANBEN_PATTERN = DEFAULT_SITE_RULES[0].pattern


@pytest.mark.unit
class TestSelectRuleset:
    """Built-in site rules."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://quanben.io/n/yishiwushuang/1.html",
            "https://quanben.io/n/some-book/123.html",
        ],
    )
    def test_quanben_chapter_urls(self, url):
        assert select_ruleset(url) == QUANBEN

    @pytest.mark.parametrize(
        "url",
        [
            "http://quanben.io/n/book/1.html",  # plain http is not the registered shape
            "https://quanben.io/n/book/1.html?from=list",
            "https://quanben.io/n/book/list.html",
            "https://quanben.io/n/book/",
            "https://www.quanben.io/n/book/1.html",
            "https://example.com/n/book/1.html",
            "https://example.com/article/42",
            "",
            "not a url",
        ],
    )
    def test_everything_else_is_generic(self, url):
        assert select_ruleset(url) == GENERIC

    @given(st.text())
    def test_dispatch_is_total(self, url):
        assert select_ruleset(url) in RULESETS

    @given(st.text())
    def test_unmatched_urls_fall_back_to_generic(self, url):
        assume(QUANBEN_PATTERN.match(url) is None)
        assert select_ruleset(url) == GENERIC

    @given(st.from_regex(r"\Ahttps://quanben\.io/n/[a-z0-9-]{1,20}/[0-9]{1,5}\.html\Z"))
    def test_generated_chapter_urls_select_quanben(self, url):
        assert select_ruleset(url) == QUANBEN


@pytest.mark.unit
class TestSiteDispatcher:
    """Custom registries."""

    def test_first_matching_rule_wins(self):
        dispatcher = SiteDispatcher(
            [
                SiteRule("first", re.compile(r"^https://example\.com/"), "first"),
                SiteRule("second", re.compile(r"^https://example\.com/a"), "second"),
            ]
        )
        assert dispatcher.select_ruleset("https://example.com/a") == "first"

    def test_custom_default(self):
        dispatcher = SiteDispatcher([], default="fallback")
        assert dispatcher.select_ruleset("https://example.com/") == "fallback"

    def test_rules_are_frozen_into_a_tuple(self):
        rules = [SiteRule("a", re.compile("a"), "a")]
        dispatcher = SiteDispatcher(rules)
        rules.append(SiteRule("b", re.compile("b"), "b"))
        assert len(dispatcher.rules) == 1
