"""
Unit tests for extraction with the generic ruleset.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from extractly.errors import InvalidInputError
from extractly.extractor import (
    AUTHOR_PLACEHOLDER,
    CONTENT_PLACEHOLDER,
    GENERIC,
    TITLE_PLACEHOLDER,
    extract,
)

BASE_URL = "https://example.com/articles/42"


def page(head: str = "", body: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


@pytest.mark.unit
class TestPlaceholders:
    """Nothing matched degrades to placeholders, never to errors."""

    def test_empty_document(self):
        result = extract(page(), BASE_URL, GENERIC)

        assert result.title == TITLE_PLACEHOLDER
        assert result.content == CONTENT_PLACEHOLDER
        assert result.author == AUTHOR_PLACEHOLDER
        assert result.prev_link is None
        assert result.next_link is None

    def test_empty_string(self):
        result = extract("", BASE_URL, GENERIC)
        assert result.title == TITLE_PLACEHOLDER

    def test_malformed_html(self):
        html = "<html><head><title>Broken <b>page</title><body><article><p>Unclosed <div>text"
        result = extract(html, BASE_URL, GENERIC)

        assert result.title.startswith("Broken")
        assert "Unclosed" in result.content

    def test_generic_result_has_no_site_fields(self):
        result = extract(page(), BASE_URL, GENERIC)

        assert result.book_name is None
        assert result.description is None
        assert "bookName" not in result.to_dict()

    @settings(max_examples=50)
    @given(st.text(alphabet=st.characters(blacklist_characters="<>&"), max_size=200))
    def test_plain_text_never_raises(self, text):
        result = extract(page(body=f"<div>{text}</div>"), BASE_URL, GENERIC)

        assert result.title == TITLE_PLACEHOLDER
        assert result.prev_link is None
        assert result.next_link is None


@pytest.mark.unit
class TestTitle:
    def test_title_tag_is_whitespace_normalized(self):
        result = extract(page(head="<title>\n  Hello \t  World \n</title>"), BASE_URL, GENERIC)
        assert result.title == "Hello World"

    def test_h1_when_no_title_tag(self):
        result = extract(page(body="<h1>First</h1><h1>Second</h1>"), BASE_URL, GENERIC)
        assert result.title == "First"

    def test_og_title_last(self):
        result = extract(page(head='<meta property="og:title" content=" Open  Graph ">'), BASE_URL, GENERIC)
        assert result.title == "Open Graph"

    def test_blank_title_tag_falls_through(self):
        result = extract(page(head="<title>   </title>", body="<h1>Heading</h1>"), BASE_URL, GENERIC)
        assert result.title == "Heading"


@pytest.mark.unit
class TestContentAndAuthor:
    def test_article_text_is_dumped_whole(self):
        body = "<article><h2>Intro</h2>\n<p>First   paragraph.</p>\n<p>Second\nparagraph.</p></article>"
        result = extract(page(body=body), BASE_URL, GENERIC)
        assert result.content == "Intro First paragraph. Second paragraph."

    def test_only_first_matching_container_is_used(self):
        body = '<div class="content">A</div><div class="content">B</div>'
        result = extract(page(body=body), BASE_URL, GENERIC)
        assert result.content == "A"

    def test_adjacent_blocks_stay_separate_words(self):
        result = extract(page(body="<article><p>one</p><p>two</p></article>"), BASE_URL, GENERIC)
        assert result.content == "one two"

    def test_container_priority(self):
        body = '<main>Main text</main><div class="article-content">Article content</div>'
        result = extract(page(body=body), BASE_URL, GENERIC)
        assert result.content == "Article content"

    def test_author_meta_first(self):
        head = '<meta name="author" content="Jane Doe">'
        body = '<span class="author">Someone Else</span>'
        result = extract(page(head=head, body=body), BASE_URL, GENERIC)
        assert result.author == "Jane Doe"

    def test_author_rel(self):
        result = extract(page(body='<a rel="author" href="/u/1"> Ann  Lee </a>'), BASE_URL, GENERIC)
        assert result.author == "Ann Lee"


@pytest.mark.unit
class TestLinks:
    def test_rel_links_resolve_against_request_url(self):
        body = '<a rel="prev" href="41">Prev</a><a rel="next" href="/articles/43">Next</a>'
        result = extract(page(body=body), BASE_URL, GENERIC)

        assert result.prev_link == "https://example.com/articles/41"
        assert result.next_link == "https://example.com/articles/43"

    def test_base_tag_is_ignored(self):
        head = '<base href="https://cdn.example.net/">'
        result = extract(page(head=head, body='<a rel="next" href="43">Next</a>'), BASE_URL, GENERIC)
        assert result.next_link == "https://example.com/articles/43"

    def test_class_fallbacks(self):
        body = '<a class="previous" href="?page=1">Back</a><a class="next" href="?page=3">More</a>'
        result = extract(page(body=body), BASE_URL, GENERIC)

        assert result.prev_link == "https://example.com/articles/42?page=1"
        assert result.next_link == "https://example.com/articles/42?page=3"

    def test_rel_wins_over_class(self):
        body = '<a class="next" href="/by-class">A</a><a rel="next" href="/by-rel">B</a>'
        result = extract(page(body=body), BASE_URL, GENERIC)
        assert result.next_link == "https://example.com/by-rel"

    def test_element_without_href_is_null(self):
        body = '<span class="prev">Previous</span><a class="previous" href="/other">Other</a>'
        result = extract(page(body=body), BASE_URL, GENERIC)
        assert result.prev_link is None

    @pytest.mark.parametrize("href", ["", "   ", "javascript:void(0)", "mailto:someone@example.com", "http://[::1"])
    def test_unusable_href_is_null(self, href):
        result = extract(page(body=f'<a rel="next" href="{href}">Next</a>'), BASE_URL, GENERIC)
        assert result.next_link is None

    def test_absolute_href_kept(self):
        body = '<a rel="next" href="https://other.example.org/p/2">Next</a>'
        result = extract(page(body=body), BASE_URL, GENERIC)
        assert result.next_link == "https://other.example.org/p/2"


@pytest.mark.unit
class TestCallerErrors:
    @pytest.mark.parametrize(
        "base_url", ["not-a-url", "/relative/path", "ftp://example.com/file", "", "https://exa mple.com/a"]
    )
    def test_malformed_base_url(self, base_url):
        with pytest.raises(InvalidInputError):
            extract(page(), base_url, GENERIC)

    def test_unknown_ruleset(self):
        with pytest.raises(KeyError):
            extract(page(), BASE_URL, "no-such-ruleset")
