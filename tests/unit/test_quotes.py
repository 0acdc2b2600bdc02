#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_quotes.py
"""Unit tests for quote snipping and mention extraction."""

import pytest

from bbhtml.utils.quotes import extract_mentions, extract_quote_mentions, extract_top_level_markup


@pytest.mark.unit
class TestExtractTopLevelMarkup:
    """Tests for extract_top_level_markup."""

    def test_no_quotes(self):
        assert extract_top_level_markup("just [b]text[/b]") == "just [b]text[/b]"

    def test_anonymous_quote(self):
        assert extract_top_level_markup("a[quote]x[/quote]b") == "a<Snipped quote>b"

    def test_named_quote(self):
        assert extract_top_level_markup("[quote=@Some User]x[/quote]\nreply") == "<Snipped quote by Some User>\nreply"

    def test_nested_quotes_removed_with_outer(self):
        markup = "[quote=outer]\n[quote=inner]\nyyy\n[/quote]\nxxx\n[/quote]\nzzz"
        assert extract_top_level_markup(markup) == "<Snipped quote by outer>\nzzz"

    def test_several_top_level_quotes(self):
        markup = "[quote=a]1[/quote] mid [QUOTE]2[/QUOTE] end"
        assert extract_top_level_markup(markup) == "<Snipped quote by a> mid <Snipped quote> end"

    def test_stray_close_ignored(self):
        assert extract_top_level_markup("x[/quote]y") == "x[/quote]y"

    def test_unclosed_quote_kept(self):
        assert extract_top_level_markup("[quote]never closed") == "[quote]never closed"


@pytest.mark.unit
class TestExtractMentions:
    """Tests for extract_mentions and extract_quote_mentions."""

    def test_mentions_outside_quotes(self):
        markup = "[@Alice] hi [quote=@carol][@bob][/quote] [@alice] [@Dave]"
        assert extract_mentions(markup) == ["alice", "dave"]

    def test_exclude_author(self):
        assert extract_mentions("[@me] [@you]", exclude="Me") == ["you"]

    def test_limit(self):
        assert extract_mentions("[@a] [@b] [@c]", limit=2) == ["a", "b"]

    def test_quote_mentions_top_level_only(self):
        markup = "[quote=@Bob][quote=@carol]x[/quote][/quote][quote=dave]y[/quote][quote=@Erin]z[/quote]"
        assert extract_quote_mentions(markup) == ["bob", "erin"]

    def test_quote_mentions_exclude(self):
        assert extract_quote_mentions("[quote=@Bob]x[/quote]", exclude="bob") == []
