#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_tokenizer.py
"""Unit tests for escaping and tokenization."""

import html

import pytest

from bbhtml.parsers.tokenizer import escape_brackets, escape_markup, escape_text, iter_tokens, to_literal
from bbhtml.registry import TagRegistry
from bbhtml.tags import TagDefinition


@pytest.fixture
def snapshot(builtin_registry):
    return builtin_registry.snapshot()


@pytest.mark.unit
class TestEscapeHelpers:
    """Tests for the small escaping helpers."""

    def test_escape_text_matches_html_escape(self):
        """Test that escape_text escapes quotes like html.escape."""
        text = "<a href=\"x\">it's & done</a>"
        assert escape_text(text) == html.escape(text, quote=True)

    def test_escape_brackets(self):
        assert escape_brackets("[x]") == "&#91;x&#93;"

    def test_to_literal(self):
        assert to_literal("<b=1>") == "&#91;b=1&#93;"


@pytest.mark.unit
class TestEscapeMarkup:
    """Tests for escape_markup."""

    def test_plain_text_is_html_escaped(self, snapshot):
        """Test that text without brackets is only HTML-escaped."""
        text = "<script>alert('x')</script> & \"quotes\""
        assert escape_markup(text, snapshot) == html.escape(text)

    def test_recognized_tokens_are_delimited(self, snapshot):
        """Test that known tags become <...> and unknown ones are entity-escaped."""
        assert escape_markup("[b]x[/b] [nope]y[/nope]", snapshot) == "<b>x</b> &#91;nope&#93;y&#91;/nope&#93;"

    def test_case_insensitive_names(self, snapshot):
        """Test that the token keeps its original case."""
        assert escape_markup("[B]x[/b]", snapshot) == "<B>x</b>"

    def test_params_with_equals_and_space(self, snapshot):
        """Test both parameter separators."""
        assert escape_markup("[url=http://a.com]a[/url]", snapshot) == "<url=http://a.com>a</url>"
        assert escape_markup("[quote Bob]hi[/quote]", snapshot) == "<quote Bob>hi</quote>"

    def test_name_prefix_is_not_a_match(self, snapshot):
        """Test that [bold] is not read as [b] followed by text."""
        assert escape_markup("[bold]", snapshot) == "&#91;bold&#93;"

    def test_self_closing_has_no_close_token(self, snapshot):
        """Test that [/hr] stays literal."""
        assert escape_markup("[hr][/hr]", snapshot) == "<hr>&#91;/hr&#93;"

    def test_no_parse_body_is_not_tokenized(self, snapshot):
        """Test that tags inside a no-parse body are escaped, not delimited."""
        assert escape_markup("[code][b]x[/b][/code][i]", snapshot) == "<code>&#91;b&#93;x&#91;/b&#93;</code><i>"

    def test_no_parse_ends_at_first_close(self, snapshot):
        """Test that the first matching close token ends the body."""
        result = escape_markup("[code][code]x[/code][/code]", snapshot)
        assert result == "<code>&#91;code&#93;x</code></code>"

    def test_unclosed_no_parse_is_delimited(self, snapshot):
        """Test that a no-parse open token without a close is left for the tree builder."""
        assert escape_markup("[code][b]x[/b]", snapshot) == "<code><b>x</b>"

    def test_repeated_unclosed_no_parse(self, snapshot):
        """Test several unclosed no-parse tokens in a row."""
        assert escape_markup("[code]a[code]b", snapshot) == "<code>a<code>b"

    def test_brackets_in_params_end_the_token(self, snapshot):
        """Test that parameters cannot contain square brackets."""
        assert escape_markup("[url=a[b]c]", snapshot) == "&#91;url=a<b>c&#93;"

    def test_empty_registry_escapes_everything(self):
        """Test that with no tags every bracket is literal."""
        snapshot = TagRegistry().snapshot()
        assert escape_markup("[b]x[/b]", snapshot) == "&#91;b&#93;x&#91;/b&#93;"

    def test_custom_tag_names_are_regex_escaped(self):
        """Test that names with regex metacharacters are matched literally."""
        snapshot = TagRegistry([TagDefinition.simple("a.b", "<x>", "</x>")]).snapshot()
        assert escape_markup("[a.b]1[/a.b][axb]", snapshot) == "<a.b>1</a.b>&#91;axb&#93;"


@pytest.mark.unit
class TestIterTokens:
    """Tests for iter_tokens."""

    def test_token_fields(self):
        """Test name, params, closing flag and offsets."""
        tokens = list(iter_tokens("x<URL=http://a.com/?q=1>y</url>"))

        assert [token.name for token in tokens] == ["url", "url"]
        opening, closing = tokens
        assert opening.params == "http://a.com/?q=1"
        assert opening.is_closing is False
        assert opening.raw == "<URL=http://a.com/?q=1>"
        assert (opening.start, opening.end) == (1, 24)
        assert closing.is_closing is True
        assert closing.params is None
        assert closing.literal == "&#91;/url&#93;"

    def test_space_separated_params(self):
        """Test that the first space also separates the parameters."""
        (token,) = iter_tokens("<quote some user>")
        assert token.name == "quote"
        assert token.params == "some user"

    def test_empty_params(self):
        """Test that a trailing separator gives empty parameters."""
        (token,) = iter_tokens("<color=>")
        assert token.params == ""

    def test_no_params(self):
        (token,) = iter_tokens("<b>")
        assert token.params is None
