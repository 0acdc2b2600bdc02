#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_url_utils.py
"""Unit tests for URL and HTML helpers."""

import re

import pytest

from bbhtml.constants import MAX_URL_LENGTH
from bbhtml.utils import (
    add_default_scheme,
    escape_text,
    extract_youtube_id,
    is_internal_url,
    is_valid_url,
    map_text_nodes,
    strip_tags,
)
from bbhtml.utils.html_utils import parse_fragment, replace_matches, serialize_fragment


@pytest.mark.unit
@pytest.mark.security
class TestUrlValidation:
    """Tests for is_valid_url and friends."""

    @pytest.mark.parametrize(
        "url",
        [
            "http://example.com",
            "https://sub.example.co.uk/path?q=1#frag",
            "ftp://files.example.com/a.txt",
            "https://8.8.8.8/",
            "https://example.com:8080/x",
        ],
    )
    def test_valid(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "example.com",
            "javascript:alert(1)",
            "http://10.0.0.1/",
            "http://127.0.0.1/",
            "http://169.254.1.1/",
            "http://172.16.0.1/",
            "http://192.168.0.1/",
            "http://localhost/",
            "mailto:someone@example.com",
        ],
    )
    def test_invalid(self, url):
        assert not is_valid_url(url)

    def test_too_long(self):
        url = "https://example.com/" + "a" * MAX_URL_LENGTH
        assert not is_valid_url(url)

    def test_add_default_scheme(self):
        assert add_default_scheme("example.com") == "http://example.com"
        assert add_default_scheme("HTTPS://example.com") == "HTTPS://example.com"

    def test_is_internal_url(self):
        hosts = ("example.org",)
        assert is_internal_url("https://example.org/x", hosts)
        assert is_internal_url("forum.example.org/x", hosts)
        assert not is_internal_url("https://notexample.org/", hosts)
        assert not is_internal_url("https://example.org.evil.com/", hosts)
        assert not is_internal_url("https://example.org/", ())

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
        ],
    )
    def test_youtube_ids(self, url):
        assert extract_youtube_id(url) == "dQw4w9WgXcQ"

    def test_youtube_invalid(self):
        assert extract_youtube_id("https://example.com/video") is None


@pytest.mark.unit
class TestHtmlUtils:
    def test_escape_text(self):
        assert escape_text("[b]'x' & <y>") == "&#91;b&#93;&#x27;x&#x27; &amp; &lt;y&gt;"

    def test_strip_tags_keeps_entities(self):
        assert strip_tags('<span class="x">a &amp; b</span>') == "a &amp; b"

    def test_strip_tags_plain_text(self):
        assert strip_tags("a &#91;b&#93;") == "a &#91;b&#93;"

    def test_map_text_nodes(self):
        html = map_text_nodes("<b>hi</b><code>hi</code>", lambda soup, node: [node.upper()], {"code"})
        assert html == "<b>HI</b><code>hi</code>"

    def test_nested_skip_elements(self):
        html = map_text_nodes("<pre>a<code>b</code>c</pre>d", lambda soup, node: [node.upper()], {"pre", "code"})
        assert html == "<pre>a<code>b</code>c</pre>D"

    def test_unchanged_fragment_returned_as_is(self):
        html = '<img src="x" /><b class="a  b">&#39;</b>'
        assert map_text_nodes(html, lambda soup, node: None) == html

    def test_serialization_matches_renderer(self):
        """Test that a parsed fragment writes back byte for byte."""
        html = (
            '<a target="_blank" rel="nofollow noopener" href="https://example.com/?a=1&amp;b=2">&#91;x&#93;</a>'
            '<br><hr class="bb-hr"><img src="">'
            '<iframe src="https://www.youtube.com/embed/x" frameborder="0" allowfullscreen></iframe>'
            '<abbr class="bb-abbr" title="&quot;q&quot; &amp; &#x27;s&#x27;">t</abbr>'
        )
        assert serialize_fragment(parse_fragment(html)) == html

    def test_replace_matches(self):
        parsed = parse_fragment("")
        pattern = re.compile(r"\d+")

        def build(match):
            if match.group(0) == "0":
                return None
            element = parsed.new_tag("b")
            element.string = match.group(0)
            return element

        pieces = replace_matches("a1 0 22b", pattern, build)

        assert [str(piece) for piece in pieces] == ["a", "<b>1</b>", " 0 ", "<b>22</b>", "b"]
        assert replace_matches("none", pattern, build) is None
