#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/utils/html_utils.py
"""Helpers for working on rendered HTML fragments.

Fragments are parsed with BeautifulSoup's ``html.parser`` builder and
written back with ``FRAGMENT_FORMATTER``, which escapes text the same way
the renderer does (square brackets included), keeps attributes in their
original order and writes void elements without a closing slash. A
fragment that no pass changes is returned exactly as it came in.
"""

from __future__ import annotations

import html
import re
from typing import Callable, Iterable, Iterator, Optional, Union

from bs4 import BeautifulSoup, NavigableString
from bs4 import Tag as HtmlElement
from bs4.formatter import HTMLFormatter

from bbhtml.constants import CLOSE_BRACKET_ENTITY, OPEN_BRACKET_ENTITY

BOOLEAN_ATTRIBUTES = frozenset({"allowfullscreen"})

Piece = Union[str, HtmlElement]
TextTransform = Callable[[BeautifulSoup, NavigableString], Optional[list[Piece]]]


def escape_text(text: str) -> str:
    """Escape text for HTML, including square brackets.

    Examples
    --------
    >>> escape_text("[b]'x' & y[/b]")
    '&#91;b&#93;&#x27;x&#x27; &amp; y&#91;/b&#93;'

    """
    return html.escape(text, quote=True).replace("[", OPEN_BRACKET_ENTITY).replace("]", CLOSE_BRACKET_ENTITY)


class FragmentFormatter(HTMLFormatter):
    """Serialize parsed fragments the way the renderer writes HTML."""

    def __init__(self) -> None:
        super().__init__(entity_substitution=escape_text, void_element_close_prefix=None)

    def attributes(self, tag: HtmlElement) -> Iterator[tuple[str, Optional[str]]]:
        for key, value in tag.attrs.items():
            yield key, (None if key in BOOLEAN_ATTRIBUTES and value == "" else value)


FRAGMENT_FORMATTER = FragmentFormatter()


def parse_fragment(fragment: str) -> BeautifulSoup:
    # Keep class and rel as plain strings so they serialize unchanged
    return BeautifulSoup(fragment, "html.parser", multi_valued_attributes=None)


def serialize_fragment(soup: BeautifulSoup) -> str:
    return soup.decode(formatter=FRAGMENT_FORMATTER)


def strip_tags(content: str) -> str:
    """Remove HTML tags from content, keeping entities escaped.

    Examples
    --------
    >>> strip_tags('<span class="bb-b">example.com</span>')
    'example.com'

    """
    if "<" not in content:
        return content
    return escape_text(parse_fragment(content).get_text())


def iter_text_nodes(soup: BeautifulSoup, skip_elements: Iterable[str] = ()) -> list[NavigableString]:
    """Return the text nodes of ``soup`` that are not inside a skipped element.

    Parameters
    ----------
    soup : BeautifulSoup
        Parsed fragment
    skip_elements : iterable of str, optional
        Lower-case element names whose text is left out

    Returns
    -------
    list of NavigableString
        Text nodes in document order

    """
    skip = frozenset(skip_elements)
    return [
        node
        for node in soup.find_all(string=True)
        if type(node) is NavigableString and not any(parent.name in skip for parent in node.parents)
    ]


def map_text_nodes(fragment: str, transform: TextTransform, skip_elements: Iterable[str] = ()) -> str:
    """Replace text nodes of an HTML fragment with the pieces ``transform`` returns.

    ``transform`` receives the soup and one text node (its unescaped text is
    ``str(node)``) and returns a list of strings and new elements to put in
    the node's place, or None to leave the node alone. Markup, and text
    inside any element named in ``skip_elements``, is never passed to it.

    Parameters
    ----------
    fragment : str
        Rendered HTML fragment
    transform : callable
        Function called for each text node
    skip_elements : iterable of str, optional
        Lower-case element names whose text is left alone

    Returns
    -------
    str
        The fragment with its text nodes transformed

    Examples
    --------
    >>> map_text_nodes("<b>hi</b><code>hi</code>", lambda soup, node: [node.upper()], {"code"})
    '<b>HI</b><code>hi</code>'

    """
    soup = parse_fragment(fragment)
    changed = False
    for node in iter_text_nodes(soup, skip_elements):
        pieces = transform(soup, node)
        if pieces is None:
            continue
        node.replace_with(*[piece for piece in pieces if piece != ""])
        changed = True
    return serialize_fragment(soup) if changed else fragment


def replace_matches(
    text: str, pattern: re.Pattern[str], build: Callable[[re.Match[str]], Optional[HtmlElement]]
) -> Optional[list[Piece]]:
    """Split ``text`` around ``pattern`` matches, putting ``build(match)`` in place of each.

    A match for which ``build`` returns None stays as text. Returns None when
    nothing was replaced.
    """
    pieces: list[Piece] = []
    position = 0
    for match in pattern.finditer(text):
        element = build(match)
        if element is None:
            continue
        pieces.append(text[position : match.start()])
        pieces.append(element)
        position = match.end()
    if not pieces:
        return None
    pieces.append(text[position:])
    return pieces
