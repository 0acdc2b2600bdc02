#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/postprocessors/greentext.py
"""Green-text styling for lines quoted with ``>``.

The pass works on text nodes, so only the quoted text is wrapped and the
span always closes inside the element it opened in. A text node starts a
line when it follows a newline, a ``<br>`` or a block element, or when it
is the first thing inside a block element.
"""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup, NavigableString
from bs4 import Tag as HtmlElement

from bbhtml.constants import GREENTEXT_CLASS, LINE_BLOCK_ELEMENTS, TEXT_PASS_SKIP_ELEMENTS
from bbhtml.options import BBCodeRenderOptions
from bbhtml.utils.html_utils import Piece, map_text_nodes

GREENTEXT_LINE_PATTERN = re.compile(r">\S")


def _starts_line(node: HtmlElement | NavigableString) -> bool:
    previous = node.previous_sibling
    if previous is None:
        parent = node.parent
        if parent is None or isinstance(parent, BeautifulSoup) or parent.name in LINE_BLOCK_ELEMENTS:
            return True
        return _starts_line(parent)
    if isinstance(previous, NavigableString):
        return previous.endswith("\n")
    return previous.name in LINE_BLOCK_ELEMENTS


def _greentext_pieces(soup: BeautifulSoup, node: NavigableString) -> Optional[list[Piece]]:
    lines = str(node).split("\n")
    pieces: list[Piece] = []
    changed = False
    for index, line in enumerate(lines):
        if index:
            pieces.append("\n")
        if GREENTEXT_LINE_PATTERN.match(line) and (index or _starts_line(node)):
            span = soup.new_tag("span", attrs={"class": GREENTEXT_CLASS})
            span.string = line
            pieces.append(span)
            changed = True
        else:
            pieces.append(line)
    return pieces if changed else None


def replace_greentext(html: str, options: BBCodeRenderOptions) -> str:
    """Wrap every line of text starting with ``>`` in a green-text span.

    Text inside links, buttons and code blocks is left alone.

    Examples
    --------
        >>> replace_greentext("&gt;be me\\nok", BBCodeRenderOptions(greentext=True))
        '<span class="bb-greentext">&gt;be me</span>\\nok'

    """
    if not options.greentext:
        return html
    return map_text_nodes(html, _greentext_pieces, TEXT_PASS_SKIP_ELEMENTS)
