#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/postprocessors/autolink.py
"""Links for bare URLs in rendered text.

URLs are found by bleach's ``Linker``, one text node at a time, so text
inside links, buttons and code blocks is never linked. The link text drops
the scheme and ``www.`` prefix and is truncated; external links open in a
new window the same way ``[url]`` links do.
"""

from __future__ import annotations

import html as html_lib
import logging
import re
from typing import Any, Optional

from bleach.linkifier import Linker
from bs4 import BeautifulSoup, NavigableString

from bbhtml.constants import AUTOLINK_TRUNCATE_LENGTH, TEXT_PASS_SKIP_ELEMENTS
from bbhtml.options import BBCodeRenderOptions
from bbhtml.utils.html_utils import Piece, map_text_nodes, parse_fragment
from bbhtml.utils.urls import add_default_scheme, is_internal_url, is_valid_url

logger = logging.getLogger(__name__)

DISPLAY_PREFIX_PATTERN = re.compile(r"^(?:https?://)?(?:www\.)?", re.IGNORECASE)

HREF = (None, "href")
TARGET = (None, "target")
REL = (None, "rel")


def truncate_display(url: str, length: int = AUTOLINK_TRUNCATE_LENGTH) -> str:
    """Strip the scheme and ``www.`` prefix and shorten to ``length`` characters.

    Examples
    --------
        >>> truncate_display("https://www.example.com/")
        'example.com'

    """
    display = DISPLAY_PREFIX_PATTERN.sub("", url).rstrip("/")
    if len(display) > length:
        display = display[: length - 2] + ".."
    return display


def _link_attributes(options: BBCodeRenderOptions):
    """Build the ``Linker`` callback for one render."""

    def _callback(attrs: dict[Any, str], new: bool = False) -> Optional[dict[Any, str]]:
        href = add_default_scheme(html_lib.unescape(attrs.get(HREF, "")))
        if not is_valid_url(href):
            logger.debug(f"Not linking {href!r}")
            return None

        if is_internal_url(href, options.internal_hosts):
            attrs.pop(TARGET, None)
            attrs.pop(REL, None)
        else:
            attrs[TARGET] = "_blank"
            attrs[REL] = "nofollow noopener"
        attrs["_text"] = truncate_display(attrs.get("_text", href))
        return attrs

    return _callback


def autolink_urls(html: str, options: BBCodeRenderOptions) -> str:
    """Link bare URLs found in text outside links, buttons and code.

    Examples
    --------
        >>> autolink_urls("see www.example.com.", BBCodeRenderOptions(autolink=True))
        'see <a href="http://www.example.com" target="_blank" rel="nofollow noopener">example.com</a>.'

    """
    if not options.autolink:
        return html

    linker = Linker(callbacks=[_link_attributes(options)], skip_tags=sorted(TEXT_PASS_SKIP_ELEMENTS), parse_email=False)

    def _link_pieces(soup: BeautifulSoup, node: NavigableString) -> Optional[list[Piece]]:
        linked = linker.linkify(html_lib.escape(str(node), quote=False))
        if "<a " not in linked:
            return None
        return list(parse_fragment(linked).contents)

    return map_text_nodes(html, _link_pieces, TEXT_PASS_SKIP_ELEMENTS)
