#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/postprocessors/smilies.py
"""Replacement of ``:name`` smilie codes with images."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup, NavigableString

from bbhtml.constants import SMILIES, TEXT_PASS_SKIP_ELEMENTS
from bbhtml.options import BBCodeRenderOptions
from bbhtml.utils.html_utils import Piece, map_text_nodes, replace_matches

# Longest names first so ":airquotes" is not read as ":airquote" + "s"
SMILIE_PATTERN = re.compile(
    ":(" + "|".join(re.escape(name) for name in sorted(SMILIES, key=len, reverse=True)) + ")",
    re.IGNORECASE,
)


def replace_smilies(html: str, options: BBCodeRenderOptions) -> str:
    """Replace smilie codes in text with ``<img>`` tags.

    Codes inside links and code blocks are left alone.

    Parameters
    ----------
    html : str
        Rendered HTML fragment
    options : BBCodeRenderOptions
        ``smilies`` switches the pass on; ``smilie_url_template`` gives the
        image URL

    Returns
    -------
    str
        The fragment with smilies replaced

    """
    if not options.smilies:
        return html

    template = options.smilie_url_template

    def _smilie_pieces(soup: BeautifulSoup, node: NavigableString) -> Optional[list[Piece]]:
        return replace_matches(
            str(node),
            SMILIE_PATTERN,
            lambda match: soup.new_tag("img", attrs={"src": template.format(name=match.group(1).lower())}),
        )

    return map_text_nodes(html, _smilie_pieces, TEXT_PASS_SKIP_ELEMENTS)
