#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/postprocessors/mentions.py
"""Profile links for ``[@user name]`` mentions.

``[@...]`` is never a registered tag, so the renderer leaves it as escaped
text and this pass finds it in the text nodes of the rendered fragment.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, NavigableString
from bs4 import Tag as HtmlElement

from bbhtml.constants import TEXT_PASS_SKIP_ELEMENTS
from bbhtml.options import BBCodeRenderOptions
from bbhtml.utils.html_utils import Piece, map_text_nodes, replace_matches

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"\[@([a-z0-9_\- ]+)\]", re.IGNORECASE)


def slugify_uname(uname: str) -> str:
    """Return the profile slug of a user name.

    Examples
    --------
        >>> slugify_uname(" Some User ")
        'some-user'

    """
    return uname.strip().lower().replace(" ", "-")


def replace_mentions(html: str, options: BBCodeRenderOptions) -> str:
    """Replace mentions with links to the mentioned user's profile.

    When ``options.mention_exists`` is set, only names for which it returns
    True are linked; the others are left as literal text.
    """
    if not options.mentions:
        return html

    exists = options.mention_exists
    template = options.mention_url_template

    def _mention_pieces(soup: BeautifulSoup, node: NavigableString) -> Optional[list[Piece]]:
        def _link(match: re.Match) -> Optional[HtmlElement]:
            uname = match.group(1).strip()
            if not uname:
                return None
            if exists is not None and not exists(uname.lower()):
                logger.debug(f"Mention of unknown user {uname!r} left as text")
                return None
            link = soup.new_tag("a", attrs={"class": "bb-mention", "href": template.format(slug=slugify_uname(uname))})
            link.string = f"@{uname}"
            return link

        return replace_matches(str(node), MENTION_PATTERN, _link)

    return map_text_nodes(html, _mention_pieces, TEXT_PASS_SKIP_ELEMENTS)
