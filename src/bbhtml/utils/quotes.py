#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/utils/quotes.py
"""Helpers for replying to posts: quote snipping and mention extraction.

These work on raw markup, before any rendering.
"""

from __future__ import annotations

import re
from typing import Optional

QUOTE_TOKEN_PATTERN = re.compile(r"\[(quote)=?@?([a-z0-9_\- ]+)?\]|\[(/quote)\]", re.IGNORECASE)
MENTION_TOKEN_PATTERN = re.compile(r"\[(quote)[^\]]*\]|\[(/quote)\]|\[@([a-z0-9_\- ]+)\]", re.IGNORECASE)
QUOTE_MENTION_TOKEN_PATTERN = re.compile(r"\[(quote)=?(@)?([a-z0-9_\- ]+)?\]|\[(/quote)\]", re.IGNORECASE)


def extract_top_level_markup(markup: str) -> str:
    """Replace every top-level quote of a post with a snip marker.

    The result is what goes inside ``[quote=@author]...[/quote]`` when
    replying, so quotes of quotes do not pile up. Nested quotes disappear
    together with the quote containing them. Close tokens with no open
    quote are left alone, and so is a quote that is never closed.

    Parameters
    ----------
    markup : str
        Raw markup of the post being quoted

    Returns
    -------
    str
        The markup with each top-level quote replaced by ``<Snipped quote>``
        or ``<Snipped quote by NAME>``

    Examples
    --------
        >>> extract_top_level_markup("[quote=outer][quote=inner]x[/quote]y[/quote]zzz")
        '<Snipped quote by outer>zzz'

    """
    parts: list[str] = []
    # (start, uname) of each open quote
    stack: list[tuple[int, Optional[str]]] = []
    position = 0

    for match in QUOTE_TOKEN_PATTERN.finditer(markup):
        if match.group(1):
            stack.append((match.start(), match.group(2)))
        elif len(stack) > 1:
            stack.pop()
        elif stack:
            start, uname = stack.pop()
            parts.append(markup[position:start])
            parts.append(f"<Snipped quote by {uname}>" if uname else "<Snipped quote>")
            position = match.end()

    parts.append(markup[position:])
    return "".join(parts)


def extract_mentions(markup: str, exclude: Optional[str] = None, limit: Optional[int] = None) -> list[str]:
    """Return the unique lower-cased names mentioned with ``[@name]`` outside quotes.

    Parameters
    ----------
    markup : str
        Raw post markup
    exclude : str, optional
        Name to ignore, usually the post's author
    limit : int, optional
        Stop after this many distinct names

    Returns
    -------
    list of str
        Names in order of first mention

    Examples
    --------
        >>> extract_mentions("[@Alice] [quote][@bob][/quote] [@alice]")
        ['alice']

    """
    excluded = exclude.strip().lower() if exclude else None
    names: dict[str, None] = {}
    depth = 0

    for match in MENTION_TOKEN_PATTERN.finditer(markup):
        if limit is not None and len(names) >= limit:
            break
        if match.group(1):
            depth += 1
        elif match.group(2):
            depth = max(depth - 1, 0)
        elif depth == 0:
            uname = match.group(3).strip().lower()
            if uname and uname != excluded:
                names.setdefault(uname, None)

    return list(names)


def extract_quote_mentions(markup: str, exclude: Optional[str] = None, limit: Optional[int] = None) -> list[str]:
    """Return the unique lower-cased names quoted with top-level ``[quote=@name]``.

    Examples
    --------
        >>> extract_quote_mentions("[quote=@Bob][quote=@carol]x[/quote][/quote][quote=dave]y[/quote]")
        ['bob']

    """
    excluded = exclude.strip().lower() if exclude else None
    names: dict[str, None] = {}
    depth = 0

    for match in QUOTE_MENTION_TOKEN_PATTERN.finditer(markup):
        if limit is not None and len(names) >= limit:
            break
        if match.group(4):
            depth = max(depth - 1, 0)
            continue
        depth += 1
        if depth == 1 and match.group(2) and match.group(3):
            uname = match.group(3).strip().lower()
            if uname and uname != excluded:
                names.setdefault(uname, None)

    return list(names)
