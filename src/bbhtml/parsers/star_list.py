#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/parsers/star_list.py
"""Expansion of ``[*]`` list items into explicit open/close pairs.

Authors write list items without closing them::

    [list][*]first[*]second[/list]

The tree builder needs every tag balanced, so this stage inserts the missing
``[/*]`` before the next ``[*]`` of the same list or before the list's
``[/list]``, whichever comes first. It works on the delimited text produced
by ``escape_markup`` and runs in a single pass over the tokens.
"""

from __future__ import annotations

from bbhtml.constants import LIST_TAG_NAME, STAR_TAG_NAME, TAG_END, TAG_START
from bbhtml.parsers.tokenizer import BBCodeToken, iter_tokens

STAR_CLOSE_TOKEN = TAG_START + "/" + STAR_TAG_NAME + TAG_END


def _matched_list_tokens(tokens: list[BBCodeToken]) -> set[int]:
    """Return the indexes of list open/close tokens that pair up."""
    matched: set[int] = set()
    open_stack: list[int] = []
    for index, token in enumerate(tokens):
        if token.name != LIST_TAG_NAME:
            continue
        if not token.is_closing:
            open_stack.append(index)
        elif open_stack:
            matched.add(open_stack.pop())
            matched.add(index)
    return matched


def expand_star_tags(delimited: str) -> str:
    """Close every ``[*]`` item inside matched ``[list]`` pairs.

    Parameters
    ----------
    delimited : str
        Text from ``escape_markup``

    Returns
    -------
    str
        The same text with ``</*>`` tokens inserted

    Notes
    -----
    - Lists nest arbitrarily; an item of an outer list stays open while an
      inner list is processed and is closed at the outer list's next item or
      end.
    - An explicit ``[/*]`` closes the open item of the innermost list.
    - ``[*]`` tokens outside any matched list, and unmatched list tokens, are
      left untouched for the tree builder to report.

    Examples
    --------
        >>> expand_star_tags("<list><*>a<*>b</list>")
        '<list><*>a</*><*>b</*></list>'

    """
    tokens = list(iter_tokens(delimited))
    if not any(token.name == STAR_TAG_NAME for token in tokens):
        return delimited

    matched = _matched_list_tokens(tokens)
    # One entry per open matched list: whether it has an item awaiting its close
    item_open: list[bool] = []
    parts: list[str] = []
    pos = 0

    for index, token in enumerate(tokens):
        parts.append(delimited[pos : token.start])
        pos = token.end

        if token.name == LIST_TAG_NAME and index in matched:
            if not token.is_closing:
                item_open.append(False)
            else:
                if item_open.pop():
                    parts.append(STAR_CLOSE_TOKEN)
        elif token.name == STAR_TAG_NAME and item_open:
            if not token.is_closing:
                if item_open[-1]:
                    parts.append(STAR_CLOSE_TOKEN)
                item_open[-1] = True
            elif item_open[-1]:
                item_open[-1] = False

        parts.append(token.raw)

    parts.append(delimited[pos:])
    return "".join(parts)
