#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/parsers/tokenizer.py
"""Escaping and tokenization of BBCode markup.

``escape_markup`` is the first stage of the pipeline. It HTML-escapes the raw
post, which leaves the text without a single literal ``<`` or ``>``, and then
rewrites every recognized tag token from ``[...]`` to ``<...>``. Those angle
brackets serve as internal delimiters for the later stages. Every other
square bracket is entity-escaped, so unknown or misspelled tags stay visible
as plain text.

``iter_tokens`` reads the delimited text back as a stream of tokens.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

from bbhtml.constants import CLOSE_BRACKET_ENTITY, OPEN_BRACKET_ENTITY, TAG_END, TAG_START

if TYPE_CHECKING:
    from bbhtml.registry import RegistrySnapshot

DELIMITED_TOKEN_PATTERN = re.compile(re.escape(TAG_START) + r"(/?)([^<>]*)" + re.escape(TAG_END))
TOKEN_SEPARATOR_PATTERN = re.compile(r"[= ]")


@dataclass(frozen=True)
class BBCodeToken:
    """A recognized tag token in delimited text.

    Parameters
    ----------
    name : str
        Lower-cased tag name
    is_closing : bool
        Whether this is a closing token
    params : str or None
        Text after the first ``=`` or space of an opening token, verbatim
    raw : str
        The token exactly as it appears in the delimited text (``<B=x>``)
    start : int
        Offset of the token in the delimited text
    end : int
        Offset just past the token

    """

    name: str
    is_closing: bool
    params: Optional[str]
    raw: str
    start: int
    end: int

    @property
    def literal(self) -> str:
        """The token as visible, bracket-escaped text."""
        return to_literal(self.raw)


def escape_text(text: str) -> str:
    """HTML-escape text, including quotes."""
    return html.escape(text, quote=True)


def escape_brackets(text: str) -> str:
    """Replace square brackets with their numeric entities."""
    return text.replace("[", OPEN_BRACKET_ENTITY).replace("]", CLOSE_BRACKET_ENTITY)


def to_literal(delimited: str) -> str:
    """Turn delimited text back into visible text with escaped brackets."""
    return delimited.replace(TAG_START, OPEN_BRACKET_ENTITY).replace(TAG_END, CLOSE_BRACKET_ENTITY)


def _delimit(token: str) -> str:
    return TAG_START + token[1:-1] + TAG_END


def escape_markup(text: str, snapshot: RegistrySnapshot) -> str:
    """Escape raw markup and delimit the recognized tag tokens.

    Parameters
    ----------
    text : str
        Raw user markup
    snapshot : RegistrySnapshot
        Registered tags; only their tokens are recognized

    Returns
    -------
    str
        HTML-escaped text in which recognized tokens are written ``<...>``
        and all other square brackets are ``&#91;`` / ``&#93;``

    Notes
    -----
    The body of a no-parse tag is not tokenized: everything up to the first
    matching close token is bracket-escaped as a whole. An open no-parse
    token without a close token is delimited like any other tag and left
    for the tree builder to report.

    Examples
    --------
        >>> escape_markup("[b]<hi>[/b] [nope]", tag_registry.snapshot())
        '<b>&lt;hi&gt;</b> &#91;nope&#93;'

    """
    escaped = escape_text(text)
    pattern = snapshot.token_pattern
    if pattern is None:
        return escape_brackets(escaped)

    parts: list[str] = []
    unclosed: set[str] = set()
    pos = 0

    while True:
        match = pattern.search(escaped, pos)
        if match is None:
            break

        parts.append(escape_brackets(escaped[pos : match.start()]))
        parts.append(_delimit(match.group(0)))
        pos = match.end()

        open_name = match.group("open")
        if open_name is None:
            continue
        name = open_name.lower()
        if name not in snapshot.no_parse or name in unclosed:
            continue

        close = snapshot.no_parse_close_patterns[name].search(escaped, pos)
        if close is None:
            # No close token anywhere after this one, so none after any later one either
            unclosed.add(name)
            continue
        parts.append(escape_brackets(escaped[pos : close.start()]))
        parts.append(_delimit(close.group(0)))
        pos = close.end()

    parts.append(escape_brackets(escaped[pos:]))
    return "".join(parts)


def iter_tokens(delimited: str) -> Iterator[BBCodeToken]:
    """Yield the delimited tokens of ``delimited`` in order.

    Parameters
    ----------
    delimited : str
        Output of ``escape_markup`` (optionally star-expanded)

    Yields
    ------
    BBCodeToken
        One token per ``<...>`` run

    """
    for match in DELIMITED_TOKEN_PATTERN.finditer(delimited):
        is_closing = match.group(1) == "/"
        name, *params = TOKEN_SEPARATOR_PATTERN.split(match.group(2), maxsplit=1)
        yield BBCodeToken(
            name=name.lower(),
            is_closing=is_closing,
            params=params[0] if params and not is_closing else None,
            raw=match.group(0),
            start=match.start(),
            end=match.end(),
        )
