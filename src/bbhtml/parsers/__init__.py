#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/parsers/__init__.py
"""Parsing stages: escaping, list-item expansion and tree building."""

from bbhtml.parsers.bbcode import BBCodeParser, ParseResult
from bbhtml.parsers.star_list import expand_star_tags
from bbhtml.parsers.tokenizer import BBCodeToken, escape_brackets, escape_markup, escape_text, iter_tokens

__all__ = [
    "BBCodeParser",
    "ParseResult",
    "BBCodeToken",
    "escape_markup",
    "escape_text",
    "escape_brackets",
    "iter_tokens",
    "expand_star_tags",
]
