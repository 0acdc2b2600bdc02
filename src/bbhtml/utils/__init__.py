#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/utils/__init__.py
"""Utility helpers for bbhtml."""

from bbhtml.utils.html_utils import escape_text, map_text_nodes, strip_tags
from bbhtml.utils.quotes import extract_mentions, extract_quote_mentions, extract_top_level_markup
from bbhtml.utils.urls import add_default_scheme, extract_youtube_id, is_internal_url, is_valid_url

__all__ = [
    "add_default_scheme",
    "escape_text",
    "extract_mentions",
    "extract_quote_mentions",
    "extract_top_level_markup",
    "extract_youtube_id",
    "is_internal_url",
    "is_valid_url",
    "map_text_nodes",
    "strip_tags",
]
