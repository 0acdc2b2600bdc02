#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/postprocessors/__init__.py
"""Passes applied to the rendered HTML.

Each pass takes ``(html, options)`` and returns the new HTML; a pass whose
option is off returns its input unchanged. Order matters: green-text must
see line starts before the wrapper is added, and newlines are converted
last so the line-based passes still see them.
"""

from bbhtml.options import BBCodeRenderOptions
from bbhtml.postprocessors.autolink import autolink_urls
from bbhtml.postprocessors.greentext import replace_greentext
from bbhtml.postprocessors.mentions import replace_mentions
from bbhtml.postprocessors.smilies import replace_smilies
from bbhtml.postprocessors.whitespace import convert_newlines, wrap_line_breaks

POSTPROCESSORS = [
    replace_greentext,  # Wrap >lines in a green-text span
    wrap_line_breaks,  # Whitespace-preserving wrapper
    replace_smilies,  # :name codes to <img>
    replace_mentions,  # [@user] to profile links
    autolink_urls,  # Bare URLs to links
    convert_newlines,  # Tabs, CR and newlines to HTML
]


def apply_postprocessors(html: str, options: BBCodeRenderOptions) -> str:
    """Apply all postprocessors in order."""
    for processor in POSTPROCESSORS:
        html = processor(html, options)
    return html


__all__ = [
    "POSTPROCESSORS",
    "apply_postprocessors",
    "autolink_urls",
    "convert_newlines",
    "replace_greentext",
    "replace_mentions",
    "replace_smilies",
    "wrap_line_breaks",
]
