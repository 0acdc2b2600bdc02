#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/postprocessors/whitespace.py
"""Line-break preservation and newline/tab normalization."""

from __future__ import annotations

import re

from bbhtml.constants import LINE_BREAK_WRAPPER_CLOSE, LINE_BREAK_WRAPPER_OPEN
from bbhtml.options import BBCodeRenderOptions

BLANK_LINES_PATTERN = re.compile(r"\n{2,}")


def wrap_line_breaks(html: str, options: BBCodeRenderOptions) -> str:
    """Wrap the fragment in a ``white-space:pre-line`` block."""
    if not options.add_line_breaks:
        return html
    return LINE_BREAK_WRAPPER_OPEN + html + LINE_BREAK_WRAPPER_CLOSE


def convert_newlines(html: str, options: BBCodeRenderOptions) -> str:
    """Encode tabs, drop carriage returns and turn newlines into ``<br>``.

    Runs of three or more newlines collapse to a single blank line.

    Examples
    --------
        >>> convert_newlines("a\\r\\n\\n\\n\\tb", BBCodeRenderOptions(convert_newlines=True))
        'a<br><br>&#9;b'

    """
    if not options.convert_newlines:
        return html
    html = html.replace("\t", "&#9;").replace("\r", "")
    html = BLANK_LINES_PATTERN.sub("\n\n", html)
    return html.replace("\n", "<br>")
